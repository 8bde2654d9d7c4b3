from __future__ import annotations

from datetime import date
from decimal import Decimal

from pnltracker.models.enums import ClientStatus, TxType
from pnltracker.reports.clients import client_balances, portfolio_totals
from pnltracker.reports.records import FinancialRecord, SaleTerms

TODAY = date(2024, 3, 1)

def sale(client, d, amount, contract="0", period=0, first="0", status="active", company="A"):
    terms = SaleTerms(
        client_name=client, contract_amount=Decimal(contract), first_payment=Decimal(first),
        installment_period=period, contract_status=status,
    )
    return FinancialRecord(
        id=f"{client}-{d}", date=d, kind=TxType.income, category="Продажа",
        amount=Decimal(amount), company=company, sale=terms,
    )

RECORDS = [
    sale("Орлов", date(2024, 1, 10), "24000", contract="120000", period=12, first="24000"),
    sale("Орлов", date(2024, 2, 10), "8000"),
    sale("Белов", date(2024, 1, 20), "50000", contract="50000", period=5, company="B"),
    sale("Котов", date(2023, 1, 1), "10000", contract="100000", period=2),
    sale("Лисин", date(2023, 12, 1), "20000", contract="60000", period=6, status="terminated"),
    sale("Без договора", date(2024, 2, 1), "5000"),
    FinancialRecord(id="x", date=date(2024, 2, 2), kind=TxType.income, category="Продажа", amount=Decimal("700")),
]

def test_balances_group_payments_by_client():
    balances = client_balances(RECORDS, today=TODAY)
    assert [c.client_name for c in balances] == ["Орлов", "Белов", "Лисин", "Котов"]

    orlov = balances[0]
    assert orlov.total_paid == Decimal("32000")
    assert orlov.payments_count == 2
    assert orlov.last_payment_date == date(2024, 2, 10)
    assert orlov.remaining_amount == Decimal("88000")
    assert orlov.terms.monthly_payment == Decimal("8000")
    assert orlov.months_remaining == 11
    assert orlov.status == ClientStatus.active

def test_statuses():
    by_name = {c.client_name: c for c in client_balances(RECORDS, today=TODAY)}
    assert by_name["Белов"].status == ClientStatus.completed
    assert by_name["Белов"].months_remaining == 0
    assert by_name["Белов"].company == "B"
    # 425 days without a payment on a two-month plan
    assert by_name["Котов"].status == ClientStatus.overdue
    assert by_name["Лисин"].status == ClientStatus.terminated

def test_portfolio_totals():
    totals = portfolio_totals(client_balances(RECORDS, today=TODAY))
    assert totals.contracts == 4
    assert totals.contract_amount == Decimal("330000")
    assert totals.total_paid == Decimal("112000")
    assert totals.remaining_amount == Decimal("218000")

def test_no_sales():
    assert client_balances([], today=TODAY) == []
    assert portfolio_totals([]).contracts == 0
