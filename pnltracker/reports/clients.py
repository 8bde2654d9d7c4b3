"""Installment balances of sale clients, grouped by client name."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_CEILING, Decimal
from typing import Iterable

from pnltracker.models.enums import ClientStatus
from pnltracker.reports.money import ZERO, to_decimal
from pnltracker.reports.records import FinancialRecord, SaleTerms, as_date

OVERDUE_MONTH_DAYS = 30

@dataclass(frozen=True)
class ClientBalance:
    client_name: str
    company: str
    terms: SaleTerms
    total_paid: Decimal
    last_payment_date: date
    payments_count: int
    status: ClientStatus

    @property
    def contract_amount(self) -> Decimal:
        return self.terms.contract_amount

    @property
    def remaining_amount(self) -> Decimal:
        return self.terms.contract_amount - self.total_paid

    @property
    def months_remaining(self) -> int:
        monthly = self.terms.monthly_payment
        if monthly <= 0 or self.remaining_amount <= 0:
            return 0
        return int((self.remaining_amount / monthly).to_integral_value(rounding=ROUND_CEILING))

@dataclass(frozen=True)
class ClientPortfolio:
    contracts: int = 0
    contract_amount: Decimal = ZERO
    total_paid: Decimal = ZERO
    remaining_amount: Decimal = ZERO

def _status(terms: SaleTerms, remaining: Decimal, last_payment: date, today: date) -> ClientStatus:
    if terms.contract_status == ClientStatus.terminated.value:
        return ClientStatus.terminated
    if remaining <= 0:
        return ClientStatus.completed
    if (today - last_payment).days // OVERDUE_MONTH_DAYS > terms.installment_period:
        return ClientStatus.overdue
    return ClientStatus.active

def client_balances(records: Iterable[FinancialRecord], today: date | None = None) -> list[ClientBalance]:
    """Sum sale payments per client against the contract terms.

    Terms come from the latest payment of the client that carries a contract
    amount and an installment period; clients without such a payment are
    skipped. Result is ordered by last payment, newest first.
    """
    today = as_date(today or date.today())
    payments: dict[str, list[FinancialRecord]] = {}
    for r in records:
        if r.sale is None or not r.sale.client_name:
            continue
        payments.setdefault(r.sale.client_name, []).append(r)

    out: list[ClientBalance] = []
    for name, rows in payments.items():
        rows.sort(key=lambda r: as_date(r.date), reverse=True)
        contract = next(
            (r for r in rows if r.sale.contract_amount > 0 and r.sale.installment_period > 0),
            None,
        )
        if contract is None:
            continue
        paid = sum((to_decimal(r.amount) for r in rows), ZERO)
        last = as_date(rows[0].date)
        out.append(ClientBalance(
            client_name=name,
            company=contract.company,
            terms=contract.sale,
            total_paid=paid,
            last_payment_date=last,
            payments_count=len(rows),
            status=_status(contract.sale, contract.sale.contract_amount - paid, last, today),
        ))
    out.sort(key=lambda c: (-c.last_payment_date.toordinal(), c.client_name))
    return out

def portfolio_totals(balances: Iterable[ClientBalance]) -> ClientPortfolio:
    balances = list(balances)
    return ClientPortfolio(
        contracts=len(balances),
        contract_amount=sum((c.contract_amount for c in balances), ZERO),
        total_paid=sum((c.total_paid for c in balances), ZERO),
        remaining_amount=sum((c.remaining_amount for c in balances), ZERO),
    )
