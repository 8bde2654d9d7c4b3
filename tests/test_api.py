from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from apps.api.main import app
from pnltracker.db.session import get_session
from pnltracker.models.enums import TxType
from pnltracker.models.finance import FinanceTransaction, LeadGeneration
from pnltracker.models.staff import DepartmentBonusPoints, PayrollRecord

@pytest.fixture()
def client(sqlite_session):
    s = sqlite_session
    s.add_all([
        FinanceTransaction(user_id="u1", company="A", date=date(2024, 1, 15), tx_type=TxType.income, category="Продажа", amount=Decimal("100000")),
        FinanceTransaction(user_id="u1", company="A", date=date(2024, 1, 20), tx_type=TxType.expense, category="Реклама", subcategory="Авито", amount=Decimal("40000")),
        FinanceTransaction(user_id="u1", company="B", date=date(2024, 2, 1), tx_type=TxType.income, category="Продажа", amount=Decimal("50000")),
        FinanceTransaction(user_id="u1", company="B", date=date(2023, 12, 5), tx_type=TxType.income, category="Продажа", amount=Decimal("80000")),
        LeadGeneration(user_id="u1", company="A", date=date(2024, 1, 3), total_leads=50, qualified_leads=10, contracts=5, total_cost=Decimal("10000")),
    ])
    s.flush()
    app.dependency_overrides[get_session] = lambda: s
    yield TestClient(app)
    app.dependency_overrides.clear()

def test_health(client):
    assert client.get("/health").json() == {"ok": True}

def test_kpi_month_with_previous_period(client):
    r = client.get("/kpi", params={"owner_id": "u1", "period": "month", "year": 2024, "month": 1})
    assert r.status_code == 200
    body = r.json()
    assert (body["start"], body["end"]) == ("2024-01-01", "2024-01-31")
    assert body["current"]["income"] == 100000
    assert body["current"]["profit"] == 60000
    assert body["current"]["margin"] == 60
    assert body["previous"]["income"] == 80000
    deltas = {d["metric"]: d for d in body["deltas"]}
    assert deltas["income"]["label"] == "▲ 25.0%"
    assert deltas["expenses"]["direction"] == "negative"

def test_kpi_rejects_bad_month(client):
    r = client.get("/kpi", params={"owner_id": "u1", "period": "month", "year": 2024, "month": 13})
    assert r.status_code == 422
    r = client.get("/kpi", params={"owner_id": "u1", "period": "month", "year": 2024, "month": 0})
    assert r.status_code == 422
    r = client.get("/kpi", params={"owner_id": "u1", "period": "quarter", "year": 2024, "quarter": 0})
    assert r.status_code == 422
    r = client.get("/kpi", params={"owner_id": "u1", "period": "range", "start": "2024-01-01"})
    assert r.status_code == 422

def test_breakdown_and_monthly(client):
    r = client.get("/breakdown", params={"owner_id": "u1", "period": "year", "year": 2024})
    assert r.json()["expense"] == [{"label": "Реклама / Авито", "amount": 40000}]
    assert [c["amount"] for c in r.json()["income"]] == [150000]

    months = client.get("/monthly", params={"owner_id": "u1"}).json()["months"]
    assert [m["month_key"] for m in months] == ["2023-12", "2024-01", "2024-02"]
    assert months[0]["income_change"] is None
    assert months[1]["expense_change"] is None
    assert months[2]["income_change"] == -50

def test_companies(client):
    r = client.get("/companies", params={"owner_id": "u1", "period": "range", "start": "2024-01-01", "end": "2024-12-31"})
    body = r.json()
    assert body["total"]["income"] == 150000
    assert [(c["company"], c["transactions_count"]) for c in body["companies"]] == [("A", 2), ("B", 1)]

def test_forecast_and_leads(client):
    body = client.get("/forecast", params={"owner_id": "u1", "target_profit": 100000, "company": "A"}).json()
    assert body["total_income"] == 100000
    assert body["income_increase"] == 40000

    leads = client.get("/leads", params={"owner_id": "u1"}).json()
    assert leads["totals"]["qualified_conversion"] == 20
    assert leads["months"][0]["cost_per_lead"] == 200

def test_monthly_xlsx(client):
    r = client.get("/monthly.xlsx", params={"owner_id": "u1", "company": "A"})
    assert r.status_code == 200
    assert r.headers["content-disposition"] == 'attachment; filename="pnl_monthly_A.xlsx"'
    assert r.content[:2] == b"PK"

def test_clients(client, sqlite_session):
    sqlite_session.add_all([
        FinanceTransaction(user_id="u1", company="A", date=date(2024, 1, 10), tx_type=TxType.income, category="Продажа",
                           amount=Decimal("10000"), client_name="Орлов", contract_amount=Decimal("30000"),
                           first_payment=Decimal("10000"), installment_period=2),
        FinanceTransaction(user_id="u1", company="A", date=date(2024, 2, 10), tx_type=TxType.income, category="Продажа",
                           amount=Decimal("20000"), client_name="Орлов"),
    ])
    sqlite_session.flush()

    body = client.get("/clients", params={"owner_id": "u1"}).json()
    (orlov,) = body["clients"]
    assert orlov["total_paid"] == 30000
    assert orlov["remaining_amount"] == 0
    assert orlov["monthly_payment"] == 10000
    assert orlov["last_payment_date"] == "2024-02-10"
    assert orlov["status"] == "completed"
    assert body["totals"] == {"contracts": 1, "contract_amount": 30000, "total_paid": 30000, "remaining_amount": 0}

def test_bonuses_and_payroll(client, sqlite_session):
    sqlite_session.add_all([
        DepartmentBonusPoints(user_id="u1", employee_id="e1", month="2024-01", crm=3),
        DepartmentBonusPoints(user_id="u1", employee_id="e2", month="2024-01", marketing=5, minus_points=1),
        DepartmentBonusPoints(user_id="u1", employee_id="e1", month="2024-02", crm=9),
        PayrollRecord(user_id="u1", employee_name="Иванов", payment_date=date(2024, 1, 10), amount=Decimal("50000")),
        PayrollRecord(user_id="u1", employee_name="Петров", payment_date=date(2024, 1, 25), amount=Decimal("40000")),
        PayrollRecord(user_id="u1", employee_name="Иванов", payment_date=date(2024, 2, 10), amount=Decimal("55000")),
    ])
    sqlite_session.flush()

    body = client.get("/bonuses", params={"owner_id": "u1", "month": "2024-01"}).json()
    assert body["employees"] == [{"employee_id": "e2", "total_points": 4}, {"employee_id": "e1", "total_points": 3}]
    assert body["department_total"] == 7
    assert client.get("/bonuses", params={"owner_id": "u1", "month": "январь"}).status_code == 422

    body = client.get("/payroll", params={"owner_id": "u1", "employee": "Иванов"}).json()
    assert (body["payments_count"], body["total_paid"]) == (2, 105000)
    body = client.get("/payroll", params={"owner_id": "u1", "start": "2024-01-20", "end": "2024-01-31"}).json()
    assert (body["payments_count"], body["total_paid"]) == (1, 40000)
