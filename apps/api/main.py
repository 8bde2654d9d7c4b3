from __future__ import annotations

from datetime import date
import structlog
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from pnltracker.core.config import settings
from pnltracker.core.logging import configure_logging
from pnltracker.db.session import get_session
from pnltracker.models.enums import PeriodKind
from pnltracker.reports.bonuses import department_bonus_summary, total_paid
from pnltracker.reports.breakdown import breakdown
from pnltracker.reports.clients import client_balances, portfolio_totals
from pnltracker.reports.delta import compare
from pnltracker.reports.export_xlsx import monthly_to_xlsx
from pnltracker.reports.forecast import forecast as forecast_calc
from pnltracker.reports.kpi import KPIResult, aggregate, aggregate_by_company, filter_records
from pnltracker.reports.leads import LeadTotals, lead_funnel_by_month, lead_totals
from pnltracker.reports.monthly import bucket_by_month
from pnltracker.reports.windows import AggregationWindow, window_for
from pnltracker.schemas.common import Ok
from pnltracker.schemas.finance import (
    BonusesResponse,
    BreakdownResponse,
    ClientsResponse,
    CompaniesResponse,
    ForecastResponse,
    KpiOut,
    KpiResponse,
    LeadMonthOut,
    LeadsResponse,
    LeadTotalsOut,
    MonthlyResponse,
    PayrollResponse,
)
from pnltracker.services.records import fetch_lead_stats, fetch_records
from pnltracker.services.staff import fetch_bonus_points, fetch_payroll_payments

configure_logging(settings.log_level)
log = structlog.get_logger(__name__)

app = FastAPI(title=settings.app_name)
log.info("api_init", env=settings.env, withdrawals_in_expenses=settings.withdrawals_in_expenses)

def selected_window(
    period: PeriodKind = Query(PeriodKind.month),
    year: int | None = Query(None, ge=1900, le=9999),
    month: int | None = Query(None),
    quarter: int | None = Query(None),
    start: date | None = Query(None),
    end: date | None = Query(None),
) -> AggregationWindow:
    try:
        return window_for(period, year=year, month=month, quarter=quarter, start=start, end=end)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

def _kpi_out(k: KPIResult) -> KpiOut:
    return KpiOut(
        income=float(k.income),
        expenses=float(k.expenses),
        profit=float(k.profit),
        margin=float(k.margin),
        withdrawals=float(k.withdrawals),
        money_in_project=float(k.money_in_project),
    )

def _leads_out(t: LeadTotals) -> dict:
    return {
        "total_leads": t.total_leads,
        "qualified_leads": t.qualified_leads,
        "debt_above_300k": t.debt_above_300k,
        "contracts": t.contracts,
        "payments": t.payments,
        "total_cost": float(t.total_cost),
        "qualified_conversion": float(t.qualified_conversion),
        "debt_conversion": float(t.debt_conversion),
        "contract_conversion": float(t.contract_conversion),
        "payment_conversion": float(t.payment_conversion),
        "cost_per_lead": float(t.cost_per_lead),
    }

@app.get("/health", response_model=Ok)
def health() -> Ok:
    return Ok(ok=True)

@app.get("/kpi", response_model=KpiResponse)
def kpi(
    owner_id: str = Query(...),
    company: str | None = Query(None),
    window: AggregationWindow = Depends(selected_window),
    session: Session = Depends(get_session),
):
    records = fetch_records(session, owner_id=owner_id, company=company)
    current = aggregate(records, window)
    previous = aggregate(records, window.previous())
    return KpiResponse(
        period=window.kind,
        start=window.start,
        end=window.end,
        company=company,
        current=_kpi_out(current),
        previous=_kpi_out(previous),
        deltas=[
            {
                "metric": d.metric,
                "current": float(d.current),
                "reference": float(d.reference),
                "change": None if d.change is None else float(d.change),
                "label": d.label,
                "direction": d.direction,
            }
            for d in compare(current, previous)
        ],
    )

@app.get("/breakdown", response_model=BreakdownResponse)
def category_breakdown(
    owner_id: str = Query(...),
    company: str | None = Query(None),
    limit: int | None = Query(None, ge=1),
    window: AggregationWindow = Depends(selected_window),
    session: Session = Depends(get_session),
):
    records = filter_records(fetch_records(session, owner_id=owner_id, company=company), window)
    result = breakdown(records)
    if limit:
        result = result.top(limit)
    return BreakdownResponse(
        start=window.start,
        end=window.end,
        income=[{"label": r.label, "amount": float(r.amount)} for r in result.income],
        expense=[{"label": r.label, "amount": float(r.amount)} for r in result.expense],
    )

@app.get("/monthly", response_model=MonthlyResponse)
def monthly(
    owner_id: str = Query(...),
    company: str | None = Query(None),
    session: Session = Depends(get_session),
):
    buckets = bucket_by_month(fetch_records(session, owner_id=owner_id, company=company))
    return MonthlyResponse(
        company=company,
        months=[
            {
                "month_key": b.month_key,
                "income": float(b.income),
                "expenses": float(b.expenses),
                "profit": float(b.profit),
                "margin": float(b.margin),
                "income_change": None if b.income_change is None else float(b.income_change),
                "expense_change": None if b.expense_change is None else float(b.expense_change),
                "profit_change": None if b.profit_change is None else float(b.profit_change),
            }
            for b in buckets
        ],
    )

@app.get("/monthly.xlsx")
def monthly_xlsx(
    owner_id: str = Query(...),
    company: str | None = Query(None),
    session: Session = Depends(get_session),
):
    records = fetch_records(session, owner_id=owner_id, company=company)
    data = monthly_to_xlsx(bucket_by_month(records), kpis=aggregate(records), categories=breakdown(records))
    filename = f"pnl_monthly_{company or 'all'}.xlsx"
    return Response(
        content=data,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@app.get("/companies", response_model=CompaniesResponse)
def companies(
    owner_id: str = Query(...),
    company: list[str] | None = Query(None),
    window: AggregationWindow = Depends(selected_window),
    session: Session = Depends(get_session),
):
    records = fetch_records(session, owner_id=owner_id)
    if company:
        records = [r for r in records if r.company in company]
    per_company = aggregate_by_company(records, window, companies=company or None)
    return CompaniesResponse(
        start=window.start,
        end=window.end,
        total=_kpi_out(aggregate(records, window)),
        companies=[
            {"company": c.company, "kpis": _kpi_out(c.kpis), "transactions_count": c.transactions_count}
            for c in per_company
        ],
    )

@app.get("/forecast", response_model=ForecastResponse)
def forecast(
    owner_id: str = Query(...),
    target_profit: float = Query(..., ge=0),
    months: int = Query(1, ge=1, le=120),
    company: str | None = Query(None),
    session: Session = Depends(get_session),
):
    result = forecast_calc(fetch_records(session, owner_id=owner_id, company=company), str(target_profit), months)

    def changes(items):
        return [
            {
                "category": c.category,
                "average_amount": float(c.average_amount),
                "change": float(c.change),
                "new_amount": float(c.new_amount),
                "change_percent": float(c.change_percent),
            }
            for c in items
        ]

    return ForecastResponse(
        target_profit=target_profit,
        months=months,
        target_profit_per_month=float(result.target_profit_per_month),
        total_income=float(result.total_income),
        total_expenses=float(result.total_expenses),
        current_profit=float(result.current_profit),
        required_income=float(result.required_income),
        income_increase=float(result.income_increase),
        income_increase_percent=float(result.income_increase_percent),
        required_expenses=float(result.required_expenses),
        expense_reduction=float(result.expense_reduction),
        expense_reduction_percent=float(result.expense_reduction_percent),
        income_scenario=changes(result.income_scenario),
        expense_scenario=changes(result.expense_scenario),
        combined_income_scenario=changes(result.combined_income_scenario),
        combined_expense_scenario=changes(result.combined_expense_scenario),
    )

@app.get("/leads", response_model=LeadsResponse)
def leads(
    owner_id: str = Query(...),
    company: str | None = Query(None),
    session: Session = Depends(get_session),
):
    stats = fetch_lead_stats(session, owner_id=owner_id, company=company)
    return LeadsResponse(
        company=company,
        months=[LeadMonthOut(month_key=m.month_key, **_leads_out(m.totals)) for m in lead_funnel_by_month(stats)],
        totals=LeadTotalsOut(**_leads_out(lead_totals(stats))),
    )

@app.get("/clients", response_model=ClientsResponse)
def clients(
    owner_id: str = Query(...),
    company: str | None = Query(None),
    session: Session = Depends(get_session),
):
    balances = client_balances(fetch_records(session, owner_id=owner_id, company=company))
    totals = portfolio_totals(balances)
    return ClientsResponse(
        company=company,
        clients=[
            {
                "client_name": c.client_name,
                "company": c.company,
                "contract_amount": float(c.contract_amount),
                "first_payment": float(c.terms.first_payment),
                "installment_period": c.terms.installment_period,
                "monthly_payment": float(c.terms.monthly_payment),
                "total_paid": float(c.total_paid),
                "remaining_amount": float(c.remaining_amount),
                "months_remaining": c.months_remaining,
                "last_payment_date": c.last_payment_date,
                "payments_count": c.payments_count,
                "status": c.status,
            }
            for c in balances
        ],
        totals={
            "contracts": totals.contracts,
            "contract_amount": float(totals.contract_amount),
            "total_paid": float(totals.total_paid),
            "remaining_amount": float(totals.remaining_amount),
        },
    )

@app.get("/bonuses", response_model=BonusesResponse)
def bonuses(
    owner_id: str = Query(...),
    month: str | None = Query(None, pattern=r"^\d{4}-\d{2}$"),
    session: Session = Depends(get_session),
):
    summary = department_bonus_summary(fetch_bonus_points(session, owner_id=owner_id, month=month))
    return BonusesResponse(
        month=month,
        employees=[{"employee_id": e, "total_points": t} for e, t in summary.per_employee],
        department_total=summary.department_total,
    )

@app.get("/payroll", response_model=PayrollResponse)
def payroll(
    owner_id: str = Query(...),
    employee: str | None = Query(None),
    start: date | None = Query(None),
    end: date | None = Query(None),
    session: Session = Depends(get_session),
):
    payments = fetch_payroll_payments(session, owner_id=owner_id, start=start, end=end)
    if employee is not None:
        payments = [p for p in payments if p.employee_name == employee]
    return PayrollResponse(
        employee=employee,
        start=start,
        end=end,
        payments_count=len(payments),
        total_paid=float(total_paid(payments)),
    )
