from __future__ import annotations
from datetime import date
from pydantic import BaseModel, Field

from pnltracker.models.enums import ClientStatus, Delta, PeriodKind

class KpiOut(BaseModel):
    income: float = 0
    expenses: float = 0
    profit: float = 0
    margin: float = 0
    withdrawals: float = 0
    money_in_project: float = 0

class MetricDeltaOut(BaseModel):
    metric: str
    current: float
    reference: float
    change: float | None = None
    label: str
    direction: Delta

class KpiResponse(BaseModel):
    period: PeriodKind
    start: date
    end: date
    company: str | None = None
    current: KpiOut
    previous: KpiOut
    deltas: list[MetricDeltaOut] = Field(default_factory=list)

class CategoryTotalOut(BaseModel):
    label: str
    amount: float = 0

class BreakdownResponse(BaseModel):
    start: date
    end: date
    income: list[CategoryTotalOut] = Field(default_factory=list)
    expense: list[CategoryTotalOut] = Field(default_factory=list)

class MonthlyBucketOut(BaseModel):
    month_key: str
    income: float = 0
    expenses: float = 0
    profit: float = 0
    margin: float = 0
    income_change: float | None = None
    expense_change: float | None = None
    profit_change: float | None = None

class MonthlyResponse(BaseModel):
    company: str | None = None
    months: list[MonthlyBucketOut] = Field(default_factory=list)

class CompanyKpiOut(BaseModel):
    company: str
    kpis: KpiOut
    transactions_count: int = 0

class CompaniesResponse(BaseModel):
    start: date
    end: date
    total: KpiOut
    companies: list[CompanyKpiOut] = Field(default_factory=list)

class CategoryChangeOut(BaseModel):
    category: str
    average_amount: float
    change: float
    new_amount: float
    change_percent: float

class ForecastResponse(BaseModel):
    target_profit: float
    months: int
    target_profit_per_month: float
    total_income: float
    total_expenses: float
    current_profit: float
    required_income: float
    income_increase: float
    income_increase_percent: float
    required_expenses: float
    expense_reduction: float
    expense_reduction_percent: float
    income_scenario: list[CategoryChangeOut] = Field(default_factory=list)
    expense_scenario: list[CategoryChangeOut] = Field(default_factory=list)
    combined_income_scenario: list[CategoryChangeOut] = Field(default_factory=list)
    combined_expense_scenario: list[CategoryChangeOut] = Field(default_factory=list)

class LeadTotalsOut(BaseModel):
    total_leads: int = 0
    qualified_leads: int = 0
    debt_above_300k: int = 0
    contracts: int = 0
    payments: int = 0
    total_cost: float = 0
    qualified_conversion: float = 0
    debt_conversion: float = 0
    contract_conversion: float = 0
    payment_conversion: float = 0
    cost_per_lead: float = 0

class LeadMonthOut(LeadTotalsOut):
    month_key: str

class LeadsResponse(BaseModel):
    company: str | None = None
    months: list[LeadMonthOut] = Field(default_factory=list)
    totals: LeadTotalsOut

class ClientOut(BaseModel):
    client_name: str
    company: str = ""
    contract_amount: float = 0
    first_payment: float = 0
    installment_period: int = 0
    monthly_payment: float = 0
    total_paid: float = 0
    remaining_amount: float = 0
    months_remaining: int = 0
    last_payment_date: date
    payments_count: int = 0
    status: ClientStatus

class ClientPortfolioOut(BaseModel):
    contracts: int = 0
    contract_amount: float = 0
    total_paid: float = 0
    remaining_amount: float = 0

class ClientsResponse(BaseModel):
    company: str | None = None
    clients: list[ClientOut] = Field(default_factory=list)
    totals: ClientPortfolioOut

class EmployeePointsOut(BaseModel):
    employee_id: str
    total_points: int = 0

class BonusesResponse(BaseModel):
    month: str | None = None
    employees: list[EmployeePointsOut] = Field(default_factory=list)
    department_total: int = 0

class PayrollResponse(BaseModel):
    employee: str | None = None
    start: date | None = None
    end: date | None = None
    payments_count: int = 0
    total_paid: float = 0
