"""Period KPIs: income, expenses, profit, margin and the withdrawal bucket."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping

from pnltracker.core.config import settings
from pnltracker.models.enums import Bucket, TxType
from pnltracker.reports.money import ZERO, margin_percent, to_decimal
from pnltracker.reports.records import FinancialRecord
from pnltracker.reports.windows import AggregationWindow

# Category labels matched exactly; everything else only feeds income/expenses
DEFAULT_CATEGORY_BUCKETS: dict[str, Bucket] = {
    "Вывод средств": Bucket.withdrawal,
}

@dataclass(frozen=True)
class KPIResult:
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    withdrawals: Decimal = ZERO
    money_in_project: Decimal = ZERO

    @property
    def profit(self) -> Decimal:
        return self.income - self.expenses

    @property
    def margin(self) -> Decimal:
        return margin_percent(self.profit, self.income)

@dataclass(frozen=True)
class CompanyKPI:
    company: str
    kpis: KPIResult
    transactions_count: int

def filter_records(
    records: Iterable[FinancialRecord],
    window: AggregationWindow | None = None,
    *,
    company: str | None = None,
) -> list[FinancialRecord]:
    if window is not None and window.is_empty:
        return []
    return [
        r for r in records
        if (window is None or window.contains(r.date)) and (company is None or r.company == company)
    ]

def aggregate(
    records: Iterable[FinancialRecord],
    window: AggregationWindow | None = None,
    *,
    company: str | None = None,
    categories: Mapping[str, Bucket] = DEFAULT_CATEGORY_BUCKETS,
    withdrawals_in_expenses: bool | None = None,
) -> KPIResult:
    if withdrawals_in_expenses is None:
        withdrawals_in_expenses = settings.withdrawals_in_expenses

    income = ZERO
    operating = ZERO
    withdrawals = ZERO
    for r in filter_records(records, window, company=company):
        amount = to_decimal(r.amount)
        if r.kind == TxType.income:
            income += amount
        elif categories.get(r.category) == Bucket.withdrawal:
            withdrawals += amount
        else:
            operating += amount

    expenses = operating + withdrawals if withdrawals_in_expenses else operating
    return KPIResult(
        income=income,
        expenses=expenses,
        withdrawals=withdrawals,
        money_in_project=income - operating - withdrawals,
    )

def aggregate_by_company(
    records: Iterable[FinancialRecord],
    window: AggregationWindow | None = None,
    companies: Iterable[str] | None = None,
    **kwargs,
) -> list[CompanyKPI]:
    in_window = filter_records(records, window)
    if companies is None:
        companies = sorted({r.company for r in in_window})
    out = []
    for company in companies:
        own = [r for r in in_window if r.company == company]
        out.append(CompanyKPI(company=company, kpis=aggregate(own, **kwargs), transactions_count=len(own)))
    return out
