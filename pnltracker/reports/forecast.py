"""Target-profit forecast.

Historical per-category averages are treated as a typical month. For a target
profit the forecast answers three questions: how much income has to grow, how
much expenses have to shrink, or both by half each. Every scenario spreads the
change over categories in proportion to their average amount.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from pnltracker.models.enums import TxType
from pnltracker.reports.money import ZERO, percent, to_decimal
from pnltracker.reports.records import FinancialRecord

HALF = Decimal("0.5")

@dataclass(frozen=True)
class CategoryAverage:
    category: str
    kind: TxType
    average_amount: Decimal

@dataclass(frozen=True)
class CategoryChange:
    category: str
    average_amount: Decimal
    change: Decimal
    new_amount: Decimal
    change_percent: Decimal

@dataclass(frozen=True)
class ForecastResult:
    target_profit_per_month: Decimal
    total_income: Decimal
    total_expenses: Decimal
    required_income: Decimal
    income_increase: Decimal
    income_increase_percent: Decimal
    required_expenses: Decimal
    expense_reduction: Decimal
    expense_reduction_percent: Decimal
    income_scenario: list[CategoryChange] = field(default_factory=list)
    expense_scenario: list[CategoryChange] = field(default_factory=list)
    combined_income_scenario: list[CategoryChange] = field(default_factory=list)
    combined_expense_scenario: list[CategoryChange] = field(default_factory=list)

    @property
    def current_profit(self) -> Decimal:
        return self.total_income - self.total_expenses

def category_averages(records: Iterable[FinancialRecord]) -> list[CategoryAverage]:
    totals: dict[tuple[TxType, str], list] = {}
    for r in records:
        acc = totals.setdefault((r.kind, r.category), [ZERO, 0])
        acc[0] += to_decimal(r.amount)
        acc[1] += 1
    return [
        CategoryAverage(category=category, kind=kind, average_amount=total / count)
        for (kind, category), (total, count) in totals.items()
    ]

def distribute(total_change: Decimal, categories: list[CategoryAverage], *, increase: bool) -> list[CategoryChange]:
    total_current = sum((c.average_amount for c in categories), ZERO)
    out = []
    for c in categories:
        change = total_change * c.average_amount / total_current if total_current else ZERO
        new_amount = c.average_amount + change if increase else c.average_amount - change
        out.append(CategoryChange(
            category=c.category,
            average_amount=c.average_amount,
            change=change,
            new_amount=max(ZERO, new_amount),
            change_percent=percent(change, c.average_amount),
        ))
    return out

def forecast(records: Iterable[FinancialRecord], target_profit, months: int = 1) -> ForecastResult:
    if months < 1:
        raise ValueError("Projection period must be at least one month")
    averages = category_averages(records)
    income = [c for c in averages if c.kind == TxType.income]
    expenses = [c for c in averages if c.kind == TxType.expense]
    total_income = sum((c.average_amount for c in income), ZERO)
    total_expenses = sum((c.average_amount for c in expenses), ZERO)

    per_month = to_decimal(target_profit) / months
    required_income = total_expenses + per_month
    income_increase = required_income - total_income
    required_expenses = total_income - per_month
    expense_reduction = total_expenses - required_expenses

    return ForecastResult(
        target_profit_per_month=per_month,
        total_income=total_income,
        total_expenses=total_expenses,
        required_income=required_income,
        income_increase=income_increase,
        income_increase_percent=percent(income_increase, total_income),
        required_expenses=required_expenses,
        expense_reduction=expense_reduction,
        expense_reduction_percent=percent(expense_reduction, total_expenses),
        income_scenario=distribute(income_increase, income, increase=True),
        expense_scenario=distribute(expense_reduction, expenses, increase=False),
        combined_income_scenario=distribute(income_increase * HALF, income, increase=True),
        combined_expense_scenario=distribute(expense_reduction * HALF, expenses, increase=False),
    )
