from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from pnltracker.models.enums import TxType
from pnltracker.reports.delta import pct_change
from pnltracker.reports.money import ZERO, margin_percent, to_decimal
from pnltracker.reports.records import FinancialRecord
from pnltracker.reports.windows import month_key

@dataclass(frozen=True)
class MonthlyBucket:
    month_key: str
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    income_change: Decimal | None = None
    expense_change: Decimal | None = None
    profit_change: Decimal | None = None

    @property
    def profit(self) -> Decimal:
        return self.income - self.expenses

    @property
    def margin(self) -> Decimal:
        return margin_percent(self.profit, self.income)

def bucket_by_month(records: Iterable[FinancialRecord]) -> list[MonthlyBucket]:
    stats: dict[str, list[Decimal]] = {}
    for r in records:
        key = month_key(r.date)
        sums = stats.setdefault(key, [ZERO, ZERO])
        amount = to_decimal(r.amount)
        if r.kind == TxType.income:
            sums[0] += amount
        else:
            sums[1] += amount

    out: list[MonthlyBucket] = []
    prev: MonthlyBucket | None = None
    for key in sorted(stats):
        income, expenses = stats[key]
        if prev is None:
            bucket = MonthlyBucket(month_key=key, income=income, expenses=expenses)
        else:
            bucket = MonthlyBucket(
                month_key=key,
                income=income,
                expenses=expenses,
                income_change=pct_change(income, prev.income),
                expense_change=pct_change(expenses, prev.expenses),
                profit_change=pct_change(income - expenses, prev.profit),
            )
        out.append(bucket)
        prev = bucket
    return out
