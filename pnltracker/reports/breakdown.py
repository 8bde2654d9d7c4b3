from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from pnltracker.models.enums import TxType
from pnltracker.reports.money import ZERO, to_decimal
from pnltracker.reports.records import FinancialRecord

@dataclass(frozen=True)
class CategoryTotal:
    label: str
    amount: Decimal

@dataclass(frozen=True)
class CategoryBreakdown:
    income: list[CategoryTotal] = field(default_factory=list)
    expense: list[CategoryTotal] = field(default_factory=list)

    def top(self, n: int = 10) -> CategoryBreakdown:
        return CategoryBreakdown(income=self.income[:n], expense=self.expense[:n])

def _sorted_totals(totals: dict[str, Decimal]) -> list[CategoryTotal]:
    # sorted() is stable, dicts keep first-seen order for ties
    return [
        CategoryTotal(label=label, amount=amount)
        for label, amount in sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    ]

def breakdown(records: Iterable[FinancialRecord]) -> CategoryBreakdown:
    income: dict[str, Decimal] = {}
    expense: dict[str, Decimal] = {}
    for r in records:
        bucket = income if r.kind == TxType.income else expense
        bucket[r.label] = bucket.get(r.label, ZERO) + to_decimal(r.amount)
    return CategoryBreakdown(income=_sorted_totals(income), expense=_sorted_totals(expense))
