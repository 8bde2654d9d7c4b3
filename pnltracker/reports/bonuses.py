from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Iterable

from pnltracker.reports.money import ZERO, to_decimal

@dataclass(frozen=True)
class BonusPoints:
    employee_id: str
    month: str | None = None
    case_category: int = 0
    urgency: int = 0
    assistance: int = 0
    qualification: int = 0
    marketing: int = 0
    crm: int = 0
    improvements: int = 0
    overtime: int = 0
    leadership_bonus: int = 0
    minus_points: int = 0

    @property
    def total_points(self) -> int:
        plus = sum(
            getattr(self, f.name) or 0
            for f in fields(self)
            if f.name not in ("employee_id", "month", "minus_points")
        )
        return plus - (self.minus_points or 0)

@dataclass(frozen=True)
class BonusSummary:
    per_employee: list[tuple[str, int]]
    department_total: int

def department_bonus_summary(points: Iterable[BonusPoints]) -> BonusSummary:
    per: dict[str, int] = {}
    for p in points:
        per[p.employee_id] = per.get(p.employee_id, 0) + p.total_points
    rows = list(per.items())
    rows.sort(key=lambda r: r[1], reverse=True)
    return BonusSummary(per_employee=rows, department_total=sum(t for _, t in rows))

@dataclass(frozen=True)
class PayrollPayment:
    employee_name: str
    payment_date: date
    amount: Decimal

def total_paid(
    payments: Iterable[PayrollPayment],
    *,
    employee: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> Decimal:
    total = ZERO
    for p in payments:
        if employee is not None and p.employee_name != employee:
            continue
        if start is not None and p.payment_date < start:
            continue
        if end is not None and p.payment_date > end:
            continue
        total += to_decimal(p.amount)
    return total
