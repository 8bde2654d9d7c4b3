from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pnltracker.models.enums import Delta
from pnltracker.reports.kpi import KPIResult
from pnltracker.reports.money import to_decimal

UNBOUNDED = "▲ ∞%"
NO_CHANGE = "—"

# Metrics where a decrease is good news
LOWER_IS_BETTER = frozenset({"expenses", "withdrawals"})
KPI_METRICS = ("income", "expenses", "profit", "margin", "withdrawals", "money_in_project")

@dataclass(frozen=True)
class MetricDelta:
    metric: str
    current: Decimal
    reference: Decimal
    change: Decimal | None
    label: str
    direction: Delta

def classify(current, reference, *, higher_is_better: bool = True) -> Delta:
    cur, ref = to_decimal(current), to_decimal(reference)
    if cur == ref:
        return Delta.neutral
    up = cur > ref
    if up == higher_is_better:
        return Delta.positive
    return Delta.negative

def pct_change(current, reference) -> Decimal | None:
    """Signed percent change against |reference|; None when the reference is zero."""
    cur, ref = to_decimal(current), to_decimal(reference)
    if ref == 0:
        return None
    return (cur - ref) / abs(ref) * 100

def format_change(change: Decimal | None, current=None) -> str:
    if change is None:
        return UNBOUNDED if current is not None and to_decimal(current) > 0 else NO_CHANGE
    arrow = "▲" if change >= 0 else "▼"
    return f"{arrow} {abs(change):.1f}%"

def format_delta(current, reference) -> str:
    return format_change(pct_change(current, reference), current)

def compare(current: KPIResult, reference: KPIResult) -> list[MetricDelta]:
    out = []
    for metric in KPI_METRICS:
        cur = getattr(current, metric)
        ref = getattr(reference, metric)
        out.append(MetricDelta(
            metric=metric,
            current=cur,
            reference=ref,
            change=pct_change(cur, ref),
            label=format_delta(cur, ref),
            direction=classify(cur, ref, higher_is_better=metric not in LOWER_IS_BETTER),
        ))
    return out
