from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from pnltracker.models.enums import PeriodKind
from pnltracker.reports.records import as_date

def _month_end(year: int, month: int) -> date:
    if month == 12:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - timedelta(days=1)

def _date_floor(d: date, period: PeriodKind) -> date:
    if period == PeriodKind.month:
        return date(d.year, d.month, 1)
    if period == PeriodKind.quarter:
        q = (d.month - 1)//3
        return date(d.year, q*3 + 1, 1)
    if period == PeriodKind.year:
        return date(d.year, 1, 1)
    raise ValueError("Invalid period")

@dataclass(frozen=True)
class AggregationWindow:
    """Closed date interval; both ends are included at day granularity."""

    start: date
    end: date
    kind: PeriodKind = PeriodKind.range

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_date(self.start))
        object.__setattr__(self, "end", as_date(self.end))

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def contains(self, d: date | datetime) -> bool:
        return self.start <= as_date(d) <= self.end

    @classmethod
    def month(cls, year: int, month: int) -> AggregationWindow:
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month: {month}")
        return cls(date(year, month, 1), _month_end(year, month), PeriodKind.month)

    @classmethod
    def quarter(cls, year: int, quarter: int) -> AggregationWindow:
        if not 1 <= quarter <= 4:
            raise ValueError(f"Invalid quarter: {quarter}")
        first = (quarter - 1)*3 + 1
        return cls(date(year, first, 1), _month_end(year, first + 2), PeriodKind.quarter)

    @classmethod
    def year(cls, year: int) -> AggregationWindow:
        return cls(date(year, 1, 1), date(year, 12, 31), PeriodKind.year)

    @classmethod
    def between(cls, start: date | datetime, end: date | datetime) -> AggregationWindow:
        return cls(start, end, PeriodKind.range)

    @classmethod
    def current(cls, period: PeriodKind, today: date | None = None) -> AggregationWindow:
        today = as_date(today or date.today())
        start = _date_floor(today, period)
        if period == PeriodKind.month:
            return cls.month(start.year, start.month)
        if period == PeriodKind.quarter:
            return cls.quarter(start.year, (start.month - 1)//3 + 1)
        return cls.year(start.year)

    @classmethod
    def current_month(cls, today: date | None = None) -> AggregationWindow:
        return cls.current(PeriodKind.month, today)

    @classmethod
    def current_quarter(cls, today: date | None = None) -> AggregationWindow:
        return cls.current(PeriodKind.quarter, today)

    @classmethod
    def current_year(cls, today: date | None = None) -> AggregationWindow:
        return cls.current(PeriodKind.year, today)

    def previous(self) -> AggregationWindow:
        """Window of the same shape that ends the day before this one starts."""
        if self.is_empty:
            return self
        before = self.start - timedelta(days=1)
        if self.kind == PeriodKind.month:
            return AggregationWindow.month(before.year, before.month)
        if self.kind == PeriodKind.quarter:
            return AggregationWindow.quarter(before.year, (before.month - 1)//3 + 1)
        if self.kind == PeriodKind.year:
            return AggregationWindow.year(before.year)
        return AggregationWindow.between(before - (self.end - self.start), before)

def month_key(d: date | datetime) -> str:
    d = as_date(d)
    return f"{d.year:04d}-{d.month:02d}"

def window_for(
    period: PeriodKind,
    *,
    year: int | None = None,
    month: int | None = None,
    quarter: int | None = None,
    start: date | None = None,
    end: date | None = None,
    today: date | None = None,
) -> AggregationWindow:
    """Resolve a selected period; missing year/month/quarter fall back to today's."""
    today = as_date(today or date.today())
    period = PeriodKind(period)
    if period == PeriodKind.range:
        if start is None or end is None:
            raise ValueError("Range period requires both start and end")
        return AggregationWindow.between(start, end)
    y = year if year is not None else today.year
    if period == PeriodKind.month:
        return AggregationWindow.month(y, month if month is not None else today.month)
    if period == PeriodKind.quarter:
        return AggregationWindow.quarter(y, quarter if quarter is not None else (today.month - 1)//3 + 1)
    return AggregationWindow.year(y)
