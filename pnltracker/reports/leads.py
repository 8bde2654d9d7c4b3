from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from pnltracker.reports.money import ZERO, percent, to_decimal
from pnltracker.reports.windows import month_key

@dataclass(frozen=True)
class LeadStat:
    date: date
    total_leads: int = 0
    qualified_leads: int = 0
    debt_above_300k: int = 0
    contracts: int = 0
    payments: int = 0
    total_cost: Decimal = ZERO
    company: str = ""

@dataclass(frozen=True)
class LeadTotals:
    total_leads: int = 0
    qualified_leads: int = 0
    debt_above_300k: int = 0
    contracts: int = 0
    payments: int = 0
    total_cost: Decimal = ZERO

    def _rate(self, value: int) -> Decimal:
        return percent(Decimal(value), Decimal(self.total_leads))

    @property
    def qualified_conversion(self) -> Decimal:
        return self._rate(self.qualified_leads)

    @property
    def debt_conversion(self) -> Decimal:
        return self._rate(self.debt_above_300k)

    @property
    def contract_conversion(self) -> Decimal:
        return self._rate(self.contracts)

    @property
    def payment_conversion(self) -> Decimal:
        return self._rate(self.payments)

    @property
    def cost_per_lead(self) -> Decimal:
        if self.total_leads == 0:
            return ZERO
        return self.total_cost / self.total_leads

@dataclass(frozen=True)
class MonthlyLeads:
    month_key: str
    totals: LeadTotals

def lead_totals(stats: Iterable[LeadStat]) -> LeadTotals:
    t = [0, 0, 0, 0, 0]
    cost = ZERO
    for s in stats:
        t[0] += s.total_leads
        t[1] += s.qualified_leads
        t[2] += s.debt_above_300k
        t[3] += s.contracts
        t[4] += s.payments
        cost += to_decimal(s.total_cost)
    return LeadTotals(*t, total_cost=cost)

def lead_funnel_by_month(stats: Iterable[LeadStat]) -> list[MonthlyLeads]:
    grouped: dict[str, list[LeadStat]] = {}
    for s in stats:
        grouped.setdefault(month_key(s.date), []).append(s)
    return [MonthlyLeads(month_key=k, totals=lead_totals(grouped[k])) for k in sorted(grouped)]
