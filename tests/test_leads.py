from __future__ import annotations

from datetime import date
from decimal import Decimal

from pnltracker.reports.leads import LeadStat, lead_funnel_by_month, lead_totals

STATS = [
    LeadStat(date=date(2024, 7, 1), total_leads=100, qualified_leads=40, debt_above_300k=20, contracts=10, payments=5, total_cost=Decimal("50000")),
    LeadStat(date=date(2024, 7, 15), total_leads=100, qualified_leads=20, debt_above_300k=10, contracts=10, payments=5, total_cost=Decimal("30000")),
    LeadStat(date=date(2024, 6, 3), total_leads=0, total_cost=Decimal("1000")),
]

def test_funnel_by_month():
    june, july = lead_funnel_by_month(STATS)
    assert june.month_key == "2024-06"
    assert june.totals.qualified_conversion == 0
    assert june.totals.cost_per_lead == 0

    assert july.month_key == "2024-07"
    assert july.totals.total_leads == 200
    assert july.totals.qualified_conversion == Decimal("30")
    assert july.totals.debt_conversion == Decimal("15")
    assert july.totals.contract_conversion == Decimal("10")
    assert july.totals.payment_conversion == Decimal("5")
    assert july.totals.cost_per_lead == Decimal("400")

def test_totals():
    t = lead_totals(STATS)
    assert t.total_leads == 200
    assert t.total_cost == Decimal("81000")
    assert lead_totals([]).cost_per_lead == 0
