from __future__ import annotations

from io import BytesIO
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from pnltracker.reports.breakdown import CategoryBreakdown
from pnltracker.reports.kpi import KPIResult
from pnltracker.reports.monthly import MonthlyBucket

def _money(v) -> float:
    return round(float(v), 2)

def _change(v) -> float | None:
    return None if v is None else round(float(v), 1)

def _widths(ws, count: int, width: int) -> None:
    for col in range(1, count + 1):
        ws.column_dimensions[get_column_letter(col)].width = width

def monthly_to_xlsx(buckets: list[MonthlyBucket], *, kpis: KPIResult, categories: CategoryBreakdown) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Monthly"

    ws.append(["Month", "Income", "Expenses", "Profit", "Margin %", "Income Δ%", "Expenses Δ%", "Profit Δ%"])
    for b in buckets:
        ws.append([
            b.month_key,
            _money(b.income),
            _money(b.expenses),
            _money(b.profit),
            _change(b.margin),
            _change(b.income_change),
            _change(b.expense_change),
            _change(b.profit_change),
        ])
    _widths(ws, 8, 16)

    ws_cat = wb.create_sheet("Categories")
    ws_cat.append(["Type", "Category", "Amount"])
    for r in categories.income:
        ws_cat.append(["income", r.label, _money(r.amount)])
    for r in categories.expense:
        ws_cat.append(["expense", r.label, _money(r.amount)])
    _widths(ws_cat, 3, 28)

    ws_kpi = wb.create_sheet("KPI")
    ws_kpi.append(["Metric", "Value"])
    ws_kpi.append(["Income", _money(kpis.income)])
    ws_kpi.append(["Expenses", _money(kpis.expenses)])
    ws_kpi.append(["Profit", _money(kpis.profit)])
    ws_kpi.append(["Margin %", _change(kpis.margin)])
    ws_kpi.append(["Withdrawals", _money(kpis.withdrawals)])
    ws_kpi.append(["Money in project", _money(kpis.money_in_project)])
    _widths(ws_kpi, 2, 22)

    bio = BytesIO()
    wb.save(bio)
    return bio.getvalue()
