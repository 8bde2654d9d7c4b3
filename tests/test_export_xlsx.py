from __future__ import annotations

import io
from datetime import date
from decimal import Decimal

from openpyxl import load_workbook

from pnltracker.models.enums import TxType
from pnltracker.reports.breakdown import breakdown
from pnltracker.reports.export_xlsx import monthly_to_xlsx
from pnltracker.reports.kpi import aggregate
from pnltracker.reports.monthly import bucket_by_month
from pnltracker.reports.records import FinancialRecord

def test_monthly_xlsx_sheets():
    records = [
        FinancialRecord(id="1", date=date(2024, 1, 5), kind=TxType.income, category="Продажа", amount=Decimal("1000")),
        FinancialRecord(id="2", date=date(2024, 2, 5), kind=TxType.expense, category="Вывод средств", amount=Decimal("250")),
    ]
    data = monthly_to_xlsx(bucket_by_month(records), kpis=aggregate(records), categories=breakdown(records))
    wb = load_workbook(io.BytesIO(data))
    assert wb.sheetnames == ["Monthly", "Categories", "KPI"]

    rows = list(wb["Monthly"].iter_rows(values_only=True))
    assert rows[1][:5] == ("2024-01", 1000, 0, 1000, 100)
    assert rows[1][5] is None
    assert rows[2][0] == "2024-02"

    kpi = {r[0]: r[1] for r in wb["KPI"].iter_rows(min_row=2, values_only=True)}
    assert kpi["Withdrawals"] == 250
    assert kpi["Profit"] == 750
