from __future__ import annotations

from datetime import date

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from pnltracker.models.staff import DepartmentBonusPoints, PayrollRecord
from pnltracker.reports.bonuses import BonusPoints, PayrollPayment
from pnltracker.reports.money import to_decimal

log = structlog.get_logger(__name__)

_POINT_FIELDS = (
    "case_category", "urgency", "assistance", "qualification", "marketing",
    "crm", "improvements", "overtime", "leadership_bonus", "minus_points",
)

def fetch_bonus_points(session: Session, *, owner_id: str, month: str | None = None) -> list[BonusPoints]:
    stmt = select(DepartmentBonusPoints).where(DepartmentBonusPoints.user_id == owner_id)
    if month is not None:
        stmt = stmt.where(DepartmentBonusPoints.month == month)
    rows = session.execute(stmt.order_by(DepartmentBonusPoints.month.asc())).scalars().all()
    log.info("bonus_points_fetched", owner_id=owner_id, month=month, count=len(rows))
    return [
        BonusPoints(employee_id=r.employee_id, month=r.month, **{f: getattr(r, f) or 0 for f in _POINT_FIELDS})
        for r in rows
    ]

def fetch_payroll_payments(
    session: Session,
    *,
    owner_id: str,
    start: date | None = None,
    end: date | None = None,
) -> list[PayrollPayment]:
    stmt = select(PayrollRecord).where(PayrollRecord.user_id == owner_id)
    if start is not None:
        stmt = stmt.where(PayrollRecord.payment_date >= start)
    if end is not None:
        stmt = stmt.where(PayrollRecord.payment_date <= end)
    rows = session.execute(stmt.order_by(PayrollRecord.payment_date.desc())).scalars().all()
    log.info("payroll_fetched", owner_id=owner_id, count=len(rows))
    return [
        PayrollPayment(employee_name=r.employee_name, payment_date=r.payment_date, amount=to_decimal(r.amount))
        for r in rows
    ]
