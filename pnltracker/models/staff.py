from __future__ import annotations

from sqlalchemy import Date, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from pnltracker.db.base import Base
from pnltracker.models.finance import _new_id

class DepartmentBonusPoints(Base):
    __tablename__ = "department_bonus_points"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    employee_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    month: Mapped[str] = mapped_column(String(7), index=True, nullable=False)  # YYYY-MM

    case_category: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    urgency: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    assistance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    qualification: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    marketing: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    crm: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    improvements: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    overtime: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    leadership_bonus: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    minus_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

class PayrollRecord(Base):
    __tablename__ = "payroll_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    employee_name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    payment_date: Mapped[Date] = mapped_column(Date, nullable=False)
    payment_type: Mapped[str] = mapped_column(String(32), nullable=False, default="salary")
    amount: Mapped[float] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
