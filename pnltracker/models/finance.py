from __future__ import annotations

import uuid

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from pnltracker.db.base import Base
from pnltracker.models.enums import TxType

def _new_id() -> str:
    return str(uuid.uuid4())

class FinanceTransaction(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    company: Mapped[str] = mapped_column(String(255), index=True, nullable=False, default="")

    date: Mapped[Date] = mapped_column(Date, nullable=False)
    tx_type: Mapped[TxType] = mapped_column(Enum(TxType, name="tx_type_enum"), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(255), nullable=True)
    amount: Mapped[float] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Installment plan, filled only for sales
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contract_amount: Mapped[float | None] = mapped_column(Numeric(14, 2), nullable=True)
    first_payment: Mapped[float | None] = mapped_column(Numeric(14, 2), nullable=True)
    installment_period: Mapped[int | None] = mapped_column(Integer, nullable=True)
    payment_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    contract_date: Mapped[Date | None] = mapped_column(Date, nullable=True)
    contract_status: Mapped[str | None] = mapped_column(String(16), nullable=True)
    termination_date: Mapped[Date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

class LeadGeneration(Base):
    __tablename__ = "lead_generation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    company: Mapped[str] = mapped_column(String(255), index=True, nullable=False, default="")
    date: Mapped[Date] = mapped_column(Date, nullable=False)

    total_leads: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    qualified_leads: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    debt_above_300k: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    contracts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    payments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_cost: Mapped[float] = mapped_column(Numeric(14, 2), nullable=False, default=0)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
