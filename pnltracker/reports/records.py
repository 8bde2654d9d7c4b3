from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from pnltracker.models.enums import TxType

SALE_CATEGORY = "Продажа"

def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value

@dataclass(frozen=True)
class SaleTerms:
    """Installment plan agreed with a client; present only on sale income."""

    client_name: str
    contract_amount: Decimal
    first_payment: Decimal = Decimal("0")
    installment_period: int = 0
    payment_day: int | None = None
    contract_date: date | None = None
    contract_status: str = "active"
    termination_date: date | None = None

    @property
    def monthly_payment(self) -> Decimal:
        if self.installment_period <= 0:
            return Decimal("0")
        return (self.contract_amount - self.first_payment) / self.installment_period

@dataclass(frozen=True)
class FinancialRecord:
    id: str
    date: date
    kind: TxType
    category: str
    amount: Decimal
    company: str = ""
    subcategory: str | None = None
    sale: SaleTerms | None = None

    def __post_init__(self) -> None:
        if self.sale is not None and (self.kind != TxType.income or self.category != SALE_CATEGORY):
            raise ValueError(f"Sale terms are only allowed on '{SALE_CATEGORY}' income records")

    @property
    def label(self) -> str:
        if self.subcategory:
            return f"{self.category} / {self.subcategory}"
        return self.category
