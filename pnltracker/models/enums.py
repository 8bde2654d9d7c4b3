from __future__ import annotations
from enum import Enum

class TxType(str, Enum):
    income = "income"
    expense = "expense"

class Bucket(str, Enum):
    withdrawal = "withdrawal"

class PeriodKind(str, Enum):
    month = "month"
    quarter = "quarter"
    year = "year"
    range = "range"

class Delta(str, Enum):
    positive = "positive"
    negative = "negative"
    neutral = "neutral"

class ClientStatus(str, Enum):
    active = "active"
    completed = "completed"
    overdue = "overdue"
    terminated = "terminated"
