from __future__ import annotations

import os
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from pnltracker.db.base import Base
from pnltracker.models.enums import TxType
from pnltracker.models.finance import FinanceTransaction
from pnltracker.services.records import fetch_records


@pytest.mark.skipif(not os.getenv("TEST_DATABASE_URL"), reason="TEST_DATABASE_URL is not set")
def test_postgres_fetch_records_smoke():
    engine = create_engine(os.environ["TEST_DATABASE_URL"], pool_pre_ping=True)
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add(FinanceTransaction(user_id="smoke", company="A", date=date(2024, 1, 1), tx_type=TxType.income,
                                       category="Продажа", amount=Decimal("10.10")))
        session.flush()
        records = fetch_records(session, owner_id="smoke")
        session.rollback()
    assert records[0].amount == Decimal("10.10")
