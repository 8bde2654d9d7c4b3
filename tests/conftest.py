from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pnltracker.db.base import Base
from pnltracker.models.finance import FinanceTransaction, LeadGeneration
from pnltracker.models.staff import DepartmentBonusPoints, PayrollRecord

@pytest.fixture()
def sqlite_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine, tables=[
        FinanceTransaction.__table__,
        LeadGeneration.__table__,
        DepartmentBonusPoints.__table__,
        PayrollRecord.__table__,
    ])
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
    with Session() as session:
        yield session
