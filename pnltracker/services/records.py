from __future__ import annotations

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from pnltracker.models.enums import TxType
from pnltracker.models.finance import FinanceTransaction, LeadGeneration
from pnltracker.reports.leads import LeadStat
from pnltracker.reports.money import to_decimal
from pnltracker.reports.records import SALE_CATEGORY, FinancialRecord, SaleTerms

log = structlog.get_logger(__name__)

def _sale_terms(tx: FinanceTransaction) -> SaleTerms | None:
    if tx.tx_type != TxType.income or tx.category != SALE_CATEGORY:
        return None
    if tx.client_name is None and tx.contract_amount is None:
        return None
    return SaleTerms(
        client_name=tx.client_name or "",
        contract_amount=to_decimal(tx.contract_amount),
        first_payment=to_decimal(tx.first_payment),
        installment_period=tx.installment_period or 0,
        payment_day=tx.payment_day,
        contract_date=tx.contract_date,
        contract_status=tx.contract_status or "active",
        termination_date=tx.termination_date,
    )

def to_record(tx: FinanceTransaction) -> FinancialRecord:
    return FinancialRecord(
        id=tx.id,
        date=tx.date,
        kind=tx.tx_type,
        category=tx.category,
        subcategory=tx.subcategory or None,
        amount=to_decimal(tx.amount),
        company=tx.company,
        sale=_sale_terms(tx),
    )

def fetch_records(session: Session, *, owner_id: str, company: str | None = None) -> list[FinancialRecord]:
    stmt = select(FinanceTransaction).where(FinanceTransaction.user_id == owner_id)
    if company is not None:
        stmt = stmt.where(FinanceTransaction.company == company)
    stmt = stmt.order_by(FinanceTransaction.date.desc())
    rows = session.execute(stmt).scalars().all()
    log.info("records_fetched", owner_id=owner_id, company=company, count=len(rows))
    return [to_record(tx) for tx in rows]

def fetch_lead_stats(session: Session, *, owner_id: str, company: str | None = None) -> list[LeadStat]:
    stmt = select(LeadGeneration).where(LeadGeneration.user_id == owner_id)
    if company is not None:
        stmt = stmt.where(LeadGeneration.company == company)
    rows = session.execute(stmt.order_by(LeadGeneration.date.asc())).scalars().all()
    return [
        LeadStat(
            date=r.date,
            total_leads=r.total_leads,
            qualified_leads=r.qualified_leads,
            debt_above_300k=r.debt_above_300k,
            contracts=r.contracts,
            payments=r.payments,
            total_cost=to_decimal(r.total_cost),
            company=r.company,
        )
        for r in rows
    ]
