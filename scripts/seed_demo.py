#!/usr/bin/env python
from __future__ import annotations

import argparse
from datetime import date
from decimal import Decimal

from pnltracker.db.base import Base
from pnltracker.db.session import engine, session_scope
from pnltracker.models.enums import TxType
from pnltracker.models.finance import FinanceTransaction, LeadGeneration
from pnltracker.models.staff import DepartmentBonusPoints, PayrollRecord

COMPANIES = ["Спасение", "Дело Бизнес"]
EMPLOYEES = ["Иванов", "Петрова", "Сидоров"]

def main():
    p = argparse.ArgumentParser(description="Create tables and load demo transactions for one owner.")
    p.add_argument("--owner-id", type=str, default="demo", help="Owner (user) id")
    p.add_argument("--year", type=int, default=date.today().year, help="Year to fill")
    args = p.parse_args()

    Base.metadata.create_all(engine)

    with session_scope() as session:
        if session.query(FinanceTransaction).filter(FinanceTransaction.user_id == args.owner_id).first() is not None:
            print("Demo data already present.")
            return

        for i, company in enumerate(COMPANIES, start=1):
            for month in range(1, 13):
                d = date(args.year, month, 10)
                session.add(FinanceTransaction(
                    user_id=args.owner_id, company=company, date=d, tx_type=TxType.income,
                    category="Продажа", amount=Decimal(300000 * i + 10000 * month),
                    client_name=f"Клиент {month}", contract_amount=Decimal(150000), first_payment=Decimal(30000),
                    installment_period=12, payment_day=10, contract_date=d,
                ))
                session.add(FinanceTransaction(
                    user_id=args.owner_id, company=company, date=d.replace(day=15), tx_type=TxType.expense,
                    category="Зарплата", amount=Decimal(120000 * i),
                ))
                session.add(FinanceTransaction(
                    user_id=args.owner_id, company=company, date=d.replace(day=20), tx_type=TxType.expense,
                    category="Реклама", subcategory="Яндекс Директ", amount=Decimal(40000 + 1000 * month),
                ))
                if month % 3 == 0:
                    session.add(FinanceTransaction(
                        user_id=args.owner_id, company=company, date=d.replace(day=28), tx_type=TxType.expense,
                        category="Вывод средств", amount=Decimal(100000),
                    ))
                session.add(LeadGeneration(
                    user_id=args.owner_id, company=company, date=d,
                    total_leads=200 + 10 * month, qualified_leads=80 + 5 * month, debt_above_300k=40,
                    contracts=12 + month, payments=8 + month, total_cost=Decimal(60000),
                ))

        for month in range(1, 13):
            for j, name in enumerate(EMPLOYEES):
                session.add(DepartmentBonusPoints(
                    user_id=args.owner_id, employee_id=name, month=f"{args.year:04d}-{month:02d}",
                    case_category=3 + j, urgency=month % 4, crm=2, minus_points=j,
                ))
                session.add(PayrollRecord(
                    user_id=args.owner_id, employee_name=name, payment_date=date(args.year, month, 5),
                    amount=Decimal(60000 + 5000 * j),
                ))

    print("Seed done.")

if __name__ == "__main__":
    main()
