# Overview: Service-layer operations for transactions and expenses.

from __future__ import annotations

from datetime import datetime

from app.extensions import db, get_datastore
from app.models import Expense, ShiftReport, Transaction
from app.validation import NotFoundError, validate_date_range
from .station_service import require_station


def create_transaction(
    *,
    station_id: str,
    type: str,
    amount_cents: int,
    transaction_date: datetime,
    shift_report_id: str | None = None,
    description: str | None = None,
) -> Transaction:
    get_datastore().require()
    require_station(station_id)
    if shift_report_id and not db.session.query(ShiftReport).filter_by(id=shift_report_id).first():
        raise NotFoundError("Shift report not found")

    txn = Transaction(
        station_id=station_id,
        shift_report_id=shift_report_id,
        type=type,
        amount_cents=amount_cents,
        description=description,
        transaction_date=transaction_date,
    )
    db.session.add(txn)
    db.session.commit()
    return txn


def list_transactions_by_date_range(station_id: str, start: datetime, end: datetime) -> list[Transaction]:
    validate_date_range(start, end)
    if not get_datastore().ready:
        return []
    return (
        db.session.query(Transaction)
        .filter(
            Transaction.station_id == station_id,
            Transaction.transaction_date >= start,
            Transaction.transaction_date <= end,
        )
        .order_by(Transaction.transaction_date.desc())
        .all()
    )


def create_expense(
    *,
    station_id: str,
    category: str,
    amount_cents: int,
    expense_date: datetime,
    description: str | None = None,
) -> Expense:
    get_datastore().require()
    require_station(station_id)

    expense = Expense(
        station_id=station_id,
        category=category,
        amount_cents=amount_cents,
        description=description,
        expense_date=expense_date,
    )
    db.session.add(expense)
    db.session.commit()
    return expense


def list_expenses_by_date_range(station_id: str, start: datetime, end: datetime) -> list[Expense]:
    validate_date_range(start, end)
    if not get_datastore().ready:
        return []
    return (
        db.session.query(Expense)
        .filter(
            Expense.station_id == station_id,
            Expense.expense_date >= start,
            Expense.expense_date <= end,
        )
        .order_by(Expense.expense_date.desc())
        .all()
    )


def list_expenses_by_category(station_id: str, category: str) -> list[Expense]:
    if not get_datastore().ready:
        return []
    return (
        db.session.query(Expense)
        .filter(Expense.station_id == station_id, Expense.category == category)
        .order_by(Expense.expense_date.desc())
        .all()
    )
