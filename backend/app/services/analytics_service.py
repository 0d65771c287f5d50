# Overview: Revenue and profit aggregation over closing reports and expenses.

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func

from app.extensions import db, get_datastore
from app.models import Expense, Shift, ShiftReport
from app.validation import validate_date_range


def _empty_revenue() -> dict:
    return {"totalRevenue": 0, "fuelRevenue": 0, "groceryRevenue": 0, "reportCount": 0}


def revenue_by_date_range(station_id: str, start: datetime, end: datetime) -> dict:
    """
    Sum closing-report sales for shifts at the station that started in range.

    Amounts are integer cents.
    """
    validate_date_range(start, end)
    if not get_datastore().ready:
        return _empty_revenue()

    row = (
        db.session.query(
            func.coalesce(func.sum(ShiftReport.total_sales_cents), 0).label("total"),
            func.coalesce(func.sum(ShiftReport.fuel_sales_cents), 0).label("fuel"),
            func.coalesce(func.sum(ShiftReport.grocery_sales_cents), 0).label("grocery"),
            func.count(ShiftReport.id).label("reports"),
        )
        .join(Shift, ShiftReport.shift_id == Shift.id)
        .filter(
            Shift.station_id == station_id,
            Shift.start_time >= start,
            Shift.start_time <= end,
        )
        .one()
    )
    return {
        "totalRevenue": int(row.total),
        "fuelRevenue": int(row.fuel),
        "groceryRevenue": int(row.grocery),
        "reportCount": int(row.reports),
    }


def expenses_total(station_id: str, start: datetime, end: datetime) -> int:
    if not get_datastore().ready:
        return 0
    total = (
        db.session.query(func.coalesce(func.sum(Expense.amount_cents), 0))
        .filter(
            Expense.station_id == station_id,
            Expense.expense_date >= start,
            Expense.expense_date <= end,
        )
        .scalar()
    )
    return int(total or 0)


def profit_by_date_range(station_id: str, start: datetime, end: datetime) -> dict:
    """profit = revenue - expenses for the same station and range."""
    revenue = revenue_by_date_range(station_id, start, end)
    expenses = expenses_total(station_id, start, end)
    return {
        "revenue": revenue["totalRevenue"],
        "expenses": expenses,
        "profit": revenue["totalRevenue"] - expenses,
    }


def expenses_by_category(station_id: str, start: datetime, end: datetime) -> list[dict]:
    validate_date_range(start, end)
    if not get_datastore().ready:
        return []
    rows = (
        db.session.query(
            Expense.category,
            func.coalesce(func.sum(Expense.amount_cents), 0).label("total"),
            func.count(Expense.id).label("count"),
        )
        .filter(
            Expense.station_id == station_id,
            Expense.expense_date >= start,
            Expense.expense_date <= end,
        )
        .group_by(Expense.category)
        .order_by(Expense.category.asc())
        .all()
    )
    return [
        {"category": row.category, "total": int(row.total), "count": int(row.count)}
        for row in rows
    ]
