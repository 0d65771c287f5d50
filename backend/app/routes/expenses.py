# Overview: RPC procedures for station expenses.

from ..models import EXPENSE_CATEGORIES
from ..rpc import Router
from ..services import finance_service
from ..validation import Field, optional, shape


router = Router("expenses")


@router.mutation(
    "create",
    input=shape(
        stationId=Field("string", min_length=1),
        category=Field("enum", choices=EXPENSE_CATEGORIES),
        amount=Field("cents"),
        description=optional("string", max_length=2000),
        expenseDate=Field("datetime"),
    ),
)
def create_expense(ctx, data):
    expense = finance_service.create_expense(
        station_id=data["station_id"],
        category=data["category"],
        amount_cents=data["amount"],
        description=data.get("description"),
        expense_date=data["expense_date"],
    )
    return expense.to_dict()


@router.query(
    "byDateRange",
    input=shape(
        stationId=Field("string", min_length=1),
        startDate=Field("datetime"),
        endDate=Field("datetime", range_end=True),
    ),
)
def expenses_by_date_range(ctx, data):
    rows = finance_service.list_expenses_by_date_range(data["station_id"], data["start_date"], data["end_date"])
    return [expense.to_dict() for expense in rows]


@router.query(
    "byCategory",
    input=shape(
        stationId=Field("string", min_length=1),
        category=Field("enum", choices=EXPENSE_CATEGORIES),
    ),
)
def expenses_by_category(ctx, data):
    rows = finance_service.list_expenses_by_category(data["station_id"], data["category"])
    return [expense.to_dict() for expense in rows]
