# Overview: RPC procedures for recorded station transactions.

from ..models import TRANSACTION_TYPES
from ..rpc import Router
from ..services import finance_service
from ..validation import Field, optional, shape


router = Router("transactions")


@router.mutation(
    "create",
    input=shape(
        stationId=Field("string", min_length=1),
        shiftReportId=optional("string", min_length=1),
        type=Field("enum", choices=TRANSACTION_TYPES),
        amount=Field("cents"),
        description=optional("string", max_length=2000),
        transactionDate=Field("datetime"),
    ),
)
def create_transaction(ctx, data):
    txn = finance_service.create_transaction(
        station_id=data["station_id"],
        shift_report_id=data.get("shift_report_id"),
        type=data["type"],
        amount_cents=data["amount"],
        description=data.get("description"),
        transaction_date=data["transaction_date"],
    )
    return txn.to_dict()


@router.query(
    "byDateRange",
    input=shape(
        stationId=Field("string", min_length=1),
        startDate=Field("datetime"),
        endDate=Field("datetime", range_end=True),
    ),
)
def transactions_by_date_range(ctx, data):
    rows = finance_service.list_transactions_by_date_range(data["station_id"], data["start_date"], data["end_date"])
    return [txn.to_dict() for txn in rows]
