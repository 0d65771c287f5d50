# Overview: RPC procedures for shift closing reports.

from ..models import REPORT_STATUSES
from ..rpc import Router
from ..services import shift_service
from ..validation import Field, optional, shape, to_snake


router = Router("shiftReports")

# Wire key -> column; every amount is integer cents
AMOUNT_KEYS = {
    "totalSales": "total_sales_cents",
    "totalTax": "total_tax_cents",
    "cashAmount": "cash_amount_cents",
    "creditAmount": "credit_amount_cents",
    "debitAmount": "debit_amount_cents",
    "mobileAmount": "mobile_amount_cents",
    "overShortAmount": "over_short_cents",
    "fuelSales": "fuel_sales_cents",
    "grocerySales": "grocery_sales_cents",
}

_amount_fields = {key: Field("cents") for key in AMOUNT_KEYS}
_amount_fields["overShortAmount"] = Field("cents", signed=True)


@router.mutation(
    "create",
    input=shape(
        shiftId=Field("string", min_length=1),
        stationNumber=optional("int"),
        notes=optional("string", max_length=5000),
        **_amount_fields,
    ),
)
def create_report(ctx, data):
    amounts = {column: data[to_snake(key)] for key, column in AMOUNT_KEYS.items()}
    report = shift_service.create_report(
        shift_id=data["shift_id"],
        station_number=data.get("station_number"),
        notes=data.get("notes"),
        **amounts,
    )
    return report.to_dict()


@router.query("byShift", input=shape(shiftId=Field("string", min_length=1)))
def reports_by_shift(ctx, data):
    return [report.to_dict() for report in shift_service.list_reports_by_shift(data["shift_id"])]


@router.mutation(
    "updateStatus",
    input=shape(
        id=Field("string", min_length=1),
        status=Field("enum", choices=REPORT_STATUSES),
    ),
)
def update_status(ctx, data):
    report = shift_service.update_report_status(report_id=data["id"], status=data["status"], reviewer=ctx.user)
    return report.to_dict()


@router.query(
    "byDateRange",
    input=shape(
        stationId=Field("string", min_length=1),
        startDate=Field("datetime"),
        endDate=Field("datetime", range_end=True),
    ),
)
def reports_by_date_range(ctx, data):
    rows = shift_service.list_reports_by_date_range(data["station_id"], data["start_date"], data["end_date"])
    return [{**report.to_dict(), "shift": shift.to_dict()} for report, shift in rows]
