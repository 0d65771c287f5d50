# Overview: RPC procedures for revenue, profit and expense breakdowns.

from ..rpc import Router
from ..services import analytics_service
from ..validation import Field, shape


router = Router("analytics")

DATE_RANGE = shape(
    stationId=Field("string", min_length=1),
    startDate=Field("datetime"),
    endDate=Field("datetime", range_end=True),
)


@router.query("revenue", input=DATE_RANGE)
def revenue(ctx, data):
    return analytics_service.revenue_by_date_range(data["station_id"], data["start_date"], data["end_date"])


@router.query("profit", input=DATE_RANGE)
def profit(ctx, data):
    """Revenue minus expenses for the same station and range, in cents."""
    return analytics_service.profit_by_date_range(data["station_id"], data["start_date"], data["end_date"])


@router.query("expensesByCategory", input=DATE_RANGE)
def expenses_by_category(ctx, data):
    return analytics_service.expenses_by_category(data["station_id"], data["start_date"], data["end_date"])
