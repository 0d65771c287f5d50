# Overview: RPC procedures for shift check-in and check-out.

from ..rpc import Router
from ..services import shift_service
from ..validation import Field, NotFoundError, optional, shape


router = Router("shifts")


@router.mutation(
    "create",
    input=shape(
        stationId=Field("string", min_length=1),
        employeeId=Field("string", min_length=1),
        startTime=optional("datetime"),
    ),
)
def start_shift(ctx, data):
    """Start a shift; it stays active until shifts.end sets its endTime."""
    return shift_service.start_shift(**data).to_dict()


@router.mutation(
    "end",
    input=shape(
        id=Field("string", min_length=1),
        endTime=optional("datetime"),
    ),
)
def end_shift(ctx, data):
    return shift_service.end_shift(shift_id=data["id"], end_time=data.get("end_time")).to_dict()


@router.query("active", input=shape(stationId=optional("string", min_length=1)))
def active_shifts(ctx, data):
    return [shift.to_dict() for shift in shift_service.list_active_shifts(data.get("station_id"))]


@router.query(
    "byDateRange",
    input=shape(
        stationId=Field("string", min_length=1),
        startDate=Field("datetime"),
        endDate=Field("datetime", range_end=True),
    ),
)
def shifts_by_date_range(ctx, data):
    shifts = shift_service.list_shifts_by_date_range(data["station_id"], data["start_date"], data["end_date"])
    return [shift.to_dict() for shift in shifts]


@router.query("getById", input=shape(id=Field("string", min_length=1)))
def get_shift(ctx, data):
    shift = shift_service.get_shift(data["id"])
    if shift is None:
        raise NotFoundError("Shift not found")
    return shift.to_dict()
