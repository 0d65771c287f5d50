# Overview: RPC procedures for gas station records.

from ..rpc import Router
from ..services import station_service
from ..validation import Field, NotFoundError, optional, shape


router = Router("gasStations")


@router.query("list")
def list_stations(ctx, data):
    return [station.to_dict() for station in station_service.list_stations()]


@router.query("getById", input=shape(id=Field("string", min_length=1)))
def get_station(ctx, data):
    station = station_service.get_station(data["id"])
    if station is None:
        raise NotFoundError("Gas station not found")
    return station.to_dict()


@router.mutation(
    "create",
    input=shape(
        name=Field("string", min_length=1, max_length=255),
        address=Field("string", min_length=1, max_length=500),
        city=Field("string", min_length=1, max_length=100),
        state=Field("string", min_length=1, max_length=50),
        zipCode=Field("string", min_length=1, max_length=20),
    ),
)
def create_station(ctx, data):
    return station_service.create_station(**data).to_dict()


@router.mutation(
    "update",
    input=shape(
        id=Field("string", min_length=1),
        name=optional("string", min_length=1, max_length=255),
        address=optional("string", min_length=1, max_length=500),
        city=optional("string", min_length=1, max_length=100),
        state=optional("string", min_length=1, max_length=50),
        zipCode=optional("string", min_length=1, max_length=20),
    ),
)
def update_station(ctx, data):
    station_id = data.pop("id")
    return station_service.update_station(station_id, **data).to_dict()
