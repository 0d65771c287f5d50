# Overview: RPC procedures for on-hand fuel inventory.

from ..models import FUEL_GRADES
from ..rpc import Router
from ..services import fuel_service
from ..validation import MAX_QUANTITY, QUANTITY_PLACES, Field, shape


router = Router("fuelInventory")


@router.mutation(
    "update",
    input=shape(
        stationId=Field("string", min_length=1),
        fuelGrade=Field("enum", choices=FUEL_GRADES),
        quantity=Field("number", max_value=MAX_QUANTITY, max_places=QUANTITY_PLACES),
    ),
)
def update_inventory(ctx, data):
    """Set the quantity for (station, grade); the key never holds more than one row."""
    return fuel_service.set_inventory(**data).to_dict()


@router.query("byStation", input=shape(stationId=Field("string", min_length=1)))
def inventory_by_station(ctx, data):
    return [row.to_dict() for row in fuel_service.list_inventory_by_station(data["station_id"])]
