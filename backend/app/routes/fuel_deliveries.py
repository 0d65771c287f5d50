# Overview: RPC procedures for fuel deliveries and their line items.

from ..models import FUEL_GRADES
from ..rpc import Router
from ..services import fuel_service
from ..validation import MAX_QUANTITY, QUANTITY_PLACES, Field, NotFoundError, optional, shape


router = Router("fuelDeliveries")

DELIVERY_ITEM = shape(
    fuelGrade=Field("enum", choices=FUEL_GRADES),
    quantity=Field("number", positive=True, max_value=MAX_QUANTITY, max_places=QUANTITY_PLACES),
    pricePerGallon=Field("cents"),
    yellowMark=optional("string", max_length=64),
    redMark=optional("string", max_length=64),
)


@router.mutation(
    "create",
    input=shape(
        stationId=Field("string", min_length=1),
        supplier=optional("string", max_length=255),
        billOfLadingNumber=Field("string", min_length=1, max_length=100),
        deliveryDate=Field("datetime"),
        items=Field("list", items=DELIVERY_ITEM, min_items=1),
    ),
)
def create_delivery(ctx, data):
    """
    Record the delivery header and every item in one transaction.

    Each item's cost is pricePerGallon plus the grade margin; totalCost is
    cost times quantity, both rounded to whole cents.
    """
    delivery = fuel_service.create_delivery(
        station_id=data["station_id"],
        supplier=data.get("supplier"),
        bill_of_lading_number=data["bill_of_lading_number"],
        delivery_date=data["delivery_date"],
        items=data["items"],
    )
    return delivery.to_dict(include_items=True)


@router.query("byStation", input=shape(stationId=Field("string", min_length=1)))
def deliveries_by_station(ctx, data):
    return [delivery.to_dict() for delivery in fuel_service.list_deliveries_by_station(data["station_id"])]


@router.query("items", input=shape(deliveryId=Field("string", min_length=1)))
def delivery_items(ctx, data):
    return [item.to_dict() for item in fuel_service.list_delivery_items(data["delivery_id"])]


@router.query("getById", input=shape(id=Field("string", min_length=1)))
def get_delivery(ctx, data):
    delivery = fuel_service.get_delivery(data["id"])
    if delivery is None:
        raise NotFoundError("Fuel delivery not found")
    return delivery.to_dict(include_items=True)
