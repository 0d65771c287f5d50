# Overview: Service-layer operations for fuel deliveries and fuel inventory.

"""
Fuel Service

Delivery item cost is the supplied price per gallon plus a fixed margin,
one for diesel and one for every other grade, rounded half-up to whole
cents; total cost is cost times quantity, rounded the same way. Both are
computed once when the delivery is recorded.

A delivery header and its items are written in one transaction. Inventory
is one row per (station, grade): updated in place when present, inserted
otherwise, under a row lock and the table's unique key.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from app.extensions import db, get_datastore
from app.models import FuelDelivery, FuelDeliveryItem, FuelInventory
from app.time_utils import utcnow
from app.validation import MAX_AMOUNT_CENTS, ValidationError
from .concurrency import atomic, lock_for_update, run_with_retry
from .station_service import require_station


# Per-gallon margins in cents (0.660965 and 0.618346 dollars)
DIESEL_MARGIN_CENTS = Decimal("66.0965")
STANDARD_MARGIN_CENTS = Decimal("61.8346")

_WHOLE_CENT = Decimal("1")


def margin_for_grade(fuel_grade: str) -> Decimal:
    return DIESEL_MARGIN_CENTS if fuel_grade == "diesel" else STANDARD_MARGIN_CENTS


def compute_item_cost(fuel_grade: str, price_per_gallon_cents: int, quantity) -> tuple[int, int]:
    """Return (cost_cents, total_cost_cents) for one delivery line."""
    cost = (Decimal(price_per_gallon_cents) + margin_for_grade(fuel_grade)).quantize(_WHOLE_CENT, rounding=ROUND_HALF_UP)
    total = (cost * Decimal(str(quantity))).quantize(_WHOLE_CENT, rounding=ROUND_HALF_UP)
    if total > MAX_AMOUNT_CENTS:
        raise ValidationError(f"Line total cannot exceed {MAX_AMOUNT_CENTS} cents")
    return int(cost), int(total)


def create_delivery(
    *,
    station_id: str,
    bill_of_lading_number: str,
    delivery_date: datetime,
    items: list[dict],
    supplier: str | None = None,
) -> FuelDelivery:
    """
    Record a delivery with its items.

    Each item dict carries fuel_grade, quantity, price_per_gallon and the
    optional yellow_mark / red_mark. Nothing is kept if any row fails.
    """
    get_datastore().require()
    if not items:
        raise ValidationError("At least one delivery item is required")
    require_station(station_id)

    with atomic():
        delivery = FuelDelivery(
            station_id=station_id,
            supplier=supplier,
            bill_of_lading_number=bill_of_lading_number,
            delivery_date=delivery_date,
        )
        db.session.add(delivery)
        db.session.flush()

        for item in items:
            cost, total = compute_item_cost(item["fuel_grade"], item["price_per_gallon"], item["quantity"])
            db.session.add(FuelDeliveryItem(
                delivery_id=delivery.id,
                fuel_grade=item["fuel_grade"],
                quantity=item["quantity"],
                price_per_gallon_cents=item["price_per_gallon"],
                cost_cents=cost,
                total_cost_cents=total,
                yellow_mark=item.get("yellow_mark"),
                red_mark=item.get("red_mark"),
            ))
            db.session.flush()

    return delivery


def get_delivery(delivery_id: str) -> FuelDelivery | None:
    if not get_datastore().ready:
        return None
    return db.session.query(FuelDelivery).filter_by(id=delivery_id).first()


def list_deliveries_by_station(station_id: str) -> list[FuelDelivery]:
    if not get_datastore().ready:
        return []
    return (
        db.session.query(FuelDelivery)
        .filter_by(station_id=station_id)
        .order_by(FuelDelivery.delivery_date.desc())
        .all()
    )


def list_delivery_items(delivery_id: str) -> list[FuelDeliveryItem]:
    if not get_datastore().ready:
        return []
    return (
        db.session.query(FuelDeliveryItem)
        .filter_by(delivery_id=delivery_id)
        .order_by(FuelDeliveryItem.id.asc())
        .all()
    )


def set_inventory(*, station_id: str, fuel_grade: str, quantity) -> FuelInventory:
    """
    Upsert the on-hand quantity for (station, grade).

    A concurrent insert for the same key trips the unique constraint; the
    retry then finds that row and updates it, so the key keeps one row.
    """
    get_datastore().require()
    require_station(station_id)

    def _op():
        row = lock_for_update(
            db.session.query(FuelInventory).filter_by(station_id=station_id, fuel_grade=fuel_grade)
        ).first()
        if row:
            row.quantity = quantity
            row.last_updated = utcnow()
        else:
            row = FuelInventory(
                station_id=station_id,
                fuel_grade=fuel_grade,
                quantity=quantity,
                last_updated=utcnow(),
            )
            db.session.add(row)
        db.session.commit()
        return row

    return run_with_retry(_op, attempts=5, retry_on_integrity=True)


def list_inventory_by_station(station_id: str) -> list[FuelInventory]:
    if not get_datastore().ready:
        return []
    return (
        db.session.query(FuelInventory)
        .filter_by(station_id=station_id)
        .order_by(FuelInventory.fuel_grade.asc())
        .all()
    )
