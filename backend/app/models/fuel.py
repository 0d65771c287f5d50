from __future__ import annotations

from ..extensions import db
from app.time_utils import to_utc_z
from .common import new_id


def _quantity(value) -> float | None:
    return float(value) if value is not None else None


class FuelDelivery(db.Model):
    """
    Fuel delivery header (bill of lading).

    Owns 1..N FuelDeliveryItem rows, written in the same transaction.
    """
    __tablename__ = "fuel_deliveries"
    __table_args__ = (
        db.Index("ix_fuel_deliveries_station_date", "station_id", "delivery_date"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    station_id = db.Column(db.String(36), db.ForeignKey("gas_stations.id"), nullable=False)
    supplier = db.Column(db.Text, nullable=True)
    bill_of_lading_number = db.Column(db.String(100), nullable=False)
    delivery_date = db.Column(db.DateTime(timezone=True), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    items = db.relationship(
        "FuelDeliveryItem",
        backref=db.backref("delivery", lazy=True),
        lazy=True,
        cascade="all, delete-orphan",
        order_by="FuelDeliveryItem.id",
    )

    def to_dict(self, include_items: bool = False) -> dict:
        data = {
            "id": self.id,
            "stationId": self.station_id,
            "supplier": self.supplier,
            "billOfLadingNumber": self.bill_of_lading_number,
            "deliveryDate": to_utc_z(self.delivery_date),
            "createdAt": to_utc_z(self.created_at),
        }
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
            data["totalCost"] = sum(item.total_cost_cents for item in self.items)
        return data


class FuelDeliveryItem(db.Model):
    """
    One fuel grade on a delivery.

    cost_cents and total_cost_cents are computed once at creation and
    never re-derived.
    """
    __tablename__ = "fuel_delivery_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    delivery_id = db.Column(db.String(36), db.ForeignKey("fuel_deliveries.id"), nullable=False, index=True)
    fuel_grade = db.Column(db.String(16), nullable=False)
    quantity = db.Column(db.Numeric(12, 3), nullable=False)
    price_per_gallon_cents = db.Column(db.Integer, nullable=False)
    cost_cents = db.Column(db.Integer, nullable=False)
    total_cost_cents = db.Column(db.Integer, nullable=False)

    # Inspection marks recorded on the bill
    yellow_mark = db.Column(db.String(64), nullable=True)
    red_mark = db.Column(db.String(64), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "deliveryId": self.delivery_id,
            "fuelGrade": self.fuel_grade,
            "quantity": _quantity(self.quantity),
            "pricePerGallon": self.price_per_gallon_cents,
            "cost": self.cost_cents,
            "totalCost": self.total_cost_cents,
            "yellowMark": self.yellow_mark,
            "redMark": self.red_mark,
        }


class FuelInventory(db.Model):
    """Current gallons on hand per (station, grade). One row per key."""
    __tablename__ = "fuel_inventory"
    __table_args__ = (
        db.UniqueConstraint("station_id", "fuel_grade", name="uq_fuel_inventory_station_grade"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    station_id = db.Column(db.String(36), db.ForeignKey("gas_stations.id"), nullable=False, index=True)
    fuel_grade = db.Column(db.String(16), nullable=False)
    quantity = db.Column(db.Numeric(12, 3), nullable=False)
    last_updated = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stationId": self.station_id,
            "fuelGrade": self.fuel_grade,
            "quantity": _quantity(self.quantity),
            "lastUpdated": to_utc_z(self.last_updated),
        }
