from __future__ import annotations

from ..extensions import db
from app.time_utils import to_utc_z
from .common import new_id


class GasStation(db.Model):
    """A physical station; the scope for employees, shifts, expenses and fuel."""
    __tablename__ = "gas_stations"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.Text, nullable=False)
    address = db.Column(db.Text, nullable=False)
    city = db.Column(db.Text, nullable=False)
    state = db.Column(db.Text, nullable=False)
    zip_code = db.Column(db.String(10), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
            "createdAt": to_utc_z(self.created_at),
        }
