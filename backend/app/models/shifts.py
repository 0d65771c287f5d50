from __future__ import annotations

from ..extensions import db
from app.time_utils import to_utc_z
from .common import new_id

SHIFT_STATUSES = ("open", "closed")
REPORT_STATUSES = ("pending", "approved", "rejected")


class Shift(db.Model):
    """
    A work period for one employee at one station.

    LIFECYCLE:
    - open: created by "start shift", end_time is NULL
    - closed: end_time set once by "end shift"

    A shift is active iff end_time is NULL.
    """
    __tablename__ = "shifts"
    __table_args__ = (
        db.Index("ix_shifts_station_start", "station_id", "start_time"),
        db.Index("ix_shifts_employee_status", "employee_id", "status"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    station_id = db.Column(db.String(36), db.ForeignKey("gas_stations.id"), nullable=False, index=True)
    employee_id = db.Column(db.String(36), db.ForeignKey("employees.id"), nullable=False, index=True)

    start_time = db.Column(db.DateTime(timezone=True), nullable=False)
    end_time = db.Column(db.DateTime(timezone=True), nullable=True)
    status = db.Column(db.String(16), nullable=False, default="open")

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    station = db.relationship("GasStation", backref=db.backref("shifts", lazy=True))
    employee = db.relationship("Employee", backref=db.backref("shifts", lazy=True))

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stationId": self.station_id,
            "employeeId": self.employee_id,
            "startTime": to_utc_z(self.start_time),
            "endTime": to_utc_z(self.end_time) if self.end_time else None,
            "status": self.status,
            "createdAt": to_utc_z(self.created_at),
        }


class ShiftReport(db.Model):
    """
    End-of-shift closing report: sales, tax and payment-method totals.

    All amounts are integer cents. over_short_cents may be negative.
    One report per shift.
    """
    __tablename__ = "shift_reports"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    shift_id = db.Column(db.String(36), db.ForeignKey("shifts.id"), nullable=False, unique=True)

    station_number = db.Column(db.Integer, nullable=True)

    total_sales_cents = db.Column(db.Integer, nullable=False)
    total_tax_cents = db.Column(db.Integer, nullable=False)
    cash_amount_cents = db.Column(db.Integer, nullable=False)
    credit_amount_cents = db.Column(db.Integer, nullable=False)
    debit_amount_cents = db.Column(db.Integer, nullable=False)
    mobile_amount_cents = db.Column(db.Integer, nullable=False)
    over_short_cents = db.Column(db.Integer, nullable=False)
    fuel_sales_cents = db.Column(db.Integer, nullable=False)
    grocery_sales_cents = db.Column(db.Integer, nullable=False)

    notes = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(16), nullable=False, default="pending", index=True)

    reviewed_by_user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=True)
    reviewed_at = db.Column(db.DateTime(timezone=True), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    shift = db.relationship("Shift", backref=db.backref("report", uselist=False, lazy=True))
    reviewed_by = db.relationship("User")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "shiftId": self.shift_id,
            "stationNumber": self.station_number,
            "totalSales": self.total_sales_cents,
            "totalTax": self.total_tax_cents,
            "cashAmount": self.cash_amount_cents,
            "creditAmount": self.credit_amount_cents,
            "debitAmount": self.debit_amount_cents,
            "mobileAmount": self.mobile_amount_cents,
            "overShortAmount": self.over_short_cents,
            "fuelSales": self.fuel_sales_cents,
            "grocerySales": self.grocery_sales_cents,
            "notes": self.notes,
            "status": self.status,
            "reviewedByUserId": self.reviewed_by_user_id,
            "reviewedAt": to_utc_z(self.reviewed_at) if self.reviewed_at else None,
            "createdAt": to_utc_z(self.created_at),
        }
