from __future__ import annotations

from ..extensions import db
from app.time_utils import to_utc_z
from .common import new_id

TRANSACTION_TYPES = ("fuel_sale", "store_sale", "expense", "fuel_delivery", "other")
EXPENSE_CATEGORIES = ("payroll", "utilities", "maintenance", "supplies", "rent", "insurance", "taxes", "other")


class Transaction(db.Model):
    """Recorded money movement at a station. Immutable once created."""
    __tablename__ = "transactions"
    __table_args__ = (
        db.Index("ix_transactions_station_date", "station_id", "transaction_date"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    station_id = db.Column(db.String(36), db.ForeignKey("gas_stations.id"), nullable=False)
    shift_report_id = db.Column(db.String(36), db.ForeignKey("shift_reports.id"), nullable=True, index=True)
    type = db.Column(db.String(32), nullable=False)
    amount_cents = db.Column(db.Integer, nullable=False)
    description = db.Column(db.Text, nullable=True)
    transaction_date = db.Column(db.DateTime(timezone=True), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stationId": self.station_id,
            "shiftReportId": self.shift_report_id,
            "type": self.type,
            "amount": self.amount_cents,
            "description": self.description,
            "transactionDate": to_utc_z(self.transaction_date),
            "createdAt": to_utc_z(self.created_at),
        }


class Expense(db.Model):
    """Station expense. Immutable once created."""
    __tablename__ = "expenses"
    __table_args__ = (
        db.Index("ix_expenses_station_date", "station_id", "expense_date"),
        db.Index("ix_expenses_station_category", "station_id", "category"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    station_id = db.Column(db.String(36), db.ForeignKey("gas_stations.id"), nullable=False)
    category = db.Column(db.String(32), nullable=False)
    amount_cents = db.Column(db.Integer, nullable=False)
    description = db.Column(db.Text, nullable=True)
    expense_date = db.Column(db.DateTime(timezone=True), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stationId": self.station_id,
            "category": self.category,
            "amount": self.amount_cents,
            "description": self.description,
            "expenseDate": to_utc_z(self.expense_date),
            "createdAt": to_utc_z(self.created_at),
        }
