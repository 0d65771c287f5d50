# Overview: Service-layer operations for shifts and closing reports.

"""
Shift Service

A shift opens on "start shift" with end_time NULL and is closed exactly
once by "end shift". One employee cannot hold two open shifts.
Closing reports are one per shift; reviewers move them from pending to
approved or rejected.
"""

from __future__ import annotations

from datetime import datetime

from app.extensions import db, get_datastore
from app.models import Shift, ShiftReport, User
from app.time_utils import as_utc_naive, utcnow
from app.validation import ConflictError, NotFoundError, ValidationError, validate_date_range
from .concurrency import lock_for_update, run_with_retry
from .employee_service import require_active_employee
from .station_service import require_station


def _get_open_shift_for_employee(employee_id: str) -> Shift | None:
    return db.session.query(Shift).filter(Shift.employee_id == employee_id, Shift.end_time.is_(None)).first()


def start_shift(*, station_id: str, employee_id: str, start_time: datetime | None = None) -> Shift:
    get_datastore().require()
    require_station(station_id)
    require_active_employee(employee_id)

    if _get_open_shift_for_employee(employee_id):
        raise ConflictError("Employee already has an open shift")

    shift = Shift(
        station_id=station_id,
        employee_id=employee_id,
        start_time=start_time or utcnow(),
        end_time=None,
        status="open",
    )
    db.session.add(shift)
    db.session.commit()
    return shift


def end_shift(*, shift_id: str, end_time: datetime | None = None) -> Shift:
    get_datastore().require()

    def _op():
        shift = lock_for_update(db.session.query(Shift).filter_by(id=shift_id)).first()
        if not shift:
            raise NotFoundError("Shift not found")
        if shift.end_time is not None:
            raise ConflictError("Shift has already ended")

        ended_at = end_time or utcnow()
        if ended_at < as_utc_naive(shift.start_time):
            raise ValidationError("endTime must not be before startTime")

        shift.end_time = ended_at
        shift.status = "closed"
        db.session.commit()
        return shift

    return run_with_retry(_op)


def get_shift(shift_id: str) -> Shift | None:
    if not get_datastore().ready:
        return None
    return db.session.query(Shift).filter_by(id=shift_id).first()


def list_active_shifts(station_id: str | None = None) -> list[Shift]:
    if not get_datastore().ready:
        return []
    query = db.session.query(Shift).filter(Shift.end_time.is_(None))
    if station_id:
        query = query.filter(Shift.station_id == station_id)
    return query.order_by(Shift.start_time.desc()).all()


def list_shifts_by_date_range(station_id: str, start: datetime, end: datetime) -> list[Shift]:
    validate_date_range(start, end)
    if not get_datastore().ready:
        return []
    return (
        db.session.query(Shift)
        .filter(
            Shift.station_id == station_id,
            Shift.start_time >= start,
            Shift.start_time <= end,
        )
        .order_by(Shift.start_time.desc())
        .all()
    )


# =============================================================================
# CLOSING REPORTS
# =============================================================================

REPORT_AMOUNT_FIELDS = (
    "total_sales_cents",
    "total_tax_cents",
    "cash_amount_cents",
    "credit_amount_cents",
    "debit_amount_cents",
    "mobile_amount_cents",
    "over_short_cents",
    "fuel_sales_cents",
    "grocery_sales_cents",
)


def create_report(*, shift_id: str, station_number: int | None = None, notes: str | None = None, **amounts) -> ShiftReport:
    get_datastore().require()

    missing = [name for name in REPORT_AMOUNT_FIELDS if amounts.get(name) is None]
    if missing:
        raise ValidationError(f"Missing report amounts: {', '.join(missing)}")

    shift = db.session.query(Shift).filter_by(id=shift_id).first()
    if not shift:
        raise NotFoundError("Shift not found")
    if db.session.query(ShiftReport).filter_by(shift_id=shift_id).first():
        raise ConflictError("A closing report already exists for this shift")

    report = ShiftReport(
        shift_id=shift_id,
        station_number=station_number,
        notes=notes,
        status="pending",
        **{name: amounts[name] for name in REPORT_AMOUNT_FIELDS},
    )
    db.session.add(report)
    db.session.commit()
    return report


def list_reports_by_shift(shift_id: str) -> list[ShiftReport]:
    if not get_datastore().ready:
        return []
    return db.session.query(ShiftReport).filter_by(shift_id=shift_id).all()


def update_report_status(*, report_id: str, status: str, reviewer: User | None = None) -> ShiftReport:
    get_datastore().require()

    def _op():
        report = lock_for_update(db.session.query(ShiftReport).filter_by(id=report_id)).first()
        if not report:
            raise NotFoundError("Shift report not found")

        report.status = status
        if status == "pending":
            report.reviewed_by_user_id = None
            report.reviewed_at = None
        else:
            report.reviewed_by_user_id = reviewer.id if reviewer else None
            report.reviewed_at = utcnow()
        db.session.commit()
        return report

    return run_with_retry(_op)


def list_reports_by_date_range(station_id: str, start: datetime, end: datetime) -> list[tuple[ShiftReport, Shift]]:
    """Reports joined with their shift, filtered by the shift's station and start time."""
    validate_date_range(start, end)
    if not get_datastore().ready:
        return []
    return (
        db.session.query(ShiftReport, Shift)
        .join(Shift, ShiftReport.shift_id == Shift.id)
        .filter(
            Shift.station_id == station_id,
            Shift.start_time >= start,
            Shift.start_time <= end,
        )
        .order_by(ShiftReport.created_at.desc())
        .all()
    )
