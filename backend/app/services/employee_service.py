# Overview: Service-layer operations for employees; encapsulates business logic and database work.

from __future__ import annotations

from flask import current_app

from app.extensions import db, get_datastore
from app.models import Employee, EmployeeDocument, EmployeeStation, GasStation
from app.models.staff import PROFILE_PICTURE
from app.time_utils import utcnow
from app.validation import ConflictError, NotFoundError, ValidationError
from .concurrency import atomic
from .storage_service import StoredObject


def _check_stations(station_ids: list[str]) -> None:
    if not station_ids:
        return
    found = {
        row.id for row in db.session.query(GasStation.id).filter(GasStation.id.in_(station_ids)).all()
    }
    missing = [sid for sid in station_ids if sid not in found]
    if missing:
        raise NotFoundError(f"Gas station not found: {', '.join(missing)}")


def _check_email_free(email: str | None, *, exclude_id: str | None = None) -> None:
    if not email:
        return
    query = db.session.query(Employee).filter(Employee.email == email)
    if exclude_id:
        query = query.filter(Employee.id != exclude_id)
    if query.first():
        raise ConflictError("An employee with this email already exists")


def create_employee(
    *,
    first_name: str,
    last_name: str,
    role: str,
    station_ids: list[str],
    email: str | None = None,
    phone_number: str | None = None,
) -> Employee:
    get_datastore().require()

    with atomic():
        _check_stations(station_ids)
        _check_email_free(email)

        employee = Employee(
            first_name=first_name,
            last_name=last_name,
            role=role,
            email=email,
            phone_number=phone_number,
            is_active=True,
        )
        employee.station_links = [EmployeeStation(station_id=sid) for sid in station_ids]
        db.session.add(employee)

    return employee


def update_employee(employee_id: str, **changes) -> Employee:
    """
    Partial update. Only keys present in `changes` are touched;
    `station_ids` replaces the whole association.
    """
    get_datastore().require()

    with atomic():
        employee = db.session.query(Employee).filter_by(id=employee_id).first()
        if not employee:
            raise NotFoundError("Employee not found")

        for key in ("first_name", "last_name", "role"):
            if changes.get(key) is not None:
                setattr(employee, key, changes[key])

        if "email" in changes:
            _check_email_free(changes["email"], exclude_id=employee.id)
            employee.email = changes["email"]
        if "phone_number" in changes:
            employee.phone_number = changes["phone_number"]
        if changes.get("is_active") is not None:
            employee.is_active = changes["is_active"]

        if changes.get("station_ids") is not None:
            station_ids = changes["station_ids"]
            _check_stations(station_ids)
            current = {link.station_id: link for link in employee.station_links}
            employee.station_links = [
                current.get(sid) or EmployeeStation(station_id=sid) for sid in station_ids
            ]

    return employee


def get_employee(employee_id: str) -> Employee | None:
    if not get_datastore().ready:
        return None
    return db.session.query(Employee).filter_by(id=employee_id).first()


def list_employees() -> list[Employee]:
    if not get_datastore().ready:
        return []
    return db.session.query(Employee).order_by(Employee.created_at.desc(), Employee.last_name.asc()).all()


def list_employees_by_station(station_id: str) -> list[Employee]:
    if not get_datastore().ready:
        return []
    return (
        db.session.query(Employee)
        .join(EmployeeStation, EmployeeStation.employee_id == Employee.id)
        .filter(EmployeeStation.station_id == station_id)
        .order_by(Employee.last_name.asc(), Employee.first_name.asc())
        .all()
    )


def attach_document(employee: Employee, *, document_type: str, stored: StoredObject, content_type: str | None) -> Employee:
    """
    Record an uploaded file on the employee.

    profile_picture uploads replace profilePictureUrl; any other type is
    appended to the employee's id documents.
    """
    get_datastore().require()

    with atomic():
        if document_type == PROFILE_PICTURE:
            employee.profile_picture_url = stored.url
        else:
            db.session.add(EmployeeDocument(
                employee_id=employee.id,
                document_type=document_type,
                url=stored.url,
                storage_key=stored.key,
                content_type=content_type,
                uploaded_at=utcnow(),
            ))

    db.session.refresh(employee)
    current_app.logger.info("Stored %s for employee %s at %s", document_type, employee.id, stored.key)
    return employee


def require_employee(employee_id: str) -> Employee:
    employee = get_employee(employee_id)
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def require_active_employee(employee_id: str) -> Employee:
    employee = require_employee(employee_id)
    if not employee.is_active:
        raise ValidationError("Employee is not active")
    return employee
