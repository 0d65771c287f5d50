from __future__ import annotations

from ..extensions import db
from app.time_utils import to_utc_z
from .common import new_id

EMPLOYEE_ROLES = ("manager", "cashier", "attendant")
PROFILE_PICTURE = "profile_picture"


class Employee(db.Model):
    """
    Station staff (not login accounts).

    Employees are never hard-deleted; is_active is toggled instead.
    Station association is many-to-many through employee_stations.
    """
    __tablename__ = "employees"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    first_name = db.Column(db.Text, nullable=False)
    last_name = db.Column(db.Text, nullable=False)
    email = db.Column(db.String(320), nullable=True, unique=True)
    phone_number = db.Column(db.String(20), nullable=True)
    role = db.Column(db.String(16), nullable=False)
    profile_picture_url = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    station_links = db.relationship(
        "EmployeeStation",
        backref=db.backref("employee", lazy=True),
        lazy=True,
        cascade="all, delete-orphan",
        order_by="EmployeeStation.id",
    )
    documents = db.relationship(
        "EmployeeDocument",
        backref=db.backref("employee", lazy=True),
        lazy=True,
        cascade="all, delete-orphan",
        order_by="EmployeeDocument.id",
    )

    @property
    def station_ids(self) -> list[str]:
        return [link.station_id for link in self.station_links]

    @property
    def latest_id_document(self) -> "EmployeeDocument | None":
        return self.documents[-1] if self.documents else None

    def to_dict(self) -> dict:
        latest = self.latest_id_document
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "role": self.role,
            "profilePictureUrl": self.profile_picture_url,
            "idDocumentUrl": latest.url if latest else None,
            "idDocumentType": latest.document_type if latest else None,
            "idDocuments": [doc.to_dict() for doc in self.documents],
            "stationIds": self.station_ids,
            "isActive": self.is_active,
            "createdAt": to_utc_z(self.created_at),
        }


class EmployeeStation(db.Model):
    """Employee <-> station association."""
    __tablename__ = "employee_stations"
    __table_args__ = (
        db.UniqueConstraint("employee_id", "station_id", name="uq_employee_stations"),
        db.Index("ix_employee_stations_station", "station_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.String(36), db.ForeignKey("employees.id"), nullable=False, index=True)
    station_id = db.Column(db.String(36), db.ForeignKey("gas_stations.id"), nullable=False)

    station = db.relationship("GasStation")


class EmployeeDocument(db.Model):
    """Identity documents uploaded for an employee."""
    __tablename__ = "employee_documents"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.String(36), db.ForeignKey("employees.id"), nullable=False, index=True)
    document_type = db.Column(db.String(50), nullable=False)
    url = db.Column(db.Text, nullable=False)
    storage_key = db.Column(db.Text, nullable=False)
    content_type = db.Column(db.String(255), nullable=True)
    uploaded_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.document_type,
            "url": self.url,
            "contentType": self.content_type,
            "uploadedAt": to_utc_z(self.uploaded_at),
        }
