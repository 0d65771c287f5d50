# Overview: Employee document upload: decode, store, then record on the employee.

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
import time

from app.extensions import get_datastore
from app.models import Employee
from app.validation import ValidationError
from . import employee_service
from .storage_service import StoredObject, get_storage

_SLUG = re.compile(r"[^a-z0-9_-]+")


def decode_payload(file_data: str) -> bytes:
    """
    Decode a base64 payload. Accepts a bare string or a data URL
    ("data:image/png;base64,....").
    """
    if file_data.startswith("data:") and "," in file_data:
        file_data = file_data.split(",", 1)[1]
    try:
        data = base64.b64decode(file_data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("fileData must be base64 encoded")
    if not data:
        raise ValidationError("fileData is empty")
    return data


def _extension(file_name: str | None, content_type: str | None) -> str:
    if file_name and "." in file_name:
        ext = file_name.rsplit(".", 1)[1].lower()
        ext = _SLUG.sub("", ext)
        if ext:
            return ext
    if content_type:
        guessed = mimetypes.guess_extension(content_type.split(";")[0].strip())
        if guessed:
            return guessed.lstrip(".")
    return "bin"


def storage_key(employee_id: str, document_type: str, *, file_name: str | None, content_type: str | None, now_ms: int | None = None) -> str:
    """employees/<employee id>/<document type>-<unix ms>.<ext>"""
    doc_slug = _SLUG.sub("-", document_type.strip().lower()).strip("-") or "document"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"employees/{employee_id}/{doc_slug}-{stamp}.{_extension(file_name, content_type)}"


def upload_employee_document(
    *,
    employee_id: str,
    document_type: str,
    file_data: str,
    file_name: str | None = None,
    content_type: str | None = None,
) -> tuple[Employee, StoredObject]:
    """
    Store an employee document and record its URL on the employee.

    Returns (employee, stored object).

    The file is written before the employee row is updated; a failed row
    update leaves the stored object in place.
    """
    get_datastore().require()
    employee = employee_service.require_employee(employee_id)
    data = decode_payload(file_data)

    key = storage_key(employee.id, document_type, file_name=file_name, content_type=content_type)
    stored = get_storage().put(key, data, content_type)

    employee = employee_service.attach_document(
        employee,
        document_type=document_type,
        stored=stored,
        content_type=content_type,
    )
    return employee, stored
