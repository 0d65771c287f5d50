from __future__ import annotations

import re
from dataclasses import dataclass, field as dc_field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from app.time_utils import end_of_day, is_date_only, parse_iso_datetime


# Maximum amount: $9,999,999.99 (999,999,999 cents)
# This prevents database overflow issues and nonsensical amounts
MAX_AMOUNT_CENTS = 999_999_999

# Quantities are stored as Numeric(12, 3)
MAX_QUANTITY = Decimal("999999999.999")
QUANTITY_PLACES = 3

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate email)."""


class NotFoundError(LookupError):
    """404-level missing entity."""


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass(frozen=True)
class Field:
    """
    Declared shape of one input key.

    kind: string | password | email | int | cents | number | bool | datetime | enum | list | string_list
    """
    kind: str
    required: bool = True
    choices: tuple = ()
    min_length: int | None = None
    max_length: int | None = None
    signed: bool = False
    positive: bool = False
    range_end: bool = False
    items: "Shape | None" = None
    min_items: int = 0
    max_value: Decimal | None = None
    max_places: int | None = None


def optional(kind: str, **kwargs) -> Field:
    return Field(kind, required=False, **kwargs)


def _coerce_int(key: str, value: Any) -> int:
    # Already an int (but not bool which is a subclass of int)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    # String input - must be plain digits (with optional leading minus)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{key} must be an integer")
        # Reject scientific notation (e.g., "1e15", "1E10")
        if "e" in stripped.lower():
            raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
        # Reject decimal points (e.g., "12.5")
        if "." in stripped:
            raise ValidationError(f"{key} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    # Reject floats explicitly
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(f"{key} must be an integer, not a decimal")
    raise ValidationError(f"{key} must be an integer")


def _coerce_number(key: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be a number")
    if isinstance(value, (int, float, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{key} must be a number")
        if not number.is_finite():
            raise ValidationError(f"{key} must be a finite number")
        return number
    raise ValidationError(f"{key} must be a number")


def _coerce_datetime(key: str, value: Any, *, range_end: bool) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be an ISO-8601 datetime")
    try:
        dt = parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{key} must be an ISO-8601 datetime")
    if dt is None:
        raise ValidationError(f"{key} must be an ISO-8601 datetime")
    # A bare date as the end of a range covers that whole day
    if range_end and is_date_only(value):
        dt = end_of_day(dt)
    return dt


def _coerce_value(key: str, spec: Field, value: Any):
    kind = spec.kind

    if kind == "password":
        # Kept byte-for-byte; whitespace is part of the secret
        if not isinstance(value, str):
            raise ValidationError(f"{key} must be a string")
        if spec.min_length is not None and len(value) < spec.min_length:
            raise ValidationError(f"{key} must be at least {spec.min_length} characters")
        if spec.max_length is not None and len(value) > spec.max_length:
            raise ValidationError(f"{key} exceeds max length {spec.max_length}")
        return value

    if kind in ("string", "email"):
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise ValidationError(f"{key} must be a string")
        text = str(value).strip()
        if spec.min_length is not None and len(text) < spec.min_length:
            if spec.min_length == 1:
                raise ValidationError(f"{key} cannot be blank")
            raise ValidationError(f"{key} must be at least {spec.min_length} characters")
        if spec.max_length is not None and len(text) > spec.max_length:
            raise ValidationError(f"{key} exceeds max length {spec.max_length}")
        if kind == "email":
            if not _EMAIL.match(text):
                raise ValidationError(f"{key} must be a valid email address")
            text = text.lower()
        return text

    if kind == "int":
        return _coerce_int(key, value)

    if kind == "cents":
        cents = _coerce_int(key, value)
        if not spec.signed and cents < 0:
            raise ValidationError(f"{key} must be >= 0")
        if abs(cents) > MAX_AMOUNT_CENTS:
            raise ValidationError(f"{key} cannot exceed {MAX_AMOUNT_CENTS} (${MAX_AMOUNT_CENTS / 100:,.2f})")
        return cents

    if kind == "number":
        number = _coerce_number(key, value)
        if spec.positive and number <= 0:
            raise ValidationError(f"{key} must be > 0")
        if not spec.positive and number < 0:
            raise ValidationError(f"{key} must be >= 0")
        if spec.max_value is not None and number > spec.max_value:
            raise ValidationError(f"{key} cannot exceed {spec.max_value}")
        if spec.max_places is not None and -number.as_tuple().exponent > spec.max_places:
            raise ValidationError(f"{key} allows at most {spec.max_places} decimal places")
        return number

    if kind == "bool":
        if isinstance(value, bool):
            return value
        raise ValidationError(f"{key} must be a boolean")

    if kind == "datetime":
        return _coerce_datetime(key, value, range_end=spec.range_end)

    if kind == "enum":
        if value not in spec.choices:
            raise ValidationError(f"{key} must be one of: {', '.join(spec.choices)}")
        return value

    if kind == "list":
        if not isinstance(value, list):
            raise ValidationError(f"{key} must be a list")
        if len(value) < spec.min_items:
            raise ValidationError(f"{key} must contain at least {spec.min_items} item(s)")
        if spec.items is None:
            return list(value)
        parsed = []
        for index, item in enumerate(value):
            parsed.append(spec.items.parse(item, prefix=f"{key}[{index}]."))
        return parsed

    if kind == "string_list":
        if not isinstance(value, list) or not all(isinstance(v, str) and v.strip() for v in value):
            raise ValidationError(f"{key} must be a list of strings")
        if len(value) < spec.min_items:
            raise ValidationError(f"{key} must contain at least {spec.min_items} item(s)")
        # Preserve order, drop duplicates
        return list(dict.fromkeys(v.strip() for v in value))

    raise ValidationError(f"{key} has unsupported type {kind}")


@dataclass(frozen=True)
class Shape:
    """
    Declared input shape for an RPC procedure.

    Keys are camelCase on the wire; `parse` returns snake_case keys so the
    result can be passed straight to a service function. Unknown keys are
    dropped. Optional keys that are absent are omitted from the result, so
    partial updates only touch what the caller sent.
    """
    fields: dict[str, Field] = dc_field(default_factory=dict)

    def parse(self, raw: Any, *, prefix: str = "") -> dict:
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValidationError(f"{prefix.rstrip('.') or 'input'} must be an object")

        parsed: dict[str, Any] = {}
        for key, spec in self.fields.items():
            label = f"{prefix}{key}"
            if key not in raw or raw[key] is None:
                if spec.required:
                    raise ValidationError(f"{label} is required")
                if key in raw:
                    parsed[to_snake(key)] = None
                continue
            parsed[to_snake(key)] = _coerce_value(label, spec, raw[key])
        return parsed


def shape(**fields: Field) -> Shape:
    return Shape(fields=fields)


def validate_date_range(start: datetime, end: datetime) -> None:
    if end < start:
        raise ValidationError("endDate must not be before startDate")


class RpcError(Exception):
    """Typed error surfaced to an RPC caller with a coarse code."""

    STATUS = {
        "BAD_REQUEST": 400,
        "UNAUTHORIZED": 401,
        "FORBIDDEN": 403,
        "NOT_FOUND": 404,
        "METHOD_NOT_SUPPORTED": 405,
        "CONFLICT": 409,
        "INTERNAL_SERVER_ERROR": 500,
    }

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def status(self) -> int:
        return self.STATUS.get(self.code, 500)
