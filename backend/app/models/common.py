from __future__ import annotations

import uuid


def new_id() -> str:
    """Primary keys for domain rows are random UUID strings."""
    return str(uuid.uuid4())


FUEL_GRADES = ("regular", "plus", "premium", "diesel")
