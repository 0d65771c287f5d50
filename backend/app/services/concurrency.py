# Overview: Transaction scoping, row locking and retry helpers for multi-step writes.

from __future__ import annotations

import time
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from ..extensions import db


def lock_for_update(query):
    """
    Apply row-level locking for critical operations.

    NOTE: SQLite ignores SELECT ... FOR UPDATE, but other DBs will honor it.
    """
    return query.with_for_update()


@contextmanager
def atomic():
    """
    Scope a multi-step write in one transaction.

    Commits when the block exits cleanly; rolls back everything written in
    the block on any exception and re-raises it.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def run_with_retry(func, *, attempts: int = 3, backoff_base: float = 0.1, retry_on_integrity: bool = False):
    """
    Execute a DB operation with retry on concurrency-related failures.

    Retries on OperationalError (deadlocks, locks) and StaleDataError
    (optimistic locking conflicts). With retry_on_integrity, a unique-key
    collision from a concurrent insert is retried too, so the next attempt
    sees the other writer's row.
    """
    retryable = (OperationalError, StaleDataError)
    if retry_on_integrity:
        retryable = retryable + (IntegrityError,)

    last_exc = None
    for attempt in range(attempts):
        try:
            return func()
        except retryable as exc:
            db.session.rollback()
            last_exc = exc
            if attempt >= attempts - 1:
                raise
            time.sleep(backoff_base * (2 ** attempt))
    if last_exc:
        raise last_exc
