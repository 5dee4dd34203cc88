# Overview: Transaction helpers for concurrent writers; retry and conflict translation.

from __future__ import annotations

import time

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..validation import ConflictError


def run_with_retry(
    func,
    *,
    retry_on: tuple,
    attempts: int = 3,
    backoff_base: float = 0.1,
):
    """
    Execute a DB operation, retrying when it raises one of retry_on.

    The session is rolled back before every retry so func() starts from a
    clean transaction. The last failure is re-raised once attempts run out.
    """
    last_exc = None
    for attempt in range(attempts):
        try:
            return func()
        except retry_on as exc:
            db.session.rollback()
            last_exc = exc
            if attempt >= attempts - 1:
                raise
            time.sleep(backoff_base * (2 ** attempt))
    if last_exc:
        raise last_exc


def commit_or_conflict(message: str) -> None:
    """
    Commit the current session, translating a unique-constraint violation
    into ConflictError.

    Two writers can both pass the duplicate pre-check; the database
    constraint decides and the loser gets the same error as a pre-check hit.
    """
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(message)
