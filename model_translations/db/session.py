"""
Model Translations Session Management.

The synchronizer runs every write on the caller's session inside
``transaction_scope()``: commit on success, rollback on any exception.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.orm import Session

logger = logging.getLogger("model_translations.db.session")


@contextmanager
def transaction_scope(session: Session) -> Generator[Session, None, None]:
    """
    One all-or-nothing unit of work on an existing session.

    Commits when the block exits normally. On any exception the transaction is
    rolled back and the exception re-raised unchanged. The session stays open.

    Usage:
        with transaction_scope(session):
            session.add(product)
    """
    try:
        yield session
        session.commit()
    except Exception:
        logger.warning("Rolling back translation transaction")
        session.rollback()
        raise
