"""Transaction helpers for multi-row writes.

Lead mutations always touch at least two tables (the lead row plus a history or
feedback row), so they run inside ``transaction(db)``: either everything is
committed or nothing is.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session) -> Generator[Session, None, None]:
    """Commit on success, roll back and re-raise on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Transaction rolled back")
        raise
