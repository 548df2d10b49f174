"""Credential checks for staff sign-in."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from backend.app.core.security import verify_password
from backend.app.models.user import User
from backend.app.services.outcome import INVALID, Outcome

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def authenticate(db: Session, email: str, password: str) -> Outcome:
    """Resolve an email/password pair to an active user; the user is in ``data["user"]``."""
    normalized = (email or "").strip().lower()
    user = db.query(User).filter(func.lower(User.email) == normalized).first()
    # accounts seeded without a password can never sign in
    if user is None or not user.hashed_password:
        logger.warning("Failed login for %s: unknown account", normalized)
        return Outcome.failure(INVALID, INVALID_CREDENTIALS)
    if not verify_password(password, user.hashed_password):
        logger.warning("Failed login for user %s: wrong password", user.id)
        return Outcome.failure(INVALID, INVALID_CREDENTIALS)
    if not user.is_active:
        logger.warning("Rejected login for inactive user %s", user.id)
        return Outcome.failure(INVALID, "User is inactive")
    logger.info("User %s signed in as %s", user.id, user.role.value)
    return Outcome.success("Signed in", user=user)
