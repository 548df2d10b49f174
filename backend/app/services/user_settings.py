"""Self-service account settings: display name, email username and password."""

import logging
import re

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash, verify_password
from backend.app.core.transactions import transaction
from backend.app.models.user import User
from backend.app.services.outcome import CONFLICT, INVALID, NOT_FOUND, Outcome

logger = logging.getLogger(__name__)

FULL_NAME_MAX_LENGTH = 25
MIN_PASSWORD_LENGTH = 6
_USERNAME = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


def split_email(email: str) -> tuple[str, str]:
    """``("sara", "@example.com")`` for ``sara@example.com``; the domain keeps its ``@``."""
    at = email.find("@")
    if at <= 0:
        return email, ""
    return email[:at], email[at:]


def get_user_settings(db: Session, user_id: int) -> dict | None:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return None
    username, domain = split_email(user.email)
    return {
        "id": user.id,
        "full_name": user.full_name,
        "email": user.email,
        "username": username,
        "domain": domain,
        "role": user.role,
        "created_at": user.created_at,
    }


def update_full_name(db: Session, user_id: int, full_name: str | None) -> Outcome:
    name = (full_name or "").strip()
    if not name:
        return Outcome.failure(INVALID, "Full name is required")
    if len(name) > FULL_NAME_MAX_LENGTH:
        return Outcome.failure(INVALID, f"Full name must be less than {FULL_NAME_MAX_LENGTH} CH")
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return Outcome.failure(NOT_FOUND, "User not found")
    with transaction(db):
        user.full_name = name
    logger.info("Updated full name for user %s", user_id)
    return Outcome.success("Profile updated successfully", full_name=name)


def update_email_username(db: Session, user_id: int, username: str | None) -> Outcome:
    """Replace the part before ``@``; the domain, which encodes the organisation, is kept."""
    local = (username or "").strip().lower()
    if not _USERNAME.match(local):
        return Outcome.failure(INVALID, "Username may only contain letters, digits, dots, dashes and underscores")
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return Outcome.failure(NOT_FOUND, "User not found")
    _, domain = split_email(user.email)
    if not domain:
        return Outcome.failure(INVALID, "Current email has no domain")

    new_email = f"{local}{domain}"
    if db.query(User.id).filter(User.email == new_email, User.id != user_id).first() is not None:
        logger.warning("Email %s already exists for another user", new_email)
        return Outcome.failure(CONFLICT, "This email is already in use")
    with transaction(db):
        user.email = new_email
    logger.info("Updated email username for user %s", user_id)
    return Outcome.success("Email updated successfully", email=new_email)


def update_password(db: Session, user_id: int, current_password: str, new_password: str) -> Outcome:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return Outcome.failure(NOT_FOUND, "User not found")
    if not user.hashed_password or not verify_password(current_password, user.hashed_password):
        logger.warning("Invalid current password for user %s", user_id)
        return Outcome.failure(INVALID, "Current password is incorrect")
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        return Outcome.failure(INVALID, f"New password must be at least {MIN_PASSWORD_LENGTH} characters")
    with transaction(db):
        user.hashed_password = get_password_hash(new_password)
    logger.info("Updated password for user %s", user_id)
    return Outcome.success("Password updated successfully")
