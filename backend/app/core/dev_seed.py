import logging
import os

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.models.enums import UserRole
from backend.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_USERS = [
    ("admin@example.com", "Dev Admin", UserRole.ADMIN),
    ("marketing@example.com", "Dev Marketing", UserRole.MARKETING),
    ("sales@example.com", "Dev Sales", UserRole.SALES),
]


def ensure_default_dev_users(db: Session) -> None:
    """
    Create one account per role for local development if they do not exist.
    Skips execution outside development and under pytest.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return

    created = False
    for email, full_name, role in DEFAULT_DEV_USERS:
        if db.query(User).filter(User.email == email).first():
            continue
        db.add(
            User(
                full_name=full_name,
                email=email,
                hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD),
                role=role,
                is_active=True,
            )
        )
        created = True

    if created:
        db.commit()
        logger.info("Seeded default development users")
