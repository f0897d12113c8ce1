# /eduguide/services/user_service.py

import logging
import uuid
from typing import Optional

from .database_service import DatabaseService
from ..core import security
from ..core.config import Settings
from ..models.user_model import Role, UserCreate

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    """
    The one canonical form of an email address: surrounding whitespace removed
    and lower-cased. Used both when users are stored and when the CSV import
    resolves a teacher, so the two always agree.
    """
    return (email or "").strip().lower()


def create_user(db: DatabaseService, user: UserCreate):
    """
    Registers a new user. Raises `ValueError` if the email is already taken.
    """
    email = normalize_email(user.email)
    if db.get_user_by_email(email):
        raise ValueError(f"A user with email {email} already exists.")

    record = {
        "id": f"usr_{uuid.uuid4().hex[:12]}",
        "name": user.name.strip(),
        "email": email,
        "hashed_password": security.hash_password(user.password),
        "role": user.role.value,
    }
    new_user = db.add_user(record)
    logger.info("Registered %s user %s", new_user.role, new_user.id)
    return new_user


def seed_admin(db: DatabaseService, settings: Settings):
    """
    Creates the configured administrator if it does not exist yet. Returns the
    new user, or None when nothing was created.
    """
    if not settings.admin_email or not settings.admin_password:
        return None
    if db.get_user_by_email(normalize_email(settings.admin_email)):
        return None
    return create_user(db, UserCreate(
        name="Administrator",
        email=settings.admin_email,
        password=settings.admin_password,
        role=Role.ADMIN,
    ))


def authenticate_user(db: DatabaseService, email: str, password: str):
    """Returns the user when the credentials match, otherwise None."""
    user = db.get_user_by_email(normalize_email(email))
    if not user or not security.verify_password(password, user.hashed_password):
        return None
    return user
