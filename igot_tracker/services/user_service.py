"""
User Service — user creation and credential checks.

Users are the identities behind every CallerContext. Admins see every
office; regular users are bound to one office.
"""

import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select

from igot_tracker.core.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from igot_tracker.models import db
from igot_tracker.models.auth import ROLE_ADMIN, ROLE_USER, ROLES, User
from igot_tracker.services.office_service import office_exists
from igot_tracker.utils.crypto import hash_password, verify_password
from igot_tracker.utils.helpers import db_commit, parse_id

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email) -> tuple[str | None, str | None]:
    """Return ``(normalized_email, error_message)``."""
    if not isinstance(email, str) or not email.strip():
        return None, "Please add an email"
    try:
        valid = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        return None, f"Invalid email: {e}"
    return valid.normalized.lower(), None


def get_user_by_email(email: str) -> User | None:
    """Find a user by (case-insensitive) email."""
    return db.session.execute(
        select(User).where(User.email == email.strip().lower())
    ).scalar_one_or_none()


def get_user(user_id) -> User:
    """Find a user by ID or raise NotFoundError."""
    user_id = parse_id(user_id, "User")
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError(resource="User", resource_id=user_id)
    return user


def create_user(data: dict, caller=None) -> User:
    """Create a user account.

    Args:
        data: ``name``, ``email``, ``password``, ``role`` (default ``user``),
            ``officeId`` (required for non-admin users).
        caller: CallerContext of the creating admin; ``None`` only for the
            bootstrap CLI command.

    Raises:
        ForbiddenError: Caller is not an admin.
        ValidationError: Aggregated field violations.
        ConflictError: Email already registered.
    """
    if caller is not None and not caller.is_admin:
        raise ForbiddenError("Not authorized as an admin")

    errors = []
    name = data.get("name")
    name = name.strip() if isinstance(name, str) else None
    if not name:
        errors.append("Please add a name")
    elif len(name) > 100:
        errors.append("Name cannot be more than 100 characters")

    email, email_error = _normalize_email(data.get("email"))
    if email_error:
        errors.append(email_error)

    password = data.get("password")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    role = data.get("role") or ROLE_USER
    if role not in ROLES:
        errors.append(f"Role must be one of: {', '.join(ROLES)}")

    office_id = data.get("officeId")
    if office_id in (None, ""):
        office_id = None
        if role == ROLE_USER:
            errors.append("Please add office")
    elif not office_exists(office_id):
        errors.append("Office not found")
    else:
        office_id = parse_id(office_id, "Office")

    if errors:
        raise ValidationError(errors)

    if get_user_by_email(email) is not None:
        raise ConflictError(f"User with email {email} already exists")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        office_id=office_id,
    )
    db.session.add(user)
    db_commit()
    logger.info(
        "User created",
        extra={"user_id": user.id, "role": role, "office_id": office_id},
    )
    return user


def create_admin(name: str, email: str, password: str) -> User:
    """Seed an admin account (CLI bootstrap, no caller)."""
    return create_user(
        {"name": name, "email": email, "password": password, "role": ROLE_ADMIN}
    )


def authenticate_user(email, password) -> User:
    """Return the user matching email + password.

    Raises:
        ValidationError: Email or password missing.
        AuthError: No such user or wrong password.
    """
    if not email or not password or not isinstance(email, str):
        raise ValidationError("Please provide an email and password")

    user = get_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt for %s", email.strip().lower())
        raise AuthError("Invalid credentials")
    return user
