"""
IGOT Training Tracker
Caller identity & route protection.

Provides:
    - CallerContext: the authenticated actor {id, role, office_id}, passed
      explicitly into every service call
    - current_caller(): the CallerContext resolved for this request
    - @protect: route requires an authenticated caller (401 otherwise)
    - @admin_required: route requires the admin role (403 otherwise)

The caller is resolved by ``igot_tracker.middleware.jwt_auth`` from the
``Authorization: Bearer <token>`` header and stored on ``g.caller``.

Usage:
    @employee_bp.route("", methods=["GET"])
    @protect
    def list_employees():
        items = employee_service.list_employees(current_caller())
"""

import functools
import logging
from dataclasses import dataclass

from flask import g

from igot_tracker.models.auth import ROLE_ADMIN
from igot_tracker.utils.responses import error_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerContext:
    """Identity of the actor making a request."""

    id: int
    role: str
    office_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def owns_office(self, office_id) -> bool:
        """True when ``office_id`` is this caller's own office."""
        return self.office_id is not None and office_id == self.office_id

    @classmethod
    def from_user(cls, user) -> "CallerContext":
        return cls(id=user.id, role=user.role, office_id=user.office_id)


def current_caller() -> CallerContext | None:
    """Return the caller resolved for the current request, if any."""
    return getattr(g, "caller", None)


def protect(f):
    """Decorator: reject requests without an authenticated caller (401)."""

    @functools.wraps(f)
    def decorated(*args, **kwargs):
        if current_caller() is None:
            if getattr(g, "auth_token_present", False):
                return error_response("Not authorized, token failed", 401)
            return error_response("Not authorized, no token", 401)
        return f(*args, **kwargs)

    return decorated


def admin_required(f):
    """Decorator: reject non-admin callers (403). Implies @protect."""

    @functools.wraps(f)
    @protect
    def decorated(*args, **kwargs):
        caller = current_caller()
        if not caller.is_admin:
            logger.warning(
                "User %s denied: admin role required on %s", caller.id, f.__name__,
            )
            return error_response("Not authorized as an admin", 403)
        return f(*args, **kwargs)

    return decorated
