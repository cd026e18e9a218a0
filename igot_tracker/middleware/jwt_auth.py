"""
JWT Auth Middleware — resolves the request's caller identity.

Parses ``Authorization: Bearer <token>``, loads the user the token was issued
to and stores ``g.caller`` (a CallerContext). Role and office are read from
the user record, not the token, so role/office changes apply immediately.

The middleware never rejects a request itself; routes decorated with
``@protect`` / ``@admin_required`` decide what a missing caller means.
"""

import logging

import jwt as pyjwt
from flask import g, request

from igot_tracker.auth import CallerContext
from igot_tracker.core.exceptions import NotFoundError
from igot_tracker.models import db
from igot_tracker.models.auth import User
from igot_tracker.services.jwt_service import decode_access_token
from igot_tracker.utils.helpers import parse_id

logger = logging.getLogger(__name__)

# Paths that skip JWT auth entirely
JWT_SKIP_PREFIXES = (
    "/api/v1/auth/login",
    "/api/v1/health",
)


def init_jwt_middleware(app):
    """Register JWT middleware as a before_request hook."""

    @app.before_request
    def _jwt_auth():
        g.caller = None
        g.auth_token_present = False

        path = request.path
        if not path.startswith("/api/v1/"):
            return
        for prefix in JWT_SKIP_PREFIXES:
            if path.startswith(prefix):
                return

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return

        g.auth_token_present = True
        token = auth_header[7:]  # Strip "Bearer "

        try:
            payload = decode_access_token(token)
            user_id = parse_id(payload.get("sub"), "User")
        except pyjwt.ExpiredSignatureError:
            logger.info("Expired token on %s", path)
            return
        except (pyjwt.InvalidTokenError, NotFoundError):
            logger.info("Invalid token on %s", path)
            return

        user = db.session.get(User, user_id)
        if user is None:
            logger.info("Token subject %s no longer exists", user_id)
            return
        g.caller = CallerContext.from_user(user)
