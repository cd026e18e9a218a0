"""
Auth Blueprint — JWT authentication endpoints.

  POST /api/v1/auth/login      — Email + password → access token
  POST /api/v1/auth/register   — Admin creates a user account
  GET  /api/v1/auth/me         — Current user profile
"""

import logging

from flask import Blueprint

from igot_tracker.auth import admin_required, current_caller, protect
from igot_tracker.blueprints import json_body
from igot_tracker.services import user_service
from igot_tracker.services.jwt_service import generate_access_token
from igot_tracker.utils.responses import success_response

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Authenticate with email + password.

    Body: { "email": "...", "password": "..." }
    Returns: { success, token, data: user }
    """
    data = json_body()
    user = user_service.authenticate_user(data.get("email"), data.get("password"))
    token = generate_access_token(user.id, user.role, user.office_id)
    logger.info("User logged in", extra={"user_id": user.id})
    return success_response(user.to_dict(), token=token)


@auth_bp.route("/register", methods=["POST"])
@admin_required
def register():
    """
    Create a user account.

    Body: { "name", "email", "password", "role"?: "admin"|"user", "officeId"? }
    """
    user = user_service.create_user(json_body(), caller=current_caller())
    return success_response(user.to_dict(), status=201)


@auth_bp.route("/me", methods=["GET"])
@protect
def me():
    user = user_service.get_user(current_caller().id)
    return success_response(user.to_dict())
