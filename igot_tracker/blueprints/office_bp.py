"""
Office Blueprint.

Endpoints:
  GET    /api/v1/offices        — list (all for admin, own office otherwise)
  GET    /api/v1/offices/<id>   — single office
  POST   /api/v1/offices        — create (admin)
  PUT    /api/v1/offices/<id>   — update (admin)
  DELETE /api/v1/offices/<id>   — delete (admin)

All business logic lives in office_service; service exceptions are turned
into the response envelope by the app-wide error handlers.
"""

from flask import Blueprint

from igot_tracker.auth import admin_required, current_caller, protect
from igot_tracker.blueprints import json_body
from igot_tracker.services import office_service
from igot_tracker.utils.responses import success_response

office_bp = Blueprint("office", __name__, url_prefix="/api/v1/offices")


@office_bp.route("", methods=["GET"])
@protect
def list_offices():
    items = office_service.list_offices(current_caller())
    return success_response(items, count=len(items))


@office_bp.route("/<office_id>", methods=["GET"])
@protect
def get_office(office_id):
    return success_response(office_service.get_office(current_caller(), office_id))


@office_bp.route("", methods=["POST"])
@admin_required
def create_office():
    """Body: { "name": str, "location": str, "description"?: str }"""
    office = office_service.create_office(current_caller(), json_body())
    return success_response(office, status=201)


@office_bp.route("/<office_id>", methods=["PUT"])
@admin_required
def update_office(office_id):
    office = office_service.update_office(current_caller(), office_id, json_body())
    return success_response(office)


@office_bp.route("/<office_id>", methods=["DELETE"])
@admin_required
def delete_office(office_id):
    office_service.delete_office(current_caller(), office_id)
    return success_response({})
