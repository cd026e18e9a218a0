"""
Employee Blueprint.

Endpoints:
  GET    /api/v1/employees                 — list (office-scoped unless admin)
  GET    /api/v1/employees/dashboard       — summary counts + completion rate
  GET    /api/v1/employees/report          — ?startDate=&endDate= inclusive filter
  GET    /api/v1/employees/<id>            — single record
  POST   /api/v1/employees                 — create (own office unless admin)
  PUT    /api/v1/employees/<id>            — update (blocked while frozen)
  DELETE /api/v1/employees/<id>            — delete (blocked while frozen)
  PUT    /api/v1/employees/freeze/<id>     — freeze (admin)
  PUT    /api/v1/employees/unfreeze/<id>   — unfreeze (admin)
"""

from flask import Blueprint, request

from igot_tracker.auth import admin_required, current_caller, protect
from igot_tracker.blueprints import json_body
from igot_tracker.services import employee_service
from igot_tracker.utils.responses import success_response

employee_bp = Blueprint("employee", __name__, url_prefix="/api/v1/employees")


# ═════════════════════════════════════════════════════════════════════════════
# Reads
# ═════════════════════════════════════════════════════════════════════════════


@employee_bp.route("", methods=["GET"])
@protect
def list_employees():
    items = employee_service.list_employees(current_caller())
    return success_response(items, count=len(items))


@employee_bp.route("/dashboard", methods=["GET"])
@protect
def dashboard():
    return success_response(employee_service.get_dashboard(current_caller()))


@employee_bp.route("/report", methods=["GET"])
@protect
def report():
    """Query params: startDate?, endDate? (YYYY-MM-DD or ISO datetime)"""
    items = employee_service.get_report(
        current_caller(),
        start_date=request.args.get("startDate"),
        end_date=request.args.get("endDate"),
    )
    return success_response(items, count=len(items))


@employee_bp.route("/<employee_id>", methods=["GET"])
@protect
def get_employee(employee_id):
    return success_response(employee_service.get_employee(current_caller(), employee_id))


# ═════════════════════════════════════════════════════════════════════════════
# Mutations
# ═════════════════════════════════════════════════════════════════════════════


@employee_bp.route("", methods=["POST"])
@protect
def create_employee():
    """Body: { "name", "officeId", "isRegisteredOnIGOT"?, "coursesEnrolled"?,
               "coursesCompleted"?, "reportDate"? }
    """
    employee = employee_service.create_employee(current_caller(), json_body())
    return success_response(employee, status=201)


@employee_bp.route("/<employee_id>", methods=["PUT"])
@protect
def update_employee(employee_id):
    employee = employee_service.update_employee(current_caller(), employee_id, json_body())
    return success_response(employee)


@employee_bp.route("/<employee_id>", methods=["DELETE"])
@protect
def delete_employee(employee_id):
    employee_service.delete_employee(current_caller(), employee_id)
    return success_response({})


@employee_bp.route("/freeze/<employee_id>", methods=["PUT"])
@admin_required
def freeze_employee(employee_id):
    employee = employee_service.freeze_employee(current_caller(), employee_id)
    return success_response(employee, message="Employee record has been frozen")


@employee_bp.route("/unfreeze/<employee_id>", methods=["PUT"])
@admin_required
def unfreeze_employee(employee_id):
    employee = employee_service.unfreeze_employee(current_caller(), employee_id)
    return success_response(employee, message="Employee record has been unfrozen")
