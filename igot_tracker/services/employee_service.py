"""
Employee Service.

Business logic for per-employee iGOT training records: office-scoped
visibility, the registration/course-count invariants, the freeze lock,
dashboard aggregation and the date-ranged report.

Functions:
    - list_employees:     Visible records with office reference resolved
    - get_dashboard:      Registration / course totals and completion rate
    - get_report:         Visible records filtered by reportDate range
    - get_employee:       Single record with office + creator resolved
    - create_employee:    Office-scoped create, counts forced to 0 if unregistered
    - update_employee:    Merge + re-validate; blocked while frozen
    - delete_employee:    Blocked while frozen
    - freeze_employee / unfreeze_employee:  Admin-only lock toggle

Reference resolution is an explicit step after the primary read: office
and creator rows are fetched in one query each and joined in Python.
"""

import logging

from sqlalchemy import select

from igot_tracker.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from igot_tracker.models import db
from igot_tracker.models.auth import User
from igot_tracker.models.employee import Employee, utcnow
from igot_tracker.models.office import Office
from igot_tracker.services.office_service import office_exists
from igot_tracker.services.validation import validate_employee
from igot_tracker.utils.helpers import db_commit, is_id_string, parse_datetime, parse_id

logger = logging.getLogger(__name__)

# JSON field → model attribute, for the fields callers may set
EDITABLE_FIELDS: dict[str, str] = {
    "name": "name",
    "officeId": "office_id",
    "isRegisteredOnIGOT": "is_registered_on_igot",
    "coursesEnrolled": "courses_enrolled",
    "coursesCompleted": "courses_completed",
    "reportDate": "report_date",
}


# ── Helpers ───────────────────────────────────────────────────────────────────


def _get_or_404(employee_id) -> Employee:
    employee_id = parse_id(employee_id, "Employee")
    employee = db.session.get(Employee, employee_id)
    if employee is None:
        raise NotFoundError(resource="Employee", resource_id=employee_id)
    return employee


def _normalize_office_id(value):
    """Return ``value`` as an int office id when it looks like one."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and is_id_string(value.strip()):
        return int(value.strip())
    return value


def _normalize_report_date(value):
    """Parse a supplied reportDate, leaving unparseable input for the validator."""
    if value is None or value == "":
        return None
    return parse_datetime(value) or value


def _visible_employees_stmt(caller):
    stmt = select(Employee).order_by(Employee.id)
    if not caller.is_admin:
        stmt = stmt.where(Employee.office_id == caller.office_id)
    return stmt


def _resolve_offices(office_ids) -> dict[int, dict]:
    ids = {i for i in office_ids if i is not None}
    if not ids:
        return {}
    offices = db.session.execute(select(Office).where(Office.id.in_(ids))).scalars()
    return {o.id: o.to_summary() for o in offices}


def _resolve_creators(user_ids) -> dict[int, dict]:
    ids = {i for i in user_ids if i is not None}
    if not ids:
        return {}
    users = db.session.execute(select(User).where(User.id.in_(ids))).scalars()
    return {u.id: {"id": u.id, "name": u.name} for u in users}


def _serialize(employees, with_creator: bool = False) -> list[dict]:
    """Serialize records with their office (and optionally creator) resolved.

    A reference that no longer resolves renders as ``None``.
    """
    offices = _resolve_offices(e.office_id for e in employees)
    creators = _resolve_creators(e.created_by for e in employees) if with_creator else {}
    items = []
    for e in employees:
        item = e.to_dict()
        item["officeId"] = offices.get(e.office_id)
        if with_creator:
            item["createdBy"] = creators.get(e.created_by)
        items.append(item)
    return items


def _check_office_access(caller, employee: Employee, action: str) -> None:
    if not caller.is_admin and not caller.owns_office(employee.office_id):
        raise ForbiddenError(f"Not authorized to {action} this employee")


def _validate(fields: dict, check_office: bool = True) -> None:
    errors = validate_employee(fields)
    if errors:
        raise ValidationError(errors)
    if check_office and not office_exists(fields["office_id"]):
        raise ValidationError("Office not found")


# ── Reads ─────────────────────────────────────────────────────────────────────


def list_employees(caller) -> list[dict]:
    """List visible employee records with ``officeId`` resolved to name/location.

    Args:
        caller: CallerContext; non-admins only see their own office.
    """
    employees = db.session.execute(_visible_employees_stmt(caller)).scalars().all()
    return _serialize(employees)


def summarize(employees) -> dict:
    """Aggregate registration and course counts over a set of records.

    ``completionRate`` is ``100 * completed / enrolled`` rendered with two
    decimals, ``"0.00"`` when nothing is enrolled.
    """
    total = len(employees)
    registered = sum(1 for e in employees if e.is_registered_on_igot)
    enrolled = sum(e.courses_enrolled or 0 for e in employees)
    completed = sum(e.courses_completed or 0 for e in employees)
    rate = (completed / enrolled) * 100 if enrolled > 0 else 0
    return {
        "totalEmployees": total,
        "registeredOnIGOT": registered,
        "notRegisteredOnIGOT": total - registered,
        "totalCoursesEnrolled": enrolled,
        "totalCoursesCompleted": completed,
        "completionRate": f"{rate:.2f}",
    }


def get_dashboard(caller) -> dict:
    """Dashboard summary over the records visible to the caller."""
    employees = db.session.execute(_visible_employees_stmt(caller)).scalars().all()
    return summarize(employees)


def get_report(caller, start_date=None, end_date=None) -> list[dict]:
    """Visible records whose reportDate falls in ``[start_date, end_date]``.

    Each bound is optional. A date-only ``end_date`` covers that whole day.
    Office and creator references are resolved.

    Raises:
        ValidationError: A supplied bound cannot be parsed as a date.
    """
    errors = []
    start = parse_datetime(start_date)
    if start_date and start is None:
        errors.append("startDate is not a valid date")
    end = parse_datetime(end_date, end_of_day=True)
    if end_date and end is None:
        errors.append("endDate is not a valid date")
    if errors:
        raise ValidationError(errors)

    stmt = _visible_employees_stmt(caller)
    if start is not None:
        stmt = stmt.where(Employee.report_date >= start)
    if end is not None:
        stmt = stmt.where(Employee.report_date <= end)
    employees = db.session.execute(stmt).scalars().all()
    return _serialize(employees, with_creator=True)


def get_employee(caller, employee_id) -> dict:
    """Single record with office and creator resolved.

    Raises:
        NotFoundError: No such record (or malformed id).
        ForbiddenError: Non-admin caller outside the record's office.
    """
    employee = _get_or_404(employee_id)
    _check_office_access(caller, employee, "access")
    return _serialize([employee], with_creator=True)[0]


# ── Mutations ─────────────────────────────────────────────────────────────────


def create_employee(caller, data: dict) -> dict:
    """Create an employee record.

    Business rule: when ``isRegisteredOnIGOT`` is not true both course
    counts are stored as 0 whatever the input says. ``reportDate``
    defaults to now.

    Raises:
        ForbiddenError: Non-admin caller creating outside their own office.
        ValidationError: Aggregated field violations, or unknown office.
    """
    office_id = _normalize_office_id(data.get("officeId"))
    if not caller.is_admin and not caller.owns_office(office_id):
        raise ForbiddenError("Not authorized to add employees to this office")

    registered = data.get("isRegisteredOnIGOT", False)
    if registered is None:
        registered = False
    name = data.get("name")
    fields = {
        "name": name.strip() if isinstance(name, str) else name,
        "office_id": office_id,
        "is_registered_on_igot": registered,
        "courses_enrolled": 0,
        "courses_completed": 0,
        "report_date": _normalize_report_date(data.get("reportDate")) or utcnow(),
    }
    if registered is True:
        enrolled = data.get("coursesEnrolled")
        completed = data.get("coursesCompleted")
        fields["courses_enrolled"] = 0 if enrolled is None else enrolled
        fields["courses_completed"] = 0 if completed is None else completed

    _validate(fields)

    employee = Employee(created_by=caller.id, **fields)
    db.session.add(employee)
    db_commit()
    logger.info(
        "Employee created",
        extra={"employee_id": employee.id, "office_id": employee.office_id, "user_id": caller.id},
    )
    return employee.to_dict()


def update_employee(caller, employee_id, data: dict) -> dict:
    """Merge the supplied editable fields into a record and re-validate.

    The freeze check applies to every caller, admins included.

    Raises:
        NotFoundError: No such record.
        ForbiddenError: Record is frozen, caller is outside its office, or a
            non-admin tries to move it to another office.
        ValidationError: Aggregated field violations after the merge.
    """
    employee = _get_or_404(employee_id)
    if employee.is_frozen:
        raise ForbiddenError("This record is frozen and cannot be modified")
    _check_office_access(caller, employee, "update")

    fields = {attr: getattr(employee, attr) for attr in EDITABLE_FIELDS.values()}
    for key, attr in EDITABLE_FIELDS.items():
        if key not in data:
            continue
        value = data[key]
        if attr == "office_id":
            value = _normalize_office_id(value)
        elif attr == "report_date":
            value = _normalize_report_date(value)
        elif attr == "name" and isinstance(value, str):
            value = value.strip()
        fields[attr] = value

    if not caller.is_admin and not caller.owns_office(fields["office_id"]):
        raise ForbiddenError("Not authorized to move employees to this office")

    _validate(fields, check_office=fields["office_id"] != employee.office_id)

    for attr, value in fields.items():
        setattr(employee, attr, value)
    db_commit()
    logger.info(
        "Employee updated",
        extra={"employee_id": employee.id, "office_id": employee.office_id, "user_id": caller.id},
    )
    return employee.to_dict()


def delete_employee(caller, employee_id) -> None:
    """Delete a record.

    Raises:
        NotFoundError: No such record.
        ForbiddenError: Record is frozen or caller is outside its office.
    """
    employee = _get_or_404(employee_id)
    if employee.is_frozen:
        raise ForbiddenError("This record is frozen and cannot be deleted")
    _check_office_access(caller, employee, "delete")

    deleted_id = employee.id
    db.session.delete(employee)
    db_commit()
    logger.info(
        "Employee deleted",
        extra={"employee_id": deleted_id, "user_id": caller.id},
    )


def _set_frozen(caller, employee_id, frozen: bool) -> dict:
    if not caller.is_admin:
        raise ForbiddenError("Not authorized as an admin")
    employee = _get_or_404(employee_id)
    employee.is_frozen = frozen
    employee.updated_at = utcnow()
    db_commit()
    logger.info(
        "Employee %s", "frozen" if frozen else "unfrozen",
        extra={"employee_id": employee.id, "user_id": caller.id},
    )
    return employee.to_dict()


def freeze_employee(caller, employee_id) -> dict:
    """Lock a record against update/delete. Idempotent; admin-only."""
    return _set_frozen(caller, employee_id, True)


def unfreeze_employee(caller, employee_id) -> dict:
    """Release the lock on a record. Idempotent; admin-only."""
    return _set_frozen(caller, employee_id, False)
