"""
Office Service.

Business logic for office records. Mutations are admin-only; a non-admin
caller only ever sees the single office referenced by their own office_id.

Functions:
    - list_offices:   All offices (admin) or the caller's own office
    - get_office:     Single office, 403 for another office (non-admin)
    - create_office:  Admin-only create, createdBy = caller
    - update_office:  Admin-only merge of name/location/description
    - delete_office:  Admin-only delete, refused while employees reference it
"""

import logging

from sqlalchemy import func, select

from igot_tracker.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from igot_tracker.models import db
from igot_tracker.models.employee import Employee
from igot_tracker.models.office import Office
from igot_tracker.services.validation import validate_office
from igot_tracker.utils.helpers import db_commit, parse_id

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "location", "description")


def _require_admin(caller) -> None:
    if not caller.is_admin:
        raise ForbiddenError("Not authorized as an admin")


def _clean(value):
    return value.strip() if isinstance(value, str) else value


def _get_or_404(office_id) -> Office:
    office_id = parse_id(office_id, "Office")
    office = db.session.get(Office, office_id)
    if office is None:
        raise NotFoundError(resource="Office", resource_id=office_id)
    return office


def office_exists(office_id) -> bool:
    """True when ``office_id`` parses to the id of a stored office."""
    try:
        office_id = parse_id(office_id, "Office")
    except NotFoundError:
        return False
    return db.session.get(Office, office_id) is not None


# ── Reads ─────────────────────────────────────────────────────────────────────


def list_offices(caller) -> list[dict]:
    """List offices visible to the caller, in store order.

    Args:
        caller: CallerContext of the requesting user.

    Returns:
        List of serialized Office dicts.
    """
    stmt = select(Office).order_by(Office.id)
    if not caller.is_admin:
        stmt = stmt.where(Office.id == caller.office_id)
    offices = db.session.execute(stmt).scalars().all()
    return [o.to_dict() for o in offices]


def get_office(caller, office_id) -> dict:
    """Get a single office.

    Raises:
        NotFoundError: No such office (or malformed id).
        ForbiddenError: Non-admin caller asking for another office.
    """
    office = _get_or_404(office_id)
    if not caller.is_admin and not caller.owns_office(office.id):
        raise ForbiddenError("Not authorized to access this office")
    return office.to_dict()


# ── Mutations (admin) ────────────────────────────────────────────────────────


def create_office(caller, data: dict) -> dict:
    """Create an office owned by the calling admin.

    Args:
        caller: CallerContext; must be admin.
        data: ``name`` and ``location`` required, ``description`` optional.

    Returns:
        Serialized created Office dict.

    Raises:
        ForbiddenError: Caller is not an admin.
        ValidationError: Aggregated field violations.
    """
    _require_admin(caller)

    fields = {key: _clean(data.get(key)) for key in EDITABLE_FIELDS}
    errors = validate_office(fields)
    if errors:
        raise ValidationError(errors)

    office = Office(
        name=fields["name"],
        location=fields["location"],
        description=fields["description"] or None,
        created_by=caller.id,
    )
    db.session.add(office)
    db_commit()
    logger.info(
        "Office created",
        extra={"office_id": office.id, "user_id": caller.id},
    )
    return office.to_dict()


def update_office(caller, office_id, data: dict) -> dict:
    """Merge the supplied fields into an office and re-validate.

    Only name/location/description are editable; other keys are ignored.

    Raises:
        ForbiddenError: Caller is not an admin.
        NotFoundError: No such office.
        ValidationError: Aggregated field violations after the merge.
    """
    _require_admin(caller)
    office = _get_or_404(office_id)

    fields = {key: getattr(office, key) for key in EDITABLE_FIELDS}
    for key in EDITABLE_FIELDS:
        if key in data:
            fields[key] = _clean(data[key])

    errors = validate_office(fields)
    if errors:
        raise ValidationError(errors)

    for key, value in fields.items():
        setattr(office, key, value)
    db_commit()
    logger.info(
        "Office updated",
        extra={"office_id": office.id, "user_id": caller.id},
    )
    return office.to_dict()


def delete_office(caller, office_id) -> None:
    """Delete an office that no employee record references.

    Raises:
        ForbiddenError: Caller is not an admin.
        NotFoundError: No such office.
        ConflictError: Employee records still belong to the office.
    """
    _require_admin(caller)
    office = _get_or_404(office_id)

    dependents = db.session.execute(
        select(func.count(Employee.id)).where(Employee.office_id == office.id)
    ).scalar_one()
    if dependents:
        raise ConflictError(
            f"Cannot delete office with {dependents} employee record(s)"
        )

    deleted_id = office.id
    db.session.delete(office)
    db_commit()
    logger.info(
        "Office deleted",
        extra={"office_id": deleted_id, "user_id": caller.id},
    )
