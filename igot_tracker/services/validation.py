"""
Field validation for office and employee records.

Pure functions: they take the prospective field values of a record (after
defaults and merges are applied) and return every violation found, in field
order. Nothing is written and no exception is raised here; the calling
service raises a single ``ValidationError`` with the joined messages.
"""

from datetime import datetime

from igot_tracker.models.employee import NAME_MAX_LENGTH as EMPLOYEE_NAME_MAX
from igot_tracker.models.office import NAME_MAX_LENGTH as OFFICE_NAME_MAX


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_whole_number(value) -> bool:
    # bool is an int subclass; True must not count as 1 course
    return isinstance(value, int) and not isinstance(value, bool)


def validate_office(fields: dict) -> list[str]:
    """Check an office's name/location constraints.

    Args:
        fields: ``name``, ``location`` (and optionally ``description``).

    Returns:
        List of violation messages; empty when the office is valid.
    """
    errors: list[str] = []

    name = fields.get("name")
    if _is_blank(name):
        errors.append("Please add an office name")
    elif not isinstance(name, str):
        errors.append("Office name must be text")
    elif len(name) > OFFICE_NAME_MAX:
        errors.append(f"Name cannot be more than {OFFICE_NAME_MAX} characters")

    location = fields.get("location")
    if _is_blank(location):
        errors.append("Please add a location")
    elif not isinstance(location, str):
        errors.append("Location must be text")

    description = fields.get("description")
    if description is not None and not isinstance(description, str):
        errors.append("Description must be text")

    return errors


def validate_employee(fields: dict) -> list[str]:
    """Check an employee's field and cross-field count constraints.

    Args:
        fields: ``name``, ``office_id``, ``is_registered_on_igot``,
            ``courses_enrolled``, ``courses_completed``, ``report_date``.

    Returns:
        List of violation messages; empty when the record is valid.
    """
    errors: list[str] = []

    name = fields.get("name")
    if _is_blank(name):
        errors.append("Please add employee name")
    elif not isinstance(name, str):
        errors.append("Employee name must be text")
    elif len(name) > EMPLOYEE_NAME_MAX:
        errors.append(f"Name cannot be more than {EMPLOYEE_NAME_MAX} characters")

    if _is_blank(fields.get("office_id")):
        errors.append("Please add office")

    registered = fields.get("is_registered_on_igot")
    if not isinstance(registered, bool):
        errors.append("isRegisteredOnIGOT must be true or false")
        registered = bool(registered)

    enrolled = fields.get("courses_enrolled")
    enrolled_ok = _is_whole_number(enrolled)
    if not enrolled_ok:
        errors.append("Courses enrolled must be a whole number")
    elif not registered and enrolled != 0:
        errors.append("Courses enrolled should be 0 if not registered on iGOT platform")
    elif enrolled < 0:
        errors.append("Courses enrolled cannot be negative")

    completed = fields.get("courses_completed")
    if not _is_whole_number(completed):
        errors.append("Courses completed must be a whole number")
    elif completed < 0:
        errors.append("Courses completed cannot be negative")
    elif enrolled_ok and completed > enrolled:
        errors.append("Courses completed cannot be more than courses enrolled")

    report_date = fields.get("report_date")
    if report_date is None:
        errors.append("Report date is required")
    elif not isinstance(report_date, datetime):
        errors.append("Report date is invalid")

    return errors
