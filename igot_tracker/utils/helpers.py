"""Shared parsing helpers used by services and blueprints.

parse_id:        path segment → int, NotFoundError on malformed ids
parse_datetime:  ISO date / datetime input → naive UTC datetime
db_commit:       commit or roll back and re-raise
"""
import logging
from datetime import date, datetime, time, timezone

from igot_tracker.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Largest value a BIGINT / SQLite INTEGER primary key can hold
MAX_ID = 2**63 - 1


def is_id_string(value) -> bool:
    """True for a plain run of ASCII digits (no sign, spaces or underscores)."""
    return isinstance(value, str) and value.isascii() and value.isdigit()


def parse_id(value, resource: str) -> int:
    """Convert a raw id to an int, treating malformed ids as missing records.

    Only positive ints and plain digit strings within the primary key range
    are ids; anything else raises NotFoundError.

    Usage::

        employee_id = parse_id(raw_id, "Employee")
    """
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif is_id_string(value):
        parsed = int(value)
    else:
        raise NotFoundError(resource=resource, resource_id=value)
    if not 0 < parsed <= MAX_ID:
        raise NotFoundError(resource=resource, resource_id=value)
    return parsed


def to_naive_utc(value: datetime) -> datetime:
    """Normalise a datetime to naive UTC (the stored representation)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_datetime(value, end_of_day: bool = False):
    """Parse a date or datetime input to a naive UTC datetime.

    Returns None for empty/unparseable input, and for offset datetimes
    that fall outside the representable range once shifted to UTC.
    Supports:
    - datetime / date objects
    - YYYY-MM-DD (midnight, or the last instant of the day with ``end_of_day``)
    - YYYY-MM-DDTHH:MM:SS[.ffffff][+HH:MM|Z]
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _utc_or_none(value)
    if isinstance(value, date):
        return _day_bound(value, end_of_day)
    if not isinstance(value, str):
        return None

    raw = value.strip()
    try:
        return _day_bound(date.fromisoformat(raw), end_of_day)
    except ValueError:
        pass
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    return _utc_or_none(parsed)


def _utc_or_none(value: datetime):
    try:
        return to_naive_utc(value)
    except OverflowError:
        return None


def _day_bound(day: date, end_of_day: bool) -> datetime:
    return datetime.combine(day, time.max if end_of_day else time.min)


# ── Database commit helper ───────────────────────────────────────────────────

def db_commit():
    """Commit the current SQLAlchemy session, rolling back on failure.

    The original exception propagates so the app-wide handler can answer
    with the generic 500 envelope.
    """
    from sqlalchemy.exc import SQLAlchemyError

    from igot_tracker.models import db

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Database error on commit")
        raise
