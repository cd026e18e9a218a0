"""
Service-layer exception hierarchy.

Services raise these; the handlers registered in ``igot_tracker.create_app``
turn them into the ``{"success": false, "message": ...}`` envelope with the
matching HTTP status.

Usage:
    from igot_tracker.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Employee", resource_id=42)
    raise ValidationError(["Please add employee name", "Please add office"])
"""


class NotFoundError(Exception):
    """Raised when a requested record does not exist (or the id is malformed).

    Maps to HTTP 404.

    Args:
        resource: Human-readable entity name (e.g. "Office", "Employee").
        resource_id: The id that was looked up. Logged, not returned.
    """

    status_code = 404

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class ValidationError(Exception):
    """Raised when input violates one or more field constraints.

    All violations found in a single pass are carried together and
    reported as one message joined by ``", "``.

    Maps to HTTP 400.

    Args:
        errors: A single message or a list of messages.
    """

    status_code = 400

    def __init__(self, errors: str | list[str]) -> None:
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__(", ".join(self.errors))


class ForbiddenError(Exception):
    """Raised when the caller's role or office does not allow the operation.

    Maps to HTTP 403.
    """

    status_code = 403


class ConflictError(Exception):
    """Raised when an operation would break a uniqueness or dependency rule.

    Maps to HTTP 409.
    """

    status_code = 409


class AuthError(Exception):
    """Raised when the request carries no usable identity or bad credentials.

    Maps to HTTP 401.
    """

    status_code = 401
