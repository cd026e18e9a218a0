"""Uniform JSON response envelope.

Every endpoint answers with one of two shapes:

    {"success": true,  "data": ..., "count": n?, ...extra}
    {"success": false, "message": "..."}

Usage
-----
    from igot_tracker.utils.responses import success_response, error_response

    return success_response(items, count=len(items))
    return success_response(office, status=201)
    return error_response("Employee not found", 404)
"""

from __future__ import annotations

from flask import jsonify


def success_response(data, *, status: int = 200, count: int | None = None, **extra):
    """Return ``(jsonify(body), status)`` for a successful call.

    Parameters
    ----------
    data
        Payload placed under ``data`` (dict, list or ``{}``).
    status : int
        HTTP status, 200 by default, 201 for creates.
    count : int, optional
        Included for list endpoints.
    **extra
        Additional top-level keys (e.g. ``message``, ``token``).
    """
    body: dict = {"success": True}
    if count is not None:
        body["count"] = count
    body["data"] = data
    body.update(extra)
    return jsonify(body), status


def error_response(message: str, status: int = 400):
    """Return ``(jsonify(body), status)`` for a failed call."""
    return jsonify({"success": False, "message": message}), status
