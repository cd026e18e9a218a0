"""
IGOT Training Tracker
Tests — application-level behaviour.

Covers:
    - Store failures answer the generic 500 envelope and roll back
    - CORS origin resolution from the CORS_ORIGINS setting
"""

import pytest
from flask import Flask
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError

from igot_tracker import cors_origins
from igot_tracker.models import db
from igot_tracker.models.office import Office


class TestStoreFailure:
    def test_commit_failure_returns_generic_500(self, client, admin_headers, monkeypatch):
        def _boom(*args, **kwargs):
            raise SQLAlchemyError("database is locked")

        monkeypatch.setattr(db.session, "commit", _boom)
        res = client.post(
            "/api/v1/offices",
            json={"name": "HQ", "location": "City A"},
            headers=admin_headers,
        )
        assert res.status_code == 500
        assert res.get_json() == {"success": False, "message": "Server Error"}
        monkeypatch.undo()
        assert Office.query.filter_by(name="HQ").count() == 0

    def test_service_failure_does_not_leak_detail(self, client, admin_headers, monkeypatch):
        def _boom(*args, **kwargs):
            raise SQLAlchemyError("SELECT secret FROM users")

        monkeypatch.setattr(
            "igot_tracker.blueprints.employee_bp.employee_service.get_dashboard", _boom
        )
        res = client.get("/api/v1/employees/dashboard", headers=admin_headers)
        assert res.status_code == 500
        assert "secret" not in res.get_data(as_text=True)


class TestCorsOrigins:
    @pytest.mark.parametrize("raw", ["*", " * ", None])
    def test_wildcard(self, raw):
        assert cors_origins(raw) == "*"

    def test_comma_separated_list(self):
        assert cors_origins("https://a.gov.in, https://b.gov.in,") == [
            "https://a.gov.in",
            "https://b.gov.in",
        ]

    def test_empty_setting_allows_no_origin(self):
        app = Flask("cors_empty")
        CORS(app, origins=cors_origins(""))

        @app.route("/ping")
        def ping():
            return "pong"

        res = app.test_client().get("/ping", headers={"Origin": "https://evil.example"})
        assert res.status_code == 200
        assert "Access-Control-Allow-Origin" not in res.headers

    def test_listed_origin_allowed(self):
        app = Flask("cors_allow_list")
        CORS(app, origins=cors_origins("https://a.gov.in"))

        @app.route("/ping")
        def ping():
            return "pong"

        res = app.test_client().get("/ping", headers={"Origin": "https://a.gov.in"})
        assert res.headers["Access-Control-Allow-Origin"] == "https://a.gov.in"
