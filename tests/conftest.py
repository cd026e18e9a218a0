"""
Shared pytest fixtures for the IGOT Training Tracker test suite.

Provides:
    - app: Flask application (session-scoped, in-memory SQLite)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client
    - office_a / office_b: Pre-created offices (ids)
    - admin / member_a / member_b: Pre-created users (CallerContext)
    - admin_headers / member_a_headers / member_b_headers: Bearer auth headers
"""

import pytest

from igot_tracker import create_app
from igot_tracker.auth import CallerContext
from igot_tracker.models import db as _db
from igot_tracker.models.auth import ROLE_ADMIN, ROLE_USER, User
from igot_tracker.models.office import Office
from igot_tracker.services.jwt_service import generate_access_token
from igot_tracker.utils.crypto import hash_password

TEST_PASSWORD = "secret123"


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    return create_app("testing")


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow on purpose; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Domain fixtures ──────────────────────────────────────────────────────


def _make_user(name, email, role, office_id, password_hash) -> CallerContext:
    user = User(
        name=name,
        email=email,
        password_hash=password_hash,
        role=role,
        office_id=office_id,
    )
    _db.session.add(user)
    _db.session.commit()
    return CallerContext.from_user(user)


def _make_office(name, location) -> int:
    office = Office(name=name, location=location)
    _db.session.add(office)
    _db.session.commit()
    return office.id


@pytest.fixture()
def office_a() -> int:
    return _make_office("Regional Office A", "Pune")


@pytest.fixture()
def office_b() -> int:
    return _make_office("Regional Office B", "Nagpur")


@pytest.fixture()
def admin(password_hash) -> CallerContext:
    return _make_user("Asha Admin", "admin@dopt.gov.in", ROLE_ADMIN, None, password_hash)


@pytest.fixture()
def member_a(office_a, password_hash) -> CallerContext:
    return _make_user("Ravi A", "ravi@dopt.gov.in", ROLE_USER, office_a, password_hash)


@pytest.fixture()
def member_b(office_b, password_hash) -> CallerContext:
    return _make_user("Meera B", "meera@dopt.gov.in", ROLE_USER, office_b, password_hash)


def _bearer(caller: CallerContext) -> dict:
    """Authorization header for a caller."""
    token = generate_access_token(caller.id, caller.role, caller.office_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(admin) -> dict:
    return _bearer(admin)


@pytest.fixture()
def member_a_headers(member_a) -> dict:
    return _bearer(member_a)


@pytest.fixture()
def member_b_headers(member_b) -> dict:
    return _bearer(member_b)
