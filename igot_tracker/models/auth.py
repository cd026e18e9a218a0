"""
Auth Models — users that sign in and own office/employee records.

Roles:
    admin  — sees and manages every office and employee record
    user   — scoped to the single office referenced by ``office_id``
"""

from datetime import datetime, timezone

from igot_tracker.models import db

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(200), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)
    office_id = db.Column(
        db.Integer, db.ForeignKey("offices.id", ondelete="SET NULL"), nullable=True,
    )
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "officeId": self.office_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
