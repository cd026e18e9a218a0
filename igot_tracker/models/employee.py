"""
Employee Model — per-employee iGOT training record.

Timestamps are stored as naive UTC.

Count invariants (enforced by ``igot_tracker.services.validation`` before
every write, not by the model):
    - not registered on iGOT  →  courses_enrolled == 0
    - courses_completed <= courses_enrolled

A frozen record (``is_frozen``) stays readable but rejects update/delete.
"""

from datetime import datetime, timezone

from igot_tracker.models import db

NAME_MAX_LENGTH = 100


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Employee(db.Model):
    __tablename__ = "employees"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    office_id = db.Column(
        db.Integer, db.ForeignKey("offices.id"), nullable=False, index=True,
    )
    is_registered_on_igot = db.Column(db.Boolean, nullable=False, default=False)
    courses_enrolled = db.Column(db.Integer, nullable=False, default=0)
    courses_completed = db.Column(db.Integer, nullable=False, default=0)
    report_date = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    is_frozen = db.Column(db.Boolean, nullable=False, default=False)
    created_by = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self, office=None, creator=None):
        """Serialize the record.

        ``office`` / ``creator`` are the already-resolved reference views
        (see ``employee_service``). When omitted the raw ids are returned.
        """
        return {
            "id": self.id,
            "name": self.name,
            "officeId": office if office is not None else self.office_id,
            "isRegisteredOnIGOT": self.is_registered_on_igot,
            "coursesEnrolled": self.courses_enrolled,
            "coursesCompleted": self.courses_completed,
            "reportDate": self.report_date.isoformat() if self.report_date else None,
            "isFrozen": self.is_frozen,
            "createdBy": creator if creator is not None else self.created_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
