"""
Office Model — organisational unit that employee records belong to.
"""

from datetime import datetime, timezone

from igot_tracker.models import db

NAME_MAX_LENGTH = 100


class Office(db.Model):
    __tablename__ = "offices"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    location = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    created_by = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="SET NULL", use_alter=True, name="fk_offices_created_by"),
        nullable=True,
    )
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def to_summary(self):
        """Partial view used when an employee's office reference is resolved."""
        return {"id": self.id, "name": self.name, "location": self.location}

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "description": self.description,
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
