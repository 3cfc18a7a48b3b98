from __future__ import annotations
from datetime import datetime
from ..extensions import db


class Activity(db.Model):
    """
    Atividade do catálogo (cadastrada pela administração).
    As flags liberam status extras no seletor do colaborador.
    """
    __tablename__ = "activities"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)

    # plantão / conferência mensal
    is_duty_activity = db.Column(db.Boolean, default=False, nullable=False)
    is_monthly_conference = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "is_duty_activity": bool(self.is_duty_activity),
            "is_monthly_conference": bool(self.is_monthly_conference),
        }

    def __repr__(self) -> str:
        return f"<Activity {self.name}>"


class UserActivity(db.Model):
    """Atribuição colaborador x atividade."""
    __tablename__ = "user_activities"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    activity_id = db.Column(db.Integer, db.ForeignKey("activities.id"), nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    activity = db.relationship("Activity")

    __table_args__ = (
        db.UniqueConstraint("user_id", "activity_id", name="uq_user_activity"),
    )
