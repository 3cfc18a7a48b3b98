from __future__ import annotations
from datetime import datetime
from ..extensions import db


class ChatMessage(db.Model):
    __tablename__ = "chat_messages"

    id = db.Column(db.Integer, primary_key=True)
    sender_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    receiver_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True, index=True)  # null => todos

    message = db.Column(db.Text, nullable=False)
    is_broadcast = db.Column(db.Boolean, default=False, nullable=False, index=True)

    read_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sender_id": self.sender_id,
            "receiver_id": self.receiver_id,
            "message": self.message,
            "is_broadcast": bool(self.is_broadcast),
            "read_at": self.read_at.isoformat() if self.read_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
