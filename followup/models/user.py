from __future__ import annotations
from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from ..extensions import db

ROLE_CHOICES = (
    "admin",
    "supervisor",
    "operador",
    "operador_12_36_diurno",
    "operador_12_36_noturno",
)

# papéis com acesso ao painel administrativo
MANAGER_ROLES = ("admin", "supervisor")

APPROVAL_CHOICES = ("pending", "approved", "rejected")


class User(db.Model, UserMixin):
    __tablename__ = "profiles"

    id = db.Column(db.Integer, primary_key=True)

    email = db.Column(db.String(180), unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(120), nullable=True)

    password_hash = db.Column(db.String(255), nullable=False)

    # admin, supervisor, operador, operador_12_36_diurno, operador_12_36_noturno
    role = db.Column(db.String(30), default="operador", nullable=False, index=True)

    # pending -> aguarda aprovação, approved -> liberado, rejected -> recusado
    approval_status = db.Column(db.String(20), default="pending", nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def is_approved(self) -> bool:
        return self.approval_status == "approved"

    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "approval_status": self.approval_status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<User {self.email}>"
