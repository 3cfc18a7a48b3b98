from __future__ import annotations
from datetime import datetime
from ..extensions import db

# Tipos de solicitação especial
REQUEST_TYPES = (
    "solicitacao_email",
    "requisicao_imagem",
    "rdo_pendente",
    "sonolencia_fadiga",
)

REQUEST_TYPE_LABELS = {
    "solicitacao_email": "Solicitação de E-mail",
    "requisicao_imagem": "Requisição de Imagem",
    "rdo_pendente": "RDO Pendente",
    "sonolencia_fadiga": "Sonolência e Fadiga",
}


class PendingItem(db.Model):
    """
    Pendência: atividade que terminou o dia sem conclusão,
    ou solicitação especial aberta direto pelo colaborador.
    """
    __tablename__ = "pending_items"

    id = db.Column(db.Integer, primary_key=True)

    original_user_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    assigned_user_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True, index=True)

    # null => solicitação especial
    activity_id = db.Column(db.Integer, db.ForeignKey("activities.id"), nullable=True, index=True)

    description = db.Column(db.Text, nullable=True)
    justification = db.Column(db.Text, nullable=True)
    action_taken = db.Column(db.Text, nullable=True)

    request_type = db.Column(db.String(30), nullable=True)
    is_special_request = db.Column(db.Boolean, default=False, nullable=False)

    resolved = db.Column(db.Boolean, default=False, nullable=False, index=True)
    resolved_at = db.Column(db.DateTime, nullable=True)

    original_date = db.Column(db.Date, nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    activity = db.relationship("Activity")
    original_user = db.relationship("User", foreign_keys=[original_user_id])
    assigned_user = db.relationship("User", foreign_keys=[assigned_user_id])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "original_user_id": self.original_user_id,
            "original_user_name": self.original_user.display_name if self.original_user else None,
            "assigned_user_id": self.assigned_user_id,
            "assigned_user_name": self.assigned_user.display_name if self.assigned_user else None,
            "activity_id": self.activity_id,
            "activity_name": self.activity.name if self.activity else None,
            "description": self.description,
            "justification": self.justification,
            "action_taken": self.action_taken,
            "request_type": self.request_type,
            "request_type_label": REQUEST_TYPE_LABELS.get(self.request_type, "Pendência"),
            "is_special_request": bool(self.is_special_request),
            "resolved": bool(self.resolved),
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
            "original_date": self.original_date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
