from __future__ import annotations
from datetime import datetime
from ..extensions import db

NAO_INICIADA = "nao_iniciada"
EM_ANDAMENTO = "em_andamento"
CONCLUIDA = "concluida"
PENDENTE = "pendente"
CONCLUIDA_COM_ATRASO = "concluida_com_atraso"
PLANTAO = "plantao"
CONFERENCIA_MENSAL = "conferencia_mensal"

# Status do registro diário
ACTIVITY_STATUS = (
    NAO_INICIADA,           # criado no "iniciar dia"
    EM_ANDAMENTO,           # colaborador começou
    CONCLUIDA,              # terminou no dia
    PENDENTE,               # forçado no "finalizar dia"
    CONCLUIDA_COM_ATRASO,   # pendência resolvida depois
    PLANTAO,                # só atividades de plantão
    CONFERENCIA_MENSAL,     # só atividades de conferência mensal
)

STATUS_LABELS = {
    NAO_INICIADA: "Não Iniciada",
    EM_ANDAMENTO: "Em Andamento",
    CONCLUIDA: "Concluída",
    PENDENTE: "Pendente",
    CONCLUIDA_COM_ATRASO: "Concluída com Atraso",
    PLANTAO: "Plantão",
    CONFERENCIA_MENSAL: "Conferência Mensal",
}

BASE_STATUSES = (NAO_INICIADA, EM_ANDAMENTO, CONCLUIDA)


def status_label(status: str | None) -> str:
    return STATUS_LABELS.get(status, status or "")


class DailyRecord(db.Model):
    """
    Status de uma atividade de um colaborador num dia.
    No máximo um registro por (user_id, activity_id, date).
    """
    __tablename__ = "daily_records"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    activity_id = db.Column(db.Integer, db.ForeignKey("activities.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)

    status = db.Column(db.String(30), default=NAO_INICIADA, nullable=False, index=True)

    justification = db.Column(db.Text, nullable=True)
    action_taken = db.Column(db.Text, nullable=True)

    started_at = db.Column(db.DateTime, nullable=True)
    completed_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    activity = db.relationship("Activity")
    user = db.relationship("User")

    __table_args__ = (
        db.UniqueConstraint("user_id", "activity_id", "date", name="uq_daily_record"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "activity_id": self.activity_id,
            "activity_name": self.activity.name if self.activity else None,
            "date": self.date.isoformat(),
            "status": self.status,
            "status_label": status_label(self.status),
            "justification": self.justification,
            "action_taken": self.action_taken,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def __repr__(self) -> str:
        return f"<DailyRecord {self.user_id}/{self.activity_id} {self.date} {self.status}>"
