from __future__ import annotations

import logging
from datetime import date, datetime

from ...extensions import db
from ...models import DailyRecord, PendingItem, User
from ...models.daily_record import CONCLUIDA_COM_ATRASO, NAO_INICIADA
from ...models.pending_item import REQUEST_TYPES
from ..activities.services import upsert_daily_record

logger = logging.getLogger(__name__)


def list_unresolved() -> list[PendingItem]:
    return (
        PendingItem.query
        .filter_by(resolved=False)
        .order_by(PendingItem.created_at.desc(), PendingItem.id.desc())
        .all()
    )


def count_unresolved() -> int:
    return PendingItem.query.filter_by(resolved=False).count()


def assign_to_user(item: PendingItem, target: User) -> PendingItem:
    """
    Atribui a pendência e, se for de atividade, recoloca a atividade
    no dia do novo responsável (registro nao_iniciada na data original).
    """
    if target is None or not target.is_approved():
        raise ValueError("Selecione um usuário aprovado.")

    item.assigned_user_id = target.id
    db.session.commit()
    logger.info("update pending_items id=%s assigned_user_id=%s", item.id, target.id)

    if item.activity_id:
        upsert_daily_record(target.id, item.activity_id, item.original_date or date.today(), NAO_INICIADA)
    return item


def resolve(item: PendingItem, justification: str | None = None, action_taken: str | None = None,
            now: datetime | None = None) -> PendingItem:
    if item.resolved:
        raise ValueError("Pendência já resolvida.")

    item.resolved = True
    item.resolved_at = now or datetime.utcnow()
    item.justification = justification or item.justification
    item.action_taken = action_taken or item.action_taken
    db.session.commit()
    logger.info("update pending_items id=%s resolved", item.id)

    if item.activity_id:
        # casa pelo trio (atividade, usuário original, data) e não pelo id do registro
        updated = (
            DailyRecord.query
            .filter_by(activity_id=item.activity_id, user_id=item.original_user_id, date=item.original_date)
            .update({"status": CONCLUIDA_COM_ATRASO}, synchronize_session="fetch")
        )
        db.session.commit()
        logger.info(
            "update daily_records activity=%s user=%s date=%s status=%s rows=%d",
            item.activity_id, item.original_user_id, item.original_date, CONCLUIDA_COM_ATRASO, updated,
        )
    return item


def create_special_request(user_id: int, request_type: str, description: str | None,
                           action_taken: str | None, today: date | None = None) -> PendingItem:
    if request_type not in REQUEST_TYPES:
        raise ValueError("Tipo de solicitação inválido.")

    item = PendingItem(
        original_user_id=user_id,
        request_type=request_type,
        is_special_request=True,
        description=description,
        action_taken=action_taken,
        original_date=today or date.today(),
    )
    db.session.add(item)
    db.session.commit()
    logger.info("insert pending_items id=%s special_request=%s", item.id, request_type)
    return item
