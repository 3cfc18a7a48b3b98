"""
Ciclo do dia: iniciar dia, mudar status, justificar e finalizar dia.

Cada escrita é gravada (commit) na hora, na ordem em que acontece.
Se uma escrita falhar no meio do "finalizar dia", a operação é
abortada e o que já foi gravado continua gravado (sem compensação).
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date, datetime, timedelta

from ...extensions import db
from ...models import Activity, DailyRecord, PendingItem, UserActivity
from ...models.daily_record import (
    BASE_STATUSES, CONCLUIDA, CONCLUIDA_COM_ATRASO, CONFERENCIA_MENSAL,
    EM_ANDAMENTO, NAO_INICIADA, PENDENTE, PLANTAO, status_label,
)
from ...utils.dates import month_range, percent, period_range

logger = logging.getLogger(__name__)


def available_statuses(activity: Activity) -> tuple[str, ...]:
    """Status que o colaborador pode escolher para a atividade."""
    if activity.is_duty_activity:
        return BASE_STATUSES + (PLANTAO,)
    if activity.is_monthly_conference:
        return BASE_STATUSES + (CONFERENCIA_MENSAL,)
    return BASE_STATUSES


def user_assignments(user_id: int) -> list[UserActivity]:
    return (
        UserActivity.query
        .filter_by(user_id=user_id)
        .order_by(UserActivity.id.asc())
        .all()
    )


def load_day_records(user_id: int, day: date) -> "OrderedDict[int, DailyRecord]":
    """Registros do colaborador no dia, indexados por activity_id."""
    rows = (
        DailyRecord.query
        .filter_by(user_id=user_id, date=day)
        .order_by(DailyRecord.id.asc())
        .all()
    )
    return OrderedDict((r.activity_id, r) for r in rows)


def _upsert_record(user_id: int, activity_id: int, day: date, status: str) -> DailyRecord:
    # chave (user_id, activity_id, date); só o status vai no payload
    rec = DailyRecord.query.filter_by(user_id=user_id, activity_id=activity_id, date=day).first()
    if not rec:
        rec = DailyRecord(user_id=user_id, activity_id=activity_id, date=day, status=status)
        db.session.add(rec)
    else:
        rec.status = status
    return rec


def upsert_daily_record(user_id: int, activity_id: int, day: date, status: str = NAO_INICIADA) -> DailyRecord:
    rec = _upsert_record(user_id, activity_id, day, status)
    db.session.commit()
    logger.info("upsert daily_records user=%s activity=%s date=%s status=%s", user_id, activity_id, day, status)
    return rec


def start_day(user_id: int, day: date) -> list[DailyRecord]:
    """
    Cria (ou recoloca em nao_iniciada) um registro por atividade atribuída.

    Chamar duas vezes no mesmo dia volta todos os registros para
    nao_iniciada; justificativa e horários já gravados são mantidos.
    """
    assignments = user_assignments(user_id)
    if not assignments:
        raise ValueError("Nenhuma atividade atribuída ao usuário.")

    records = [_upsert_record(user_id, ua.activity_id, day, NAO_INICIADA) for ua in assignments]
    db.session.commit()
    logger.info("upsert daily_records user=%s date=%s rows=%d", user_id, day, len(records))
    return records


def update_status(record: DailyRecord, new_status: str, now: datetime | None = None) -> DailyRecord:
    """
    Troca livre de status (sem bloqueio pelo status atual).
    em_andamento carimba started_at só na primeira vez;
    concluida carimba completed_at sempre.
    """
    allowed = available_statuses(record.activity)
    if new_status not in allowed:
        raise ValueError(f"Status inválido para esta atividade: {new_status}")

    now = now or datetime.utcnow()
    record.status = new_status
    if new_status == EM_ANDAMENTO and not record.started_at:
        record.started_at = now
    if new_status == CONCLUIDA:
        record.completed_at = now

    db.session.commit()
    logger.info("update daily_records id=%s status=%s", record.id, new_status)
    return record


def save_justification(record: DailyRecord, justification: str | None, action_taken: str | None) -> DailyRecord:
    record.justification = justification
    record.action_taken = action_taken
    db.session.commit()
    logger.info("update daily_records id=%s justification/action_taken", record.id)
    return record


def _escalate(record: DailyRecord, user_id: int, day: date, copy_notes: bool) -> PendingItem:
    # passo 1: cria a pendência
    item = PendingItem(
        original_user_id=user_id,
        activity_id=record.activity_id,
        original_date=day,
    )
    if copy_notes:
        item.justification = record.justification
        item.action_taken = record.action_taken
    db.session.add(item)
    db.session.commit()
    logger.info("insert pending_items id=%s activity=%s date=%s", item.id, record.activity_id, day)

    # passo 2: marca o registro como pendente
    record.status = PENDENTE
    db.session.commit()
    logger.info("update daily_records id=%s status=%s", record.id, PENDENTE)
    return item


def end_day(records: "OrderedDict[int, DailyRecord] | dict[int, DailyRecord]", user_id: int, day: date) -> list[PendingItem]:
    """
    Finaliza o dia sobre o conjunto de registros já carregado.

    - em_andamento: vira pendência (copia justificativa e ação tomada)
    - nao_iniciada sem justificativa: vira pendência sem textos
    - demais registros ficam como estão
    """
    in_progress = [r for r in records.values() if r.status == EM_ANDAMENTO]
    not_started = [r for r in records.values() if r.status == NAO_INICIADA and not r.justification]

    created = []
    try:
        for record in in_progress:
            created.append(_escalate(record, user_id, day, copy_notes=True))
        for record in not_started:
            created.append(_escalate(record, user_id, day, copy_notes=False))
    except Exception:
        logger.exception(
            "end_day abortado user=%s date=%s após %d pendência(s) criada(s)", user_id, day, len(created)
        )
        raise

    logger.info("end_day user=%s date=%s pendencias=%d", user_id, day, len(created))
    return created


# --------------------------
# Leitura: histórico e estatísticas
# --------------------------

def records_between(user_id: int | None, start: date, end: date) -> list[DailyRecord]:
    q = DailyRecord.query.filter(DailyRecord.date >= start, DailyRecord.date <= end)
    if user_id is not None:
        q = q.filter(DailyRecord.user_id == user_id)
    return q.order_by(DailyRecord.date.desc(), DailyRecord.id.asc()).all()


def count_statuses(records: list[DailyRecord]) -> dict:
    return {
        "total": len(records),
        "completed": sum(1 for r in records if r.status == CONCLUIDA),
        "in_progress": sum(1 for r in records if r.status == EM_ANDAMENTO),
        "not_started": sum(1 for r in records if r.status == NAO_INICIADA),
        "pending": sum(1 for r in records if r.status == PENDENTE),
        "late": sum(1 for r in records if r.status == CONCLUIDA_COM_ATRASO),
    }


def daily_buckets(records: list[DailyRecord]) -> list[dict]:
    """Contagem por status agrupada por data (ordem crescente de data)."""
    buckets: dict = {}
    for r in records:
        key = r.date.isoformat()
        bucket = buckets.setdefault(key, {
            "date": key, CONCLUIDA: 0, PENDENTE: 0, EM_ANDAMENTO: 0, NAO_INICIADA: 0,
        })
        bucket[r.status] = bucket.get(r.status, 0) + 1
    return [buckets[k] for k in sorted(buckets)]


def status_distribution(records: list[DailyRecord]) -> list[dict]:
    counts: dict = {}
    for r in records:
        counts[r.status] = counts.get(r.status, 0) + 1
    return [{"status": s, "name": status_label(s), "value": v} for s, v in counts.items()]


def _summary(records: list[DailyRecord]) -> dict:
    completed = sum(1 for r in records if r.status == CONCLUIDA)
    pending = sum(1 for r in records if r.status == PENDENTE)
    return {"completed": completed, "pending": pending, "rate": percent(completed, len(records))}


def overdue_records(user_id: int, today: date, limit: int = 5) -> list[dict]:
    rows = (
        DailyRecord.query
        .filter(DailyRecord.user_id == user_id)
        .filter(DailyRecord.status.in_([PENDENTE, NAO_INICIADA, EM_ANDAMENTO]))
        .order_by(DailyRecord.date.asc())
        .limit(limit)
        .all()
    )
    out = []
    for r in rows:
        days = (today - r.date).days
        if days > 0:
            out.append({
                "id": r.id,
                "activity_name": r.activity.name if r.activity else "Atividade",
                "date": r.date.isoformat(),
                "status": r.status,
                "days_overdue": days,
            })
    return out


def period_stats(user_id: int, period: str, today: date) -> dict:
    start, end = period_range(period, today)
    prev_start, prev_end = period_range(period, today, previous=True)

    current = records_between(user_id, start, end)
    previous = records_between(user_id, prev_start, prev_end)

    return {
        "period": period,
        "start": start.isoformat(),
        "end": end.isoformat(),
        "stats": count_statuses(current),
        "chart": daily_buckets(current),
        "comparison": {"current": _summary(current), "previous": _summary(previous)},
        "overdue": overdue_records(user_id, today),
    }


def personal_dashboard(user_id: int, today: date) -> dict:
    today_records = records_between(user_id, today, today)
    week_start = today - timedelta(days=today.weekday())
    week_records = records_between(user_id, week_start, week_start + timedelta(days=6))
    month_start, month_end = month_range(today)
    month_records = records_between(user_id, month_start, month_end)

    stats = count_statuses(today_records)
    return {
        "date": today.isoformat(),
        "today": stats,
        "completion_rate": percent(stats["completed"], stats["total"]),
        "week": daily_buckets(week_records),
        "month": status_distribution(month_records),
    }


def history(user_id: int, year: int, month: int, status: str | None = None, search: str | None = None) -> list[DailyRecord]:
    start, end = month_range(date(year, month, 1))
    rows = records_between(user_id, start, end)
    if status:
        rows = [r for r in rows if r.status == status]
    if search:
        term = search.lower()
        rows = [r for r in rows if r.activity and term in r.activity.name.lower()]
    return rows
