"""Cadastros da administração e relatórios por operador."""
from __future__ import annotations

import csv
import io
import logging
from datetime import date, timedelta

from ...extensions import db
from ...models import Activity, ChatMessage, DailyRecord, PendingItem, User, UserActivity
from ...models.daily_record import CONCLUIDA, CONCLUIDA_COM_ATRASO, EM_ANDAMENTO, NAO_INICIADA, PENDENTE
from ...utils.dates import month_range, percent, week_range
from ..activities.services import records_between, status_distribution

logger = logging.getLogger(__name__)


# --------------------
# Atividades / atribuições
# --------------------

def replace_assignments(activity: Activity, user_ids: list[int]) -> list[UserActivity]:
    """Apaga todas as atribuições da atividade e grava a nova lista."""
    unique_ids = list(dict.fromkeys(user_ids))
    found = {u.id for u in User.query.filter(User.id.in_(unique_ids)).all()} if unique_ids else set()
    missing = [uid for uid in unique_ids if uid not in found]
    if missing:
        raise ValueError(f"Usuário(s) não encontrado(s): {', '.join(str(m) for m in missing)}")

    deleted = UserActivity.query.filter_by(activity_id=activity.id).delete()
    db.session.commit()
    logger.info("delete user_activities activity=%s rows=%d", activity.id, deleted)

    rows = [UserActivity(user_id=uid, activity_id=activity.id) for uid in unique_ids]
    if rows:
        db.session.add_all(rows)
        db.session.commit()
        logger.info("insert user_activities activity=%s rows=%d", activity.id, len(rows))
    return rows


def delete_activity(activity: Activity) -> None:
    in_use = (
        DailyRecord.query.filter_by(activity_id=activity.id).first() is not None
        or PendingItem.query.filter_by(activity_id=activity.id).first() is not None
    )
    if in_use:
        raise ValueError("Atividade possui registros ou pendências e não pode ser excluída.")

    UserActivity.query.filter_by(activity_id=activity.id).delete()
    db.session.delete(activity)
    db.session.commit()
    logger.info("delete activities id=%s", activity.id)


def delete_user(user: User) -> None:
    in_use = (
        DailyRecord.query.filter_by(user_id=user.id).first() is not None
        or PendingItem.query.filter(
            (PendingItem.original_user_id == user.id) | (PendingItem.assigned_user_id == user.id)
        ).first() is not None
        or ChatMessage.query.filter(
            (ChatMessage.sender_id == user.id) | (ChatMessage.receiver_id == user.id)
        ).first() is not None
    )
    if in_use:
        raise ValueError("Usuário possui histórico e não pode ser excluído. Rejeite o acesso.")

    UserActivity.query.filter_by(user_id=user.id).delete()
    db.session.delete(user)
    db.session.commit()
    logger.info("delete profiles id=%s", user.id)


# --------------------
# Relatórios
# --------------------

def operator_stats(records: list[DailyRecord]) -> list[dict]:
    """
    Por operador: total, concluídas, pendentes (pendente ou nao_iniciada sem
    justificativa), com atraso, taxa de conclusão e taxa de atraso.
    """
    stats: dict = {}
    for r in records:
        s = stats.get(r.user_id)
        if s is None:
            name = r.user.display_name if r.user else "Usuário"
            s = stats[r.user_id] = {
                "id": r.user_id,
                "name": name,
                "email": r.user.email if r.user else "",
                "total": 0, "completed": 0, "pending": 0, "late": 0,
            }
        s["total"] += 1
        if r.status == CONCLUIDA:
            s["completed"] += 1
        if r.status == PENDENTE or (r.status == NAO_INICIADA and not r.justification):
            s["pending"] += 1
        if r.status == CONCLUIDA_COM_ATRASO:
            s["late"] += 1

    for s in stats.values():
        s["completion_rate"] = percent(s["completed"], s["total"])
        s["late_rate"] = percent(s["pending"] + s["late"], s["total"])

    return sorted(stats.values(), key=lambda s: s["completion_rate"], reverse=True)


def report_daily(records: list[DailyRecord]) -> list[dict]:
    buckets: dict = {}
    for r in records:
        key = r.date.isoformat()
        b = buckets.setdefault(key, {"date": key, CONCLUIDA: 0, PENDENTE: 0, EM_ANDAMENTO: 0})
        if r.status in b:
            b[r.status] += 1
    return [buckets[k] for k in sorted(buckets)]


def operator_report(start: date, end: date) -> dict:
    records = records_between(None, start, end)
    return {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "operators": operator_stats(records),
        "daily": report_daily(records),
        "distribution": status_distribution(records),
    }


def operator_details(user_id: int, start: date, end: date, status: str | None = None) -> list[dict]:
    rows = records_between(user_id, start, end)
    if status:
        rows = [r for r in rows if r.status == status]
    return [r.to_dict() for r in rows]


CSV_HEADERS = ["Nome", "Email", "Total", "Concluídas", "Pendentes", "Com Atraso", "Taxa Conclusão", "Taxa Atraso"]


def operators_csv(operators: list[dict]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for op in operators:
        writer.writerow([
            op["name"], op["email"], op["total"], op["completed"], op["pending"], op["late"],
            f"{op['completion_rate']}%", f"{op['late_rate']}%",
        ])
    return buf.getvalue()


def _ranking(records: list[DailyRecord]) -> list[dict]:
    stats: dict = {}
    for r in records:
        s = stats.get(r.user_id)
        if s is None:
            s = stats[r.user_id] = {
                "user_id": r.user_id,
                "name": r.user.display_name if r.user else "Usuário",
                "completed": 0, "completed_late": 0, "pending": 0, "not_started": 0, "total": 0,
            }
        s["total"] += 1
        if r.status == CONCLUIDA:
            s["completed"] += 1
        elif r.status == CONCLUIDA_COM_ATRASO:
            s["completed_late"] += 1
        elif r.status == PENDENTE:
            s["pending"] += 1
        elif r.status == NAO_INICIADA:
            s["not_started"] += 1

    for s in stats.values():
        s["completion_rate"] = percent(s["completed"] + s["completed_late"], s["total"])
    return sorted(stats.values(), key=lambda s: s["completion_rate"], reverse=True)


def admin_dashboard(today: date) -> dict:
    week_start, week_end = week_range(today)
    month_start, month_end = month_range(today)

    today_records = records_between(None, today, today)
    week_records = records_between(None, week_start, week_end)
    month_records = records_between(None, month_start, month_end)

    # pendências por dia nos últimos 7 dias
    first_day = today - timedelta(days=6)
    per_day = {(first_day + timedelta(days=i)).isoformat(): 0 for i in range(7)}
    items = PendingItem.query.filter(PendingItem.original_date >= first_day).all()
    for item in items:
        key = item.original_date.isoformat()
        if key in per_day:
            per_day[key] += 1

    return {
        "stats": {
            "total_users": User.query.filter_by(approval_status="approved").count(),
            "pending_users": User.query.filter_by(approval_status="pending").count(),
            "total_activities": Activity.query.count(),
            "total_pending": PendingItem.query.filter_by(resolved=False).count(),
            "today_completed": sum(1 for r in today_records if r.status == CONCLUIDA),
            "today_pending": sum(1 for r in today_records if r.status == PENDENTE),
            "week_completed": sum(1 for r in week_records if r.status == CONCLUIDA),
            "month_completed": sum(1 for r in month_records if r.status == CONCLUIDA),
        },
        "pending_by_day": [{"date": d, "count": c} for d, c in per_day.items()],
        "ranking": _ranking(month_records),
    }
