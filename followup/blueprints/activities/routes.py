from __future__ import annotations

from datetime import date

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from ...extensions import db
from ...models import DailyRecord
from ...models.daily_record import ACTIVITY_STATUS
from ...utils.dates import PERIODS, month_name, parse_iso_date
from ...utils.forms import json_body, optional_text
from ...utils.security import require_approved
from . import services

bp = Blueprint("activities", __name__, url_prefix="/api/activities")


def _day_from_body() -> date:
    return parse_iso_date(json_body().get("date")) or date.today()


def _own_record(record_id: int) -> DailyRecord | None:
    rec = db.get_or_404(DailyRecord, record_id)
    if rec.user_id != current_user.id:
        return None
    return rec


@bp.get("/today")
@login_required
@require_approved
def today():
    """
    Atividades atribuídas ao usuário + registro do dia (se o dia já foi iniciado).
    """
    try:
        day = parse_iso_date(request.args.get("date")) or date.today()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    records = services.load_day_records(current_user.id, day)
    rows = []
    for ua in services.user_assignments(current_user.id):
        rec = records.get(ua.activity_id)
        rows.append({
            "activity": ua.activity.to_dict(),
            "available_statuses": list(services.available_statuses(ua.activity)),
            "record": rec.to_dict() if rec else None,
        })

    return jsonify({
        "date": day.isoformat(),
        "day_started": len(records) > 0,
        "activities": rows,
    })


@bp.post("/start-day")
@login_required
@require_approved
def start_day():
    try:
        day = _day_from_body()
        records = services.start_day(current_user.id, day)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "message": "Dia iniciado! Suas atividades estão prontas para serem executadas.",
        "date": day.isoformat(),
        "records": [r.to_dict() for r in records],
    })


@bp.post("/end-day")
@login_required
@require_approved
def end_day():
    try:
        day = _day_from_body()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    records = services.load_day_records(current_user.id, day)
    created = services.end_day(records, current_user.id, day)

    return jsonify({
        "message": "Dia finalizado! Suas atividades foram salvas.",
        "date": day.isoformat(),
        "pending_items": [p.to_dict() for p in created],
    })


@bp.post("/records/<int:record_id>/status")
@login_required
@require_approved
def update_status(record_id: int):
    rec = _own_record(record_id)
    if rec is None:
        return jsonify({"error": "Sem permissão"}), 403

    try:
        new_status = (optional_text(json_body(), "status") or "").strip()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    if new_status not in ACTIVITY_STATUS:
        return jsonify({"error": "Status inválido"}), 400

    try:
        services.update_status(rec, new_status)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(rec.to_dict())


@bp.post("/records/<int:record_id>/justification")
@login_required
@require_approved
def save_justification(record_id: int):
    rec = _own_record(record_id)
    if rec is None:
        return jsonify({"error": "Sem permissão"}), 403

    try:
        data = json_body()
        justification = optional_text(data, "justification")
        action_taken = optional_text(data, "action_taken")
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    services.save_justification(rec, justification, action_taken)
    return jsonify(rec.to_dict())


@bp.get("/history")
@login_required
@require_approved
def history():
    today_ = date.today()
    year = request.args.get("year", type=int) or today_.year
    month = request.args.get("month", type=int) or today_.month
    status = (request.args.get("status") or "").strip()
    q = (request.args.get("q") or "").strip()

    if year < 1 or year > 9999:
        return jsonify({"error": "Ano inválido"}), 400
    if month < 1 or month > 12:
        return jsonify({"error": "Mês inválido"}), 400
    if status in ("all",):
        status = ""

    rows = services.history(current_user.id, year, month, status or None, q or None)
    return jsonify({
        "year": year,
        "month": month,
        "month_name": month_name(month),
        "records": [r.to_dict() for r in rows],
    })


@bp.get("/stats")
@login_required
@require_approved
def stats():
    period = (request.args.get("period") or "today").strip()
    if period not in PERIODS:
        return jsonify({"error": "Período inválido"}), 400
    return jsonify(services.period_stats(current_user.id, period, date.today()))
