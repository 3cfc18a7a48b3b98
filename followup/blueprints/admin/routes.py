import logging
from datetime import date

from flask import Blueprint, Response, jsonify, request

from ...extensions import db
from ...models import Activity, User, UserActivity
from ...models.user import APPROVAL_CHOICES
from ...utils.dates import month_range, parse_iso_date, period_range
from ...utils.forms import first_error, json_body
from ...utils.security import require_roles
from .forms import ActivityForm, UserUpdateForm
from . import services

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__, url_prefix="/api/admin")

MANAGERS = ("admin", "supervisor")


# --------------------
# Usuários
# --------------------

@bp.get("/users")
@require_roles(*MANAGERS)
def users_index():
    status = (request.args.get("status") or "").strip()
    q = User.query
    if status:
        if status not in APPROVAL_CHOICES:
            return jsonify({"error": "Status inválido."}), 400
        q = q.filter_by(approval_status=status)
    users = q.order_by(User.created_at.desc()).all()
    return jsonify({"users": [u.to_dict() for u in users]})


def _set_approval(user_id: int, status: str):
    user = db.get_or_404(User, user_id)
    user.approval_status = status
    db.session.commit()
    logger.info("update profiles id=%s approval_status=%s", user.id, status)
    return user


@bp.post("/users/<int:user_id>/approve")
@require_roles(*MANAGERS)
def users_approve(user_id: int):
    user = _set_approval(user_id, "approved")
    return jsonify({"message": "Usuário aprovado.", "user": user.to_dict()})


@bp.post("/users/<int:user_id>/reject")
@require_roles(*MANAGERS)
def users_reject(user_id: int):
    user = _set_approval(user_id, "rejected")
    return jsonify({"message": "Usuário rejeitado.", "user": user.to_dict()})


@bp.patch("/users/<int:user_id>")
@require_roles(*MANAGERS)
def users_update(user_id: int):
    user = db.get_or_404(User, user_id)
    form = UserUpdateForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    # e-mail só muda se for diferente do atual
    email = (form.email.data or "").strip().lower()
    if email and email != user.email:
        if User.query.filter(User.email == email, User.id != user.id).first():
            return jsonify({"error": "E-mail já cadastrado."}), 409
        user.email = email

    user.full_name = (form.full_name.data or "").strip() or None
    if form.role.data:
        user.role = form.role.data

    db.session.commit()
    logger.info("update profiles id=%s role=%s", user.id, user.role)
    return jsonify({"message": "Usuário atualizado.", "user": user.to_dict()})


@bp.delete("/users/<int:user_id>")
@require_roles(*MANAGERS)
def users_delete(user_id: int):
    user = db.get_or_404(User, user_id)
    try:
        services.delete_user(user)
    except ValueError as e:
        return jsonify({"error": str(e)}), 409
    return jsonify({"message": "Usuário excluído."})


# --------------------
# Atividades
# --------------------

@bp.get("/activities")
@require_roles(*MANAGERS)
def activities_index():
    activities = Activity.query.order_by(Activity.name.asc()).all()
    return jsonify({"activities": [a.to_dict() for a in activities]})


@bp.post("/activities")
@require_roles(*MANAGERS)
def activities_create():
    form = ActivityForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    activity = Activity(
        name=form.name.data.strip(),
        description=(form.description.data or "").strip() or None,
        is_duty_activity=bool(form.is_duty_activity.data),
        is_monthly_conference=bool(form.is_monthly_conference.data),
    )
    db.session.add(activity)
    db.session.commit()
    logger.info("insert activities id=%s", activity.id)
    return jsonify({"message": "Atividade criada.", "activity": activity.to_dict()}), 201


@bp.put("/activities/<int:activity_id>")
@require_roles(*MANAGERS)
def activities_update(activity_id: int):
    activity = db.get_or_404(Activity, activity_id)
    form = ActivityForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    activity.name = form.name.data.strip()
    activity.description = (form.description.data or "").strip() or None
    activity.is_duty_activity = bool(form.is_duty_activity.data)
    activity.is_monthly_conference = bool(form.is_monthly_conference.data)
    db.session.commit()
    logger.info("update activities id=%s", activity.id)
    return jsonify({"message": "Atividade atualizada.", "activity": activity.to_dict()})


@bp.delete("/activities/<int:activity_id>")
@require_roles(*MANAGERS)
def activities_delete(activity_id: int):
    activity = db.get_or_404(Activity, activity_id)
    try:
        services.delete_activity(activity)
    except ValueError as e:
        return jsonify({"error": str(e)}), 409
    return jsonify({"message": "Atividade excluída."})


# --------------------
# Atribuições
# --------------------

@bp.get("/assignments")
@require_roles(*MANAGERS)
def assignments_index():
    rows = UserActivity.query.order_by(UserActivity.activity_id.asc(), UserActivity.user_id.asc()).all()
    return jsonify({"assignments": [
        {"id": r.id, "user_id": r.user_id, "activity_id": r.activity_id} for r in rows
    ]})


@bp.put("/activities/<int:activity_id>/assignments")
@require_roles(*MANAGERS)
def assignments_replace(activity_id: int):
    activity = db.get_or_404(Activity, activity_id)
    try:
        user_ids = json_body().get("user_ids")
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    if not isinstance(user_ids, list):
        return jsonify({"error": "Informe user_ids como lista."}), 400
    try:
        ids = [int(uid) for uid in user_ids]
    except (TypeError, ValueError):
        return jsonify({"error": "user_ids inválido."}), 400

    try:
        rows = services.replace_assignments(activity, ids)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({
        "message": "Atribuições salvas.",
        "user_ids": [r.user_id for r in rows],
    })


# --------------------
# Painel / relatórios
# --------------------

@bp.get("/dashboard")
@require_roles(*MANAGERS)
def dashboard():
    return jsonify(services.admin_dashboard(date.today()))


def _report_range():
    """start/end explícitos têm prioridade sobre period (day, week, month)."""
    start = parse_iso_date(request.args.get("start"))
    end = parse_iso_date(request.args.get("end"))
    if start and end:
        if start > end:
            raise ValueError("Data inicial maior que a final.")
        return start, end

    period = (request.args.get("period") or "month").strip()
    if period == "day":
        period = "today"
    return period_range(period, date.today())


@bp.get("/reports")
@require_roles(*MANAGERS)
def reports():
    try:
        start, end = _report_range()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(services.operator_report(start, end))


@bp.get("/reports/export.csv")
@require_roles(*MANAGERS)
def reports_export():
    try:
        start, end = _report_range()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    data = services.operator_report(start, end)
    body = services.operators_csv(data["operators"])
    filename = f"relatorio-operadores-{start.isoformat()}-{end.isoformat()}.csv"
    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@bp.get("/operators/<int:user_id>/records")
@require_roles(*MANAGERS)
def operator_records(user_id: int):
    user = db.get_or_404(User, user_id)
    start, end = month_range(date.today())
    status = (request.args.get("status") or "").strip() or None
    return jsonify({
        "user": user.to_dict(),
        "records": services.operator_details(user.id, start, end, status),
    })
