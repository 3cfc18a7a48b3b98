from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from ...extensions import db
from ...models import PendingItem, User
from ...models.pending_item import REQUEST_TYPES, REQUEST_TYPE_LABELS
from ...utils.forms import first_error
from ...utils.security import require_approved
from .forms import AssignForm, ResolveForm, SpecialRequestForm
from . import services

bp = Blueprint("pending", __name__, url_prefix="/api/pending")


@bp.get("/")
@login_required
@require_approved
def index():
    """Pendências e solicitações ainda não resolvidas (mais recentes primeiro)."""
    items = services.list_unresolved()
    users = User.query.filter_by(approval_status="approved").order_by(User.full_name.asc()).all()
    return jsonify({
        "items": [i.to_dict() for i in items],
        "users": [{"id": u.id, "full_name": u.full_name, "email": u.email} for u in users],
        "request_types": [{"value": t, "label": REQUEST_TYPE_LABELS[t]} for t in REQUEST_TYPES],
    })


@bp.get("/count")
@login_required
@require_approved
def count():
    return jsonify({"count": services.count_unresolved()})


@bp.post("/<int:item_id>/assign")
@login_required
@require_approved
def assign(item_id: int):
    item = db.get_or_404(PendingItem, item_id)
    form = AssignForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    target = db.session.get(User, form.user_id.data)
    try:
        services.assign_to_user(item, target)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"message": "Atribuído com sucesso", "item": item.to_dict()})


@bp.post("/<int:item_id>/assign-to-me")
@login_required
@require_approved
def assign_to_me(item_id: int):
    item = db.get_or_404(PendingItem, item_id)
    services.assign_to_user(item, current_user)
    return jsonify({"message": "Atribuído a você", "item": item.to_dict()})


@bp.post("/<int:item_id>/resolve")
@login_required
@require_approved
def resolve(item_id: int):
    item = db.get_or_404(PendingItem, item_id)
    form = ResolveForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    try:
        services.resolve(item, form.justification.data, form.action_taken.data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"message": "Resolvido!", "item": item.to_dict()})


@bp.post("/special-requests")
@login_required
@require_approved
def create_special_request():
    form = SpecialRequestForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    item = services.create_special_request(
        current_user.id,
        form.request_type.data,
        form.description.data,
        form.action_taken.data,
    )
    return jsonify({"message": "Solicitação criada", "item": item.to_dict()}), 201
