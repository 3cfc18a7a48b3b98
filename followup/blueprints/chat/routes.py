from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from ...extensions import db
from ...models import User
from ...utils.forms import json_body, optional_text
from ...utils.security import require_approved
from . import services

bp = Blueprint("chat", __name__, url_prefix="/api/chat")


@bp.get("/users")
@login_required
@require_approved
def users():
    q = (request.args.get("q") or "").strip().lower()
    rows = services.contacts(current_user.id)
    if q:
        rows = [u for u in rows if q in (u.full_name or "").lower() or q in u.email.lower()]
    return jsonify([{"id": u.id, "full_name": u.full_name, "email": u.email, "role": u.role} for u in rows])


@bp.get("/messages/<int:other_id>")
@login_required
@require_approved
def messages(other_id: int):
    db.get_or_404(User, other_id)
    rows = services.conversation(current_user.id, other_id)
    return jsonify([m.to_dict() for m in rows])


@bp.post("/messages/<int:other_id>")
@login_required
@require_approved
def send(other_id: int):
    receiver = db.session.get(User, other_id)
    try:
        text = optional_text(json_body(), "message")
        msg = services.send_message(current_user.id, receiver, text)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(msg.to_dict()), 201


@bp.get("/broadcast")
@login_required
@require_approved
def list_broadcast():
    return jsonify([m.to_dict() for m in services.broadcasts()])


@bp.post("/broadcast")
@login_required
@require_approved
def send_broadcast():
    try:
        text = optional_text(json_body(), "message")
        msg = services.broadcast(current_user.id, text)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(msg.to_dict()), 201


@bp.get("/unread-count")
@login_required
@require_approved
def unread_count():
    return jsonify({"count": services.unread_count(current_user.id)})
