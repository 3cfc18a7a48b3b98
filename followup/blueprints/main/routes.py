from datetime import date
from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from ...models import User
from ...utils.security import require_approved
from ..activities.services import personal_dashboard
from ..chat.services import unread_count
from ..pending.services import count_unresolved

main_bp = Blueprint("main", __name__)


@main_bp.get("/health")
def health():
    return jsonify({"status": "ok"})


@main_bp.get("/api/dashboard")
@login_required
@require_approved
def dashboard():
    data = personal_dashboard(current_user.id, date.today())
    # primeiro nome para a saudação
    name = (current_user.full_name or "").split(" ")[0] or "Usuário"
    data["greeting"] = f"Olá, {name}!"
    return jsonify(data)


@main_bp.get("/api/notifications")
@login_required
@require_approved
def notifications():
    """Contadores para o cliente consultar periodicamente."""
    payload = {
        "pending_items": count_unresolved(),
        "unread_messages": unread_count(current_user.id),
    }
    if current_user.is_manager():
        payload["users_awaiting_approval"] = User.query.filter_by(approval_status="pending").count()
    return jsonify(payload)
