from flask import Blueprint, jsonify
from flask_login import login_required

from ...utils.forms import json_body, optional_text
from ...utils.security import require_approved
from .services import query_ai

bp = Blueprint("assistant", __name__, url_prefix="/api/assistant")


@bp.post("/ask")
@login_required
@require_approved
def ask():
    try:
        question = (optional_text(json_body(), "question") or "").strip()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    if not question:
        return jsonify({"error": "Digite uma pergunta."}), 400
    return jsonify(query_ai(question))
