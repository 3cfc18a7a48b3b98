import logging

from flask import Blueprint, current_app, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from ...extensions import db
from ...models.user import User
from ...utils.forms import first_error
from .forms import LoginForm, RegisterForm

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.get("/csrf")
def csrf_token():
    # cliente envia de volta no header X-CSRFToken
    return jsonify({"csrf_token": generate_csrf()})


@auth_bp.post("/login")
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    email = (form.email.data or "").strip().lower()
    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(form.password.data):
        return jsonify({"error": "Login inválido."}), 401

    # e-mail da gerência configurado: sempre supervisor aprovado
    admin_email = current_app.config.get("ADMIN_EMAIL")
    if admin_email and user.email == admin_email:
        if user.role != "supervisor" or user.approval_status != "approved":
            user.role = "supervisor"
            user.approval_status = "approved"
            db.session.commit()
            logger.info("update profiles id=%s promovido a supervisor", user.id)

    login_user(user)
    return jsonify({"user": user.to_dict()})


@auth_bp.post("/register")
def register():
    form = RegisterForm()
    if not form.validate_on_submit():
        return jsonify({"error": first_error(form)}), 400

    email = form.email.data.strip().lower()
    if User.query.filter_by(email=email).first():
        return jsonify({"error": "E-mail já cadastrado."}), 409

    # primeiro usuário do sistema já entra como supervisor aprovado
    is_first_user = User.query.count() == 0

    user = User(
        email=email,
        full_name=(form.full_name.data or "").strip() or None,
        role="supervisor" if is_first_user else "operador",
        approval_status="approved" if is_first_user else "pending",
    )
    user.set_password(form.password.data)
    db.session.add(user)
    db.session.commit()
    logger.info("insert profiles id=%s role=%s status=%s", user.id, user.role, user.approval_status)

    message = "Conta criada." if is_first_user else "Solicitação enviada. Aguarde aprovação."
    return jsonify({"message": message, "user": user.to_dict()}), 201


@auth_bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"message": "Sessão encerrada."})


@auth_bp.get("/me")
@login_required
def me():
    return jsonify({"user": current_user.to_dict()})
