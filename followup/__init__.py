from __future__ import annotations

import os

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .config import Config
from .extensions import db, login_manager, csrf


def create_app(config_object=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config())

    # instance/ precisa existir para o sqlite
    os.makedirs(app.instance_path, exist_ok=True)

    # app.logger é o logger "followup"; os loggers dos módulos sobem até ele
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)
    csrf.init_app(app)

    # user loader
    from .models.user import User

    @login_manager.user_loader
    def load_user(user_id: str):
        if not user_id.isdigit():
            return None
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Faça login para continuar."}), 401

    # register blueprints
    from .blueprints.main.routes import main_bp
    from .blueprints.auth.routes import auth_bp
    from .blueprints.activities.routes import bp as activities_bp
    from .blueprints.pending.routes import bp as pending_bp
    from .blueprints.chat.routes import bp as chat_bp
    from .blueprints.admin.routes import bp as admin_bp
    from .blueprints.assistant.routes import bp as assistant_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(activities_bp)
    app.register_blueprint(pending_bp)
    app.register_blueprint(chat_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(assistant_bp)

    # erros sempre em JSON
    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(SQLAlchemyError)
    def db_error(e: SQLAlchemyError):
        db.session.rollback()
        app.logger.exception("falha no banco de dados")
        return jsonify({"error": "Não foi possível concluir a operação."}), 500

    # create db tables
    with app.app_context():
        # garante que todos os models sejam importados/registrados no metadata
        from . import models  # noqa: F401
        db.create_all()

    # CLI commands
    from .seed import register_seed_command
    register_seed_command(app)

    return app
