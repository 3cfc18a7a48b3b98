from functools import wraps
from flask import abort
from flask_login import current_user


def _ensure_approved():
    # 401 sem sessão; 403 enquanto a gerência não aprovar o cadastro
    if not current_user.is_authenticated:
        abort(401, description="Faça login para continuar.")
    if not current_user.is_approved():
        abort(403, description="Cadastro aguardando aprovação.")


def require_approved(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        _ensure_approved()
        return f(*args, **kwargs)
    return wrapper


def require_roles(*roles: str):
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            _ensure_approved()
            if current_user.role not in roles:
                abort(403, description="Sem permissão.")
            return f(*args, **kwargs)
        return wrapper
    return decorator
