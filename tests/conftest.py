"""
Fixtures comuns: app com banco sqlite em memória por teste,
fábricas de usuário/atividade e login pelo test client.
"""
from datetime import date

import pytest

from followup import create_app
from followup.config import TestConfig
from followup.extensions import db
from followup.models import Activity, User, UserActivity

DIA = date(2026, 3, 10)
SENHA = "senha123"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email, role="operador", status="approved", full_name=None):
        u = User(email=email, full_name=full_name, role=role, approval_status=status)
        u.set_password(SENHA)
        db.session.add(u)
        db.session.commit()
        return u
    return _make


@pytest.fixture
def make_activity(app):
    def _make(name, duty=False, monthly=False, assign_to=()):
        a = Activity(name=name, is_duty_activity=duty, is_monthly_conference=monthly)
        db.session.add(a)
        db.session.commit()
        for user in assign_to:
            db.session.add(UserActivity(user_id=user.id, activity_id=a.id))
        db.session.commit()
        return a
    return _make


@pytest.fixture
def operador(make_user):
    return make_user("operador@followup.com.br", full_name="Ana Operadora")


@pytest.fixture
def supervisor(make_user):
    return make_user("supervisor@followup.com.br", role="supervisor", full_name="Sérgio Supervisor")


@pytest.fixture
def login(client):
    def _login(user):
        resp = client.post("/auth/login", json={"email": user.email, "password": SENHA})
        assert resp.status_code == 200, resp.get_json()
        return client
    return _login
