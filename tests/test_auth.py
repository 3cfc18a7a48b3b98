from followup.models import User

from conftest import SENHA


class TestRegister:
    """Cadastro"""

    def test_primeiro_usuario_vira_supervisor_aprovado(self, client):
        resp = client.post("/auth/register", json={
            "email": "Primeiro@Followup.com.br", "full_name": "Primeiro", "password": SENHA,
        })
        assert resp.status_code == 201
        user = User.query.filter_by(email="primeiro@followup.com.br").one()
        assert user.role == "supervisor"
        assert user.approval_status == "approved"

    def test_demais_ficam_aguardando_aprovacao(self, client, supervisor):
        resp = client.post("/auth/register", json={"email": "novo@followup.com.br", "password": SENHA})
        assert resp.status_code == 201
        data = resp.get_json()["user"]
        assert data["role"] == "operador"
        assert data["approval_status"] == "pending"

    def test_email_duplicado(self, client, operador):
        resp = client.post("/auth/register", json={"email": operador.email, "password": SENHA})
        assert resp.status_code == 409

    def test_senha_curta(self, client):
        resp = client.post("/auth/register", json={"email": "x@followup.com.br", "password": "123"})
        assert resp.status_code == 400
        assert User.query.count() == 0

    def test_email_invalido(self, client):
        resp = client.post("/auth/register", json={"email": "sem-arroba", "password": SENHA})
        assert resp.status_code == 400


class TestLogin:
    """Login / sessão"""

    def test_senha_errada(self, client, operador):
        resp = client.post("/auth/login", json={"email": operador.email, "password": "errada"})
        assert resp.status_code == 401

    def test_login_e_me(self, client, operador):
        resp = client.post("/auth/login", json={"email": "OPERADOR@followup.com.br", "password": SENHA})
        assert resp.status_code == 200
        assert client.get("/auth/me").get_json()["user"]["id"] == operador.id

    def test_email_da_gerencia_e_promovido(self, client, make_user):
        # ADMIN_EMAIL do TestConfig
        chefe = make_user("chefe@followup.com.br", role="operador", status="pending")

        resp = client.post("/auth/login", json={"email": chefe.email, "password": SENHA})

        assert resp.status_code == 200
        assert chefe.role == "supervisor"
        assert chefe.approval_status == "approved"

    def test_email_da_gerencia_se_cadastra_e_e_promovido(self, client, supervisor):
        resp = client.post("/auth/register", json={"email": "chefe@followup.com.br", "password": SENHA})
        assert resp.status_code == 201
        assert resp.get_json()["user"]["approval_status"] == "pending"

        resp = client.post("/auth/login", json={"email": "chefe@followup.com.br", "password": SENHA})
        assert resp.get_json()["user"]["role"] == "supervisor"
        assert resp.get_json()["user"]["approval_status"] == "approved"

    def test_corpo_invalido(self, client, operador):
        assert client.post("/auth/login", json=[operador.email, SENHA]).status_code == 400
        assert client.post("/auth/login", json={"email": [operador.email], "password": SENHA}).status_code == 400

    def test_logout(self, client, operador, login):
        login(operador)
        assert client.post("/auth/logout").status_code == 200

    def test_csrf_token(self, client):
        assert "csrf_token" in client.get("/auth/csrf").get_json()


class TestNotifications:
    """/api/notifications e /health"""

    def test_health(self, client):
        assert client.get("/health").get_json() == {"status": "ok"}

    def test_operador_nao_ve_aprovacoes(self, operador, login):
        client = login(operador)
        data = client.get("/api/notifications").get_json()
        assert data == {"pending_items": 0, "unread_messages": 0}

    def test_supervisor_ve_aprovacoes(self, supervisor, make_user, login):
        make_user("espera@followup.com.br", status="pending")
        client = login(supervisor)
        assert client.get("/api/notifications").get_json()["users_awaiting_approval"] == 1

    def test_dashboard_saudacao(self, operador, login):
        client = login(operador)
        data = client.get("/api/dashboard").get_json()
        assert data["greeting"] == "Olá, Ana!"
        assert data["today"]["total"] == 0
        assert data["completion_rate"] == 0
