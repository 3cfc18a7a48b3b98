"""
Painel administrativo: usuários, atividades e atribuições.
"""
from followup.blueprints.activities import services as activities
from followup.blueprints.chat import services as chat
from followup.models import Activity, User, UserActivity

from conftest import DIA


class TestPermissions:
    """Somente admin e supervisor"""

    def test_sem_login(self, client):
        assert client.get("/api/admin/users").status_code == 401

    def test_operador_recebe_403(self, operador, login):
        client = login(operador)
        assert client.get("/api/admin/users").status_code == 403
        assert client.get("/api/admin/dashboard").status_code == 403

    def test_admin_acessa(self, make_user, login):
        admin = make_user("admin@followup.com.br", role="admin")
        client = login(admin)
        assert client.get("/api/admin/users").status_code == 200


class TestUsers:
    """Aprovação e edição de usuários"""

    def test_aprovar_e_rejeitar(self, supervisor, make_user, login):
        novo = make_user("novo@followup.com.br", status="pending")
        client = login(supervisor)

        resp = client.get("/api/admin/users", query_string={"status": "pending"})
        assert [u["id"] for u in resp.get_json()["users"]] == [novo.id]

        assert client.post(f"/api/admin/users/{novo.id}/approve").status_code == 200
        assert novo.approval_status == "approved"
        assert client.post(f"/api/admin/users/{novo.id}/reject").status_code == 200
        assert novo.approval_status == "rejected"

    def test_status_de_filtro_invalido(self, supervisor, login):
        client = login(supervisor)
        assert client.get("/api/admin/users", query_string={"status": "x"}).status_code == 400

    def test_editar_usuario(self, supervisor, operador, login):
        client = login(supervisor)

        resp = client.patch(f"/api/admin/users/{operador.id}", json={
            "full_name": "  Ana Souza ", "email": "ana@followup.com.br", "role": "operador_12_36_noturno",
        })

        assert resp.status_code == 200
        assert operador.full_name == "Ana Souza"
        assert operador.email == "ana@followup.com.br"
        assert operador.role == "operador_12_36_noturno"

    def test_reenviar_o_proprio_email(self, supervisor, operador, login):
        client = login(supervisor)
        resp = client.patch(f"/api/admin/users/{operador.id}", json={"email": operador.email, "role": "operador"})
        assert resp.status_code == 200
        assert operador.email == "operador@followup.com.br"

    def test_editar_com_email_de_outro(self, supervisor, operador, login):
        client = login(supervisor)
        resp = client.patch(f"/api/admin/users/{operador.id}", json={"email": supervisor.email})
        assert resp.status_code == 409

    def test_permissao_invalida(self, supervisor, operador, login):
        client = login(supervisor)
        resp = client.patch(f"/api/admin/users/{operador.id}", json={"role": "dono"})
        assert resp.status_code == 400

    def test_excluir_usuario_sem_historico(self, supervisor, make_user, make_activity, login):
        novo = make_user("novo@followup.com.br", status="pending")
        make_activity("E-mails", assign_to=[novo])
        client = login(supervisor)

        assert client.delete(f"/api/admin/users/{novo.id}").status_code == 200
        assert User.query.filter_by(email="novo@followup.com.br").first() is None
        assert UserActivity.query.count() == 0

    def test_excluir_usuario_com_historico(self, supervisor, operador, login):
        chat.broadcast(operador.id, "oi")
        client = login(supervisor)
        assert client.delete(f"/api/admin/users/{operador.id}").status_code == 409


class TestActivities:
    """Catálogo de atividades"""

    def test_crud(self, supervisor, login):
        client = login(supervisor)

        resp = client.post("/api/admin/activities", json={
            "name": "Plantão", "description": "noite", "is_duty_activity": True,
        })
        assert resp.status_code == 201
        activity = resp.get_json()["activity"]
        assert activity["is_duty_activity"] is True
        assert activity["is_monthly_conference"] is False

        resp = client.put(f"/api/admin/activities/{activity['id']}", json={
            "name": "Plantão noturno", "is_duty_activity": False, "is_monthly_conference": True,
        })
        assert resp.get_json()["activity"]["name"] == "Plantão noturno"
        assert resp.get_json()["activity"]["is_monthly_conference"] is True

        names = [a["name"] for a in client.get("/api/admin/activities").get_json()["activities"]]
        assert names == ["Plantão noturno"]

        assert client.delete(f"/api/admin/activities/{activity['id']}").status_code == 200
        assert Activity.query.count() == 0

    def test_nome_obrigatorio(self, supervisor, login):
        client = login(supervisor)
        assert client.post("/api/admin/activities", json={"name": ""}).status_code == 400
        assert client.post("/api/admin/activities", json={"name": {"pt": "x"}}).status_code == 400
        assert Activity.query.count() == 0

    def test_excluir_atividade_em_uso(self, supervisor, operador, make_activity, login):
        a = make_activity("E-mails", assign_to=[operador])
        activities.start_day(operador.id, DIA)
        client = login(supervisor)

        assert client.delete(f"/api/admin/activities/{a.id}").status_code == 409
        assert Activity.query.count() == 1


class TestAssignments:
    """Atribuições por atividade"""

    def test_substitui_a_lista(self, supervisor, operador, make_user, make_activity, login):
        colega = make_user("colega@followup.com.br")
        a = make_activity("E-mails", assign_to=[operador])
        client = login(supervisor)

        resp = client.put(f"/api/admin/activities/{a.id}/assignments", json={"user_ids": [colega.id, colega.id]})

        assert resp.status_code == 200
        assert resp.get_json()["user_ids"] == [colega.id]
        rows = client.get("/api/admin/assignments").get_json()["assignments"]
        assert [(r["user_id"], r["activity_id"]) for r in rows] == [(colega.id, a.id)]

    def test_lista_vazia_remove_todas(self, supervisor, operador, make_activity, login):
        a = make_activity("E-mails", assign_to=[operador])
        client = login(supervisor)

        assert client.put(f"/api/admin/activities/{a.id}/assignments", json={"user_ids": []}).status_code == 200
        assert UserActivity.query.count() == 0

    def test_usuario_inexistente_nao_apaga_nada(self, supervisor, operador, make_activity, login):
        a = make_activity("E-mails", assign_to=[operador])
        client = login(supervisor)

        resp = client.put(f"/api/admin/activities/{a.id}/assignments", json={"user_ids": [999]})
        assert resp.status_code == 400
        assert UserActivity.query.count() == 1

    def test_payload_invalido(self, supervisor, make_activity, login):
        a = make_activity("E-mails")
        client = login(supervisor)
        assert client.put(f"/api/admin/activities/{a.id}/assignments", json={"user_ids": "1"}).status_code == 400
        assert client.put(f"/api/admin/activities/{a.id}/assignments", json={"user_ids": ["x"]}).status_code == 400
        assert client.put(f"/api/admin/activities/{a.id}/assignments", json=[1]).status_code == 400
