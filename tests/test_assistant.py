import random

from followup.blueprints.assistant.services import KNOWLEDGE_BASE, query_ai


class TestQueryAi:
    """Assistente por palavras-chave"""

    def test_pergunta_sobre_pendencias(self):
        resp = query_ai("onde vejo as pendências atrasadas?", rng=random.Random(1))

        assert resp["sources"] == ["pendencias"]
        # "pendências" e "atrasadas" batem com 3 palavras-chave
        assert resp["confidence"] == 52
        assert resp["answer"] in KNOWLEDGE_BASE["pendencias"]["responses"]

    def test_sem_acerto_responde_sistema(self):
        resp = query_ai("xyz", rng=random.Random(1))
        assert resp["sources"] == ["sistema"]
        assert resp["confidence"] == 50

    def test_empate_fica_com_a_primeira_categoria(self):
        # "chat" (chat) e "admin" (admin): uma palavra cada
        assert query_ai("chat admin")["sources"] == ["chat"]

    def test_confianca_limitada_a_100(self):
        pergunta = " ".join(["chat"] * 150)
        assert query_ai(pergunta)["confidence"] == 100


class TestAssistantApi:
    def test_pergunta(self, operador, login):
        client = login(operador)
        resp = client.post("/api/assistant/ask", json={"question": "como mandar mensagem no chat"})
        assert resp.status_code == 200
        assert resp.get_json()["sources"] == ["chat"]

    def test_pergunta_vazia(self, operador, login):
        client = login(operador)
        assert client.post("/api/assistant/ask", json={"question": " "}).status_code == 400

    def test_pergunta_que_nao_e_texto(self, operador, login):
        client = login(operador)
        assert client.post("/api/assistant/ask", json={"question": 42}).status_code == 400
        assert client.post("/api/assistant/ask", json=["chat"]).status_code == 400
