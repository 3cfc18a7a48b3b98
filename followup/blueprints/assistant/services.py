"""
Assistente de ajuda: base de conhecimento fixa, escolhida por palavras-chave.

Pontuação de uma categoria = quantidade de palavras da pergunta que contêm
alguma das palavras-chave. Empate fica com a primeira categoria; sem nenhum
acerto, a resposta vem de "sistema".
"""
from __future__ import annotations

import random

DEFAULT_CATEGORY = "sistema"

KNOWLEDGE_BASE = {
    "pendencias": {
        "keywords": ("pend", "pendênc", "atraso", "atrasadas"),
        "responses": (
            'Pendências são atividades que não foram concluídas no dia. Elas aparecem em "Pendências e Solicitações", onde você pode atribuir a outro usuário ou resolver.',
            'Ao resolver uma pendência ligada a uma atividade, o registro original do dia passa para "Concluída com Atraso".',
        ),
    },
    "atividades": {
        "keywords": ("ativid", "ativar", "iniciar", "finalizar", "dia"),
        "responses": (
            'Em "Minhas Atividades": 1) clique "Iniciar Dia" 2) marque cada atividade como "Em Andamento" ou "Concluída" 3) clique "Finalizar Dia".',
            "Status possíveis: Não Iniciada, Em Andamento, Concluída, Pendente e Concluída com Atraso. Atividades de plantão e de conferência mensal têm um status extra.",
            "Ao finalizar o dia, atividades em andamento e atividades não iniciadas sem justificativa viram pendências.",
        ),
    },
    "chat": {
        "keywords": ("chat", "mensagem", "conversa", "privad", "broadcast", "grupo"),
        "responses": (
            "O chat tem duas formas: Chat Geral (mensagem para todos) e conversas privadas com um usuário específico.",
            "Só usuários aprovados enviam mensagens. O contador de não lidas aparece nas notificações.",
        ),
    },
    "admin": {
        "keywords": ("admin", "usuário", "painel", "aprovação", "permiss", "role", "editor"),
        "responses": (
            "O Painel Admin permite: 1) aprovar novos usuários 2) editar nome, e-mail e permissão 3) ver estatísticas 4) atribuir atividades.",
            "Administradores e supervisores acessam o Painel Admin. Operadores só veem as próprias atividades.",
        ),
    },
    "ia": {
        "keywords": ("ia", "inteligencia", "artificial", "como", "pergunta", "resposta", "função", "usar"),
        "responses": (
            "Este assistente responde dúvidas sobre pendências, atividades, chat, administração e uso geral do sistema.",
            "Digite sua pergunta normalmente. Quanto mais específica, melhor a resposta.",
        ),
    },
    "logs": {
        "keywords": ("log", "debug", "erro", "operação", "rastreamento"),
        "responses": (
            "Todas as gravações (inclusões e alterações) são registradas no log do servidor, com tabela e chave do registro.",
            "Em caso de erro, a operação é desfeita e o detalhe fica no log do servidor. Procure o administrador do sistema.",
        ),
    },
    "hist": {
        "keywords": ("histórico", "relatorio", "analise", "estatistica", "performance", "gráfico", "taxa"),
        "responses": (
            'A aba "Histórico" mostra seus registros por mês, com filtro por status e busca por atividade.',
            'Nas estatísticas você escolhe "Hoje", "Semana" ou "Mês" e vê a comparação com o período anterior.',
        ),
    },
    "sistema": {
        "keywords": ("sistema", "funciona", "como", "o que", "para que", "qual", "quando", "onde", "geral"),
        "responses": (
            "FollowUp é um sistema de acompanhamento de atividades operacionais: atividades diárias, pendências, chat, painel administrativo e relatórios.",
            "Principais funções: iniciar e finalizar o dia, marcar atividades, atribuir e resolver pendências, conversar no chat e aprovar usuários.",
        ),
    },
}


def score(question: str, keywords) -> int:
    words = question.lower().strip().split(" ")
    return sum(1 for kw in keywords for word in words if kw in word)


def query_ai(question: str, rng=random) -> dict:
    best_category = DEFAULT_CATEGORY
    best_score = 0
    for category, data in KNOWLEDGE_BASE.items():
        s = score(question, data["keywords"])
        if s > best_score:
            best_category, best_score = category, s

    responses = KNOWLEDGE_BASE[best_category]["responses"]
    confidence = min(100, best_score / 2 + 50)
    return {
        "answer": rng.choice(responses),
        "confidence": int(confidence + 0.5),
        "sources": [best_category],
    }
