from .user import User
from .activity import Activity, UserActivity
from .daily_record import DailyRecord
from .pending_item import PendingItem
from .chat_message import ChatMessage

__all__ = [
    # Usuários
    "User",

    # Catálogo / atribuições
    "Activity",
    "UserActivity",

    # Registros do dia
    "DailyRecord",

    # Pendências e solicitações especiais
    "PendingItem",

    # Chat
    "ChatMessage",
]
