from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import and_, or_

from ...extensions import db
from ...models import ChatMessage, User

logger = logging.getLogger(__name__)


def contacts(me_id: int) -> list[User]:
    return (
        User.query
        .filter(User.approval_status == "approved", User.id != me_id)
        .order_by(User.full_name.asc())
        .all()
    )


def conversation(me_id: int, other_id: int) -> list[ChatMessage]:
    """Mensagens entre os dois (mais antigas primeiro); marca as recebidas como lidas."""
    messages = (
        ChatMessage.query
        .filter(or_(
            and_(ChatMessage.sender_id == me_id, ChatMessage.receiver_id == other_id),
            and_(ChatMessage.sender_id == other_id, ChatMessage.receiver_id == me_id),
        ))
        .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
        .all()
    )

    unread = [m for m in messages if m.sender_id == other_id and m.read_at is None]
    if unread:
        now = datetime.utcnow()
        for m in unread:
            m.read_at = now
        db.session.commit()
        logger.info("update chat_messages read_at sender=%s receiver=%s rows=%d", other_id, me_id, len(unread))
    return messages


def send_message(sender_id: int, receiver: User | None, text: str | None) -> ChatMessage:
    text = (text or "").strip()
    if not text:
        raise ValueError("Mensagem vazia.")
    if receiver is None:
        raise ValueError("Destinatário não encontrado.")

    msg = ChatMessage(sender_id=sender_id, receiver_id=receiver.id, message=text, is_broadcast=False)
    db.session.add(msg)
    db.session.commit()
    logger.info("insert chat_messages id=%s sender=%s receiver=%s", msg.id, sender_id, receiver.id)
    return msg


def broadcast(sender_id: int, text: str | None) -> ChatMessage:
    text = (text or "").strip()
    if not text:
        raise ValueError("Mensagem vazia.")

    msg = ChatMessage(sender_id=sender_id, receiver_id=None, message=text, is_broadcast=True)
    db.session.add(msg)
    db.session.commit()
    logger.info("insert chat_messages id=%s broadcast sender=%s", msg.id, sender_id)
    return msg


def broadcasts(limit: int = 100) -> list[ChatMessage]:
    rows = (
        ChatMessage.query
        .filter_by(is_broadcast=True)
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .limit(limit)
        .all()
    )
    return list(reversed(rows))


def unread_count(me_id: int) -> int:
    return (
        ChatMessage.query
        .filter(or_(ChatMessage.receiver_id == me_id, ChatMessage.is_broadcast.is_(True)))
        .filter(ChatMessage.sender_id != me_id)
        .filter(ChatMessage.read_at.is_(None))
        .count()
    )
