from __future__ import annotations

from tradielink.domain.entities.message import Message
from tradielink.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        thread_id=model.thread_id,
        sender_id=model.sender_id,
        body=model.body,
        created_at=model.created_at,
    )
