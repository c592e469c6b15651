from __future__ import annotations

from tradielink.domain.entities.typing_intent import TypingIntent
from tradielink.infrastructure.db.models.typing_intent import TypingIntentModel


def model_to_entity(model: TypingIntentModel) -> TypingIntent:
    return TypingIntent(
        from_user_id=model.from_user_id,
        to_user_id=model.to_user_id,
        is_typing=model.is_typing,
        updated_at=model.updated_at,
    )
