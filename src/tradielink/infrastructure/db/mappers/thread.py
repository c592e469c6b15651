from __future__ import annotations

from tradielink.domain.entities.thread import Thread
from tradielink.infrastructure.db.models.thread import ThreadModel


def model_to_entity(model: ThreadModel) -> Thread:
    return Thread(
        id=model.id,
        builder_id=model.builder_id,
        tradie_id=model.tradie_id,
        created_at=model.created_at,
    )
