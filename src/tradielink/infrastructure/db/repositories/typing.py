from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from tradielink.domain.entities.typing_intent import TypingIntent
from tradielink.infrastructure.db.mappers import typing_intent as mapper
from tradielink.infrastructure.db.models.typing_intent import TypingIntentModel


class TypingReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, from_user_id: int, to_user_id: int) -> TypingIntent | None:
        stmt = select(TypingIntentModel).where(
            TypingIntentModel.from_user_id == from_user_id,
            TypingIntentModel.to_user_id == to_user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None


class TypingWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(
        self,
        from_user_id: int,
        to_user_id: int,
        is_typing: bool,
        updated_at: datetime,
    ) -> None:
        stmt = (
            pg_insert(TypingIntentModel)
            .values(
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                is_typing=is_typing,
                updated_at=updated_at,
            )
            .on_conflict_do_update(
                constraint="uq_typing_intent_direction",
                set_={"is_typing": is_typing, "updated_at": updated_at},
            )
        )
        await self._session.execute(stmt)
