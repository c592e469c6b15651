from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradielink.domain.entities.message import Message
from tradielink.domain.entities.read_cursor import EPOCH
from tradielink.infrastructure.db.mappers import message as mapper
from tradielink.infrastructure.db.models.message import MessageModel
from tradielink.infrastructure.db.models.read_cursor import ReadCursorModel
from tradielink.infrastructure.db.models.thread import ThreadModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_messages(self, thread_id: int) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.thread_id == thread_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def count_unread_by_thread(self, user_id: int) -> dict[int, int]:
        stmt = (
            select(MessageModel.thread_id, func.count(MessageModel.id))
            .join(ThreadModel, ThreadModel.id == MessageModel.thread_id)
            .outerjoin(
                ReadCursorModel,
                and_(
                    ReadCursorModel.user_id == user_id,
                    ReadCursorModel.peer_id == MessageModel.sender_id,
                ),
            )
            .where(
                or_(ThreadModel.builder_id == user_id, ThreadModel.tradie_id == user_id),
                MessageModel.sender_id != user_id,
                MessageModel.created_at > func.coalesce(ReadCursorModel.last_read_at, EPOCH),
            )
            .group_by(MessageModel.thread_id)
        )
        result = await self._session.execute(stmt)
        return {thread_id: count for thread_id, count in result.all()}


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(
        self,
        thread_id: int,
        sender_id: int,
        body: str,
        created_at: datetime,
    ) -> Message:
        model = MessageModel(
            thread_id=thread_id,
            sender_id=sender_id,
            body=body,
            created_at=created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)
