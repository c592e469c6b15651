from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from tradielink.application.dto.thread import ThreadRow
from tradielink.domain.entities.thread import Thread
from tradielink.infrastructure.db.mappers import thread as mapper
from tradielink.infrastructure.db.mappers import user as user_mapper
from tradielink.infrastructure.db.models.message import MessageModel
from tradielink.infrastructure.db.models.thread import ThreadModel
from tradielink.infrastructure.db.models.user import UserModel


class ThreadReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, thread_id: int) -> Thread | None:
        result = await self._session.get(ThreadModel, thread_id)
        return mapper.model_to_entity(result) if result else None

    async def get_by_pair(self, builder_id: int, tradie_id: int) -> Thread | None:
        stmt = select(ThreadModel).where(
            ThreadModel.builder_id == builder_id,
            ThreadModel.tradie_id == tradie_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: int) -> list[ThreadRow]:
        ranked = select(
            MessageModel.thread_id,
            MessageModel.body,
            MessageModel.created_at,
            func.row_number()
            .over(
                partition_by=MessageModel.thread_id,
                order_by=(MessageModel.created_at.desc(), MessageModel.id.desc()),
            )
            .label("rn"),
        ).subquery()
        peer = aliased(UserModel)
        peer_id = case(
            (ThreadModel.builder_id == user_id, ThreadModel.tradie_id),
            else_=ThreadModel.builder_id,
        )

        stmt = (
            select(ThreadModel, peer, ranked.c.body, ranked.c.created_at)
            .join(peer, peer.id == peer_id)
            .outerjoin(
                ranked,
                and_(ranked.c.thread_id == ThreadModel.id, ranked.c.rn == 1),
            )
            .where(or_(ThreadModel.builder_id == user_id, ThreadModel.tradie_id == user_id))
        )
        result = await self._session.execute(stmt)
        return [
            ThreadRow(
                thread=mapper.model_to_entity(thread),
                peer=user_mapper.model_to_entity(peer_model),
                last_message_body=body,
                last_message_at=last_at,
            )
            for thread, peer_model, body, last_at in result.all()
        ]


class ThreadWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_or_create(
        self,
        builder_id: int,
        tradie_id: int,
        created_at: datetime,
    ) -> tuple[Thread, bool]:
        """Insert the pair idempotently. Returns (thread, created_flag)."""
        stmt = (
            pg_insert(ThreadModel)
            .values(builder_id=builder_id, tradie_id=tradie_id, created_at=created_at)
            .on_conflict_do_nothing(constraint="uq_thread_pair")
            .returning(ThreadModel)
        )
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()

        if row is not None:
            return mapper.model_to_entity(row), True

        # the pair already has a thread
        existing = await ThreadReaderRepo(self._session).get_by_pair(builder_id, tradie_id)
        assert existing is not None
        return existing, False
