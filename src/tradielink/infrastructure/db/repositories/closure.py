from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from tradielink.infrastructure.db.models.closure import ThreadClosureModel


class ClosureReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def closed_at_by_peer(self, user_id: int) -> dict[int, datetime]:
        stmt = select(ThreadClosureModel.peer_id, ThreadClosureModel.closed_at).where(
            ThreadClosureModel.user_id == user_id
        )
        result = await self._session.execute(stmt)
        return {peer_id: closed_at for peer_id, closed_at in result.all()}


class ClosureWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(self, user_id: int, peer_id: int, closed_at: datetime) -> None:
        stmt = (
            pg_insert(ThreadClosureModel)
            .values(user_id=user_id, peer_id=peer_id, closed_at=closed_at)
            .on_conflict_do_update(
                constraint="uq_thread_closure_pair",
                set_={"closed_at": closed_at},
            )
        )
        await self._session.execute(stmt)
