from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from tradielink.infrastructure.db.models.read_cursor import ReadCursorModel


class ReadCursorWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(self, user_id: int, peer_id: int, last_read_at: datetime) -> None:
        stmt = pg_insert(ReadCursorModel).values(
            user_id=user_id,
            peer_id=peer_id,
            last_read_at=last_read_at,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_read_cursor_pair",
            set_={
                "last_read_at": func.greatest(
                    ReadCursorModel.last_read_at, stmt.excluded.last_read_at,
                ),
            },
        )
        await self._session.execute(stmt)
