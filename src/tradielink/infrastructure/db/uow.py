from __future__ import annotations

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from tradielink.infrastructure.db.repositories.closure import (
    ClosureReaderRepo,
    ClosureWriterRepo,
)
from tradielink.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from tradielink.infrastructure.db.repositories.read_cursor import ReadCursorWriterRepo
from tradielink.infrastructure.db.repositories.thread import (
    ThreadReaderRepo,
    ThreadWriterRepo,
)
from tradielink.infrastructure.db.repositories.typing import (
    TypingReaderRepo,
    TypingWriterRepo,
)
from tradielink.infrastructure.db.repositories.user import UserReaderRepo, UserWriterRepo


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.users = UserReaderRepo(session)
        self.users_w = UserWriterRepo(session)
        self.threads = ThreadReaderRepo(session)
        self.threads_w = ThreadWriterRepo(session)
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)
        self.closures = ClosureReaderRepo(session)
        self.closures_w = ClosureWriterRepo(session)
        self.read_cursors_w = ReadCursorWriterRepo(session)
        self.typing = TypingReaderRepo(session)
        self.typing_w = TypingWriterRepo(session)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
