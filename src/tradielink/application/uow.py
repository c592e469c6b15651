from __future__ import annotations

from typing import Protocol

from tradielink.application.repositories.closure import ClosureReader, ClosureWriter
from tradielink.application.repositories.message import MessageReader, MessageWriter
from tradielink.application.repositories.read_cursor import ReadCursorWriter
from tradielink.application.repositories.thread import ThreadReader, ThreadWriter
from tradielink.application.repositories.typing import TypingReader, TypingWriter
from tradielink.application.repositories.user import UserReader, UserWriter


class UnitOfWork(Protocol):
    users: UserReader
    users_w: UserWriter
    threads: ThreadReader
    threads_w: ThreadWriter
    messages: MessageReader
    messages_w: MessageWriter
    closures: ClosureReader
    closures_w: ClosureWriter
    read_cursors_w: ReadCursorWriter
    typing: TypingReader
    typing_w: TypingWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
