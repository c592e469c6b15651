from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tradielink.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_messages(self, thread_id: int) -> list[Message]: ...

    async def count_unread_by_thread(self, user_id: int) -> dict[int, int]:
        """Peer messages newer than the user's read cursor, keyed by thread id."""
        ...


class MessageWriter(Protocol):
    async def append(
        self, thread_id: int, sender_id: int, body: str, created_at: datetime
    ) -> Message: ...
