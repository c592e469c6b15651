from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tradielink.application.dto.thread import ThreadRow
from tradielink.domain.entities.thread import Thread


class ThreadReader(Protocol):
    async def get_by_id(self, thread_id: int) -> Thread | None: ...

    async def list_for_user(self, user_id: int) -> list[ThreadRow]:
        """All threads of the user with the counterpart and the latest message, unfiltered."""
        ...


class ThreadWriter(Protocol):
    async def get_or_create(
        self, builder_id: int, tradie_id: int, created_at: datetime
    ) -> tuple[Thread, bool]:
        """Insert the pair if absent. Return (thread, created)."""
        ...
