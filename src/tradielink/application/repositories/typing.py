from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tradielink.domain.entities.typing_intent import TypingIntent


class TypingReader(Protocol):
    async def get(self, from_user_id: int, to_user_id: int) -> TypingIntent | None: ...


class TypingWriter(Protocol):
    async def upsert(
        self, from_user_id: int, to_user_id: int, is_typing: bool, updated_at: datetime
    ) -> None: ...
