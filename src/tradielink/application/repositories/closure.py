from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ClosureReader(Protocol):
    async def closed_at_by_peer(self, user_id: int) -> dict[int, datetime]: ...


class ClosureWriter(Protocol):
    async def upsert(self, user_id: int, peer_id: int, closed_at: datetime) -> None: ...
