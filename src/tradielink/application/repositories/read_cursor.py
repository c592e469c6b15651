from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ReadCursorWriter(Protocol):
    async def upsert(self, user_id: int, peer_id: int, last_read_at: datetime) -> None:
        """Advance the cursor; an older ``last_read_at`` never overwrites a newer one."""
        ...
