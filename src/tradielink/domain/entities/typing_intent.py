from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

TYPING_TTL = timedelta(seconds=10)


@dataclass(frozen=True, slots=True)
class TypingIntent:
    from_user_id: int
    to_user_id: int
    is_typing: bool
    updated_at: datetime

    def is_active(self, now: datetime, ttl: timedelta = TYPING_TTL) -> bool:
        """A stored ``is_typing`` only counts while the row is fresher than ``ttl``."""
        return self.is_typing and now - self.updated_at <= ttl
