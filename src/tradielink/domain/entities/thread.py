from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Thread:
    id: int
    builder_id: int
    tradie_id: int
    created_at: datetime

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.builder_id, self.tradie_id)

    def peer_of(self, user_id: int) -> int:
        if user_id == self.builder_id:
            return self.tradie_id
        if user_id == self.tradie_id:
            return self.builder_id
        raise ValueError(f"user {user_id} is not a participant of thread {self.id}")
