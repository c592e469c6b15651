from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    thread_id: int
    sender_id: int
    body: str
    created_at: datetime
