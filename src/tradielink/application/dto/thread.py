from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from tradielink.domain.entities.message import Message
from tradielink.domain.entities.thread import Thread
from tradielink.domain.entities.user import User


@dataclass(frozen=True, slots=True)
class ThreadRow:
    """A thread of the viewing user joined with the counterpart and its latest message."""

    thread: Thread
    peer: User
    last_message_body: str | None
    last_message_at: datetime | None


@dataclass(frozen=True, slots=True)
class ThreadSummary:
    id: int
    peer: User
    last_message: str | None
    last_message_at: datetime
    unread_count: int


@dataclass(frozen=True, slots=True)
class ThreadDetail:
    thread: Thread
    builder: User
    tradie: User
    messages: list[Message]

    def sender(self, message: Message) -> User:
        return self.builder if message.sender_id == self.builder.id else self.tradie


@dataclass(frozen=True, slots=True)
class TypingStatus:
    me_typing: bool
    peer_typing: bool

    @property
    def either_typing(self) -> bool:
        return self.me_typing or self.peer_typing
