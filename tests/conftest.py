"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from tradielink.application.dto.principal import Principal
from tradielink.application.dto.thread import ThreadRow
from tradielink.application.dto.user import NewUserDTO
from tradielink.domain.entities.message import Message
from tradielink.domain.entities.read_cursor import EPOCH
from tradielink.domain.entities.thread import Thread
from tradielink.domain.entities.typing_intent import TypingIntent
from tradielink.domain.entities.user import User
from tradielink.domain.value_objects.enums import UserRole

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@dataclass
class FixedClock:
    current: datetime = T0

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> datetime:
        self.current += timedelta(seconds=seconds)
        return self.current


def make_user(
    user_id: int,
    role: UserRole,
    *,
    first_name: str = "Sam",
    last_name: str = "Smith",
    email: str | None = None,
    password_hash: str = "x",
) -> User:
    return User(
        id=user_id,
        role=role,
        first_name=first_name,
        last_name=last_name,
        email=email or f"user{user_id}@example.com",
        password_hash=password_hash,
        created_at=T0,
        about="About me",
        company_name="Acme Builds" if role == UserRole.BUILDER else None,
        address="1 Site St" if role == UserRole.BUILDER else None,
        occupation="Plumber" if role == UserRole.TRADIE else None,
        price_per_hour=80.0 if role == UserRole.TRADIE else None,
        experience_years=5 if role == UserRole.TRADIE else None,
        certifications=["White Card"] if role == UserRole.TRADIE else [],
    )


def make_builder(user_id: int = 1, **kwargs) -> User:
    return make_user(user_id, UserRole.BUILDER, **kwargs)


def make_tradie(user_id: int = 2, **kwargs) -> User:
    return make_user(user_id, UserRole.TRADIE, **kwargs)


@dataclass
class FakeUserReader:
    _store: dict[int, User] = field(default_factory=dict)

    async def get_by_id(self, user_id: int) -> User | None:
        return self._store.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        for u in self._store.values():
            if u.email == email:
                return u
        return None

    async def list_by_role(self, role: UserRole) -> list[User]:
        users = [u for u in self._store.values() if u.role == role]
        return sorted(users, key=lambda u: (u.first_name, u.last_name))


@dataclass
class FakeUserWriter:
    _reader: FakeUserReader
    _ids: count = field(default_factory=lambda: count(100))

    async def create(self, user: NewUserDTO) -> User:
        created = User(
            id=next(self._ids),
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            password_hash=user.password_hash,
            created_at=T0,
            about=user.about,
            company_name=user.company_name,
            address=user.address,
            occupation=user.occupation,
            price_per_hour=user.price_per_hour,
            experience_years=user.experience_years,
            certifications=list(user.certifications),
            photo_url=user.photo_url,
        )
        self._reader._store[created.id] = created
        return created


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)
    _threads: FakeThreadReader | None = None
    _cursors: FakeReadCursorWriter | None = None

    async def list_messages(self, thread_id: int) -> list[Message]:
        msgs = [m for m in self._messages if m.thread_id == thread_id]
        return sorted(msgs, key=lambda m: (m.created_at, m.id))

    async def count_unread_by_thread(self, user_id: int) -> dict[int, int]:
        counts: dict[int, int] = {}
        for m in self._messages:
            thread = self._threads._store.get(m.thread_id)
            if thread is None or not thread.has_participant(user_id) or m.sender_id == user_id:
                continue
            cursor = self._cursors._store.get((user_id, m.sender_id), EPOCH)
            if m.created_at > cursor:
                counts[m.thread_id] = counts.get(m.thread_id, 0) + 1
        return counts


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    _ids: count = field(default_factory=lambda: count(1))

    async def append(
        self, thread_id: int, sender_id: int, body: str, created_at: datetime
    ) -> Message:
        msg = Message(
            id=next(self._ids),
            thread_id=thread_id,
            sender_id=sender_id,
            body=body,
            created_at=created_at,
        )
        self._reader._messages.append(msg)
        return msg


@dataclass
class FakeThreadReader:
    _store: dict[int, Thread] = field(default_factory=dict)
    _users: FakeUserReader | None = None
    _messages: FakeMessageReader | None = None

    async def get_by_id(self, thread_id: int) -> Thread | None:
        return self._store.get(thread_id)

    async def list_for_user(self, user_id: int) -> list[ThreadRow]:
        rows: list[ThreadRow] = []
        for thread in self._store.values():
            if not thread.has_participant(user_id):
                continue
            peer = self._users._store[thread.peer_of(user_id)]
            msgs = [m for m in self._messages._messages if m.thread_id == thread.id]
            last = max(msgs, key=lambda m: (m.created_at, m.id), default=None)
            rows.append(
                ThreadRow(
                    thread=thread,
                    peer=peer,
                    last_message_body=last.body if last else None,
                    last_message_at=last.created_at if last else None,
                )
            )
        return rows


@dataclass
class FakeThreadWriter:
    _reader: FakeThreadReader
    _ids: count = field(default_factory=lambda: count(1))

    async def get_or_create(
        self, builder_id: int, tradie_id: int, created_at: datetime
    ) -> tuple[Thread, bool]:
        for t in self._reader._store.values():
            if t.builder_id == builder_id and t.tradie_id == tradie_id:
                return t, False
        thread = Thread(
            id=next(self._ids),
            builder_id=builder_id,
            tradie_id=tradie_id,
            created_at=created_at,
        )
        self._reader._store[thread.id] = thread
        return thread, True


@dataclass
class FakeClosureReader:
    _store: dict[tuple[int, int], datetime] = field(default_factory=dict)

    async def closed_at_by_peer(self, user_id: int) -> dict[int, datetime]:
        return {peer: ts for (user, peer), ts in self._store.items() if user == user_id}


@dataclass
class FakeClosureWriter:
    _reader: FakeClosureReader

    async def upsert(self, user_id: int, peer_id: int, closed_at: datetime) -> None:
        self._reader._store[(user_id, peer_id)] = closed_at


@dataclass
class FakeReadCursorWriter:
    _store: dict[tuple[int, int], datetime] = field(default_factory=dict)

    async def upsert(self, user_id: int, peer_id: int, last_read_at: datetime) -> None:
        current = self._store.get((user_id, peer_id))
        if current is None or last_read_at > current:
            self._store[(user_id, peer_id)] = last_read_at


@dataclass
class FakeTypingReader:
    _store: dict[tuple[int, int], TypingIntent] = field(default_factory=dict)

    async def get(self, from_user_id: int, to_user_id: int) -> TypingIntent | None:
        return self._store.get((from_user_id, to_user_id))


@dataclass
class FakeTypingWriter:
    _reader: FakeTypingReader

    async def upsert(
        self, from_user_id: int, to_user_id: int, is_typing: bool, updated_at: datetime
    ) -> None:
        self._reader._store[(from_user_id, to_user_id)] = TypingIntent(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            is_typing=is_typing,
            updated_at=updated_at,
        )


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    users: FakeUserReader = field(default_factory=FakeUserReader)
    users_w: FakeUserWriter | None = None
    threads: FakeThreadReader = field(default_factory=FakeThreadReader)
    threads_w: FakeThreadWriter | None = None
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    closures: FakeClosureReader = field(default_factory=FakeClosureReader)
    closures_w: FakeClosureWriter | None = None
    read_cursors_w: FakeReadCursorWriter = field(default_factory=FakeReadCursorWriter)
    typing: FakeTypingReader = field(default_factory=FakeTypingReader)
    typing_w: FakeTypingWriter | None = None
    _committed: bool = False

    def __post_init__(self) -> None:
        if self.users_w is None:
            self.users_w = FakeUserWriter(self.users)
        if self.threads_w is None:
            self.threads_w = FakeThreadWriter(self.threads)
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.closures_w is None:
            self.closures_w = FakeClosureWriter(self.closures)
        if self.typing_w is None:
            self.typing_w = FakeTypingWriter(self.typing)
        self.threads._users = self.users
        self.threads._messages = self.messages
        self.messages._threads = self.threads
        self.messages._cursors = self.read_cursors_w

    def add_user(self, user: User) -> User:
        self.users._store[user.id] = user
        return user

    def add_thread(self, builder: User, tradie: User, *, thread_id: int = 1, created_at: datetime = T0) -> Thread:
        thread = Thread(id=thread_id, builder_id=builder.id, tradie_id=tradie.id, created_at=created_at)
        self.threads._store[thread.id] = thread
        return thread

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        pass


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def builder() -> User:
    return make_builder(1, first_name="Bella", last_name="Builder")


@pytest.fixture
def tradie() -> User:
    return make_tradie(2, first_name="Tom", last_name="Tradie")


@pytest.fixture
def builder_principal(builder) -> Principal:
    return Principal(role=UserRole.BUILDER, subject_id=builder.id)


@pytest.fixture
def tradie_principal(tradie) -> Principal:
    return Principal(role=UserRole.TRADIE, subject_id=tradie.id)


@pytest.fixture
def uow(builder, tradie) -> FakeUoW:
    uow = FakeUoW()
    uow.add_user(builder)
    uow.add_user(tradie)
    return uow
