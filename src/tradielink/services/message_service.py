from __future__ import annotations

from datetime import datetime

from tradielink.application.dto.principal import Principal
from tradielink.application.exceptions import InvalidInputError
from tradielink.application.policies.permissions import assert_thread_access
from tradielink.application.ports.clock import SYSTEM_CLOCK, Clock
from tradielink.application.uow import UnitOfWork
from tradielink.domain.entities.message import Message
from tradielink.domain.entities.thread import Thread


async def append_message(
    thread: Thread,
    sender_id: int,
    body: str,
    uow: UnitOfWork,
    now: datetime,
) -> Message:
    """Store the message and clear the sender's typing flag. Does not commit."""
    msg = await uow.messages_w.append(thread.id, sender_id, body, now)
    await uow.typing_w.upsert(sender_id, thread.peer_of(sender_id), False, now)
    return msg


async def send_message(
    thread_id: int,
    principal: Principal,
    body: str | None,
    uow: UnitOfWork,
    *,
    clock: Clock = SYSTEM_CLOCK,
) -> Message:
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))

    text = (body or "").strip()
    if not text:
        raise InvalidInputError("Message body is required")

    msg = await append_message(thread, principal.subject_id, text, uow, clock.now())
    await uow.commit()
    return msg
