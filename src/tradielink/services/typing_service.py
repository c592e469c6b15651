from __future__ import annotations

from datetime import timedelta

from tradielink.application.dto.principal import Principal
from tradielink.application.dto.thread import TypingStatus
from tradielink.application.policies.permissions import assert_thread_access
from tradielink.application.ports.clock import SYSTEM_CLOCK, Clock
from tradielink.application.uow import UnitOfWork
from tradielink.domain.entities.typing_intent import TYPING_TTL


async def set_typing(
    thread_id: int,
    principal: Principal,
    is_typing: bool,
    uow: UnitOfWork,
    *,
    clock: Clock = SYSTEM_CLOCK,
) -> None:
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))
    await uow.typing_w.upsert(
        principal.subject_id,
        thread.peer_of(principal.subject_id),
        is_typing,
        clock.now(),
    )
    await uow.commit()


async def get_typing(
    thread_id: int,
    principal: Principal,
    uow: UnitOfWork,
    *,
    clock: Clock = SYSTEM_CLOCK,
    ttl: timedelta = TYPING_TTL,
) -> TypingStatus:
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))
    me = principal.subject_id
    peer = thread.peer_of(me)

    now = clock.now()
    mine = await uow.typing.get(me, peer)
    theirs = await uow.typing.get(peer, me)
    return TypingStatus(
        me_typing=mine is not None and mine.is_active(now, ttl),
        peer_typing=theirs is not None and theirs.is_active(now, ttl),
    )
