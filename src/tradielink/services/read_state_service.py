from __future__ import annotations

from tradielink.application.dto.principal import Principal
from tradielink.application.policies.permissions import assert_thread_access
from tradielink.application.ports.clock import SYSTEM_CLOCK, Clock
from tradielink.application.uow import UnitOfWork


async def mark_read(
    thread_id: int,
    principal: Principal,
    uow: UnitOfWork,
    *,
    clock: Clock = SYSTEM_CLOCK,
) -> None:
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))
    await uow.read_cursors_w.upsert(
        principal.subject_id,
        thread.peer_of(principal.subject_id),
        clock.now(),
    )
    await uow.commit()
