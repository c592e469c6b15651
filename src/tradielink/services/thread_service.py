from __future__ import annotations

import logging

from tradielink.application.dto.principal import Principal
from tradielink.application.dto.thread import ThreadDetail, ThreadSummary
from tradielink.application.exceptions import InvalidInputError, NotFoundError
from tradielink.application.policies.permissions import assert_thread_access
from tradielink.application.policies.visibility import resolve_threads
from tradielink.application.ports.clock import SYSTEM_CLOCK, Clock
from tradielink.application.uow import UnitOfWork
from tradielink.domain.entities.thread import Thread
from tradielink.domain.value_objects.enums import ThreadView, UserRole
from tradielink.services.message_service import append_message

logger = logging.getLogger(__name__)


async def get_or_create_thread(
    principal: Principal,
    counterpart_id: int | None,
    body: str | None,
    uow: UnitOfWork,
    *,
    clock: Clock = SYSTEM_CLOCK,
) -> tuple[Thread, bool]:
    """Return the thread between the caller and ``counterpart_id``, creating it if needed.

    Returns (thread, created). A non-blank ``body`` is stored as a message from
    the caller in the same transaction, whether or not the thread is new.
    """
    counterpart_role = principal.role.opposite
    if counterpart_id is None:
        raise InvalidInputError(f"{counterpart_role.value}Id is required")

    counterpart = await uow.users.get_by_id(counterpart_id)
    if counterpart is None or counterpart.role != counterpart_role:
        raise NotFoundError(f"{counterpart_role.value.capitalize()} not found")

    if principal.role == UserRole.BUILDER:
        builder_id, tradie_id = principal.subject_id, counterpart.id
    else:
        builder_id, tradie_id = counterpart.id, principal.subject_id

    now = clock.now()
    thread, created = await uow.threads_w.get_or_create(builder_id, tradie_id, now)

    text = (body or "").strip()
    if text:
        await append_message(thread, principal.subject_id, text, uow, now)

    await uow.commit()
    if created:
        logger.info("Thread %d created between builder %d and tradie %d", thread.id, builder_id, tradie_id)
    return thread, created


async def list_threads(
    principal: Principal,
    view: ThreadView,
    uow: UnitOfWork,
) -> list[ThreadSummary]:
    user_id = principal.subject_id
    rows = await uow.threads.list_for_user(user_id)
    closed_at_by_peer = await uow.closures.closed_at_by_peer(user_id)
    unread_by_thread = await uow.messages.count_unread_by_thread(user_id)
    return resolve_threads(rows, closed_at_by_peer, unread_by_thread, view)


async def get_thread_detail(
    thread_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> ThreadDetail:
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))

    builder = await uow.users.get_by_id(thread.builder_id)
    tradie = await uow.users.get_by_id(thread.tradie_id)
    if builder is None or tradie is None:
        raise NotFoundError("Thread participant not found")

    messages = await uow.messages.list_messages(thread.id)
    return ThreadDetail(thread=thread, builder=builder, tradie=tradie, messages=messages)


async def close_thread(
    thread_id: int,
    principal: Principal,
    uow: UnitOfWork,
    *,
    clock: Clock = SYSTEM_CLOCK,
) -> None:
    """Archive the thread for both participants as of now."""
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))

    now = clock.now()
    await uow.closures_w.upsert(thread.builder_id, thread.tradie_id, now)
    await uow.closures_w.upsert(thread.tradie_id, thread.builder_id, now)
    await uow.commit()
    logger.info("Thread %d closed by user %d", thread.id, principal.subject_id)
