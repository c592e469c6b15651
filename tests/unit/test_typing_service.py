from __future__ import annotations

from datetime import timedelta

import pytest

from tradielink.application.dto.principal import Principal
from tradielink.application.exceptions import ForbiddenError
from tradielink.domain.entities.typing_intent import TYPING_TTL, TypingIntent
from tradielink.domain.value_objects.enums import UserRole
from tradielink.services import typing_service
from tests.conftest import T0


@pytest.fixture
def thread(uow, builder, tradie):
    return uow.add_thread(builder, tradie)


def test_typing_intent_ttl_boundary():
    intent = TypingIntent(from_user_id=1, to_user_id=2, is_typing=True, updated_at=T0)
    assert intent.is_active(T0 + TYPING_TTL) is True
    assert intent.is_active(T0 + TYPING_TTL + timedelta(milliseconds=1)) is False


def test_typing_intent_false_flag_is_never_active():
    intent = TypingIntent(from_user_id=1, to_user_id=2, is_typing=False, updated_at=T0)
    assert intent.is_active(T0) is False


@pytest.mark.asyncio
async def test_no_intent_means_nobody_typing(builder_principal, thread, uow, clock):
    status = await typing_service.get_typing(thread.id, builder_principal, uow, clock=clock)
    assert status.me_typing is False
    assert status.peer_typing is False
    assert status.either_typing is False


@pytest.mark.asyncio
async def test_set_typing_is_seen_by_peer(
    builder_principal, tradie_principal, builder, tradie, thread, uow, clock,
):
    await typing_service.set_typing(thread.id, tradie_principal, True, uow, clock=clock)

    assert uow.typing._store[(tradie.id, builder.id)].is_typing is True
    assert uow._committed is True

    builder_view = await typing_service.get_typing(thread.id, builder_principal, uow, clock=clock)
    tradie_view = await typing_service.get_typing(thread.id, tradie_principal, uow, clock=clock)
    assert (builder_view.me_typing, builder_view.peer_typing) == (False, True)
    assert (tradie_view.me_typing, tradie_view.peer_typing) == (True, False)
    assert builder_view.either_typing is True


@pytest.mark.asyncio
async def test_typing_expires_after_ttl(builder_principal, tradie_principal, thread, uow, clock):
    await typing_service.set_typing(thread.id, tradie_principal, True, uow, clock=clock)

    clock.advance(10)
    status = await typing_service.get_typing(thread.id, builder_principal, uow, clock=clock)
    assert status.peer_typing is True

    clock.advance(0.5)
    status = await typing_service.get_typing(thread.id, builder_principal, uow, clock=clock)
    assert status.peer_typing is False


@pytest.mark.asyncio
async def test_custom_ttl(builder_principal, tradie_principal, thread, uow, clock):
    await typing_service.set_typing(thread.id, tradie_principal, True, uow, clock=clock)
    clock.advance(3)

    status = await typing_service.get_typing(
        thread.id, builder_principal, uow, clock=clock, ttl=timedelta(seconds=2),
    )
    assert status.peer_typing is False


@pytest.mark.asyncio
async def test_heartbeat_refreshes_ttl(builder_principal, tradie_principal, thread, uow, clock):
    await typing_service.set_typing(thread.id, tradie_principal, True, uow, clock=clock)
    clock.advance(8)
    await typing_service.set_typing(thread.id, tradie_principal, True, uow, clock=clock)
    clock.advance(8)

    status = await typing_service.get_typing(thread.id, builder_principal, uow, clock=clock)
    assert status.peer_typing is True


@pytest.mark.asyncio
async def test_explicit_stop_clears_immediately(builder_principal, tradie_principal, thread, uow, clock):
    await typing_service.set_typing(thread.id, tradie_principal, True, uow, clock=clock)
    clock.advance(1)
    await typing_service.set_typing(thread.id, tradie_principal, False, uow, clock=clock)

    status = await typing_service.get_typing(thread.id, builder_principal, uow, clock=clock)
    assert status.peer_typing is False


@pytest.mark.asyncio
async def test_typing_requires_participant(thread, uow, clock):
    stranger = Principal(role=UserRole.TRADIE, subject_id=999)

    with pytest.raises(ForbiddenError):
        await typing_service.set_typing(thread.id, stranger, True, uow, clock=clock)
    with pytest.raises(ForbiddenError):
        await typing_service.get_typing(thread.id, stranger, uow, clock=clock)
    assert uow.typing._store == {}
