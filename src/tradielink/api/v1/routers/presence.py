"""Read cursors and typing indicators."""
from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter

from tradielink.api.deps import ClockDep, CurrentPrincipal, UoWDep
from tradielink.api.v1.schemas.common import OkResponse
from tradielink.api.v1.schemas.thread import (
    MarkReadRequest,
    SetTypingRequest,
    TypingStatusResponse,
)
from tradielink.config import settings
from tradielink.services import read_state_service, typing_service

router = APIRouter(prefix="/messages", tags=["presence"])


@router.post("/read", response_model=OkResponse)
async def mark_read(
    body: MarkReadRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    clock: ClockDep,
) -> OkResponse:
    await read_state_service.mark_read(body.thread_id, principal, uow, clock=clock)
    return OkResponse()


@router.post("/typing", response_model=OkResponse)
async def set_typing(
    body: SetTypingRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    clock: ClockDep,
) -> OkResponse:
    await typing_service.set_typing(
        body.thread_id, principal, body.is_typing, uow, clock=clock,
    )
    return OkResponse()


@router.get("/typing/{thread_id}", response_model=TypingStatusResponse)
async def get_typing(
    thread_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
    clock: ClockDep,
) -> TypingStatusResponse:
    typing = await typing_service.get_typing(
        thread_id,
        principal,
        uow,
        clock=clock,
        ttl=timedelta(seconds=settings.TYPING_TTL_SECONDS),
    )
    return TypingStatusResponse(
        me_typing=typing.me_typing,
        peer_typing=typing.peer_typing,
        either_typing=typing.either_typing,
    )
