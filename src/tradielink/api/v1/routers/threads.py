from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from tradielink.api.deps import ClockDep, CurrentPrincipal, UoWDep
from tradielink.api.v1.schemas.common import OkResponse
from tradielink.api.v1.schemas.thread import (
    CreateThreadRequest,
    CreateThreadResponse,
    MessageResponse,
    SendMessageRequest,
    SendMessageResponse,
    ThreadDetailResponse,
    ThreadListResponse,
    ThreadRef,
    ThreadSummaryResponse,
)
from tradielink.domain.value_objects.enums import ThreadView
from tradielink.services import auth_service, message_service, thread_service

router = APIRouter(prefix="/messages/threads", tags=["threads"])


@router.get("", response_model=ThreadListResponse)
async def list_threads(
    principal: CurrentPrincipal,
    uow: UoWDep,
    view: ThreadView = Query(ThreadView.ACTIVE),
) -> ThreadListResponse:
    summaries = await thread_service.list_threads(principal, view, uow)
    return ThreadListResponse(threads=[ThreadSummaryResponse.from_summary(s) for s in summaries])


@router.get("/{thread_id}", response_model=ThreadDetailResponse)
async def get_thread(
    thread_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ThreadDetailResponse:
    detail = await thread_service.get_thread_detail(thread_id, principal, uow)
    return ThreadDetailResponse.from_detail(detail)


@router.post("", response_model=CreateThreadResponse)
async def create_thread(
    body: CreateThreadRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    clock: ClockDep,
    response: Response,
) -> CreateThreadResponse:
    counterpart_id = body.tradie_id if principal.is_builder else body.builder_id
    thread, created = await thread_service.get_or_create_thread(
        principal, counterpart_id, body.body, uow, clock=clock,
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return CreateThreadResponse(thread=ThreadRef(id=thread.id), created=created)


@router.post("/{thread_id}/messages", response_model=SendMessageResponse, status_code=201)
async def send_message(
    thread_id: int,
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    clock: ClockDep,
) -> SendMessageResponse:
    msg = await message_service.send_message(
        thread_id, principal, body.body, uow, clock=clock,
    )
    sender = await auth_service.get_me(principal, uow)
    return SendMessageResponse(message=MessageResponse.from_message(msg, sender))


@router.post("/{thread_id}/close", response_model=OkResponse)
async def close_thread(
    thread_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
    clock: ClockDep,
) -> OkResponse:
    await thread_service.close_thread(thread_id, principal, uow, clock=clock)
    return OkResponse()
