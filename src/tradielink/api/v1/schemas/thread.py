from __future__ import annotations

from datetime import datetime

from pydantic import StrictBool

from tradielink.api.v1.schemas.common import CamelModel, OkResponse
from tradielink.application.dto.thread import ThreadDetail, ThreadSummary
from tradielink.domain.entities.message import Message
from tradielink.domain.entities.user import User
from tradielink.domain.value_objects.enums import UserRole


class ParticipantResponse(CamelModel):
    id: int
    role: UserRole
    name: str
    subtitle: str | None = None

    @classmethod
    def from_user(cls, user: User) -> ParticipantResponse:
        return cls(id=user.id, role=user.role, name=user.display_name, subtitle=user.subtitle)


class ThreadSummaryResponse(CamelModel):
    id: int
    participant: ParticipantResponse
    last_message: str | None
    last_message_at: datetime
    unread_count: int

    @classmethod
    def from_summary(cls, summary: ThreadSummary) -> ThreadSummaryResponse:
        return cls(
            id=summary.id,
            participant=ParticipantResponse.from_user(summary.peer),
            last_message=summary.last_message,
            last_message_at=summary.last_message_at,
            unread_count=summary.unread_count,
        )


class ThreadListResponse(OkResponse):
    threads: list[ThreadSummaryResponse]


class MessageResponse(CamelModel):
    id: int
    thread_id: int
    sender_id: int
    sender_role: UserRole | None = None
    sender_name: str | None = None
    body: str
    created_at: datetime

    @classmethod
    def from_message(cls, msg: Message, sender: User | None = None) -> MessageResponse:
        return cls(
            id=msg.id,
            thread_id=msg.thread_id,
            sender_id=msg.sender_id,
            sender_role=sender.role if sender else None,
            sender_name=sender.display_name if sender else None,
            body=msg.body,
            created_at=msg.created_at,
        )


class ThreadInfo(CamelModel):
    id: int
    builder: ParticipantResponse
    tradie: ParticipantResponse
    created_at: datetime


class ThreadDetailResponse(OkResponse):
    thread: ThreadInfo
    messages: list[MessageResponse]

    @classmethod
    def from_detail(cls, detail: ThreadDetail) -> ThreadDetailResponse:
        return cls(
            thread=ThreadInfo(
                id=detail.thread.id,
                builder=ParticipantResponse.from_user(detail.builder),
                tradie=ParticipantResponse.from_user(detail.tradie),
                created_at=detail.thread.created_at,
            ),
            messages=[
                MessageResponse.from_message(m, detail.sender(m)) for m in detail.messages
            ],
        )


class CreateThreadRequest(CamelModel):
    builder_id: int | None = None
    tradie_id: int | None = None
    body: str | None = None


class ThreadRef(CamelModel):
    id: int


class CreateThreadResponse(OkResponse):
    thread: ThreadRef
    created: bool


class SendMessageRequest(CamelModel):
    body: str | None = None


class SendMessageResponse(OkResponse):
    message: MessageResponse


class MarkReadRequest(CamelModel):
    thread_id: int


class SetTypingRequest(CamelModel):
    thread_id: int
    is_typing: StrictBool


class TypingStatusResponse(OkResponse):
    me_typing: bool
    peer_typing: bool
    either_typing: bool
