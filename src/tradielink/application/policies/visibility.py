"""Thread visibility for the active / history message views.

Closing a thread stores a timestamp per (user, peer), not a flag. A thread is
in a user's history only while nothing newer than that timestamp exists, so a
later message brings it back to the active view for both sides without any
reopen write.
"""
from __future__ import annotations

from datetime import datetime

from tradielink.application.dto.thread import ThreadRow, ThreadSummary
from tradielink.domain.value_objects.enums import ThreadView

CLOSED_PLACEHOLDER = "Chat closed"


def effective_timestamp(row: ThreadRow) -> datetime:
    created_at = row.thread.created_at
    if row.last_message_at is None:
        return created_at
    return max(row.last_message_at, created_at)


def view_of(row: ThreadRow, closed_at: datetime | None) -> ThreadView:
    if closed_at is not None and effective_timestamp(row) <= closed_at:
        return ThreadView.HISTORY
    return ThreadView.ACTIVE


def resolve_threads(
    rows: list[ThreadRow],
    closed_at_by_peer: dict[int, datetime],
    unread_by_thread: dict[int, int],
    view: ThreadView,
) -> list[ThreadSummary]:
    summaries: list[ThreadSummary] = []
    for row in rows:
        if view_of(row, closed_at_by_peer.get(row.peer.id)) != view:
            continue

        if view == ThreadView.HISTORY:
            last_message = row.last_message_body or CLOSED_PLACEHOLDER
            unread = 0
        else:
            last_message = row.last_message_body
            unread = unread_by_thread.get(row.thread.id, 0)

        summaries.append(
            ThreadSummary(
                id=row.thread.id,
                peer=row.peer,
                last_message=last_message,
                last_message_at=effective_timestamp(row),
                unread_count=unread,
            )
        )

    summaries.sort(key=lambda s: (s.last_message_at, s.id), reverse=True)
    return summaries
