from __future__ import annotations

from tradielink.application.dto.principal import Principal
from tradielink.application.exceptions import ForbiddenError, NotFoundError
from tradielink.domain.entities.thread import Thread


def assert_thread_access(principal: Principal, thread: Thread | None) -> Thread:
    """Raise if thread doesn't exist or principal is not one of its two participants."""
    if thread is None:
        raise NotFoundError("Thread not found")

    # The participant column must also match the caller's role
    own_id = thread.builder_id if principal.is_builder else thread.tradie_id
    if own_id != principal.subject_id:
        raise ForbiddenError("Not a participant of this thread")

    return thread
