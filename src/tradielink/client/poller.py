"""Periodic refresh of the messages screen: thread list, open thread, typing."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

import httpx

from tradielink.client.api import ApiError, TradieLinkClient
from tradielink.domain.value_objects.enums import ThreadView

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.5

OnThreadsCallback = Callable[[list[dict[str, Any]]], Coroutine[Any, Any, None]]
OnThreadCallback = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
OnTypingCallback = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]


class ThreadPoller:
    """Background task that polls the API while a messages screen is shown.

    ``start()`` when the screen appears and ``stop()`` when it goes away; the
    task is cancelled on stop. Polling is only a refresh mechanism: a failed
    tick is logged and the next tick tries again.
    """

    def __init__(
        self,
        client: TradieLinkClient,
        *,
        view: ThreadView = ThreadView.ACTIVE,
        interval: float = DEFAULT_POLL_INTERVAL,
        on_threads: OnThreadsCallback | None = None,
        on_thread: OnThreadCallback | None = None,
        on_typing: OnTypingCallback | None = None,
    ) -> None:
        self._client = client
        self.view = view
        self._interval = interval
        self._on_threads = on_threads
        self._on_thread = on_thread
        self._on_typing = on_typing
        self._active_thread_id: int | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def active_thread_id(self) -> int | None:
        return self._active_thread_id

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="thread-poller")
        logger.info("Thread poller started (view=%s, interval=%.1fs)", self.view, self._interval)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Thread poller stopped")
        await self._release_typing(self._active_thread_id)

    async def open_thread(self, thread_id: int | None) -> None:
        """Switch the open thread; leaving a thread drops our typing flag there."""
        previous = self._active_thread_id
        self._active_thread_id = thread_id
        if previous is not None and previous != thread_id:
            await self._release_typing(previous)

    async def _release_typing(self, thread_id: int | None) -> None:
        if thread_id is None:
            return
        try:
            await self._client.set_typing(thread_id, False)
        except (ApiError, httpx.HTTPError):
            logger.debug("Could not clear typing flag on thread %d", thread_id, exc_info=True)

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
            except (ApiError, httpx.HTTPError):
                logger.warning("Poll failed", exc_info=True)
            except Exception:
                logger.exception("Thread poller loop error")
            await asyncio.sleep(self._interval)

    async def poll_once(self) -> None:
        threads = await self._client.list_threads(self.view)
        if self._on_threads:
            await self._on_threads(threads)

        thread_id = self._active_thread_id
        if thread_id is None:
            return
        if not any(t["id"] == thread_id for t in threads):
            # closed or moved to the other view
            await self.open_thread(None)
            return

        detail = await self._client.get_thread(thread_id)
        await self._client.mark_read(thread_id)
        if self._on_thread:
            await self._on_thread(detail)

        typing = await self._client.get_typing(thread_id)
        if self._on_typing:
            await self._on_typing(typing)
