"""Async HTTP client for the TradieLink API."""
from __future__ import annotations

from types import TracebackType
from typing import Any, Self

import httpx

from tradielink.domain.value_objects.enums import ThreadView


class ApiError(Exception):
    """Raised when the API answers ``{"ok": false}``."""

    def __init__(self, status_code: int, error: str) -> None:
        self.status_code = status_code
        self.error = error
        super().__init__(f"{status_code}: {error}")


class TradieLinkClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        resp = await self._http.request(method, path, json=json, params=params, headers=headers)
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if resp.is_error or not data.get("ok"):
            raise ApiError(resp.status_code, data.get("error") or "Request failed.")
        return data

    # auth

    async def register(self, **fields: Any) -> dict[str, Any]:
        data = await self._request("POST", "/auth/register", json=fields)
        self.token = data["token"]
        return data["user"]

    async def login(self, email: str, password: str) -> dict[str, Any]:
        data = await self._request(
            "POST", "/auth/login", json={"email": email.strip(), "password": password},
        )
        self.token = data["token"]
        return data["user"]

    async def get_builders(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/builders"))["builders"]

    async def get_tradies(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/tradies"))["tradies"]

    # messaging

    async def list_threads(self, view: ThreadView = ThreadView.ACTIVE) -> list[dict[str, Any]]:
        data = await self._request("GET", "/messages/threads", params={"view": view.value})
        return data["threads"]

    async def get_thread(self, thread_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/messages/threads/{thread_id}")

    async def start_thread_with_builder(self, builder_id: int, body: str | None = None) -> int:
        data = await self._request(
            "POST", "/messages/threads", json={"builderId": builder_id, "body": body},
        )
        return data["thread"]["id"]

    async def start_thread_with_tradie(self, tradie_id: int, body: str | None = None) -> int:
        data = await self._request(
            "POST", "/messages/threads", json={"tradieId": tradie_id, "body": body},
        )
        return data["thread"]["id"]

    async def send_message(self, thread_id: int, body: str) -> dict[str, Any]:
        data = await self._request(
            "POST", f"/messages/threads/{thread_id}/messages", json={"body": body},
        )
        return data["message"]

    async def mark_read(self, thread_id: int) -> None:
        await self._request("POST", "/messages/read", json={"threadId": thread_id})

    async def close_thread(self, thread_id: int) -> None:
        await self._request("POST", f"/messages/threads/{thread_id}/close", json={})

    async def set_typing(self, thread_id: int, is_typing: bool) -> None:
        await self._request(
            "POST", "/messages/typing", json={"threadId": thread_id, "isTyping": is_typing},
        )

    async def get_typing(self, thread_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/messages/typing/{thread_id}")
