from __future__ import annotations

from typing import Protocol

from tradielink.application.dto.user import NewUserDTO
from tradielink.domain.entities.user import User
from tradielink.domain.value_objects.enums import UserRole


class UserReader(Protocol):
    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def list_by_role(self, role: UserRole) -> list[User]: ...


class UserWriter(Protocol):
    async def create(self, user: NewUserDTO) -> User: ...
