from __future__ import annotations

from tradielink.application.uow import UnitOfWork
from tradielink.domain.entities.user import User
from tradielink.domain.value_objects.enums import UserRole


async def list_builders(uow: UnitOfWork) -> list[User]:
    return await uow.users.list_by_role(UserRole.BUILDER)


async def list_tradies(uow: UnitOfWork) -> list[User]:
    return await uow.users.list_by_role(UserRole.TRADIE)
