from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradielink.application.dto.user import NewUserDTO
from tradielink.domain.entities.user import User
from tradielink.domain.value_objects.enums import UserRole
from tradielink.infrastructure.db.mappers import user as mapper
from tradielink.infrastructure.db.models.user import UserModel


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return mapper.model_to_entity(result) if result else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_by_role(self, role: UserRole) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.role == role.value)
            .order_by(UserModel.first_name, UserModel.last_name, UserModel.id)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class UserWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, user: NewUserDTO) -> User:
        model = mapper.new_user_to_model(user)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return mapper.model_to_entity(model)
