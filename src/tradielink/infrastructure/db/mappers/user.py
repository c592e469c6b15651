from __future__ import annotations

from tradielink.application.dto.user import NewUserDTO
from tradielink.domain.entities.user import User
from tradielink.domain.value_objects.enums import UserRole
from tradielink.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        role=UserRole(model.role),
        first_name=model.first_name,
        last_name=model.last_name,
        email=model.email,
        password_hash=model.password_hash,
        created_at=model.created_at,
        about=model.about,
        company_name=model.company_name,
        address=model.address,
        occupation=model.occupation,
        price_per_hour=None if model.price_per_hour is None else float(model.price_per_hour),
        experience_years=model.experience_years,
        certifications=list(model.certifications or []),
        photo_url=model.photo_url,
    )


def new_user_to_model(dto: NewUserDTO) -> UserModel:
    return UserModel(
        role=dto.role.value,
        first_name=dto.first_name,
        last_name=dto.last_name,
        about=dto.about,
        email=dto.email,
        password_hash=dto.password_hash,
        company_name=dto.company_name,
        address=dto.address,
        occupation=dto.occupation,
        price_per_hour=dto.price_per_hour,
        experience_years=dto.experience_years,
        certifications=list(dto.certifications),
        photo_url=dto.photo_url,
    )
