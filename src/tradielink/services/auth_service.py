"""Registration and login for builders and tradies."""
from __future__ import annotations

import logging
import math
from typing import Any

from tradielink.application.dto.principal import Principal
from tradielink.application.dto.user import NewUserDTO, RegisterUserDTO
from tradielink.application.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)
from tradielink.application.ports.auth import PasswordHasher, TokenIssuer
from tradielink.application.uow import UnitOfWork
from tradielink.domain.entities.user import User
from tradielink.domain.value_objects.enums import UserRole

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def normalize_role(raw: str | None) -> UserRole | None:
    role = (raw or "").strip().lower()
    if role == "builder":
        return UserRole.BUILDER
    if role in ("tradie", "labourer"):
        return UserRole.TRADIE
    return None


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _number_or_none(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def split_certifications(value: str | list[str] | None) -> list[str]:
    if not value:
        return []
    items = value if isinstance(value, list) else str(value).split(",")
    return [c for c in (str(v).strip() for v in items) if c]


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")


def build_new_user(dto: RegisterUserDTO, hasher: PasswordHasher) -> NewUserDTO:
    """Validate raw registration input, raising ``InvalidInputError`` on the first problem."""
    role = normalize_role(dto.role)
    if role is None:
        raise InvalidInputError("Invalid role.")

    first_name = _clean(dto.first_name)
    last_name = _clean(dto.last_name)
    about = _clean(dto.about)
    email = _clean(dto.email).lower()
    password = dto.password or ""

    if not first_name or not last_name or not about:
        raise InvalidInputError("Missing required profile fields.")
    if not email:
        raise InvalidInputError("Email is required.")
    _validate_password(password)

    extra: dict[str, Any] = {}
    if role == UserRole.BUILDER:
        company_name = _clean(dto.company_name)
        address = _clean(dto.address)
        if not company_name or not address:
            raise InvalidInputError("Builder requires company name and address.")
        extra.update(company_name=company_name, address=address)
    else:
        occupation = _clean(dto.occupation)
        price_per_hour = _number_or_none(dto.price_per_hour)
        experience_years = _number_or_none(dto.experience_years)
        certifications = split_certifications(dto.certifications)

        if not occupation:
            raise InvalidInputError("Tradie occupation is required.")
        if price_per_hour is None or price_per_hour <= 0:
            raise InvalidInputError("Tradie pricePerHour must be greater than 0.")
        if experience_years is None or experience_years < 0:
            raise InvalidInputError("Tradie experienceYears must be 0 or more.")
        if not certifications:
            raise InvalidInputError("At least one certification is required.")
        extra.update(
            occupation=occupation,
            price_per_hour=price_per_hour,
            experience_years=int(experience_years),
            certifications=certifications,
            photo_url=_clean(dto.photo_url) or None,
        )

    return NewUserDTO(
        role=role,
        first_name=first_name,
        last_name=last_name,
        about=about,
        email=email,
        password_hash=hasher.hash(password),
        **extra,
    )


async def register(
    dto: RegisterUserDTO,
    uow: UnitOfWork,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
) -> tuple[str, User]:
    new_user = build_new_user(dto, hasher)

    if await uow.users.get_by_email(new_user.email) is not None:
        raise ConflictError("Email already registered.")

    user = await uow.users_w.create(new_user)
    await uow.commit()
    logger.info("Registered %s %d", user.role.value, user.id)
    return issuer.issue(user), user


async def login(
    email: str | None,
    password: str | None,
    uow: UnitOfWork,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
) -> tuple[str, User]:
    email = _clean(email).lower()
    if not email or not password:
        raise InvalidInputError("Email and password are required.")

    user = await uow.users.get_by_email(email)
    if user is None or not hasher.verify(password, user.password_hash):
        raise UnauthenticatedError("Invalid email or password.")
    return issuer.issue(user), user


async def get_me(principal: Principal, uow: UnitOfWork) -> User:
    user = await uow.users.get_by_id(principal.subject_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
