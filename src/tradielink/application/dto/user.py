from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tradielink.domain.value_objects.enums import UserRole


@dataclass(frozen=True, slots=True)
class RegisterUserDTO:
    """Raw registration input as submitted by the client."""

    role: str | None
    first_name: str | None
    last_name: str | None
    about: str | None
    email: str | None
    password: str | None
    company_name: str | None = None
    address: str | None = None
    occupation: str | None = None
    price_per_hour: Any = None
    experience_years: Any = None
    certifications: str | list[str] | None = None
    photo_url: str | None = None


@dataclass(frozen=True, slots=True)
class NewUserDTO:
    """Validated registration data ready to be persisted."""

    role: UserRole
    first_name: str
    last_name: str
    about: str
    email: str
    password_hash: str
    company_name: str | None = None
    address: str | None = None
    occupation: str | None = None
    price_per_hour: float | None = None
    experience_years: int | None = None
    certifications: list[str] = field(default_factory=list)
    photo_url: str | None = None
