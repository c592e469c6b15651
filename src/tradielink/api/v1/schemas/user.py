from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict

from tradielink.api.v1.schemas.common import CamelModel, OkResponse
from tradielink.domain.value_objects.enums import UserRole


class RegisterRequest(CamelModel):
    role: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    about: str | None = None
    company_name: str | None = None
    address: str | None = None
    occupation: str | None = None
    price_per_hour: float | str | None = None
    experience_years: int | float | str | None = None
    certifications: list[str] | str | None = None
    photo_url: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    id: int
    role: UserRole
    first_name: str
    last_name: str
    about: str | None
    company_name: str | None
    address: str | None
    occupation: str | None
    price_per_hour: float | None
    experience_years: int | None
    certifications: list[str]
    photo_url: str | None
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(OkResponse):
    token: str
    user: UserResponse


class MeResponse(OkResponse):
    user: UserResponse


class BuilderDirectoryItem(CamelModel):
    id: int
    first_name: str
    last_name: str
    company_name: str | None
    display_name: str

    model_config = ConfigDict(from_attributes=True)


class TradieDirectoryItem(CamelModel):
    id: int
    first_name: str
    last_name: str
    occupation: str | None
    display_name: str

    model_config = ConfigDict(from_attributes=True)


class BuildersResponse(OkResponse):
    builders: list[BuilderDirectoryItem]


class TradiesResponse(OkResponse):
    tradies: list[TradieDirectoryItem]
