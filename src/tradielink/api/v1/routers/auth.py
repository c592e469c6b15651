from __future__ import annotations

from fastapi import APIRouter

from tradielink.api.deps import CurrentPrincipal, HasherDep, IssuerDep, UoWDep
from tradielink.api.v1.schemas.user import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserResponse,
)
from tradielink.application.dto.user import RegisterUserDTO
from tradielink.services import auth_service

router = APIRouter(tags=["auth"])


@router.post("/auth/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    uow: UoWDep,
    hasher: HasherDep,
    issuer: IssuerDep,
) -> AuthResponse:
    dto = RegisterUserDTO(
        role=body.role,
        first_name=body.first_name,
        last_name=body.last_name,
        about=body.about,
        email=body.email,
        password=body.password,
        company_name=body.company_name,
        address=body.address,
        occupation=body.occupation,
        price_per_hour=body.price_per_hour,
        experience_years=body.experience_years,
        certifications=body.certifications,
        photo_url=body.photo_url,
    )
    token, user = await auth_service.register(dto, uow, hasher, issuer)
    return AuthResponse(token=token, user=UserResponse.model_validate(user, from_attributes=True))


@router.post("/auth/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    uow: UoWDep,
    hasher: HasherDep,
    issuer: IssuerDep,
) -> AuthResponse:
    token, user = await auth_service.login(body.email, body.password, uow, hasher, issuer)
    return AuthResponse(token=token, user=UserResponse.model_validate(user, from_attributes=True))


@router.get("/me", response_model=MeResponse)
async def me(principal: CurrentPrincipal, uow: UoWDep) -> MeResponse:
    user = await auth_service.get_me(principal, uow)
    return MeResponse(user=UserResponse.model_validate(user, from_attributes=True))
