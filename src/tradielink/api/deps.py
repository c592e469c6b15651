"""FastAPI dependency injection helpers."""
from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Annotated, AsyncIterator

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tradielink.application.dto.principal import Principal
from tradielink.application.ports.auth import PasswordHasher, TokenIssuer, TokenVerifier
from tradielink.application.ports.clock import SYSTEM_CLOCK, Clock
from tradielink.config import settings
from tradielink.infrastructure.auth.bcrypt_hasher import BcryptPasswordHasher
from tradielink.infrastructure.auth.hs256_verifier import HS256Verifier
from tradielink.infrastructure.auth.token_issuer import HS256Issuer
from tradielink.infrastructure.db.session import AsyncSessionLocal
from tradielink.infrastructure.db.uow import SqlAlchemyUoW

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_clock() -> Clock:
    return SYSTEM_CLOCK


ClockDep = Annotated[Clock, Depends(get_clock)]


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)
    return _verifier


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    return HS256Issuer(
        settings.JWT_SECRET,
        settings.JWT_ALGORITHM,
        expires_in=timedelta(days=settings.JWT_EXPIRES_DAYS),
    )


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(settings.BCRYPT_ROUNDS)


IssuerDep = Annotated[TokenIssuer, Depends(get_token_issuer)]
HasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> Principal:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token.",
        )
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except (jwt.PyJWTError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
