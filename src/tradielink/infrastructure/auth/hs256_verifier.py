from __future__ import annotations

import jwt

from tradielink.application.dto.principal import Principal
from tradielink.domain.value_objects.enums import UserRole


class HS256Verifier:
    """Verify JWTs signed with a shared HS256 secret."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": ["sub", "role"]},
        )
        role_raw = payload["role"]
        if role_raw not in UserRole.__members__.values():
            raise jwt.InvalidTokenError(f"Unknown role: {role_raw}")
        return Principal(
            role=UserRole(role_raw),
            subject_id=int(payload["sub"]),
        )
