from __future__ import annotations

from datetime import timedelta

import jwt

from tradielink.application.ports.clock import SYSTEM_CLOCK, Clock
from tradielink.domain.entities.user import User


class HS256Issuer:
    """Sign session tokens that ``HS256Verifier`` resolves back to a principal."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
        clock: Clock = SYSTEM_CLOCK,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in
        self._clock = clock

    def issue(self, user: User) -> str:
        now = self._clock.now()
        claims = {
            "sub": str(user.id),
            "role": user.role.value,
            "email": user.email,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)
