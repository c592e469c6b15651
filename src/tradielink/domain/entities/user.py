from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tradielink.domain.value_objects.enums import UserRole


@dataclass(frozen=True, slots=True)
class User:
    id: int
    role: UserRole
    first_name: str
    last_name: str
    email: str
    password_hash: str
    created_at: datetime
    about: str | None = None
    company_name: str | None = None
    address: str | None = None
    occupation: str | None = None
    price_per_hour: float | None = None
    experience_years: int | None = None
    certifications: list[str] = field(default_factory=list)
    photo_url: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def subtitle(self) -> str | None:
        """Company for builders, trade for tradies."""
        if self.role == UserRole.BUILDER:
            return self.company_name
        return self.occupation
