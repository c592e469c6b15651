from __future__ import annotations

from dataclasses import dataclass

from tradielink.domain.value_objects.enums import UserRole


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity extracted from JWT."""

    role: UserRole
    subject_id: int

    @property
    def is_builder(self) -> bool:
        return self.role == UserRole.BUILDER
