from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    BUILDER = "builder"
    TRADIE = "tradie"

    @property
    def opposite(self) -> UserRole:
        return UserRole.TRADIE if self is UserRole.BUILDER else UserRole.BUILDER


class ThreadView(StrEnum):
    ACTIVE = "active"
    HISTORY = "history"
