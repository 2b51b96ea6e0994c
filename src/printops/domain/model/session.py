"""Caller identity passed explicitly into every use case."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from printops.domain.exceptions import PermissionDeniedError


class Role(Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    CLIENT = "CLIENT"


@dataclass(frozen=True)
class User:
    id: str
    username: str
    role: Role

    @property
    def is_staff(self) -> bool:
        return self.role in (Role.ADMIN, Role.STAFF)


@dataclass(frozen=True)
class Session:
    """Who is calling, and with which role."""

    user_id: str
    role: Role
    username: str = ""

    def require(self, action: str, *roles: Role) -> None:
        """Raise PermissionDeniedError unless the caller has one of *roles*."""
        if self.role not in roles:
            raise PermissionDeniedError(self.role.value, action)

    @staticmethod
    def for_user(user: User) -> Session:
        return Session(user_id=user.id, role=user.role, username=user.username)
