"""Abstract repository for users (read-only; authentication is external)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from printops.domain.model.session import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def list_staff(self) -> list[User]:
        """Return users that can be assigned orders (staff and admins)."""
