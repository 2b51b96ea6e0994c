"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

import json
from pathlib import Path

from printops.domain.model.session import Role, User
from printops.domain.repository.user_repository import UserRepository


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_id(self, user_id: str) -> User | None:
        return next((u for u in self._load() if u.id == user_id), None)

    def list_staff(self) -> list[User]:
        return [u for u in self._load() if u.is_staff]

    def _load(self) -> list[User]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return [
            User(id=item["id"], username=item["username"], role=Role(item["role"].upper()))
            for item in raw
        ]

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
