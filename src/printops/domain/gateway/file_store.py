"""Port to file storage for design files and manual layout artifacts."""

from __future__ import annotations

from abc import ABC, abstractmethod


class FileStore(ABC):

    @abstractmethod
    def put(self, filename: str, content: bytes, folder: str) -> str:
        """Store *content* and return a URL referencing it."""

    @abstractmethod
    def size_of(self, file_url: str) -> int:
        """Size in bytes of a stored file. Raises NotFoundError if unknown."""
