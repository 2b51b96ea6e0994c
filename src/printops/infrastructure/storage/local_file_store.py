"""FileStore backed by a local directory; references are file:// URLs."""

from __future__ import annotations

import uuid
from pathlib import Path
from urllib.parse import unquote, urlparse

from printops.domain.exceptions import NotFoundError, ValidationError
from printops.domain.gateway.file_store import FileStore


class LocalFileStore(FileStore):

    def __init__(self, root: Path) -> None:
        self._root = root

    def put(self, filename: str, content: bytes, folder: str) -> str:
        safe_name = Path(filename).name
        if not safe_name:
            raise ValidationError(f"Invalid file name: {filename!r}", fields=("filename",))
        target_dir = self._root / folder
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / f"{uuid.uuid4().hex[:12]}-{safe_name}"
        target.write_bytes(content)
        return target.resolve().as_uri()

    def size_of(self, file_url: str) -> int:
        path = self._path_for(file_url)
        if not path.is_file():
            raise NotFoundError(f"File not found: {file_url}")
        return path.stat().st_size

    def _path_for(self, file_url: str) -> Path:
        parsed = urlparse(file_url)
        if parsed.scheme == "file":
            path = Path(unquote(parsed.path))
        elif parsed.scheme:
            raise ValidationError(
                f"Only local file references are supported, got {file_url}",
                fields=("file_url",),
            )
        else:
            path = self._root / file_url

        resolved = path.resolve()
        if not resolved.is_relative_to(self._root.resolve()):
            raise ValidationError(
                f"File reference is outside the file store: {file_url}",
                fields=("file_url",),
            )
        return resolved
