"""Application service: file upload use cases.

Design files are images whose metadata (notably density) is read back so
the order form can fill in ``quality``. Manual layout files only have to
respect the size cap.
"""

from __future__ import annotations

import logging

from printops.application.dto import UploadedFileDTO
from printops.domain.exceptions import PayloadTooLargeError, ValidationError
from printops.domain.gateway.file_store import FileStore
from printops.domain.gateway.image_inspector import ImageInspector
from printops.domain.model.batch import MAX_MANUAL_FILE_BYTES
from printops.domain.model.session import Role, Session

logger = logging.getLogger(__name__)


def _require_content(filename: str, content: bytes) -> None:
    if not filename or not filename.strip():
        raise ValidationError("File name is required", fields=("filename",))
    if not content:
        raise ValidationError(f"File '{filename}' is empty", fields=("file",))


class UploadDesignFileHandler:

    def __init__(self, file_store: FileStore, inspector: ImageInspector) -> None:
        self._file_store = file_store
        self._inspector = inspector

    def handle(self, session: Session, filename: str, content: bytes) -> UploadedFileDTO:
        session.require("upload design files", Role.CLIENT, Role.STAFF, Role.ADMIN)
        _require_content(filename, content)

        # Inspect before storing so unreadable files never land in the store
        meta = self._inspector.inspect(content)
        url = self._file_store.put(filename, content, folder="designs")
        logger.info("Design file %s stored (%dx%d, %d dpi)", url, meta.width, meta.height, meta.density)
        return UploadedFileDTO(
            file_url=url,
            size=len(content),
            width=meta.width,
            height=meta.height,
            format=meta.format,
            density=meta.density,
        )


class UploadManualFileHandler:

    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store

    def handle(self, session: Session, filename: str, content: bytes) -> UploadedFileDTO:
        session.require("upload automation files", Role.STAFF, Role.ADMIN)
        _require_content(filename, content)

        if len(content) > MAX_MANUAL_FILE_BYTES:
            raise PayloadTooLargeError(len(content), MAX_MANUAL_FILE_BYTES)

        url = self._file_store.put(filename, content, folder="automations")
        logger.info("Manual automation file %s stored (%d bytes)", url, len(content))
        return UploadedFileDTO(file_url=url, size=len(content))
