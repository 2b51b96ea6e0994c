"""Application service: List / Show Batch use cases (queries)."""

from __future__ import annotations

from printops.application.dto import BatchDTO
from printops.domain.exceptions import NotFoundError
from printops.domain.repository.batch_repository import BatchRepository


class ListBatchesHandler:

    def __init__(self, batch_repo: BatchRepository) -> None:
        self._batch_repo = batch_repo

    def handle(self, kind: str | None = None) -> list[BatchDTO]:
        dtos = [BatchDTO.from_domain(b) for b in self._batch_repo.list_all()]
        if kind:
            dtos = [d for d in dtos if d.kind == kind.upper()]
        return dtos


class ShowBatchHandler:

    def __init__(self, batch_repo: BatchRepository) -> None:
        self._batch_repo = batch_repo

    def handle(self, batch_id: str) -> BatchDTO:
        batch = self._batch_repo.get_by_id(batch_id)
        if batch is None:
            raise NotFoundError(f"Batch #{batch_id} not found")
        return BatchDTO.from_domain(batch)
