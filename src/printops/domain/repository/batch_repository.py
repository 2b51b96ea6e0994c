"""Abstract repository for automation batches of both kinds."""

from __future__ import annotations

from abc import ABC, abstractmethod

from printops.domain.model.batch import AutomationBatch, ManualAutomationBatch

Batch = AutomationBatch | ManualAutomationBatch


class BatchRepository(ABC):

    @abstractmethod
    def get_by_id(self, batch_id: str) -> Batch | None:
        """Return a batch by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Batch]:
        """Return every batch, oldest first."""

    @abstractmethod
    def save(self, batch: Batch) -> None:
        """Persist a new batch, assigning its ID."""

    @abstractmethod
    def delete(self, batch_id: str) -> bool:
        """Remove a batch record. Returns False if it did not exist."""
