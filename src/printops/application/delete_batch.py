"""Application service: Delete Batch use case.

Removes the batch record only. The orders it held keep their AUTOMATED /
MANUALLY_AUTOMATED status; use a quantity update to re-open one.
"""

from __future__ import annotations

import logging

from printops.domain.exceptions import NotFoundError
from printops.domain.model.session import Role, Session
from printops.domain.repository.batch_repository import BatchRepository

logger = logging.getLogger(__name__)


class DeleteBatchHandler:

    def __init__(self, batch_repo: BatchRepository) -> None:
        self._batch_repo = batch_repo

    def handle(self, session: Session, batch_id: str) -> None:
        session.require("delete batches", Role.ADMIN)

        if not self._batch_repo.delete(batch_id):
            raise NotFoundError(f"Batch #{batch_id} not found")
        logger.info("Batch %s deleted by %s; order statuses left as-is", batch_id, session.user_id)
