"""Application service: Submit Manual Batch use case.

Records a layout someone produced by hand instead of calling the
optimizer. The file is size-checked before any order is touched; the
orders then move to MANUALLY_AUTOMATED together with the batch record.
"""

from __future__ import annotations

import logging

from printops.application.dto import BatchDTO
from printops.domain.exceptions import PayloadTooLargeError, ValidationError
from printops.domain.gateway.file_store import FileStore
from printops.domain.model.batch import MAX_MANUAL_FILE_BYTES, ManualAutomationBatch
from printops.domain.model.order import OrderStatus
from printops.domain.model.session import Role, Session
from printops.domain.repository.batch_repository import BatchRepository
from printops.domain.repository.order_repository import OrderRepository
from printops.domain.service.batch_eligibility_service import BatchEligibilityService

logger = logging.getLogger(__name__)


class SubmitManualBatchHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        batch_repo: BatchRepository,
        file_store: FileStore,
    ) -> None:
        self._order_repo = order_repo
        self._batch_repo = batch_repo
        self._file_store = file_store

    def handle(
        self,
        session: Session,
        order_ids: list[str],
        name: str,
        description: str,
        file_url: str,
    ) -> BatchDTO:
        session.require("submit batches", Role.ADMIN, Role.STAFF)

        missing = [f for f, v in (("name", name), ("file_url", file_url)) if not v or not v.strip()]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}", fields=missing
            )

        size = self._file_store.size_of(file_url)
        if size > MAX_MANUAL_FILE_BYTES:
            logger.warning("Manual batch file %s rejected (%d bytes)", file_url, size)
            raise PayloadTooLargeError(size, MAX_MANUAL_FILE_BYTES)

        eligibility = BatchEligibilityService(self._order_repo)
        eligibility.load_active(order_ids)

        batch = ManualAutomationBatch(
            id=None,
            name=name.strip(),
            description=(description or "").strip(),
            order_ids=list(order_ids),
            file_url=file_url,
        )

        eligibility.commit(order_ids, OrderStatus.MANUALLY_AUTOMATED)
        try:
            self._batch_repo.save(batch)
        except Exception:
            eligibility.revert(order_ids, OrderStatus.MANUALLY_AUTOMATED)
            logger.exception("Could not store manual batch; orders %s reverted to ACTIVE", order_ids)
            raise

        logger.info("Manual batch %s created with %d orders", batch.id, len(order_ids))
        return BatchDTO.from_domain(batch)
