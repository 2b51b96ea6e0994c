"""Application service: Submit Batch use case (algorithmic automation).

Orchestrates the batch eligibility domain service, the external packing
optimizer and the batch repository. The optimizer runs before any order
is touched, so an optimizer failure or timeout leaves everything as it
was. Orders move to AUTOMATED together with the batch record, or not at
all.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from printops.application.dto import BatchDTO
from printops.domain.exceptions import AutomationFailedError, NotFoundError, ValidationError
from printops.domain.gateway.packing_optimizer import PackingJob, PackingOptimizer, PackingRequest
from printops.domain.model.batch import AlgorithmType, AutomationBatch
from printops.domain.model.order import OrderStatus
from printops.domain.model.session import Role, Session
from printops.domain.model.value_objects import Margins
from printops.domain.repository.batch_repository import BatchRepository
from printops.domain.repository.order_repository import OrderRepository
from printops.domain.repository.product_repository import ProductRepository
from printops.domain.service.batch_eligibility_service import BatchEligibilityService

logger = logging.getLogger(__name__)


class SubmitBatchHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        batch_repo: BatchRepository,
        optimizer: PackingOptimizer,
        default_timeout: float = 30.0,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._batch_repo = batch_repo
        self._optimizer = optimizer
        self._default_timeout = default_timeout

    def handle(
        self,
        session: Session,
        order_ids: list[str],
        sheet_id: str,
        bleed: str | int | Decimal = 0,
        rotations_allowed: bool = False,
        algorithm: AlgorithmType | str = AlgorithmType.BOTTOM_LEFT_FILL,
        margins: Margins | None = None,
        name: str | None = None,
        description: str | None = None,
        timeout: float | None = None,
    ) -> BatchDTO:
        session.require("submit batches", Role.ADMIN, Role.STAFF)

        sheet = self._product_repo.get_sheet(sheet_id)
        if sheet is None:
            raise NotFoundError(f"Sheet '{sheet_id}' not found")
        algorithm = self._algorithm(algorithm)
        bleed_value = self._bleed(bleed)
        margins = margins or Margins()

        # Phase 1: every selected order exists and is ACTIVE
        eligibility = BatchEligibilityService(self._order_repo)
        orders = eligibility.load_active(order_ids)

        request = PackingRequest(
            sheet=sheet,
            jobs=tuple(
                PackingJob(
                    order_id=o.id,  # type: ignore[arg-type]
                    width=o.details.dimensions.width,
                    height=o.details.dimensions.height,
                    quantity=o.details.quantity.value,
                )
                for o in orders
            ),
            algorithm=algorithm,
            margins=margins,
            bleed=bleed_value,
            rotations_allowed=rotations_allowed,
        )

        limit = timeout if timeout is not None else self._default_timeout
        logger.info(
            "Submitting %d orders to optimizer (sheet=%s, algorithm=%s, timeout=%ss)",
            len(orders), sheet.id, algorithm.value, limit,
        )
        try:
            layout = self._optimizer.optimize(request, timeout=limit)
        except AutomationFailedError:
            logger.warning("Optimizer failed for orders %s; nothing changed", order_ids)
            raise

        now = datetime.now(timezone.utc)
        batch = AutomationBatch(
            id=None,
            name=(name or "").strip() or f"Automation {now:%Y-%m-%d %H:%M}",
            description=(description or "").strip(),
            order_ids=list(order_ids),
            sheet_id=sheet.id,
            bleed=bleed_value,
            rotations_allowed=rotations_allowed,
            algorithm=algorithm,
            margins=margins,
            layout=layout,
            created_at=now,
        )

        # Phase 2: move all orders at once, then record the batch
        eligibility.commit(order_ids, OrderStatus.AUTOMATED)
        try:
            self._batch_repo.save(batch)
        except Exception:
            eligibility.revert(order_ids, OrderStatus.AUTOMATED)
            logger.exception("Could not store batch; orders %s reverted to ACTIVE", order_ids)
            raise

        logger.info(
            "Batch %s created with %d orders, efficiency %s%%",
            batch.id, len(order_ids), layout.efficiency,
        )
        return BatchDTO.from_domain(batch)

    # --- Input parsing --------------------------------------------------------

    @staticmethod
    def _algorithm(raw: AlgorithmType | str) -> AlgorithmType:
        if isinstance(raw, AlgorithmType):
            return raw
        try:
            return AlgorithmType(str(raw).upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown algorithm: {raw}", fields=("algorithm",)) from exc

    @staticmethod
    def _bleed(raw: str | int | Decimal) -> Decimal:
        try:
            value = Decimal(str(raw))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid bleed: {raw!r}", fields=("bleed",)) from exc
        if not value.is_finite() or value < 0:
            raise ValidationError("Bleed must be a finite, non-negative number", fields=("bleed",))
        return value
