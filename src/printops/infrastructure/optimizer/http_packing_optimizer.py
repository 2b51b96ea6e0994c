"""PackingOptimizer adapter that talks to the nesting service over HTTP.

Sole responsibility: turn a PackingRequest into the service's JSON
payload, POST it with a timeout, and parse the layout it returns. Every
transport or format problem surfaces as AutomationFailedError.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

import requests

from printops.domain.exceptions import AutomationFailedError
from printops.domain.gateway.packing_optimizer import PackingOptimizer, PackingRequest
from printops.domain.model.batch import LayoutResult, Placement

logger = logging.getLogger(__name__)


class HttpPackingOptimizer(PackingOptimizer):

    def __init__(self, url: str, session: requests.Session | None = None) -> None:
        if not url:
            raise ValueError("Optimizer URL not set. Set PRINTOPS_OPTIMIZER_URL.")
        self._url = url
        self._http = session or requests.Session()

    def optimize(self, request: PackingRequest, timeout: float) -> LayoutResult:
        payload = self._to_payload(request)
        logger.debug("POST %s jobs=%d timeout=%s", self._url, len(request.jobs), timeout)
        try:
            resp = self._http.post(self._url, json=payload, timeout=timeout)
            resp.raise_for_status()
            body = resp.json()
        except requests.Timeout as exc:
            logger.warning("Optimizer timed out after %ss", timeout)
            raise AutomationFailedError(f"Optimizer timed out after {timeout}s") from exc
        except requests.RequestException as exc:
            logger.warning("Optimizer request failed: %s", exc)
            raise AutomationFailedError(f"Optimizer request failed: {exc}") from exc
        except ValueError as exc:
            raise AutomationFailedError("Optimizer returned invalid JSON") from exc

        return self._to_layout(body)

    # --- Wire format ----------------------------------------------------------

    @staticmethod
    def _to_payload(request: PackingRequest) -> dict:
        return {
            "sheet": {
                "id": request.sheet.id,
                "width": float(request.sheet.width),
                "height": float(request.sheet.height),
            },
            "type": request.algorithm.value,
            "bleed": float(request.bleed),
            "rotationsAllowed": request.rotations_allowed,
            "margins": {k: float(v) for k, v in request.margins.to_dict().items()},
            "jobs": [
                {
                    "orderId": job.order_id,
                    "width": float(job.width),
                    "height": float(job.height),
                    "quantity": job.quantity,
                }
                for job in request.jobs
            ],
        }

    @staticmethod
    def _to_layout(body: dict) -> LayoutResult:
        try:
            efficiency = Decimal(str(body["efficiency"]))
            placements = tuple(
                Placement(
                    order_id=str(p["orderId"]),
                    x=Decimal(str(p["x"])),
                    y=Decimal(str(p["y"])),
                    rotated=bool(p.get("rotated", False)),
                )
                for p in body.get("placements", [])
            )
            return LayoutResult(efficiency=efficiency, type=str(body["type"]), placements=placements)
        except (KeyError, TypeError, InvalidOperation, AttributeError) as exc:
            raise AutomationFailedError(f"Optimizer response is malformed: {body!r}") from exc
