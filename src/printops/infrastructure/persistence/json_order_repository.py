"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from printops.domain.exceptions import ConflictError
from printops.domain.model.catalog import CostItemType
from printops.domain.model.order import (
    Delivery,
    Order,
    OrderDetails,
    OrderStatus,
    PrintingSide,
)
from printops.domain.model.value_objects import Dimensions, Money, Quantity
from printops.domain.repository.order_repository import OrderRepository
from printops.infrastructure.persistence.file_lock import lock_for


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._lock = lock_for(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        orders = self._load_raw()
        if not orders:
            return "1"
        return str(max(int(o["id"]) for o in orders) + 1)

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == str(order_id):
                return self._to_domain(raw)
        return None

    def list_by_status(self, status: OrderStatus | None = None) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if status is None or raw["status"] == status.value
        ]

    def save(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()

            if order.id is None:
                order.id = self.next_id()
                orders.append(self._to_raw(order))
                self._persist_raw(orders)
                return

            # Update in place, only if nobody wrote since this order was read
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    if raw.get("version", 0) != order.version:
                        raise ConflictError(
                            f"Order #{order.id} was changed by another request "
                            f"(now {raw['status']}); reload and try again"
                        )
                    order.version += 1
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))

            self._persist_raw(orders)

    def swap_status(
        self,
        order_ids: list[str],
        expected: OrderStatus,
        target: OrderStatus,
    ) -> list[str]:
        with self._lock:
            orders = self._load_raw()
            by_id = {raw["id"]: raw for raw in orders}
            offending = [
                oid for oid in order_ids
                if oid not in by_id or by_id[oid]["status"] != expected.value
            ]
            if offending:
                return offending

            stamp = datetime.now().astimezone().isoformat()
            for oid in order_ids:
                by_id[oid]["status"] = target.value
                by_id[oid]["updated_at"] = stamp
                by_id[oid]["version"] = by_id[oid].get("version", 0) + 1
            # Single write: the whole set changes or the file is untouched
            self._persist_raw(orders)
            return []

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        d = order.details
        return {
            "id": order.id,
            "status": order.status.value,
            "raised_by": order.raised_by,
            "raised_to": order.raised_to,
            "net_amount": str(order.net_amount.amount),
            "currency": order.net_amount.currency,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "version": order.version,
            "details": {
                "product_id": d.product_id,
                "product_name": d.product_name,
                "width": str(d.dimensions.width),
                "height": str(d.dimensions.height),
                "quantity": d.quantity.value,
                "paper_config_id": d.paper_config_id,
                "printing_side": d.printing_side.value,
                "quality": str(d.quality),
                "additional_note": d.additional_note,
                "file_url": d.file_url,
                "size_id": d.size_id,
                "finishings": {t.value: v for t, v in d.finishings.items()},
                "delivery": None if d.delivery is None else {
                    "address": d.delivery.address,
                    "delivery_date": d.delivery.delivery_date.isoformat(),
                    "courier": d.delivery.courier,
                },
            },
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        d = raw["details"]
        delivery = d.get("delivery")
        details = OrderDetails(
            product_id=d["product_id"],
            product_name=d["product_name"],
            dimensions=Dimensions(Decimal(d["width"]), Decimal(d["height"])),
            quantity=Quantity(d["quantity"]),
            paper_config_id=d["paper_config_id"],
            printing_side=PrintingSide(d["printing_side"]),
            quality=Decimal(d["quality"]),
            additional_note=d.get("additional_note", ""),
            file_url=d.get("file_url", ""),
            size_id=d.get("size_id"),
            finishings={CostItemType(t): v for t, v in d.get("finishings", {}).items()},
            delivery=None if delivery is None else Delivery(
                address=delivery["address"],
                delivery_date=date.fromisoformat(delivery["delivery_date"]),
                courier=delivery.get("courier", ""),
            ),
        )
        return Order(
            id=raw["id"],
            details=details,
            raised_by=raw["raised_by"],
            raised_to=raw.get("raised_to"),
            net_amount=Money(Decimal(raw["net_amount"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw.get("updated_at", raw["created_at"])),
            version=raw.get("version", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
