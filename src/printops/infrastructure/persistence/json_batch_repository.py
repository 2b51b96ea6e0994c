"""JSON-file-backed implementation of BatchRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from printops.domain.model.batch import (
    AlgorithmType,
    AutomationBatch,
    BatchKind,
    LayoutResult,
    ManualAutomationBatch,
    Placement,
)
from printops.domain.model.value_objects import Margins
from printops.domain.repository.batch_repository import Batch, BatchRepository
from printops.infrastructure.persistence.file_lock import lock_for


class JsonBatchRepository(BatchRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._lock = lock_for(file_path)

    # --- BatchRepository interface --------------------------------------------

    def get_by_id(self, batch_id: str) -> Batch | None:
        for raw in self._load_raw():
            if raw["id"] == str(batch_id):
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Batch]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, batch: Batch) -> None:
        with self._lock:
            records = self._load_raw()
            if batch.id is None:
                batch.id = str(max((int(r["id"]) for r in records), default=0) + 1)
            records = [r for r in records if r["id"] != batch.id]
            records.append(self._to_raw(batch))
            self._persist_raw(records)

    def delete(self, batch_id: str) -> bool:
        with self._lock:
            records = self._load_raw()
            kept = [r for r in records if r["id"] != str(batch_id)]
            if len(kept) == len(records):
                return False
            self._persist_raw(kept)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(batch: Batch) -> dict:
        raw = {
            "id": batch.id,
            "kind": batch.kind.value,
            "name": batch.name,
            "description": batch.description,
            "order_ids": list(batch.order_ids),
            "created_at": batch.created_at.isoformat(),
        }
        if isinstance(batch, ManualAutomationBatch):
            raw["file_url"] = batch.file_url
            return raw
        raw.update(
            sheet_id=batch.sheet_id,
            bleed=str(batch.bleed),
            rotations_allowed=batch.rotations_allowed,
            algorithm=batch.algorithm.value,
            margins=batch.margins.to_dict(),
            layout={
                "efficiency": str(batch.layout.efficiency),
                "type": batch.layout.type,
                "placements": [
                    {"order_id": p.order_id, "x": str(p.x), "y": str(p.y), "rotated": p.rotated}
                    for p in batch.layout.placements
                ],
            },
        )
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Batch:
        created_at = datetime.fromisoformat(raw["created_at"])
        if raw["kind"] == BatchKind.MANUAL.value:
            return ManualAutomationBatch(
                id=raw["id"],
                name=raw["name"],
                description=raw.get("description", ""),
                order_ids=list(raw["order_ids"]),
                file_url=raw["file_url"],
                created_at=created_at,
            )
        layout = raw["layout"]
        return AutomationBatch(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            order_ids=list(raw["order_ids"]),
            sheet_id=raw["sheet_id"],
            bleed=Decimal(raw["bleed"]),
            rotations_allowed=raw["rotations_allowed"],
            algorithm=AlgorithmType(raw["algorithm"]),
            margins=Margins.of(**raw["margins"]),
            layout=LayoutResult(
                efficiency=Decimal(layout["efficiency"]),
                type=layout["type"],
                placements=tuple(
                    Placement(p["order_id"], Decimal(p["x"]), Decimal(p["y"]), p.get("rotated", False))
                    for p in layout.get("placements", [])
                ),
            ),
            created_at=created_at,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
