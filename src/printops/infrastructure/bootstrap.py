"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from printops.domain.service.pricing_engine import PricingEngine
from printops.infrastructure.config import Settings, load_settings
from printops.infrastructure.optimizer.http_packing_optimizer import HttpPackingOptimizer
from printops.infrastructure.persistence.json_batch_repository import JsonBatchRepository
from printops.infrastructure.persistence.json_order_repository import JsonOrderRepository
from printops.infrastructure.persistence.json_product_repository import JsonProductRepository
from printops.infrastructure.persistence.json_user_repository import JsonUserRepository
from printops.infrastructure.storage.local_file_store import LocalFileStore
from printops.infrastructure.storage.pillow_image_inspector import PillowImageInspector


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "catalog.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def batch_repository() -> JsonBatchRepository:
    return JsonBatchRepository(settings().data_dir / "batches.json")


def user_repository() -> JsonUserRepository:
    return JsonUserRepository(settings().data_dir / "users.json")


def file_store() -> LocalFileStore:
    return LocalFileStore(settings().data_dir / "files")


def image_inspector() -> PillowImageInspector:
    return PillowImageInspector()


def packing_optimizer() -> HttpPackingOptimizer:
    return HttpPackingOptimizer(settings().optimizer_url)


def pricing_engine() -> PricingEngine:
    return PricingEngine(currency=settings().currency)
