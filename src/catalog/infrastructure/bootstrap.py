"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pymongo import MongoClient

from catalog.application.compute_total_price import ComputeTotalPriceHandler
from catalog.application.reconcile_quantities import ReconcileQuantitiesHandler
from catalog.config.settings import CatalogSettings
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.messaging.codec import Channel
from catalog.infrastructure.messaging.dispatcher import MessageDispatcher
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from catalog.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)


def product_repository(settings: CatalogSettings) -> ProductRepository:
    if settings.store == "mongo":
        client: MongoClient = MongoClient(
            settings.mongo_uri, serverSelectionTimeoutMS=settings.mongo_timeout_ms
        )
        repo = MongoProductRepository(client[settings.mongo_db][settings.mongo_collection])
        repo.ensure_indexes()
        return repo
    return JsonProductRepository(settings.data_dir / "products.json")


def message_dispatcher(
    settings: CatalogSettings,
    product_repo: ProductRepository | None = None,
) -> MessageDispatcher:
    repo = product_repo or product_repository(settings)
    queues = {
        settings.total_price_queue: Channel.TOTAL_PRICE,
        settings.fetch_qty_queue: Channel.FETCH_QTY,
        settings.restore_qty_queue: Channel.RESTORE_QTY,
    }
    return MessageDispatcher(
        pricing=ComputeTotalPriceHandler(repo),
        reconciler=ReconcileQuantitiesHandler(repo, cas_retries=settings.cas_retries),
        queues=queues,
    )
