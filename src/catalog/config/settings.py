"""Service settings — CLI flags, env vars and an optional ``.env`` file.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CATALOG_*`` prefix
  3. ``.env``     — in the working directory
  4. Code defaults
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class CatalogSettings(BaseSettings):
    """Settings for the catalog service.

    Only the composition root (:mod:`catalog.infrastructure.bootstrap`)
    and the CLI entry point read this object.

    Attributes:
        store: ``"json"`` keeps products in a local file under
            ``data_dir``; ``"mongo"`` uses the MongoDB collection.
        cas_retries: How many times a lost compare-and-swap on a product
            quantity is re-read and retried before the item is skipped.
        workers: Size of the pool that handles deliveries concurrently.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CATALOG_",
        "env_file": ".env",
        "extra": "ignore",
    }

    # --- Document store ---
    store: Literal["json", "mongo"] = "json"
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / "data")
    mongo_uri: str = "mongodb://localhost:27017/"
    mongo_db: str = "product_service"
    mongo_collection: str = "products"
    mongo_timeout_ms: int = Field(default=5000, gt=0)

    # --- Broker channels ---
    total_price_queue: str = "total-price"
    fetch_qty_queue: str = "fetch-qty"
    restore_qty_queue: str = "restore-qty"

    # --- Consumers ---
    workers: int = Field(default=4, ge=1)
    cas_retries: int = Field(default=3, ge=0)

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> CatalogSettings:
        """Build settings, letting only flags that were actually given win."""
        return cls(**{k: v for k, v in cli_flags.items() if v is not None})
