"""
Backend wiring for the catalogue.

Decides which key-value store backs the local client and assembles the
remote/local pair behind CatalogService. Entry points (API, CLI) call
`build_catalog_store`; tests build the pieces directly.
"""

import logging
from pathlib import Path
from typing import Optional

from src.catalog.state import CatalogStore
from src.integrations.clients.local.local_catalog import LocalCatalogClient
from src.integrations.clients.real_http.catalog_api import RemoteCatalogClient
from src.integrations.policy.catalog_service import CatalogService
from src.utils.config_loader import CatalogConfig, StorageConfig, load_catalog_config

logger = logging.getLogger(__name__)


def build_key_value_store(storage: StorageConfig):
    if storage.backend == "redis":
        from src.database.redis_store import RedisKeyValueStore

        logger.info("Using Redis key-value store for local catalogue data")
        return RedisKeyValueStore(url=storage.redis_url)

    if storage.backend == "file":
        from src.database.file_store import JsonFileKeyValueStore

        logger.info("Using JSON file key-value store at %s", storage.path)
        return JsonFileKeyValueStore(Path(storage.path))

    from src.database.kv_store import InMemoryKeyValueStore

    logger.info("Using in-memory key-value store for local catalogue data")
    return InMemoryKeyValueStore()


def build_catalog_service(cfg: Optional[CatalogConfig] = None) -> CatalogService:
    cfg = cfg or load_catalog_config()
    remote = RemoteCatalogClient(
        base_url=cfg.remote.base_url,
        timeout_seconds=cfg.remote.timeout_seconds,
    )
    local = LocalCatalogClient(
        build_key_value_store(cfg.storage),
        products_key=cfg.storage.products_key,
        comments_key=cfg.storage.comments_key,
    )
    return CatalogService(remote=remote, local=local)


def build_catalog_store(cfg: Optional[CatalogConfig] = None) -> CatalogStore:
    return CatalogStore(build_catalog_service(cfg))
