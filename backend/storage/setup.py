from __future__ import annotations

import logging

from ..catalog.seed import SEED_RECORDS
from .base import Repository
from .config import DEFAULT_STORAGE_CONFIG, StorageConfig
from .memory import MemoryRepository
from .sqlite_store import SQLiteRepository

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "sqlite")


def build_repository(config: StorageConfig = DEFAULT_STORAGE_CONFIG) -> Repository:
    """Instantiate the configured backend. Does not create tables or seed."""
    backend = config.backend.strip().lower()
    if backend == "memory":
        return MemoryRepository()
    if backend == "sqlite":
        return SQLiteRepository(config.db_path)
    raise ValueError(
        f"Unknown storage backend {config.backend!r}; expected one of {', '.join(BACKENDS)}"
    )


def setup_repository(config: StorageConfig = DEFAULT_STORAGE_CONFIG) -> Repository:
    """
    One-time storage setup, run explicitly at process startup.

    Steps:
    - Build the configured backend.
    - Create the schema where the backend has one.
    - Upsert the curated seed catalog (unless seeding is disabled).
    """
    repository = build_repository(config)
    if isinstance(repository, SQLiteRepository):
        repository.create_schema()

    if config.seed_on_startup:
        count = repository.seed(SEED_RECORDS)
        logger.info("Seeded %d catalog records into %s storage", count, config.backend)
    else:
        logger.info("Catalog seeding disabled; using existing %s storage", config.backend)

    return repository


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    repo = setup_repository()
    print(f"Setup complete. {len(repo.list_products())} catalog records available.")
    repo.close()
