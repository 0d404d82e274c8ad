from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


def _project_path(raw: str) -> Path:
    """Resolve relative paths against the project root, not the working directory."""
    path = Path(raw)
    return path if path.is_absolute() else PROJECT_ROOT / path


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class StorageConfig:
    """
    Configuration for the persistence layer.

    ``backend`` selects the repository implementation: ``sqlite`` for the
    embedded file database, ``memory`` for an in-process store.
    """

    backend: str = os.getenv("TECH_FINDER_STORE", "sqlite")
    db_path: Path = _project_path(os.getenv("TECH_FINDER_DB_PATH", "backend/data/tech_finder.db"))
    seed_on_startup: bool = _env_flag("TECH_FINDER_SEED")
    brief_list_limit: int = 20


DEFAULT_STORAGE_CONFIG = StorageConfig()
