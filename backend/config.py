from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip()) or ("*",)


@dataclass(frozen=True)
class ServerConfig:
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "*"))
    )


DEFAULT_SERVER_CONFIG = ServerConfig()
