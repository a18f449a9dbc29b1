"""Centralised settings for the RAB lookup service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

Durations read from ``*_MS`` variables are given in milliseconds and stored
in seconds.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_RAB_URL = "https://aeronaves.anac.gov.br/aeronaves/cons_rab_resposta.asp"


def _ms_env(name: str, default_ms: int) -> float:
    return int(os.environ.get(name, str(default_ms))) / 1000.0


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))
    static_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("STATIC_DIR", "public"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    # ------------------------------------------------------------------
    # Upstream registry
    # ------------------------------------------------------------------
    rab_url: str = field(
        default_factory=lambda: os.environ.get("ANAC_RAB_URL", DEFAULT_RAB_URL)
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "25.0"))
    )

    # ------------------------------------------------------------------
    # Page cache
    # ------------------------------------------------------------------
    cache_ttl: float = field(
        default_factory=lambda: _ms_env("CACHE_TTL_MS", 60 * 60 * 1000)
    )
    cache_max_entries: int = field(
        default_factory=lambda: int(os.environ.get("CACHE_MAX_ENTRIES", "2000"))
    )

    # ------------------------------------------------------------------
    # Rate limiting (per client IP)
    # ------------------------------------------------------------------
    rate_limit_window: float = field(
        default_factory=lambda: _ms_env("RATE_LIMIT_WINDOW_MS", 60_000)
    )
    rate_limit_max: int = field(
        default_factory=lambda: int(os.environ.get("RATE_LIMIT_MAX", "60"))
    )


# Module-level singleton — import this everywhere:
#   from rabapi.config import settings
settings = Settings()
