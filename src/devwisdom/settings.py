from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_path(name: str) -> Path | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    """Static settings for the local wisdom server.

    Everything is local: the server speaks JSON-RPC over stdio and keeps its
    consultation log on disk.
    """

    # Consultation log directory (relative to the working directory).
    log_dir: Path = Path(os.environ.get("DEVWISDOM_LOG_DIR", ".devwisdom"))

    # Application (diagnostic) logging. stdout carries protocol frames, so
    # diagnostics go to stderr and optionally to a rotating file.
    log_level: str = os.environ.get("DEVWISDOM_LOG_LEVEL", "WARNING")
    app_log_path: Path | None = _env_path("DEVWISDOM_APP_LOG_PATH")
    log_max_bytes: int = int(os.environ.get("DEVWISDOM_LOG_MAX_BYTES", str(1_000_000)))
    log_backup_count: int = int(os.environ.get("DEVWISDOM_LOG_BACKUP_COUNT", "3"))

    # Wisdom sources.
    default_source: str = os.environ.get("DEVWISDOM_DEFAULT_SOURCE", "pistis_sophia")
    sources_cache_ttl_seconds: float = float(
        os.environ.get("DEVWISDOM_SOURCES_CACHE_TTL", "300")
    )
    # If unset, the project root is discovered from the working directory.
    project_root: Path | None = _env_path("DEVWISDOM_PROJECT_ROOT")


settings = Settings()
