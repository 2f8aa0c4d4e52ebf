"""Wisdom source loading.

Sources come from three layers, lowest priority first:

1. Built-in sources shipped with the package
2. Global ``sources.json`` files (XDG config dir, home directory)
3. Project ``sources.json`` files (project root, ``wisdom/``, ``.wisdom/``)

Explicit paths passed to the loader sit above all of them. Parsed files are
kept in a ``SourceCache`` owned by the loader; an entry is dropped when its
TTL expires or when the file's modification time changes.
"""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from devwisdom.errors import ConfigurationError

from .builtin_sources import BUILTIN_SOURCES
from .types import AEON_LEVELS, Quote, Source

logger = logging.getLogger(__name__)

_PROJECT_MARKERS = (".git", ".wisdom", "pyproject.toml", "setup.py", "package.json", "Makefile")


# =============================================================================
# Cache
# =============================================================================


@dataclass(frozen=True)
class _CacheEntry:
    configs: dict[str, dict[str, Any]]
    mtime_ns: int
    loaded_at: float


class SourceCache:
    """Parsed ``sources.json`` files keyed by path.

    Thread-safe. Entries expire after ``ttl_seconds`` or as soon as the file
    on disk has a different modification time than when it was parsed.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        *,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled
        self._clock = clock
        self._entries: dict[Path, _CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, path: Path) -> dict[str, dict[str, Any]] | None:
        if not self.enabled:
            return None
        with self._lock:
            entry = self._entries.get(path)
            if entry is None:
                return None
            if self._clock() - entry.loaded_at > self.ttl_seconds:
                del self._entries[path]
                return None
            try:
                mtime_ns = path.stat().st_mtime_ns
            except OSError:
                del self._entries[path]
                return None
            if mtime_ns != entry.mtime_ns:
                del self._entries[path]
                return None
            return entry.configs

    def set(self, path: Path, configs: dict[str, dict[str, Any]], mtime_ns: int) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._entries[path] = _CacheEntry(
                configs=configs, mtime_ns=mtime_ns, loaded_at=self._clock()
            )

    def invalidate(self, path: Path) -> None:
        with self._lock:
            self._entries.pop(path, None)

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# =============================================================================
# Validation and conversion
# =============================================================================


def validate_source_config(source_id: str, config: Any) -> None:
    """Validate one entry of a ``sources`` mapping.

    Raises:
        ConfigurationError: If the entry cannot be used as a source
    """
    if not source_id:
        raise ConfigurationError("source ID is required", setting="id")
    if not isinstance(config, dict):
        raise ConfigurationError(f"source {source_id!r} must be an object", setting=source_id)
    if not config.get("name"):
        raise ConfigurationError(f"source {source_id!r}: name is required", setting="name")
    quotes = config.get("quotes")
    if not isinstance(quotes, dict) or not quotes:
        raise ConfigurationError(
            f"source {source_id!r} must have at least one quote", setting="quotes"
        )
    for level in quotes:
        if level not in AEON_LEVELS:
            raise ConfigurationError(
                f"source {source_id!r}: invalid aeon level {level!r}",
                setting="quotes",
                suggestion=f"use one of {', '.join(AEON_LEVELS)}",
            )


def source_from_config(source_id: str, config: dict[str, Any]) -> Source:
    quotes: dict[str, tuple[Quote, ...]] = {}
    for level, entries in config.get("quotes", {}).items():
        if not isinstance(entries, list):
            continue
        quotes[level] = tuple(Quote.from_dict(q) for q in entries if isinstance(q, dict))
    return Source(
        id=source_id,
        name=str(config.get("name", source_id)),
        icon=str(config.get("icon", "")),
        quotes=quotes,
        description=str(config.get("description", "")),
        language=str(config.get("language", "")),
    )


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from ``start`` looking for a project marker.

    Falls back to ``start`` (the working directory by default).
    """
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _PROJECT_MARKERS):
            return candidate
    return origin


# =============================================================================
# Loader
# =============================================================================


class SourceLoader:
    """Loads wisdom sources from built-ins and ``sources.json`` files."""

    def __init__(
        self,
        *,
        project_root: Path | None = None,
        config_paths: list[Path] | None = None,
        cache: SourceCache | None = None,
        home: Path | None = None,
        include_default_locations: bool = True,
    ) -> None:
        self.project_root = project_root or find_project_root()
        self.config_paths = list(config_paths or [])
        self.cache = cache or SourceCache()
        self.home = home
        self.include_default_locations = include_default_locations

    def search_paths(self) -> list[Path]:
        """Config files in increasing priority order."""
        paths: list[Path] = []
        if self.include_default_locations:
            home = self.home or Path.home()
            xdg = os.environ.get("XDG_CONFIG_HOME")
            config_home = Path(xdg) if xdg else home / ".config"
            paths.append(config_home / "wisdom" / "sources.json")
            paths.append(home / ".wisdom" / "sources.json")

            root = self.project_root
            paths.append(root / "wisdom" / "sources.json")
            paths.append(root / "sources.json")
            paths.append(root / ".wisdom" / "sources.json")

        paths.extend(self.config_paths)

        seen: set[Path] = set()
        ordered: list[Path] = []
        for path in paths:
            if path not in seen:
                seen.add(path)
                ordered.append(path)
        return ordered

    def load(self) -> dict[str, Source]:
        """Load all layers; higher-priority layers override lower ones."""
        configs: dict[str, dict[str, Any]] = dict(BUILTIN_SOURCES)
        for path in self.search_paths():
            if not path.is_file():
                continue
            try:
                configs.update(self._read_file(path))
            except ConfigurationError as exc:
                logger.warning("Skipping sources file %s: %s", path, exc.message)

        sources: dict[str, Source] = {}
        for source_id, config in configs.items():
            try:
                validate_source_config(source_id, config)
            except ConfigurationError as exc:
                logger.warning("Skipping invalid source %r: %s", source_id, exc.message)
                continue
            sources[source_id] = source_from_config(source_id, config)
        logger.debug("Loaded %d wisdom sources", len(sources))
        return sources

    def _read_file(self, path: Path) -> dict[str, dict[str, Any]]:
        cached = self.cache.get(path)
        if cached is not None:
            return cached

        try:
            mtime_ns = path.stat().st_mtime_ns
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"cannot read {path}: {exc}", path=str(path)) from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"invalid JSON in {path}: {exc}", path=str(path)) from exc

        sources = data.get("sources") if isinstance(data, dict) else None
        if not isinstance(sources, dict):
            raise ConfigurationError(
                f"{path} has no 'sources' object",
                path=str(path),
                suggestion='expected {"version": "1.0", "sources": {...}}',
            )

        self.cache.set(path, sources, mtime_ns)
        return sources
