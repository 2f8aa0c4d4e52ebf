"""Wisdom engine: the provider behind the tool and resource handlers."""

from __future__ import annotations

import dataclasses
import logging
import random
import threading
import zlib
from datetime import date
from typing import Callable, Protocol

from .advisors import AdvisorRegistry
from .sources import SourceLoader
from .types import AdvisorInfo, Quote, SelectorKind, Source, get_aeon_level

logger = logging.getLogger(__name__)

RANDOM_SOURCE = "random"


class WisdomProvider(Protocol):
    """Lookups the handlers need. Misses return None rather than raising."""

    def lookup_quote(self, score: float, source_id: str) -> Quote | None: ...

    def lookup_advisor(self, kind: SelectorKind | str, key: str) -> AdvisorInfo | None: ...

    def list_source_ids(self) -> list[str]: ...

    def get_source(self, source_id: str) -> Source | None: ...

    def list_advisors(self, kind: SelectorKind | str) -> dict[str, AdvisorInfo]: ...


class WisdomEngine:
    """Sources plus advisors, loaded once and then read concurrently.

    Example:
        engine = WisdomEngine()
        engine.initialize()
        quote = engine.lookup_quote(72.0, "stoic")
    """

    def __init__(
        self,
        *,
        loader: SourceLoader | None = None,
        advisors: AdvisorRegistry | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.loader = loader or SourceLoader()
        self.advisors = advisors or AdvisorRegistry()
        self._today = today
        self._sources: dict[str, Source] = {}
        self._initialized = False
        self._lock = threading.RLock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Load sources. Idempotent."""
        with self._lock:
            if self._initialized:
                return
            self._sources = self.loader.load()
            self._initialized = True
            logger.info("Wisdom engine initialized with %d sources", len(self._sources))

    def reload(self) -> None:
        """Drop cached configuration and load sources again."""
        with self._lock:
            self.loader.cache.invalidate_all()
            self._sources = self.loader.load()
            self._initialized = True

    def _loaded(self) -> dict[str, Source]:
        if not self._initialized:
            self.initialize()
        return self._sources

    # -------------------------------------------------------------------------
    # Provider interface
    # -------------------------------------------------------------------------

    def lookup_quote(self, score: float, source_id: str) -> Quote | None:
        """Quote for the score's aeon level from a source.

        ``random`` picks a source seeded by today's date, so it is stable for
        the whole day.
        """
        with self._lock:
            sources = self._loaded()
            if source_id == RANDOM_SOURCE:
                picked = self.random_source_id()
                if picked is None:
                    return None
                source_id = picked
            source = sources.get(source_id)
        if source is None:
            return None

        level = get_aeon_level(score)
        quotes = source.quotes_for(level)
        if not quotes:
            return None
        quote = quotes[self._daily_index(f"{source_id}:{level}", len(quotes))]
        return dataclasses.replace(quote, wisdom_source=source.name, wisdom_icon=source.icon)

    def lookup_advisor(self, kind: SelectorKind | str, key: str) -> AdvisorInfo | None:
        return self.advisors.lookup(kind, key)

    def list_source_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._loaded())

    def get_source(self, source_id: str) -> Source | None:
        with self._lock:
            return self._loaded().get(source_id)

    def list_advisors(self, kind: SelectorKind | str) -> dict[str, AdvisorInfo]:
        return self.advisors.all(kind)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def random_source_id(self) -> str | None:
        """Date-seeded source choice, stable for the whole day."""
        with self._lock:
            candidates = sorted(self._loaded())
        if not candidates:
            return None
        day = self._today()
        seed = int(day.strftime("%Y%m%d")) + zlib.crc32(b"random_source")
        return random.Random(seed).choice(candidates)

    def _daily_index(self, key: str, count: int) -> int:
        if count <= 1:
            return 0
        token = f"{self._today().isoformat()}:{key}".encode("utf-8")
        return zlib.crc32(token) % count
