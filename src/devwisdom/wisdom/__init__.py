"""Wisdom sources, advisors and the engine that serves them."""

from __future__ import annotations

from .advisors import AdvisorRegistry
from .engine import RANDOM_SOURCE, WisdomEngine, WisdomProvider
from .sources import SourceCache, SourceLoader, find_project_root
from .types import (
    AEON_LEVELS,
    AdvisorInfo,
    Consultation,
    ConsultationMode,
    Quote,
    SelectorKind,
    Source,
    get_aeon_level,
    get_consultation_mode,
)

__all__ = [
    "AEON_LEVELS",
    "AdvisorInfo",
    "AdvisorRegistry",
    "Consultation",
    "ConsultationMode",
    "Quote",
    "RANDOM_SOURCE",
    "SelectorKind",
    "Source",
    "SourceCache",
    "SourceLoader",
    "WisdomEngine",
    "WisdomProvider",
    "find_project_root",
    "get_aeon_level",
    "get_consultation_mode",
]
