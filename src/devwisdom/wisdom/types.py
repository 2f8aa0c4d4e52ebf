"""Wisdom data model.

Quotes, sources, advisors, consultation modes and the persisted
consultation record.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any


class AeonLevel(str, Enum):
    """Project health stages used to pick quotes from a source."""

    CHAOS = "chaos"  # < 30
    LOWER = "lower_aeons"  # 30-50
    MIDDLE = "middle_aeons"  # 50-70
    UPPER = "upper_aeons"  # 70-85
    TREASURY = "treasury"  # >= 85


AEON_LEVELS: tuple[str, ...] = tuple(level.value for level in AeonLevel)


def get_aeon_level(score: float) -> str:
    """Return the aeon level for a health score."""
    if score < 30:
        return AeonLevel.CHAOS.value
    if score < 50:
        return AeonLevel.LOWER.value
    if score < 70:
        return AeonLevel.MIDDLE.value
    if score < 85:
        return AeonLevel.UPPER.value
    return AeonLevel.TREASURY.value


class SelectorKind(str, Enum):
    """How an advisor is selected."""

    METRIC = "metric"
    TOOL = "tool"
    STAGE = "stage"


@dataclass(frozen=True)
class Quote:
    quote: str
    source: str
    encouragement: str
    wisdom_source: str = ""
    wisdom_icon: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = {
            "quote": self.quote,
            "source": self.source,
            "encouragement": self.encouragement,
        }
        if self.wisdom_source:
            data["wisdom_source"] = self.wisdom_source
        if self.wisdom_icon:
            data["wisdom_icon"] = self.wisdom_icon
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Quote":
        return cls(
            quote=str(data.get("quote", "")),
            source=str(data.get("source", "")),
            encouragement=str(data.get("encouragement", "")),
            wisdom_source=str(data.get("wisdom_source", "")),
            wisdom_icon=str(data.get("wisdom_icon", "")),
        )


@dataclass(frozen=True)
class Source:
    """A wisdom source with quotes keyed by aeon level."""

    id: str
    name: str
    icon: str
    quotes: dict[str, tuple[Quote, ...]]
    description: str = ""
    language: str = ""

    def quotes_for(self, aeon_level: str) -> tuple[Quote, ...]:
        """Quotes for a level, falling back to the first non-empty level."""
        quotes = self.quotes.get(aeon_level, ())
        if quotes:
            return quotes
        for level in AEON_LEVELS:
            if self.quotes.get(level):
                return self.quotes[level]
        for candidates in self.quotes.values():
            if candidates:
                return candidates
        return ()

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
        }


@dataclass(frozen=True)
class AdvisorInfo:
    advisor: str
    icon: str = ""
    rationale: str = ""
    helps_with: str = ""
    language: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = {"advisor": self.advisor, "icon": self.icon, "rationale": self.rationale}
        if self.helps_with:
            data["helps_with"] = self.helps_with
        if self.language:
            data["language"] = self.language
        return data


@dataclass(frozen=True)
class ConsultationMode:
    name: str
    min_score: float
    max_score: float
    frequency: str
    description: str
    icon: str


CONSULTATION_MODES: tuple[ConsultationMode, ...] = (
    ConsultationMode(
        name="chaos",
        min_score=0,
        max_score=30,
        frequency="every_change",
        description="Project is unstable. Consult before every significant change.",
        icon="🔥",
    ),
    ConsultationMode(
        name="building",
        min_score=30,
        max_score=60,
        frequency="daily",
        description="Foundations are forming. A daily check-in keeps the work on course.",
        icon="🏗️",
    ),
    ConsultationMode(
        name="maturing",
        min_score=60,
        max_score=80,
        frequency="weekly",
        description="Project is maturing. Weekly reflection sharpens what already works.",
        icon="🌱",
    ),
    ConsultationMode(
        name="mastery",
        min_score=80,
        max_score=100,
        frequency="milestones",
        description="Project is healthy. Consult at milestones to guard against complacency.",
        icon="🎯",
    ),
)


def get_consultation_mode(score: float) -> ConsultationMode:
    """Return the consultation mode whose range contains the score."""
    for mode in CONSULTATION_MODES:
        if score < mode.max_score:
            return mode
    return CONSULTATION_MODES[-1]


@dataclass(frozen=True)
class Consultation:
    """One advisor consultation, as persisted in the consultation log."""

    timestamp: str
    consultation_type: str
    advisor: str
    advisor_icon: str
    advisor_name: str
    rationale: str
    score_at_time: float
    consultation_mode: str
    mode_icon: str
    mode_frequency: str
    mode_guidance: str
    quote: str
    quote_source: str
    encouragement: str
    metric: str = ""
    tool: str = ""
    stage: str = ""
    context: str = ""
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    _OPTIONAL = ("metric", "tool", "stage", "context")

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra")
        for key in self._OPTIONAL:
            if not data[key]:
                del data[key]
        return {**extra, **data}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Consultation":
        """Build a record from a decoded log line.

        Missing fields get empty defaults; unknown keys are preserved in
        ``extra`` so nothing read from disk is dropped on re-serialization.
        """
        known = {f.name for f in fields(cls)} - {"extra"}
        score = data.get("score_at_time", 0)
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            score = 0
        values: dict[str, Any] = {}
        for name in known:
            if name == "score_at_time":
                values[name] = float(score)
            else:
                raw = data.get(name, "")
                if raw is None:
                    raw = ""
                values[name] = raw if isinstance(raw, str) else str(raw)
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**values, extra=extra)
