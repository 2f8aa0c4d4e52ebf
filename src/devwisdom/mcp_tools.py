"""Tool implementations for the devwisdom MCP server.

devwisdom provides four tools:

- consult_advisor: pick an advisor by metric, tool or stage and log the consultation
- get_wisdom: one quote for a health score from a source
- get_daily_briefing: quotes from a few sources at once
- get_consultation_log: recent consultations from the log

The server maps ``ToolError`` to JSON-RPC errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from .consultation_log import ConsultationLog
from .errors import ConsultationLogError, WisdomError
from .rpc.validation import clamp_score, coerce_number, optional_string, require_number
from .settings import settings
from .wisdom import (
    AdvisorInfo,
    Consultation,
    Quote,
    SelectorKind,
    WisdomProvider,
    get_consultation_mode,
)

logger = logging.getLogger(__name__)

_JSON = dict[str, Any]

DEFAULT_ADVISOR = AdvisorInfo(
    advisor="pistis_sophia",
    icon="📜",
    rationale="Default wisdom advisor",
)

FALLBACK_QUOTE = Quote(
    quote="Wisdom comes from experience.",
    source="Unknown",
    encouragement="Keep learning and growing.",
)

BRIEFING_FALLBACK_SOURCES = ("pistis_sophia", "stoic", "tao")
BRIEFING_SOURCE_LIMIT = 3
DEFAULT_LOG_DAYS = 7


class ToolError(RuntimeError):
    def __init__(self, code: str, message: str, data: Any | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> _JSON:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass
class ToolContext:
    """What the tool handlers need: the provider and an optional log."""

    provider: WisdomProvider
    consultation_log: ConsultationLog | None = None
    default_source: str = settings.default_source
    clock: Callable[[], datetime] = field(default=lambda: datetime.now().astimezone())


def list_tools() -> list[Tool]:
    """List all available devwisdom tools."""
    return [
        Tool(
            name="consult_advisor",
            description="Consult a wisdom advisor based on metric, tool, or stage",
            input_schema={
                "type": "object",
                "properties": {
                    "metric": {
                        "type": "string",
                        "description": "Metric name (e.g., 'security', 'testing')",
                    },
                    "tool": {
                        "type": "string",
                        "description": "Tool name (e.g., 'project_scorecard')",
                    },
                    "stage": {
                        "type": "string",
                        "description": "Stage name (e.g., 'daily_checkin')",
                    },
                    "score": {
                        "type": "number",
                        "description": "Project health score (0-100)",
                    },
                    "context": {
                        "type": "string",
                        "description": "Additional context for the consultation",
                    },
                },
            },
        ),
        Tool(
            name="get_wisdom",
            description="Get a wisdom quote based on project health score and source",
            input_schema={
                "type": "object",
                "properties": {
                    "score": {
                        "type": "number",
                        "description": "Project health score (0-100)",
                    },
                    "source": {
                        "type": "string",
                        "description": (
                            "Wisdom source ID (e.g., 'pistis_sophia', 'stoic') "
                            "or 'random' for date-seeded random selection"
                        ),
                    },
                },
                "required": ["score"],
            },
        ),
        Tool(
            name="get_daily_briefing",
            description="Get a daily wisdom briefing with quotes and guidance",
            input_schema={
                "type": "object",
                "properties": {
                    "score": {
                        "type": "number",
                        "description": "Project health score (0-100)",
                    },
                },
            },
        ),
        Tool(
            name="get_consultation_log",
            description="Retrieve consultation log entries",
            input_schema={
                "type": "object",
                "properties": {
                    "days": {
                        "type": "number",
                        "description": f"Number of days to retrieve (default: {DEFAULT_LOG_DAYS})",
                    },
                },
            },
        ),
    ]


def tool_names() -> list[str]:
    return [t.name for t in list_tools()]


# =============================================================================
# Argument structs
# =============================================================================


@dataclass(frozen=True)
class ConsultAdvisorArgs:
    metric: str = ""
    tool: str = ""
    stage: str = ""
    score: float = 0.0
    context: str = ""

    @classmethod
    def from_arguments(cls, arguments: _JSON) -> "ConsultAdvisorArgs":
        score = coerce_number(arguments.get("score"))
        return cls(
            metric=optional_string(arguments, "metric"),
            tool=optional_string(arguments, "tool"),
            stage=optional_string(arguments, "stage"),
            score=clamp_score(score if score is not None else 0.0),
            context=optional_string(arguments, "context"),
        )

    def selector(self) -> tuple[SelectorKind, str] | None:
        """The one selector honored, in priority order metric, tool, stage."""
        if self.metric:
            return SelectorKind.METRIC, self.metric
        if self.tool:
            return SelectorKind.TOOL, self.tool
        if self.stage:
            return SelectorKind.STAGE, self.stage
        return None


@dataclass(frozen=True)
class GetWisdomArgs:
    score: float
    source: str

    @classmethod
    def from_arguments(cls, arguments: _JSON, *, default_source: str) -> "GetWisdomArgs":
        score = require_number(arguments, "score", hint="between 0-100")
        source = optional_string(arguments, "source") or default_source
        return cls(score=clamp_score(score), source=source)


@dataclass(frozen=True)
class DailyBriefingArgs:
    score: float = 0.0

    @classmethod
    def from_arguments(cls, arguments: _JSON) -> "DailyBriefingArgs":
        score = coerce_number(arguments.get("score"))
        return cls(score=clamp_score(score if score is not None else 0.0))


@dataclass(frozen=True)
class ConsultationLogArgs:
    days: int = DEFAULT_LOG_DAYS

    @classmethod
    def from_arguments(cls, arguments: _JSON) -> "ConsultationLogArgs":
        days = coerce_number(arguments.get("days"))
        return cls(days=int(days) if days is not None else DEFAULT_LOG_DAYS)


# =============================================================================
# Handlers
# =============================================================================


def consult_advisor(ctx: ToolContext, args: ConsultAdvisorArgs) -> _JSON:
    advisor = DEFAULT_ADVISOR
    selector = args.selector()
    if selector is not None:
        kind, key = selector
        found = ctx.provider.lookup_advisor(kind, key)
        if found is None:
            logger.debug("No advisor for %s %r; using default", kind.value, key)
        else:
            advisor = found

    quote = ctx.provider.lookup_quote(args.score, advisor.advisor) or FALLBACK_QUOTE
    mode = get_consultation_mode(args.score)
    kind_value = selector[0] if selector else None

    consultation = Consultation(
        timestamp=ctx.clock().isoformat(timespec="seconds"),
        consultation_type="advisor",
        advisor=advisor.advisor,
        advisor_icon=advisor.icon,
        advisor_name=advisor.advisor,
        rationale=advisor.rationale,
        score_at_time=args.score,
        consultation_mode=mode.name,
        mode_icon=mode.icon,
        mode_frequency=mode.frequency,
        mode_guidance=mode.description,
        quote=quote.quote,
        quote_source=quote.source,
        encouragement=quote.encouragement,
        metric=args.metric if kind_value is SelectorKind.METRIC else "",
        tool=args.tool if kind_value is SelectorKind.TOOL else "",
        stage=args.stage if kind_value is SelectorKind.STAGE else "",
        context=args.context,
    )

    if ctx.consultation_log is not None:
        try:
            ctx.consultation_log.append(consultation)
        except ConsultationLogError as exc:
            logger.warning("Failed to log consultation: %s", exc.message)

    return consultation.to_dict()


def get_wisdom(ctx: ToolContext, args: GetWisdomArgs) -> _JSON:
    quote = ctx.provider.lookup_quote(args.score, args.source)
    if quote is None:
        raise ToolError(
            code="not_found",
            message=(
                f"unknown source {args.source!r}. "
                "Read the 'wisdom://sources' resource to list available sources"
            ),
            data={"source": args.source},
        )
    return quote.to_dict()


def get_daily_briefing(ctx: ToolContext, args: DailyBriefingArgs) -> _JSON:
    sources = ctx.provider.list_source_ids()
    selected = sources[:BRIEFING_SOURCE_LIMIT] if sources else list(BRIEFING_FALLBACK_SOURCES)

    quotes: list[_JSON] = []
    for source_id in selected:
        try:
            quote = ctx.provider.lookup_quote(args.score, source_id)
        except WisdomError as exc:
            logger.debug("Briefing skipped source %s: %s", source_id, exc.message)
            continue
        if quote is not None:
            quotes.append(quote.to_dict())

    return {
        "date": ctx.clock().strftime("%Y-%m-%d"),
        "score": args.score,
        "quotes": quotes,
        "sources": sources,
    }


def read_consultations(ctx: ToolContext, days: int) -> list[_JSON]:
    """Windowed log read; empty when there is no log or the read fails."""
    if ctx.consultation_log is None:
        return []
    try:
        records = ctx.consultation_log.read(days)
    except ConsultationLogError as exc:
        logger.warning("Failed to read consultation log: %s", exc.message)
        return []
    return [r.to_dict() for r in records]


def get_consultation_log(ctx: ToolContext, args: ConsultationLogArgs) -> list[_JSON]:
    return read_consultations(ctx, args.days)


def call_tool(ctx: ToolContext, *, name: str, arguments: dict[str, Any] | None) -> Any:
    """Dispatch a tool call by name.

    Raises:
        ToolError: For unknown tools and lookup misses.
        RpcError: For invalid arguments.
    """
    args = arguments or {}
    if name == "consult_advisor":
        return consult_advisor(ctx, ConsultAdvisorArgs.from_arguments(args))
    if name == "get_wisdom":
        return get_wisdom(
            ctx, GetWisdomArgs.from_arguments(args, default_source=ctx.default_source)
        )
    if name == "get_daily_briefing":
        return get_daily_briefing(ctx, DailyBriefingArgs.from_arguments(args))
    if name == "get_consultation_log":
        return get_consultation_log(ctx, ConsultationLogArgs.from_arguments(args))

    available = tool_names()
    raise ToolError(
        code="unknown_tool",
        message=(
            f"unknown tool {name!r} (available tools: {', '.join(available)}). "
            "Check tool name spelling"
        ),
        data={"available_tools": available},
    )
