from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import pytest

from devwisdom.consultation_log import ConsultationLog
from devwisdom.errors import ConsultationLogError, NotFoundError
from devwisdom.mcp_tools import (
    ConsultAdvisorArgs,
    ConsultationLogArgs,
    ToolContext,
    ToolError,
    call_tool,
)
from devwisdom.rpc import RpcError
from devwisdom.wisdom import AdvisorInfo, Quote, SelectorKind, Source, WisdomEngine

from conftest import FakeClock, make_consultation


class StubProvider:
    """Provider with a fixed source list and no content unless given."""

    def __init__(
        self,
        *,
        source_ids: list[str] | None = None,
        quotes: dict[str, Quote] | None = None,
        advisors: dict[tuple[str, str], AdvisorInfo] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.source_ids = source_ids or []
        self.quotes = quotes or {}
        self.advisors = advisors or {}
        self.failing = failing or set()
        self.quote_calls: list[tuple[float, str]] = []

    def lookup_quote(self, score: float, source_id: str) -> Quote | None:
        self.quote_calls.append((score, source_id))
        if source_id in self.failing:
            raise NotFoundError(f"source {source_id} unavailable", resource_type="source")
        return self.quotes.get(source_id)

    def lookup_advisor(self, kind: SelectorKind | str, key: str) -> AdvisorInfo | None:
        return self.advisors.get((SelectorKind(kind).value, key))

    def list_source_ids(self) -> list[str]:
        return list(self.source_ids)

    def get_source(self, source_id: str) -> Source | None:
        return None

    def list_advisors(self, kind: SelectorKind | str) -> dict[str, AdvisorInfo]:
        return {}


class BrokenLog:
    def append(self, record: Any) -> None:
        raise ConsultationLogError("disk full", operation="append", path="/nowhere")

    def read(self, days: int) -> list[Any]:
        raise ConsultationLogError("disk gone", operation="read", path="/nowhere")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 9, 30))


def test_consult_advisor_selector_priority(engine: WisdomEngine, clock: FakeClock) -> None:
    ctx = ToolContext(provider=engine, clock=clock)

    result = call_tool(
        ctx,
        name="consult_advisor",
        arguments={"metric": "security", "tool": "project_scorecard", "stage": "daily_checkin"},
    )

    assert result["advisor"] == "bofh"
    assert result["metric"] == "security"
    assert "tool" not in result
    assert "stage" not in result


def test_consult_advisor_empty_selectors_are_absent(engine: WisdomEngine, clock: FakeClock) -> None:
    ctx = ToolContext(provider=engine, clock=clock)

    result = call_tool(
        ctx, name="consult_advisor", arguments={"metric": "", "stage": "daily_checkin"}
    )

    assert result["stage"] == "daily_checkin"
    assert result["advisor"] == "pistis_sophia"


def test_consult_advisor_defaults_without_selector(clock: FakeClock) -> None:
    ctx = ToolContext(provider=StubProvider(), clock=clock)

    result = call_tool(ctx, name="consult_advisor", arguments={})

    assert result["advisor"] == "pistis_sophia"
    assert result["advisor_icon"] == "📜"
    assert result["rationale"] == "Default wisdom advisor"
    assert result["quote"] == "Wisdom comes from experience."
    assert result["quote_source"] == "Unknown"
    assert result["encouragement"] == "Keep learning and growing."
    assert result["score_at_time"] == 0.0
    assert result["consultation_mode"] == "chaos"
    assert result["timestamp"] == clock().isoformat(timespec="seconds")


def test_consult_advisor_unknown_selector_falls_back(engine: WisdomEngine, clock: FakeClock) -> None:
    ctx = ToolContext(provider=engine, clock=clock)

    result = call_tool(ctx, name="consult_advisor", arguments={"metric": "astrology", "score": 90})

    assert result["advisor"] == "pistis_sophia"
    assert result["rationale"] == "Default wisdom advisor"
    assert result["metric"] == "astrology"
    assert result["consultation_mode"] == "mastery"
    assert result["mode_frequency"] == "milestones"


def test_consult_advisor_clamps_score(engine: WisdomEngine, clock: FakeClock) -> None:
    ctx = ToolContext(provider=engine, clock=clock)

    high = call_tool(ctx, name="consult_advisor", arguments={"metric": "testing", "score": 150})
    low = call_tool(ctx, name="consult_advisor", arguments={"metric": "testing", "score": -3})

    assert high["score_at_time"] == 100.0
    assert low["score_at_time"] == 0.0


def test_consult_advisor_writes_log(
    engine: WisdomEngine, consultation_log: ConsultationLog
) -> None:
    ctx = ToolContext(provider=engine, consultation_log=consultation_log)

    result = call_tool(
        ctx,
        name="consult_advisor",
        arguments={"tool": "project_scorecard", "score": 42, "context": "sprint review"},
    )

    [record] = consultation_log.read(1)
    assert record.to_dict() == result
    assert record.context == "sprint review"


def test_consult_advisor_log_failure_is_best_effort(
    engine: WisdomEngine, caplog: pytest.LogCaptureFixture
) -> None:
    ctx = ToolContext(provider=engine, consultation_log=BrokenLog())  # type: ignore[arg-type]

    with caplog.at_level(logging.WARNING, logger="devwisdom"):
        result = call_tool(ctx, name="consult_advisor", arguments={"metric": "security"})

    assert result["advisor"] == "bofh"
    assert "disk full" in caplog.text


def test_get_wisdom_uses_default_source(engine: WisdomEngine) -> None:
    ctx = ToolContext(provider=engine, default_source="tao")

    result = call_tool(ctx, name="get_wisdom", arguments={"score": 10})

    assert result["wisdom_source"] == engine.get_source("tao").name


def test_get_wisdom_random_source_is_stable(engine: WisdomEngine) -> None:
    ctx = ToolContext(provider=engine)

    first = call_tool(ctx, name="get_wisdom", arguments={"score": 60, "source": "random"})
    second = call_tool(ctx, name="get_wisdom", arguments={"score": 60, "source": "random"})

    assert first == second
    assert first["quote"]


def test_get_wisdom_unknown_source_raises_tool_error() -> None:
    ctx = ToolContext(provider=StubProvider(source_ids=["stoic"]))

    with pytest.raises(ToolError) as excinfo:
        call_tool(ctx, name="get_wisdom", arguments={"score": 50, "source": "nope"})

    assert excinfo.value.code == "not_found"
    assert excinfo.value.data == {"source": "nope"}


def test_get_wisdom_missing_score_raises_rpc_error() -> None:
    ctx = ToolContext(provider=StubProvider())

    with pytest.raises(RpcError) as excinfo:
        call_tool(ctx, name="get_wisdom", arguments={"source": "stoic"})

    assert excinfo.value.code == -32602
    assert excinfo.value.data == {"field": "score"}


def test_daily_briefing_uses_first_three_sources(engine: WisdomEngine, clock: FakeClock) -> None:
    ctx = ToolContext(provider=engine, clock=clock)

    result = call_tool(ctx, name="get_daily_briefing", arguments={"score": 65})

    assert result["date"] == "2024-05-01"
    assert result["score"] == 65.0
    assert result["sources"] == engine.list_source_ids()
    assert len(result["quotes"]) == 3
    expected = [engine.get_source(s).name for s in engine.list_source_ids()[:3]]
    assert [q["wisdom_source"] for q in result["quotes"]] == expected


def test_daily_briefing_drops_failing_sources(clock: FakeClock) -> None:
    quote = Quote(quote="q", source="s", encouragement="e")
    provider = StubProvider(
        source_ids=["a", "b", "c", "d"],
        quotes={"a": quote, "d": quote},
        failing={"b"},
    )
    ctx = ToolContext(provider=provider, clock=clock)

    result = call_tool(ctx, name="get_daily_briefing", arguments={})

    assert result["quotes"] == [quote.to_dict()]
    assert [source for _, source in provider.quote_calls] == ["a", "b", "c"]


def test_daily_briefing_falls_back_to_default_sources(clock: FakeClock) -> None:
    provider = StubProvider()
    ctx = ToolContext(provider=provider, clock=clock)

    result = call_tool(ctx, name="get_daily_briefing", arguments={"score": 200})

    assert result["quotes"] == []
    assert result["score"] == 100.0
    assert [source for _, source in provider.quote_calls] == ["pistis_sophia", "stoic", "tao"]


def test_consultation_log_tool_without_log_is_empty() -> None:
    ctx = ToolContext(provider=StubProvider())

    assert call_tool(ctx, name="get_consultation_log", arguments=None) == []


def test_consultation_log_tool_read_failure_is_empty() -> None:
    ctx = ToolContext(provider=StubProvider(), consultation_log=BrokenLog())  # type: ignore[arg-type]

    assert call_tool(ctx, name="get_consultation_log", arguments={"days": 3}) == []


def test_consultation_log_tool_returns_records(
    engine: WisdomEngine, consultation_log: ConsultationLog
) -> None:
    ctx = ToolContext(provider=engine, consultation_log=consultation_log)
    call_tool(ctx, name="consult_advisor", arguments={"metric": "testing", "score": 70})

    records = call_tool(ctx, name="get_consultation_log", arguments={"days": 1.0})

    assert len(records) == 1
    assert records[0]["advisor"] == "stoic"


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        (1_000_000, ["recent"]),
        (1e300, ["recent"]),
        (10**400, ["recent"]),
        (-1_000_000, []),
        (-1e300, []),
    ],
)
def test_consultation_log_tool_handles_extreme_windows(
    consultation_log: ConsultationLog, days: float, expected: list[str]
) -> None:
    now = datetime.now().astimezone().isoformat(timespec="seconds")
    consultation_log.append(make_consultation(now, context="recent"))
    ctx = ToolContext(provider=StubProvider(), consultation_log=consultation_log)

    records = call_tool(ctx, name="get_consultation_log", arguments={"days": days})

    assert [r["context"] for r in records] == expected


@pytest.mark.parametrize(
    ("arguments", "days"),
    [
        ({}, 7),
        ({"days": 3}, 3),
        ({"days": 3.9}, 3),
        ({"days": "3"}, 7),
        ({"days": True}, 7),
        ({"days": float("inf")}, 7),
    ],
)
def test_consultation_log_args_coercion(arguments: dict, days: int) -> None:
    assert ConsultationLogArgs.from_arguments(arguments).days == days


def test_consult_advisor_args_ignore_non_string_selectors() -> None:
    args = ConsultAdvisorArgs.from_arguments({"metric": 5, "tool": "project_scorecard"})

    assert args.selector() == (SelectorKind.TOOL, "project_scorecard")


def test_unknown_tool_lists_available_tools() -> None:
    ctx = ToolContext(provider=StubProvider())

    with pytest.raises(ToolError) as excinfo:
        call_tool(ctx, name="bogus", arguments={})

    assert excinfo.value.code == "unknown_tool"
    assert "consult_advisor, get_wisdom, get_daily_briefing, get_consultation_log" in excinfo.value.message
