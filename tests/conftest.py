from __future__ import annotations

import io
import json
from collections.abc import Iterator
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from devwisdom.consultation_log import ConsultationLog
from devwisdom.mcp_server import WisdomServer
from devwisdom.wisdom import Consultation, SourceCache, SourceLoader, WisdomEngine


class FakeClock:
    """Settable clock returning aware local datetimes."""

    def __init__(self, now: datetime) -> None:
        self.now = now.astimezone()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_consultation(timestamp: str, **overrides: Any) -> Consultation:
    values: dict[str, Any] = {
        "timestamp": timestamp,
        "consultation_type": "advisor",
        "advisor": "stoic",
        "advisor_icon": "🏛️",
        "advisor_name": "stoic",
        "rationale": "Stoics teach discipline through adversity - tests reveal truth",
        "score_at_time": 55.0,
        "consultation_mode": "building",
        "mode_icon": "🏗️",
        "mode_frequency": "daily",
        "mode_guidance": "Foundations are forming.",
        "quote": "The impediment to action advances action.",
        "quote_source": "Marcus Aurelius",
        "encouragement": "Keep going.",
        "metric": "testing",
    }
    values.update(overrides)
    return Consultation(**values)


def run_lines(server: WisdomServer, lines: list[Any]) -> tuple[bool, list[dict[str, Any]]]:
    """Feed messages (dicts are encoded, strings sent verbatim) through serve()."""
    encoded = [line if isinstance(line, str) else json.dumps(line) for line in lines]
    stdin = io.StringIO("".join(f"{line}\n" for line in encoded))
    stdout = io.StringIO()
    ok = server.serve(stdin, stdout)
    responses = [json.loads(raw) for raw in stdout.getvalue().splitlines() if raw.strip()]
    return ok, responses


@pytest.fixture
def engine(tmp_path: Path) -> WisdomEngine:
    """Engine over built-in sources only, with a fixed day."""
    loader = SourceLoader(
        project_root=tmp_path,
        cache=SourceCache(),
        include_default_locations=False,
    )
    wisdom = WisdomEngine(loader=loader, today=lambda: date(2024, 5, 1))
    wisdom.initialize()
    return wisdom


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "logs"


@pytest.fixture
def consultation_log(log_dir: Path) -> Iterator[ConsultationLog]:
    log = ConsultationLog(log_dir)
    try:
        yield log
    finally:
        log.close()


@pytest.fixture
def server(engine: WisdomEngine, consultation_log: ConsultationLog) -> WisdomServer:
    return WisdomServer(engine, consultation_log)


@pytest.fixture
def server_without_log(engine: WisdomEngine) -> WisdomServer:
    return WisdomServer(engine, None)
