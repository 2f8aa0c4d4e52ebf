from __future__ import annotations

import json
from datetime import datetime

import pytest

from devwisdom.consultation_log import ConsultationLog
from devwisdom.mcp_server import WisdomServer

from conftest import make_consultation


def _read(server: WisdomServer, uri: object) -> dict:
    return server._handle_jsonrpc_request(
        {"jsonrpc": "2.0", "id": 1, "method": "resources/read", "params": {"uri": uri}}
    )


def _payload(resp: dict) -> object:
    [content] = resp["result"]["contents"]
    assert content["mimeType"] == "application/json"
    assert "\n" not in content["text"]
    return json.loads(content["text"])


def test_resources_list_names_all_uris(server: WisdomServer) -> None:
    resp = server._handle_jsonrpc_request({"jsonrpc": "2.0", "id": 1, "method": "resources/list"})

    uris = [r["uri"] for r in resp["result"]["resources"]]
    assert uris == [
        "wisdom://tools",
        "wisdom://sources",
        "wisdom://advisors",
        "wisdom://advisor/{id}",
        "wisdom://consultations/{days}",
    ]
    assert all(r["mimeType"] == "application/json" for r in resp["result"]["resources"])


def test_read_tools_resource(server: WisdomServer) -> None:
    resp = _read(server, "wisdom://tools")

    assert resp["result"]["contents"][0]["uri"] == "wisdom://tools"
    assert [t["name"] for t in _payload(resp)] == [
        "consult_advisor",
        "get_wisdom",
        "get_daily_briefing",
        "get_consultation_log",
    ]


def test_read_sources_resource(server: WisdomServer) -> None:
    sources = _payload(_read(server, "wisdom://sources"))

    ids = [s["id"] for s in sources]
    assert ids == sorted(ids)
    assert "stoic" in ids
    assert set(sources[0]) == {"id", "name", "icon", "description"}


def test_read_advisors_resource(server: WisdomServer) -> None:
    advisors = _payload(_read(server, "wisdom://advisors"))

    assert set(advisors) == {"metric_advisors", "tool_advisors", "stage_advisors"}
    assert advisors["metric_advisors"]["security"]["advisor"] == "bofh"


def test_read_single_advisor(server: WisdomServer) -> None:
    advisor = _payload(_read(server, "wisdom://advisor/security"))

    assert advisor["advisor"] == "bofh"
    assert advisor["type"] == "metric"
    assert advisor["id"] == "security"


def test_read_unknown_advisor(server: WisdomServer) -> None:
    resp = _read(server, "wisdom://advisor/nobody")

    assert resp["error"]["code"] == -32602
    assert "nobody" in resp["error"]["message"]
    assert "wisdom://advisors" in resp["error"]["message"]


def test_read_consultations_resource(
    server: WisdomServer, consultation_log: ConsultationLog
) -> None:
    now = datetime.now().astimezone().isoformat(timespec="seconds")
    consultation_log.append(make_consultation(now, context="from resource"))

    records = _payload(_read(server, "wisdom://consultations/7"))

    assert [r["context"] for r in records] == ["from resource"]


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        ("1000000", ["kept"]),
        ("99999999999999999999", ["kept"]),
        ("-1000000", []),
        ("-99999999999999999999", []),
    ],
)
def test_read_consultations_extreme_windows(
    server: WisdomServer, consultation_log: ConsultationLog, days: str, expected: list[str]
) -> None:
    now = datetime.now().astimezone().isoformat(timespec="seconds")
    consultation_log.append(make_consultation(now, context="kept"))

    resp = _read(server, f"wisdom://consultations/{days}")

    assert "error" not in resp
    assert [r["context"] for r in _payload(resp)] == expected


def test_read_consultations_rejects_overlong_number(server: WisdomServer) -> None:
    resp = _read(server, "wisdom://consultations/" + "9" * 5000)

    assert resp["error"]["code"] == -32602
    assert "wisdom://consultations/{days}" in resp["error"]["message"]


def test_read_consultations_without_log_is_empty(server_without_log: WisdomServer) -> None:
    assert _payload(_read(server_without_log, "wisdom://consultations/7")) == []


@pytest.mark.parametrize(
    ("uri", "fragment"),
    [
        ("wisdom://consultations/abc", "'abc'"),
        ("wisdom://consultations/1.5", "'1.5'"),
        ("wisdom://consultations/", "wisdom://consultations/{days}"),
        ("wisdom://consultations/7/extra", "wisdom://consultations/{days}"),
        ("wisdom://advisor/", "wisdom://advisor/{id}"),
        ("wisdom://advisor/a/b", "wisdom://advisor/{id}"),
        ("wisdom://elsewhere", "'wisdom://elsewhere'"),
        ("wisdom://sources/extra", "'wisdom://sources/extra'"),
    ],
)
def test_read_malformed_uris(server: WisdomServer, uri: str, fragment: str) -> None:
    resp = _read(server, uri)

    assert resp["error"]["code"] == -32602
    assert fragment in resp["error"]["message"]


@pytest.mark.parametrize("uri", [None, 42, ""])
def test_read_requires_uri_string(server: WisdomServer, uri: object) -> None:
    resp = _read(server, uri)

    assert resp["error"]["code"] == -32602
    assert "uri" in resp["error"]["message"]
