from __future__ import annotations

import pytest

from devwisdom.errors import (
    ConfigurationError,
    ConsultationLogError,
    NotFoundError,
    ValidationError,
    WisdomError,
    get_error_code,
)
from devwisdom.mcp_server import WisdomServer


def test_to_dict_drops_empty_context() -> None:
    exc = NotFoundError("unknown source 'x'", resource_type="source")

    assert exc.to_dict() == {
        "type": "notfound",
        "message": "unknown source 'x'",
        "recoverable": False,
        "resource_type": "source",
    }


def test_consultation_log_error_truncates_path() -> None:
    exc = ConsultationLogError("write failed", operation="append", path="/" + "a" * 300)

    assert exc.context["operation"] == "append"
    assert exc.context["path"].endswith("...")
    assert len(exc.context["path"]) == 203


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (ValidationError("bad", field="score"), -32602),
        (NotFoundError("missing"), -32602),
        (ConfigurationError("broken"), -32603),
        (ConsultationLogError("io"), -32603),
        (WisdomError("generic"), -32603),
    ],
)
def test_get_error_code(exc: WisdomError, code: int) -> None:
    assert get_error_code(exc) == code


def test_domain_errors_map_to_rpc_errors(server: WisdomServer, monkeypatch: pytest.MonkeyPatch) -> None:
    import devwisdom.mcp_server as mcp

    def boom(*_args, **_kwargs):
        raise NotFoundError("advisor index missing", resource_type="advisor")

    monkeypatch.setattr(mcp, "read_resource", boom)

    resp = server._handle_jsonrpc_request(
        {"jsonrpc": "2.0", "id": 1, "method": "resources/read", "params": {"uri": "wisdom://advisors"}}
    )

    assert resp["error"]["code"] == -32602
    assert resp["error"]["message"] == "advisor index missing"
    assert resp["error"]["data"]["resource_type"] == "advisor"
