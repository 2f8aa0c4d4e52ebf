"""RPC types and utilities.

Core types, error codes, and JSON-RPC helpers used by the protocol engine
and the tool/resource handlers.
"""

from __future__ import annotations

import json
from typing import Any, TextIO

# Type alias for JSON-serializable dict
JSON = dict[str, Any]

JSONRPC_VERSION = "2.0"


class RpcError(Exception):
    """JSON-RPC error with code, message, and optional data."""

    def __init__(
        self,
        code: int,
        message: str,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> JSON:
        """Convert to JSON-RPC error object."""
        result: JSON = {"code": self.code, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result


# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def jsonrpc_error(request_id: str | int | float | None, error: RpcError) -> JSON:
    """Build a JSON-RPC 2.0 error response."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": error.to_dict(),
    }


def jsonrpc_result(request_id: str | int | float | None, result: Any) -> JSON:
    """Build a JSON-RPC 2.0 success response."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "result": result,
    }


def compact_json(value: Any) -> str:
    """Serialize to compact single-line JSON (no indentation, no spaces).

    Raises:
        ValueError: For NaN or infinite floats, which JSON cannot carry
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def loads_strict(text: str) -> Any:
    """Decode JSON, rejecting the NaN and Infinity extensions.

    Raises:
        ValueError: On invalid JSON (``json.JSONDecodeError`` is a subclass)
    """
    return json.loads(text, parse_constant=_reject_constant)


def readline(stream: TextIO) -> str | None:
    """Read one line from the stream, returning None on EOF.

    UnicodeDecodeError propagates so the caller can treat it as a parse error.
    """
    line = stream.readline()
    if not line:
        return None
    return line


def write(stream: TextIO, response: JSON) -> None:
    """Write one JSON-RPC response line and flush it.

    BrokenPipeError propagates; the engine treats it as a clean shutdown.
    """
    stream.write(compact_json(response) + "\n")
    stream.flush()
