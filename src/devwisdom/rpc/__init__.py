"""RPC module for devwisdom.

JSON-RPC 2.0 types and utilities for the stdio protocol engine.
"""

from __future__ import annotations

from devwisdom.rpc.types import (
    JSON,
    JSONRPC_VERSION,
    RpcError,
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    compact_json,
    jsonrpc_error,
    jsonrpc_result,
    loads_strict,
    readline,
    write,
)

__all__ = [
    # Types
    "JSON",
    "JSONRPC_VERSION",
    "RpcError",
    # Error codes
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    # Utilities
    "compact_json",
    "jsonrpc_error",
    "jsonrpc_result",
    "loads_strict",
    "readline",
    "write",
]
