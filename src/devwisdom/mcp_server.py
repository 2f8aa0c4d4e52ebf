"""JSON-RPC 2.0 stdio server for devwisdom.

One JSON object per line on stdin, one response per request on stdout.
Processing is strictly sequential: a response is written and flushed
before the next line is read. Notifications (messages without an ``id``
key) are dispatched but never answered.

Design goals:
- Local only; the byte stream is the whole transport.
- Stable, explicit error codes so clients can self-correct.
- Diagnostics go to stderr, never to stdout.
"""

from __future__ import annotations

import io
import logging
import sys
import time
import uuid
from typing import Any, TextIO

from . import __version__
from .consultation_log import ConsultationLog
from .errors import WisdomError, get_error_code
from .mcp_resources import list_resources, read_resource
from .mcp_tools import ToolContext, ToolError, call_tool, list_tools
from .rpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    RpcError,
    jsonrpc_error,
    jsonrpc_result,
    loads_strict,
    readline,
    write,
)
from .rpc.validation import validate_object, validate_string
from .settings import Settings, settings as default_settings
from .wisdom import WisdomProvider

logger = logging.getLogger(__name__)

_JSON = dict[str, Any]

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "devwisdom"

# Tool error codes surfaced as invalid params; anything else is internal.
_INVALID_PARAMS_TOOL_CODES = {"invalid_args", "unknown_tool", "not_found"}


def _tool_error_to_rpc(exc: ToolError) -> RpcError:
    code = INVALID_PARAMS if exc.code in _INVALID_PARAMS_TOOL_CODES else INTERNAL_ERROR
    return RpcError(code=code, message=exc.message, data=exc.data)


def _valid_id(req_id: Any) -> bool:
    if isinstance(req_id, bool):
        return False
    return req_id is None or isinstance(req_id, (str, int, float))


class WisdomServer:
    """Protocol engine: framing, dispatch and response ordering.

    Args:
        provider: Quote and advisor lookups.
        consultation_log: Optional log; tools degrade gracefully without it.
        settings: Server settings (default source).
    """

    _METHODS: dict[str, str] = {
        "initialize": "_handle_initialize",
        "tools/list": "_handle_tools_list",
        "tools/call": "_handle_tools_call",
        "resources/list": "_handle_resources_list",
        "resources/read": "_handle_resources_read",
    }

    def __init__(
        self,
        provider: WisdomProvider,
        consultation_log: ConsultationLog | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.provider = provider
        self.consultation_log = consultation_log
        self.ctx = ToolContext(
            provider=provider,
            consultation_log=consultation_log,
            default_source=self.settings.default_source,
        )

    # -------------------------------------------------------------------------
    # Message loop
    # -------------------------------------------------------------------------

    def serve(self, stdin: TextIO, stdout: TextIO) -> bool:
        """Run until end of input.

        Returns True on end of input or a closed output pipe, False after a
        decode failure (the Parse Error response is written first).
        """
        while True:
            try:
                line = readline(stdin)
            except UnicodeDecodeError as exc:
                logger.error("Invalid UTF-8 on input: %s", exc)
                return self._fail_parse(stdout, "Parse error: input is not valid UTF-8")
            if line is None:
                logger.debug("End of input; shutting down")
                return True

            line = line.strip()
            if not line:
                continue

            try:
                message = loads_strict(line)
            except ValueError as exc:
                logger.error("Invalid JSON on input: %s", exc)
                return self._fail_parse(stdout, f"Parse error: {exc}")

            response = self.handle_message(message)
            if response is None:
                continue
            try:
                write(stdout, response)
            except BrokenPipeError:
                logger.info("Client closed the output pipe; shutting down")
                return True

    def _fail_parse(self, stdout: TextIO, message: str) -> bool:
        try:
            write(stdout, jsonrpc_error(None, RpcError(PARSE_ERROR, message)))
        except BrokenPipeError:
            pass
        return False

    def handle_message(self, message: Any) -> _JSON | None:
        """Validate the envelope and dispatch one decoded message.

        Returns the response, or None for notifications.
        """
        if not isinstance(message, dict):
            return jsonrpc_error(
                None, RpcError(INVALID_REQUEST, "Invalid Request: message must be an object")
            )

        is_notification = "id" not in message
        req_id = message.get("id")

        if message.get("jsonrpc") != JSONRPC_VERSION:
            if is_notification:
                logger.debug("Dropping notification with protocol version %r", message.get("jsonrpc"))
                return None
            return jsonrpc_error(
                req_id if _valid_id(req_id) else None,
                RpcError(
                    INVALID_REQUEST,
                    f"Invalid Request: jsonrpc must be {JSONRPC_VERSION!r}",
                    data={"jsonrpc": message.get("jsonrpc")},
                ),
            )

        if not _valid_id(req_id):
            return jsonrpc_error(
                None, RpcError(INVALID_REQUEST, "Invalid Request: id must be a string or number")
            )

        if not isinstance(message.get("method"), str):
            if is_notification:
                return None
            return jsonrpc_error(
                req_id, RpcError(INVALID_REQUEST, "Invalid Request: method must be a string")
            )

        response = self._handle_jsonrpc_request(message)
        if is_notification:
            return None
        return response

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _handle_jsonrpc_request(self, req: _JSON) -> _JSON:
        method = req["method"]
        req_id = req.get("id")

        correlation_id = uuid.uuid4().hex[:12]
        started = time.perf_counter()
        logger.debug("RPC request [%s] method=%s req_id=%s", correlation_id, method, req_id)

        try:
            handler_name = self._METHODS.get(method)
            if handler_name is None:
                raise RpcError(METHOD_NOT_FOUND, f"Method not found: {method}", data={"method": method})
            params = validate_object(req.get("params"), "params")
            result = getattr(self, handler_name)(params)
            return jsonrpc_result(req_id, result)

        except RpcError as exc:
            logger.warning(
                "RPC error [%s] method=%s code=%d: %s",
                correlation_id,
                method,
                exc.code,
                exc.message,
            )
            return jsonrpc_error(req_id, exc)
        except WisdomError as exc:
            logger.warning("RPC domain error [%s] method=%s: %s", correlation_id, method, exc)
            return jsonrpc_error(
                req_id, RpcError(get_error_code(exc), exc.message, data=exc.to_dict())
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("RPC internal error [%s] method=%s: %s", correlation_id, method, exc)
            return jsonrpc_error(
                req_id,
                RpcError(
                    INTERNAL_ERROR,
                    "Internal error",
                    data={"error": str(exc), "correlation_id": correlation_id},
                ),
            )
        finally:
            logger.debug(
                "RPC done [%s] method=%s in %.1fms",
                correlation_id,
                method,
                (time.perf_counter() - started) * 1000,
            )

    # -------------------------------------------------------------------------
    # Methods
    # -------------------------------------------------------------------------

    def _handle_initialize(self, params: _JSON) -> _JSON:
        client = params.get("clientInfo")
        if isinstance(client, dict):
            logger.info("Client connected: %s %s", client.get("name"), client.get("version"))
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}, "resources": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def _handle_tools_list(self, params: _JSON) -> _JSON:
        return {"tools": [t.to_dict() for t in list_tools()]}

    def _handle_tools_call(self, params: _JSON) -> Any:
        name = validate_string(params.get("name"), "name")
        arguments = validate_object(params.get("arguments"), "arguments")
        started = time.perf_counter()
        try:
            return call_tool(self.ctx, name=name, arguments=arguments)
        except ToolError as exc:
            raise _tool_error_to_rpc(exc) from exc
        except (RpcError, WisdomError):
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tool %s failed", name)
            return {
                "isError": True,
                "content": [{"type": "text", "text": f"tool {name!r} failed: {exc}"}],
            }
        finally:
            logger.debug("Tool %s took %.1fms", name, (time.perf_counter() - started) * 1000)

    def _handle_resources_list(self, params: _JSON) -> _JSON:
        return {"resources": [r.to_dict() for r in list_resources()]}

    def _handle_resources_read(self, params: _JSON) -> _JSON:
        uri = validate_string(params.get("uri"), "uri")
        try:
            return read_resource(self.ctx, uri=uri)
        except ToolError as exc:
            raise _tool_error_to_rpc(exc) from exc


def run_stdio_server(server: WisdomServer) -> bool:
    """Serve over the process's stdin/stdout.

    stdin is decoded as strict UTF-8 so invalid bytes surface as a parse
    error instead of being replaced.
    """
    stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="strict")
    stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", line_buffering=False)
    try:
        return server.serve(stdin, stdout)
    finally:
        if server.consultation_log is not None:
            server.consultation_log.close()
        # Leave the process's own buffers open for interpreter shutdown.
        stdin.detach()
        try:
            stdout.detach()
        except BrokenPipeError:
            pass
