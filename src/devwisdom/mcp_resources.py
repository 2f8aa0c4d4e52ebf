"""Read-only ``wisdom://`` resources.

Fixed URIs:
- wisdom://tools
- wisdom://sources
- wisdom://advisors

Templates (a single non-empty path segment):
- wisdom://advisor/{id}
- wisdom://consultations/{days}
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from .mcp_tools import ToolContext, ToolError, list_tools, read_consultations
from .rpc.types import compact_json
from .wisdom import SelectorKind

logger = logging.getLogger(__name__)

_JSON = dict[str, Any]

MIME_TYPE = "application/json"

ADVISOR_PREFIX = "wisdom://advisor/"
CONSULTATIONS_PREFIX = "wisdom://consultations/"
ADVISOR_TEMPLATE = "wisdom://advisor/{id}"
CONSULTATIONS_TEMPLATE = "wisdom://consultations/{days}"

_DAYS_RE = re.compile(r"^-?\d+$")


@dataclass(frozen=True)
class Resource:
    uri: str
    name: str
    description: str
    mime_type: str = MIME_TYPE

    def to_dict(self) -> _JSON:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


def list_resources() -> list[Resource]:
    return [
        Resource(
            uri="wisdom://tools",
            name="Available Tools",
            description="List all available MCP tools with descriptions and parameters",
        ),
        Resource(
            uri="wisdom://sources",
            name="Wisdom Sources",
            description="List all available wisdom sources",
        ),
        Resource(
            uri="wisdom://advisors",
            name="Wisdom Advisors",
            description="List all available advisors",
        ),
        Resource(
            uri=ADVISOR_TEMPLATE,
            name="Advisor Details",
            description="Get details for a specific advisor",
        ),
        Resource(
            uri=CONSULTATIONS_TEMPLATE,
            name="Consultation Log",
            description="Get consultation log entries for the specified number of days",
        ),
    ]


def _contents(uri: str, payload: Any) -> _JSON:
    return {"contents": [{"uri": uri, "mimeType": MIME_TYPE, "text": compact_json(payload)}]}


def _template_value(uri: str, prefix: str, template: str) -> str:
    value = uri[len(prefix):]
    if not value or "/" in value:
        raise ToolError(
            code="invalid_args",
            message=f"invalid resource URI: expected format {template!r}, got {uri!r}",
            data={"uri": uri, "template": template},
        )
    return value


# =============================================================================
# Payloads
# =============================================================================


def _tools_payload() -> list[_JSON]:
    return [t.to_dict() for t in list_tools()]


def _sources_payload(ctx: ToolContext) -> list[_JSON]:
    payload: list[_JSON] = []
    for source_id in ctx.provider.list_source_ids():
        source = ctx.provider.get_source(source_id)
        if source is None:
            continue
        payload.append(source.summary())
    return payload


def _advisors_payload(ctx: ToolContext) -> _JSON:
    def dump(kind: SelectorKind) -> _JSON:
        return {key: info.to_dict() for key, info in ctx.provider.list_advisors(kind).items()}

    return {
        "metric_advisors": dump(SelectorKind.METRIC),
        "tool_advisors": dump(SelectorKind.TOOL),
        "stage_advisors": dump(SelectorKind.STAGE),
    }


def _advisor_payload(ctx: ToolContext, advisor_id: str) -> _JSON:
    for kind in (SelectorKind.METRIC, SelectorKind.TOOL, SelectorKind.STAGE):
        info = ctx.provider.lookup_advisor(kind, advisor_id)
        if info is not None:
            payload = info.to_dict()
            payload["type"] = kind.value
            payload["id"] = advisor_id
            return payload
    raise ToolError(
        code="not_found",
        message=(
            f"advisor not found: {advisor_id!r}. "
            "Use 'wisdom://advisors' resource to list available advisors"
        ),
        data={"advisor": advisor_id},
    )


def _parse_days(uri: str) -> int:
    value = _template_value(uri, CONSULTATIONS_PREFIX, CONSULTATIONS_TEMPLATE)
    if _DAYS_RE.match(value):
        try:
            return int(value)
        except ValueError:
            # past the interpreter's integer-string length limit
            pass
    raise ToolError(
        code="invalid_args",
        message=(
            f"invalid days parameter {value!r} in URI: must be a number "
            f"(got {uri!r}, expected {CONSULTATIONS_TEMPLATE!r})"
        ),
        data={"uri": uri, "template": CONSULTATIONS_TEMPLATE},
    )


def read_resource(ctx: ToolContext, *, uri: str) -> _JSON:
    """Read a resource by URI.

    Raises:
        ToolError: For malformed or unknown URIs and advisor misses.
    """
    logger.debug("Reading resource %s", uri)

    if uri == "wisdom://tools":
        return _contents(uri, _tools_payload())
    if uri == "wisdom://sources":
        return _contents(uri, _sources_payload(ctx))
    if uri == "wisdom://advisors":
        return _contents(uri, _advisors_payload(ctx))
    if uri.startswith(ADVISOR_PREFIX):
        advisor_id = _template_value(uri, ADVISOR_PREFIX, ADVISOR_TEMPLATE)
        return _contents(uri, _advisor_payload(ctx, advisor_id))
    if uri.startswith(CONSULTATIONS_PREFIX):
        days = _parse_days(uri)
        return _contents(uri, read_consultations(ctx, days))

    raise ToolError(
        code="invalid_args",
        message=(
            f"unknown resource URI {uri!r}. Use 'wisdom://tools', 'wisdom://sources', "
            f"'wisdom://advisors', {ADVISOR_TEMPLATE!r}, or {CONSULTATIONS_TEMPLATE!r}"
        ),
        data={"uri": uri},
    )
