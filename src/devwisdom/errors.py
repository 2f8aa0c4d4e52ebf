"""devwisdom error hierarchy.

Provides a structured error hierarchy for domain operations:
- WisdomError: Base exception for all application errors
- ValidationError: Argument validation failures
- NotFoundError: Lookup misses against sources and advisors
- ConfigurationError: Sources configuration issues
- ConsultationLogError: Consultation log I/O failures

Each error type includes:
- Descriptive message
- Recoverable flag
- Structured representation for RPC responses

Usage:
    from devwisdom.errors import NotFoundError

    if source is None:
        raise NotFoundError(f"unknown source {source_id!r}", resource_type="source")
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Base Classes
# =============================================================================


class WisdomError(Exception):
    """Base exception for all devwisdom application errors.

    Attributes:
        message: Human-readable error description
        recoverable: Whether the operation can be retried
        context: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        *,
        recoverable: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured dictionary for RPC responses."""
        return {
            "type": type(self).__name__.lower().replace("error", ""),
            "message": self.message,
            "recoverable": self.recoverable,
            **{k: v for k, v in self.context.items() if v is not None},
        }


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(WisdomError):
    """Argument validation failed.

    Example:
        raise ValidationError("score must be a number", field="score")
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if constraint:
            context["constraint"] = constraint
        if value is not None:
            context["value"] = _truncate(str(value), 100)
        super().__init__(message, recoverable=False, context=context)
        self.field = field
        self.constraint = constraint


class NotFoundError(WisdomError):
    """Source or advisor not found."""

    def __init__(
        self,
        message: str,
        *,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            recoverable=False,
            context={"resource_type": resource_type, "resource_id": resource_id},
        )


class ConfigurationError(WisdomError):
    """Sources configuration or setup issue."""

    def __init__(
        self,
        message: str,
        *,
        setting: str | None = None,
        path: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(
            message,
            recoverable=False,
            context={
                "setting": setting,
                "path": _truncate(path, 200),
                "suggestion": suggestion,
            },
        )


class ConsultationLogError(WisdomError):
    """Consultation log persistence failed.

    Used for directory creation, rotation, append and read failures.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(
            message,
            recoverable=False,
            context={"operation": operation, "path": _truncate(path, 200)},
        )


# =============================================================================
# Helpers
# =============================================================================


def _truncate(value: str | None, max_len: int) -> str | None:
    """Truncate a string value for safe logging."""
    if value is None:
        return None
    if len(value) <= max_len:
        return value
    return value[:max_len] + "..."


# Map error types to JSON-RPC error codes.
# Lookup misses are surfaced as invalid params so the caller can correct them.
ERROR_CODES: dict[type[WisdomError], int] = {
    ValidationError: -32602,
    NotFoundError: -32602,
    ConfigurationError: -32603,
    ConsultationLogError: -32603,
}


def get_error_code(exc: WisdomError) -> int:
    """Get the JSON-RPC error code for a domain error."""
    if type(exc) in ERROR_CODES:
        return ERROR_CODES[type(exc)]
    for error_type, code in ERROR_CODES.items():
        if isinstance(exc, error_type):
            return code
    return -32603
