"""Input validation and coercion helpers for RPC handlers.

Handlers receive untyped argument maps; these helpers coerce individual
fields once at the handler boundary so the rest of the code works with
plain typed values.
"""

from __future__ import annotations

import math
import sys
from typing import Any

from devwisdom.rpc.types import INVALID_PARAMS, JSON, RpcError

MIN_SCORE = 0.0
MAX_SCORE = 100.0


# =============================================================================
# Container Validation
# =============================================================================


def validate_object(value: Any, name: str, *, default_empty: bool = True) -> JSON:
    """Validate that a parameter is a JSON object.

    Args:
        value: The value to validate
        name: Parameter name for error messages
        default_empty: Treat a missing (None) value as an empty object

    Returns:
        The validated dict

    Raises:
        RpcError: If the value is present but not an object
    """
    if value is None and default_empty:
        return {}
    if not isinstance(value, dict):
        raise RpcError(INVALID_PARAMS, f"{name} must be an object")
    return value


# =============================================================================
# String Validation
# =============================================================================


def validate_string(value: Any, name: str, *, allow_empty: bool = False) -> str:
    """Validate a required string parameter.

    Raises:
        RpcError: If the value is missing, not a string, or empty
    """
    if value is None:
        raise RpcError(INVALID_PARAMS, f"{name} is required")
    if not isinstance(value, str):
        raise RpcError(INVALID_PARAMS, f"{name} must be a string")
    if not value and not allow_empty:
        raise RpcError(INVALID_PARAMS, f"{name} cannot be empty")
    return value


def optional_string(arguments: JSON, name: str) -> str:
    """Return a string field, or "" when it is absent or not a string."""
    value = arguments.get(name)
    if isinstance(value, str):
        return value
    return ""


# =============================================================================
# Numeric Coercion
# =============================================================================


def coerce_number(value: Any) -> float | None:
    """Coerce an int or float JSON value to float.

    Integer and floating representations are accepted identically. Booleans
    and non-finite floats are not numbers. Integers beyond float range
    saturate to the largest finite float of the same sign. Returns None when
    the value cannot be used as a number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return sys.float_info.max if value > 0 else -sys.float_info.max
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


def require_number(arguments: JSON, name: str, *, hint: str = "") -> float:
    """Return a mandatory numeric field.

    Raises:
        RpcError: If the field is missing or not numeric
    """
    number = coerce_number(arguments.get(name))
    if number is None:
        message = f"{name} parameter is required and must be a number"
        if hint:
            message = f"{message} {hint}"
        raise RpcError(INVALID_PARAMS, message, data={"field": name})
    return number


def clamp_score(score: float) -> float:
    """Clamp a health score into [0, 100]."""
    if score < MIN_SCORE:
        return MIN_SCORE
    if score > MAX_SCORE:
        return MAX_SCORE
    return score
