from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

NAN_SENTINEL = "nan"
_FALSE_FLAGS = frozenset({"0", "false", "no", "off"})


def clean_raw(value: Any) -> Any:
    """Map the ``"nan"`` sentinel and blank strings to ``None``."""
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or stripped.lower() == NAN_SENTINEL:
            return None
        return stripped
    return value


def optional_float(value: Any) -> float | None:
    """Parse a store value into a float, or ``None`` when absent/invalid."""
    value = clean_raw(value)
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.debug("Discarding non-numeric telemetry value %r", value)
        return None
    if result != result:
        # float("NaN") written by a numeric producer
        return None
    return result


def optional_int(value: Any) -> int | None:
    number = optional_float(value)
    if number is None:
        return None
    return int(number)


def optional_str(value: Any) -> str | None:
    value = clean_raw(value)
    if value is None:
        return None
    return str(value)


def flag(value: Any) -> bool:
    """Interpret a liveness flag written by an upstream producer."""
    value = clean_raw(value)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).lower()
    if text in _FALSE_FLAGS:
        return False
    try:
        return float(text) != 0
    except ValueError:
        return True
