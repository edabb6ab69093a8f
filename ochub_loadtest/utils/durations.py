"""Parsing for runtime duration strings such as ``"30s"``, ``"1m30s"`` or ``"500ms"``."""

from __future__ import annotations

import math
import re
from typing import Union

from .errors import ConfigurationError

_PART_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Convert a duration to seconds.

    Bare numbers are taken as seconds. Strings are a concatenation of
    ``<number><unit>`` parts, e.g. ``"2m"`` or ``"1h30m"``.

    Raises:
        ConfigurationError: if the value is negative or cannot be parsed
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            raise ConfigurationError(f"Duration must be non-negative: {value!r}")
        return float(value)

    text = str(value).strip()
    if not text:
        raise ConfigurationError("Duration must not be empty")
    try:
        return parse_duration(float(text))
    except ValueError:
        pass

    total = 0.0
    pos = 0
    for match in _PART_RE.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(text):
        raise ConfigurationError(f"Invalid duration: {value!r}")
    return total


def format_seconds(seconds: float) -> str:
    """Render whole seconds the way start offsets are written (``"4s"``)."""
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{seconds}s"
