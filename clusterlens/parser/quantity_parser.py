"""Kubernetes resource quantity parsing and display formatting.

Quantities come from node status, quota objects and container limits:
- CPU: "500m" -> 0.5 cores, "4" -> 4 cores
- Memory/storage: "2Gi" -> 2147483648 bytes (binary multipliers only)

Parsing is total: malformed input degrades to 0.0 and never raises, because
the values only feed the dashboard display.
"""

import logging
import re
from typing import Any, Optional

from clusterlens.constants import BINARY_MULTIPLIERS, GI, MILLI_SUFFIX

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")


def _leading_number(text: str) -> float:
    match = _LEADING_NUMBER.match(text)
    if not match:
        logger.debug(f"Malformed quantity, treating as 0: {text!r}")
        return 0.0
    return float(match.group(1))


def parse_quantity(quantity: Any) -> float:
    """Parse a quantity string into its base magnitude (cores or bytes).

    Suffixes are matched against the end of the string in priority order:
    ``m`` (milli), then ``Ki``/``Mi``/``Gi``/``Ti``. Anything else is read as
    an unscaled number. Empty input returns 0.0.
    """
    if not quantity:
        return 0.0

    text = str(quantity).strip()

    if text.endswith(MILLI_SUFFIX):
        return _leading_number(text[:-len(MILLI_SUFFIX)]) / 1000

    for suffix, multiplier in BINARY_MULTIPLIERS:
        if text.endswith(suffix):
            return _leading_number(text[:-len(suffix)]) * multiplier

    return _leading_number(text)


def format_bytes(value: float) -> str:
    """Render a byte count as Gi with one decimal, e.g. 2147483648 -> '2.0Gi'"""
    return f"{value / GI:.1f}Gi"


def format_cores(value: float) -> str:
    """Render a core count with one decimal, e.g. 4 -> '4.0'"""
    return f"{value:.1f}"


def format_count(value: float) -> str:
    """Render a device count without trailing zeros, e.g. 2.0 -> '2'"""
    return f"{value:g}"


def usage_percentage(used: float, limit: Optional[float]) -> float:
    """Share of limit consumed, clamped to [0, 100] for display"""
    if not limit or limit <= 0:
        return 0.0
    return min(100.0, max(0.0, used / limit * 100))
