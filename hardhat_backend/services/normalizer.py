"""Map raw device values onto their stored form.

Unrecognized input never raises: impact falls back to 0, light passes
through lowercased, optional readings become NULL. Firmware with labels we
have not seen yet keeps reporting instead of losing telemetry.
"""
import logging
import math
from typing import Any, Optional

logger = logging.getLogger(__name__)

IMPACT_LABELS = {
    "none": 0,
    "light": 1,
    "hard": 2,
    "severe": 3,
}

LIGHT_STATES = ("dark", "bright", "normal", "none")

MAX_IMPACT = 3

RADIX_PREFIXES = ("0x", "0o", "0b")


def _parse_number_text(text: str) -> float:
    """Numeric text the way device firmware writes it: decimal, exponent or 0x/0o/0b.

    Raises ValueError for anything else, including digit separators and
    non-ASCII digits that float() would otherwise accept.
    """
    if "_" in text or not text.isascii():
        raise ValueError(text)
    if text[:2].lower() in RADIX_PREFIXES:
        return float(int(text, 0))
    return float(text)


def _as_finite_number(raw: Any) -> Optional[float]:
    try:
        if isinstance(raw, str):
            raw = raw.strip()
            if not raw:
                return None
            value = _parse_number_text(raw)
        elif isinstance(raw, (int, float)):
            value = float(raw)
        else:
            return None
    except (TypeError, ValueError, OverflowError):
        return None
    return value if math.isfinite(value) else None


def normalize_impact(raw: Any) -> int:
    if raw is None:
        return 0

    value = _as_finite_number(raw)
    if value is not None:
        if value <= 0:
            return 0
        if value >= MAX_IMPACT:
            return MAX_IMPACT
        # half-up, so 0.5 -> 1 and 2.5 -> 3
        return int(math.floor(value + 0.5))

    label = str(raw).strip().lower()
    if label not in IMPACT_LABELS:
        logger.debug("Unrecognized impact value %r stored as 0", raw)
    return IMPACT_LABELS.get(label, 0)


def normalize_light(raw: Any) -> str:
    if raw is None:
        return "none"
    if isinstance(raw, bool):
        raw = "true" if raw else "false"
    elif isinstance(raw, float) and raw.is_integer():
        raw = int(raw)

    state = str(raw).strip().lower()
    if state not in LIGHT_STATES:
        logger.debug("Unrecognized light state %r stored as-is", state)
    return state


def coerce_reading(raw: Any) -> Optional[float]:
    """Optional raw sensor value as a float, or None when it is not a number."""
    if raw is None or isinstance(raw, bool):
        return None
    return _as_finite_number(raw)
