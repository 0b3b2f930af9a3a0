"""Text gauges for percentage values."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from tmux_cockpit.types import MetricSample


FILLED_GLYPH = "█"
EMPTY_GLYPH = "░"
DEFAULT_WIDTH = 10


def coerce_percent(value: object) -> int:
    """Return ``value`` as an integer percentage in [0, 100].

    Missing or malformed readings (``None``, ``""``, ``"N/A"``) count as 0.
    """
    if value is None:
        return 0
    try:
        number = float(str(value).strip().rstrip("%"))
    except ValueError:
        return 0
    if math.isnan(number):
        return 0
    return int(max(0.0, min(100.0, number)))


def render_bar(percent: object, width: int = DEFAULT_WIDTH) -> str:
    """Render ``percent`` as ``[█████░░░░░]  50%``."""
    pct = coerce_percent(percent)
    filled = min(width, pct * width // 100)
    empty = width - filled
    return f"[{FILLED_GLYPH * filled}{EMPTY_GLYPH * empty}] {pct:>3}%"


def render_sample(sample: MetricSample | None, width: int = DEFAULT_WIDTH) -> str:
    """Gauge of a percentage sample; a missing sample renders as 0%."""
    return render_bar(sample.value if sample is not None else None, width)
