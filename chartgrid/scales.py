from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np


LOGGER = logging.getLogger(__name__)

DEFAULT_AUTOSCALE_MARGIN = 0.02
TICK_COUNT_PREFERENCE: tuple[int, ...] = (6, 5, 7, 8, 4, 9, 3, 2, 1)
FALLBACK_TICK_COUNT = 5
MAX_MARKER_DECIMALS = 9


@dataclass(frozen=True)
class AxisRange:
    lowest: float
    highest: float

    @property
    def span(self) -> float:
        return self.highest - self.lowest


@dataclass(frozen=True)
class TickPlan:
    count: int
    spacing: float
    markers: tuple[float, ...]


def autoscale_range(
    max_value: float,
    *,
    minimum_value: float = 0,
    maximum_value: float | None = None,
    autoscale_margin: float = DEFAULT_AUTOSCALE_MARGIN,
) -> AxisRange:
    """Pick the ``[lowest, highest]`` plotting range for data peaking at ``max_value``.

    With an explicit ``maximum_value`` that value is used as-is (bumped by one
    if it would equal the minimum). Otherwise the data maximum is padded by
    ``autoscale_margin`` of the data span and rounded up to a round number one
    order of magnitude below the span, e.g. 173 -> 180.
    """
    lowest = minimum_value
    if maximum_value is not None:
        highest = maximum_value
        if highest == lowest:
            highest += 1
        return AxisRange(lowest=lowest, highest=highest)

    if autoscale_margin < 0:
        raise ValueError("autoscale_margin must be >= 0")

    top = float(max_value)
    lowest = float(lowest)
    if top <= lowest:
        # Flat or below-baseline data: keep log10 well-defined.
        top = lowest + 1.0
    margin = autoscale_margin * (top - lowest)
    if lowest > 0:
        lowest -= margin
    top += margin

    delta = top - lowest
    magnitude = int(np.floor(np.log10(delta))) - 1
    step = 10.0**magnitude
    normalized = float(np.ceil(delta / step))
    normalized = float(np.ceil(normalized * step))
    highest = int(np.floor(lowest + normalized))
    LOGGER.debug(
        "autoscale max_value=%s lowest=%s delta=%s magnitude=%d highest=%d",
        max_value,
        lowest,
        delta,
        magnitude,
        highest,
    )
    return AxisRange(lowest=lowest, highest=highest)


def choose_tick_count(delta: float) -> int:
    for count in TICK_COUNT_PREFERENCE:
        q = float(delta) / float(count)
        if q == np.floor(q):
            return count
    return FALLBACK_TICK_COUNT


def plan_ticks(lowest: float, highest: float, grid_height: float) -> TickPlan:
    if highest <= lowest:
        raise ValueError("highest must be > lowest")
    delta = highest - lowest
    count = choose_tick_count(delta)
    spacing = grid_height / count
    markers = tuple(lowest + k * delta / count for k in range(count + 1))
    LOGGER.debug("autoticks delta=%s count=%d spacing=%s", delta, count, spacing)
    return TickPlan(count=count, spacing=spacing, markers=markers)


def marker_decimals(step: float) -> int:
    """Fewest decimal places that write ``step`` without visible loss."""
    step = abs(float(step))
    if step == 0 or not np.isfinite(step):
        return 0
    for decimals in range(MAX_MARKER_DECIMALS + 1):
        if np.isclose(round(step, decimals), step, rtol=1e-9, atol=0.0):
            return decimals
    return MAX_MARKER_DECIMALS


def format_marker(value: float, *, decimals: int | None = None) -> str:
    value = float(value)
    if not np.isfinite(value):
        return str(value)
    if value != 0 and (abs(value) >= 1e9 or abs(value) < 1e-6):
        return f"{value:.4e}"
    if decimals is None:
        text = np.format_float_positional(value, trim="-")
    else:
        text = f"{value:.{decimals}f}"
    if float(text) == 0:
        return text.lstrip("-")
    return text


def format_marker_labels(markers: Sequence[float]) -> list[str]:
    """Text for each marker; every label in the set shares one number of decimals."""
    values = np.asarray(markers, dtype=np.float64)
    if values.size == 0:
        return []
    if values.size == 1:
        return [format_marker(values[0])]
    gaps = np.abs(np.diff(values))
    gaps = gaps[gaps > 0]
    if gaps.size == 0:
        return [format_marker(v) for v in values]
    step = float(np.min(gaps))
    values = np.where(np.abs(values) <= step * 1e-9, 0.0, values)
    decimals = marker_decimals(step)
    return [format_marker(v, decimals=decimals) for v in values]
