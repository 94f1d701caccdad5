from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
import logging
import numbers
from typing import Any, Callable, Sequence

import numpy as np

from chartgrid.errors import InvalidAxisModeError
from chartgrid.grid import Grid
from chartgrid.scales import AxisRange
from chartgrid.series import X_AXIS_MODES, Label


LOGGER = logging.getLogger(__name__)

ValueTransform = Callable[[float], float]

TIME_HEADING_WIDTH = 30.0


def _try_transform(transform: ValueTransform, value: float) -> float | None:
    try:
        out = float(transform(value))
    except Exception as exc:
        LOGGER.debug("value transform failed for %r: %s", value, exc)
        return None
    if not np.isfinite(out):
        LOGGER.debug("value transform returned %r for %r", out, value)
        return None
    return out


def apply_transform(transform: ValueTransform | None, value: float) -> float:
    """Run ``transform`` on ``value``, falling back to ``value`` if it fails or is non-finite."""
    if transform is None:
        return value
    out = _try_transform(transform, value)
    return value if out is None else out


def label_to_number(label: Label) -> float:
    if isinstance(label, bool):
        raise InvalidAxisModeError(f"time axis labels must be numeric or dates, got {label!r}")
    if isinstance(label, datetime):
        return label.timestamp()
    if isinstance(label, date):
        return float(label.toordinal())
    if isinstance(label, np.generic):
        label = label.item()
    if isinstance(label, (numbers.Real, Decimal)):
        return float(label)
    raise InvalidAxisModeError(f"time axis labels must be numeric or dates, got {label!r}")


class ValueScale:
    """Maps values to their fraction of an :class:`AxisRange`, optionally through a transform.

    The transform only changes relative position; the stored range is never
    transformed.
    """

    def __init__(self, axis_range: AxisRange, transform: ValueTransform | None = None) -> None:
        if axis_range.highest <= axis_range.lowest:
            raise ValueError("axis range highest must be > lowest")
        self._range = axis_range
        self._transform = transform
        self._lo = float(axis_range.lowest)
        self._hi = float(axis_range.highest)
        t_lo = self._transform_endpoint(self._lo)
        t_hi = self._transform_endpoint(self._hi)
        if t_hi - t_lo == 0 or not np.isfinite(t_hi - t_lo):
            LOGGER.warning("transformed axis range collapsed; plotting untransformed values")
            self._transform = None
            t_lo, t_hi = self._lo, self._hi
        self._t_lo = t_lo
        self._t_hi = t_hi

    @property
    def axis_range(self) -> AxisRange:
        return self._range

    @property
    def lowest(self) -> float:
        return self._range.lowest

    @property
    def highest(self) -> float:
        return self._range.highest

    def fraction_of(self, value: Any) -> float:
        tv = apply_transform(self._transform, float(value))
        return (tv - self._t_lo) / (self._t_hi - self._t_lo)

    def fractions(self, values: Sequence[Any] | None) -> tuple[float, ...] | None:
        if values is None:
            return None
        return tuple(self.fraction_of(v) for v in values)

    def _transform_endpoint(self, value: float) -> float:
        if self._transform is None:
            return value
        out = _try_transform(self._transform, value)
        if out is None:
            LOGGER.warning("value transform failed on range endpoint %r; using it untransformed", value)
            return value
        return out


class CoordinateMapper:
    """Positions values and column labels inside a :class:`Grid`."""

    def __init__(
        self,
        grid: Grid,
        labels: Sequence[Label],
        scale: ValueScale,
        *,
        xaxis: str = "normal",
    ) -> None:
        if xaxis not in X_AXIS_MODES:
            raise InvalidAxisModeError(f"xaxis must be one of {X_AXIS_MODES}, got {xaxis!r}")
        self._grid = grid
        self._labels = tuple(labels)
        self._scale = scale
        self._xaxis = xaxis

        self._min_label = 0.0
        self._x_axis_scale = 0.0
        if xaxis == "time" and self._labels:
            numeric = [label_to_number(label) for label in self._labels]
            self._min_label = min(numeric)
            span = max(numeric) - self._min_label
            # A single distinct label has no span; pin it to the first slot.
            self._x_axis_scale = (grid.width - self.bar_width) / span if span > 0 else 0.0
            LOGGER.debug(
                "time axis min_label=%s max_label=%s x_axis_scale=%s",
                self._min_label,
                self._min_label + span,
                self._x_axis_scale,
            )

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def labels(self) -> tuple[Label, ...]:
        return self._labels

    @property
    def scale(self) -> ValueScale:
        return self._scale

    @property
    def xaxis(self) -> str:
        return self._xaxis

    @property
    def x_axis_scale(self) -> float:
        return self._x_axis_scale

    @property
    def plot_spacing(self) -> float:
        return self._grid.width / max(1, len(self._labels))

    @property
    def bar_width(self) -> float:
        return self.plot_spacing / 2

    @property
    def heading_width(self) -> float:
        if self._xaxis == "time":
            return TIME_HEADING_WIDTH
        return self.plot_spacing - 2

    def fraction_of(self, value: Any) -> float:
        return self._scale.fraction_of(value)

    def height_of(self, value: Any) -> float:
        h = self._grid.height
        raw = h * self.fraction_of(value)
        # Halves round away from zero.
        ph = float(np.copysign(np.floor(abs(raw) + 0.5), raw))
        return h - ph if self._grid.downwards else ph

    def x_offset_of(self, label: Label, index: int) -> float:
        if self._xaxis == "time":
            return (
                self._grid.start_x
                + self.bar_width / 2
                + (label_to_number(label) - self._min_label) * self._x_axis_scale
            )
        return self._grid.start_x + index * self.plot_spacing + 1

    def point_of(self, label: Label, index: int, value: Any) -> tuple[float, float]:
        """Absolute grid point of ``value`` plotted in the column for ``label``."""
        return (self.x_offset_of(label, index), self._grid.start_y + self.height_of(value))
