from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Iterator, Protocol

from chartgrid.adapters import normalize_series
from chartgrid.config import ChartOptions
from chartgrid.errors import MissingPlotStrategyError
from chartgrid.grid import Grid
from chartgrid.layout import AxisLabelLayout, build_label_layout, compute_grid_rect
from chartgrid.mapper import CoordinateMapper, ValueScale
from chartgrid.scales import AxisRange, TickPlan, autoscale_range, plan_ticks
from chartgrid.series import Label, NormalizedData


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartGeometry:
    """Everything a plot strategy needs to place a chart's data."""

    data: NormalizedData
    axis_range: AxisRange
    grid: Grid
    mapper: CoordinateMapper
    markers: tuple[float, ...] | None
    labels_layout: AxisLabelLayout
    ticks: TickPlan | None = None

    @property
    def labels(self) -> tuple[Label, ...]:
        return self.data.labels

    def iter_points(self, series_index: int) -> Iterator[tuple[Label, float, float]]:
        """Yield ``(label, x, y)`` for every present value of one series, in label order."""
        values = self.data.series[series_index]
        for idx, label in enumerate(self.data.labels):
            value = values.get(label)
            if value is None:
                continue
            x, y = self.mapper.point_of(label, idx, value)
            yield label, x, y


class PlotStrategy(Protocol):
    def plot(self, geometry: ChartGeometry) -> None:
        ...


class Chart:
    """Scaling engine for one chart: normalizes the data once and plots it through ``strategy``."""

    def __init__(self, data: Any, options: ChartOptions, strategy: PlotStrategy | None = None) -> None:
        if strategy is None:
            raise MissingPlotStrategyError(
                "a chart needs a plot strategy that implements plot(geometry)"
            )
        self._options = options
        self._strategy = strategy
        self._geometry = build_geometry(data, options)

    @property
    def options(self) -> ChartOptions:
        return self._options

    @property
    def geometry(self) -> ChartGeometry:
        return self._geometry

    @property
    def labels(self) -> tuple[Label, ...]:
        return self._geometry.data.labels

    @property
    def lowest(self) -> float:
        return self._geometry.axis_range.lowest

    @property
    def highest(self) -> float:
        return self._geometry.axis_range.highest

    def draw(self) -> None:
        self._strategy.plot(self._geometry)


def build_geometry(data: Any, options: ChartOptions) -> ChartGeometry:
    normalized = normalize_series(data)
    axis_range = autoscale_range(
        normalized.max_value,
        minimum_value=options.minimum_value,
        maximum_value=options.maximum_value,
        autoscale_margin=options.autoscale_margin,
    )

    # Size the grid once without markers; tick spacing depends on its height.
    plain = compute_grid_rect(options, axis_range.highest)
    ticks: TickPlan | None = None
    spacing = options.spacing
    markers = options.marker_values
    if options.autoticks:
        ticks = plan_ticks(axis_range.lowest, axis_range.highest, plain.height)
        spacing = ticks.spacing
        if markers is None:
            markers = ticks.markers

    scale = ValueScale(axis_range, options.transform)
    grid = compute_grid_rect(
        options,
        axis_range.highest,
        spacing=spacing,
        marker_points=scale.fractions(markers),
    )
    mapper = CoordinateMapper(grid, normalized.labels, scale, xaxis=options.xaxis)
    labels_layout = build_label_layout(mapper, options, marker_values=markers)
    LOGGER.debug(
        "chart geometry labels=%d series=%d range=[%s, %s] grid=%s",
        len(normalized.labels),
        len(normalized.series),
        axis_range.lowest,
        axis_range.highest,
        grid.point,
    )
    return ChartGeometry(
        data=normalized,
        axis_range=axis_range,
        grid=grid,
        mapper=mapper,
        markers=markers,
        labels_layout=labels_layout,
        ticks=ticks,
    )
