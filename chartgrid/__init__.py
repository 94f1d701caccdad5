from chartgrid.adapters import normalize_series
from chartgrid.api import chart
from chartgrid.chart import Chart, ChartGeometry, PlotStrategy, build_geometry
from chartgrid.config import ChartOptions, load_chart_options
from chartgrid.errors import (
    ChartError,
    InvalidAxisModeError,
    MissingOriginError,
    MissingPlotStrategyError,
    PlotDataError,
)
from chartgrid.grid import Grid
from chartgrid.mapper import CoordinateMapper, ValueScale
from chartgrid.scales import AxisRange, TickPlan, autoscale_range, plan_ticks
from chartgrid.series import NormalizedData

__all__ = [
    "AxisRange",
    "Chart",
    "ChartError",
    "ChartGeometry",
    "ChartOptions",
    "CoordinateMapper",
    "Grid",
    "InvalidAxisModeError",
    "MissingOriginError",
    "MissingPlotStrategyError",
    "NormalizedData",
    "PlotDataError",
    "PlotStrategy",
    "TickPlan",
    "ValueScale",
    "autoscale_range",
    "build_geometry",
    "chart",
    "load_chart_options",
    "normalize_series",
    "plan_ticks",
]
