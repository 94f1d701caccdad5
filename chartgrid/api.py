from __future__ import annotations

from typing import Any, Mapping

from chartgrid.chart import Chart, PlotStrategy
from chartgrid.config import ChartOptions


def chart(
    data: Any,
    strategy: PlotStrategy | None = None,
    options: ChartOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Chart:
    if options is None:
        resolved = ChartOptions.from_mapping(overrides)
    elif isinstance(options, ChartOptions):
        resolved = options.with_overrides(**overrides) if overrides else options
    else:
        merged = dict(options)
        merged.update(overrides)
        resolved = ChartOptions.from_mapping(merged)
    return Chart(data, resolved, strategy)
