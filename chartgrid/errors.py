from __future__ import annotations


class ChartError(Exception):
    pass


class PlotDataError(ChartError, ValueError):
    pass


class MissingOriginError(ChartError, ValueError):
    pass


class InvalidAxisModeError(ChartError, ValueError):
    pass


class MissingPlotStrategyError(ChartError, NotImplementedError):
    pass
