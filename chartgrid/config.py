from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib
from typing import Any, Callable, Mapping, Sequence

from chartgrid.errors import InvalidAxisModeError, MissingOriginError
from chartgrid.mapper import ValueTransform
from chartgrid.scales import DEFAULT_AUTOSCALE_MARGIN
from chartgrid.series import X_AXIS_MODES, Label, XAxisMode


DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 200
DEFAULT_SPACING = 20
DEFAULT_BOUNDING_MARGIN = 10

_ALIASES = {
    "minimumValue": "minimum_value",
    "maximumValue": "maximum_value",
    "autoscaleMargin": "autoscale_margin",
    "markerValues": "marker_values",
    "downwards": "downward",
    "xAxis": "xaxis",
    "headingPrinter": "heading_printer",
    "labelX": "label_x",
    "labelY": "label_y",
}


@dataclass(frozen=True)
class ChartOptions:
    at: tuple[float, float] | None = None
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    spacing: float = DEFAULT_SPACING
    margin: int = DEFAULT_BOUNDING_MARGIN
    title: str | None = None
    label_x: str | None = None
    label_y: str | None = None
    minimum_value: float = 0
    maximum_value: float | None = None
    autoscale_margin: float = DEFAULT_AUTOSCALE_MARGIN
    autoticks: bool = False
    marker_values: tuple[float, ...] | None = None
    transform: ValueTransform | None = None
    downward: bool = False
    xaxis: XAxisMode = "normal"
    heading_printer: Callable[[Label], str] | None = None

    def __post_init__(self) -> None:
        if self.at is None or len(self.at) == 0:
            raise MissingOriginError(
                "`at` must be set to the (x, y) point the chart is drawn from"
            )
        if len(self.at) != 2:
            raise ValueError(f"`at` must be an (x, y) pair, got {self.at!r}")
        object.__setattr__(self, "at", (self.at[0], self.at[1]))
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width/height must be > 0")
        if self.spacing <= 0:
            raise ValueError("spacing must be > 0")
        object.__setattr__(self, "margin", max(int(self.margin), 0))
        if self.autoscale_margin < 0:
            raise ValueError("autoscale_margin must be >= 0")
        if self.maximum_value is not None and self.maximum_value < self.minimum_value:
            raise ValueError("maximum_value must be >= minimum_value")
        if self.xaxis not in X_AXIS_MODES:
            raise InvalidAxisModeError(f"xaxis must be one of {X_AXIS_MODES}, got {self.xaxis!r}")
        if self.marker_values is not None:
            object.__setattr__(self, "marker_values", tuple(self.marker_values))
        if self.transform is not None and not callable(self.transform):
            raise ValueError("transform must be callable")
        if self.heading_printer is not None and not callable(self.heading_printer):
            raise ValueError("heading_printer must be callable")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "ChartOptions":
        return cls(**_resolve_option_names(options))

    def with_overrides(self, **overrides: Any) -> "ChartOptions":
        return replace(self, **_resolve_option_names(overrides))


def _resolve_option_names(options: Mapping[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(ChartOptions)}
    kwargs: dict[str, Any] = {}
    for key, value in options.items():
        name = _ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"unknown chart option: {key}")
        if name in kwargs:
            raise ValueError(f"chart option given twice: {key}")
        kwargs[name] = value
    if isinstance(kwargs.get("at"), Sequence):
        kwargs["at"] = tuple(kwargs["at"])
    return kwargs


def load_chart_options(path: str | Path, **overrides: Any) -> ChartOptions:
    """Read chart options from a TOML file; ``overrides`` win over file values.

    Options may sit at the top level or under a ``[chart]`` table.
    """
    options_path = Path(path)
    if not options_path.exists():
        raise FileNotFoundError(f"chart options not found: {options_path}")
    with options_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("chart", raw)
    if not isinstance(table, dict):
        raise ValueError("[chart] must be a table")
    merged = _resolve_option_names(table)
    merged.update(_resolve_option_names(overrides))
    return ChartOptions(**merged)
