from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chartgrid.config import ChartOptions
from chartgrid.grid import Grid
from chartgrid.mapper import CoordinateMapper
from chartgrid.scales import format_marker, format_marker_labels


# Room reserved around the grid, in the same units as the chart size.
Y_AXIS_GUTTER = 15
X_AXIS_GUTTER = 7
TITLE_ROOM = 10
X_LABEL_ROOM = 30
Y_LABEL_ROOM = 15

TITLE_SIZE = 10
AXIS_LABEL_SIZE = 8
VALUE_LABEL_SIZE = 6
HEADING_SIZE = 5


@dataclass(frozen=True)
class TextPlacement:
    text: str
    x: float
    y: float
    size: float
    width: float | None = None
    rotate: int = 0


@dataclass(frozen=True)
class AxisLabelLayout:
    y_labels: tuple[TextPlacement, ...]
    x_headings: tuple[TextPlacement, ...]
    title: TextPlacement | None = None
    x_label: TextPlacement | None = None
    y_label: TextPlacement | None = None


def value_text(value: float) -> str:
    return format_marker(value, decimals=0) if float(value).is_integer() else format_marker(value)


def compute_grid_rect(
    options: ChartOptions,
    highest: float,
    *,
    spacing: float | None = None,
    marker_points: Sequence[float] | None = None,
) -> Grid:
    """Fit the grid inside the chart box, leaving room for the title, axis labels and value labels."""
    assert options.at is not None
    margin = options.margin
    x = options.at[0] + Y_AXIS_GUTTER + margin
    y = options.at[1] + X_AXIS_GUTTER + margin
    width = options.width - 2 * margin - Y_AXIS_GUTTER
    height = options.height - 2 * margin - X_AXIS_GUTTER

    if options.title:
        height -= TITLE_ROOM
    if options.label_x:
        y += X_LABEL_ROOM
        height -= X_LABEL_ROOM
    if options.label_y:
        x += Y_LABEL_ROOM
        width -= Y_LABEL_ROOM

    if highest > 999:
        # Wide value labels push the grid right.
        offset = 4 * (len(value_text(highest)) - 3)
        x += offset
        width -= offset

    if width <= 0 or height <= 0:
        raise ValueError(f"chart {options.width}x{options.height} leaves no room for the grid")
    return Grid(
        start_x=x,
        start_y=y,
        width=width,
        height=height,
        spacing=spacing if spacing is not None else options.spacing,
        marker_points=tuple(marker_points) if marker_points is not None else None,
        downwards=options.downward,
    )


def build_label_layout(
    mapper: CoordinateMapper,
    options: ChartOptions,
    *,
    marker_values: Sequence[float] | None = None,
) -> AxisLabelLayout:
    grid = mapper.grid
    lowest = mapper.scale.lowest
    highest = mapper.scale.highest
    base_x = grid.start_x + 1
    base_y = grid.start_y + 1

    y_x = base_x - (4 + 4 * len(value_text(highest)))
    y_labels: list[TextPlacement] = []
    if marker_values is not None:
        for value, text in zip(marker_values, format_marker_labels(marker_values)):
            y_labels.append(TextPlacement(text, y_x, base_y + mapper.height_of(value) - 2, VALUE_LABEL_SIZE))
    else:
        top, bottom = (lowest, highest) if grid.downwards else (highest, lowest)
        y_labels.append(TextPlacement(value_text(top), y_x, base_y + grid.height - 3, VALUE_LABEL_SIZE))
        y_labels.append(TextPlacement(value_text(bottom), y_x, base_y - 1, VALUE_LABEL_SIZE))

    printer = options.heading_printer or str
    printed: set[str] = set()
    headings: list[TextPlacement] = []
    heading_width = mapper.heading_width
    for idx, heading in enumerate(mapper.labels):
        text = printer(heading)
        if text in printed:
            continue
        if mapper.xaxis == "time":
            x = mapper.x_offset_of(heading, idx) - heading_width / 2
        else:
            x = base_x + idx * mapper.plot_spacing + 1
        headings.append(TextPlacement(text, x, base_y - 7, HEADING_SIZE, width=heading_width))
        printed.add(text)

    title = None
    if options.title:
        title = TextPlacement(
            options.title,
            _centre_x(grid, options.title, TITLE_SIZE),
            grid.start_y + grid.height + 10,
            TITLE_SIZE,
        )
    x_label = None
    if options.label_x:
        x_label = TextPlacement(
            options.label_x,
            _centre_x(grid, options.label_x, AXIS_LABEL_SIZE),
            grid.start_y - 30,
            AXIS_LABEL_SIZE,
        )
    y_label = None
    if options.label_y:
        y_label = TextPlacement(
            options.label_y,
            grid.start_x - 30,
            _centre_y(grid, options.label_y, AXIS_LABEL_SIZE),
            AXIS_LABEL_SIZE,
            rotate=90,
        )
    return AxisLabelLayout(
        y_labels=tuple(y_labels),
        x_headings=tuple(headings),
        title=title,
        x_label=x_label,
        y_label=y_label,
    )


def _centre_x(grid: Grid, text: str, size: float) -> float:
    return (grid.start_x + grid.width / 2) - (len(text) * size) / 4


def _centre_y(grid: Grid, text: str, size: float) -> float:
    return (grid.start_y + grid.height / 2) - (len(text) * size) / 4
