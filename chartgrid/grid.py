from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Grid:
    """Rectangle that data is plotted into, with gridline placement."""

    start_x: float
    start_y: float
    width: float
    height: float
    spacing: float = 20
    marker_points: tuple[float, ...] | None = None
    downwards: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid width/height must be > 0, got {self.width}x{self.height}")
        if self.spacing <= 0:
            raise ValueError("spacing must be > 0")

    @property
    def point(self) -> tuple[float, float]:
        return (self.start_x, self.start_y)

    @property
    def end_x(self) -> float:
        return self.start_x + self.width

    @property
    def end_y(self) -> float:
        return self.start_y + self.height

    @property
    def x_axis_y(self) -> float:
        # The category axis sits on the side the values grow away from.
        return self.end_y if self.downwards else self.start_y

    def gridline_offsets(self) -> tuple[float, ...]:
        """Vertical offsets from ``start_y`` of each horizontal gridline."""
        if self.marker_points is not None:
            offsets = [fraction * self.height for fraction in self.marker_points]
        else:
            offsets = [self.spacing * (k + 1) for k in range(int(self.height // self.spacing))]
        if self.downwards:
            offsets = [self.height - offset for offset in offsets]
        return tuple(offsets)

    def gridlines(self) -> tuple[tuple[tuple[float, float], tuple[float, float]], ...]:
        return tuple(
            ((self.start_x, self.start_y + offset), (self.end_x, self.start_y + offset))
            for offset in self.gridline_offsets()
        )

    def contains(self, x: float, y: float) -> bool:
        return self.start_x <= x <= self.end_x and self.start_y <= y <= self.end_y
