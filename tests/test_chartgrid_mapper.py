from __future__ import annotations

from datetime import date
import math
import unittest

from chartgrid import AxisRange, CoordinateMapper, Grid, InvalidAxisModeError, ValueScale


def _mapper(labels, *, xaxis: str = "normal", start_x: float = 0.0, downwards: bool = False) -> CoordinateMapper:
    grid = Grid(start_x=start_x, start_y=0.0, width=300.0, height=100.0, downwards=downwards)
    return CoordinateMapper(grid, labels, ValueScale(AxisRange(0, 200)), xaxis=xaxis)


class ValueScaleTests(unittest.TestCase):
    def test_fraction_bounds(self) -> None:
        scale = ValueScale(AxisRange(0, 200))
        self.assertEqual(scale.fraction_of(0), 0.0)
        self.assertEqual(scale.fraction_of(200), 1.0)
        self.assertEqual(scale.fraction_of(50), 0.25)
        for value in range(0, 201, 3):
            self.assertTrue(0.0 <= scale.fraction_of(value) <= 1.0)

    def test_fraction_with_offset_range(self) -> None:
        scale = ValueScale(AxisRange(8.0, 118))
        self.assertEqual(scale.fraction_of(8.0), 0.0)
        self.assertEqual(scale.fraction_of(118), 1.0)

    def test_transform_changes_relative_position_only(self) -> None:
        scale = ValueScale(AxisRange(1, 1000), transform=math.log10)
        self.assertAlmostEqual(scale.fraction_of(10), 1 / 3)
        self.assertEqual(scale.axis_range, AxisRange(1, 1000))

    def test_transform_failure_falls_back_to_raw_value(self) -> None:
        scale = ValueScale(AxisRange(0, 100), transform=math.log10)
        self.assertEqual(scale.fraction_of(0), 0.0)
        self.assertAlmostEqual(scale.fraction_of(10), 0.5)

    def test_transform_that_always_fails_is_ignored(self) -> None:
        with self.assertLogs("chartgrid.mapper", level="WARNING"):
            scale = ValueScale(AxisRange(0, 200), transform=lambda v: 1 / 0)
        self.assertEqual(scale.fraction_of(50), 0.25)

    def test_non_finite_transform_result_falls_back(self) -> None:
        scale = ValueScale(AxisRange(0, 200), transform=lambda v: float("inf") if v == 50 else v)
        self.assertEqual(scale.fraction_of(50), 0.25)

    def test_rejects_empty_range(self) -> None:
        with self.assertRaises(ValueError):
            ValueScale(AxisRange(5, 5))


class CoordinateMapperTests(unittest.TestCase):
    def test_height_of(self) -> None:
        mapper = _mapper(["a"])
        self.assertEqual(mapper.height_of(50), 25)
        self.assertEqual(mapper.height_of(200), 100)
        self.assertEqual(_mapper(["a"], downwards=True).height_of(50), 75)

    def test_height_of_rounds_halves_away_from_zero(self) -> None:
        grid = Grid(start_x=0.0, start_y=0.0, width=300.0, height=200.0)
        mapper = CoordinateMapper(grid, ["a"], ValueScale(AxisRange(0, 80)))
        self.assertEqual(mapper.height_of(1), 3)
        self.assertEqual(mapper.height_of(5), 13)
        down = CoordinateMapper(
            Grid(start_x=0.0, start_y=0.0, width=300.0, height=200.0, downwards=True),
            ["a"],
            ValueScale(AxisRange(0, 80)),
        )
        self.assertEqual(down.height_of(1), 197)

    def test_downwards_symmetry(self) -> None:
        up = _mapper(["a"])
        down = _mapper(["a"], downwards=True)
        for value in range(0, 201, 7):
            self.assertEqual(down.height_of(value), 100 - up.height_of(value))

    def test_normal_mode_uses_slots(self) -> None:
        mapper = _mapper(["a", "b", "c"], start_x=10.0)
        self.assertEqual(mapper.plot_spacing, 100)
        self.assertEqual(mapper.x_offset_of("a", 0), 11)
        self.assertEqual(mapper.x_offset_of("b", 1), 111)
        self.assertEqual(mapper.x_offset_of("zzz", 1), 111)
        self.assertEqual(mapper.heading_width, 98)

    def test_time_mode_is_linear_in_label_value(self) -> None:
        mapper = _mapper([0, 10, 20], xaxis="time")
        self.assertEqual(mapper.bar_width, 50)
        self.assertEqual(mapper.x_axis_scale, 12.5)
        offsets = [mapper.x_offset_of(label, i) for i, label in enumerate([0, 10, 20])]
        self.assertEqual(offsets, [25.0, 150.0, 275.0])
        self.assertEqual(offsets[1] - offsets[0], offsets[2] - offsets[1])
        self.assertEqual(mapper.heading_width, 30)

    def test_time_mode_uneven_labels(self) -> None:
        mapper = _mapper([0, 5, 20], xaxis="time")
        x0, x5, x20 = (mapper.x_offset_of(label, i) for i, label in enumerate([0, 5, 20]))
        self.assertLess(x0, x5)
        self.assertLess(x5, x20)
        self.assertLess(x5 - x0, x20 - x5)
        self.assertEqual(x5, 87.5)

    def test_time_mode_dates(self) -> None:
        labels = [date(2020, 1, 1), date(2020, 1, 11), date(2020, 1, 21)]
        mapper = _mapper(labels, xaxis="time")
        offsets = [mapper.x_offset_of(label, i) for i, label in enumerate(labels)]
        self.assertEqual(offsets, [25.0, 150.0, 275.0])

    def test_time_mode_single_label(self) -> None:
        mapper = _mapper([5], xaxis="time")
        self.assertEqual(mapper.x_offset_of(5, 0), 75.0)

    def test_time_mode_rejects_string_labels(self) -> None:
        with self.assertRaises(InvalidAxisModeError):
            _mapper(["Jan", "Feb"], xaxis="time")

    def test_unknown_axis_mode(self) -> None:
        with self.assertRaises(InvalidAxisModeError):
            _mapper(["a"], xaxis="log")

    def test_point_of(self) -> None:
        mapper = _mapper(["a", "b", "c"])
        self.assertEqual(mapper.point_of("c", 2, 100), (201.0, 50.0))


if __name__ == "__main__":
    unittest.main()
