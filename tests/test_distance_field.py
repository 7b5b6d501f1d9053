"""Tests for the vector distance field."""

import pytest

from strokefit.fitting.distance_field import DistanceField
from strokefit.geometry import vecmath


def _v(x, y):
    return vecmath.vec(x, y)


class TestPaintStrip:
    """Tests for corridor rasterization."""

    def test_horizontal_strip_offsets(self):
        """Test that each painted pixel stores its offset from the line."""
        field = DistanceField(radius=9)

        visits = field.paint_strip(_v(0, 0), _v(10, 0))

        # 10 columns along the line, 18 rows across it
        assert visits == 180
        assert field.get((5, 3)) == (0.0, 3.0)
        assert field.get((0, -9)) == (0.0, -9.0)
        assert field.get((9, 8)) == (0.0, 8.0)

    def test_strip_stops_short_of_end_point(self):
        """Test that the end column is left for the end cap."""
        field = DistanceField(radius=9)

        field.paint_strip(_v(0, 0), _v(10, 0))

        assert (10, 0) not in field
        assert (5, 9) not in field
        assert len(field) == 180

    def test_identical_points_paint_nothing(self):
        field = DistanceField(radius=9)

        assert field.paint_strip(_v(4, 4), _v(4, 4)) == 0
        assert len(field) == 0

    def test_negative_coordinates(self):
        """Test that paths left of and above the origin are stored."""
        field = DistanceField(radius=9)

        field.paint_strip(_v(-20, -20), _v(-10, -20))

        assert field.get((-15, -20)) == (0.0, 0.0)
        assert field.get((-15, -25)) == (0.0, -5.0)

    def test_diagonal_strip_is_near_zero_on_the_line(self):
        field = DistanceField(radius=9)

        field.paint_strip(_v(0, 0), _v(10, 10))

        assert vecmath.magnitude(field.query(_v(5, 5))) <= 1.0


class TestEndCap:
    """Tests for end cap stamping."""

    def test_end_cap_square(self):
        field = DistanceField(radius=9)

        visits = field.paint_end_cap(_v(10, 0))

        assert visits == 324
        assert len(field) == 324
        assert field.get((10, 0)) == (0.0, 0.0)
        assert field.get((1, -9)) == (-9.0, -9.0)
        assert field.get((18, 8)) == (8.0, 8.0)
        assert (19, 0) not in field

    def test_closer_value_replaces(self):
        field = DistanceField(radius=9)

        field.paint_end_cap(_v(0, 0))
        field.paint_end_cap(_v(3, 0))

        assert field.get((2, 0)) == (-1.0, 0.0)
        assert field.get((1, 0)) == (1.0, 0.0)

    def test_tie_keeps_existing_value(self):
        field = DistanceField(radius=9)

        field.paint_end_cap(_v(0, 0))
        field.paint_end_cap(_v(2, 0))

        assert field.get((1, 0)) == (1.0, 0.0)

    def test_strip_wins_over_farther_cap(self):
        field = DistanceField(radius=9)

        field.paint_end_cap(_v(0, 0))
        field.paint_strip(_v(0, 0), _v(10, 0))

        assert field.get((5, 2)) == (0.0, 2.0)


class TestQuery:
    """Tests for distance lookups."""

    def test_empty_field_reads_radius(self):
        field = DistanceField(radius=9)

        assert field.query(_v(100, -100)).tolist() == [9.0, 9.0]

    def test_query_rounds_point(self):
        field = DistanceField(radius=9)
        field.paint_strip(_v(0, 0), _v(10, 0))

        assert field.query(_v(5.4, 3.2)).tolist() == [0.0, 3.0]

    def test_query_takes_closer_axis_from_cell_below(self):
        """Test the per-axis minimum against (x, y + 1)."""
        field = DistanceField(radius=9)
        field.paint_strip(_v(0, 0), _v(10, 0))

        # (5, -1) holds (0, -1); (5, 0) below it holds (0, 0)
        assert field.query(_v(5, -1)).tolist() == [0.0, 0.0]
        # Unpainted (5, -10) borrows x from (5, -9) but keeps y = 9
        assert field.query(_v(5, -10)).tolist() == [0.0, 9.0]

    def test_query_ignores_cell_above(self):
        field = DistanceField(radius=9)
        field.paint_strip(_v(0, 0), _v(10, 0))

        # (5, 9) is unpainted; (5, 8) above it is not consulted
        assert field.query(_v(5, 9)).tolist() == [9.0, 9.0]
        assert field.query(_v(5, 8)).tolist() == [0.0, 8.0]


class TestReset:
    """Tests for clearing the field."""

    def test_reset_empties(self):
        field = DistanceField(radius=9)
        field.paint_end_cap(_v(0, 0))

        field.reset()

        assert len(field) == 0
        assert field.bounds() is None
        assert field.query(_v(0, 0)).tolist() == [9.0, 9.0]

    def test_bounds(self):
        field = DistanceField(radius=2)
        field.paint_end_cap(_v(5, 5))

        assert field.bounds() == [3, 3, 6, 6]

    def test_radius_is_configurable(self):
        field = DistanceField(radius=3)
        field.paint_end_cap(_v(0, 0))

        assert len(field) == 36
        assert field.query(_v(50, 50)).tolist() == pytest.approx([3.0, 3.0])
