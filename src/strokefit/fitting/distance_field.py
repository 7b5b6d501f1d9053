"""
Vector distance field for strokefit.

A sparse map from integer pixel coordinates to the offset (pixel minus nearest
path point) of the closest known point on the path drawn since the active
segment began. Painting is a DDA rasterization of a corridor around each new
line piece, so fit-quality queries inside the refinement loop are a dict
lookup instead of a point-to-polyline distance computation.
"""

import math

from strokefit.geometry import vecmath


def _loop_count(steps):
    """Iterations of a `for (i = 0; i < steps; i++)` sweep over fractional steps."""
    return int(math.ceil(steps))


def _sum_sq(value):
    return value[0] * value[0] + value[1] * value[1]


class DistanceField:
    """
    Sparse vector distance field.

    Cells are keyed by (x, y) integer tuples, so paths may extend into
    negative coordinates. Stored offsets only ever get closer to the path
    until reset() is called.
    """

    def __init__(self, radius=9):
        self.radius = int(radius)
        self._cells = {}

    def __len__(self):
        return len(self._cells)

    def __contains__(self, cell):
        return tuple(cell) in self._cells

    def get(self, cell):
        """Raw stored offset for an integer cell, or None when unpainted."""
        return self._cells.get(tuple(cell))

    def reset(self):
        """Forget everything painted so far."""
        self._cells = {}

    def bounds(self):
        """[min_x, min_y, max_x, max_y] of painted cells, None when empty."""
        if not self._cells:
            return None
        xs = [c[0] for c in self._cells]
        ys = [c[1] for c in self._cells]
        return [min(xs), min(ys), max(xs), max(ys)]

    def _improve(self, cell, candidate):
        # Strictly closer replaces; ties keep what is already there
        existing = self._cells.get(cell)
        if existing is None or _sum_sq(candidate) < _sum_sq(existing):
            self._cells[cell] = candidate

    def paint_strip(self, last_point, new_point):
        """
        Paint the corridor of half-width radius around last_point->new_point.

        The corridor is swept parallel to the line (one column per DDA step
        along the line) and, within each column, perpendicular to it from the
        +radius side to the -radius side, interpolating the offset as it goes:

            a1------------------b1  -,
            |                    |   |-> radius
            |------the line------|  -'
            |                    |
            a2------------------b2

        Returns the number of pixel visits.
        """
        if vecmath.equal(last_point, new_point):
            return 0

        perp = vecmath.perpendicular_unit_vector(last_point, new_point)
        half_width = vecmath.scale(perp, self.radius)
        a1 = vecmath.add(last_point, half_width)
        b1 = vecmath.add(new_point, half_width)

        vert_diff = vecmath.negate(vecmath.scale(half_width, 2))
        vert_steps = vecmath.dda_steps(vert_diff)
        vert_increment = vecmath.divide(vert_diff, vert_steps)

        horiz_diff = vecmath.subtract(b1, a1)
        horiz_steps = vecmath.dda_steps(horiz_diff)
        horiz_increment = vecmath.divide(horiz_diff, horiz_steps)

        visits = 0
        column_start = a1
        for _ in range(_loop_count(horiz_steps)):
            location = column_start
            offset = half_width
            for _ in range(_loop_count(vert_steps)):
                rounded = vecmath.round_vec(offset)
                self._improve(vecmath.to_cell(location), (float(rounded[0]), float(rounded[1])))
                offset = vecmath.add(offset, vert_increment)
                location = vecmath.add(location, vert_increment)
                visits += 1
            column_start = vecmath.add(column_start, horiz_increment)

        return visits

    def paint_end_cap(self, point):
        """
        Stamp a 2*radius square of literal offsets centred on point.

        Covers the open end of the path, which the corridor of the next
        strip has not reached yet. Returns the number of pixel visits.
        """
        px, py = vecmath.to_cell(point)
        r = self.radius
        for x in range(px - r, px + r):
            for y in range(py - r, py + r):
                self._improve((x, y), (float(x - px), float(y - py)))
        return (2 * r) ** 2

    def query(self, point):
        """
        Offset from the path at the pixel containing point.

        Each axis takes the smaller (by absolute value) of the cell itself and
        the cell directly below it, (x, y + 1). Unpainted cells read as
        (radius, radius).
        """
        x, y = vecmath.to_cell(point)
        value = list(self._cells.get((x, y), (self.radius, self.radius)))

        # TODO: decide whether (x, y - 1) should be consulted as well; the
        # error threshold was tuned against the one-sided lookup.
        below = self._cells.get((x, y + 1))
        if below is not None:
            if abs(value[0]) > abs(below[0]):
                value[0] = below[0]
            if abs(value[1]) > abs(below[1]):
                value[1] = below[1]

        return vecmath.vec(value[0], value[1])

    def trace_summary(self):
        return f"DistanceField(radius={self.radius},cells={len(self._cells)})"
