"""
2D vector algebra for strokefit.

Vectors are float64 numpy arrays of shape (2,). All functions are pure and
return new arrays.
"""

import math

import numpy as np


def vec(x, y):
    """Create a 2D vector."""
    return np.array([x, y], dtype=float)


def as_vec(point):
    """
    Coerce a caller-supplied point into a 2D vector.

    Accepts [x, y] sequences, numpy arrays, {"x": .., "y": ..} mappings and
    objects with x/y attributes.
    """
    if isinstance(point, dict):
        x, y = point["x"], point["y"]
    elif hasattr(point, "x") and hasattr(point, "y"):
        x, y = point.x, point.y
    else:
        values = list(point)
        if len(values) != 2:
            raise ValueError(f"Expected a 2D point, got {len(values)} components")
        x, y = values

    result = vec(x, y)
    if not np.all(np.isfinite(result)):
        raise ValueError(f"Point has non-finite coordinates: {result.tolist()}")
    return result


def add(a, b):
    return a + b


def subtract(a, b):
    return a - b


def negate(a):
    return -a


def scale(a, scalar):
    return a * scalar


def divide(a, scalar):
    # Multiply by the reciprocal so interpolation steps match repeated addition
    return a * (1 / scalar)


def dot(a, b):
    return float(a[0] * b[0] + a[1] * b[1])


def sum_of_squares(a):
    """Squared magnitude, used for closer-wins comparisons."""
    return float(a[0] ** 2 + a[1] ** 2)


def magnitude(a):
    return math.sqrt(sum_of_squares(a))


def distance(a, b):
    return magnitude(a - b)


def unit_vector(a):
    """
    Return a divided by its magnitude.

    The zero vector has no direction, so None is returned instead of a NaN
    vector. Callers must handle the None case.
    """
    length = magnitude(a)
    if length == 0:
        return None
    return a / length


def perpendicular_unit_vector(a, b):
    """Unit vector perpendicular to the segment a->b, (dy, -dx) normalized."""
    delta = b - a
    return unit_vector(vec(delta[1], -delta[0]))


def round_vec(a):
    """Round each component to the nearest integer, halves towards +infinity."""
    return np.floor(a + 0.5)


def to_cell(a):
    """Rounded integer (x, y) pair used as a distance field key."""
    rounded = round_vec(a)
    return int(rounded[0]), int(rounded[1])


def equal(a, b):
    return bool(a[0] == b[0] and a[1] == b[1])


def radians_to_degrees(rad):
    return rad * 180 / math.pi


def dda_steps(diff):
    """Number of DDA steps needed to cover diff: the larger absolute component."""
    return max(abs(float(diff[0])), abs(float(diff[1])))
