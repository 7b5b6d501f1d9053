"""
Corner detection for strokefit.

A point is a corner when the direction from the segment's end towards it
turns back too sharply against the curve's exit direction to keep fitting a
single cubic.
"""

import math

from strokefit.geometry import vecmath


def exit_tangent(segment, corner_config):
    """
    Unit vector pointing from the segment's end back into the curve.

    "sampled" looks from the end point to B(tangent_sample_t), which follows
    the drawn shape near the end more closely than the analytic derivative.
    Returns None when the direction is undefined.
    """
    if corner_config.corner_finder == "analytic":
        return vecmath.unit_vector(segment.end_tangent())

    near_end = segment.point_at(corner_config.tangent_sample_t)
    return vecmath.unit_vector(vecmath.subtract(near_end, segment.c3))


def corner_angle(segment, point, corner_config):
    """
    Angle in degrees between the exit tangent and the direction to point.

    180 means the point continues straight on; 0 means it doubles back.
    None when either direction is undefined.
    """
    tangent = exit_tangent(segment, corner_config)
    heading = vecmath.unit_vector(vecmath.subtract(point, segment.c3))
    if tangent is None or heading is None:
        return None

    # Both are unit vectors, so the dot product is cos(angle)
    cos_angle = max(-1.0, min(1.0, vecmath.dot(tangent, heading)))
    return vecmath.radians_to_degrees(math.acos(cos_angle))


def is_corner(segment, point, corner_config):
    """Whether point turns too sharply to extend segment."""
    if segment.is_degenerate():
        return False

    angle = corner_angle(segment, point, corner_config)
    if angle is None:
        return False

    return angle < corner_config.max_corner_angle
