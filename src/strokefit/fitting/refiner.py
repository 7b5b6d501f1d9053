"""
Iterative control point refinement for strokefit.

Implements a modified version of the force-directed fitting from
"Efficient Curve Fitting" (S. Frisken, Journal of Graphics Tools 13(2), 2008):
the two interior control points are pushed by forces sampled from the vector
distance field until the curve lies close enough to the drawn path, or an
iteration budget runs out and the attempt is rolled back.
"""

from strokefit.fitting.corners import is_corner
from strokefit.geometry import vecmath
from strokefit.models import UpdateStatus
from strokefit.tracer import get_tracer


def sample_parameters(num_sample_points):
    """Curve parameters sampled each iteration: i / n for i in 0..n-1."""
    return [i / num_sample_points for i in range(num_sample_points)]


def compute_forces(segment, field, fitting):
    """
    Forces on c1 and c2 from the distance field.

    Each sample's offset from the path is weighted by its distance and by the
    Bernstein weight of the control point it acts on. With end forces on,
    samples near either end count end_weight times, and both forces are
    pulled towards the chord midpoint by damping.
    """
    f1 = vecmath.vec(0, 0)
    f2 = vecmath.vec(0, 0)

    for t in sample_parameters(fitting.num_sample_points):
        offset = field.query(segment.point_at(t))
        d = vecmath.magnitude(offset)

        weight = 1
        if fitting.use_end_forces and (t < fitting.end_band or t > 1 - fitting.end_band):
            weight = fitting.end_weight

        f1 = f1 + t * (1 - t) ** 2 * d * offset * weight
        f2 = f2 + t ** 2 * (1 - t) * d * offset * weight

    if fitting.use_end_forces:
        midpoint = segment.chord_midpoint()
        f1 = vecmath.subtract(f1, vecmath.scale(vecmath.subtract(midpoint, segment.c1), fitting.damping))
        f2 = vecmath.subtract(f2, vecmath.scale(vecmath.subtract(midpoint, segment.c2), fitting.damping))

    # c1 may only slide along the tangent inherited from the previous segment
    if segment.constrain_to is not None:
        f1 = vecmath.scale(segment.constrain_to, vecmath.dot(segment.constrain_to, f1))

    return f1, f2


def measure_error(segment, field, num_sample_points):
    """Mean squared distance from the sampled curve to the drawn path."""
    total = 0.0
    for t in sample_parameters(num_sample_points):
        total += vecmath.sum_of_squares(field.query(segment.point_at(t)))
    return total / num_sample_points


def refine_segment(segment, field, point, config):
    """
    Try to extend segment to end at point.

    Sets and returns segment.update_status:
      FAIL_CORNER  point turns too sharply; nothing was changed.
      FAIL_MAXED   no fit within max_iterations; segment rolled back to its
                   state before this call.
      SUCCESS      segment now ends at point with error below max_error.
    """
    tracer = get_tracer()
    fitting = config.fitting

    if is_corner(segment, point, config.corner):
        segment.update_status = UpdateStatus.FAIL_CORNER
        tracer.event("Corner detected", level="DEBUG", at=segment.c3, point=point)
        return segment.update_status

    original = segment.snapshot()
    last_point = segment.c3.copy()

    # First guess: keep the shape, move the end and its control point together
    segment.c3 = point.copy()
    segment.c2 = segment.c2 + point - last_point

    field.paint_strip(last_point, point)
    field.paint_end_cap(point)

    step_size = fitting.step_scale / fitting.num_sample_points
    converged = False
    for step in range(1, fitting.max_iterations + 1):
        f1, f2 = compute_forces(segment, field, fitting)
        segment.c1 = vecmath.subtract(segment.c1, vecmath.scale(f1, step_size))
        segment.c2 = vecmath.subtract(segment.c2, vecmath.scale(f2, step_size))

        segment.error = measure_error(segment, field, fitting.num_sample_points)
        segment.iterations = step

        if segment.error < fitting.max_error:
            converged = True
            break

    if not converged:
        tracer.event(
            "Iteration budget exhausted",
            level="DEBUG",
            point=point,
            error=segment.error,
            iterations=fitting.max_iterations,
        )
        segment.restore(original)
        segment.update_status = UpdateStatus.FAIL_MAXED
        return segment.update_status

    segment.update_status = UpdateStatus.SUCCESS
    return segment.update_status
