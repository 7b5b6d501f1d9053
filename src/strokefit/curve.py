"""
Incremental curve fitting for strokefit.

CurveFitter turns a stream of raw stroke samples into cubic Bezier segments,
one point at a time. Each call either extends the active segment or, after a
corner or a fit that would not converge, starts a new segment at the active
segment's end and retries the point there.
"""

from collections import Counter

from strokefit.config import CurveConfig, validate_config
from strokefit.fitting.distance_field import DistanceField
from strokefit.fitting.refiner import refine_segment
from strokefit.geometry import vecmath
from strokefit.geometry.bezier import Segment
from strokefit.models import StrokeFit, UpdateStatus, compute_bbox, generate_stroke_id
from strokefit.tracer import get_tracer, trace


class CurveNotStartedError(RuntimeError):
    """Raised when points are added before start_curve()."""


class Curve:
    """
    Ordered segments of one stroke plus the distance field of the last one.

    Only the last segment is ever modified; starting a new segment freezes
    the previous one and clears the field.
    """

    def __init__(self, anchor, field_radius):
        self.segments = [Segment(anchor)]
        self.field = DistanceField(field_radius)

    @property
    def active(self):
        return self.segments[-1]

    def start_segment(self, constrain_to=None):
        """Begin a new segment anchored at the active segment's end."""
        segment = Segment(self.active.c3, constrain_to=constrain_to)
        self.segments.append(segment)
        self.field.reset()
        return segment


class CurveFitter:
    """
    Point-at-a-time curve fitter for a single stroke.

    Not thread-safe; use one fitter per concurrent drawing session.
    """

    def __init__(self, config=None):
        self.config = validate_config(config or CurveConfig())
        self.curve = None
        self.dropped_points = 0

    def _require_curve(self):
        if self.curve is None:
            raise CurveNotStartedError("start_curve() must be called before add_to_curve()")
        return self.curve

    @property
    def active_segment(self):
        """Snapshot of the segment currently being fitted."""
        return self._require_curve().active.to_model()

    @property
    def segments(self):
        """Snapshots of every segment, oldest first."""
        return [segment.to_model() for segment in self._require_curve().segments]

    def start_curve(self, point):
        """Begin a new stroke at point."""
        anchor = vecmath.round_vec(vecmath.as_vec(point))
        self.curve = Curve(anchor, self.config.distance_field.field_radius)
        self.dropped_points = 0
        get_tracer().event("Curve started", level="DEBUG", anchor=anchor)

    def add_to_curve(self, point):
        """
        Add the next stroke sample and return the segment it landed in.

        Samples within the simplification radius of the current end are
        dropped and the active segment is returned unchanged.
        """
        curve = self._require_curve()
        rounded = vecmath.round_vec(vecmath.as_vec(point))

        if vecmath.distance(rounded, curve.active.c3) < self.config.simplify.radial_simplification:
            self.dropped_points += 1
            return curve.active.to_model()

        status = self._add_point(curve, rounded)
        if status != UpdateStatus.SUCCESS:
            # The first attempt only settled the segment; this one lands the point
            self._add_point(curve, rounded)

        return curve.active.to_model()

    def _add_point(self, curve, point):
        tracer = get_tracer()
        previous = curve.active

        if previous.update_status == UpdateStatus.FAIL_CORNER:
            # A corner gives up tangent continuity
            curve.start_segment()
            tracer.event("New segment after corner", level="DEBUG", anchor=previous.c3)
        elif previous.update_status == UpdateStatus.FAIL_MAXED:
            # Keep joining smoothly along the failed segment's exit direction
            direction = vecmath.unit_vector(previous.end_tangent())
            curve.start_segment(constrain_to=direction)
            tracer.event(
                "New constrained segment after failed fit",
                level="DEBUG",
                anchor=previous.c3,
                constrain_to=direction,
            )

        return refine_segment(curve.active, curve.field, point, self.config)


@trace(label="fit_stroke")
def fit_stroke(points, config=None):
    """
    Replay a recorded stroke through a fresh CurveFitter.

    Args:
        points: stroke samples in drawing order, each [x, y] or {"x", "y"}
        config: CurveConfig (optional)

    Returns:
        StrokeFit with the final segments and per-status counts
    """
    tracer = get_tracer()

    samples = [vecmath.as_vec(p) for p in points]
    stroke_id = generate_stroke_id([s.tolist() for s in samples])
    if not samples:
        return StrokeFit(stroke_id=stroke_id)

    fitter = CurveFitter(config)
    fitter.start_curve(samples[0])
    for sample in samples[1:]:
        fitter.add_to_curve(sample)

    segments = fitter.segments
    status_counts = Counter(segment.update_status.value for segment in segments)

    control_points = []
    for segment in segments:
        control_points.extend([segment.c0, segment.c1, segment.c2, segment.c3])

    tracer.event(
        f"Fitted {len(segments)} segments from {len(samples)} points",
        dropped=fitter.dropped_points,
    )

    return StrokeFit(
        stroke_id=stroke_id,
        segments=segments,
        point_count=len(samples),
        dropped_points=fitter.dropped_points,
        status_counts=dict(sorted(status_counts.items())),
        bbox=compute_bbox(control_points),
    )
