"""
Cubic Bezier segment model for strokefit.

Segment is the mutable working state the fitter refines in place. Callers
only ever see CurveSegment snapshots produced by Segment.to_model().
"""

import numpy as np

from strokefit.geometry import vecmath
from strokefit.models import CurveSegment, UpdateStatus


def _bernstein(i, t):
    """Compute Bernstein basis polynomial value B_i,3(t)."""
    if i == 0:
        return (1 - t) ** 3
    elif i == 1:
        return 3 * t * (1 - t) ** 2
    elif i == 2:
        return 3 * t ** 2 * (1 - t)
    else:
        return t ** 3


class Segment:
    """A cubic Bezier segment being fitted to incoming points."""

    def __init__(self, anchor, constrain_to=None):
        anchor = np.array(anchor, dtype=float)
        self.c0 = anchor.copy()
        self.c1 = anchor.copy()
        self.c2 = anchor.copy()
        self.c3 = anchor.copy()
        self.constrain_to = None if constrain_to is None else np.array(constrain_to, dtype=float)
        self.error = 0.0
        self.update_status = UpdateStatus.UNSET
        self.iterations = 0

    @property
    def end_point(self):
        return self.c3

    def is_degenerate(self):
        """True while the segment has not absorbed any point yet."""
        return vecmath.equal(self.c0, self.c3)

    def point_at(self, t):
        """Evaluate the curve at parameter t."""
        return (
            _bernstein(0, t) * self.c0
            + _bernstein(1, t) * self.c1
            + _bernstein(2, t) * self.c2
            + _bernstein(3, t) * self.c3
        )

    def end_tangent(self):
        """Derivative at t=1 reversed, 3 * (c2 - c3); points back into the curve."""
        return 3 * (self.c2 - self.c3)

    def chord_midpoint(self):
        """Midpoint of the straight line from c0 to c3."""
        return vecmath.add(vecmath.divide(vecmath.subtract(self.c3, self.c0), 2), self.c0)

    def snapshot(self):
        """Capture everything a failed refinement has to roll back."""
        return {
            "c0": self.c0.copy(),
            "c1": self.c1.copy(),
            "c2": self.c2.copy(),
            "c3": self.c3.copy(),
            "constrain_to": None if self.constrain_to is None else self.constrain_to.copy(),
            "error": self.error,
            "update_status": self.update_status,
            "iterations": self.iterations,
        }

    def restore(self, state):
        """Restore a snapshot taken with snapshot()."""
        self.c0 = state["c0"].copy()
        self.c1 = state["c1"].copy()
        self.c2 = state["c2"].copy()
        self.c3 = state["c3"].copy()
        self.constrain_to = None if state["constrain_to"] is None else state["constrain_to"].copy()
        self.error = state["error"]
        self.update_status = state["update_status"]
        self.iterations = state["iterations"]

    def to_model(self):
        """Copy of the current state as a CurveSegment."""
        return CurveSegment(
            c0=self.c0.tolist(),
            c1=self.c1.tolist(),
            c2=self.c2.tolist(),
            c3=self.c3.tolist(),
            constrain_to=None if self.constrain_to is None else self.constrain_to.tolist(),
            error=float(self.error),
            update_status=self.update_status,
            iterations=self.iterations,
        )

    def trace_summary(self):
        return (
            f"Segment(c0={self.c0.tolist()},c3={self.c3.tolist()},"
            f"status={self.update_status.value},error={self.error:.3g})"
        )


def evaluate_bezier(segment, t):
    """Evaluate a CurveSegment snapshot at parameter t."""
    c0 = np.array(segment.c0)
    c1 = np.array(segment.c1)
    c2 = np.array(segment.c2)
    c3 = np.array(segment.c3)

    return (
        _bernstein(0, t) * c0 + _bernstein(1, t) * c1 + _bernstein(2, t) * c2 + _bernstein(3, t) * c3
    ).tolist()
