"""
Pydantic data models for strokefit.

Segments handed back to callers are snapshots expressed as these validated
models; the fitter's mutable working state lives in strokefit.geometry.bezier.
Content-based ID generation provides deterministic outputs.
"""

import hashlib
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UpdateStatus(str, Enum):
    """Outcome of the most recent attempt to add a point to a segment."""
    UNSET = "unset"
    SUCCESS = "success"
    FAIL_CORNER = "fail_corner"
    FAIL_MAXED = "fail_maxed"


class Point(BaseModel):
    """A raw input sample."""
    x: float
    y: float

    model_config = ConfigDict(extra="forbid")


class CurveSegment(BaseModel):
    """A single cubic Bezier segment of a fitted curve."""
    c0: List[float] = Field(..., min_length=2, max_length=2)  # start anchor
    c1: List[float] = Field(..., min_length=2, max_length=2)  # control point 1
    c2: List[float] = Field(..., min_length=2, max_length=2)  # control point 2
    c3: List[float] = Field(..., min_length=2, max_length=2)  # end anchor
    constrain_to: Optional[List[float]] = None  # unit vector c1 may move along
    error: float = 0.0
    update_status: UpdateStatus = UpdateStatus.UNSET
    iterations: int = 0

    model_config = ConfigDict(extra="forbid")


class StrokeFit(BaseModel):
    """Result of replaying one recorded stroke through a fitter."""
    stroke_id: str
    segments: List[CurveSegment] = Field(default_factory=list)
    point_count: int = 0
    dropped_points: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    bbox: List[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])

    model_config = ConfigDict(extra="forbid")

    @property
    def segment_count(self):
        return len(self.segments)

    @property
    def mean_error(self):
        """Mean fit error over all segments."""
        if not self.segments:
            return 0.0
        return sum(s.error for s in self.segments) / len(self.segments)


def generate_stroke_id(points, round_digits=2):
    """
    Generate deterministic stroke ID from input coordinates.

    Rounds coordinates to avoid floating point instability.
    """
    if not points:
        return "stroke_empty"

    rounded = [[round(float(p[0]), round_digits), round(float(p[1]), round_digits)] for p in points]
    h = hashlib.sha256(str(rounded).encode()).hexdigest()[:12]
    return f"stroke_{h}"


def compute_bbox(points):
    """
    Compute bounding box from a list of [x, y] points.

    Returns [min_x, min_y, max_x, max_y].
    """
    if not points:
        return [0.0, 0.0, 0.0, 0.0]

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return [min(xs), min(ys), max(xs), max(ys)]
