"""
Configuration management for strokefit.

Loads YAML configuration with the tuned defaults for every fitting stage.
The numeric defaults were tuned together; changing one usually shifts where
the others sit.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


@dataclass
class FittingConfig:
    """Configuration for the iterative control point refiner."""
    # Mean squared distance (px^2) below which a fit is accepted. Lower values
    # give tighter curves and more segments.
    max_error: float = 2.0
    # Samples taken along the curve per iteration, at t = i / n for i < n.
    num_sample_points: int = 9
    # Refinement steps before giving up and splitting the curve.
    max_iterations: int = 50
    # Control point step is force * step_scale / num_sample_points.
    step_scale: float = 6.0
    # Weight samples near both ends and pull controls towards the chord
    # midpoint; reduces hooking at the ends of the curve.
    use_end_forces: bool = True
    end_weight: float = 10.0
    end_band: float = 0.1  # t < end_band or t > 1 - end_band
    damping: float = 0.03


@dataclass
class DistanceFieldConfig:
    """Configuration for the vector distance field."""
    # Half-width (px) of the painted corridor and the "no data" distance.
    field_radius: int = 9


@dataclass
class CornerConfig:
    """Configuration for corner detection."""
    # Angle (degrees) between the backwards exit tangent and the new
    # direction below which the point starts a new segment.
    max_corner_angle: float = 80.0
    # "sampled": tangent from B(tangent_sample_t) to the end point.
    # "analytic": derivative 3 * (c2 - c3) at the end point.
    corner_finder: str = "sampled"
    tangent_sample_t: float = 0.95


@dataclass
class SimplifyConfig:
    """Configuration for input point simplification."""
    # Points closer than this (px) to the current end are dropped.
    radial_simplification: float = 1.0


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class CurveConfig:
    """Complete curve fitter configuration."""
    fitting: FittingConfig = field(default_factory=FittingConfig)
    distance_field: DistanceFieldConfig = field(default_factory=DistanceFieldConfig)
    corner: CornerConfig = field(default_factory=CornerConfig)
    simplify: SimplifyConfig = field(default_factory=SimplifyConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("fitting", "distance_field", "corner", "simplify", "tracing")

CORNER_FINDERS = ("sampled", "analytic")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = CurveConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    validate_config(config)
    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section_name in SECTIONS:
        values = yaml_data.get(section_name)
        if not isinstance(values, dict):
            continue

        section = getattr(config, section_name)
        for key, value in values.items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def validate_config(config):
    """Reject settings the fitter cannot run with."""
    if config.fitting.num_sample_points < 1:
        raise ValueError("fitting.num_sample_points must be at least 1")
    if config.fitting.max_iterations < 1:
        raise ValueError("fitting.max_iterations must be at least 1")
    if config.distance_field.field_radius < 1:
        raise ValueError("distance_field.field_radius must be at least 1")
    if config.corner.corner_finder not in CORNER_FINDERS:
        raise ValueError(
            f"corner.corner_finder must be one of {CORNER_FINDERS}, "
            f"got {config.corner.corner_finder!r}"
        )
    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = CurveConfig()

    yaml_data = asdict(config)
    # file_path is chosen per run on the command line
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
