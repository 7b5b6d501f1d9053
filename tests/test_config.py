"""Tests for configuration loading."""

import os

import pytest
import yaml

from strokefit.config import CurveConfig, load_config, save_default_config


class TestConfig:
    """Tests for YAML configuration."""

    def test_defaults(self):
        config = load_config(None)

        assert config.fitting.max_error == 2.0
        assert config.fitting.num_sample_points == 9
        assert config.fitting.max_iterations == 50
        assert config.distance_field.field_radius == 9
        assert config.corner.max_corner_angle == 80.0
        assert config.corner.corner_finder == "sampled"
        assert config.simplify.radial_simplification == 1.0
        assert config.tracing.enabled is False

    def test_missing_file_falls_back_to_defaults(self, temp_dir):
        config = load_config(os.path.join(temp_dir, "missing.yaml"))

        assert config == CurveConfig()

    def test_yaml_overrides(self, temp_dir):
        path = os.path.join(temp_dir, "config.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump({
                "fitting": {"max_error": 1.5, "not_a_setting": 3},
                "corner": {"corner_finder": "analytic"},
                "unknown_section": {"a": 1},
            }, f)

        config = load_config(path)

        assert config.fitting.max_error == 1.5
        assert not hasattr(config.fitting, "not_a_setting")
        assert config.corner.corner_finder == "analytic"
        assert config.fitting.max_iterations == 50

    def test_invalid_corner_finder_rejected(self, temp_dir):
        path = os.path.join(temp_dir, "config.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump({"corner": {"corner_finder": "psychic"}}, f)

        with pytest.raises(ValueError):
            load_config(path)

    def test_invalid_budget_rejected(self, temp_dir):
        path = os.path.join(temp_dir, "config.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump({"fitting": {"max_iterations": 0}}, f)

        with pytest.raises(ValueError):
            load_config(path)

    def test_saved_defaults_load_back(self, temp_dir):
        path = os.path.join(temp_dir, "defaults.yaml")

        save_default_config(path)

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        assert "file_path" not in data["tracing"]
        assert load_config(path) == CurveConfig()
