"""Tests for engine configuration and world bounds."""

import dataclasses

import numpy as np
import pytest

from lander.config import DEFAULT_CONFIG, GuidanceConfig
from lander.environment import MARS_GRAVITY, WORLD_HEIGHT, WORLD_WIDTH, WorldBounds
from lander.exceptions import (
    DegenerateGeometry,
    GuidanceError,
    GuidanceTimeout,
    NoLandingZone,
    PredictionDivergence,
)

# =============================================================================
# GuidanceConfig Tests
# =============================================================================


class TestGuidanceConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        config = GuidanceConfig()
        assert config.gravity == MARS_GRAVITY
        assert config.bounds == WorldBounds(WORLD_WIDTH, WORLD_HEIGHT)
        assert config.landing_margin == 100.0
        assert config.hover_margin == 150.0
        assert config.damping == 0.9
        assert config.command_power == 4.0
        assert config.proximity_tolerance == 50.0
        assert np.isclose(config.max_step_angle, np.radians(15.0))
        assert np.isclose(config.heading_tolerance, np.radians(2.0))
        assert DEFAULT_CONFIG == config

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.damping = 0.5

    @pytest.mark.parametrize(
        "overrides",
        [
            {"damping": 1.0},
            {"damping": -0.1},
            {"max_step_angle": 0.0},
            {"max_step_angle": 4.0},
            {"command_power": 4.5},
            {"heading_tolerance": -0.1},
            {"heading_tolerance": 4.0},
            {"proximity_tolerance": 0.0},
            {"landing_margin": -1.0},
            {"hover_margin": -1.0},
            {"max_leg_iterations": 0},
            {"max_prediction_steps": 0},
            {"gravity": -3.711},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValueError):
            GuidanceConfig(**overrides)

    def test_replace(self):
        config = dataclasses.replace(DEFAULT_CONFIG, hover_margin=300.0)
        assert config.hover_margin == 300.0
        assert config.damping == DEFAULT_CONFIG.damping


# =============================================================================
# World Bounds Tests
# =============================================================================


class TestWorldBounds:
    """Test the world box."""

    def test_contains_edges(self):
        bounds = WorldBounds()
        assert bounds.contains(0.0, 0.0)
        assert bounds.contains(7000.0, 3000.0)
        assert not bounds.contains(7000.1, 100.0)
        assert not bounds.contains(100.0, -0.1)

    def test_invalid_extent(self):
        with pytest.raises(ValueError):
            WorldBounds(0.0, 3000.0)


# =============================================================================
# Error Hierarchy Tests
# =============================================================================


class TestErrors:
    """Test the exception hierarchy."""

    def test_all_are_guidance_errors(self):
        for exc in (DegenerateGeometry, NoLandingZone, PredictionDivergence, GuidanceTimeout):
            assert issubclass(exc, GuidanceError)

    def test_degenerate_geometry_is_value_error(self):
        assert issubclass(DegenerateGeometry, ValueError)

    def test_timeout_message(self):
        err = GuidanceTimeout(0.25, 0.1)
        assert "250.0 ms" in str(err)
        assert err.budget == 0.1
