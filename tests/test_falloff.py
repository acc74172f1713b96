"""Tests for the falloff weighting functions."""

import numpy as np
import pytest

from terrainbuilder.falloff import (
    FalloffStyle, lerp, clamp_weight, range_factor, weight, radial_mask,
    box_mask, distances,
)


def test_lerp_endpoints_and_overshoot():
    assert lerp(2.0, 6.0, 0.0) == 2.0
    assert lerp(2.0, 6.0, 1.0) == 6.0
    assert lerp(0.0, 10.0, 1.5) == 15.0
    np.testing.assert_allclose(lerp(np.zeros(3), np.full(3, 4.0), np.array([0, 0.5, 1])),
                               [0.0, 2.0, 4.0])


class TestClampWeight:

    def test_linear_then_clamped(self):
        np.testing.assert_allclose(
            clamp_weight(np.array([0.0, 0.5, 1.0, 3.0]), 1.0),
            [0.0, 0.5, 1.0, 1.0])

    def test_scalar(self):
        assert clamp_weight(1.0, 4.0) == 0.25

    def test_zero_falloff_is_hard_edge(self):
        np.testing.assert_array_equal(clamp_weight(np.array([0.0, 0.01, 2.0]), 0.0),
                                      [0.0, 1.0, 1.0])

    def test_negative_falloff_gives_no_weight(self):
        assert clamp_weight(2.0, -1.0) == 0.0
        np.testing.assert_array_equal(clamp_weight(np.array([0.0, 0.5, 3.0]), -2.0),
                                      [0.0, 0.0, 0.0])


class TestRangeFactor:

    def test_formula(self):
        assert range_factor(1.0, 2.0, 1.0) == 0.5
        assert range_factor(1.0, 4.0, 2.0) == 0.5

    def test_not_clamped_by_default(self):
        assert range_factor(1.0, 2.0, 4.0) == 2.0

    def test_clamp_option(self):
        assert range_factor(1.0, 2.0, 4.0, clamp=True) == 1.0

    def test_zero_at_center(self):
        assert range_factor(0.0, 2.0, 1.0) == 0.0


def test_weight_dispatch():
    assert weight(1.0, 2.0, 4.0, FalloffStyle.range) == 2.0
    assert weight(1.0, 2.0, 4.0, "clamp") == 0.25
    with pytest.raises(ValueError):
        weight(1.0, 2.0, 1.0, "gaussian")


class TestSelection:

    @pytest.fixture
    def positions(self):
        return np.array([
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [2.0, 0.0, 0.0],
            [0.0, 3.0, 4.0],
        ])

    def test_distances(self, positions):
        np.testing.assert_allclose(distances(positions, (0, 0, 0)), [0, 1, 2, 5])

    def test_radial_is_strict(self, positions):
        idx, d = radial_mask(positions, (0, 0, 0), 2.0)
        np.testing.assert_array_equal(idx, [0, 1])
        np.testing.assert_allclose(d, [0.0, 1.0])

    @pytest.mark.parametrize("range_", [0.0, -1.0])
    def test_non_positive_range_selects_nothing(self, positions, range_):
        idx, _ = radial_mask(positions, (0, 0, 0), range_)
        assert idx.size == 0

    def test_box_is_inclusive(self, positions):
        idx = box_mask(positions, (0, 0, 0), (1, 0, 0))
        np.testing.assert_array_equal(idx, [0, 1])

    def test_box_tests_all_axes(self, positions):
        idx = box_mask(positions, (-1, -1, -1), (5, 5, 3))
        np.testing.assert_array_equal(idx, [0, 1, 2])
