"""Tests for height grid sampling and image decoding."""

import numpy as np
import pytest
from PIL import Image

from terrainbuilder import HeightGrid


@pytest.fixture
def ramp():
    # values[z, x] = x / 10 + z
    z, x = np.mgrid[0:3, 0:4]
    return x / 10.0 + z


class TestSampling:

    def test_dimensions(self, ramp):
        grid = HeightGrid(ramp)
        assert (grid.width, grid.height) == (4, 3)

    def test_sample_indexes_x_then_z(self, ramp):
        grid = HeightGrid(ramp)
        assert grid.sample(2, 1) == pytest.approx(1.2)
        assert grid(3, 0) == pytest.approx(0.3)

    def test_clamp_mode(self, ramp):
        grid = HeightGrid(ramp)
        assert grid.sample(-5, 0) == grid.sample(0, 0)
        assert grid.sample(99, 99) == grid.sample(3, 2)

    def test_repeat_mode(self, ramp):
        grid = HeightGrid(ramp, wrap_mode='repeat')
        assert grid.sample(4, 0) == grid.sample(0, 0)
        assert grid.sample(-1, -1) == grid.sample(3, 2)

    def test_sample_many(self, ramp):
        grid = HeightGrid(ramp)
        np.testing.assert_allclose(grid.sample_many([0, 1, 10], [0, 2, 1]),
                                   [0.0, 2.1, 1.3])

    def test_flat(self):
        grid = HeightGrid.flat(5, 2, 0.25)
        assert grid.values.shape == (2, 5)
        assert np.all(grid.values == 0.25)

    def test_rejects_bad_input(self):
        with pytest.raises(ValueError):
            HeightGrid(np.zeros(4))
        with pytest.raises(ValueError):
            HeightGrid(np.zeros((2, 2)), wrap_mode='mirror')


class TestFromImage:

    def test_bottom_row_is_z_zero(self):
        pixels = np.array([[255, 255, 255],
                           [0, 0, 0]], dtype=np.uint8)
        grid = HeightGrid.from_image(Image.fromarray(pixels))
        assert (grid.width, grid.height) == (3, 2)
        np.testing.assert_allclose(grid.values[0], 0.0)
        np.testing.assert_allclose(grid.values[1], 1.0)

    def test_luma_weights(self, tmp_path):
        rgb = np.zeros((2, 2, 3), dtype=np.uint8)
        rgb[..., 1] = 255
        path = tmp_path / "green.png"
        Image.fromarray(rgb).save(path)
        grid = HeightGrid.from_image(path)
        np.testing.assert_allclose(grid.values, 0.587)

    def test_wrap_mode_passthrough(self):
        img = Image.new("L", (2, 2), 128)
        grid = HeightGrid.from_image(img, wrap_mode='repeat')
        assert grid.wrap_mode == 'repeat'
        assert grid.sample(0, 0) == pytest.approx(128 / 255.0)
