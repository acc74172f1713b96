"""Tests for fan and grid triangulation."""

import numpy as np
import pytest

from terrainbuilder import HeightGrid
from terrainbuilder.errors import InsufficientPointsError, DegenerateGridError
from terrainbuilder.geometry import (
    build_from_points, build_from_height_grid, build_from_heightmap,
)


class TestFanTriangulation:

    @pytest.fixture
    def points(self):
        return [(0, 0, 0), (1, 0, 0), (1, 1, 1), (0, 2, 1), (-1, 0, 2)]

    def test_index_count(self, points):
        buffers = build_from_points(points)
        assert buffers.triangles.shape == ((len(points) - 2) * 3,)

    def test_every_triangle_contains_first_vertex(self, points):
        faces = build_from_points(points).faces
        assert np.all(faces[:, 0] == 0)
        expected = [[0, i, i + 1] for i in range(1, len(points) - 1)]
        np.testing.assert_array_equal(faces, expected)

    def test_planar_uvs(self, points):
        buffers = build_from_points(points)
        np.testing.assert_array_equal(buffers.uvs, np.asarray(points, float)[:, [0, 2]])
        np.testing.assert_array_equal(buffers.vertices, np.asarray(points, float))

    def test_three_points_single_triangle(self):
        buffers = build_from_points([(0, 0, 0), (1, 0, 0), (0, 0, 1)])
        np.testing.assert_array_equal(buffers.triangles, [0, 1, 2])

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_too_few_points(self, count):
        with pytest.raises(InsufficientPointsError) as exc:
            build_from_points([(i, 0, 0) for i in range(count)])
        assert exc.value.count == count
        assert isinstance(exc.value, ValueError)


class TestGridTriangulation:

    def test_index_count(self):
        buffers = build_from_height_grid(4, 3, lambda x, z: 0.0, 1.0)
        assert len(buffers.vertices) == 12
        assert buffers.triangles.shape == ((4 - 1) * (3 - 1) * 6,)

    def test_quads_share_diagonal(self):
        width, height = 4, 3
        faces = build_from_height_grid(width, height, lambda x, z: 0.0, 1.0).faces
        quads = [z * width + x for z in range(height - 1) for x in range(width - 1)]
        for k, v in enumerate(quads):
            first, second = faces[2 * k], faces[2 * k + 1]
            np.testing.assert_array_equal(first, [v, v + width, v + 1])
            np.testing.assert_array_equal(second, [v + 1, v + width, v + width + 1])
            assert {v + 1, v + width} <= set(first) & set(second)

    def test_vertex_positions(self):
        buffers = build_from_height_grid(
            2, 2, lambda x, z: 1.0 if x == 1 else 0.0, 5.0)
        # scale = world_size / width = 10 / 2
        np.testing.assert_allclose(buffers.vertices, [
            [0.0, 0.0, 0.0],
            [5.0, 5.0, 0.0],
            [0.0, 0.0, 5.0],
            [5.0, 5.0, 5.0],
        ])

    def test_non_square_scale(self):
        buffers = build_from_height_grid(4, 2, lambda x, z: 0.0, 1.0)
        assert buffers.vertices[1, 0] == pytest.approx(10.0 / 4)
        assert buffers.vertices[4, 2] == pytest.approx(10.0 / 2)

    def test_custom_world_size(self):
        buffers = build_from_height_grid(2, 2, lambda x, z: 0.0, 1.0, world_size=4.0)
        assert buffers.vertices[3, 0] == pytest.approx(2.0)
        assert buffers.uvs[3] == pytest.approx((0.5, 0.5))

    def test_uvs_normalized_by_world_size(self):
        buffers = build_from_height_grid(5, 5, lambda x, z: 0.3, 2.0)
        np.testing.assert_allclose(buffers.uvs, buffers.vertices[:, [0, 2]] / 10.0)

    @pytest.mark.parametrize("width,height", [(1, 5), (5, 1), (0, 0), (1, 1)])
    def test_degenerate_grid(self, width, height):
        with pytest.raises(DegenerateGridError):
            build_from_height_grid(width, height, lambda x, z: 0.0, 1.0)

    def test_heightmap_matches_sampler(self):
        rng = np.random.default_rng(7)
        grid = HeightGrid(rng.random((4, 6)))
        direct = build_from_heightmap(grid, 3.0)
        sampled = build_from_height_grid(grid.width, grid.height, grid.sample, 3.0)
        np.testing.assert_allclose(direct.vertices, sampled.vertices)
        np.testing.assert_array_equal(direct.triangles, sampled.triangles)

    def test_heightmap_degenerate(self):
        with pytest.raises(DegenerateGridError):
            build_from_heightmap(HeightGrid.flat(1, 4), 1.0)
