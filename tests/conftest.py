"""Shared fixtures for the terrainbuilder tests."""

import numpy as np
import pytest

from terrainbuilder import MeshPointStore, TerrainEditor, TerrainSettings
from terrainbuilder.geometry import build_from_height_grid


@pytest.fixture
def settings():
    return TerrainSettings(world_size=10.0, neighbor_radius=0.1,
                           stamp_texel_scale=None, clamp_factor=False)


@pytest.fixture
def flat_grid():
    """3x3 grid terrain from an all-zero sampler with max height 5."""
    return build_from_height_grid(3, 3, lambda x, z: 0.0, 5.0)


@pytest.fixture
def grid_store(flat_grid):
    return MeshPointStore(flat_grid.vertices, uvs=flat_grid.uvs)


@pytest.fixture
def grid_editor(grid_store, settings):
    return TerrainEditor(grid_store, settings)


@pytest.fixture
def make_editor(settings):
    """Factory: (store, editor) over an explicit vertex list."""
    def _make(vertices, editor_settings=None, **attrs):
        store = MeshPointStore(np.asarray(vertices, dtype=np.float64), **attrs)
        return store, TerrainEditor(store, editor_settings or settings)
    return _make
