"""Vertex, triangle and UV buffers for fan meshes and height grids.

Provides functions for:
1. Fan triangulation of an ordered point set
2. Regular grid triangulation of a height grid sampler
"""

import logging

import numpy as np

from .constants import WORLD_SIZE
from .errors import InsufficientPointsError, DegenerateGridError
from .models import GeometryBuffers

logger = logging.getLogger(__name__)


def fan_triangles(num_points: int) -> np.ndarray:
    """Flat index list for a fan around vertex 0: (0, i, i+1) for i in 1..n-2."""
    i = np.arange(1, num_points - 1, dtype=np.int64)
    tris = np.column_stack([np.zeros_like(i), i, i + 1])
    return tris.ravel()


def grid_triangles(width: int, height: int) -> np.ndarray:
    """Flat index list, two triangles per grid cell sharing edge (v+1, v+width)."""
    iz_g, ix_g = np.meshgrid(
        np.arange(height - 1), np.arange(width - 1), indexing='ij')
    v = (iz_g * width + ix_g).ravel().astype(np.int64)

    # Per cell: (v, v+w, v+1) then (v+1, v+w, v+w+1)
    cells = np.column_stack([
        v, v + width, v + 1,
        v + 1, v + width, v + width + 1,
    ])
    return cells.ravel()


def build_from_points(points) -> GeometryBuffers:
    """Build a fan mesh from an ordered point set.

    The points must already admit a fan triangulation around the first
    point; no convexity check is made.  UVs are the planar (x, z)
    projection of each vertex.
    """
    vertices = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    n = len(vertices)
    if n < 3:
        raise InsufficientPointsError(n)

    triangles = fan_triangles(n)
    uvs = vertices[:, [0, 2]].copy()

    logger.debug(f"Fan mesh: {n} verts, {len(triangles) // 3} triangles")
    return GeometryBuffers(vertices, triangles, uvs)


def _grid_buffers(elev_2d, world_size):
    height, width = elev_2d.shape
    scale_x = world_size / width
    scale_z = world_size / height

    # Vertex z*width + x sits at grid column x, row z
    zz, xx = np.meshgrid(np.arange(height), np.arange(width), indexing='ij')
    vertices = np.empty((width * height, 3), dtype=np.float64)
    vertices[:, 0] = xx.ravel() * scale_x
    vertices[:, 1] = elev_2d.ravel()
    vertices[:, 2] = zz.ravel() * scale_z

    triangles = grid_triangles(width, height)
    uvs = vertices[:, [0, 2]] / world_size

    logger.info(f"Terrain grid mesh: {width}x{height}, {len(vertices)} verts, "
                f"{len(triangles) // 3} triangles")
    return GeometryBuffers(vertices, triangles, uvs)


def build_from_height_grid(width: int, height: int, sample, max_height: float,
                           world_size: float = WORLD_SIZE) -> GeometryBuffers:
    """Build a regular grid mesh from a height sampler.

    Parameters
    ----------
    width, height : int — number of samples along x and z (both >= 2)
    sample : callable(x, z) -> float in [0, 1]
    max_height : float — height of a sample value of 1
    world_size : float — extent scale; cell size is world_size / width
        along x and world_size / height along z

    Returns
    -------
    GeometryBuffers — vertex z*width + x holds sample (x, z)
    """
    if width < 2 or height < 2:
        raise DegenerateGridError(width, height)

    elev = np.array([[sample(x, z) for x in range(width)]
                     for z in range(height)], dtype=np.float64)
    return _grid_buffers(elev * max_height, world_size)


def build_from_heightmap(heightmap, max_height: float,
                         world_size: float = WORLD_SIZE) -> GeometryBuffers:
    """Grid mesh straight from a :class:`HeightGrid`'s sample array."""
    if heightmap.width < 2 or heightmap.height < 2:
        raise DegenerateGridError(heightmap.width, heightmap.height)
    return _grid_buffers(heightmap.values * max_height, world_size)
