"""Falloff-weighted terrain deformations on a :class:`MeshPointStore`.

Radial operations select points with ``distance(center, point) < range``
and move them toward a target with ``lerp(current, target, factor)``,
where ``factor = distance / range * falloff``.  The factor is 0 at the
edit center and is not clamped unless ``TerrainSettings.clamp_factor`` is
set.  Every write marks the point dirty; call ``TerrainMesh.commit()``
after a batch of edits.
"""

import logging

import numpy as np

from .errors import NoPointsInRadiusError
from .falloff import (
    lerp, distances, clamp_weight, range_factor, radial_mask, box_mask,
)
from .models import TerrainSettings

logger = logging.getLogger(__name__)

UP = (0.0, 1.0, 0.0)


class TerrainEditor:
    """Deformation and query operations bound to one point store."""

    def __init__(self, points, settings: TerrainSettings = None):
        self.points = points
        self.settings = settings or TerrainSettings()

    def _factor(self, distance, range_, falloff):
        return range_factor(distance, range_, falloff,
                            clamp=self.settings.clamp_factor)

    def _texels(self, positions):
        scale = self.settings.stamp_texel_scale
        # Truncate toward zero like an integer cast
        xs = np.trunc(positions[:, 0] * scale).astype(np.intp)
        zs = np.trunc(positions[:, 2] * scale).astype(np.intp)
        return xs, zs

    # ── Queries ─────────────────────────────────────────────────────────

    def get_average_height(self, position) -> float:
        """Mean height of the points within the neighbour radius of ``position``."""
        radius = self.settings.neighbor_radius
        positions = self.points.positions
        near = distances(positions, position) < radius
        count = int(near.sum())
        if count == 0:
            raise NoPointsInRadiusError(position, radius)
        return float(positions[near, 1].sum() / count)

    # ── Box transform ───────────────────────────────────────────────────

    def transform_in_range(self, min_point, max_point, offset, falloff) -> int:
        """Offset points inside the box, weighted by distance from ``min_point``.

        A point at ``min_point`` gets no offset; points ``falloff`` or more
        away get the full ``offset``.  Points outside the box are untouched.
        """
        positions = self.points.positions
        idx = box_mask(positions, min_point, max_point)
        if idx.size == 0:
            return 0

        sel = positions[idx]
        w = clamp_weight(distances(sel, min_point), falloff)
        offset = np.asarray(offset, dtype=np.float64)
        self.points.set_positions(idx, sel + offset * w[:, None])

        logger.debug(f"transform_in_range: moved {idx.size} points")
        return int(idx.size)

    def raise_in_range(self, min_point, max_point, falloff) -> int:
        """Raise the points in the box by up to one unit."""
        return self.transform_in_range(min_point, max_point, UP, falloff)

    # ── Smoothing ───────────────────────────────────────────────────────

    def smooth(self, iterations: int = 1) -> int:
        """Replace each point's height with its neighbourhood average.

        Points are updated in index order, so later points already see the
        new heights of earlier ones.
        """
        n = len(self.points)
        for _ in range(iterations):
            for i in range(n):
                p = self.points.positions[i].copy()
                self.points.set_axis(i, 1, self.get_average_height(p))
        logger.debug(f"smooth: {iterations} iteration(s) over {n} points")
        return n if iterations > 0 else 0

    def smooth_point(self, position):
        """Return ``position`` with its height replaced by the local average.

        The store is not modified.  With no neighbours the position comes
        back unchanged.
        """
        x, y, z = (float(c) for c in position)
        try:
            y = self.get_average_height((x, y, z))
        except NoPointsInRadiusError:
            logger.debug(f"smooth_point: no neighbours near {(x, y, z)}")
        return (x, y, z)

    def smooth_range(self, position, range_, falloff) -> int:
        """Blend the points around ``position`` toward their local averages."""
        center = np.asarray(position, dtype=np.float64)
        count = 0
        for i in range(len(self.points)):
            p = self.points.positions[i].copy()
            distance = float(np.linalg.norm(center - p))
            if distance < range_:
                target = self.get_average_height(p)
                factor = self._factor(distance, range_, falloff)
                self.points.set_axis(i, 1, lerp(p[1], target, factor))
                count += 1
        logger.debug(f"smooth_range: blended {count} points")
        return count

    # ── Height edits ────────────────────────────────────────────────────

    def _lerp_heights(self, position, range_, falloff, target_fn, label):
        positions = self.points.positions
        idx, d = radial_mask(positions, position, range_)
        if idx.size == 0:
            return 0

        sel = positions[idx]
        y = sel[:, 1]
        factor = self._factor(d, range_, falloff)
        self.points.set_axis(idx, 1, lerp(y, target_fn(sel), factor))

        logger.debug(f"{label}: edited {idx.size} points")
        return int(idx.size)

    def add_height(self, position, range_, falloff, height) -> int:
        return self._lerp_heights(position, range_, falloff,
                                  lambda sel: sel[:, 1] + height, "add_height")

    def subtract_height(self, position, range_, falloff, height) -> int:
        return self._lerp_heights(position, range_, falloff,
                                  lambda sel: sel[:, 1] - height, "subtract_height")

    def flatten(self, position, range_, falloff, height) -> int:
        """Pull heights toward the absolute ``height``.

        The factor grows with distance, so the point at the center itself
        is left as it was.
        """
        return self._lerp_heights(position, range_, falloff,
                                  lambda sel: np.full(len(sel), float(height)),
                                  "flatten")

    # ── Heightmap stamping ──────────────────────────────────────────────

    def stamp_heightmap(self, position, range_, falloff, heightmap,
                        max_height) -> int:
        """Add ``heightmap`` (scaled by ``max_height``) to the heights around ``position``."""
        def target(sel):
            xs, zs = self._texels(sel)
            return sel[:, 1] + heightmap.sample_many(xs, zs) * max_height

        return self._lerp_heights(position, range_, falloff, target,
                                  "stamp_heightmap")

    def stamp_heightmap_3d(self, position, range_, falloff, heightmap,
                           max_height, sign=1) -> int:
        """Push points along their stored normals by the sampled heightmap.

        ``sign`` is +1 to push outward and -1 to carve inward.  Points are
        selected once; the axes are then updated x, y, z in turn, each with
        a factor and texel recomputed from the partially moved position.
        """
        if sign not in (1, -1):
            raise ValueError(f"sign must be +1 or -1, got {sign}")

        center = np.asarray(position, dtype=np.float64)
        idx, _ = radial_mask(self.points.positions, center, range_)
        if idx.size == 0:
            return 0

        normals = self.points.normals[idx]
        for axis in range(3):
            sel = self.points.positions[idx]
            factor = self._factor(distances(sel, center), range_, falloff)
            xs, zs = self._texels(sel)
            amount = sign * heightmap.sample_many(xs, zs) * max_height * normals[:, axis]
            self.points.set_axis(idx, axis, lerp(sel[:, axis], sel[:, axis] + amount, factor))

        logger.debug(f"stamp_heightmap_3d (sign={int(sign):+d}): edited {idx.size} points")
        return int(idx.size)

    def add_heightmap_3d(self, position, range_, falloff, heightmap,
                         max_height) -> int:
        return self.stamp_heightmap_3d(position, range_, falloff, heightmap,
                                       max_height, sign=1)

    def subtract_heightmap_3d(self, position, range_, falloff, heightmap,
                              max_height) -> int:
        return self.stamp_heightmap_3d(position, range_, falloff, heightmap,
                                       max_height, sign=-1)
