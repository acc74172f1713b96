"""Distance-to-weight functions shared by the terrain edit operations.

Two blending conventions are in use and kept distinct:

* clamp style (box transforms): ``clamp01(distance / falloff)``, growing
  from 0 at the box's min corner to 1 at ``falloff`` distance.
* range style (radial edits): ``distance / range * falloff``.  This factor
  is not clamped, so a large falloff overshoots the lerp target.
"""

from enum import Enum

import numpy as np


class FalloffStyle(str, Enum):
    clamp = "clamp"
    range = "range"


def lerp(a, b, t):
    """Unclamped linear interpolation ``a + (b - a) * t``."""
    return a + (b - a) * t


def distances(positions, center) -> np.ndarray:
    """Euclidean distance of each row of ``positions`` to ``center``."""
    positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    center = np.asarray(center, dtype=np.float64)
    return np.linalg.norm(positions - center, axis=1)


def clamp_weight(distance, falloff):
    """Clamp-style weight in [0, 1].

    A zero falloff is a hard edge: 0 at the min corner, 1 elsewhere.  A
    negative falloff gives 0 everywhere.
    """
    distance = np.asarray(distance, dtype=np.float64)
    if falloff == 0:
        w = np.where(distance > 0, 1.0, 0.0)
    else:
        w = np.clip(distance / falloff, 0.0, 1.0)
    return w if w.ndim else float(w)


def range_factor(distance, range_, falloff, clamp=False):
    """Range-style lerp factor ``distance / range * falloff``."""
    t = np.asarray(distance, dtype=np.float64) / range_ * falloff
    if clamp:
        t = np.clip(t, 0.0, 1.0)
    return t if t.ndim else float(t)


def weight(distance, range_, falloff, style=FalloffStyle.range, clamp=False):
    """Dispatch to :func:`clamp_weight` or :func:`range_factor` by style."""
    style = FalloffStyle(style)
    if style is FalloffStyle.clamp:
        return clamp_weight(distance, falloff)
    return range_factor(distance, range_, falloff, clamp=clamp)


def radial_mask(positions, center, range_):
    """Points strictly closer than ``range_`` to ``center``.

    Returns ``(indices, distances)`` for the selected points.
    """
    d = distances(positions, center)
    idx = np.flatnonzero(d < range_)
    return idx, d[idx]


def box_mask(positions, min_point, max_point):
    """Indices of points inside the axis-aligned box (bounds inclusive)."""
    positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    lo = np.asarray(min_point, dtype=np.float64)
    hi = np.asarray(max_point, dtype=np.float64)
    inside = np.all((positions >= lo) & (positions <= hi), axis=1)
    return np.flatnonzero(inside)
