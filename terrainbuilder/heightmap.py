"""Grayscale height grids sampled at integer texel coordinates."""

import logging

import numpy as np
from PIL import Image

from .constants import GRAYSCALE_WEIGHTS

logger = logging.getLogger(__name__)

WRAP_MODES = frozenset({'clamp', 'repeat'})


class HeightGrid:
    """2-D grid of intensities in [0, 1], indexed ``values[z, x]``.

    Row 0 is the bottom edge of the source image (z = 0), matching the
    orientation of the terrain mesh built from it.
    """

    def __init__(self, values, wrap_mode: str = 'clamp'):
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Height grid must be 2-D, got shape {values.shape}")
        if wrap_mode not in WRAP_MODES:
            raise ValueError(f"Unknown wrap mode {wrap_mode!r}; "
                             f"expected one of {sorted(WRAP_MODES)}")
        self.values = values
        self.wrap_mode = wrap_mode

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    def _wrap(self, xs, zs):
        if self.wrap_mode == 'repeat':
            return np.mod(xs, self.width), np.mod(zs, self.height)
        return (np.clip(xs, 0, self.width - 1),
                np.clip(zs, 0, self.height - 1))

    def sample(self, x: int, z: int) -> float:
        """Intensity at texel (x, z)."""
        ix, iz = self._wrap(int(x), int(z))
        return float(self.values[iz, ix])

    def __call__(self, x: int, z: int) -> float:
        return self.sample(x, z)

    def sample_many(self, xs, zs) -> np.ndarray:
        """Vectorized :meth:`sample` for integer coordinate arrays."""
        xs = np.asarray(xs, dtype=np.intp)
        zs = np.asarray(zs, dtype=np.intp)
        ix, iz = self._wrap(xs, zs)
        return self.values[iz, ix]

    @classmethod
    def flat(cls, width: int, height: int, value: float = 0.0, **kwargs):
        return cls(np.full((height, width), value, dtype=np.float64), **kwargs)

    @classmethod
    def from_image(cls, source, **kwargs) -> "HeightGrid":
        """Decode an image file (or ``PIL.Image``) into a height grid.

        RGB pixels are reduced with luma weights; alpha is ignored.
        """
        if isinstance(source, Image.Image):
            img = source
        else:
            img = Image.open(source)
        rgb = np.asarray(img.convert("RGB"), dtype=np.float64) / 255.0
        gray = rgb @ np.asarray(GRAYSCALE_WEIGHTS, dtype=np.float64)

        # image row 0 = top; our convention row 0 = bottom (z = 0)
        gray = gray[::-1, :].copy()
        logger.info(f"Loaded heightmap {gray.shape[1]}x{gray.shape[0]}, "
                    f"range={gray.min():.3f}..{gray.max():.3f}")
        return cls(gray, **kwargs)
