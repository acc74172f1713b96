"""Settings and buffer containers."""

from typing import NamedTuple, Optional

import numpy as np
from pydantic import BaseModel, Field, model_validator

from .constants import (
    WORLD_SIZE, NEIGHBOR_RADIUS, STAMP_TEXEL_SCALE, CLAMP_FACTOR,
)


class TerrainSettings(BaseModel):
    """Tunable scale constants shared by the builder and the editor."""
    world_size: float = Field(default=WORLD_SIZE, gt=0)
    neighbor_radius: float = Field(default=NEIGHBOR_RADIUS, gt=0)
    stamp_texel_scale: Optional[float] = STAMP_TEXEL_SCALE
    clamp_factor: bool = CLAMP_FACTOR

    @model_validator(mode="after")
    def _default_texel_scale(self):
        # Stamping maps world units to texels with the terrain's world size
        if self.stamp_texel_scale is None:
            self.stamp_texel_scale = self.world_size
        return self


class GeometryBuffers(NamedTuple):
    """Raw buffers produced by the geometry builders."""
    vertices: np.ndarray   # (n, 3) float64
    triangles: np.ndarray  # (3m,) flat int index list
    uvs: np.ndarray        # (n, 2) float64

    @property
    def faces(self) -> np.ndarray:
        """Triangle indices as an (m, 3) array."""
        return self.triangles.reshape(-1, 3)


class MeshBuffers(NamedTuple):
    """Per-vertex attribute buffers as materialized by a flush."""
    positions: np.ndarray  # (n, 3)
    normals: np.ndarray    # (n, 3)
    uvs: np.ndarray        # (n, 2)
    colors: np.ndarray     # (n, 4) rgba in [0, 1]
    tangents: np.ndarray   # (n, 4)
