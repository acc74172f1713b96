"""Configuration defaults and paths.

Values can be overridden from the environment or a ``.env`` file in the
working directory.
"""

import os
import pathlib

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(os.environ.get("TERRAINBUILDER_OUTPUT_DIR", BASE_DIR / "output"))

# ── Mesh scale ──────────────────────────────────────────────────────────
# Side length of a heightmap terrain in world units.  Heightmap stamping
# maps world positions to texels with the same factor.
WORLD_SIZE = float(os.environ.get("TERRAINBUILDER_WORLD_SIZE", 10.0))

# Neighbour search radius used by smoothing and average-height queries
NEIGHBOR_RADIUS = float(os.environ.get("TERRAINBUILDER_NEIGHBOR_RADIUS", 0.1))

# Empty means "same as WORLD_SIZE"
_texel_scale = os.environ.get("TERRAINBUILDER_STAMP_TEXEL_SCALE", "").strip()
STAMP_TEXEL_SCALE = float(_texel_scale) if _texel_scale else None

# Set TERRAINBUILDER_CLAMP_FACTOR=1 to clip radial lerp factors to [0, 1]
CLAMP_FACTOR = os.environ.get("TERRAINBUILDER_CLAMP_FACTOR", "").strip() in ("1", "true", "yes")

# ── Mesh names ──────────────────────────────────────────────────────────
DEFAULT_MESH_NAME = "Custom Mesh"
TERRAIN_MESH_NAME = "Terrain"

# Grayscale weights applied to RGB heightmap pixels
GRAYSCALE_WEIGHTS = (0.299, 0.587, 0.114)
