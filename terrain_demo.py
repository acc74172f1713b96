"""
Terrain Demo — builds a terrain from a procedural heightmap and sculpts it.

Steps demonstrated:
1. Height grid from a sum of Gaussian hills
2. Grid terrain mesh via TerrainBuilder
3. Raise, flatten, smooth and stamp edits with falloff
4. Commit (normals/bounds recompute) and GLB export

Output: output/terrain-demo.glb
"""

import logging

import numpy as np

from terrainbuilder import TerrainBuilder, HeightGrid, TerrainSettings
from terrainbuilder.constants import OUTPUT_DIR

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ── Configuration ─────────────────────────────────────────────────
GRID_SIZE = 64          # heightmap samples per side
MAX_HEIGHT = 1.5        # world height of a white sample
HILLS = [
    # (cx, cz, radius, peak) in normalised [0, 1] grid coordinates
    (0.30, 0.35, 0.18, 1.0),
    (0.70, 0.60, 0.25, 0.7),
    (0.50, 0.85, 0.10, 0.4),
]
OUTPUT_PATH = OUTPUT_DIR / "terrain-demo.glb"


def hill_grid(size, hills):
    """Sum of Gaussian bumps, normalised to [0, 1]."""
    z, x = np.mgrid[0:size, 0:size] / (size - 1)
    elev = np.zeros((size, size), dtype=np.float64)
    for cx, cz, r, peak in hills:
        elev += peak * np.exp(-((x - cx) ** 2 + (z - cz) ** 2) / (2 * r * r))
    elev -= elev.min()
    if elev.max() > 0:
        elev /= elev.max()
    return HeightGrid(elev)


def ripple_stamp(size=100, rings=6):
    """Concentric ripple pattern used as a stamp."""
    z, x = np.mgrid[0:size, 0:size] / (size - 1)
    r = np.hypot(x - 0.5, z - 0.5)
    return HeightGrid(0.5 + 0.5 * np.cos(r * rings * 2 * np.pi))


def main():
    settings = TerrainSettings()
    builder = TerrainBuilder(settings)
    terrain = builder.create_terrain_from_heightmap(hill_grid(GRID_SIZE, HILLS), MAX_HEIGHT)
    editor = terrain.editor

    lo, hi = terrain.bounds
    logger.info(f"Initial bounds: {lo.round(2)} .. {hi.round(2)}")

    # Raise a ridge, carve a basin, level a building pad
    n = editor.add_height((2.0, 0.0, 7.5), 2.0, 1.0, 0.8)
    logger.info(f"add_height: {n} points")
    n = editor.subtract_height((7.0, 0.5, 2.5), 1.5, 1.0, 0.6)
    logger.info(f"subtract_height: {n} points")
    n = editor.flatten((5.0, 0.5, 5.0), 1.2, 1.0, 0.5)
    logger.info(f"flatten: {n} points")

    # Neighbour radius must exceed the grid spacing for smoothing to blend
    spacing = settings.world_size / GRID_SIZE
    smoother = TerrainSettings(neighbor_radius=spacing * 1.5)
    terrain.editor.settings = smoother
    n = editor.smooth_range((5.0, 0.5, 5.0), 2.0, 0.5)
    logger.info(f"smooth_range: {n} points")
    terrain.editor.settings = settings

    n = editor.stamp_heightmap((3.0, 0.5, 3.0), 1.5, 0.5, ripple_stamp(), 0.2)
    logger.info(f"stamp_heightmap: {n} points")

    terrain.commit()
    lo, hi = terrain.bounds
    logger.info(f"Edited bounds: {lo.round(2)} .. {hi.round(2)}")

    terrain.export(OUTPUT_PATH)
    print(f"\nTerrain demo written to {OUTPUT_PATH}")


if __name__ == "__main__":
    main()
