"""TerrainBuilder — creates editable meshes from point sets and heightmaps."""

import logging

import trimesh
from trimesh.visual.material import PBRMaterial

from .constants import DEFAULT_MESH_NAME, TERRAIN_MESH_NAME
from .geometry import build_from_points, build_from_heightmap
from .mesh import TerrainMesh
from .models import TerrainSettings

logger = logging.getLogger(__name__)

def default_material() -> PBRMaterial:
    return PBRMaterial(
        baseColorFactor=[0.42, 0.55, 0.28, 1.0],  # green grass
        metallicFactor=0.0,
        roughnessFactor=0.9,
        name="terrain",
    )


class TerrainBuilder:
    """Build :class:`TerrainMesh` objects with shared settings."""

    def __init__(self, settings: TerrainSettings = None):
        self.settings = settings or TerrainSettings()

    def _attach(self, buffers, name, material=None, texture=None):
        material = material if material is not None else default_material()
        if texture is not None:
            material.baseColorTexture = texture

        # process=False keeps vertex i == point i
        mesh = trimesh.Trimesh(
            vertices=buffers.vertices,
            faces=buffers.faces,
            visual=trimesh.visual.TextureVisuals(uv=buffers.uvs, material=material),
            process=False,
        )
        return TerrainMesh(mesh, name=name, settings=self.settings)

    def create_mesh(self, points, material=None, texture=None,
                    name: str = DEFAULT_MESH_NAME) -> TerrainMesh:
        """Fan-triangulate ``points`` into an editable mesh.

        ``texture`` is an optional ``PIL.Image`` used as the base color map.
        """
        buffers = build_from_points(points)
        result = self._attach(buffers, name, material, texture)
        logger.info(f"Created mesh {name!r}: {len(buffers.vertices)} verts")
        return result

    def create_terrain_from_heightmap(self, heightmap, max_height: float,
                                      material=None, texture=None,
                                      name: str = TERRAIN_MESH_NAME) -> TerrainMesh:
        """Build a grid terrain from a :class:`HeightGrid`."""
        buffers = build_from_heightmap(heightmap, max_height,
                                       world_size=self.settings.world_size)
        result = self._attach(buffers, name, material, texture)
        logger.info(f"Created terrain {name!r} from {heightmap.width}x"
                    f"{heightmap.height} heightmap, max_height={max_height}")
        return result
