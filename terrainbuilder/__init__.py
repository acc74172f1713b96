"""TerrainBuilder package — build and sculpt triangulated height-field meshes."""

from terrainbuilder.models import TerrainSettings, GeometryBuffers, MeshBuffers
from terrainbuilder.errors import (
    TerrainBuilderError, InsufficientPointsError, DegenerateGridError,
    NoPointsInRadiusError,
)
from terrainbuilder.heightmap import HeightGrid
from terrainbuilder.geometry import (
    build_from_points, build_from_height_grid, build_from_heightmap,
)
from terrainbuilder.mesh_points import MeshPoint, MeshPointStore
from terrainbuilder.falloff import FalloffStyle
from terrainbuilder.editor import TerrainEditor
from terrainbuilder.mesh import TerrainMesh
from terrainbuilder.builder import TerrainBuilder

__version__ = "0.1.0"
