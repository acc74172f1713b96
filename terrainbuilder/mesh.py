"""TerrainMesh — a trimesh geometry paired with its editable point store."""

import logging
import pathlib

import numpy as np
import trimesh

from .constants import DEFAULT_MESH_NAME
from .editor import TerrainEditor
from .mesh_points import MeshPointStore
from .models import MeshBuffers, TerrainSettings

logger = logging.getLogger(__name__)


def _visual_uv(mesh):
    uv = getattr(mesh.visual, 'uv', None)
    if uv is None or len(uv) != len(mesh.vertices):
        return None
    return np.asarray(uv, dtype=np.float64)


def _visual_colors(mesh):
    if mesh.visual.kind != 'vertex':
        return None
    return np.asarray(mesh.visual.vertex_colors, dtype=np.float64) / 255.0


class TerrainMesh:
    """Editable mesh: a ``trimesh.Trimesh`` plus its :class:`MeshPointStore`.

    Edits go to :attr:`points` (usually through :attr:`editor`); the
    trimesh buffers only change on :meth:`commit`.
    """

    def __init__(self, mesh: trimesh.Trimesh, name: str = DEFAULT_MESH_NAME,
                 settings: TerrainSettings = None):
        self.mesh = mesh
        self.name = name
        self.settings = settings or TerrainSettings()
        self.points = MeshPointStore(
            mesh.vertices,
            normals=mesh.vertex_normals if len(mesh.faces) else None,
            uvs=_visual_uv(mesh),
            colors=_visual_colors(mesh),
        )
        self.editor = TerrainEditor(self.points, self.settings)

    def __repr__(self):
        return (f"TerrainMesh(name={self.name!r}, vertices={len(self.points)}, "
                f"faces={len(self.mesh.faces)})")

    @property
    def bounds(self) -> np.ndarray:
        return self.mesh.bounds

    @property
    def vertex_normals(self) -> np.ndarray:
        return self.mesh.vertex_normals

    def commit(self) -> MeshBuffers:
        """Push pending point edits into the trimesh and refresh derived data.

        Flushes every dirty point and writes only those rows into the
        positions (and UVs or vertex colors where the mesh carries them),
        then recomputes normals and bounds.  A store reallocated by ``sync``
        has no dirty points, so the resized geometry is left as it is.
        Call once after a batch of edits.
        """
        self.points.sync(len(self.mesh.vertices))
        mask = self.points.dirty.copy()
        buffers = self.points.flush()

        vertices = np.array(self.mesh.vertices, dtype=np.float64)
        vertices[mask] = buffers.positions[mask]
        self.mesh.vertices = vertices
        uv = _visual_uv(self.mesh)
        if uv is not None:
            uv = uv.copy()
            uv[mask] = buffers.uvs[mask]
            self.mesh.visual.uv = uv
        elif self.mesh.visual.kind == 'vertex':
            rgba = np.array(self.mesh.visual.vertex_colors, dtype=np.uint8)
            edited = np.clip(np.round(buffers.colors[mask] * 255.0), 0, 255)
            rgba[mask] = edited.astype(np.uint8)
            self.mesh.visual.vertex_colors = rgba

        # Assigning vertices clears trimesh's cache; touch the derived
        # attributes so they are recomputed now rather than on first read.
        self.mesh.vertex_normals
        self.mesh.bounds

        logger.debug(f"Committed {int(mask.sum())} edited points to {self.name!r}")
        return buffers

    def export(self, path, file_type: str = None) -> pathlib.Path:
        """Commit pending edits and write the mesh (GLB, PLY, STL, OBJ...)."""
        self.commit()
        path = pathlib.Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_type = file_type or path.suffix.lstrip('.').lower()
        self.mesh.export(str(path), file_type=file_type)
        size_kb = path.stat().st_size / 1024
        logger.info(f"Exported {self.name!r} to {path} ({size_kb:.1f} KB)")
        return path

    @classmethod
    def load(cls, path, name: str = None,
             settings: TerrainSettings = None) -> "TerrainMesh":
        """Load a mesh file without merging or reordering vertices."""
        path = pathlib.Path(path)
        mesh = trimesh.load(str(path), force='mesh', process=False)
        logger.info(f"Loaded {path.name}: {len(mesh.vertices)} verts, "
                    f"{len(mesh.faces)} faces")
        return cls(mesh, name=name or path.stem, settings=settings)
