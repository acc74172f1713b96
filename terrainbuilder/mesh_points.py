"""Per-vertex attribute storage with change tracking.

A :class:`MeshPointStore` is the editable source of truth for a mesh's
vertices.  Every write goes through the store and marks the written
points dirty; :meth:`MeshPointStore.flush` is the only place that copies
dirty points into the render buffers and clears their flags.
"""

import logging

import numpy as np

from .models import MeshBuffers

logger = logging.getLogger(__name__)

# Attribute name -> components per vertex
ATTRIBUTES = {
    'positions': 3,
    'normals': 3,
    'uvs': 2,
    'colors': 4,
    'tangents': 4,
}


def _readonly(arr):
    view = arr.view()
    view.flags.writeable = False
    return view


class MeshPoint:
    """Accessor for one vertex of a :class:`MeshPointStore`.

    Setting ``x``, ``y``, ``z``, ``position`` or any render attribute
    marks the point dirty.
    """

    __slots__ = ('_store', '_index')

    def __init__(self, store, index: int):
        self._store = store
        self._index = index

    def __repr__(self):
        return (f"MeshPoint(index={self._index}, position={self.position}, "
                f"dirty={self.dirty})")

    @property
    def index(self) -> int:
        return self._index

    def _get(self, name):
        return tuple(float(c) for c in self._store._attrs[name][self._index])

    def _set(self, name, value):
        self._store.set_attribute(name, self._index, value)

    def _set_axis(self, axis, value):
        self._store.set_axis(self._index, axis, value)

    @property
    def position(self):
        return self._get('positions')

    @position.setter
    def position(self, value):
        self._set('positions', value)

    @property
    def x(self) -> float:
        return float(self._store._attrs['positions'][self._index, 0])

    @x.setter
    def x(self, value):
        self._set_axis(0, value)

    @property
    def y(self) -> float:
        return float(self._store._attrs['positions'][self._index, 1])

    @y.setter
    def y(self, value):
        self._set_axis(1, value)

    @property
    def z(self) -> float:
        return float(self._store._attrs['positions'][self._index, 2])

    @z.setter
    def z(self, value):
        self._set_axis(2, value)

    @property
    def normal(self):
        return self._get('normals')

    @normal.setter
    def normal(self, value):
        self._set('normals', value)

    @property
    def uv(self):
        return self._get('uvs')

    @uv.setter
    def uv(self, value):
        self._set('uvs', value)

    @property
    def color(self):
        return self._get('colors')

    @color.setter
    def color(self, value):
        self._set('colors', value)

    @property
    def tangent(self):
        return self._get('tangents')

    @tangent.setter
    def tangent(self, value):
        self._set('tangents', value)

    @property
    def dirty(self) -> bool:
        return bool(self._store._dirty[self._index])


class MeshPointStore:
    """Ordered, index-stable collection of mesh points.

    Point *i* always corresponds to vertex *i* of the backing geometry.
    Attributes the source buffers do not provide default to zeros.
    """

    def __init__(self, vertices, normals=None, uvs=None, colors=None,
                 tangents=None):
        vertices = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
        n = len(vertices)
        given = {
            'positions': vertices,
            'normals': normals,
            'uvs': uvs,
            'colors': colors,
            'tangents': tangents,
        }

        self._attrs = {}
        for name, width in ATTRIBUTES.items():
            value = given[name]
            if value is None:
                arr = np.zeros((n, width), dtype=np.float64)
            else:
                arr = np.array(value, dtype=np.float64).reshape(-1, width)
                if len(arr) != n:
                    raise ValueError(f"{name} has {len(arr)} entries, "
                                     f"expected {n} to match vertices")
            self._attrs[name] = arr

        self._buffers = {name: arr.copy() for name, arr in self._attrs.items()}
        self._dirty = np.zeros(n, dtype=bool)

    @classmethod
    def from_buffers(cls, buffers: MeshBuffers) -> "MeshPointStore":
        """Rebuild a store from the output of :meth:`flush`."""
        return cls(buffers.positions, normals=buffers.normals,
                   uvs=buffers.uvs, colors=buffers.colors,
                   tangents=buffers.tangents)

    # ── Read access ─────────────────────────────────────────────────────

    def __len__(self):
        return len(self._dirty)

    def __getitem__(self, index) -> MeshPoint:
        n = len(self)
        index = int(index)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError(f"mesh point index out of range (size {n})")
        return MeshPoint(self, index)

    def __iter__(self):
        for i in range(len(self)):
            yield MeshPoint(self, i)

    @property
    def positions(self) -> np.ndarray:
        """Read-only (n, 3) view of the live positions."""
        return _readonly(self._attrs['positions'])

    @property
    def normals(self) -> np.ndarray:
        return _readonly(self._attrs['normals'])

    @property
    def uvs(self) -> np.ndarray:
        return _readonly(self._attrs['uvs'])

    @property
    def colors(self) -> np.ndarray:
        return _readonly(self._attrs['colors'])

    @property
    def tangents(self) -> np.ndarray:
        return _readonly(self._attrs['tangents'])

    @property
    def dirty(self) -> np.ndarray:
        return _readonly(self._dirty)

    @property
    def dirty_count(self) -> int:
        return int(self._dirty.sum())

    # ── Write access (every path marks the written points dirty) ────────

    def set_attribute(self, name: str, indices, values):
        """Overwrite attribute ``name`` for ``indices`` (int or int array)."""
        if name not in ATTRIBUTES:
            raise KeyError(f"Unknown mesh point attribute {name!r}")
        arr = self._attrs[name]
        arr[indices] = np.asarray(values, dtype=np.float64)
        self._dirty[indices] = True

    def set_positions(self, indices, values):
        self.set_attribute('positions', indices, values)

    def set_axis(self, indices, axis: int, values):
        """Overwrite one position axis (0=x, 1=y, 2=z) for ``indices``."""
        self._attrs['positions'][indices, axis] = values
        self._dirty[indices] = True

    # ── Reconciliation ──────────────────────────────────────────────────

    def sync(self, vertex_count: int) -> bool:
        """Match the store length to the geometry's vertex count.

        On mismatch every point is replaced by a fresh default point and
        the buffers are zeroed; existing edits are lost.  Returns True if
        the store was reallocated.
        """
        if len(self) == vertex_count:
            return False

        logger.warning(f"Mesh point store has {len(self)} points but geometry "
                       f"has {vertex_count} vertices; reallocating (edits lost)")
        self._attrs = {name: np.zeros((vertex_count, width), dtype=np.float64)
                       for name, width in ATTRIBUTES.items()}
        self._buffers = {name: arr.copy() for name, arr in self._attrs.items()}
        self._dirty = np.zeros(vertex_count, dtype=bool)
        return True

    def flush(self) -> MeshBuffers:
        """Copy dirty points into the buffers, clear their flags, return buffers.

        The returned arrays are full-length copies; rows for points that were
        not dirty hold the values from the previous flush.
        """
        mask = self._dirty
        n_dirty = int(mask.sum())
        if n_dirty:
            for name, buf in self._buffers.items():
                buf[mask] = self._attrs[name][mask]
            self._dirty[:] = False
        logger.debug(f"Flushed {n_dirty}/{len(self)} dirty mesh points")

        return MeshBuffers(**{name: buf.copy() for name, buf in self._buffers.items()})
