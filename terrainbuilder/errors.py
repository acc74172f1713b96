"""Exceptions raised by terrainbuilder."""


class TerrainBuilderError(Exception):
    """Base class for terrainbuilder errors."""


class InsufficientPointsError(TerrainBuilderError, ValueError):
    """A fan mesh needs at least three points."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"At least 3 points are required to build a mesh, got {count}")


class DegenerateGridError(TerrainBuilderError, ValueError):
    """A height grid needs at least 2x2 samples."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Height grid must be at least 2x2, got {width}x{height}")


class NoPointsInRadiusError(TerrainBuilderError, ValueError):
    """No mesh point lies inside the neighbour radius of a query position."""

    def __init__(self, position, radius: float):
        self.position = tuple(float(c) for c in position)
        self.radius = radius
        super().__init__(f"No mesh points within {radius} of {self.position}")
