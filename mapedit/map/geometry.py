"""
Geometry primitives used by the in-memory map.

Only what the modify control needs: flat coordinate access, extents,
translation and single-vertex replacement. Coordinates are (x, y) tuples
in map units.
"""

from typing import List, Tuple

Coordinate = Tuple[float, float]
Extent = Tuple[float, float, float, float]  # (min_x, min_y, max_x, max_y)


def get_center(extent: Extent) -> Coordinate:
    """Return the center of an extent."""
    min_x, min_y, max_x, max_y = extent
    return ((min_x + max_x) / 2, (min_y + max_y) / 2)


def extent_of(coordinates: List[Coordinate]) -> Extent:
    xs = [c[0] for c in coordinates]
    ys = [c[1] for c in coordinates]
    return (min(xs), min(ys), max(xs), max(ys))


class Geometry:
    """Base class for geometries. Subclasses store their vertices in `_rings`."""

    geometry_type = 'Geometry'

    def __init__(self):
        self._rings: List[List[Coordinate]] = []
        self.revision = 0

    def get_type(self) -> str:
        return self.geometry_type

    def get_flat_coordinates(self) -> List[Coordinate]:
        return [c for ring in self._rings for c in ring]

    def get_extent(self) -> Extent:
        return extent_of(self.get_flat_coordinates())

    def translate(self, dx: float, dy: float) -> None:
        """Shift every vertex by (dx, dy)."""
        if dx == 0 and dy == 0:
            return
        self._rings = [[(x + dx, y + dy) for x, y in ring] for ring in self._rings]
        self.revision += 1

    def set_vertex(self, ring_index: int, vertex_index: int, coordinate: Coordinate) -> None:
        """Replace a single vertex."""
        ring = self._rings[ring_index]
        ring[vertex_index] = (coordinate[0], coordinate[1])
        self.revision += 1

    def iter_vertices(self):
        """Yield (ring_index, vertex_index, coordinate) for every vertex."""
        for r, ring in enumerate(self._rings):
            for v, coord in enumerate(ring):
                yield r, v, coord

    def contains_coordinate(self, coordinate: Coordinate, tolerance: float = 0.0) -> bool:
        """Naive hit-test against the extent grown by `tolerance`."""
        min_x, min_y, max_x, max_y = self.get_extent()
        x, y = coordinate
        return (min_x - tolerance <= x <= max_x + tolerance and
                min_y - tolerance <= y <= max_y + tolerance)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.get_coordinates()!r})"


class Point(Geometry):
    geometry_type = 'Point'

    def __init__(self, coordinate: Coordinate):
        super().__init__()
        self._rings = [[(coordinate[0], coordinate[1])]]

    def get_coordinates(self) -> Coordinate:
        return self._rings[0][0]


class LineString(Geometry):
    geometry_type = 'LineString'

    def __init__(self, coordinates: List[Coordinate]):
        super().__init__()
        self._rings = [[(c[0], c[1]) for c in coordinates]]

    def get_coordinates(self) -> List[Coordinate]:
        return list(self._rings[0])


class Polygon(Geometry):
    geometry_type = 'Polygon'

    def __init__(self, rings: List[List[Coordinate]]):
        super().__init__()
        self._rings = [[(c[0], c[1]) for c in ring] for ring in rings]

    def get_coordinates(self) -> List[List[Coordinate]]:
        return [list(ring) for ring in self._rings]

    def set_vertex(self, ring_index: int, vertex_index: int, coordinate: Coordinate) -> None:
        ring = self._rings[ring_index]
        last = len(ring) - 1
        closed = last > 0 and ring[0] == ring[last]
        super().set_vertex(ring_index, vertex_index, coordinate)
        # Keep closed rings closed
        if closed and vertex_index in (0, last):
            ring[last if vertex_index == 0 else 0] = (coordinate[0], coordinate[1])


GEOMETRY_CLASSES = {
    'Point': Point,
    'LineString': LineString,
    'Polygon': Polygon,
}
