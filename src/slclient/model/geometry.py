"""
Grid Primitives
Integer coordinates and recorded connections of the auto-map.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Coordinate:
    """A cell in the unbounded 3D world grid."""
    x: int
    y: int
    z: int = 0

    def __add__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x - other.x, self.y - other.y, self.z - other.z)

    def above(self) -> Coordinate:
        return Coordinate(self.x, self.y, self.z + 1)

    def below(self) -> Coordinate:
        return Coordinate(self.x, self.y, self.z - 1)

    def as_tuple(self) -> tuple[int, int, int]:
        return self.x, self.y, self.z


ORIGIN = Coordinate(0, 0, 0)


@dataclass(frozen=True, eq=False)
class Edge:
    """
    A recorded traversal between two cells.

    The endpoints keep the direction of the first traversal (that is what gets
    written to disk), but two edges compare equal when they join the same
    pair of cells, whichever way round.
    """
    start: Coordinate
    end: Coordinate
    _key: frozenset[Coordinate] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_key", frozenset((self.start, self.end)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def lies_on_layer(self, z: int) -> bool:
        return self.start.z == z and self.end.z == z
