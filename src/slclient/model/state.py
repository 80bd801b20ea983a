"""
Map State (Data Model)
======================
This module defines the data held by an open map window.

Why is this file needed?
------------------------
1. State Management: It holds the visited cells, the recorded connections and
   the player position in one place.
2. Persistence: This object is what gets serialized when saving a map.
3. Decoupling: The engine writes to this object; the canvas only ever sees
   render frames built from it.

Classes:
    Viewport: Pan offset, window size and active layer.
    MapState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import Optional, Set

from slclient.model.geometry import Coordinate, Edge, ORIGIN

logger = logging.getLogger(__name__)


@dataclass
class Viewport:
    """
    The visible window onto the grid.
    Offset is the global cell shown in the top-left corner; width and height
    are measured in cells and come from the size of the render surface.
    """
    offset_x: int = 0
    offset_y: int = 0
    width: int = 1
    height: int = 1
    layer: int = 0

    @property
    def center(self) -> tuple[int, int]:
        return self.width // 2, self.height // 2

    def contains(self, x: int, y: int) -> bool:
        return (self.offset_x <= x < self.offset_x + self.width
                and self.offset_y <= y < self.offset_y + self.height)

    def center_on(self, coordinate: Coordinate) -> None:
        cx, cy = self.center
        self.offset_x = coordinate.x - cx
        self.offset_y = coordinate.y - cy

    def to_local(self, coordinate: Coordinate) -> tuple[int, int]:
        return coordinate.x - self.offset_x, coordinate.y - self.offset_y

    def to_global(self, local_x: int, local_y: int) -> Coordinate:
        return Coordinate(local_x + self.offset_x, local_y + self.offset_y, self.layer)


@dataclass
class MapState:
    """
    Everything that belongs to one map: what has been explored, where the
    player stands and whether that differs from the file on disk.
    """
    position: Coordinate = ORIGIN
    nodes: Set[Coordinate] = field(default_factory=set)
    edges: Set[Edge] = field(default_factory=set)

    dirty: bool = False
    read_only: bool = False
    filepath: Optional[str] = None

    @property
    def map_name(self) -> Optional[str]:
        """File name without extension, or None for an unsaved map."""
        if not self.filepath:
            return None
        return os.path.splitext(os.path.basename(self.filepath))[0]

    def add_node(self, coordinate: Coordinate) -> bool:
        """Returns True if the node was not known before."""
        if coordinate in self.nodes:
            return False
        self.nodes.add(coordinate)
        return True

    def add_edge(self, edge: Edge) -> bool:
        """Returns True if no edge joined the two cells before."""
        if edge in self.edges:
            return False
        self.edges.add(edge)
        return True

    def reset(self) -> None:
        """Clear all data for a new map"""
        self.position = ORIGIN
        self.nodes = set()
        self.edges = set()
        self.dirty = False
        self.filepath = None
        logger.info("Map state has been reset.")
