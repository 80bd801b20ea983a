"""
Auto-Map Engine
===============
Turns movement commands into a graph of visited cells and keeps a viewport
over that graph.

Why is this file needed?
------------------------
1. Mapping: Every recognised movement records the cell left, the cell
   entered and the connection between them.
2. Replay: In read-only mode the player may only follow connections that are
   already on the map.
3. Drawing contract: It decides what is visible and hands the canvas a
   ready-made `RenderFrame`. It never touches a drawing surface itself.

Classes:
    RenderFrame: Everything the canvas needs for one redraw.
    MapRenderer: Protocol implemented by the canvas.
    SpatialGraph: The engine.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional, Protocol, Set, TYPE_CHECKING

from slclient.model import directions
from slclient.model.geometry import Coordinate, Edge, ORIGIN
from slclient.model.state import MapState, Viewport

if TYPE_CHECKING:
    from slclient.model.io import MapSnapshot

logger = logging.getLogger(__name__)

UNKNOWN_MAP_NAME = "Unbekannte Karte"


@dataclass
class VisibleNode:
    """A visited cell on the active layer, in window coordinates."""
    local_x: int
    local_y: int
    coordinate: Coordinate
    has_up: bool = False
    has_down: bool = False


@dataclass
class VisibleLine:
    """A connection on the active layer, in window coordinates."""
    start: tuple[int, int]
    end: tuple[int, int]


@dataclass
class RenderFrame:
    width: int
    height: int
    layer: int
    nodes: List[VisibleNode] = field(default_factory=list)
    lines: List[VisibleLine] = field(default_factory=list)
    # Player cell in window coordinates, always on the active layer
    player: tuple[int, int] = (0, 0)
    read_only: bool = False
    dirty: bool = False
    title: str = ""


class MapRenderer(Protocol):
    def render(self, frame: RenderFrame) -> None: ...


class SpatialGraph:
    """
    Owns a `MapState` and a `Viewport` and is the only thing that writes to
    them. Not thread-safe: call it from the GUI thread only.
    """

    def __init__(
        self,
        state: Optional[MapState] = None,
        renderer: Optional[MapRenderer] = None,
        width: int = 1,
        height: int = 1,
    ) -> None:
        self.state: MapState = state or MapState()
        self.viewport: Viewport = Viewport(width=max(1, width), height=max(1, height))
        self.renderer: Optional[MapRenderer] = renderer

        # cell -> cells it is connected to, in either direction
        self._adjacency: Dict[Coordinate, Set[Coordinate]] = defaultdict(set)
        self._reindex()

        self.viewport.layer = self.state.position.z
        self.viewport.center_on(self.state.position)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def position(self) -> Coordinate:
        return self.state.position

    @property
    def local_position(self) -> tuple[int, int]:
        return self.viewport.to_local(self.state.position)

    @property
    def nodes(self) -> Set[Coordinate]:
        return self.state.nodes

    @property
    def edges(self) -> Set[Edge]:
        return self.state.edges

    @property
    def dirty(self) -> bool:
        return self.state.dirty

    @property
    def read_only(self) -> bool:
        return self.state.read_only

    def set_read_only(self, read_only: bool) -> None:
        self.state.read_only = read_only
        logger.info(f"Read-only mode {'on' if read_only else 'off'}.")
        self.redraw()

    def is_connected(self, a: Coordinate, b: Coordinate) -> bool:
        return b in self._adjacency.get(a, ())

    def vertical_connections(self, coordinate: Coordinate) -> tuple[bool, bool]:
        """(has_up, has_down) for the cell."""
        neighbours = self._adjacency.get(coordinate, ())
        return coordinate.above() in neighbours, coordinate.below() in neighbours

    def title(self) -> str:
        name = self.state.map_name or UNKNOWN_MAP_NAME
        title = f"Karte: {name} – Z: {self.viewport.layer}"
        if self.state.dirty:
            title += "*"
        return title

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def move(self, token: str) -> bool:
        """
        Apply a movement command.

        Returns:
            True if the player moved, False if the token is not a direction
            or read-only mode does not allow the step.
        """
        delta, ok = directions.try_parse(token)
        if not ok:
            return False

        # The player stands on the layer being viewed
        old = self.viewport.to_global(*self.local_position)
        new = old + delta

        changed = False
        if self.state.read_only:
            if new not in self.state.nodes or not self.is_connected(old, new):
                logger.debug(f"Read-only: no recorded way from {old} to {new}.")
                return False
        else:
            changed |= self.state.add_node(old)
            changed |= self.state.add_node(new)
            changed |= self._add_edge(Edge(old, new))

        if old.z != new.z:
            changed = True

        self.state.position = new
        self.viewport.layer = new.z
        self.viewport.center_on(new)

        if changed:
            self.state.dirty = True

        logger.debug(f"Moved {token!r}: {old} -> {new}")
        self.redraw()
        return True

    def pan_by(self, dx: int, dy: int) -> None:
        """Scroll the view. The map itself is untouched."""
        self.viewport.offset_x += dx
        self.viewport.offset_y += dy
        self.redraw()

    def step_layer(self, step: int) -> None:
        """
        Switch to the layer above (+1) or below (-1). The player goes along,
        so the next move starts there. Nothing is recorded.
        """
        self._set_layer(self.viewport.layer + step)
        self.redraw()

    def recenter_on(self, coordinate: Coordinate) -> None:
        self._set_layer(coordinate.z)
        self.viewport.center_on(coordinate)
        self.redraw()

    def teleport(self, px: float, py: float, cell_pixels: int) -> Coordinate:
        """
        Center the view on the cell under a pointer position given in pixels
        relative to the canvas. Allowed in both modes; records nothing.
        """
        target = self.viewport.to_global(int(px // cell_pixels), int(py // cell_pixels))
        self.recenter_on(target)
        return target

    def resize(self, width: int, height: int) -> None:
        """
        Adopt a new window size in cells, as derived from the canvas size.
        A changed size puts the player back in the middle of the window.
        """
        width, height = max(1, width), max(1, height)
        if (width, height) != (self.viewport.width, self.viewport.height):
            self.viewport.width = width
            self.viewport.height = height
            self.viewport.center_on(self.state.position)
        self.redraw()

    def new_map(self) -> None:
        self.state.reset()
        self._reindex()
        self.viewport.layer = ORIGIN.z
        self.viewport.center_on(ORIGIN)
        self.redraw()

    def replace(self, snapshot: MapSnapshot, filepath: Optional[str] = None) -> None:
        """Swap in loaded map data wholesale. The window size is kept."""
        self.state.nodes = set(snapshot.nodes)
        self.state.edges = set(snapshot.edges)
        self.state.position = snapshot.position
        self.state.dirty = False
        self.state.filepath = filepath
        self._reindex()

        self.viewport.layer = snapshot.position.z
        self.viewport.center_on(snapshot.position)
        self.redraw()

    def mark_saved(self, filepath: str) -> None:
        self.state.dirty = False
        self.state.filepath = filepath
        self.redraw()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def frame(self) -> RenderFrame:
        vp = self.viewport
        frame = RenderFrame(
            width=vp.width,
            height=vp.height,
            layer=vp.layer,
            read_only=self.state.read_only,
            dirty=self.state.dirty,
            title=self.title(),
        )

        for edge in self.state.edges:
            if not edge.lies_on_layer(vp.layer):
                continue
            if vp.contains(edge.start.x, edge.start.y) or vp.contains(edge.end.x, edge.end.y):
                frame.lines.append(VisibleLine(vp.to_local(edge.start), vp.to_local(edge.end)))

        for node in self.state.nodes:
            if node.z != vp.layer or not vp.contains(node.x, node.y):
                continue
            local_x, local_y = vp.to_local(node)
            has_up, has_down = self.vertical_connections(node)
            frame.nodes.append(VisibleNode(local_x, local_y, node, has_up, has_down))

        frame.player = vp.to_local(self.state.position)

        return frame

    def redraw(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.frame())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add_edge(self, edge: Edge) -> bool:
        if not self.state.add_edge(edge):
            return False
        self._adjacency[edge.start].add(edge.end)
        self._adjacency[edge.end].add(edge.start)
        return True

    def _set_layer(self, z: int) -> None:
        pos = self.state.position
        self.state.position = Coordinate(pos.x, pos.y, z)
        self.viewport.layer = z

    def _reindex(self) -> None:
        self._adjacency = defaultdict(set)
        for edge in self.state.edges:
            self._adjacency[edge.start].add(edge.end)
            self._adjacency[edge.end].add(edge.start)
