"""
Input/Output Manager (.slmap)
Handles saving and loading maps to human-readable JSON files.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import os
from typing import Any, Dict, List, Set, TYPE_CHECKING

from slclient.config import MAP_FILE_EXTENSION
from slclient.model.geometry import Coordinate, Edge
from slclient.model.state import MapState

if TYPE_CHECKING:
    from slclient.model.engine import SpatialGraph

# Get module logger
logger = logging.getLogger(__name__)


class MapFormatError(ValueError):
    """The file content is not a valid map."""


class MapStorageError(OSError):
    """A map file or the maps folder could not be read or written."""


@dataclass
class MapSnapshot:
    """Map data as read from a file, not yet applied to an engine."""
    position: Coordinate
    nodes: Set[Coordinate] = field(default_factory=set)
    edges: Set[Edge] = field(default_factory=set)


def _require_int(entry: Dict[str, Any], key: str, where: str) -> int:
    value = entry.get(key)
    # bool is an int subclass, but true/false is not a coordinate
    if not isinstance(value, int) or isinstance(value, bool):
        raise MapFormatError(f"{where}: field '{key}' must be an integer, got {value!r}.")
    return value


def _require_object(entry: Any, where: str) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        raise MapFormatError(f"{where}: expected an object, got {type(entry).__name__}.")
    return entry


def _require_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MapFormatError(f"'{key}' must be a list, got {type(value).__name__}.")
    return value


class MapIOManager:

    # --- SERIALIZATION ---

    @staticmethod
    def serialize(state: MapState) -> bytes:
        pos = state.position
        payload = {
            "currentPosition": {"X": pos.x, "Y": pos.y, "Z": pos.z},
            "visitedCells": [
                {"X": c.x, "Y": c.y, "Z": c.z}
                for c in sorted(state.nodes, key=Coordinate.as_tuple)
            ],
            "lines": [
                {
                    "X1": e.start.x, "Y1": e.start.y, "Z1": e.start.z,
                    "X2": e.end.x, "Y2": e.end.y, "Z2": e.end.z,
                }
                for e in sorted(state.edges, key=lambda e: (e.start.as_tuple(), e.end.as_tuple()))
            ],
        }
        return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")

    @staticmethod
    def deserialize(data: bytes) -> MapSnapshot:
        try:
            raw = json.loads(data.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise MapFormatError(f"Map file is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise MapFormatError(f"Map file is not valid JSON: {e}") from e

        root = _require_object(raw, "map file")

        if "currentPosition" not in root:
            raise MapFormatError("Map file has no 'currentPosition'.")
        pos = _require_object(root["currentPosition"], "currentPosition")
        position = Coordinate(
            _require_int(pos, "X", "currentPosition"),
            _require_int(pos, "Y", "currentPosition"),
            _require_int(pos, "Z", "currentPosition"),
        )

        snapshot = MapSnapshot(position=position)

        for i, cell in enumerate(_require_list(root, "visitedCells")):
            where = f"visitedCells[{i}]"
            cell = _require_object(cell, where)
            snapshot.nodes.add(Coordinate(
                _require_int(cell, "X", where),
                _require_int(cell, "Y", where),
                _require_int(cell, "Z", where),
            ))

        for i, line in enumerate(_require_list(root, "lines")):
            where = f"lines[{i}]"
            line = _require_object(line, where)
            start = Coordinate(
                _require_int(line, "X1", where),
                _require_int(line, "Y1", where),
                _require_int(line, "Z1", where),
            )
            end = Coordinate(
                _require_int(line, "X2", where),
                _require_int(line, "Y2", where),
                _require_int(line, "Z2", where),
            )
            snapshot.edges.add(Edge(start, end))

        logger.debug(
            f"Parsed map: {len(snapshot.nodes)} cells, {len(snapshot.edges)} lines, "
            f"position {position}."
        )
        return snapshot

    # --- FILES ---

    @staticmethod
    def save_map(graph: SpatialGraph, filepath: str) -> None:
        logger.info(f"Saving map to: {filepath}")
        data = MapIOManager.serialize(graph.state)
        try:
            with open(filepath, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.exception(f"Failed to save map: {e}")
            raise MapStorageError(f"Could not write '{filepath}': {e}") from e

        graph.mark_saved(filepath)
        logger.info(f"Map saved to: {filepath}")

    @staticmethod
    def load_map(graph: SpatialGraph, filepath: str) -> None:
        """
        Replace the graph's map with the file content.
        The file is read and validated completely first, so on failure the
        graph keeps its current map.
        """
        logger.info(f"Loading map from: {filepath}")
        try:
            with open(filepath, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.exception(f"Failed to read map: {e}")
            raise MapStorageError(f"Could not read '{filepath}': {e}") from e

        try:
            snapshot = MapIOManager.deserialize(data)
        except MapFormatError as e:
            logger.error(f"Invalid map file '{filepath}': {e}")
            raise

        graph.replace(snapshot, filepath=filepath)
        logger.info(f"Map loaded from: {filepath}")

    # --- MAPS FOLDER ---

    @staticmethod
    def ensure_maps_dir(folder: str) -> str:
        try:
            os.makedirs(folder, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create maps folder '{folder}': {e}")
            raise MapStorageError(f"Could not create maps folder '{folder}': {e}") from e
        return folder

    @staticmethod
    def list_saved_maps(folder: str) -> list[str]:
        """File names of all maps in the folder, sorted."""
        MapIOManager.ensure_maps_dir(folder)
        return sorted(
            name for name in os.listdir(folder)
            if name.lower().endswith(MAP_FILE_EXTENSION)
            and os.path.isfile(os.path.join(folder, name))
        )
