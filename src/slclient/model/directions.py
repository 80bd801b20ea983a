"""
Direction Parser
================
Maps free-text movement commands (English and German, long and short forms)
to a movement delta in the 3D grid.

Axis convention: north = -y, south = +y, east = +x, west = -x, up = +z.

The synonym tables below are kept exactly as players type them, umlauts
included. Lookups go through `normalize_token`, so "südost" and "suedost"
resolve to the same entry.
"""
from __future__ import annotations

import logging
from typing import Dict, Tuple

from slclient.model.geometry import Coordinate, ORIGIN

logger = logging.getLogger(__name__)

# Compound diagonals with a vertical component
DIRECTIONS_3D: Dict[str, Tuple[int, int, int]] = {
    # Nordost
    "noob": (1, -1, 1),
    "neu": (1, -1, 1),
    "nordostoben": (1, -1, 1),
    "northeastup": (1, -1, 1),
    "nou": (1, -1, -1),
    "ned": (1, -1, -1),
    "nordostunten": (1, -1, -1),
    "northeastdown": (1, -1, -1),

    # Nordwest
    "nwup": (-1, -1, 1),
    "nwob": (-1, -1, 1),
    "nordwestoben": (-1, -1, 1),
    "northwestup": (-1, -1, 1),
    "nwdown": (-1, -1, -1),
    "nordwestunten": (-1, -1, -1),
    "northwestdown": (-1, -1, -1),

    # Südost
    "soob": (1, 1, 1),
    "seup": (1, 1, 1),
    "südostoben": (1, 1, 1),
    "southeastup": (1, 1, 1),
    "sou": (1, 1, -1),
    "sedown": (1, 1, -1),
    "südostunten": (1, 1, -1),
    "southeastdown": (1, 1, -1),

    # Südwest
    "swob": (-1, 1, 1),
    "swup": (-1, 1, 1),
    "südwestoben": (-1, 1, 1),
    "southwestup": (-1, 1, 1),
    "swu": (-1, 1, -1),
    "swdown": (-1, 1, -1),
    "südwestunten": (-1, 1, -1),
    "southwestdown": (-1, 1, -1),
}

# Cardinal and ordinal directions on the current layer
DIRECTIONS_2D: Dict[str, Tuple[int, int]] = {
    "n": (0, -1),
    "north": (0, -1),
    "norden": (0, -1),
    "s": (0, 1),
    "south": (0, 1),
    "süden": (0, 1),
    "sued": (0, 1),
    "sueden": (0, 1),
    "e": (1, 0),
    "east": (1, 0),
    "osten": (1, 0),
    "o": (1, 0),
    "w": (-1, 0),
    "west": (-1, 0),
    "westen": (-1, 0),

    "ne": (1, -1),
    "no": (1, -1),
    "nordost": (1, -1),
    "nordosten": (1, -1),
    "northeast": (1, -1),
    "nw": (-1, -1),
    "nordwest": (-1, -1),
    "nordwesten": (-1, -1),
    "northwest": (-1, -1),
    "se": (1, 1),
    "so": (1, 1),
    "südost": (1, 1),
    "südosten": (1, 1),
    "southeast": (1, 1),
    "sw": (-1, 1),
    "südwest": (-1, 1),
    "südwesten": (-1, 1),
    "southwest": (-1, 1),
}

DIRECTIONS_UP: Tuple[str, ...] = ("up", "ob", "oben")
DIRECTIONS_DOWN: Tuple[str, ...] = ("down", "u", "unten")

_UMLAUTS = str.maketrans({"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss"})


def normalize_token(token: str) -> str:
    """Lower-case the token and spell umlauts in ASCII."""
    return token.strip().lower().translate(_UMLAUTS)


def _build_lookup() -> Dict[str, Coordinate]:
    # Inserted lowest precedence first so that higher tables win on collision
    lookup: Dict[str, Coordinate] = {}
    for word in DIRECTIONS_DOWN:
        lookup[normalize_token(word)] = Coordinate(0, 0, -1)
    for word in DIRECTIONS_UP:
        lookup[normalize_token(word)] = Coordinate(0, 0, 1)
    for word, (dx, dy) in DIRECTIONS_2D.items():
        lookup[normalize_token(word)] = Coordinate(dx, dy, 0)
    for word, (dx, dy, dz) in DIRECTIONS_3D.items():
        lookup[normalize_token(word)] = Coordinate(dx, dy, dz)
    return lookup


_LOOKUP: Dict[str, Coordinate] = _build_lookup()


def try_parse(token: str) -> tuple[Coordinate, bool]:
    """
    Resolve a movement command to its grid delta.

    Returns:
        (delta, True) for a known direction, (Coordinate(0, 0, 0), False)
        for anything else. An unknown token is simply not a movement command.
    """
    delta = _LOOKUP.get(normalize_token(token))
    if delta is None:
        logger.debug(f"Not a direction: {token!r}")
        return ORIGIN, False
    return delta, True


def is_direction(token: str) -> bool:
    return normalize_token(token) in _LOOKUP
