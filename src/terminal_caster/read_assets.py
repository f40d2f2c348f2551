"""Functions for reading maps.

Notes
-----
A map is a plain text file, one row per line, with every character a tile
identifier. Rows are not padded: a row shorter than the first one simply ends
early, and anything past its end is outside the map.

Each map directory also holds a ``metadata.json`` describing the player and the
tiles::

    {
        "speed": 0.3,
        "turnspeed": 5,
        "spawn": [2.5, 2.5],
        "tiles": {
            ".": {"passable": true},
            "#": {"passable": false, "colors": [1, 9]}
        }
    }

``colors`` are terminal palette indices ordered from far (small wall) to near
(tall wall).
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "METADATA_FILE",
    "MapLoadError",
    "UnknownTileError",
    "TileData",
    "MapData",
    "GameMap",
    "read_map",
    "read_metadata",
]

METADATA_FILE = "metadata.json"

logger = logging.getLogger(__name__)


class MapLoadError(Exception):
    """A map or its metadata could not be read."""


class UnknownTileError(LookupError):
    """A tile identifier has no usable metadata."""

    def __init__(self, tile: str) -> None:
        super().__init__(f"unrecognizable tile: {tile!r}")
        self.tile = tile


@dataclass(frozen=True)
class TileData:
    """Metadata of a single tile."""

    passable: bool = False
    """Whether the player can walk through the tile (and rays pass it)."""
    colors: tuple[int, ...] = ()
    """Palette indices of the tile's color bands, far to near."""


@dataclass(frozen=True)
class MapData:
    """Per-map settings read from ``metadata.json``."""

    speed: float
    """Distance moved per key press."""
    turn_speed: int
    """Degrees turned per key press."""
    spawn: tuple[float, float]
    """Initial ``(y, x)`` of the player."""
    tiles: Mapping[str, TileData] = field(default_factory=dict)
    """Tile metadata keyed by tile identifier."""


@dataclass(frozen=True)
class GameMap:
    """A grid of tile identifiers together with its metadata."""

    rows: tuple[str, ...]
    """Rows of the grid, kept exactly as read."""
    data: MapData
    """Metadata of the map."""

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Length of the first row."""
        return len(self.rows[0]) if self.rows else 0

    def tile_at(self, y: int, x: int) -> str | None:
        """Return the tile identifier at integer indices, or None outside the map."""
        if not (0 <= y < self.height and 0 <= x < self.width):
            return None
        row = self.rows[y]
        if x >= len(row):
            return None
        return row[x]

    def tile_data(self, tile: str) -> TileData:
        """Return metadata of a tile identifier.

        Raises
        ------
        UnknownTileError
            If the identifier is missing from the metadata.
        """
        try:
            return self.data.tiles[tile]
        except KeyError:
            raise UnknownTileError(tile) from None


def _require(document: Mapping, key: str, kind: type | tuple[type, ...], path: Path):
    try:
        value = document[key]
    except KeyError:
        raise MapLoadError(f"{path}: missing {key!r}") from None
    # bool is an int subclass.
    if isinstance(value, bool) or not isinstance(value, kind):
        raise MapLoadError(f"{path}: {key!r} has the wrong type")
    return value


def _read_tile(tile: str, document, path: Path) -> TileData:
    if len(tile) != 1:
        raise MapLoadError(f"{path}: tile identifier {tile!r} is not a single character")
    if not isinstance(document, Mapping):
        raise MapLoadError(f"{path}: tile {tile!r} is not an object")

    passable = document.get("passable", False)
    if not isinstance(passable, bool):
        raise MapLoadError(f"{path}: tile {tile!r} has a non-boolean 'passable'")

    colors = document.get("colors", [])
    if not isinstance(colors, list) or not all(
        isinstance(color, int) and not isinstance(color, bool) for color in colors
    ):
        raise MapLoadError(f"{path}: tile {tile!r} has malformed 'colors'")

    return TileData(passable=passable, colors=tuple(colors))


def read_metadata(path: Path) -> MapData:
    """Read map metadata from a json file.

    Parameters
    ----------
    path : Path
        Path to ``metadata.json``.

    Returns
    -------
    MapData
        Settings of the map.

    Raises
    ------
    MapLoadError
        If the file is unreadable, not json, or malformed.
    """
    try:
        with open(path) as file:
            document = json.load(file)
    except OSError as err:
        raise MapLoadError(f"can't read metadata {path}: {err}") from err
    except json.JSONDecodeError as err:
        raise MapLoadError(f"{path}: invalid json: {err}") from err

    if not isinstance(document, dict):
        raise MapLoadError(f"{path}: expected a json object")

    speed = _require(document, "speed", (int, float), path)
    turn_speed = _require(document, "turnspeed", int, path)
    spawn = _require(document, "spawn", list, path)
    if len(spawn) != 2 or not all(
        isinstance(coord, (int, float)) and not isinstance(coord, bool)
        for coord in spawn
    ):
        raise MapLoadError(f"{path}: 'spawn' must be a pair of numbers")
    tiles = _require(document, "tiles", dict, path)

    return MapData(
        speed=float(speed),
        turn_speed=turn_speed,
        spawn=(float(spawn[0]), float(spawn[1])),
        tiles={tile: _read_tile(tile, data, path) for tile, data in tiles.items()},
    )


def read_map(path: Path) -> GameMap:
    """Read a map and the metadata next to it.

    Parameters
    ----------
    path : Path
        Path to text file of map. ``metadata.json`` must be in the same
        directory.

    Returns
    -------
    GameMap
        The grid with its metadata.

    Raises
    ------
    MapLoadError
        If either file is unreadable or malformed, or the spawn point is not on
        a known tile.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as err:
        raise MapLoadError(f"can't read map {path}: {err}") from err

    rows = tuple(text.splitlines())
    if not rows or not rows[0]:
        raise MapLoadError(f"{path}: map is empty")

    game_map = GameMap(rows, read_metadata(path.parent / METADATA_FILE))

    y, x = game_map.data.spawn
    if not (0 <= y < game_map.height and 0 <= x < game_map.width):
        raise MapLoadError(f"{path}: spawn {y, x} is outside the map")
    spawn_tile = game_map.tile_at(int(y), int(x))
    if spawn_tile is None or spawn_tile not in game_map.data.tiles:
        raise MapLoadError(f"{path}: spawn {y, x} is not on a known tile")

    logger.info(
        "loaded %s: %d rows, width %d, %d tile kinds",
        path,
        game_map.height,
        game_map.width,
        len(game_map.data.tiles),
    )
    return game_map
