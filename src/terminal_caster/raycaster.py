"""A raycaster."""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .pose import Pose
from .read_assets import GameMap


class Hit(NamedTuple):
    """A ray stopped by an impassable tile."""

    distance: float
    """Euclidean distance from the player to the last sample."""
    tile: str
    """Identifier of the tile hit."""


class NoHit(NamedTuple):
    """A ray that left the map or ran out of range."""


NO_HIT = NoHit()


class Column(NamedTuple):
    """Heights of one screen column, top to bottom."""

    ceiling: int
    wall: int
    floor: int


def project(hit: Hit | NoHit, height: int) -> Column:
    """Convert a ray result into ceiling, wall and floor heights.

    Parameters
    ----------
    hit : Hit | NoHit
        Result of a cast.
    height : int
        Inner height of the viewport.

    Returns
    -------
    Column
        Non-negative heights summing to `height`.
    """
    if isinstance(hit, NoHit):
        ceiling = height // 2
        return Column(ceiling, 0, height - ceiling)

    h = float(height)
    distance = hit.distance
    if int(distance) in (0, 1):
        ceiling = 0
    else:
        ceiling = int(abs(h / 2 - h / distance))
    return Column(ceiling, height - 2 * ceiling, ceiling)


def band_index(bands: int, wall: int, height: int) -> int:
    """Index of the color band for a wall `wall` rows tall out of `height`."""
    return (bands - 1) * wall // height


@dataclass
class Raycaster:
    """A raycaster marching fixed steps through a tile map."""

    game_map: GameMap
    """The map rays are cast into."""
    fov: int = 89
    """Field of view in degrees, one ray per degree."""
    max_distance: float = 20.0
    """Determines how far rays are cast."""
    ray_step: float = 0.1
    """Distance between samples along a ray."""

    def __post_init__(self) -> None:
        # Sample distances along a ray, starting one step-length out.
        samples = round((self.max_distance - 1.0) / self.ray_step) + 1
        self._samples = 1.0 + self.ray_step * np.arange(samples, dtype=float)

    @property
    def offsets(self) -> range:
        """Column offsets in degrees, left to right."""
        half = self.fov // 2
        return range(-half, half)

    def cast(self, pose: Pose, offset: int) -> Hit | NoHit:
        """Cast a ray `offset` degrees from the player's facing.

        Raises
        ------
        UnknownTileError
            If the ray crosses a tile without metadata.
        """
        theta = np.radians((pose.angle + offset) % 360)
        ys = pose.y + np.sin(theta) * self._samples
        xs = pose.x + np.cos(theta) * self._samples
        # astype truncates toward zero like int().
        rows = ys.astype(int)
        columns = xs.astype(int)

        game_map = self.game_map
        for fy, fx, y, x in zip(ys, xs, rows.tolist(), columns.tolist()):
            tile = game_map.tile_at(y, x)
            if tile is None:
                return NO_HIT
            if not game_map.tile_data(tile).passable:
                distance = float(np.hypot(pose.y - fy, pose.x - fx))
                return Hit(distance, tile)
        return NO_HIT

    def column(self, pose: Pose, offset: int, height: int) -> tuple[Column, Hit | NoHit]:
        """Cast a ray and project it onto a viewport `height` rows tall."""
        hit = self.cast(pose, offset)
        return project(hit, height), hit
