"""Player movement."""

import logging
from dataclasses import dataclass
from enum import Enum, auto

import numpy as np
from numpy.typing import NDArray

from .pose import STRAFE_LEFT, STRAFE_RIGHT, Pose
from .read_assets import GameMap

logger = logging.getLogger(__name__)


class Command(Enum):
    """Everything a key press can ask for."""

    QUIT = auto()
    TURN_LEFT = auto()
    TURN_RIGHT = auto()
    FORWARD = auto()
    BACKWARD = auto()
    STRAFE_LEFT = auto()
    STRAFE_RIGHT = auto()


@dataclass
class GameState:
    """State owned by the game loop."""

    pose: Pose
    running: bool = True

    @classmethod
    def spawn(cls, game_map: GameMap) -> "GameState":
        y, x = game_map.data.spawn
        return cls(Pose(y, x))


@dataclass
class Controller:
    """Applies commands to the game state, rejecting moves into walls."""

    game_map: GameMap
    state: GameState

    def handle(self, command: Command | None) -> None:
        """Apply a single command. ``None`` is an unmapped key and does nothing.

        Raises
        ------
        UnknownTileError
            If the destination tile has no metadata.
        """
        if command is None:
            return

        state = self.state
        pose = state.pose
        data = self.game_map.data

        if command is Command.QUIT:
            logger.info("quit")
            state.running = False
        elif command is Command.TURN_LEFT:
            pose.angle = pose.turned(-data.turn_speed)
        elif command is Command.TURN_RIGHT:
            pose.angle = pose.turned(data.turn_speed)
        else:
            self._move_to(self._candidate(command))

    def _candidate(self, command: Command) -> NDArray[np.float64]:
        pose = self.state.pose
        step = self.game_map.data.speed * pose.heading
        if command is Command.BACKWARD:
            step = -step
        elif command is Command.STRAFE_LEFT:
            step = step @ STRAFE_LEFT
        elif command is Command.STRAFE_RIGHT:
            step = step @ STRAFE_RIGHT
        return np.array([pose.y, pose.x]) + step

    def _move_to(self, pos: NDArray[np.float64]) -> None:
        game_map = self.game_map
        y, x = pos.tolist()
        if y < 0 or x < 0 or y >= game_map.height or x >= game_map.width:
            logger.debug("move to %.2f, %.2f rejected: out of bounds", y, x)
            return

        tile = game_map.tile_at(int(y), int(x))
        if tile is None:
            logger.debug("move to %.2f, %.2f rejected: past end of row", y, x)
            return
        if not game_map.tile_data(tile).passable:
            logger.debug("move to %.2f, %.2f rejected: %r is impassable", y, x, tile)
            return

        pose = self.state.pose
        pose.y, pose.x = y, x
