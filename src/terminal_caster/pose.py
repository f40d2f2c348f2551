"""The player's pose."""

from dataclasses import dataclass
from math import radians

import numpy as np
from numpy.typing import NDArray


def rotation_matrix(theta: float) -> NDArray[np.float64]:
    """Return a 2-D rotation matrix from a given angle."""
    x = np.cos(theta)
    y = np.sin(theta)
    return np.array([[x, y], [-y, x]], float)


STRAFE_LEFT = rotation_matrix(np.pi / 2)
STRAFE_RIGHT = rotation_matrix(3 * np.pi / 2)


@dataclass
class Pose:
    """Position and facing of the player.

    Parameters
    ----------
    y : float
        Row position on the map.
    x : float
        Column position on the map.
    angle : int, default: 0
        Facing in whole degrees, 0 faces east (increasing x).

    Attributes
    ----------
    y : float
        Row position on the map.
    x : float
        Column position on the map.
    angle : int
        Facing in whole degrees, always in ``[0, 360)``.
    """

    y: float
    x: float
    angle: int = 0

    def __post_init__(self) -> None:
        self.angle %= 360

    @property
    def theta(self) -> float:
        """Facing in radians."""
        return radians(self.angle)

    @property
    def heading(self) -> NDArray[np.float64]:
        """Unit vector of the facing direction as ``(dy, dx)``."""
        theta = self.theta
        return np.array([np.sin(theta), np.cos(theta)], float)

    def turned(self, degrees: int) -> int:
        """Return the facing after turning `degrees`, normalized into ``[0, 360)``."""
        return (self.angle + degrees) % 360
