"""Paints raycaster columns onto a curses window."""

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from .pose import Pose
from .raycaster import Hit, NoHit, Raycaster, band_index
from .read_assets import UnknownTileError

CEILING_CHAR = " "
WALL_CHAR = " "
FLOOR_CHAR = "."


@contextmanager
def attribute(screen, attr: int) -> Iterator[None]:
    """Turn `attr` on for the duration of the block."""
    screen.attron(attr)
    try:
        yield
    finally:
        screen.attroff(attr)


@dataclass(frozen=True)
class ViewportGeometry:
    """Dimensions of the window, including its one-cell border.

    The fixed parts of the view, field of view, ray reach and ray step, are
    `Raycaster.fov`, `Raycaster.max_distance` and `Raycaster.ray_step`.
    """

    height: int
    width: int

    @classmethod
    def from_screen(cls, screen) -> "ViewportGeometry":
        height, width = screen.getmaxyx()
        return cls(height, width)

    @property
    def inner_height(self) -> int:
        return max(self.height - 2, 0)

    @property
    def inner_width(self) -> int:
        return max(self.width - 2, 0)


@dataclass
class Renderer:
    """Draws one frame per call from the player's pose.

    Parameters
    ----------
    raycaster : Raycaster
        Casts the rays of each frame.
    geometry : ViewportGeometry
        Size of the window.
    palette : Mapping[str, Sequence[int]]
        Curses attributes of each tile's color bands, far to near.
    """

    raycaster: Raycaster
    """Casts the rays of each frame."""
    geometry: ViewportGeometry
    """Size of the window."""
    palette: Mapping[str, Sequence[int]]
    """Curses attributes of each tile's color bands, far to near."""

    @property
    def repeat(self) -> int:
        """Terminal columns drawn per ray; characters are taller than they are wide."""
        return self.geometry.inner_width // self.raycaster.fov

    def wall_attr(self, hit: Hit | NoHit, wall: int) -> int:
        """Attribute of a wall `wall` rows tall.

        Raises
        ------
        UnknownTileError
            If the tile hit has no color bands.
        """
        if isinstance(hit, NoHit):
            return 0
        bands = self.palette.get(hit.tile)
        if not bands:
            raise UnknownTileError(hit.tile)
        return bands[band_index(len(bands), wall, self.geometry.inner_height)]

    def draw_border(self, screen, attr: int = 0) -> None:
        """Draw the frame around the viewport."""
        with attribute(screen, attr):
            screen.border()

    def render_frame(self, screen, pose: Pose) -> None:
        """Cast every ray and paint the columns left to right."""
        repeat = self.repeat
        height = self.geometry.inner_height
        if repeat == 0 or height == 0:
            return

        caster = self.raycaster
        offsets = caster.offsets
        for i, offset in enumerate(offsets):
            (ceiling, wall, floor), hit = caster.column(pose, offset, height)
            attr = self.wall_attr(hit, wall)
            x = 1 + i * repeat
            y = 1

            for _ in range(ceiling):
                screen.addstr(y, x, CEILING_CHAR * repeat)
                y += 1

            with attribute(screen, attr):
                for _ in range(wall):
                    screen.addstr(y, x, WALL_CHAR * repeat)
                    y += 1

            for _ in range(floor):
                screen.addstr(y, x, FLOOR_CHAR * repeat)
                y += 1
