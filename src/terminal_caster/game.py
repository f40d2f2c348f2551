"""Color setup and the frame/input loop, independent of how keys are read."""

import curses
import logging
from typing import Protocol

from .controller import Command, Controller, GameState
from .raycaster import Raycaster
from .read_assets import GameMap
from .renderer import Renderer, ViewportGeometry

BORDER_COLOR = curses.COLOR_MAGENTA

logger = logging.getLogger(__name__)


class CommandSource(Protocol):
    def get(self) -> Command | None:
        ...


def init_colors(game_map: GameMap) -> tuple[int, dict[str, list[int]]]:
    """Register color pairs; return the border attribute and each tile's bands.

    Pair 1 is the border. Each tile's bands follow in metadata order, one pair
    per band, with the palette index as background.

    Raises
    ------
    curses.error
        If the terminal rejects a palette index.
    """
    curses.start_color()
    curses.use_default_colors()

    pair = 1
    curses.init_pair(pair, BORDER_COLOR, -1)
    border = curses.color_pair(pair)

    palette = {}
    for tile, data in game_map.data.tiles.items():
        bands = []
        for color in data.colors:
            pair += 1
            try:
                curses.init_pair(pair, -1, color)
            except ValueError as err:
                raise curses.error(f"tile {tile!r}: color {color}: {err}") from err
            bands.append(curses.color_pair(pair))
        palette[tile] = bands
    logger.debug("registered %d color pairs", pair)
    return border, palette


def play(screen, game_map: GameMap, commands: CommandSource) -> GameState:
    """Draw a frame, wait for a command, apply it; repeat until quit.

    Returns the final state.
    """
    state = GameState.spawn(game_map)
    controller = Controller(game_map, state)

    border, palette = init_colors(game_map)
    geometry = ViewportGeometry.from_screen(screen)
    renderer = Renderer(Raycaster(game_map), geometry, palette)
    logger.info(
        "viewport %dx%d, %d columns per ray",
        geometry.width,
        geometry.height,
        renderer.repeat,
    )

    renderer.draw_border(screen, border)

    while state.running:
        renderer.render_frame(screen, state.pose)
        screen.refresh()
        controller.handle(commands.get())
    return state
