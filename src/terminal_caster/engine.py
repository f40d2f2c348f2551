"""A raycaster game engine."""

import curses
from dataclasses import dataclass
from queue import Queue

from pynput import keyboard
from pynput.keyboard import Key, KeyCode

from .controller import Command
from .game import play
from .read_assets import GameMap

KEY_BINDINGS: dict[Key | KeyCode, Command] = {
    Key.esc: Command.QUIT,
    Key.up: Command.FORWARD,
    KeyCode(char="w"): Command.FORWARD,
    Key.down: Command.BACKWARD,
    KeyCode(char="s"): Command.BACKWARD,
    Key.left: Command.TURN_LEFT,
    KeyCode(char="a"): Command.TURN_LEFT,
    Key.right: Command.TURN_RIGHT,
    KeyCode(char="d"): Command.TURN_RIGHT,
    KeyCode(char="q"): Command.STRAFE_LEFT,
    KeyCode(char="<"): Command.STRAFE_LEFT,
    KeyCode(char="e"): Command.STRAFE_RIGHT,
    KeyCode(char=">"): Command.STRAFE_RIGHT,
}


@dataclass
class Engine:
    """A raycaster game engine.

    Parameters
    ----------
    game_map : GameMap
        The map to explore.
    """

    game_map: GameMap
    """The map to explore."""

    def run(self) -> None:
        """Run the game engine until quit is pressed."""
        curses.wrapper(self._run)

    def _run(self, screen) -> None:
        curses.curs_set(0)
        curses.set_escdelay(1)
        screen.keypad(True)

        commands: Queue[Command] = Queue()

        def on_press(key):
            if (command := KEY_BINDINGS.get(key)) is not None:
                commands.put(command)

        listener = keyboard.Listener(on_press=on_press)
        listener.start()

        try:
            play(screen, self.game_map, commands)
        finally:
            listener.stop()
            curses.flushinp()
