"""Explore a tile map from the first person.

Controls
--------
- `wasd` or arrow-keys to move and turn
- `qe` or `<>` to strafe
- `esc` to exit

Usage: ``python -m terminal_caster path/to/dungeon.map``. ``metadata.json``
must sit next to the map.
"""

import argparse
import curses
import logging
import sys
from pathlib import Path

from .read_assets import METADATA_FILE, MapLoadError, UnknownTileError, read_map

ASSETS = Path(__file__).parent / "assets"

logger = logging.getLogger(__package__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terminal-caster",
        description=(
            "First-person raycaster for the terminal. "
            f"The map's directory must also contain {METADATA_FILE}."
        ),
        epilog=f"Example map: {ASSETS / 'dungeon.map'}",
    )
    parser.add_argument("map", nargs="*", help="Path to the map file")
    parser.add_argument("--log-file", type=Path, help="Append debug logs to this file")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _parser()
    # Unknown options still exit through argparse with status 2; a wrong number
    # of map paths only prints usage.
    args = parser.parse_args(argv)
    if len(args.map) != 1:
        parser.print_usage()
        print(
            "Please specify the path to the map file "
            f"(its directory also has to contain {METADATA_FILE})"
        )
        return 0

    if args.log_file is not None:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        game_map = read_map(Path(args.map[0]))

        # pynput connects to the display on import.
        from .engine import Engine

        Engine(game_map).run()
    except (MapLoadError, UnknownTileError, curses.error) as err:
        logger.exception("fatal error")
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
