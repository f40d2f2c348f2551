import pytest

from terminal_caster.read_assets import GameMap, MapData, TileData

FLOOR = TileData(passable=True)
WALL = TileData(passable=False, colors=(1, 2, 3))

ROOM = (
    "#####",
    "#...#",
    "#...#",
    "#...#",
    "#####",
)


def make_map(rows, tiles=None, speed=0.5, turn_speed=15, spawn=(2.5, 2.5)) -> GameMap:
    if tiles is None:
        tiles = {".": FLOOR, "#": WALL}
    return GameMap(tuple(rows), MapData(speed, turn_speed, spawn, tiles))


class FakeScreen:
    """Records what would have been drawn on a curses window."""

    def __init__(self, height=24, width=182):
        self.height = height
        self.width = width
        self.attr = 0
        self.cells = {}
        self.attrs = {}
        self.calls = []

    def getmaxyx(self):
        return self.height, self.width

    def attron(self, attr):
        self.calls.append(("attron", attr))
        self.attr |= attr

    def attroff(self, attr):
        self.calls.append(("attroff", attr))
        self.attr &= ~attr

    def addstr(self, y, x, text):
        for i, char in enumerate(text):
            self.cells[y, x + i] = char
            self.attrs[y, x + i] = self.attr

    def border(self):
        self.calls.append(("border", self.attr))

    def refresh(self):
        self.calls.append(("refresh",))


@pytest.fixture
def room():
    return make_map(ROOM)


@pytest.fixture
def screen():
    return FakeScreen()
