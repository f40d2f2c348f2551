import pytest

from terminal_caster.pose import Pose
from terminal_caster.raycaster import NO_HIT, Hit, Raycaster
from terminal_caster.read_assets import UnknownTileError
from terminal_caster.renderer import (
    CEILING_CHAR,
    FLOOR_CHAR,
    WALL_CHAR,
    Renderer,
    ViewportGeometry,
    attribute,
)

from .conftest import FakeScreen, make_map

PALETTE = {"#": [10, 20, 30], ".": []}


def make_renderer(game_map, screen, palette=PALETTE):
    return Renderer(Raycaster(game_map), ViewportGeometry.from_screen(screen), palette)


def test_geometry(screen):
    geometry = ViewportGeometry.from_screen(screen)
    assert geometry == ViewportGeometry(24, 182)
    assert geometry.inner_height == 22
    assert geometry.inner_width == 180


def test_repeat(room, screen):
    assert make_renderer(room, screen).repeat == 2
    assert make_renderer(room, FakeScreen(width=91)).repeat == 1


def test_wall_facing_player_is_colored_with_nearest_band(room, screen):
    make_renderer(room, screen).render_frame(screen, Pose(2.5, 2.5, 0))
    # Offset 0 is the 45th ray, drawn at columns 89 and 90.
    for y in range(1, 23):
        for x in (89, 90):
            assert screen.cells[y, x] == WALL_CHAR
            assert screen.attrs[y, x] == 30


def test_open_field_is_half_ceiling_half_floor(screen):
    game_map = make_map(["." * 60] * 60, spawn=(30.0, 30.0))
    make_renderer(game_map, screen).render_frame(screen, Pose(30.0, 30.0, 0))
    for x in range(1, 177):
        column = "".join(screen.cells[y, x] for y in range(1, 23))
        assert column == CEILING_CHAR * 11 + FLOOR_CHAR * 11
    assert set(screen.attrs.values()) == {0}


def test_frame_stays_inside_border(room, screen):
    make_renderer(room, screen).render_frame(screen, Pose(2.5, 2.5, 30))
    ys = {y for y, _ in screen.cells}
    xs = {x for _, x in screen.cells}
    assert ys == set(range(1, 23))
    assert xs == set(range(1, 177))


def test_ceiling_and_floor_are_never_colored(screen):
    rows = ["#" * 30] + ["#" + "." * 28 + "#"] * 28 + ["#" * 30]
    game_map = make_map(rows, spawn=(15.0, 15.0))
    make_renderer(game_map, screen).render_frame(screen, Pose(15.0, 20.5, 0))
    assert FLOOR_CHAR in screen.cells.values()
    for cell, char in screen.cells.items():
        if char == FLOOR_CHAR:
            assert screen.attrs[cell] == 0
    assert screen.attr == 0


def test_far_walls_use_farther_bands(screen):
    rows = ["#" * 30] + ["#" + "." * 28 + "#"] * 28 + ["#" * 30]
    game_map = make_map(rows, spawn=(15.0, 15.0))
    make_renderer(game_map, screen).render_frame(screen, Pose(15.0, 1.5, 0))
    # The east wall is 28 tiles away, past the reach of rays.
    assert screen.attrs[11, 89] == 0
    make_renderer(game_map, screen).render_frame(screen, Pose(15.0, 20.5, 0))
    assert screen.attrs[11, 89] == 10


def test_wall_attr(room, screen):
    renderer = make_renderer(room, screen)
    assert renderer.wall_attr(NO_HIT, 0) == 0
    assert renderer.wall_attr(Hit(1.5, "#"), 22) == 30
    assert renderer.wall_attr(Hit(9.0, "#"), 1) == 10


@pytest.mark.parametrize("tile", [".", "?"])
def test_wall_attr_without_bands(room, screen, tile):
    with pytest.raises(UnknownTileError):
        make_renderer(room, screen).wall_attr(Hit(3.0, tile), 10)


def test_colorless_wall_fails_the_frame(screen):
    game_map = make_map(["#####", "#...#", "#####"], spawn=(1.5, 1.5))
    renderer = make_renderer(game_map, screen, palette={"#": [], ".": []})
    with pytest.raises(UnknownTileError):
        renderer.render_frame(screen, Pose(1.5, 1.5, 0))


def test_narrow_screen_draws_nothing(room):
    screen = FakeScreen(width=80)
    make_renderer(room, screen).render_frame(screen, Pose(2.5, 2.5, 0))
    assert screen.cells == {}


class FailingScreen(FakeScreen):
    def addstr(self, y, x, text):
        if self.attr:
            raise RuntimeError("surface gone")
        super().addstr(y, x, text)


def test_color_is_turned_off_on_error(room):
    screen = FailingScreen()
    with pytest.raises(RuntimeError):
        make_renderer(room, screen).render_frame(screen, Pose(2.5, 2.5, 0))
    assert screen.attr == 0
    (on, attr), off = screen.calls
    assert on == "attron"
    assert off == ("attroff", attr)


def test_attribute(screen):
    with attribute(screen, 4):
        screen.addstr(1, 1, "x")
    screen.addstr(1, 2, "y")
    assert screen.attrs == {(1, 1): 4, (1, 2): 0}


def test_draw_border(room, screen):
    make_renderer(room, screen).draw_border(screen, 7)
    assert screen.calls == [("attron", 7), ("border", 7), ("attroff", 7)]
