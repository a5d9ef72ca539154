from tilebloom.constants import TILE_CATEGORIES
from tilebloom.systems.board_ops import cell_at, tile_grid
from tilebloom.systems.cascade import pop_trail
from tilebloom.systems.gravity import GravityMove, settle_columns

from tests.helpers import make_game, paint


def test_surviving_tiles_fall_and_tops_refill():
    bus, world, board = make_game()
    paint(world, [
        "#rgbpyrg#",
        "rgbpyrgbp",
        "gb..prgbp",
        "bp..yrgbp",
        "pyrgbrgbp",
        "#yrgbrgb#",
    ])
    lowest = [-1] * 9
    lowest[2] = 3
    lowest[3] = 3

    result = settle_columns(world, lowest)

    assert result.moves == [
        GravityMove(source=(1, 2), target=(3, 2), type_name="blue"),
        GravityMove(source=(0, 2), target=(2, 2), type_name="green"),
        GravityMove(source=(1, 3), target=(3, 3), type_name="purple"),
        GravityMove(source=(0, 3), target=(2, 3), type_name="blue"),
    ]
    assert cell_at(world, 3, 2).type_name == "blue"
    assert cell_at(world, 2, 2).type_name == "green"
    assert result.new_tiles == [(0, 2), (1, 2), (0, 3), (1, 3)]
    for row in range(2):
        for col in (2, 3):
            cell = cell_at(world, row, col)
            assert cell.active and cell.stage == 0
            assert cell.type_name in TILE_CATEGORIES


def test_board_is_full_after_settling():
    bus, world, board = make_game(seed=9)
    board.new_game_layout()
    result = pop_trail(world, [(4, 4)])
    settle_columns(world, result.lowest_popped)
    grid = tile_grid(world)
    for row in grid:
        for cell in row:
            assert cell.active


def test_tiles_compact_around_blocked_corner():
    bus, world, board = make_game()
    paint(world, [
        "#rrrrrrr#",
        "grrrrrrrr",
        "brrrrrrrr",
        "prrrrrrrr",
        ".rrrrrrrr",
        "#rrrrrrr#",
    ])
    lowest = [-1] * 9
    lowest[0] = 4

    result = settle_columns(world, lowest)

    assert [m.target for m in result.moves] == [(4, 0), (3, 0), (2, 0)]
    assert cell_at(world, 4, 0).type_name == 'purple'
    assert cell_at(world, 3, 0).type_name == 'blue'
    assert cell_at(world, 2, 0).type_name == 'green'
    # Row 0 is the blocked corner, so only row 1 is refilled.
    assert result.new_tiles == [(1, 0)]
    assert cell_at(world, 0, 0).blocked
    assert cell_at(world, 5, 0).blocked


def test_untouched_columns_are_left_alone():
    bus, world, board = make_game()
    board.new_game_layout()
    before = tile_grid(world)
    result = settle_columns(world, [-1] * 9)
    assert result.moves == [] and result.new_tiles == []
    assert tile_grid(world) == before
