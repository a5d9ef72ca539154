import pytest

from tilebloom.errors import MoveRejected
from tilebloom.systems.board_ops import tile_grid
from tilebloom.systems.move_validation import check_trail, is_adjacent, validate_trail

from tests.helpers import make_game, paint

ROWS = [
    "#rrgggbb#",
    "rrrgggbbb",
    "ppp.yyyyy",
    "ppp.yyyyy",
    "rgbpyrgbp",
    "#rgbpyrg#",
]


def _world():
    bus, world, board = make_game()
    paint(world, ROWS)
    return world


def test_adjacency_is_eight_directional():
    assert is_adjacent((1, 1), (2, 2))
    assert is_adjacent((1, 1), (1, 0))
    assert not is_adjacent((1, 1), (1, 1))
    assert not is_adjacent((1, 1), (3, 1))


def test_valid_trail_passes_and_leaves_board_untouched():
    world = _world()
    before = tile_grid(world)
    validate_trail(world, [(1, 0), (1, 1), (0, 1)])
    assert check_trail(world, [(2, 4), (3, 5), (2, 6)]) is None
    assert tile_grid(world) == before


@pytest.mark.parametrize(
    "trail, reason",
    [
        ([(1, 0), (1, 1)], "Moves should be 3+ tiles."),
        ([(1, 0), (1, 1), (1, 9)], "Move 3 is outside the board. Cannot do move."),
        ([(0, 0), (1, 0), (1, 1)], "Move 1 is not a playable tile. Cannot do move."),
        ([(2, 3), (3, 3), (2, 4)], "Move 1 is not a playable tile. Cannot do move."),
        ([(1, 0), (1, 2), (1, 1)], "Move 2 not adjacent tiles. Cannot do move."),
        ([(1, 0), (1, 1), (1, 1)], "Move 3 not adjacent tiles. Cannot do move."),
        ([(1, 1), (1, 2), (1, 3)], "Move 3 not same type. Cannot do move."),
        ([(0, 1), (0, 0), (1, 0)], "Move 2 not same type. Cannot do move."),
        ([(2, 2), (2, 3), (3, 2)], "Move 2 not same type. Cannot do move."),
    ],
)
def test_invalid_trails_are_rejected(trail, reason):
    world = _world()
    with pytest.raises(MoveRejected) as excinfo:
        validate_trail(world, trail)
    assert excinfo.value.reason == reason
    assert check_trail(world, trail) == reason
