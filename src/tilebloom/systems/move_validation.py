from typing import Optional, Sequence, Tuple

from esper import World

from tilebloom.constants import MIN_TRAIL_LENGTH
from tilebloom.errors import MoveRejected
from tilebloom.systems.board_ops import cell_at, get_board, in_bounds

Position = Tuple[int, int]


def is_adjacent(a: Position, b: Position) -> bool:
    """8-directional neighbours: Chebyshev distance of exactly one."""
    dr = abs(a[0] - b[0])
    dc = abs(a[1] - b[1])
    return max(dr, dc) == 1


def validate_trail(world: World, trail: Sequence[Position]) -> None:
    """Raise ``MoveRejected`` unless ``trail`` is a legal move.

    Checks run in order: length, bounds, first tile, then adjacency and
    category for each step. The world is never modified.
    """
    if len(trail) < MIN_TRAIL_LENGTH:
        raise MoveRejected(f"Moves should be {MIN_TRAIL_LENGTH}+ tiles.")
    if get_board(world) is None:
        raise MoveRejected("No board to play on.")
    for index, (row, col) in enumerate(trail):
        if not in_bounds(world, row, col):
            raise MoveRejected(
                f"Move {index + 1} is outside the board. Cannot do move.", index=index
            )
    first = cell_at(world, *trail[0])
    if first is None or not first.playable:
        raise MoveRejected("Move 1 is not a playable tile. Cannot do move.", index=0)
    for index in range(1, len(trail)):
        if not is_adjacent(trail[index - 1], trail[index]):
            raise MoveRejected(
                f"Move {index + 1} not adjacent tiles. Cannot do move.", index=index
            )
        cell = cell_at(world, *trail[index])
        if cell is None or not cell.playable or cell.type_name != first.type_name:
            raise MoveRejected(
                f"Move {index + 1} not same type. Cannot do move.", index=index
            )


def check_trail(world: World, trail: Sequence[Position]) -> Optional[str]:
    """Return the rejection reason for ``trail``, or None if it is legal."""
    try:
        validate_trail(world, trail)
    except MoveRejected as exc:
        return exc.reason
    return None
