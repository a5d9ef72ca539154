from __future__ import annotations

import random
from typing import Sequence

from esper import World

from tilebloom.events.bus import EventBus
from tilebloom.systems.board import BoardSystem
from tilebloom.systems.board_ops import fill_board, get_entity_at
from tilebloom.components.active_switch import ActiveSwitch
from tilebloom.world import create_world

LETTERS = {
    'r': 'red',
    'g': 'green',
    'b': 'blue',
    'p': 'purple',
    'y': 'yellow',
    '#': 'blocked',
}


def make_game(seed: int = 0, *, populate: bool = False, **world_kwargs):
    """Return ``(bus, world, board_system)`` with a seeded random source."""
    bus = EventBus()
    world = create_world(bus, rng=random.Random(seed), **world_kwargs)
    board = BoardSystem(world, bus, populate=populate)
    return bus, world, board


def paint(world: World, rows: Sequence[str], stages: Sequence[str] | None = None) -> None:
    """Lay out the board from one string per row.

    ``r g b p y`` are categories, ``#`` marks the blocked corners and ``.``
    an empty cell. ``stages`` uses the same shape with digits 0-2.
    """
    layout = []
    empties = []
    for r, line in enumerate(rows):
        row = []
        for c, ch in enumerate(line):
            stage = int(stages[r][c]) if stages is not None and ch not in '#.' else 0
            if ch == '.':
                empties.append((r, c))
                row.append(('red', 0))
            else:
                row.append((LETTERS[ch], stage))
        layout.append(row)
    fill_board(world, layout)
    for r, c in empties:
        world.component_for_entity(get_entity_at(world, r, c), ActiveSwitch).active = False


def uniform_rows(ch: str = 'r', rows: int = 6, cols: int = 9) -> list[str]:
    lines = []
    for r in range(rows):
        line = [ch] * cols
        if r in (0, rows - 1):
            line[0] = line[-1] = '#'
        lines.append("".join(line))
    return lines
