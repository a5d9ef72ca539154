from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from esper import World

from tilebloom.components.active_switch import ActiveSwitch
from tilebloom.components.blocked_cell import BlockedCell
from tilebloom.components.tile import TileStage, TileType
from tilebloom.systems.board_ops import position_index, spawn_tile, world_rng

Position = Tuple[int, int]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    type_name: str


@dataclass(slots=True)
class SettleResult:
    moves: List[GravityMove] = field(default_factory=list)
    new_tiles: List[Position] = field(default_factory=list)


def settle_columns(
    world: World,
    lowest_popped: Sequence[int],
    rng: Optional[random.Random] = None,
) -> SettleResult:
    """Drop surviving tiles into emptied slots and refill the column tops.

    ``lowest_popped[col]`` is the bottom-most popped row of each column, or -1
    for columns the move never touched. Each touched column is scanned from
    that row up to row 0 while counting gaps; blocked cells count as gaps so
    tiles compact around them, but never move. A tile whose landing cell is
    blocked stops one short of it. The top ``gap`` cells are then refilled
    with stage-0 tiles.
    """
    rng = world_rng(world, rng)
    index = position_index(world)
    result = SettleResult()

    for col, start in enumerate(lowest_popped):
        if start < 0:
            continue
        empty = 0
        for row in range(start, -1, -1):
            entity = index[(row, col)]
            if world.has_component(entity, BlockedCell):
                empty += 1
                continue
            if not world.component_for_entity(entity, ActiveSwitch).active:
                empty += 1
                continue
            while empty > 0 and world.has_component(index[(row + empty, col)], BlockedCell):
                empty -= 1
            if empty == 0:
                continue
            target = index[(row + empty, col)]
            _copy_tile(world, entity, target)
            result.moves.append(
                GravityMove(
                    source=(row, col),
                    target=(row + empty, col),
                    type_name=world.component_for_entity(entity, TileType).type_name,
                )
            )
        for row in range(empty):
            entity = index[(row, col)]
            if world.has_component(entity, BlockedCell):
                continue
            spawn_tile(world, entity, rng)
            result.new_tiles.append((row, col))

    return result


def _copy_tile(world: World, source: int, target: int) -> None:
    world.component_for_entity(target, TileType).type_name = world.component_for_entity(source, TileType).type_name
    world.component_for_entity(target, TileStage).stage = world.component_for_entity(source, TileStage).stage
    world.component_for_entity(target, ActiveSwitch).active = True
