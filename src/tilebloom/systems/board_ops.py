from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from esper import World

from tilebloom.components.active_switch import ActiveSwitch
from tilebloom.components.blocked_cell import BlockedCell
from tilebloom.components.board import Board
from tilebloom.components.board_position import BoardPosition
from tilebloom.components.tile import TileStage, TileType
from tilebloom.components.tile_type_registry import TileTypeRegistry
from tilebloom.components.tile_types import TileTypes
from tilebloom.constants import BLOCKED_TYPE, MAX_STAGE

Position = Tuple[int, int]


@dataclass(slots=True, frozen=True)
class Cell:
    """Read-only snapshot of one board cell."""
    row: int
    col: int
    type_name: str
    stage: int
    active: bool
    blocked: bool

    @property
    def playable(self) -> bool:
        """True when the cell holds a live tile (neither BLOCKED nor EMPTY)."""
        return self.active and not self.blocked


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def get_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None


def board_dimensions(world: World) -> Tuple[int, int] | None:
    board = get_board(world)
    if board is None:
        return None
    return board.rows, board.cols


def in_bounds(world: World, row: int, col: int) -> bool:
    board = get_board(world)
    return board is not None and board.in_bounds(row, col)


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def position_index(world: World) -> Dict[Position, int]:
    """Map every board position to its tile entity."""
    return {(pos.row, pos.col): entity for entity, pos in world.get_component(BoardPosition)}


def cell_at(world: World, row: int, col: int) -> Cell | None:
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    return _cell_for_entity(world, entity, row, col)


def _cell_for_entity(world: World, entity: int, row: int, col: int) -> Cell:
    blocked = world.has_component(entity, BlockedCell)
    tile: TileType = world.component_for_entity(entity, TileType)
    stage: TileStage = world.component_for_entity(entity, TileStage)
    switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
    return Cell(
        row=row,
        col=col,
        type_name=tile.type_name,
        stage=stage.stage,
        active=switch.active,
        blocked=blocked,
    )


def tile_grid(world: World) -> List[List[Cell]]:
    """Return the board as ``grid[row][col]`` snapshots."""
    dims = board_dimensions(world)
    if dims is None:
        return []
    rows, cols = dims
    index = position_index(world)
    grid: List[List[Cell]] = []
    for row in range(rows):
        row_cells: List[Cell] = []
        for col in range(cols):
            entity = index.get((row, col))
            if entity is None:
                raise RuntimeError(f"Board cell {(row, col)} has no tile entity")
            row_cells.append(_cell_for_entity(world, entity, row, col))
        grid.append(row_cells)
    return grid


def fill_board(world: World, layout: Sequence[Sequence[Tuple[str, int]]]) -> None:
    """Apply a ``layout[row][col] = (type_name, stage)`` grid to the board.

    Blocked cells keep their tag; any cell the layout marks ``blocked`` must
    already be one.
    """
    index = position_index(world)
    for row, row_values in enumerate(layout):
        for col, (type_name, stage) in enumerate(row_values):
            entity = index[(row, col)]
            is_blocked = world.has_component(entity, BlockedCell)
            if type_name == BLOCKED_TYPE:
                if not is_blocked:
                    raise ValueError(f"Cell {(row, col)} cannot become blocked")
                continue
            if is_blocked:
                raise ValueError(f"Blocked cell {(row, col)} cannot hold a tile")
            world.component_for_entity(entity, TileType).type_name = type_name
            world.component_for_entity(entity, TileStage).stage = stage
            world.component_for_entity(entity, ActiveSwitch).active = True


def world_rng(world: World, rng: Optional[random.Random] = None) -> random.Random:
    candidate = rng or getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def spawn_tile(world: World, entity: int, rng: random.Random, *, random_stage: bool = False) -> str:
    """Give a cell a fresh random tile; stage is 0 unless ``random_stage``."""
    choices = get_tile_registry(world).spawnable_types()
    type_name = rng.choice(choices)
    world.component_for_entity(entity, TileType).type_name = type_name
    world.component_for_entity(entity, TileStage).stage = rng.randint(0, MAX_STAGE) if random_stage else 0
    world.component_for_entity(entity, ActiveSwitch).active = True
    return type_name
