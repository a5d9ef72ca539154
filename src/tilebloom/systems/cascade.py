from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Sequence, Tuple

from esper import World

from tilebloom.components.active_switch import ActiveSwitch
from tilebloom.components.blocked_cell import BlockedCell
from tilebloom.components.tile import TileStage, TileType
from tilebloom.constants import BASE_TILE_SCORE, CHAIN_BONUS_DIVISOR, POP_STAGE
from tilebloom.systems.board_ops import board_dimensions, position_index

Position = Tuple[int, int]

# Growth order for the four orthogonal neighbours: left, right, below, above.
NEIGHBOUR_OFFSETS: Tuple[Position, ...] = ((0, -1), (0, 1), (1, 0), (-1, 0))


@dataclass(slots=True)
class CascadeResult:
    base_score: int = 0
    chain: int = 0
    popped: List[Position] = field(default_factory=list)
    popped_types: List[Tuple[int, int, str]] = field(default_factory=list)
    grown: List[Position] = field(default_factory=list)
    # Lowest (largest) popped row per column; -1 marks an untouched column.
    lowest_popped: List[int] = field(default_factory=list)

    @property
    def score_delta(self) -> int:
        return self.base_score + self.base_score * self.chain // CHAIN_BONUS_DIVISOR


def trail_base_score(stage: int, trail_length: int) -> int:
    return BASE_TILE_SCORE * ((stage + 1) * trail_length) // 4


def pop_trail(world: World, trail: Sequence[Position]) -> CascadeResult:
    """Pop a validated trail and propagate growth until the board is quiet.

    Trail tiles are emptied up front and scored by their stage. Every pop then
    grows its live orthogonal neighbours by one stage; a neighbour reaching
    stage 3 is queued and popped in FIFO order. The chain counts every
    distinct popped cell, trail cells included.
    """
    dims = board_dimensions(world)
    if dims is None:
        raise RuntimeError("Board not initialised")
    rows, cols = dims
    index = position_index(world)
    result = CascadeResult(lowest_popped=[-1] * cols)
    queue: Deque[Position] = deque()

    for pos in trail:
        entity = index[pos]
        switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not switch.active:
            continue
        switch.active = False
        stage: TileStage = world.component_for_entity(entity, TileStage)
        result.base_score += trail_base_score(stage.stage, len(trail))
        queue.append(pos)

    while queue:
        row, col = queue.popleft()
        entity = index[(row, col)]
        world.component_for_entity(entity, ActiveSwitch).active = False
        result.chain += 1
        result.popped.append((row, col))
        result.popped_types.append((row, col, world.component_for_entity(entity, TileType).type_name))
        if result.lowest_popped[col] < row:
            result.lowest_popped[col] = row

        for dr, dc in NEIGHBOUR_OFFSETS:
            nr, nc = row + dr, col + dc
            if not (0 <= nr < rows and 0 <= nc < cols):
                continue
            neighbour = index[(nr, nc)]
            if world.has_component(neighbour, BlockedCell):
                continue
            if not world.component_for_entity(neighbour, ActiveSwitch).active:
                continue
            stage = world.component_for_entity(neighbour, TileStage)
            stage.stage += 1
            result.grown.append((nr, nc))
            if stage.stage == POP_STAGE:
                queue.append((nr, nc))

    return result


def lowest_popped_rows(popped: Sequence[Position], cols: int) -> List[int]:
    """Build the per-column gravity start rows for an arbitrary set of pops."""
    lowest = [-1] * cols
    for row, col in popped:
        if lowest[col] < row:
            lowest[col] = row
    return lowest

