import logging
from typing import Optional

from esper import World

from tilebloom.components.active_switch import ActiveSwitch
from tilebloom.components.blocked_cell import BlockedCell
from tilebloom.components.board import Board
from tilebloom.components.board_position import BoardPosition
from tilebloom.components.tile import TileStage, TileType
from tilebloom.constants import BLOCKED_TYPE, GRID_COLS, GRID_ROWS, TILE_CATEGORIES
from tilebloom.events.bus import EventBus, EVENT_BOARD_INITIALIZED
from tilebloom.systems.board_ops import get_entity_at, spawn_tile, world_rng

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and the per-cell tile entities.

    The four corners are tagged ``BlockedCell`` at creation and never change.
    With ``populate`` the remaining cells receive random categories and random
    stages, which is how a new game starts.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        *,
        populate: bool = True,
    ):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=rows, cols=cols))
        self._init_board()
        if populate:
            self.new_game_layout()

    def _init_board(self):
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        corners = {
            (0, 0),
            (0, board.cols - 1),
            (board.rows - 1, 0),
            (board.rows - 1, board.cols - 1),
        }
        for r in range(board.rows):
            for c in range(board.cols):
                ent = self.world.create_entity()
                self.world.add_component(ent, BoardPosition(row=r, col=c))
                self.world.add_component(ent, TileStage(stage=0))
                if (r, c) in corners:
                    self.world.add_component(ent, BlockedCell())
                    self.world.add_component(ent, TileType(type_name=BLOCKED_TYPE))
                    self.world.add_component(ent, ActiveSwitch(active=True))
                else:
                    # Cells start empty until a layout is applied.
                    self.world.add_component(ent, TileType(type_name=TILE_CATEGORIES[0]))
                    self.world.add_component(ent, ActiveSwitch(active=False))

    def new_game_layout(self, rng=None) -> None:
        """Fill every playable cell with a random category and a random stage."""
        rng = world_rng(self.world, rng)
        cells = sorted(self.world.get_component(BoardPosition), key=lambda item: (item[1].row, item[1].col))
        for ent, _ in cells:
            if self.world.has_component(ent, BlockedCell):
                continue
            spawn_tile(self.world, ent, rng, random_stage=True)
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        logger.debug("new %dx%d board generated", board.cols, board.rows)
        self.event_bus.emit(EVENT_BOARD_INITIALIZED, source="new")

    def _get_entity_at(self, row: int, col: int) -> Optional[int]:
        return get_entity_at(self.world, row, col)
