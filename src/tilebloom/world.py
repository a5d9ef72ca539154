import random

from esper import World
from .events.bus import EventBus
from tilebloom.components.game_state import GameState, GameMode
from tilebloom.components.session_state import SessionState
from tilebloom.components.tile_type_registry import TileTypeRegistry
from tilebloom.components.tile_types import TileTypes
from tilebloom.components.turn_state import TurnState
from tilebloom.constants import STARTING_TURNS, TILE_CATEGORIES, TILE_COLORS


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.AWAITING_INPUT,
    *,
    rng: random.Random | None = None,
    score: int = 0,
    turns_remaining: int = STARTING_TURNS,
) -> World:
    """Create the world holding session resources and the tile registry.

    The board itself is populated by ``BoardSystem``. Every random draw in the
    game goes through ``world.random`` so a seeded ``rng`` makes cascades and
    refills reproducible.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    # Global session resources share one entity.
    world.create_entity(
        GameState(mode=initial_mode),
        SessionState(score=score, turns_remaining=turns_remaining),
        TurnState(),
    )

    # Create single registry entity with canonical types
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(
            types={name: TILE_COLORS[name] for name in TILE_CATEGORIES},
            spawnable=list(TILE_CATEGORIES),
        ),
    )
    return world
