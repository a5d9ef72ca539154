"""Game state resource describing the active phase of the turn loop."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """Phases of the turn controller."""
    AWAITING_INPUT = auto()
    VALIDATING = auto()
    RESOLVING = auto()
    RENDERING = auto()
    SAVING = auto()
    TERMINATED = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the current turn-loop phase."""
    mode: GameMode = GameMode.AWAITING_INPUT
