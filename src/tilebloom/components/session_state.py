from dataclasses import dataclass

from tilebloom.constants import STARTING_TURNS


@dataclass(slots=True)
class SessionState:
    """Score accumulator and remaining turn budget for the running game."""
    score: int = 0
    turns_remaining: int = STARTING_TURNS

    @property
    def finished(self) -> bool:
        return self.turns_remaining <= 0
