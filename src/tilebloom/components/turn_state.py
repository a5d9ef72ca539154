from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(slots=True)
class TurnState:
    """Outcome of the most recent move, shared across systems."""

    last_trail: List[Tuple[int, int]] = field(default_factory=list)
    last_base_score: int = 0
    last_chain: int = 0
    last_score_delta: int = 0
    last_rejection: Optional[str] = None
    moves_resolved: int = 0
