from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Grid cell coordinates of a tile entity (row 0 is the top row)."""
    row: int
    col: int
