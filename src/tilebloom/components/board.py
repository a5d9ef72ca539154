from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    rows: int
    cols: int

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
