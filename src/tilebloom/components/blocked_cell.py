from dataclasses import dataclass

@dataclass(slots=True)
class BlockedCell:
    """Tag for cells that never hold a tile and never move."""
    pass
