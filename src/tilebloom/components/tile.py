from dataclasses import dataclass

@dataclass(slots=True)
class TileType:
    """Per-tile category assignment (no color data).

    Stores only the semantic type_name. Empty state is handled by ActiveSwitch.
    Canonical color lookup resides in the singleton entity with TileTypeRegistry + TileTypes.
    """
    type_name: str


@dataclass(slots=True)
class TileStage:
    """Growth counter of a tile; 0..2 while alive, reaching 3 pops it."""
    stage: int = 0
