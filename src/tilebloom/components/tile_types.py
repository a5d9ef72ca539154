from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from tilebloom.constants import BLOCKED_TYPE

@dataclass(slots=True)
class TileTypes:
    """Canonical tile type definitions stored on a single entity.

    This component lives alongside TileTypeRegistry (tag) and provides mapping utilities.
    Definition order doubles as the save-file category index; the blocked
    category always takes the index right after the last defined type.
    """
    types: Dict[str, Tuple[float, float, float]]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.spawnable:
            # Preserve order while filtering unknown types.
            seen: set[str] = set()
            filtered: List[str] = []
            for name in self.spawnable:
                if name in self.types and name not in seen:
                    filtered.append(name)
                    seen.add(name)
            self.spawnable = filtered or list(self.types.keys())
        else:
            self.spawnable = list(self.types.keys())

    def spawnable_types(self) -> List[str]:
        return list(self.spawnable)

    def defined_types(self) -> List[str]:
        return list(self.types.keys())

    def index_of(self, type_name: str) -> int:
        if type_name == BLOCKED_TYPE:
            return len(self.types)
        return self.defined_types().index(type_name)

