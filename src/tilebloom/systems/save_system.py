from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from esper import World

from tilebloom.constants import (
    BLOCKED_TYPE,
    GAME_OVER_NOTE,
    GRID_COLS,
    GRID_ROWS,
    MAX_STAGE,
    SAVE_HEADER,
    STARTING_TURNS,
    TILE_CATEGORIES,
)
from tilebloom.errors import SaveFileCorrupt, SaveFileMissing
from tilebloom.events.bus import (
    EventBus,
    EVENT_BOARD_INITIALIZED,
    EVENT_GAME_LOADED,
    EVENT_GAME_OVER,
    EVENT_GAME_SAVED,
    EVENT_QUIT_REQUESTED,
)
from tilebloom.systems.board_ops import board_dimensions, fill_board, get_tile_registry, tile_grid
from tilebloom.systems.turn_state_utils import get_or_create_session_state

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")
_HEX = "0123456789abcdef"

# Layout as grid[row][col] = (type_name, stage)
Layout = List[List[Tuple[str, int]]]


@dataclass(slots=True)
class SaveData:
    score: int
    turns_remaining: int
    layout: Layout = field(default_factory=list)


def encode_save(world: World) -> str:
    """Serialise score, turns and board; one line of hex digits per column.

    Each digit is ``3 * category_index + stage``, so blocked cells (index 5)
    come out as ``f``.
    """
    session = get_or_create_session_state(world)
    registry = get_tile_registry(world)
    grid = tile_grid(world)
    lines = [SAVE_HEADER, f"#{session.score}", f"#{session.turns_remaining}"]
    cols = len(grid[0]) if grid else 0
    for col in range(cols):
        digits = []
        for row in range(len(grid)):
            cell = grid[row][col]
            if cell.blocked:
                value = 3 * registry.index_of(BLOCKED_TYPE)
            elif not cell.active:
                raise RuntimeError(f"Cannot save an empty cell at {(row, col)}")
            else:
                value = 3 * registry.index_of(cell.type_name) + cell.stage
            digits.append(_HEX[value])
        lines.append("".join(digits))
    return "\n".join(lines) + "\n"


def decode_save(
    text: str,
    *,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    categories: Sequence[str] = TILE_CATEGORIES,
) -> SaveData:
    """Parse save text, raising ``SaveFileCorrupt`` on any format problem."""
    lines = text.splitlines()
    if not lines or lines[0] != SAVE_HEADER:
        raise SaveFileCorrupt("header does not match", line=1)
    score = _counter(lines, 1, "score")
    turns = _counter(lines, 2, "turns")
    if turns <= 0 or turns > STARTING_TURNS:
        raise SaveFileCorrupt(f"turn count must be in 1..{STARTING_TURNS}", line=3)

    blocked_index = len(categories)
    corners = {(0, 0), (0, cols - 1), (rows - 1, 0), (rows - 1, cols - 1)}
    layout: Layout = [[(BLOCKED_TYPE, 0)] * cols for _ in range(rows)]
    for col in range(cols):
        line_no = 4 + col
        if len(lines) < line_no:
            raise SaveFileCorrupt("missing board column", line=line_no)
        column = lines[line_no - 1]
        if len(column) != rows:
            raise SaveFileCorrupt(f"board column must have {rows} digits", line=line_no)
        for row, digit in enumerate(column):
            value = _HEX.find(digit)
            if value < 0:
                raise SaveFileCorrupt(f"invalid tile digit {digit!r}", line=line_no)
            index, stage = divmod(value, 3)
            if index > blocked_index or stage > MAX_STAGE:
                raise SaveFileCorrupt(f"invalid tile digit {digit!r}", line=line_no)
            is_corner = (row, col) in corners
            if index == blocked_index:
                if not is_corner:
                    raise SaveFileCorrupt(f"blocked tile away from a corner at {(col, row)}", line=line_no)
                continue
            if is_corner:
                raise SaveFileCorrupt(f"corner {(col, row)} must be blocked", line=line_no)
            layout[row][col] = (categories[index], stage)
    return SaveData(score=score, turns_remaining=turns, layout=layout)


def _counter(lines: List[str], index: int, name: str) -> int:
    if len(lines) <= index:
        raise SaveFileCorrupt(f"missing {name}", line=index + 1)
    raw = lines[index]
    if not raw.startswith("#") or not _DIGITS.fullmatch(raw[1:]):
        raise SaveFileCorrupt(f"{name} must be '#' followed by digits", line=index + 1)
    return int(raw[1:])


def read_save(path: Path, **layout) -> SaveData:
    """Read and decode a save file; ``layout`` is passed on to ``decode_save``."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SaveFileMissing(str(path)) from None
    except UnicodeDecodeError:
        raise SaveFileCorrupt("file is not text", path=str(path)) from None
    try:
        return decode_save(text, **layout)
    except SaveFileCorrupt as exc:
        exc.path = str(path)
        raise


class SaveSystem:
    """Loads and writes the optional save file chosen on the command line.

    Quitting writes the current game; game over replaces the file with a
    short terminal note carrying the final score. Without a save path every
    handler is a no-op.
    """

    def __init__(self, world: World, event_bus: EventBus, *, save_path: Path | str | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else None
        self.event_bus.subscribe(EVENT_QUIT_REQUESTED, self._on_quit_requested)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    @property
    def save_path(self) -> Path | None:
        return self._save_path

    def load(self) -> bool:
        """Restore the game from disk. Returns False if there is nothing to load."""
        if self._save_path is None:
            return False
        try:
            data = read_save(self._save_path, **self._layout_options())
        except SaveFileMissing:
            logger.info("no save at %s, starting a new game", self._save_path)
            return False
        fill_board(self.world, data.layout)
        session = get_or_create_session_state(self.world)
        session.score = data.score
        session.turns_remaining = data.turns_remaining
        logger.info("loaded %s (score=%d, turns=%d)", self._save_path, data.score, data.turns_remaining)
        self.event_bus.emit(EVENT_BOARD_INITIALIZED, source="save")
        self.event_bus.emit(EVENT_GAME_LOADED, path=str(self._save_path))
        return True

    def _layout_options(self) -> dict:
        options: dict = {"categories": get_tile_registry(self.world).defined_types()}
        dims = board_dimensions(self.world)
        if dims is not None:
            options["rows"], options["cols"] = dims
        return options

    def save(self) -> bool:
        if self._save_path is None:
            return False
        payload = encode_save(self.world)
        try:
            self._save_path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            logger.warning("unable to save to %s: %s", self._save_path, exc)
            return False
        self.event_bus.emit(EVENT_GAME_SAVED, path=str(self._save_path))
        return True

    def write_game_over_note(self, score: int) -> bool:
        if self._save_path is None:
            return False
        try:
            self._save_path.write_text(f"{GAME_OVER_NOTE}\nSCORE: {score}\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("unable to write game over note to %s: %s", self._save_path, exc)
            return False
        return True

    # Event handlers -----------------------------------------------------

    def _on_quit_requested(self, sender, **payload) -> None:
        self.save()

    def _on_game_over(self, sender, **payload) -> None:
        score = payload.get("score")
        if score is None:
            score = get_or_create_session_state(self.world).score
        self.write_game_over_note(score)
