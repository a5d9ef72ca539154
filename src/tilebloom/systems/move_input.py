"""Parsing of typed moves of the form ``{(x0,y0),(x1,y1),...}``."""
from typing import List, Tuple

from tilebloom.constants import QUIT_COMMANDS
from tilebloom.errors import InputFormatError

Position = Tuple[int, int]

# Each point is exactly "(x,y)" plus one separator character.
_CHUNK = 6


def is_quit_command(text: str) -> bool:
    """Exact match only; " quit" or "QUIT" are treated as moves."""
    return text.rstrip("\r\n") in QUIT_COMMANDS


def parse_move_text(text: str) -> List[Position]:
    """Parse a move line into ``(row, col)`` positions.

    Players type ``(x, y)`` with x the column and y the row, single digits
    each. Whitespace anywhere in the line is ignored. Bounds and move rules
    are checked later by the validator.
    """
    compact = "".join(text.split())
    if (
        len(compact) < _CHUNK + 1
        or len(compact) % _CHUNK != 1
        or compact[0] != "{"
        or compact[-1] != "}"
    ):
        raise InputFormatError(text)
    count = (len(compact) - 1) // _CHUNK
    trail: List[Position] = []
    for i in range(count):
        chunk = compact[1 + i * _CHUNK: 1 + (i + 1) * _CHUNK]
        separator = "}" if i == count - 1 else ","
        if chunk[0] != "(" or chunk[2] != "," or chunk[4] != ")" or chunk[5] != separator:
            raise InputFormatError(text)
        x, y = chunk[1], chunk[3]
        if not (x.isdigit() and y.isdigit()) or not (x.isascii() and y.isascii()):
            raise InputFormatError(text)
        trail.append((int(y), int(x)))
    return trail


def format_trail(trail: List[Position]) -> str:
    """Inverse of ``parse_move_text`` for logging and tests."""
    return "{" + ",".join(f"({col},{row})" for row, col in trail) + "}"
