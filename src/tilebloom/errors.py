"""Exceptions raised by the game.

Input errors (``InputFormatError``, ``MoveRejected``) are recovered by the
session loop, which re-prompts. ``SaveFileCorrupt`` and ``RenderSpawnError``
reach the command line entry point.
"""

from typing import Any, Optional


class TileBloomError(Exception):
    """Base exception for all game errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputFormatError(TileBloomError):
    """Raised when move text does not follow the ``{(x,y),...}`` format."""

    def __init__(self, text: str, reason: str = "Format of move is incorrect."):
        super().__init__(reason, details={"text": text})
        self.text = text


class MoveRejected(TileBloomError):
    """Raised when a parsed trail breaks a move rule.

    ``index`` is the zero-based position in the trail that failed, or None
    when the trail as a whole is rejected (for example, too short).
    """

    def __init__(self, reason: str, index: Optional[int] = None):
        super().__init__(reason, details={"index": index})
        self.reason = reason
        self.index = index


class SaveFileMissing(TileBloomError):
    """Raised when a save file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Save file not found: {path}", details={"path": path})
        self.path = path


class SaveFileCorrupt(TileBloomError):
    """Raised when a save file exists but does not parse."""

    def __init__(self, reason: str, line: Optional[int] = None, path: Optional[str] = None):
        where = f" (line {line})" if line is not None else ""
        super().__init__(
            f"Invalid savefile syntax{where}: {reason}",
            details={"line": line, "path": path},
        )
        self.reason = reason
        self.line = line
        self.path = path


class RenderFailure(TileBloomError):
    """Raised when the external render pipeline exits unsuccessfully."""

    def __init__(self, message: str, returncodes: Optional[dict[str, int]] = None):
        super().__init__(message, details={"returncodes": returncodes or {}})
        self.returncodes = returncodes or {}


class RenderSpawnError(RenderFailure):
    """Raised when a render pipeline process cannot be started at all."""

    def __init__(self, command: str, cause: OSError):
        super().__init__(f"Unable to start '{command}': {cause}")
        self.command = command
        self.cause = cause


class ConfigurationError(TileBloomError):
    """Raised for invalid environment configuration values."""

    def __init__(self, config_key: str, message: str):
        super().__init__(
            f"Configuration error for '{config_key}': {message}",
            details={"config_key": config_key},
        )
        self.config_key = config_key
