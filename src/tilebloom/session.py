"""Interactive turn loop reading moves from a text stream."""
import logging
import sys
from typing import List, Optional, TextIO

from esper import World

from tilebloom.components.game_state import GameMode
from tilebloom.constants import MOVE_PROMPT
from tilebloom.errors import InputFormatError
from tilebloom.events.bus import (
    EventBus,
    EVENT_GAME_MODE_CHANGED,
    EVENT_GAME_OVER,
    EVENT_MOVE_REJECTED,
    EVENT_MOVE_SUBMITTED,
    EVENT_QUIT_REQUESTED,
    EVENT_RENDER_REQUEST,
)
from tilebloom.systems.move_input import format_trail, is_quit_command, parse_move_text
from tilebloom.systems.turn_state_utils import get_game_state, get_or_create_session_state

logger = logging.getLogger(__name__)


class GameSession:
    """Prompts for moves until the player quits or the turn budget runs out.

    The session only talks to the rest of the game through the event bus:
    a parsed trail goes out as EVENT_MOVE_SUBMITTED and the outcome comes
    back as EVENT_MOVE_REJECTED or EVENT_GAME_OVER.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        input_stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output = output if output is not None else sys.stdout
        self.rejections: List[str] = []
        self.final_score: Optional[int] = None
        self.event_bus.subscribe(EVENT_MOVE_REJECTED, self.on_move_rejected)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def on_move_rejected(self, sender, **kwargs):
        reason = kwargs.get("reason", "")
        self.rejections.append(reason)
        self._say(reason)

    def on_game_over(self, sender, **kwargs):
        score = kwargs.get("score")
        self.final_score = score if score is not None else get_or_create_session_state(self.world).score

    def run(self) -> int:
        # Draw once up front so the player can see the board before moving.
        self.event_bus.emit(EVENT_RENDER_REQUEST, kind="board")
        while True:
            self._say(MOVE_PROMPT)
            line = self.input_stream.readline()
            if line == "":
                logger.info("input closed, treating as quit")
                return self.quit()
            if is_quit_command(line):
                return self.quit()
            try:
                trail = parse_move_text(line)
            except InputFormatError as exc:
                self._say(f"{exc.message} Try again. ")
                continue
            logger.debug("submitting %s", format_trail(trail))
            self.event_bus.emit(EVENT_MOVE_SUBMITTED, trail=trail)
            if self.final_score is not None:
                self._say(f"Game over! Score : {self.final_score}")
                return 0

    def quit(self) -> int:
        self._set_mode(GameMode.SAVING)
        self.event_bus.emit(EVENT_QUIT_REQUESTED)
        self._set_mode(GameMode.TERMINATED)
        return 0

    def _set_mode(self, mode: GameMode) -> None:
        state = get_game_state(self.world)
        if state is None or state.mode == mode:
            return
        previous = state.mode
        state.mode = mode
        self.event_bus.emit(EVENT_GAME_MODE_CHANGED, previous=previous, current=mode)

    def _say(self, text: str) -> None:
        print(text, file=self.output)
