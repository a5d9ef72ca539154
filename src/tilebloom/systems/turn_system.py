import logging

from esper import World

from tilebloom.components.game_state import GameMode
from tilebloom.errors import MoveRejected
from tilebloom.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_GAME_MODE_CHANGED,
    EVENT_GAME_OVER,
    EVENT_GRAVITY_APPLIED,
    EVENT_MOVE_REJECTED,
    EVENT_MOVE_SUBMITTED,
    EVENT_REFILL_COMPLETED,
    EVENT_RENDER_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_TILES_GROWN,
    EVENT_TILES_POPPED,
    EVENT_TURN_ADVANCED,
)
from tilebloom.systems.cascade import pop_trail
from tilebloom.systems.gravity import settle_columns
from tilebloom.systems.move_validation import validate_trail
from tilebloom.systems.turn_state_utils import (
    get_game_state,
    get_or_create_session_state,
    get_or_create_turn_state,
)

logger = logging.getLogger(__name__)


class TurnSystem:
    """Resolves one submitted move per turn.

    Flow:
      - EVENT_MOVE_SUBMITTED: validate the trail (VALIDATING). A rejected trail
        emits EVENT_MOVE_REJECTED and returns to AWAITING_INPUT untouched.
      - RESOLVING: pop the trail, cascade, settle columns, add the score delta
        and spend one turn.
      - RENDERING then AWAITING_INPUT, or GAME_OVER once the budget is spent.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_MOVE_SUBMITTED, self.on_move_submitted)

    def on_move_submitted(self, sender, **kwargs):
        trail = [tuple(pos) for pos in kwargs.get("trail") or []]
        session = get_or_create_session_state(self.world)
        turn_state = get_or_create_turn_state(self.world)
        if session.finished:
            turn_state.last_rejection = "No turns remaining."
            self.event_bus.emit(EVENT_MOVE_REJECTED, reason=turn_state.last_rejection, index=None)
            return

        self._set_mode(GameMode.VALIDATING)
        try:
            validate_trail(self.world, trail)
        except MoveRejected as exc:
            self._reject(turn_state, exc.reason, exc.index)
            return

        self._set_mode(GameMode.RESOLVING)
        result = pop_trail(self.world, trail)
        self.event_bus.emit(EVENT_TILES_POPPED, positions=list(result.popped), types=list(result.popped_types))
        if result.grown:
            self.event_bus.emit(EVENT_TILES_GROWN, positions=list(result.grown))
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, chain=result.chain, base_score=result.base_score)

        settled = settle_columns(self.world, result.lowest_popped)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=list(settled.moves))
        if settled.new_tiles:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=list(settled.new_tiles))

        delta = result.score_delta
        session.score += delta
        session.turns_remaining -= 1
        turn_state.last_trail = trail
        turn_state.last_base_score = result.base_score
        turn_state.last_chain = result.chain
        turn_state.last_score_delta = delta
        turn_state.last_rejection = None
        turn_state.moves_resolved += 1
        logger.info(
            "move resolved: base=%d chain=%d delta=%d score=%d turns=%d",
            result.base_score,
            result.chain,
            delta,
            session.score,
            session.turns_remaining,
        )
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=delta)
        self.event_bus.emit(EVENT_TURN_ADVANCED, turns_remaining=session.turns_remaining)

        if session.finished:
            self._set_mode(GameMode.GAME_OVER)
            self.event_bus.emit(EVENT_GAME_OVER, score=session.score)
            return
        self._set_mode(GameMode.RENDERING)
        self.event_bus.emit(EVENT_RENDER_REQUEST, kind="board")
        self._set_mode(GameMode.AWAITING_INPUT)

    def _reject(self, turn_state, reason: str, index):
        turn_state.last_rejection = reason
        logger.debug("move rejected: %s", reason)
        self.event_bus.emit(EVENT_MOVE_REJECTED, reason=reason, index=index)
        self._set_mode(GameMode.AWAITING_INPUT)

    def _set_mode(self, mode: GameMode) -> None:
        state = get_game_state(self.world)
        if state is None or state.mode == mode:
            return
        previous = state.mode
        state.mode = mode
        self.event_bus.emit(EVENT_GAME_MODE_CHANGED, previous=previous, current=mode)
