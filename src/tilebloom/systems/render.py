import logging
from pathlib import Path
from typing import Callable, Optional

from esper import World

from tilebloom.constants import DEFAULT_OUTPUT_IMAGE
from tilebloom.errors import RenderFailure, RenderSpawnError
from tilebloom.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_RENDER_COMPLETED,
    EVENT_RENDER_FAILED,
    EVENT_RENDER_REQUEST,
)
from tilebloom.rendering.board_scene import build_board_canvas, build_game_over_canvas, describe_canvas
from tilebloom.rendering.jgraph import Canvas
from tilebloom.systems.board_ops import board_dimensions, get_tile_registry, tile_grid
from tilebloom.systems.turn_state_utils import get_or_create_session_state

logger = logging.getLogger(__name__)

Renderer = Callable[[Canvas, Path], object]


class RenderSystem:
    """Turns the current board into an image through a renderer collaborator.

    The renderer is any callable taking ``(canvas, output_path)``; the game
    uses ``JGraphPipeline``. Rendering is best-effort: a ``RenderFailure`` is
    logged and reported through EVENT_RENDER_FAILED, never fed back into game
    state. ``RenderSpawnError`` is re-raised since no picture can ever be
    produced. With ``renderer=None`` the system only builds canvases.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        renderer: Optional[Renderer] = None,
        *,
        output_path: Path | str = DEFAULT_OUTPUT_IMAGE,
    ):
        self.world = world
        self.event_bus = event_bus
        self.renderer = renderer
        self.output_path = Path(output_path)
        self.last_canvas: Optional[Canvas] = None
        self.event_bus.subscribe(EVENT_RENDER_REQUEST, self.on_render_request)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def on_render_request(self, sender, **kwargs):
        self.render_board()

    def on_game_over(self, sender, **kwargs):
        score = kwargs.get("score")
        if score is None:
            score = get_or_create_session_state(self.world).score
        dims = board_dimensions(self.world)
        if dims is None:
            canvas = build_game_over_canvas(score)
        else:
            rows, cols = dims
            canvas = build_game_over_canvas(score, cols=cols, rows=rows)
        self._draw(canvas, kind="game_over")

    def render_board(self) -> Canvas:
        session = get_or_create_session_state(self.world)
        palette = get_tile_registry(self.world).types
        canvas = build_board_canvas(tile_grid(self.world), session.score, session.turns_remaining, palette)
        self._draw(canvas, kind="board")
        return canvas

    def _draw(self, canvas: Canvas, kind: str) -> None:
        self.last_canvas = canvas
        logger.debug("drawing %s: %s", kind, describe_canvas(canvas))
        if self.renderer is None:
            return
        try:
            self.renderer(canvas, self.output_path)
        except RenderSpawnError:
            raise
        except RenderFailure as exc:
            logger.warning("render of %s failed: %s", kind, exc)
            self.event_bus.emit(EVENT_RENDER_FAILED, kind=kind, error=str(exc))
            return
        self.event_bus.emit(EVENT_RENDER_COMPLETED, kind=kind, path=str(self.output_path))
