"""Entry point for the tilebloom terminal puzzle.

Sets up the ECS world, event bus and systems, then hands control to the
interactive session.
"""
import argparse
import logging
import random
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from tilebloom.config import GameConfig
from tilebloom.errors import ConfigurationError, RenderSpawnError, SaveFileCorrupt
from tilebloom.events.bus import EventBus
from tilebloom.rendering.pipeline import JGraphPipeline
from tilebloom.session import GameSession
from tilebloom.systems.board import BoardSystem
from tilebloom.systems.render import RenderSystem
from tilebloom.systems.save_system import SaveSystem
from tilebloom.systems.turn_system import TurnSystem
from tilebloom.world import create_world

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_SAVE = 1
EXIT_RENDER_UNAVAILABLE = 2
EXIT_USAGE = -1


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="tilebloom", description="Grow and pop tiles on a 9x6 board.")
    parser.add_argument(
        "-s",
        dest="save_file",
        metavar="fileName",
        help="Use Saved Board from fileName Location",
    )
    return parser


def configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(
    argv: Optional[List[str]] = None,
    *,
    input_stream: Optional[TextIO] = None,
    output: Optional[TextIO] = None,
) -> int:
    out = output if output is not None else sys.stdout
    args_list = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()
    try:
        args = parser.parse_args(args_list)
    except UsageError as exc:
        print(f"Provided {len(args_list) + 1} arguments... {exc}", file=out)
        print(parser.format_usage().rstrip(), file=out)
        return EXIT_USAGE

    try:
        config = replace(GameConfig.from_env(), save_path=args.save_file)
    except ConfigurationError as exc:
        print(exc.message, file=sys.stderr)
        return EXIT_USAGE
    configure_logging(config.log_level)

    event_bus = EventBus()
    world = create_world(event_bus, rng=random.Random(config.seed))
    board_system = BoardSystem(world, event_bus, populate=False)
    save_system = SaveSystem(world, event_bus, save_path=config.save_path)
    TurnSystem(world, event_bus)
    renderer = None
    if config.render_enabled:
        renderer = JGraphPipeline(config.jgraph_command, config.convert_command)
    RenderSystem(world, event_bus, renderer, output_path=config.output_image)

    try:
        loaded = save_system.load()
    except SaveFileCorrupt as exc:
        logger.error("%s", exc.message)
        print("Error reading file; Invalid savefile syntax.", file=out)
        return EXIT_BAD_SAVE
    if not loaded:
        board_system.new_game_layout()

    session = GameSession(world, event_bus, input_stream=input_stream, output=out)
    try:
        return session.run()
    except RenderSpawnError as exc:
        print(exc.message, file=sys.stderr)
        return EXIT_RENDER_UNAVAILABLE


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
