"""jgraph | convert pipeline producing the JPEG the player looks at."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from tilebloom.errors import RenderFailure, RenderSpawnError
from tilebloom.rendering.jgraph import Canvas

logger = logging.getLogger(__name__)


class JGraphPipeline:
    """Pipes a jgraph script through ``jgraph`` and then ``convert``.

    jgraph reads the script on stdin and writes PostScript to stdout, which is
    connected straight to ``convert``'s stdin; convert writes the image file.
    Both processes are waited for before ``render`` returns.
    """

    def __init__(
        self,
        jgraph_command: Sequence[str] = ("jgraph",),
        convert_command: Sequence[str] = ("convert", "-density", "300"),
        quality: int = 100,
    ):
        self.jgraph_command = list(jgraph_command)
        self.convert_command = list(convert_command)
        self.quality = quality

    def convert_args(self, output_path: Path | str) -> list[str]:
        return [*self.convert_command, "-", "-quality", str(self.quality), str(output_path)]

    def render(self, canvas: Canvas | str, output_path: Path | str) -> Path:
        script = canvas if isinstance(canvas, str) else canvas.to_jgraph()
        output_path = Path(output_path)
        try:
            jgraph = subprocess.Popen(self.jgraph_command, stdin=subprocess.PIPE, stdout=subprocess.PIPE)
        except OSError as exc:
            raise RenderSpawnError(self.jgraph_command[0], exc) from exc
        try:
            convert = subprocess.Popen(self.convert_args(output_path), stdin=jgraph.stdout)
        except OSError as exc:
            jgraph.kill()
            jgraph.communicate()
            raise RenderSpawnError(self.convert_command[0], exc) from exc
        # Only convert holds the read end now, so jgraph sees SIGPIPE if convert dies.
        jgraph.stdout.close()

        broken_pipe = False
        try:
            jgraph.stdin.write(script.encode("utf-8"))
        except BrokenPipeError:
            broken_pipe = True
        finally:
            try:
                jgraph.stdin.close()
            except BrokenPipeError:
                broken_pipe = True

        returncodes = {"jgraph": jgraph.wait(), "convert": convert.wait()}
        logger.debug("render pipeline finished: %s", returncodes)
        if broken_pipe or any(code != 0 for code in returncodes.values()):
            raise RenderFailure(f"render pipeline failed for {output_path}", returncodes=returncodes)
        return output_path

    __call__ = render
