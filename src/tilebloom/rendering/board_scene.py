"""Scenes drawn for the player: the live board and the game-over card."""
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from tilebloom.constants import GRID_COLS, GRID_ROWS, MAX_STAGE, TILE_CATEGORIES, TILE_COLORS
from tilebloom.rendering.jgraph import (
    Axis,
    Canvas,
    Color,
    Curve,
    GeneralMark,
    Graph,
    Mark,
    ShapeMark,
    Text,
    TextMark,
)
from tilebloom.systems.board_ops import Cell

CROSS_POINTS = [
    (-1, -0.25), (-1, 0.25), (-0.25, 0.25), (-0.25, 1), (0.25, 1), (0.25, 0.25),
    (1, 0.25), (1, -0.25), (0.25, -0.25), (0.25, -1), (-0.25, -1), (-0.25, -0.25),
]
STAR_POINTS = [(-1, -1), (-0.5, 0), (-1, 1), (0, 0.5), (1, 1), (0.5, 0), (1, -1), (0, -0.5)]

# Curve (outline) colour per category.
OUTLINE_COLORS = {
    'red': Color(0.2, 0, 0),
    'green': Color(0, 0.2, 0),
    'blue': Color(0, 0, 0.2),
    'purple': Color(0.2, 0, 0.2),
    'yellow': Color(0.2, 0.2, 0),
}

# Mark size as a fraction of a cell for stages 0, 1 and 2.
STAGE_SCALE = (1 / 3, 1 / 1.5, 1.0)
PANEL_COLOR = Color(0.8, 0.7, 1)


def _tile_mark(category: str, stage: int, palette: Mapping[str, Tuple[float, float, float]]) -> Mark:
    scale = STAGE_SCALE[stage]
    fill = Color(*palette[category])
    full = 0.925 * scale
    if category == 'red':
        return GeneralMark(points=list(CROSS_POINTS), size=(full, full), color=fill, pattern='solid', fill_rotate=15)
    if category == 'green':
        return ShapeMark(shape='triangle', size=(full, full), color=fill, pattern='solid', fill_rotate=30)
    if category == 'blue':
        small = 0.85 * scale
        return ShapeMark(shape='circle', size=(small, small), color=fill, pattern='solid')
    if category == 'purple':
        return ShapeMark(shape='diamond', size=(full, full), color=fill, pattern='solid')
    return GeneralMark(points=list(STAR_POINTS), size=(full, full), color=fill, pattern='solid')


def _grid_graph(cols: int, rows: int) -> Graph:
    graph = Graph()
    graph.xaxis = Axis(
        draw=False, size=6, min=0, max=cols, hash_spacing=1, minor_hash_count=0,
        grid_lines=True,
    )
    graph.yaxis = Axis(
        draw=False, size=4, min=0, max=rows, hash_spacing=1, minor_hash_count=0,
        grid_lines=True,
    )
    return graph


def _canvas(graph: Graph) -> Canvas:
    return Canvas(graphs=[graph], size=(6, 4), bbox=(0, -3, 6 * 72, 5 * 72))


def cell_center(row: int, col: int, rows: int = GRID_ROWS) -> Tuple[float, float]:
    """Plot coordinates of a cell centre; row 0 is drawn at the top."""
    return col + 0.5, (rows - 1 - row) + 0.5


def build_board_canvas(
    grid: Sequence[Sequence[Cell]],
    score: int,
    turns_remaining: int,
    palette: Optional[Mapping[str, Tuple[float, float, float]]] = None,
) -> Canvas:
    """One curve per category and stage, plus corner blocks and the score panels."""
    palette = palette or TILE_COLORS
    rows = len(grid) or GRID_ROWS
    cols = len(grid[0]) if grid else GRID_COLS
    graph = _grid_graph(cols, rows)

    tile_curves: Dict[Tuple[str, int], Curve] = {}
    for stage in range(MAX_STAGE + 1):
        for category in TILE_CATEGORIES:
            curve = Curve(mark=_tile_mark(category, stage, palette), line_type='none', color=OUTLINE_COLORS[category])
            tile_curves[(category, stage)] = curve
            graph.curves.append(curve)

    for row_cells in grid:
        for cell in row_cells:
            if not cell.playable:
                continue
            curve = tile_curves.get((cell.type_name, cell.stage))
            if curve is not None:
                curve.points.append(cell_center(cell.row, cell.col, rows))

    graph.curves.append(Curve(
        points=[(0, 0), (0, rows), (cols, 0), (cols, rows)],
        mark=ShapeMark(shape='box', size=(1.975, 1.975), color=Color(1, 1, 1), pattern='solid'),
        line_type='none',
        color=Color(1, 1, 1),
    ))
    graph.curves.append(Curve(
        points=[(0, rows + 0.5)],
        mark=GeneralMark(points=[(0, 0), (0, 5), (5, 5), (3, 0)], size=(1.975, 1.975), color=PANEL_COLOR, pattern='solid'),
        line_type='none',
        color=Color(0, 0, 0),
    ))
    graph.curves.append(Curve(
        points=[(cols - 4.75, rows + 0.5)],
        mark=GeneralMark(points=[(5, 5), (0, 5), (3, 0), (5, 0)], size=(1.975, 1.975), color=PANEL_COLOR, pattern='solid'),
        line_type='none',
        color=Color(0, 0, 0),
    ))
    graph.curves.append(_label_curve((1.5, rows + 1), f"Score: \n{score}", 20))
    graph.curves.append(_label_curve((cols - 1, rows + 1), f"Turns: \n{turns_remaining}", 20))
    return _canvas(graph)


def build_game_over_canvas(score: int, cols: int = GRID_COLS, rows: int = GRID_ROWS) -> Canvas:
    graph = _grid_graph(cols, rows)
    graph.curves.append(Curve(
        points=[(3, 3)],
        mark=ShapeMark(shape='box', size=(50, 50), color=Color(0, 0, 0), pattern='solid'),
        line_type='none',
        color=Color(0, 0, 0),
    ))
    graph.curves.append(
        _label_curve((4.5, 3), f"GAME OVER \n Score: {score}", 40, color=Color(1, 1, 1))
    )
    return _canvas(graph)


def _label_curve(point: Tuple[float, float], content: str, size: float, color: Color | None = None) -> Curve:
    text = Text(content=content, font='Arial', size=size, line_spacing=20, color=color)
    return Curve(points=[point], mark=TextMark(text=text), line_type='none')


def describe_canvas(canvas: Canvas) -> List[str]:
    """Short summary used in debug logging."""
    return [f"graph {index}: {len(graph.curves)} curves" for index, graph in enumerate(canvas.graphs)]
