"""Builder objects for jgraph scripts.

The classes mirror the nesting of the jgraph language: a ``Canvas`` holds
``Graph`` objects, a graph holds two ``Axis`` objects and a list of
``Curve`` objects, and every curve draws its points with one mark. Each
object renders itself with ``to_jgraph()``. Fields left as ``None`` are
omitted so jgraph falls back to its own defaults.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

Point = Tuple[float, float]


def _num(value: float) -> str:
    # Same shortest form a C++ ostream produces for floats.
    return f"{value:g}"


@dataclass(slots=True, frozen=True)
class Color:
    r: float
    g: float
    b: float

    def to_jgraph(self) -> str:
        return f"{_num(self.r)} {_num(self.g)} {_num(self.b)}"


def gray(level: float) -> Color:
    return Color(level, level, level)


@dataclass(slots=True)
class Text:
    content: str = ""
    x: Optional[float] = None
    y: Optional[float] = None
    font: Optional[str] = None
    size: Optional[float] = None
    line_spacing: Optional[float] = None
    hor_just: Optional[str] = None   # 'l', 'c' or 'r'
    ver_just: Optional[str] = None   # 't', 'c' or 'b'
    rotate: Optional[float] = None
    color: Optional[Color] = None

    def empty(self) -> bool:
        return not self.content and all(
            value is None
            for value in (
                self.x, self.y, self.font, self.size, self.line_spacing,
                self.hor_just, self.ver_just, self.rotate, self.color,
            )
        )

    def to_jgraph(self) -> str:
        parts: List[str] = []
        if self.x is not None:
            parts.append(f"x {_num(self.x)}")
        if self.y is not None:
            parts.append(f"y {_num(self.y)}")
        if self.font:
            parts.append(f"font {self.font}")
        if self.size is not None:
            parts.append(f"fontsize {_num(self.size)}")
        if self.line_spacing is not None:
            parts.append(f"linesep {_num(self.line_spacing)}")
        if self.hor_just:
            parts.append(f"hj{self.hor_just}")
        if self.ver_just:
            parts.append(f"vj{self.ver_just}")
        if self.rotate is not None:
            parts.append(f"rotate {_num(self.rotate)}")
        if self.color is not None:
            parts.append(f"lcolor {self.color.to_jgraph()}")
        if self.content:
            # A backslash before each newline continues the string.
            parts.append(": " + self.content.replace("\n", "\\\n"))
        return " ".join(parts)


@dataclass(slots=True)
class Axis:
    draw: bool = True
    scale: Optional[str] = None        # 'linear' or 'log'
    size: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    hash_spacing: Optional[float] = None
    hash_start: Optional[float] = None
    minor_hash_count: Optional[int] = None
    label: Text = field(default_factory=Text)
    grid_lines: bool = False
    grid_color: Optional[Color] = None
    minor_grid_lines: bool = False
    minor_grid_color: Optional[Color] = None
    color: Optional[Color] = None
    hash_labels: List[Tuple[str, float]] = field(default_factory=list)
    auto_hash_labels: bool = True
    draw_hash_marks: bool = True
    draw_hash_labels: bool = True

    def to_jgraph(self) -> str:
        lines: List[str] = []
        if not self.draw:
            lines.append("nodraw")
        if self.scale:
            lines.append(self.scale)
        if self.size is not None:
            lines.append(f"size {_num(self.size)}")
        bounds = []
        if self.min is not None:
            bounds.append(f"min {_num(self.min)}")
        if self.max is not None:
            bounds.append(f"max {_num(self.max)}")
        if bounds:
            lines.append(" ".join(bounds))
        hashes = []
        if self.hash_spacing is not None:
            hashes.append(f"hash {_num(self.hash_spacing)}")
        if self.hash_start is not None:
            hashes.append(f"shash {_num(self.hash_start)}")
        if hashes:
            lines.append(" ".join(hashes))
        if self.minor_hash_count is not None:
            lines.append(f"mhash {self.minor_hash_count}")
        if not self.label.empty():
            lines.append(f"label {self.label.to_jgraph()}")
        if self.grid_lines:
            grid = "grid_lines"
            if self.grid_color is not None:
                grid += f" grid_color {self.grid_color.to_jgraph()}"
            lines.append(grid)
        if self.minor_grid_lines:
            grid = "mgrid_lines"
            if self.minor_grid_color is not None:
                grid += f" mgrid_color {self.minor_grid_color.to_jgraph()}"
            lines.append(grid)
        if self.color is not None:
            lines.append(f"color {self.color.to_jgraph()}")
        if self.hash_labels:
            lines.append(" ".join(f"hash_label at {_num(at)} : {text}" for text, at in self.hash_labels))
        if not self.auto_hash_labels:
            lines.append("no_auto_hash_labels")
        if not self.draw_hash_marks:
            lines.append("no_draw_hash_marks")
        if not self.draw_hash_labels:
            lines.append("no_draw_hash_labels")
        return "\n".join("\t" + line for line in lines)


# Marks ------------------------------------------------------------------


@dataclass(slots=True)
class _MarkBase:
    size: Optional[Tuple[float, float]] = None
    rotate: Optional[float] = None

    def _size_and_rotation(self) -> List[str]:
        parts: List[str] = []
        if self.size is not None:
            parts.append(f"marksize {_num(self.size[0])} {_num(self.size[1])}")
        if self.rotate is not None:
            parts.append(f"mrotate {_num(self.rotate)}")
        return parts


def _fill(color: Optional[Color], pattern: Optional[str], fill_rotate: float) -> List[str]:
    parts: List[str] = []
    if color is not None:
        parts.append(f"cfill {color.to_jgraph()}")
    if pattern:
        parts.append(f"pattern {pattern} {_num(fill_rotate)}")
    return parts


@dataclass(slots=True)
class ShapeMark(_MarkBase):
    """Built-in jgraph mark: circle, box, diamond, triangle, x, cross, ..."""
    shape: str = "none"
    color: Optional[Color] = None
    pattern: Optional[str] = None      # 'solid', 'stripe' or 'estripe'
    fill_rotate: float = 0

    def to_jgraph(self) -> str:
        if self.shape == "none":
            return "marktype none"
        parts = [f"marktype {self.shape}"]
        parts.extend(self._size_and_rotation())
        parts.extend(_fill(self.color, self.pattern, self.fill_rotate))
        return " ".join(parts)


@dataclass(slots=True)
class TextMark(_MarkBase):
    text: Text = field(default_factory=Text)

    def to_jgraph(self) -> str:
        return f"marktype text {self.text.to_jgraph()}"


@dataclass(slots=True)
class GeneralMark(_MarkBase):
    """Polygon mark drawn from ``points`` in the unit square [-1, 1]."""
    points: List[Point] = field(default_factory=list)
    kind: str = "general"              # general, general_nf, general_bez, general_bez_nf
    color: Optional[Color] = None
    pattern: Optional[str] = None
    fill_rotate: float = 0

    def to_jgraph(self) -> str:
        if self.kind.startswith("general_bez") and len(self.points) % 3 != 1:
            raise ValueError("bezier marks need 3n+1 points")
        parts = ["gmarks " + " ".join(f"{_num(x)} {_num(y)}" for x, y in self.points)]
        parts.append(f"marktype {self.kind}")
        if not self.kind.endswith("_nf"):
            parts.extend(_fill(self.color, self.pattern, self.fill_rotate))
        parts.extend(self._size_and_rotation())
        return " ".join(parts)


@dataclass(slots=True)
class PostscriptRawMark(_MarkBase):
    script: str = ""

    def to_jgraph(self) -> str:
        return " ".join([f"postscript : {self.script}", *self._size_and_rotation()])


@dataclass(slots=True)
class PostscriptFileMark(_MarkBase):
    filename: str = ""
    encapsulated: bool = False

    def to_jgraph(self) -> str:
        keyword = "eps" if self.encapsulated else "postscript"
        return " ".join([f"{keyword} {self.filename}", *self._size_and_rotation()])


Mark = Union[ShapeMark, TextMark, GeneralMark, PostscriptRawMark, PostscriptFileMark]


# Structure ---------------------------------------------------------------


@dataclass(slots=True)
class Curve:
    points: List[Point] = field(default_factory=list)
    mark: Mark = field(default_factory=ShapeMark)
    line_type: str = "solid"
    line_thickness: Optional[float] = None
    color: Optional[Color] = None
    clip: bool = False
    label: Text = field(default_factory=Text)

    def to_jgraph(self) -> str:
        parts = ["newcurve"]
        parts.append("pts " + " ".join(f"{_num(x)} {_num(y)}" for x, y in self.points))
        parts.append(self.mark.to_jgraph())
        parts.append(f"linetype {self.line_type}")
        if self.line_thickness is not None:
            parts.append(f"linethickness {_num(self.line_thickness)}")
        if self.color is not None:
            parts.append(f"color {self.color.to_jgraph()}")
        parts.append("clip" if self.clip else "noclip")
        if not self.label.empty():
            parts.append(f"label {self.label.to_jgraph()}")
        return " ".join(parts)


@dataclass(slots=True)
class Graph:
    xaxis: Axis = field(default_factory=Axis)
    yaxis: Axis = field(default_factory=Axis)
    curves: List[Curve] = field(default_factory=list)
    strings: List[Text] = field(default_factory=list)
    title: Text = field(default_factory=Text)
    border: bool = False

    def to_jgraph(self) -> str:
        lines: List[str] = []
        if not self.title.empty():
            lines.append(f"title {self.title.to_jgraph()}")
        lines.append("xaxis")
        axis = self.xaxis.to_jgraph()
        if axis:
            lines.append(axis)
        lines.append("yaxis")
        axis = self.yaxis.to_jgraph()
        if axis:
            lines.append(axis)
        lines.extend(curve.to_jgraph() for curve in self.curves)
        lines.extend(f"newstring {text.to_jgraph()}" for text in self.strings)
        if self.border:
            lines.append("border")
        return "\n".join(lines)


@dataclass(slots=True)
class Canvas:
    graphs: List[Graph] = field(default_factory=list)
    size: Optional[Tuple[float, float]] = None                  # inches (X, Y)
    bbox: Optional[Tuple[float, float, float, float]] = None    # x, y, width, height
    preamble: str = ""
    epilogue: str = ""

    def to_jgraph(self) -> str:
        lines: List[str] = []
        if self.preamble:
            lines.append(f"preamble {self.preamble}")
        if self.epilogue:
            lines.append(f"epilogue {self.epilogue}")
        if self.size is not None:
            lines.append(f"X {_num(self.size[0])} Y {_num(self.size[1])}")
        if self.bbox is not None:
            x, y, width, height = self.bbox
            lines.append(f"bbox {_num(x)} {_num(y)} {_num(x + width)} {_num(y + height)}")
        for graph in self.graphs:
            lines.append("newgraph")
            lines.append(graph.to_jgraph())
        return "\n".join(lines) + "\n"
