"""Stroke styles and end decorations for outlined shapes."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field

RGBA = tuple[int, int, int, int]

BLACK: RGBA = (0, 0, 0, 255)
TRANSPARENT: RGBA = (0, 0, 0, 0)


class LineJoin(enum.Enum):
    """How two stroke segments are joined."""

    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class LineCap(enum.Enum):
    """How an open stroke ends."""

    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class StrokeEndType(enum.Enum):
    """The kind of decoration drawn at a stroke end."""

    BUTT = "butt"
    CAP = "cap"
    ARROW = "arrow"
    CONTOUR_ARROW = "contour_arrow"
    LINE_ARROW = "line_arrow"
    TRIANGLE = "triangle"
    CONTOUR_TRIANGLE = "contour_triangle"
    SQUARE = "square"
    CONTOUR_SQUARE = "contour_square"
    HALF_SQUARE = "half_square"
    CIRCLE = "circle"
    CONTOUR_CIRCLE = "contour_circle"
    HALF_CIRCLE = "half_circle"
    DIAMOND = "diamond"
    CONTOUR_DIAMOND = "contour_diamond"
    HALF_DIAMOND = "half_diamond"
    STROKE = "stroke"


@dataclass(frozen=True)
class StrokeEnd:
    """A stroke end decoration with its fill color and size factors.

    ``inner_color`` fills the contour variants; ``width_factor`` and
    ``length_factor`` scale the decoration.
    """

    end_type: StrokeEndType = StrokeEndType.BUTT
    inner_color: RGBA = TRANSPARENT
    width_factor: float = 1.0
    length_factor: float = 1.0

    @classmethod
    def butt(cls) -> StrokeEnd:
        """Return an undecorated end."""
        return cls(StrokeEndType.BUTT)

    def with_inner_color(self, color: RGBA) -> StrokeEnd:
        """Return a copy with the given inner color."""
        return dataclasses.replace(self, inner_color=color)

    def with_width_factor(self, factor: float) -> StrokeEnd:
        """Return a copy with the given width factor."""
        return dataclasses.replace(self, width_factor=factor)

    def with_length_factor(self, factor: float) -> StrokeEnd:
        """Return a copy with the given length factor."""
        return dataclasses.replace(self, length_factor=factor)

    def is_decorated(self) -> bool:
        """Tell whether this end draws anything (every type but BUTT)."""
        return self.end_type is not StrokeEndType.BUTT


@dataclass
class Stroke:
    """Stroke properties for outlined shapes.

    An empty ``dash_pattern`` means a solid line; otherwise it alternates
    on and off lengths starting at ``dash_offset``.
    """

    color: RGBA = BLACK
    width: float = 1.0
    join: LineJoin = LineJoin.MITER
    cap: LineCap = LineCap.BUTT
    start_end: StrokeEnd = field(default_factory=StrokeEnd.butt)
    finish_end: StrokeEnd = field(default_factory=StrokeEnd.butt)
    dash_pattern: list[float] = field(default_factory=list)
    dash_offset: float = 0.0