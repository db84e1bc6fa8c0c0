"""Hexagonal cells: their kinds, state, colours and screen geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

Color = tuple[int, int, int, int]
Point = tuple[float, float]

_SCREEN_MARGIN = 100.0


class CellType(Enum):
    """What occupies a cell of the grid."""

    FREE = "free"
    WALL = "wall"
    START = "start"
    GOAL = "goal"
    ITEM = "item"
    GATE = "gate"
    TEMPORAL_WALL = "temporal_wall"


_BASE_COLORS: dict[CellType, Color] = {
    CellType.WALL: (80, 50, 50, 255),
    CellType.START: (100, 200, 100, 255),
    CellType.GOAL: (200, 100, 100, 255),
    CellType.ITEM: (255, 200, 50, 255),
}

_HIGHLIGHT_COLORS: dict[CellType, Color] = {
    CellType.WALL: (120, 80, 80, 255),
    CellType.START: (150, 255, 150, 255),
    CellType.GOAL: (255, 150, 150, 255),
    CellType.ITEM: (255, 255, 100, 255),
}

# (visited-or-open, not-visited-or-closed) pairs for the state-dependent kinds.
_BASE_STATEFUL: dict[CellType, tuple[Color, Color]] = {
    CellType.FREE: ((180, 180, 200, 255), (240, 240, 240, 255)),
    CellType.GATE: ((80, 150, 255, 255), (180, 80, 180, 255)),
    CellType.TEMPORAL_WALL: ((220, 220, 220, 255), (140, 140, 140, 255)),
}

_HIGHLIGHT_STATEFUL: dict[CellType, tuple[Color, Color]] = {
    CellType.FREE: ((200, 200, 240, 255), (255, 255, 255, 255)),
    CellType.GATE: ((100, 200, 255, 255), (255, 100, 255, 255)),
    CellType.TEMPORAL_WALL: ((255, 255, 255, 255), (180, 180, 180, 255)),
}


@dataclass
class HexCell:
    """One hexagon of the grid, with the state the game mechanics need."""

    x: int = 0
    y: int = 0
    type: CellType = CellType.FREE
    screen_pos: Point = (0.0, 0.0)
    is_visited: bool = False
    is_highlighted: bool = False
    gate_pattern: str = ""
    turns_to_open: int = 0
    is_currently_open: bool = True

    def is_point_inside(self, point: Point, size: float) -> bool:
        """Whether a screen point lies within the clickable radius of the cell."""
        dx = point[0] - self.screen_pos[0]
        dy = point[1] - self.screen_pos[1]
        return math.hypot(dx, dy) <= size * 0.9

    def color(self) -> Color:
        """The fill colour of the cell for its current kind and state."""
        plain = _HIGHLIGHT_COLORS if self.is_highlighted else _BASE_COLORS
        stateful = _HIGHLIGHT_STATEFUL if self.is_highlighted else _BASE_STATEFUL
        if self.type in plain:
            return plain[self.type]
        on, off = stateful[self.type]
        flag = self.is_visited if self.type is CellType.FREE else self.is_currently_open
        return on if flag else off


def screen_position(grid_x: int, grid_y: int, hex_size: float) -> Point:
    """Screen position of a cell in a flat-topped, odd-column-shifted layout."""
    hex_width = hex_size * 2.0
    hex_height = math.sqrt(3.0) * hex_size
    pos_x = hex_width * 0.75 * grid_x
    pos_y = hex_height * (grid_y + 0.5 * (grid_x & 1))
    return (pos_x + _SCREEN_MARGIN, pos_y + _SCREEN_MARGIN)