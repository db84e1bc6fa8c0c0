"""Drawing hexagonal cells, the player and the walked path onto pygame surfaces."""

from __future__ import annotations

import math
from functools import lru_cache
from itertools import pairwise, product
from typing import Sequence

import pygame

from escapegrid.cells import CellType, Color, HexCell, Point

WHITE: Color = (255, 255, 255, 255)
YELLOW: Color = (253, 249, 0, 255)
ORANGE: Color = (255, 161, 0, 255)
GOLD: Color = (255, 203, 0, 255)
GRAY: Color = (130, 130, 130, 255)
BROWN: Color = (127, 106, 79, 255)
DARKBROWN: Color = (76, 63, 47, 255)

_SHADOW: Color = (0, 0, 0, 80)
_GEM_SHADOW: Color = (0, 0, 0, 100)
_GEM_OUTER: Color = (200, 150, 0, 255)
_GEM_MAIN: Color = (255, 215, 0, 255)
_GEM_INNER: Color = (255, 255, 150, 255)
_START_RINGS: tuple[tuple[float, Color], ...] = (
    (0.8, (0, 150, 0, 255)),
    (0.6, (50, 200, 50, 255)),
    (0.3, (100, 255, 100, 255)),
)
_GOAL_DISC: Color = (150, 0, 0, 255)
_STAR: Color = (255, 255, 100, 255)
_GATE_OPEN: Color = (0, 100, 255, 255)
_GATE_CLOSED: Color = (255, 140, 0, 255)
_CROSS: Color = (255, 0, 0, 255)
_BRICK: Color = (255, 0, 0, 255)
_CLOCK: Color = GOLD
_VISITED_MARK: Color = (100, 150, 200, 150)


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _text(surface: pygame.Surface, text: str, pos: Point, size: int, color: Color) -> None:
    rendered = _font(size).render(text, True, color[:3])
    surface.blit(rendered, (round(pos[0]), round(pos[1])))


def _circle(
    surface: pygame.Surface, color: Color, center: Point, radius: float, width: int = 0
) -> None:
    if radius <= 0:
        return
    if color[3] >= 255:
        pygame.draw.circle(surface, color, center, radius, width)
        return
    extent = math.ceil(radius) + 1
    overlay = pygame.Surface((2 * extent, 2 * extent), pygame.SRCALPHA)
    pygame.draw.circle(overlay, color, (extent, extent), radius, width)
    surface.blit(overlay, (round(center[0]) - extent, round(center[1]) - extent))


def _polygon(surface: pygame.Surface, color: Color, points: Sequence[Point]) -> None:
    if color[3] >= 255:
        pygame.draw.polygon(surface, color, points)
        return
    left = math.floor(min(p[0] for p in points))
    top = math.floor(min(p[1] for p in points))
    right = math.ceil(max(p[0] for p in points))
    bottom = math.ceil(max(p[1] for p in points))
    overlay = pygame.Surface((right - left + 1, bottom - top + 1), pygame.SRCALPHA)
    pygame.draw.polygon(overlay, color, [(x - left, y - top) for x, y in points])
    surface.blit(overlay, (left, top))


def _line(surface: pygame.Surface, start: Point, end: Point, width: float, color: Color) -> None:
    pygame.draw.line(surface, color, start, end, max(1, round(width)))


def _rect(
    surface: pygame.Surface, x: float, y: float, w: float, h: float, color: Color
) -> None:
    pygame.draw.rect(surface, color, pygame.Rect(int(x), int(y), int(w), int(h)))


def hexagon_points(center: Point, size: float) -> list[Point]:
    """The six corners of a flat-topped hexagon, starting at angle zero."""
    cx, cy = center
    return [
        (cx + size * math.cos(i * math.pi / 3.0), cy + size * math.sin(i * math.pi / 3.0))
        for i in range(6)
    ]


def draw_hexagon(
    surface: pygame.Surface,
    center: Point,
    size: float,
    color: Color,
    highlighted: bool = False,
) -> None:
    """A filled hexagon with a drop shadow, white border and optional glow."""
    points = hexagon_points(center, size)
    _polygon(surface, _SHADOW, [(x + 1, y + 1) for x, y in points])
    _polygon(surface, color, points)

    border_width = 4.0 if highlighted else 2.0
    for start, end in zip(points, points[1:] + points[:1]):
        _line(surface, start, end, border_width, WHITE)

    if highlighted:
        for glow in hexagon_points(center, size + 4):
            _circle(surface, YELLOW, glow, 3)


def _draw_item(surface: pygame.Surface, pos: Point, symbol_size: float) -> None:
    cx, cy = pos
    gem_radius = symbol_size * 0.4
    _circle(surface, _GEM_SHADOW, (cx + 2, cy + 2), gem_radius + 2)
    _circle(surface, _GEM_OUTER, pos, gem_radius + 2)
    _circle(surface, _GEM_MAIN, pos, gem_radius)
    _circle(surface, _GEM_INNER, pos, gem_radius * 0.6)
    _circle(surface, WHITE, (cx - gem_radius * 0.3, cy - gem_radius * 0.3), 2)


def _draw_start(surface: pygame.Surface, pos: Point, symbol_size: float) -> None:
    for scale, color in _START_RINGS:
        _circle(surface, color, pos, symbol_size * scale)


def _draw_goal(surface: pygame.Surface, pos: Point, symbol_size: float) -> None:
    cx, cy = pos
    _circle(surface, _GOAL_DISC, pos, symbol_size * 0.8)
    star = symbol_size * 0.5
    _line(surface, (cx - star, cy), (cx + star, cy), 3.0, _STAR)
    _line(surface, (cx, cy - star), (cx, cy + star), 3.0, _STAR)
    diag = star * 0.7
    _line(surface, (cx - diag, cy - diag), (cx + diag, cy + diag), 2.0, _STAR)
    _line(surface, (cx + diag, cy - diag), (cx - diag, cy + diag), 2.0, _STAR)


def _draw_gate(surface: pygame.Surface, pos: Point, symbol_size: float, is_open: bool) -> None:
    cx, cy = pos
    s = symbol_size
    if is_open:
        _rect(surface, cx - s * 0.6, cy - s * 0.3, s * 0.4, s * 0.6, _GATE_OPEN)
        _rect(surface, cx + s * 0.2, cy - s * 0.3, s * 0.4, s * 0.6, _GATE_OPEN)
        return
    _rect(surface, cx - s * 0.6, cy - s * 0.1, s * 1.2, s * 0.2, _GATE_CLOSED)
    _line(surface, (cx - s * 0.3, cy - s * 0.3), (cx + s * 0.3, cy + s * 0.3), 3.0, _CROSS)
    _line(surface, (cx + s * 0.3, cy - s * 0.3), (cx - s * 0.3, cy + s * 0.3), 3.0, _CROSS)


def _draw_clock(surface: pygame.Surface, pos: Point, symbol_size: float, turns: int) -> None:
    cx, cy = pos
    _circle(surface, _CLOCK, pos, symbol_size * 0.7, 1)
    _circle(surface, _CLOCK, pos, 2)
    _line(surface, pos, (cx, cy - symbol_size * 0.5), 2.0, _CLOCK)
    _line(surface, pos, (cx + symbol_size * 0.3, cy), 2.0, _CLOCK)
    if turns > 0:
        _text(surface, str(turns), (cx - 4, cy + symbol_size * 0.8), 12, WHITE)


def _draw_wall(surface: pygame.Surface, pos: Point, symbol_size: float) -> None:
    cx, cy = pos
    brick = symbol_size * 0.5
    for row, col in product(range(3), repeat=2):
        offset_x = (col - 1) * brick * 1.1
        offset_y = (row - 1) * brick * 1.1
        _rect(
            surface,
            cx + offset_x - brick * 0.4,
            cy + offset_y - brick * 0.3,
            brick * 0.8,
            brick * 0.6,
            _BRICK,
        )


def draw_cell(surface: pygame.Surface, cell: HexCell, size: float) -> None:
    """Draw a cell at its screen position with the symbol for its kind."""
    pos = cell.screen_pos
    draw_hexagon(surface, pos, size, cell.color(), cell.is_highlighted)

    symbol_size = size * 0.6
    if cell.type is CellType.ITEM:
        _draw_item(surface, pos, symbol_size)
    elif cell.type is CellType.START:
        _draw_start(surface, pos, symbol_size)
    elif cell.type is CellType.GOAL:
        _draw_goal(surface, pos, symbol_size)
    elif cell.type is CellType.GATE:
        _draw_gate(surface, pos, symbol_size, cell.is_currently_open)
    elif cell.type is CellType.TEMPORAL_WALL:
        if not cell.is_currently_open:
            _draw_clock(surface, pos, symbol_size, cell.turns_to_open)
    elif cell.type is CellType.WALL:
        _draw_wall(surface, pos, symbol_size)

    if cell.is_visited and cell.type is CellType.FREE:
        _circle(surface, _VISITED_MARK, (pos[0] + size * 0.6, pos[1] - size * 0.6), 3)


def _circle_gradient(
    surface: pygame.Surface, center: Point, radius: float, inner: Color, outer: Color
) -> None:
    steps = max(1, math.ceil(radius))
    for i in range(steps):
        r = radius * (1.0 - i / steps)
        t = r / radius
        color = tuple(round(a + (b - a) * t) for a, b in zip(inner, outer))
        _circle(surface, color, center, r)


def draw_player(
    surface: pygame.Surface, pos: Point, hex_size: float, pulse_timer: float = 0.0
) -> float:
    """Draw the pulsing player token at a screen position; returns its radius."""
    radius = hex_size * 0.4 * (1.0 + math.sin(pulse_timer) * 0.1)
    x, y = pos
    _circle(surface, GRAY, (x + 3, y + 3), radius)
    _circle(surface, YELLOW, pos, radius + 3)
    _circle_gradient(surface, pos, radius, ORANGE, GOLD)
    _circle(surface, BROWN, pos, radius, 1)
    _text(surface, "D", (x - 6, y - 8), 16, DARKBROWN)
    return radius


def draw_player_path(surface: pygame.Surface, points: Sequence[Point]) -> None:
    """Draw the walked path through the given screen points; the last leg stands out."""
    last = len(points) - 1
    for i, (start, end) in enumerate(pairwise(points), start=1):
        _line(surface, (start[0] + 2, start[1] + 2), (end[0] + 2, end[1] + 2), 3.0, GRAY)
        _line(surface, start, end, 2.0, ORANGE if i == last else GOLD)
        if i < last:
            _circle(surface, ORANGE, end, 2)