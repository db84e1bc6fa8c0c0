"""Full-screen views: menu, tutorial, playing field, side panels and end screens."""

from __future__ import annotations

import math
from functools import lru_cache
from itertools import pairwise, product
from typing import Callable

import pygame

from escapegrid.cells import Color, Point
from escapegrid.game import Game, GameState
from escapegrid.render import (
    BROWN,
    DARKBROWN,
    GOLD,
    GRAY,
    ORANGE,
    WHITE,
    YELLOW,
    draw_cell,
    draw_player,
    draw_player_path,
    hexagon_points,
)

DARKBLUE: Color = (0, 82, 172, 255)
DARKGRAY: Color = (80, 80, 80, 255)
LIGHTGRAY: Color = (200, 200, 200, 255)
SKYBLUE: Color = (102, 191, 255, 255)
GREEN: Color = (0, 228, 48, 255)
RED: Color = (230, 41, 55, 255)
BLUE: Color = (0, 121, 241, 255)
PURPLE: Color = (200, 122, 255, 255)
DARKGREEN: Color = (0, 117, 44, 255)
LIME: Color = (0, 158, 47, 255)
MAROON: Color = (190, 33, 55, 255)
OVERLAY: Color = (0, 0, 0, 180)

_TUTORIAL_ICON = 30


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _text(surface: pygame.Surface, text: str, x: float, y: float, size: int, color: Color) -> None:
    rendered = _font(size).render(text, True, color[:3])
    surface.blit(rendered, (round(x), round(y)))


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


def _circle_gradient(
    surface: pygame.Surface, center: Point, radius: float, inner: Color, outer: Color
) -> None:
    steps = max(1, math.ceil(radius))
    for i in range(steps):
        r = radius * (1.0 - i / steps)
        t = r / radius
        color = tuple(round(a + (b - a) * t) for a, b in zip(inner, outer))
        _circle(surface, color, center, r)


def _line(surface: pygame.Surface, start: Point, end: Point, width: float, color: Color) -> None:
    pygame.draw.line(surface, color, start, end, max(1, round(width)))


def _rect(surface: pygame.Surface, x: float, y: float, w: float, h: float, color: Color) -> None:
    pygame.draw.rect(surface, color, pygame.Rect(int(x), int(y), int(w), int(h)))


def _rounded_panel(
    surface: pygame.Surface,
    rect: tuple[float, float, float, float],
    roundness: float,
    fill: Color,
    outline: Color,
) -> None:
    x, y, w, h = rect
    box = pygame.Rect(int(x), int(y), int(w), int(h))
    radius = max(0, int(min(w, h) * roundness / 2))
    pygame.draw.rect(surface, fill, box, border_radius=radius)
    pygame.draw.rect(surface, outline, box, width=1, border_radius=radius)


def _overlay(surface: pygame.Surface, color: Color) -> None:
    shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    shade.fill(color)
    surface.blit(shade, (0, 0))


def draw_background(surface: pygame.Surface) -> None:
    """Vertical gradient from dark blue at the top to dark grey at the bottom."""
    width, height = surface.get_size()
    span = max(1, height - 1)
    for y in range(height):
        t = y / span
        color = tuple(round(a + (b - a) * t) for a, b in zip(DARKBLUE, DARKGRAY))
        pygame.draw.line(surface, color, (0, y), (width - 1, y))


def draw_menu(surface: pygame.Surface) -> None:
    """The title screen with the mechanics, the controls and the level choice."""
    width, height = surface.get_size()
    center_x, center_y = width // 2, height // 2
    _text(surface, "ESCAPE THE GRID", center_x - 280, 120, 60, GRAY)
    _text(surface, "ESCAPE THE GRID", center_x - 285, 115, 60, WHITE)
    _text(surface, "Clocktower Edition", center_x - 120, 190, 24, SKYBLUE)

    _rounded_panel(surface, (50, 240, width - 100, 350), 0.02, DARKBLUE, BLUE)
    _text(surface, "Mecánicas Especiales:", 80, 270, 24, GOLD)
    mechanics = (
        "• Compuertas que se abren/cierran por turnos",
        "• Paredes temporales que se abren después de N turnos",
        "• Sistema de puntuación con penalización por backtracking",
        "• Controles solo por mouse en grid hexagonal",
    )
    for line_no, line in enumerate(mechanics):
        _text(surface, line, 100, 305 + 25 * line_no, 18, LIGHTGRAY)

    _text(surface, "Controles:", 80, 420, 24, GOLD)
    controls = (
        "• Click izquierdo: Mover a celda hexagonal",
        "• ESPACIO: Resolver automáticamente",
        "• R: Reiniciar nivel",
    )
    for line_no, line in enumerate(controls):
        _text(surface, line, 100, 450 + 25 * line_no, 18, LIGHTGRAY)

    _rounded_panel(surface, (center_x - 200, 550, 400, 120), 0.02, DARKBLUE, BLUE)
    _text(surface, "Selecciona un nivel:", center_x - 100, 570, 20, WHITE)
    _text(surface, "1 - Nivel Básico", center_x - 180, 600, 20, GREEN)
    _text(surface, "2 - Nivel Intermedio", center_x - 10, 600, 20, YELLOW)
    _text(surface, "3 - EXPERTO", center_x - 180, center_y + 180, 20, RED)
    _text(surface, "4 - NIGHTMARE", center_x - 10, center_y + 180, 20, MAROON)


_LEFT_ELEMENTS: tuple[tuple[str, str, Color], ...] = (
    ("Jugador (TÚ)", "Muévete con click izquierdo", ORANGE),
    ("Punto de Inicio", "Donde comienzas", GREEN),
    ("Meta", "Objetivo a alcanzar", RED),
    ("Gemas", "Recoléctalas para puntos (+100)", GOLD),
)
_RIGHT_ELEMENTS: tuple[tuple[str, str, Color], ...] = (
    ("Paredes", "No se pueden atravesar", BROWN),
    ("Compuertas Abiertas", "Puedes pasar", BLUE),
    ("Compuertas Cerradas", "Bloqueadas temporalmente", PURPLE),
    ("Paredes Temporales", "Se abren después de N turnos", DARKGRAY),
)


def draw_tutorial(surface: pygame.Surface) -> None:
    """The guide to the map elements shown before a level starts."""
    width, height = surface.get_size()
    center_x = width // 2
    _overlay(surface, OVERLAY)
    _rounded_panel(surface, (100, 50, width - 200, height - 100), 0.02, DARKBLUE, SKYBLUE)

    _text(surface, "GUÍA DE ELEMENTOS DEL JUEGO", center_x - 250, 80, 32, GOLD)
    _text(surface, "Aprende qué encontrarás en el mapa", center_x - 150, 120, 18, LIGHTGRAY)

    start_y = 160
    spacing = 80
    for column_x, elements in ((150, _LEFT_ELEMENTS), (center_x + 100, _RIGHT_ELEMENTS)):
        for row, (title, description, color) in enumerate(elements):
            draw_tutorial_element(surface, column_x, start_y + spacing * row, title, description, color)

    _rounded_panel(surface, (center_x - 200, height - 120, 400, 60), 0.05, DARKGREEN, LIME)
    _text(
        surface, "ESPACIO / ENTER / CLICK - Continuar al nivel", center_x - 180, height - 105, 16, WHITE
    )
    _text(surface, "ESC - Volver al menú", center_x - 70, height - 85, 14, LIGHTGRAY)


def _tutorial_hexagon(surface: pygame.Surface, center: Point, size: float, color: Color) -> None:
    points = hexagon_points(center, size)
    pygame.draw.polygon(surface, color, points)
    for start, end in zip(points, points[1:] + points[:1]):
        _line(surface, start, end, 1.5, WHITE)


def _symbol_player(surface: pygame.Surface, center: Point) -> None:
    cx, cy = center
    radius = _TUTORIAL_ICON * 0.3
    _circle(surface, YELLOW, center, radius + 2)
    _circle_gradient(surface, center, radius, ORANGE, GOLD)
    _circle(surface, BROWN, center, radius, 1)
    _text(surface, "D", cx - 4, cy - 6, 12, DARKBROWN)


def _symbol_start(surface: pygame.Surface, center: Point) -> None:
    s = _TUTORIAL_ICON * 0.4
    _circle(surface, (0, 150, 0, 255), center, s * 0.8)
    _circle(surface, (50, 200, 50, 255), center, s * 0.6)
    _circle(surface, (100, 255, 100, 255), center, s * 0.3)


def _symbol_goal(surface: pygame.Surface, center: Point) -> None:
    cx, cy = center
    s = _TUTORIAL_ICON * 0.4
    _circle(surface, (150, 0, 0, 255), center, s * 0.8)
    star = s * 0.5
    star_color: Color = (255, 255, 100, 255)
    _line(surface, (cx - star, cy), (cx + star, cy), 2.0, star_color)
    _line(surface, (cx, cy - star), (cx, cy + star), 2.0, star_color)
    diag = star * 0.7
    _line(surface, (cx - diag, cy - diag), (cx + diag, cy + diag), 1.5, star_color)
    _line(surface, (cx + diag, cy - diag), (cx - diag, cy + diag), 1.5, star_color)


def _symbol_gem(surface: pygame.Surface, center: Point) -> None:
    cx, cy = center
    gem = _TUTORIAL_ICON * 0.4 * 0.4
    _circle(surface, (0, 0, 0, 100), (cx + 1, cy + 1), gem + 1)
    _circle(surface, (200, 150, 0, 255), center, gem + 1)
    _circle(surface, (255, 215, 0, 255), center, gem)
    _circle(surface, (255, 255, 150, 255), center, gem * 0.6)
    _circle(surface, WHITE, (cx - gem * 0.3, cy - gem * 0.3), 1)


def _symbol_wall(surface: pygame.Surface, center: Point) -> None:
    cx, cy = center
    brick = _TUTORIAL_ICON * 0.3
    for row, col in product(range(2), repeat=2):
        offset_x = (col - 0.5) * brick * 0.8
        offset_y = (row - 0.5) * brick * 0.8
        _rect(
            surface,
            cx + offset_x - brick * 0.3,
            cy + offset_y - brick * 0.3,
            brick * 0.6,
            brick * 0.6,
            (255, 0, 0, 255),
        )


def _symbol_open_gate(surface: pygame.Surface, center: Point) -> None:
    cx, cy = center
    s = _TUTORIAL_ICON * 0.4
    color: Color = (0, 100, 255, 255)
    _rect(surface, cx - s * 0.6, cy - s * 0.3, s * 0.3, s * 0.6, color)
    _rect(surface, cx + s * 0.3, cy - s * 0.3, s * 0.3, s * 0.6, color)


def _symbol_closed_gate(surface: pygame.Surface, center: Point) -> None:
    cx, cy = center
    s = _TUTORIAL_ICON * 0.4
    cross: Color = (255, 0, 0, 255)
    _rect(surface, cx - s * 0.6, cy - s * 0.1, s * 1.2, s * 0.2, (255, 140, 0, 255))
    _line(surface, (cx - s * 0.3, cy - s * 0.3), (cx + s * 0.3, cy + s * 0.3), 2.0, cross)
    _line(surface, (cx + s * 0.3, cy - s * 0.3), (cx - s * 0.3, cy + s * 0.3), 2.0, cross)


def _symbol_clock(surface: pygame.Surface, center: Point) -> None:
    cx, cy = center
    s = _TUTORIAL_ICON * 0.4
    clock: Color = (255, 203, 0, 255)
    _circle(surface, clock, center, s * 0.6, 1)
    _circle(surface, clock, center, 1)
    _line(surface, center, (cx, cy - s * 0.4), 1.5, clock)
    _line(surface, center, (cx + s * 0.3, cy), 1.5, clock)
    _text(surface, "3", cx - 3, cy + s * 0.7, 10, WHITE)


_TUTORIAL_SYMBOLS: dict[str, Callable[[pygame.Surface, Point], None]] = {
    "Jugador (TÚ)": _symbol_player,
    "Punto de Inicio": _symbol_start,
    "Meta": _symbol_goal,
    "Gemas": _symbol_gem,
    "Paredes": _symbol_wall,
    "Compuertas Abiertas": _symbol_open_gate,
    "Compuertas Cerradas": _symbol_closed_gate,
    "Paredes Temporales": _symbol_clock,
}


def draw_tutorial_element(
    surface: pygame.Surface, x: int, y: int, title: str, description: str, color: Color
) -> None:
    """One entry of the guide: a hexagon icon with its symbol, a title and a description."""
    center = (x + _TUTORIAL_ICON / 2, y + _TUTORIAL_ICON / 2)
    _tutorial_hexagon(surface, center, _TUTORIAL_ICON / 2.0, color)
    symbol = _TUTORIAL_SYMBOLS.get(title)
    if symbol is not None:
        symbol(surface, center)
    _text(surface, title, x + _TUTORIAL_ICON + 10, y, 16, WHITE)
    _text(surface, description, x + _TUTORIAL_ICON + 10, y + 20, 12, LIGHTGRAY)


def draw_game_background(surface: pygame.Surface) -> None:
    """The framed panel the map sits on."""
    width, height = surface.get_size()
    panel_x, panel_y = 250, 50
    panel_w, panel_h = width - 500, height - 100
    _rect(surface, panel_x + 5, panel_y + 5, panel_w, panel_h, GRAY)
    _rounded_panel(surface, (panel_x, panel_y, panel_w, panel_h), 0.02, DARKGRAY, LIGHTGRAY)


def draw_side_panels(surface: pygame.Surface) -> None:
    """The information panel on the left and the controls panel on the right."""
    width, height = surface.get_size()
    _rounded_panel(surface, (20, 20, 200, height - 40), 0.05, DARKGRAY, GRAY)
    _rounded_panel(surface, (width - 220.0, 20, 200, height - 40), 0.05, DARKGRAY, GRAY)


def draw_ui(surface: pygame.Surface, game: Game) -> None:
    """Turn, score, items and position on the left; controls on the right."""
    if game.player is None or game.grid is None:
        return
    player = game.player
    _text(surface, "INFORMACIÓN", 40, 40, 18, GOLD)
    _text(surface, f"Turno: {game.grid.current_turn}", 40, 70, 16, WHITE)
    _text(surface, f"Puntuación: {player.score}", 40, 95, 16, LIME)
    _text(surface, f"Items: {len(player.items)}", 40, 120, 16, GOLD)
    _text(surface, f"Posición: ({player.x}, {player.y})", 40, 145, 16, SKYBLUE)

    right_x = int(surface.get_width() - 200.0) + 20
    _text(surface, "CONTROLES", right_x, 40, 18, GOLD)
    _text(surface, "ESPACIO:", right_x, 70, 14, LIGHTGRAY)
    _text(surface, "Auto-resolver", right_x, 85, 12, GRAY)
    _text(surface, "R: Reiniciar", right_x, 110, 14, LIGHTGRAY)
    _text(surface, "ESC: Menú", right_x, 130, 14, LIGHTGRAY)
    if game.state is GameState.AUTO_SOLVING:
        _text(surface, "RESOLVIENDO...", right_x, 160, 14, RED)


def draw_win_screen(surface: pygame.Surface, score: int) -> None:
    """The victory overlay with the final score."""
    _overlay(surface, OVERLAY)
    width, height = surface.get_size()
    center_x, center_y = width // 2, height // 2
    _rounded_panel(surface, (center_x - 250, center_y - 100, 500, 200), 0.05, DARKGREEN, LIME)
    _text(surface, "¡VICTORIA!", center_x - 120, center_y - 60, 48, LIME)
    _text(surface, f"Puntuación Final: {score}", center_x - 100, center_y - 10, 20, WHITE)
    _text(surface, "R: Reiniciar | ESC: Menú", center_x - 100, center_y + 30, 16, LIGHTGRAY)


def draw_game_over_screen(surface: pygame.Surface) -> None:
    """The game-over overlay."""
    _overlay(surface, OVERLAY)
    width, height = surface.get_size()
    center_x, center_y = width // 2, height // 2
    _text(surface, "GAME OVER", center_x - 150, center_y - 30, 48, RED)
    _text(surface, "R: Reiniciar | ESC: Menú", center_x - 100, center_y + 30, 20, LIGHTGRAY)


def _draw_playfield(
    surface: pygame.Surface, game: Game, pulse_timer: float, show_solution: bool
) -> None:
    grid = game.grid
    assert grid is not None
    width, height = surface.get_size()
    draw_game_background(surface)
    draw_side_panels(surface)

    grid.layout(width, height)
    for row in grid.cells:
        for cell in row:
            draw_cell(surface, cell, grid.hex_size)

    if game.player is not None:
        player = game.player
        pos = grid.player_screen_position(player.x, player.y, width, height)
        draw_player(surface, pos, grid.hex_size, pulse_timer)
        draw_player_path(
            surface, [grid.player_screen_position(x, y, width, height) for x, y in player.path]
        )

    if show_solution:
        for (ax, ay), (bx, by) in pairwise(game.solution_path):
            _line(surface, grid.cells[ay][ax].screen_pos, grid.cells[by][bx].screen_pos, 4.0, RED)

    draw_ui(surface, game)


def draw_game(surface: pygame.Surface, game: Game, pulse_timer: float = 0.0) -> None:
    """Draw the whole frame for the game's current state."""
    draw_background(surface)
    state = game.state
    if state is GameState.MENU:
        draw_menu(surface)
    elif state is GameState.TUTORIAL:
        draw_tutorial(surface)
    elif state in (GameState.PLAYING, GameState.AUTO_SOLVING, GameState.WIN):
        if game.grid is not None:
            _draw_playfield(surface, game, pulse_timer, state is GameState.AUTO_SOLVING)
        if state is GameState.WIN:
            draw_win_screen(surface, game.player.score if game.player is not None else 0)
    elif state is GameState.GAME_OVER:
        draw_game_over_screen(surface)