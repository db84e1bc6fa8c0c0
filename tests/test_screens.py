import pygame
import pytest

from escapegrid import screens
from escapegrid.game import Game, GameState

WIDTH, HEIGHT = 1400, 900


@pytest.fixture
def surface():
    surf = pygame.Surface((WIDTH, HEIGHT))
    surf.fill((0, 0, 0))
    return surf


def _rgb(surface, x, y):
    return tuple(surface.get_at((int(x), int(y))))[:3]


def _changed(surface, rect, color):
    x0, y0, w, h = rect
    return sum(
        1
        for x in range(x0, x0 + w)
        for y in range(y0, y0 + h)
        if _rgb(surface, x, y) != color
    )


def _debug_game():
    game = Game()
    game.load_debug_level()
    return game


def test_background_starts_dark_blue(surface):
    screens.draw_background(surface)
    assert _rgb(surface, 0, 0) == screens.DARKBLUE[:3]
    assert _rgb(surface, 5, HEIGHT - 1) == screens.DARKGRAY[:3]


def test_side_panels_are_dark_gray(surface):
    screens.draw_side_panels(surface)
    assert _rgb(surface, 120, 400) == screens.DARKGRAY[:3]
    assert _rgb(surface, WIDTH - 120, 400) == screens.DARKGRAY[:3]
    assert _rgb(surface, 5, 400) == (0, 0, 0)


def test_game_background_panel_and_shadow(surface):
    screens.draw_game_background(surface)
    assert _rgb(surface, 700, 450) == screens.DARKGRAY[:3]
    assert _rgb(surface, WIDTH - 248, HEIGHT - 48) == screens.GRAY[:3]


def test_tutorial_element_without_symbol_fills_icon(surface):
    screens.draw_tutorial_element(surface, 100, 100, "Otro", "texto", (10, 20, 30, 255))
    assert _rgb(surface, 115, 115) == (10, 20, 30)


def test_tutorial_wall_element_has_bricks(surface):
    screens.draw_tutorial_element(
        surface, 100, 100, "Paredes", "No se pueden atravesar", screens.BROWN
    )
    assert _rgb(surface, 110, 110) == (255, 0, 0)
    assert _rgb(surface, 115, 115) == screens.BROWN[:3]


def test_tutorial_panel(surface):
    screens.draw_tutorial(surface)
    assert _rgb(surface, 110, 600) == screens.DARKBLUE[:3]


def test_menu_draws_info_panel(surface):
    screens.draw_menu(surface)
    assert _rgb(surface, 60, 560) == screens.DARKBLUE[:3]


def test_ui_draws_nothing_without_player(surface):
    screens.draw_ui(surface, Game())
    assert _changed(surface, (30, 30, 220, 150), (0, 0, 0)) == 0


def test_ui_draws_information_with_player(surface):
    screens.draw_ui(surface, _debug_game())
    assert _changed(surface, (30, 30, 220, 150), (0, 0, 0)) > 0


def test_win_screen_panel_and_overlay(surface):
    surface.fill((255, 255, 255))
    screens.draw_win_screen(surface, 1000)
    assert _rgb(surface, WIDTH // 2 - 240, HEIGHT // 2 + 90) == screens.DARKGREEN[:3]
    assert all(channel < 100 for channel in _rgb(surface, 5, 5))


def test_game_over_darkens_screen(surface):
    surface.fill((255, 255, 255))
    screens.draw_game_over_screen(surface)
    assert all(channel < 100 for channel in _rgb(surface, 5, 5))


def test_draw_game_menu_shows_background(surface):
    game = Game()
    screens.draw_game(surface, game)
    assert _rgb(surface, 0, 0) == screens.DARKBLUE[:3]


def test_draw_game_playing_lays_out_and_draws_cells(surface):
    game = _debug_game()
    screens.draw_game(surface, game, 0.0)
    grid = game.grid
    assert grid.cells[0][0].screen_pos == grid.player_screen_position(0, 0, WIDTH, HEIGHT)
    wall_x, wall_y = grid.cells[2][3].screen_pos
    assert _rgb(surface, wall_x, wall_y) == (255, 0, 0)


def test_draw_game_auto_solving(surface):
    game = _debug_game()
    assert game.start_auto_solve()
    screens.draw_game(surface, game, 1.0)
    assert game.state is GameState.AUTO_SOLVING
    grid = game.grid
    gx, gy = grid.goal_pos
    assert grid.cells[gy][gx].screen_pos == grid.player_screen_position(gx, gy, WIDTH, HEIGHT)


def test_draw_game_over_state(surface):
    game = Game()
    game.state = GameState.GAME_OVER
    screens.draw_game(surface, game)
    assert _rgb(surface, 0, 0)[2] < screens.DARKBLUE[2]