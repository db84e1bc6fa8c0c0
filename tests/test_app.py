import pygame
import pytest

from escapegrid import app
from escapegrid.game import DEBUG_LEVEL, LEVEL_FILES, Game, GameState


def _playing_game():
    game = Game()
    game.show_tutorial(DEBUG_LEVEL)
    app.handle_key(game, pygame.K_SPACE)
    return game


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


@pytest.mark.parametrize(
    "key, index",
    [(pygame.K_1, 0), (pygame.K_2, 1), (pygame.K_3, 2), (pygame.K_4, 3)],
)
def test_menu_number_keys_open_tutorial(key, index):
    game = Game()
    app.handle_key(game, key)
    assert game.state is GameState.TUTORIAL
    assert game.pending_level == LEVEL_FILES[index]


def test_menu_t_opens_debug_tutorial():
    game = Game()
    app.handle_key(game, pygame.K_t)
    assert game.pending_level == DEBUG_LEVEL
    assert game.state is GameState.TUTORIAL


def test_menu_escape_stays_in_menu():
    game = Game()
    app.handle_key(game, pygame.K_ESCAPE)
    assert game.state is GameState.MENU


def test_tutorial_confirm_loads_debug_level():
    game = _playing_game()
    assert game.state is GameState.PLAYING
    assert game.current_level == DEBUG_LEVEL
    assert (game.player.x, game.player.y) == (0, 0)


def test_tutorial_escape_returns_to_menu():
    game = Game()
    game.show_tutorial(DEBUG_LEVEL)
    app.handle_key(game, pygame.K_ESCAPE)
    assert game.state is GameState.MENU


def test_tutorial_with_missing_level_falls_back_to_menu(tmp_path):
    game = Game()
    game.show_tutorial(str(tmp_path / "missing.txt"))
    app.handle_key(game, pygame.K_RETURN)
    assert game.state is GameState.MENU


def test_playing_space_starts_auto_solve():
    game = _playing_game()
    app.handle_key(game, pygame.K_SPACE)
    assert game.state is GameState.AUTO_SOLVING
    assert game.solution_path[0] == (0, 0)
    assert game.solution_path[-1] == (7, 5)


def test_playing_escape_returns_to_menu():
    game = _playing_game()
    app.handle_key(game, pygame.K_ESCAPE)
    assert game.state is GameState.MENU


def test_win_reset_restarts_level():
    game = _playing_game()
    game.player.move_to(7, 5)
    game.state = GameState.WIN
    app.handle_key(game, pygame.K_r)
    assert game.state is GameState.PLAYING
    assert (game.player.x, game.player.y) == (0, 0)


def test_game_over_escape_returns_to_menu():
    game = _playing_game()
    game.state = GameState.GAME_OVER
    app.handle_key(game, pygame.K_ESCAPE)
    assert game.state is GameState.MENU


def test_quit_event_stops_loop():
    assert app.handle_event(Game(), pygame.event.Event(pygame.QUIT)) is False


def test_key_event_is_dispatched():
    game = Game()
    assert app.handle_event(game, _key(pygame.K_2)) is True
    assert game.pending_level == LEVEL_FILES[1]


def test_click_in_tutorial_confirms():
    game = Game()
    game.show_tutorial(DEBUG_LEVEL)
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0))
    app.handle_event(game, event)
    assert game.state is GameState.PLAYING


def _cell_point(game, x, y):
    px, py = game.grid.player_screen_position(x, y, game.screen_width, game.screen_height)
    return (round(px), round(py))


def test_click_on_neighbour_moves_player():
    game = _playing_game()
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=_cell_point(game, 1, 0))
    app.handle_event(game, event)
    assert (game.player.x, game.player.y) == (1, 0)
    assert game.grid.current_turn == 1
    assert game.player.path == [(0, 0), (1, 0)]


def test_mouse_motion_highlights_cell():
    game = _playing_game()
    event = pygame.event.Event(
        pygame.MOUSEMOTION, pos=_cell_point(game, 2, 3), rel=(0, 0), buttons=(0, 0, 0)
    )
    app.handle_event(game, event)
    highlighted = [(c.x, c.y) for row in game.grid.cells for c in row if c.is_highlighted]
    assert highlighted == [(2, 3)]


def test_resize_updates_screen_size():
    game = Game()
    event = pygame.event.Event(pygame.VIDEORESIZE, size=(1000, 700), w=1000, h=700)
    app.handle_event(game, event)
    assert (game.screen_width, game.screen_height) == (1000, 700)


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        app.main(["--help"])
    assert info.value.code == 0


def test_main_runs_until_quit(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.setattr(
        pygame.event, "get", lambda *args, **kwargs: [pygame.event.Event(pygame.QUIT)]
    )
    assert app.main([]) == 0