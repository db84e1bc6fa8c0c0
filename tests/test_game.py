import pytest

from escapegrid.cells import CellType
from escapegrid.game import DEBUG_LEVEL, Game, GameState
from escapegrid.player import BACKTRACK_PENALTY, INITIAL_SCORE


def _write(tmp_path, text):
    path = tmp_path / "level.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)


@pytest.fixture
def line_level(tmp_path):
    return _write(tmp_path, "3 1\n0 0\n2 0\n8\nS.G\n")


@pytest.fixture
def item_level(tmp_path):
    return _write(tmp_path, "3 1\n0 0\n2 0\n8\nSKG\n")


def _point(game, x, y):
    return game.grid.player_screen_position(x, y, game.screen_width, game.screen_height)


def _playing(path):
    game = Game()
    game.show_tutorial(path)
    game.confirm_tutorial()
    return game


def test_initial_state_is_menu():
    game = Game()
    assert game.state is GameState.MENU
    assert game.grid is None
    assert game.is_game_won() is False


def test_show_tutorial_remembers_level(line_level):
    game = Game()
    game.show_tutorial(line_level)
    assert game.state is GameState.TUTORIAL
    assert game.pending_level == line_level


def test_confirm_tutorial_loads_level(line_level):
    game = _playing(line_level)
    assert game.state is GameState.PLAYING
    assert (game.player.x, game.player.y) == (0, 0)
    assert game.current_level == line_level
    assert game.player.score == INITIAL_SCORE


def test_missing_level_returns_to_menu(tmp_path):
    game = Game()
    assert game.load_level(str(tmp_path / "missing.txt")) is False
    assert game.state is GameState.MENU
    assert game.player is None


def test_click_neighbour_moves_player(line_level):
    game = _playing(line_level)
    assert game.click(_point(game, 1, 0)) is True
    assert (game.player.x, game.player.y) == (1, 0)
    assert game.grid.current_turn == 1
    assert game.player.path == [(0, 0), (1, 0)]
    assert game.grid.cell(1, 0).is_visited is True


def test_click_non_neighbour_is_ignored(line_level):
    game = _playing(line_level)
    assert game.click(_point(game, 2, 0)) is False
    assert (game.player.x, game.player.y) == (0, 0)
    assert game.grid.current_turn == 0


def test_click_outside_grid_is_ignored(line_level):
    game = _playing(line_level)
    assert game.click((-500.0, -500.0)) is False
    assert game.player.path == [(0, 0)]


def test_item_pickup_scores(item_level):
    game = _playing(item_level)
    game.click(_point(game, 1, 0))
    assert game.player.items == [(1, 0)]
    assert game.grid.cell(1, 0).type is CellType.FREE
    assert game.player.score == INITIAL_SCORE + 100


def test_backtrack_penalty(line_level):
    game = _playing(line_level)
    game.click(_point(game, 1, 0))
    game.click(_point(game, 0, 0))
    assert (game.player.x, game.player.y) == (0, 0)
    assert game.player.score == INITIAL_SCORE - BACKTRACK_PENALTY


def test_reaching_goal_wins_on_tick(line_level):
    game = _playing(line_level)
    game.click(_point(game, 1, 0))
    game.tick()
    assert game.state is GameState.PLAYING
    game.click(_point(game, 2, 0))
    assert game.is_game_won() is True
    game.tick()
    assert game.state is GameState.WIN


def test_temporal_wall_blocks_until_open(tmp_path):
    path = _write(tmp_path, "3 1\n0 0\n2 0\n8\nS.G\nTEMPORAL_1_0_1\n")
    game = _playing(path)
    assert game.grid.cell(1, 0).type is CellType.TEMPORAL_WALL
    assert game.click(_point(game, 1, 0)) is False
    game.grid.current_turn = 1
    game.tick()
    assert game.click(_point(game, 1, 0)) is True


def test_auto_solve_replays_path_to_win(line_level):
    game = _playing(line_level)
    assert game.start_auto_solve() is True
    assert game.state is GameState.AUTO_SOLVING
    assert game.solution_path == [(0, 0), (1, 0), (2, 0)]
    for _ in game.solution_path:
        game.update_auto_solve(0.5)
    assert game.state is GameState.WIN
    assert (game.player.x, game.player.y) == (2, 0)
    # The route starts on the start cell, which the player has already visited.
    assert game.player.score == INITIAL_SCORE - BACKTRACK_PENALTY


def test_auto_solve_waits_for_interval(line_level):
    game = _playing(line_level)
    game.start_auto_solve()
    game.update_auto_solve(0.2)
    assert game.solution_step == 0
    game.update_auto_solve(0.3)
    assert game.solution_step == 1
    assert game.step_timer == 0.0


def test_auto_solve_without_route(tmp_path):
    path = _write(tmp_path, "3 1\n0 0\n2 0\n8\nS#G\n")
    game = _playing(path)
    assert game.start_auto_solve() is False
    assert game.state is GameState.PLAYING
    assert game.solution_path == []


def test_debug_level():
    game = Game()
    game.show_tutorial(DEBUG_LEVEL)
    game.confirm_tutorial()
    assert game.state is GameState.PLAYING
    assert (game.grid.width, game.grid.height) == (8, 6)
    assert game.grid.cell(7, 5).type is CellType.GOAL
    assert game.grid.cell(3, 2).type is CellType.WALL
    assert game.grid.cell(4, 3).type is CellType.ITEM
    assert game.grid.goal_pos == (7, 5)
    assert game.current_level == DEBUG_LEVEL


def test_reset_restarts_level(item_level):
    game = _playing(item_level)
    game.click(_point(game, 1, 0))
    game.reset()
    assert (game.player.x, game.player.y) == (0, 0)
    assert game.grid.current_turn == 0
    assert game.grid.cell(1, 0).type is CellType.ITEM
    assert game.player.score == INITIAL_SCORE


def test_return_to_menu(line_level):
    game = _playing(line_level)
    game.return_to_menu()
    assert game.state is GameState.MENU


def test_hover_highlights_one_cell(line_level):
    game = _playing(line_level)
    game.hover(_point(game, 2, 0))
    highlighted = [(c.x, c.y) for row in game.grid.cells for c in row if c.is_highlighted]
    assert highlighted == [(2, 0)]
    game.hover((-500.0, -500.0))
    assert not any(c.is_highlighted for row in game.grid.cells for c in row)


def test_click_ignored_outside_playing(line_level):
    game = _playing(line_level)
    game.return_to_menu()
    assert game.click(_point(game, 1, 0)) is False
    assert game.player.path == [(0, 0)]