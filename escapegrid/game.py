"""Game state machine: menus, tutorial, moves, scoring and automatic solving."""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path

from escapegrid.cells import CellType, Point
from escapegrid.grid import Grid
from escapegrid.levels import LevelError
from escapegrid.pathfinder import PathFinder
from escapegrid.player import Player

logger = logging.getLogger(__name__)

DEBUG_LEVEL = "DEBUG_LEVEL"
LEVEL_FILES = (
    "assets/levels/level1.txt",
    "assets/levels/level2.txt",
    "assets/levels/level_expert.txt",
    "assets/levels/level_nightmare.txt",
)
ITEM_SCORE = 100
STEP_INTERVAL = 0.5
SCREEN_WIDTH = 1400
SCREEN_HEIGHT = 900


class GameState(Enum):
    """The screen the game is showing."""

    MENU = auto()
    TUTORIAL = auto()
    PLAYING = auto()
    AUTO_SOLVING = auto()
    GAME_OVER = auto()
    WIN = auto()


class Game:
    """Holds the current level, the player and what the game is doing."""

    def __init__(self) -> None:
        self.grid: Grid | None = None
        self.player: Player | None = None
        self.path_finder: PathFinder | None = None
        self.state = GameState.MENU
        self.current_level = ""
        self.pending_level = ""
        self.solution_path: list[tuple[int, int]] = []
        self.solution_step = 0
        self.step_timer = 0.0
        self.screen_width: float = SCREEN_WIDTH
        self.screen_height: float = SCREEN_HEIGHT

    def show_tutorial(self, level: str) -> None:
        """Show the tutorial screen, remembering which level to load afterwards."""
        self.pending_level = str(level)
        self.state = GameState.TUTORIAL

    def confirm_tutorial(self) -> None:
        """Leave the tutorial and load the pending level."""
        if self.state is not GameState.TUTORIAL:
            return
        if self.pending_level == DEBUG_LEVEL:
            self.load_debug_level()
        else:
            self.load_level(self.pending_level)

    def _start(self, grid: Grid, level_name: str) -> None:
        self.grid = grid
        start_x, start_y = grid.start_pos
        self.player = Player(int(start_x), int(start_y))
        self.path_finder = PathFinder(grid)
        self.solution_path = []
        self.solution_step = 0
        self.step_timer = 0.0
        self.current_level = level_name
        self.state = GameState.PLAYING

    def load_level(self, filename: str | Path) -> bool:
        """Load a level file and start playing it; on failure return to the menu."""
        try:
            grid = Grid(10, 8)
            grid.load_from_file(filename)
        except LevelError as exc:
            logger.error("cannot load level %s: %s", filename, exc)
            self.grid = None
            self.player = None
            self.path_finder = None
            self.state = GameState.MENU
            return False
        self._start(grid, str(filename))
        logger.info("level loaded: %s", filename)
        return True

    def load_debug_level(self) -> None:
        """Start a small built-in level used for testing."""
        grid = Grid(8, 6)
        grid.cells[0][0].type = CellType.START
        grid.cells[5][7].type = CellType.GOAL
        grid.cells[2][3].type = CellType.WALL
        grid.cells[3][4].type = CellType.ITEM
        grid.start_pos = (0, 0)
        grid.goal_pos = (7, 5)
        self._start(grid, DEBUG_LEVEL)
        logger.info("debug level loaded")

    def _step_to(self, x: int, y: int) -> None:
        assert self.grid is not None and self.player is not None
        if self.player.has_visited(x, y):
            self.player.reduce_score_for_backtrack()
        self.player.move_to(x, y)
        self.player.add_to_path(x, y)
        cell = self.grid.cells[y][x]
        cell.is_visited = True
        if cell.type is CellType.ITEM:
            self.player.items.append((x, y))
            cell.type = CellType.FREE
            self.player.score += ITEM_SCORE
        self.grid.current_turn += 1

    def click(self, point: Point) -> bool:
        """Move the player to the clicked cell if that is a legal move."""
        if self.state is not GameState.PLAYING or self.grid is None or self.player is None:
            return False
        self.grid.layout(self.screen_width, self.screen_height)
        cell = self.grid.cell_at(point)
        if cell is None:
            return False
        if not self.grid.is_valid_move(self.player.x, self.player.y, cell.x, cell.y):
            return False
        self._step_to(cell.x, cell.y)
        return True

    def hover(self, point: Point) -> None:
        """Highlight the cell under the pointer, and only that one."""
        if self.grid is None:
            return
        for row in self.grid.cells:
            for cell in row:
                cell.is_highlighted = False
        self.grid.layout(self.screen_width, self.screen_height)
        cell = self.grid.cell_at(point)
        if cell is not None:
            cell.is_highlighted = True

    def tick(self) -> None:
        """Per-frame update of gates, walls and the win condition."""
        if self.state is GameState.PLAYING:
            if self.grid is not None:
                self.grid.update()
            if self.is_game_won():
                self.state = GameState.WIN
        elif self.state is GameState.AUTO_SOLVING and self.grid is not None:
            self.grid.update()

    def start_auto_solve(self) -> bool:
        """Search for a route and start replaying it; False if none is found."""
        if self.path_finder is None:
            return False
        logger.info("starting automatic solve")
        path = self.path_finder.find_path_astar()
        if not path:
            logger.info("no solution found")
            return False
        self.solution_path = path
        self.solution_step = 0
        self.step_timer = 0.0
        self.state = GameState.AUTO_SOLVING
        logger.info("path found with %d steps", len(path))
        return True

    def update_auto_solve(self, dt: float) -> None:
        """Advance the replay of the found route by dt seconds."""
        if self.state is not GameState.AUTO_SOLVING or self.grid is None or self.player is None:
            return
        self.step_timer += dt
        if self.step_timer < STEP_INTERVAL or self.solution_step >= len(self.solution_path):
            return
        x, y = self.solution_path[self.solution_step]
        self._step_to(x, y)
        self.solution_step += 1
        self.step_timer = 0.0
        if self.solution_step >= len(self.solution_path):
            self.state = GameState.WIN if self.is_game_won() else GameState.PLAYING

    def reset(self) -> None:
        """Restart the current level from scratch."""
        if self.grid is None or not self.current_level:
            return
        if self.current_level == DEBUG_LEVEL:
            self.load_debug_level()
        else:
            self.load_level(self.current_level)

    def return_to_menu(self) -> None:
        """Go back to the level-selection menu."""
        self.state = GameState.MENU

    def is_game_won(self) -> bool:
        """Whether the player stands on the goal."""
        if self.player is None or self.grid is None:
            return False
        goal_x, goal_y = self.grid.goal_pos
        return (self.player.x, self.player.y) == (int(goal_x), int(goal_y))