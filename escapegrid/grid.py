"""The hexagonal grid: cells, gate and temporal-wall state, moves and layout."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterator

from escapegrid.cells import CellType, HexCell, Point
from escapegrid.levels import LevelData, load_level

logger = logging.getLogger(__name__)

_PANEL_WIDTH = 250.0
_VERTICAL_MARGIN = 50.0

# Neighbour offsets for flat-topped hexagons with odd columns shifted down.
_EVEN_COLUMN = ((0, -1), (1, -1), (1, 0), (0, 1), (-1, 0), (-1, -1))
_ODD_COLUMN = ((0, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0))

_CHAR_TYPES = {
    "S": CellType.START,
    "G": CellType.GOAL,
    "#": CellType.WALL,
    ".": CellType.FREE,
    "T": CellType.TEMPORAL_WALL,
}

_BLOCKING_WHEN_CLOSED = (CellType.GATE, CellType.TEMPORAL_WALL)


class Grid:
    """A rectangular map of hexagonal cells and the turn-based state on it."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells: list[list[HexCell]] = [
            [HexCell(x=x, y=y, type=CellType.FREE) for x in range(width)] for y in range(height)
        ]
        self.start_pos: tuple[int, int] = (0, 0)
        self.goal_pos: tuple[int, int] = (0, 0)
        self.current_turn = 0
        self.hex_size = 25.0
        self.turn_cycle_length = 8
        self.gate_patterns: dict[str, list[bool]] = {}

    @classmethod
    def from_level(cls, level: LevelData) -> Grid:
        """Build a grid from parsed level data."""
        grid = cls(level.width, level.height)
        grid._apply_level(level)
        return grid

    def load_from_file(self, filename: str | Path) -> None:
        """Replace this grid's contents with a level read from a file."""
        self._apply_level(load_level(filename))

    def _apply_level(self, level: LevelData) -> None:
        self.width = level.width
        self.height = level.height
        self.start_pos = (level.start_x, level.start_y)
        self.goal_pos = (level.goal_x, level.goal_y)
        self.turn_cycle_length = level.turn_cycle_length
        self.current_turn = 0

        largest = max(self.width, self.height)
        if largest > 12:
            self.hex_size = 20.0
        elif largest > 8:
            self.hex_size = 25.0
        else:
            self.hex_size = 30.0

        self.cells = []
        for y, row_chars in enumerate(level.cell_types):
            row = []
            for x, char in enumerate(row_chars):
                cell = HexCell(x=x, y=y, type=_CHAR_TYPES.get(char, CellType.FREE))
                if (x, y) in level.gate_assignments:
                    cell.type = CellType.GATE
                    cell.gate_pattern = level.gate_assignments[(x, y)]
                if (x, y) in level.temporal_walls:
                    cell.type = CellType.TEMPORAL_WALL
                    cell.turns_to_open = level.temporal_walls[(x, y)]
                    cell.is_currently_open = False
                row.append(cell)
            self.cells.append(row)

        for x, y in level.items:
            if self._in_bounds(x, y):
                self.cells[y][x].type = CellType.ITEM

        self.gate_patterns = {name: list(p) for name, p in level.gate_patterns.items()}
        self.update_gates_and_walls()
        logger.info("grid loaded: %dx%d cells", self.width, self.height)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _all_cells(self) -> Iterator[HexCell]:
        for row in self.cells:
            yield from row

    def cell(self, x: int, y: int) -> HexCell:
        """The cell at grid coordinates (x, y)."""
        if not self._in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside the grid")
        return self.cells[y][x]

    def update(self) -> None:
        """Advance per-frame state."""
        self.update_gates_and_walls()

    def update_gates_and_walls(self) -> None:
        """Open or close gates and temporal walls for the current turn."""
        cycle_position = self.current_turn % self.turn_cycle_length
        for cell in self._all_cells():
            if cell.type is CellType.GATE:
                pattern = self.gate_patterns.get(cell.gate_pattern)
                if pattern is not None and cycle_position < len(pattern):
                    cell.is_currently_open = pattern[cycle_position]
            elif cell.type is CellType.TEMPORAL_WALL:
                cell.is_currently_open = self.current_turn >= cell.turns_to_open

    def neighbors(self, x: int, y: int) -> list[tuple[int, int]]:
        """Coordinates of the in-bounds hexagonal neighbours of (x, y)."""
        offsets = _EVEN_COLUMN if x % 2 == 0 else _ODD_COLUMN
        return [
            (x + dx, y + dy) for dx, dy in offsets if self._in_bounds(x + dx, y + dy)
        ]

    def is_valid_move(self, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
        """Whether a single step from one cell to another is allowed now."""
        if not self._in_bounds(to_x, to_y):
            return False
        target = self.cells[to_y][to_x]
        if target.type is CellType.WALL:
            return False
        if target.type in _BLOCKING_WHEN_CLOSED and not target.is_currently_open:
            return False
        return (to_x, to_y) in self.neighbors(from_x, from_y)

    def cell_at(self, point: Point) -> HexCell | None:
        """The first cell whose clickable area contains the screen point."""
        return next(
            (cell for cell in self._all_cells() if cell.is_point_inside(point, self.hex_size)),
            None,
        )

    def map_offset(self, screen_width: float, screen_height: float) -> Point:
        """Top-left offset that centres the map between the side panels."""
        available_width = screen_width - _PANEL_WIDTH * 2
        available_height = screen_height - 100.0
        hex_width = self.hex_size * 2.0
        hex_height = math.sqrt(3.0) * self.hex_size
        map_width = hex_width * 0.75 * self.width + self.hex_size
        map_height = hex_height * self.height
        offset_x = _PANEL_WIDTH + (available_width - map_width) / 2.0
        offset_y = _VERTICAL_MARGIN + (available_height - map_height) / 2.0
        return (offset_x, offset_y)

    def hex_to_screen(self, x: int, y: int, offset: Point) -> Point:
        """Screen centre of cell (x, y) given the map offset."""
        hex_width = self.hex_size * 2.0
        hex_height = math.sqrt(3.0) * self.hex_size
        screen_x = hex_width * 0.75 * x
        screen_y = hex_height * (y + 0.5 * (x & 1))
        return (screen_x + offset[0], screen_y + offset[1])

    def player_screen_position(
        self, x: int, y: int, screen_width: float, screen_height: float
    ) -> Point:
        """Screen centre of cell (x, y) for a screen of the given size."""
        return self.hex_to_screen(x, y, self.map_offset(screen_width, screen_height))

    def layout(self, screen_width: float, screen_height: float) -> None:
        """Place every cell on a screen of the given size."""
        offset = self.map_offset(screen_width, screen_height)
        for cell in self._all_cells():
            cell.screen_pos = self.hex_to_screen(cell.x, cell.y, offset)