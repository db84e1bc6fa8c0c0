"""The player: position, score, path walked and items collected."""

from __future__ import annotations

from dataclasses import dataclass, field

BACKTRACK_PENALTY = 50
INITIAL_SCORE = 1000


@dataclass
class Player:
    """A player on the grid; the starting cell is the first step of the path."""

    x: int
    y: int
    score: int = INITIAL_SCORE
    path: list[tuple[int, int]] = field(default_factory=list)
    items: list[tuple[int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.add_to_path(self.x, self.y)

    def move_to(self, x: int, y: int) -> None:
        """Set the player's position."""
        self.x = x
        self.y = y

    def add_to_path(self, x: int, y: int) -> None:
        """Record a step of the walked path."""
        self.path.append((x, y))

    def has_visited(self, x: int, y: int) -> bool:
        """Whether the path already passes through (x, y)."""
        return (x, y) in self.path

    def reduce_score_for_backtrack(self) -> None:
        """Apply the backtracking penalty, never going below zero."""
        self.score = max(0, self.score - BACKTRACK_PENALTY)