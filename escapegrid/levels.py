"""Reading level descriptions from plain-text files."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_CELL_CHARS = {
    "S": "S",
    "G": "G",
    "#": "#",
    ".": ".",
    "K": "K",
    "O": "G",
    "X": "G",
    "T": "T",
}


class LevelError(ValueError):
    """A level file cannot be read or is malformed."""


@dataclass
class LevelData:
    """Everything a level file describes."""

    width: int = 0
    height: int = 0
    start_x: int = 0
    start_y: int = 0
    goal_x: int = 0
    goal_y: int = 0
    turn_cycle_length: int = 0
    cell_types: list[list[str]] = field(default_factory=list)
    items: list[tuple[int, int]] = field(default_factory=list)
    gate_patterns: dict[str, list[bool]] = field(default_factory=dict)
    gate_assignments: dict[tuple[int, int], str] = field(default_factory=dict)
    temporal_walls: dict[tuple[int, int], int] = field(default_factory=dict)


def parse_cell_char(char: str) -> str:
    """Normalise a map character; gates become 'G', unknown characters free."""
    return _CELL_CHARS.get(char, ".")


def _read_ints(line: str, count: int, what: str) -> list[int]:
    values = []
    pos = 0
    for _ in range(count):
        match = _INT_PREFIX.match(line, pos)
        if match is None:
            raise LevelError(f"cannot parse {what}: {line!r}")
        values.append(int(match.group(1)))
        pos = match.end()
    return values


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise LevelError(f"not a number: {text!r}")
    return int(match.group(1))


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise LevelError(f"missing {what}") from None


def _split_coords(command: str, prefix_len: int) -> tuple[int, int, str] | None:
    pos1 = command.find("_", prefix_len)
    pos2 = command.find("_", pos1 + 1)
    if pos1 == -1 or pos2 == -1:
        return None
    x = _to_int(command[prefix_len:pos1])
    y = _to_int(command[pos1 + 1 : pos2])
    return x, y, command[pos2 + 1 :]


def _mark(level: LevelData, x: int, y: int, char: str) -> None:
    if not (0 <= x < level.width and 0 <= y < level.height):
        raise LevelError(f"position ({x}, {y}) is outside the map")
    level.cell_types[y][x] = char


def _apply_directive(level: LevelData, line: str) -> None:
    tokens = line.split()
    if line.startswith("GATE_"):
        if len(tokens) >= 2:
            name, pattern = tokens[0][5:], tokens[1]
            level.gate_patterns[name] = [c == "1" for c in pattern]
            logger.info("gate pattern loaded: %s", name)
    elif line.startswith("ASSIGN_"):
        parts = _split_coords(tokens[0], 7) if tokens else None
        if parts is not None:
            x, y, pattern = parts
            level.gate_assignments[(x, y)] = pattern
            _mark(level, x, y, "G")
            logger.info("gate at (%d, %d) uses pattern %s", x, y, pattern)
    elif line.startswith("TEMPORAL_"):
        parts = _split_coords(tokens[0], 9) if tokens else None
        if parts is not None:
            x, y, rest = parts
            turns = _to_int(rest)
            level.temporal_walls[(x, y)] = turns
            _mark(level, x, y, "T")
            logger.info("temporal wall at (%d, %d) opens on turn %d", x, y, turns)


def parse_level(text: str) -> LevelData:
    """Parse the text of a level file."""
    raw = text.split("\n")
    if raw and raw[-1] == "":
        raw.pop()
    lines = iter(raw)
    level = LevelData()

    level.width, level.height = _read_ints(_next_line(lines, "dimensions"), 2, "dimensions")
    if level.width < 0 or level.height < 0:
        raise LevelError(f"negative dimensions: {level.width}x{level.height}")
    level.start_x, level.start_y = _read_ints(
        _next_line(lines, "start position"), 2, "start position"
    )
    level.goal_x, level.goal_y = _read_ints(_next_line(lines, "goal position"), 2, "goal position")
    (level.turn_cycle_length,) = _read_ints(
        _next_line(lines, "turn cycle length"), 1, "turn cycle length"
    )

    level.cell_types = [["."] * level.width for _ in range(level.height)]
    for y in range(level.height):
        row = _next_line(lines, f"map row {y}")
        cells = [c for c in row if c != " "][: level.width]
        for x, char in enumerate(cells):
            if char == "K":
                level.items.append((x, y))
                level.cell_types[y][x] = "."
            else:
                level.cell_types[y][x] = parse_cell_char(char)

    for line in lines:
        if line:
            _apply_directive(level, line)

    logger.info(
        "level loaded: %dx%d, start (%d, %d), goal (%d, %d)",
        level.width,
        level.height,
        level.start_x,
        level.start_y,
        level.goal_x,
        level.goal_y,
    )
    return level


def load_level(filename: str | Path) -> LevelData:
    """Load a level from a .txt file."""
    name = str(filename)
    if ".txt" not in name:
        raise LevelError("only .txt level files are supported")
    try:
        text = Path(name).read_text(encoding="utf-8")
    except OSError as exc:
        raise LevelError(f"cannot open level file: {name}") from exc
    return parse_level(text)