# escapegrid

A puzzle game played on a hexagonal grid. Move from the start cell to the goal,
collect gems on the way and time your moves around gates that open and close on
a turn cycle and walls that only open after a number of turns. A built-in
solver can find a route and play it out for you.

## Installing

```
pip install .
```

## Playing

```
escapegrid
```

This opens a resizable 1400×900 window.

From the menu, press `1`–`4` to pick a level. The keys load these files,
relative to the working directory:

| Key | File |
| --- | --- |
| `1` | `assets/levels/level1.txt` |
| `2` | `assets/levels/level2.txt` |
| `3` | `assets/levels/level_expert.txt` |
| `4` | `assets/levels/level_nightmare.txt` |

`T` picks a small built-in 8×6 test level instead. A short guide to the map
elements is shown first; press Space, Enter or left-click to start the level,
or Esc to go back to the menu. If the level file cannot be read or parsed, the
game returns to the menu.

While playing:

- Left-click a neighbouring hexagon to move there. Walls, closed gates and
  temporal walls that are not yet open cannot be entered.
- Space asks the solver for a route and plays it out, one step every half
  second.
- R restarts the level.
- Esc returns to the menu.

R and Esc also work while the solver is playing and on the victory screen.
Reaching the goal cell wins the level.

Every move advances the turn counter by one. You start with 1000 points. Each
gem is worth 100; stepping onto a cell you have already visited costs 50 (the
score never drops below zero).

## What is not included

No level files come with the package. Keys `1`–`4` only work when the files
listed above exist under `assets/levels/` in the directory the game is started
from; write your own in the format below. The `T` test level needs no file.

## Level files

A level is a plain text file whose name contains `.txt`:

```
10 8
0 0
9 7
8
S . . # . . . . . .
. . . # . . K . . .
...
GATE_A 11001100
ASSIGN_3_4_A
TEMPORAL_5_3_10
```

The first four lines give the width and height, the start position (`x y`),
the goal position and the length of the turn cycle. Then come one row per
grid line, with spaces ignored and characters past the width dropped:

- `S` start, `G` goal, `#` wall, `.` free, `K` gem.
- `T` a temporal wall; without a `TEMPORAL_` line for it, it is open from
  turn 0.
- `O` and `X` are read the same as `G`; gates are placed with `ASSIGN_` lines.
- Any other character is a free cell.

The start and goal cells are taken from the second and third lines; the map
characters only decide how cells are drawn. After the map, blank lines are
skipped and these directives are read:

- `GATE_<name> <pattern>` defines a gate pattern: one `1` (open) or `0`
  (closed) per position in the turn cycle.
- `ASSIGN_<x>_<y>_<name>` makes the cell at (x, y) a gate using that pattern.
  A gate is open or closed according to the pattern entry at
  `turn % cycle length`; a gate with an unknown pattern stays open.
- `TEMPORAL_<x>_<y>_<turns>` makes the cell at (x, y) a wall that is open from
  the given turn on.

A directive that names a cell outside the map is an error.

## Using the pieces

Levels can be loaded and solved without opening a window:

```python
from escapegrid.levels import load_level
from escapegrid.grid import Grid
from escapegrid.pathfinder import PathFinder

grid = Grid.from_level(load_level("assets/levels/level1.txt"))
path = PathFinder(grid).find_path_astar()
```

- `escapegrid.levels`: `load_level(filename)` and `parse_level(text)` return a
  `LevelData`; both raise `LevelError` (a `ValueError`) when a file cannot be
  read or parsed.
- `escapegrid.grid.Grid`: the cells (`grid.cell(x, y)`), `neighbors(x, y)`,
  `is_valid_move(...)`, `update_gates_and_walls()` for `current_turn`, and
  screen layout helpers.
- `escapegrid.pathfinder.PathFinder`: `find_path_astar()` and
  `find_path_bfs()` search over (cell, turn) states, so gates and temporal
  walls are checked for the turn on which they would be entered. Each returns
  a list of `(x, y)` steps starting at the start cell, or an empty list when
  no route is found within its limits (A*: 10000 iterations, 5 seconds, 100
  turns; BFS: 5000 iterations, 3 seconds, 50 turns).
  `find_path_dijkstra()` is the same as `find_path_bfs()`, since every step
  costs the same.
- `escapegrid.player.Player`: position, score, walked path and collected gems.
- `escapegrid.game.Game`: the game state machine without any window. Call
  `show_tutorial`, `confirm_tutorial`, `click`, `start_auto_solve`,
  `update_auto_solve(dt)`, `tick`, `reset` and `return_to_menu` directly.

## Tests

```
pip install .[test]
pytest
```