# pathviz/app/maze.py
#!/usr/bin/env python3
import random
from typing import Optional

from pathviz.core.grid import Grid

WALL_DENSITY_DEFAULT = 0.25


def random_walls(grid: Grid, density: float = WALL_DENSITY_DEFAULT,
                 rng: Optional[random.Random] = None) -> int:
    """Clear the grid, then wall each cell with probability `density`.

    Start and end stay open. Returns the number of walls placed.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be within [0, 1], got {density}")
    rng = rng or random.Random()
    grid.reset(preserve_obstacles=False)
    placed = 0
    for cell in grid:
        if rng.random() < density:
            cell.is_obstacle = True
            placed += 1
    for c in (grid.start, grid.end):
        if c is not None and grid.cell(c).is_obstacle:
            grid.cell(c).is_obstacle = False
            placed -= 1
    return placed
