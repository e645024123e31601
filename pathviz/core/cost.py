# pathviz/core/cost.py
#!/usr/bin/env python3
"""Unit-step cost model for 4-connected grids."""

from pathviz.core.types import Cell

STEP_COST = 1.0


def move_cost(a: Cell, b: Cell) -> float:
    """Cost of stepping between two 4-adjacent, traversable cells."""
    if a.is_obstacle or b.is_obstacle:
        raise ValueError(f"Asked move cost involving a blocked cell: {a} -> {b}")
    if abs(a.row - b.row) + abs(a.col - b.col) != 1:
        raise ValueError(f"{a} and {b} are not 4-adjacent")
    return STEP_COST


def heuristic(a: Cell, b: Cell) -> float:
    """Manhattan distance; admissible and consistent for unit steps."""
    return float(abs(a.row - b.row) + abs(a.col - b.col))
