# pathviz/core/path.py
#!/usr/bin/env python3
from typing import List, Optional

from pathviz.core.errors import InternalConsistencyError
from pathviz.core.grid import Grid
from pathviz.core.types import Coord, Observer, SearchEvent, PATH_MEMBER


def reconstruct_path(grid: Grid, start: Coord, goal: Coord,
                     observer: Optional[Observer] = None) -> List[Coord]:
    """Walk predecessor links from goal back to start and return start..goal.

    Marks each cell `in_path` and emits PATH_MEMBER for interior cells in
    start->goal order.
    """
    path: List[Coord] = []
    seen = set()
    cur: Optional[Coord] = goal
    while cur is not None:
        if cur in seen or len(path) >= len(grid):
            raise InternalConsistencyError(f"predecessor chain loops at {cur}")
        seen.add(cur)
        path.append(cur)
        cur = grid.cell(cur).predecessor

    if path[-1] != start:
        raise InternalConsistencyError(
            f"predecessor chain from {goal} ends at {path[-1]}, not start {start}"
        )
    path.reverse()

    for c in path:
        grid.cell(c).in_path = True
        if observer is not None and c != start and c != goal:
            observer(SearchEvent(PATH_MEMBER, c))
    return path
