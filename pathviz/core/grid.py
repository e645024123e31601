# pathviz/core/grid.py
#!/usr/bin/env python3
"""
Grid model — fixed-size arena of Cells addressed by (row, col).

The grid owns per-cell static state (coordinates, obstacle flag) and the
search-scoped fields the engine writes during a run. It also carries the
optional start/end assignment the presentation layer edits.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Union

from pathviz.core.types import Cell, Coord

logger = logging.getLogger(__name__)

# up, down, left, right
_DIRS4 = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        self.cells: List[List[Cell]] = [[Cell(r, c) for c in range(cols)] for r in range(rows)]
        self.start: Optional[Coord] = None
        self.end: Optional[Coord] = None

    @classmethod
    def from_matrix(cls, cells: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from [row][col] ints where 1 marks an obstacle."""
        height = len(cells)
        width = len(cells[0]) if height else 0
        if any(len(r) != width for r in cells):
            raise ValueError("cells size mismatch")
        grid = cls(height, width)
        for r, row in enumerate(cells):
            for c, v in enumerate(row):
                grid.cells[r][c].is_obstacle = (v == 1)
        return grid

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __len__(self) -> int:
        return self._rows * self._cols

    # -------------------- lookup --------------------

    def in_bounds(self, c: Coord) -> bool:
        r, col = c
        return 0 <= r < self._rows and 0 <= col < self._cols

    def cell(self, c: Coord) -> Cell:
        if not self.in_bounds(c):
            raise ValueError(f"{c} out of bounds for {self._rows}x{self._cols} grid")
        r, col = c
        return self.cells[r][col]

    def is_obstacle(self, c: Coord) -> bool:
        return self.cell(c).is_obstacle

    def neighbors(self, c: Union[Cell, Coord]) -> List[Cell]:
        """In-bounds 4-connected neighbours, in up/down/left/right order."""
        r, col = c.coord if isinstance(c, Cell) else c
        out: List[Cell] = []
        for dr, dc in _DIRS4:
            nr, nc = r + dr, col + dc
            if 0 <= nr < self._rows and 0 <= nc < self._cols:
                out.append(self.cells[nr][nc])
        return out

    # -------------------- editing --------------------

    def set_obstacle(self, row: int, col: int, value: bool = True) -> None:
        self.cell((row, col)).is_obstacle = bool(value)

    def toggle_obstacle(self, row: int, col: int) -> bool:
        cell = self.cell((row, col))
        cell.is_obstacle = not cell.is_obstacle
        return cell.is_obstacle

    def set_start(self, row: int, col: int) -> bool:
        if not self._endpoint_ok((row, col), other=self.end):
            logger.warning("rejected start at %s", (row, col))
            return False
        self.start = (row, col)
        return True

    def set_end(self, row: int, col: int) -> bool:
        if not self._endpoint_ok((row, col), other=self.start):
            logger.warning("rejected end at %s", (row, col))
            return False
        self.end = (row, col)
        return True

    def clear_start(self) -> None:
        self.start = None

    def clear_end(self) -> None:
        self.end = None

    def _endpoint_ok(self, c: Coord, other: Optional[Coord]) -> bool:
        return self.in_bounds(c) and not self.is_obstacle(c) and c != other

    # -------------------- lifecycle --------------------

    def reset(self, preserve_obstacles: bool = True) -> None:
        """Return every cell to search defaults; optionally drop obstacles too."""
        for cell in self:
            cell.clear_search_state()
            if not preserve_obstacles:
                cell.is_obstacle = False

    def obstacle_count(self) -> int:
        return sum(1 for cell in self if cell.is_obstacle)


def configure_grid(rows: int, cols: int) -> Grid:
    return Grid(rows, cols)
