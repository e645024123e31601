# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any, Callable
from math import inf

Coord = Tuple[int, int]  # (row, col)

# observation kinds
VISITED        = "visited"
FRONTIER_ADDED = "frontier_added"
PATH_MEMBER    = "path_member"

# result statuses
PATH_FOUND = "path_found"
NO_PATH    = "no_path"
CANCELLED  = "cancelled"


class Cell:
    """One grid square. Coordinates are fixed; everything else is search-scoped
    except `is_obstacle`, which only the caller changes."""

    __slots__ = ("_row", "_col", "is_obstacle",
                 "visited", "g_cost", "h_cost", "f_cost", "predecessor", "in_path")

    def __init__(self, row: int, col: int, is_obstacle: bool = False):
        self._row = row
        self._col = col
        self.is_obstacle = is_obstacle
        self.clear_search_state()

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def coord(self) -> Coord:
        return (self._row, self._col)

    def clear_search_state(self) -> None:
        self.visited = False
        self.g_cost = inf
        self.h_cost = 0.0
        self.f_cost = inf
        self.predecessor: Optional[Coord] = None  # non-owning back link
        self.in_path = False

    def __repr__(self) -> str:
        flag = " wall" if self.is_obstacle else ""
        return f"Cell({self._row}, {self._col}{flag})"


@dataclass(frozen=True)
class SearchEvent:
    kind: str                     # VISITED | FRONTIER_ADDED | PATH_MEMBER
    coord: Coord


Observer = Callable[[SearchEvent], None]


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Coord] = field(default_factory=list)
    closed: List[Coord] = field(default_factory=list)
    current: Optional[Coord] = None
    path: Optional[List[Coord]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    status: str                   # PATH_FOUND | NO_PATH | CANCELLED
    path: Optional[List[Coord]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == PATH_FOUND

    @property
    def cancelled(self) -> bool:
        return self.status == CANCELLED


@dataclass(frozen=True)
class SearchRequest:
    grid: Any                     # pathviz.core.grid.Grid
    start: Coord
    end: Coord
