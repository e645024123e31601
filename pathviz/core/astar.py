# pathviz/core/astar.py
#!/usr/bin/env python3
"""
A* over a Grid — one expansion per step() for animation, or run_search()
to drive a whole run with an observer and a cancel token.

Algorithm API:
- init(grid, start, goal, observer) - reset() - step() -> StepResult

Heuristic:
- Manhattan distance, unit step cost, 4-connected moves. The heuristic is
  consistent, so a closed cell is never reopened.

Tie-breaking in the PQ:
- (f, h, seq, cell): lower f, then lower h, then FIFO by seq.
Stale heap entries (superseded by a cheaper relaxation) are skipped on pop.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from pathviz.core.cost import heuristic, move_cost
from pathviz.core.errors import InternalConsistencyError, InvalidRequest
from pathviz.core.grid import Grid
from pathviz.core.observer import CancelToken
from pathviz.core.path import reconstruct_path
from pathviz.core.types import (
    Cell, Coord, Observer, SearchEvent, SearchRequest, SearchResult, StepResult,
    VISITED, FRONTIER_ADDED, PATH_FOUND, NO_PATH, CANCELLED,
)

logger = logging.getLogger(__name__)


def _as_coord(label: str, c: Union[Cell, Coord]) -> Coord:
    if isinstance(c, Cell):
        return c.coord
    try:
        row, col = c
    except (TypeError, ValueError):
        raise InvalidRequest(f"{label} {c!r} is not a (row, col) pair") from None
    if not (isinstance(row, int) and isinstance(col, int)):
        raise InvalidRequest(f"{label} {c!r} must hold integer row and col")
    return (row, col)


def validate_request(grid: Grid, start: Optional[Union[Cell, Coord]],
                     end: Optional[Union[Cell, Coord]]) -> SearchRequest:
    """Fail fast on a request the engine must not run. Touches no search state.

    Endpoints may be given as Cells or (row, col) pairs.
    """
    if start is None or end is None:
        raise InvalidRequest("start and end must both be set")
    start, end = _as_coord("start", start), _as_coord("end", end)
    for label, c in (("start", start), ("end", end)):
        if not grid.in_bounds(c):
            raise InvalidRequest(f"{label} {c} is outside the {grid.rows}x{grid.cols} grid")
        if grid.is_obstacle(c):
            raise InvalidRequest(f"{label} {c} is an obstacle")
    if start == end:
        raise InvalidRequest(f"start and end are the same cell {start}")
    return SearchRequest(grid, start, end)


@dataclass
class AStarAlgo:
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Coord] = None
    goal: Optional[Coord] = None
    observer: Optional[Observer] = None
    open_pq: List[Tuple[float, float, int, Coord]] = field(default_factory=list)  # (f, h, seq, cell)
    open_set: set = field(default_factory=set)
    closed_count: int = 0
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    path: Optional[List[Coord]] = None
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Union[Cell, Coord], goal: Union[Cell, Coord],
             observer: Optional[Observer] = None) -> None:
        """Validate the request, then seed the frontier on `grid`."""
        req = validate_request(grid, start, goal)
        self.grid = req.grid
        self.start = req.start
        self.goal = req.end
        self.observer = observer
        self.reset()

    def reset(self) -> None:
        """Clear grid search fields and engine state, and seed with the start node."""
        if self.grid is None:
            return
        self.grid.reset(preserve_obstacles=True)
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_count = 0
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.path = None
        self.seq = 0

        s = self.grid.cell(self.start)
        s.g_cost = 0.0
        s.h_cost = heuristic(s, self.grid.cell(self.goal))
        s.f_cost = s.h_cost
        self._push(s)
        self.open_set.add(s.coord)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _push(self, c: Cell) -> None:
        heapq.heappush(self.open_pq, (c.f_cost, c.h_cost, self._bump(), c.coord))

    def _pop(self) -> Optional[Cell]:
        """Pop the best live frontier cell, discarding superseded entries."""
        while self.open_pq:
            f, _, _, coord = heapq.heappop(self.open_pq)
            cell = self.grid.cell(coord)
            if coord in self.open_set and f == cell.f_cost:
                self.open_set.remove(coord)
                return cell
        return None

    def _emit(self, kind: str, coord: Coord) -> None:
        if self.observer is not None:
            self.observer(SearchEvent(kind, coord))

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f node.
          - If goal, reconstruct and finish.
          - Else close it and relax its traversable neighbours.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=self.path,
                              metrics=self._metrics())

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        u = self._pop()
        if u is None:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())
        self.popped_count += 1

        if u.coord == self.goal:
            self.done = True
            self.path = reconstruct_path(self.grid, self.start, self.goal, self.observer)
            return StepResult(status="done", current=u.coord, path=self.path,
                              metrics=self._metrics())

        u.visited = True
        self.closed_count += 1
        if u.coord != self.start:
            self._emit(VISITED, u.coord)

        opened_now: List[Coord] = []
        for v in self.grid.neighbors(u):
            if v.is_obstacle:
                continue
            alt = u.g_cost + move_cost(u, v)
            if v.visited:
                if alt < v.g_cost:
                    raise InternalConsistencyError(
                        f"closed cell {v.coord} would be relaxed from {v.g_cost} to {alt}"
                    )
                continue

            in_frontier = v.coord in self.open_set
            if not in_frontier:
                v.h_cost = heuristic(v, self.grid.cell(self.goal))
            elif alt >= v.g_cost:
                continue

            v.predecessor = u.coord
            v.g_cost = alt
            v.f_cost = v.g_cost + v.h_cost
            self._push(v)
            if not in_frontier:
                self.open_set.add(v.coord)
                opened_now.append(v.coord)
                if v.coord != self.start and v.coord != self.goal:
                    self._emit(FRONTIER_ADDED, v.coord)

        return StepResult(
            status="running",
            opened=opened_now,
            closed=[u.coord],
            current=u.coord,
            metrics=self._metrics(),
        )

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": self.closed_count,
            "path_len": len(self.path) if self.path else 0,
            "total_cost": self.grid.cell(self.goal).g_cost if self.done else None,
        }


def run_search(grid: Grid, start: Union[Cell, Coord], end: Union[Cell, Coord],
               observer: Optional[Observer] = None,
               cancel: Optional[CancelToken] = None) -> SearchResult:
    """Run A* from start to end on grid until it finishes or is cancelled.

    Raises InvalidRequest before touching the grid when the endpoints are
    unusable. NO_PATH and CANCELLED are ordinary results. The caller must not
    edit obstacles or endpoints while this runs.
    """
    algo = AStarAlgo()
    algo.init(grid, start, end, observer)
    logger.debug("A* %s -> %s on %dx%d grid", algo.start, algo.goal, grid.rows, grid.cols)

    while True:
        if cancel is not None and cancel.cancelled:
            logger.info("search cancelled after %d expansions", algo.popped_count)
            return SearchResult(CANCELLED, metrics=algo._metrics())
        res = algo.step()
        if res.status == "done":
            logger.info("path found: %d cells, %d expansions", len(res.path), algo.popped_count)
            return SearchResult(PATH_FOUND, path=list(res.path), metrics=res.metrics)
        if res.status == "no_path":
            logger.info("no path after %d expansions", algo.popped_count)
            return SearchResult(NO_PATH, metrics=res.metrics)
