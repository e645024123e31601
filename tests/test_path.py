"""
Test suite for path reconstruction from predecessor links.
"""

import pytest

from pathviz.core.errors import InternalConsistencyError
from pathviz.core.grid import Grid
from pathviz.core.observer import EventRecorder
from pathviz.core.path import reconstruct_path
from pathviz.core.types import PATH_MEMBER


def link(grid, chain):
    """Point each coordinate in `chain` at the one before it."""
    for prev, cur in zip(chain, chain[1:]):
        grid.cell(cur).predecessor = prev


class TestReconstructPath:
    def test_walks_back_to_start(self):
        grid = Grid(3, 3)
        chain = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
        link(grid, chain)

        assert reconstruct_path(grid, (0, 0), (2, 2)) == chain

    def test_marks_cells_in_path(self):
        grid = Grid(2, 2)
        chain = [(0, 0), (0, 1), (1, 1)]
        link(grid, chain)
        reconstruct_path(grid, (0, 0), (1, 1))

        assert [c.coord for c in grid if c.in_path] == [(0, 0), (0, 1), (1, 1)]

    def test_emits_interior_cells_in_order(self):
        grid = Grid(1, 5)
        chain = [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]
        link(grid, chain)
        rec = EventRecorder()

        reconstruct_path(grid, (0, 0), (0, 4), observer=rec)

        assert rec.coords(PATH_MEMBER) == [(0, 1), (0, 2), (0, 3)]
        assert len(rec.events) == 3

    def test_dangling_chain_raises(self):
        grid = Grid(3, 3)
        link(grid, [(1, 1), (2, 1), (2, 2)])

        with pytest.raises(InternalConsistencyError):
            reconstruct_path(grid, (0, 0), (2, 2))

    def test_goal_without_predecessor_raises(self):
        grid = Grid(2, 2)

        with pytest.raises(InternalConsistencyError):
            reconstruct_path(grid, (0, 0), (1, 1))

    def test_cycle_raises(self):
        grid = Grid(2, 2)
        grid.cell((0, 1)).predecessor = (1, 1)
        grid.cell((1, 1)).predecessor = (0, 1)

        with pytest.raises(InternalConsistencyError):
            reconstruct_path(grid, (0, 0), (1, 1))
