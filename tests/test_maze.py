import random

import pytest

from pathviz.app.maze import random_walls
from pathviz.core.grid import Grid


class TestRandomWalls:
    def test_zero_density_clears_walls(self):
        grid = Grid.from_matrix([[1, 1], [1, 0]])

        assert random_walls(grid, 0.0, random.Random(1)) == 0
        assert grid.obstacle_count() == 0

    def test_full_density_spares_endpoints(self):
        grid = Grid(4, 5)
        grid.set_start(0, 0)
        grid.set_end(3, 4)

        placed = random_walls(grid, 1.0, random.Random(1))

        assert placed == 18
        assert grid.obstacle_count() == 18
        assert not grid.is_obstacle((0, 0))
        assert not grid.is_obstacle((3, 4))

    def test_count_matches_grid(self):
        grid = Grid(20, 30)
        grid.set_start(5, 5)

        placed = random_walls(grid, 0.25, random.Random(42))

        assert placed == grid.obstacle_count()
        assert 0 < placed < 600

    def test_seeded_rng_is_reproducible(self):
        a, b = Grid(10, 10), Grid(10, 10)
        random_walls(a, 0.3, random.Random(7))
        random_walls(b, 0.3, random.Random(7))

        assert [c.is_obstacle for c in a] == [c.is_obstacle for c in b]

    def test_clears_search_state(self):
        grid = Grid(3, 3)
        grid.cell((1, 1)).visited = True

        random_walls(grid, 0.0)

        assert not grid.cell((1, 1)).visited

    @pytest.mark.parametrize("density", [-0.1, 1.5])
    def test_rejects_bad_density(self, density):
        with pytest.raises(ValueError):
            random_walls(Grid(2, 2), density)
