"""Branch corridors and hazard placement."""
import random
from typing import AbstractSet

from ..models.grid import CellType, Direction, Grid, GridCoordinate
from ..models.level import DifficultyProfile


class ConstraintEngine:
    """Adds false leads and holes around the protected primary path."""

    BASE_BRANCHES = 3
    BRANCH_LENGTH = 3

    @classmethod
    def branch_count(cls, level: int) -> int:
        return cls.BASE_BRANCHES + level // 10

    @classmethod
    def add_branches(cls, grid: Grid, profile: DifficultyProfile, rng: random.Random) -> Grid:
        """Carve short dead-end corridors out of random open cells."""
        size = len(grid)
        for _ in range(cls.branch_count(profile.level)):
            y = rng.randint(1, size - 2)
            x = rng.randint(1, size - 2)
            if grid[y][x] != CellType.EMPTY:
                continue

            direction = rng.choice(list(Direction))
            cur = GridCoordinate(x, y)
            for _ in range(cls.BRANCH_LENGTH):
                nxt = cur.neighbor(direction)
                if not nxt.is_interior(size):
                    break
                grid[nxt.y][nxt.x] = CellType.EMPTY
                cur = nxt
        return grid

    @staticmethod
    def add_hazards(
        grid: Grid,
        protected: AbstractSet[GridCoordinate],
        profile: DifficultyProfile,
        rng: random.Random,
    ) -> Grid:
        """Turn open off-path cells into holes with the profile's hazard density."""
        size = len(grid)
        density = profile.hazard_density
        for y in range(1, size - 1):
            for x in range(1, size - 1):
                if grid[y][x] != CellType.EMPTY or GridCoordinate(x, y) in protected:
                    continue
                if rng.random() < density:
                    grid[y][x] = CellType.HOLE
        return grid
