"""Primary path construction with stopper walls."""
import random
from dataclasses import dataclass
from typing import List, Optional, Set

from ..models.grid import CellType, Direction, Grid, GridCoordinate


@dataclass(frozen=True)
class PathData:
    """Carved primary path. path[0] is the start."""
    start: GridCoordinate
    finish: GridCoordinate
    path: List[GridCoordinate]


class PathConstructor:
    """
    Carves one guaranteed corridor from (1, 1) to (size-2, size-2).

    The corridor is built from straight runs. The cell just beyond each run
    is closed (a "stopper") so a slide along the run ends where the run ends
    and the route has to turn.
    """

    MAX_ITERATIONS = 150
    MIN_RUN = 2
    MAX_RUN = 4
    DESPERATION_RUN = 2
    # Close enough to the finish to stop walking
    FINISH_RADIUS = 2

    def __init__(self, size: int):
        self.size = size
        self.start = GridCoordinate(1, 1)
        self.finish = GridCoordinate(size - 2, size - 2)

    def build_primary_path(self, grid: Grid, rng: random.Random) -> Optional[PathData]:
        """
        Carve the primary path into the grid.

        Args:
            grid: Grid from the structural planner, modified in place.
            rng: Shared generation stream.

        Returns:
            PathData, or None if the walk ended too far from the finish.
        """
        current = self.start
        path: List[GridCoordinate] = [current]
        carved: Set[GridCoordinate] = {current}
        grid[current.y][current.x] = CellType.EMPTY

        last_dir: Optional[Direction] = None
        iterations = 0

        while current.distance(self.finish) > self.FINISH_RADIUS and iterations < self.MAX_ITERATIONS:
            iterations += 1

            candidates = [d for d in Direction if d != last_dir]
            rng.shuffle(candidates)

            moved = False
            for direction in candidates:
                run = self._try_project(grid, current, direction, rng.randint(self.MIN_RUN, self.MAX_RUN), carved)
                if run:
                    current = run[-1]
                    path.extend(run)
                    carved.update(run)
                    last_dir = direction
                    moved = True
                    break

            if not moved:
                # Desperation move, previous direction allowed
                direction = rng.choice(list(Direction))
                run = self._try_project(grid, current, direction, self.DESPERATION_RUN, carved)
                if run:
                    current = run[-1]
                    path.extend(run)
                    carved.update(run)
                    last_dir = direction

        if current.distance(self.finish) > self.FINISH_RADIUS:
            return None

        path.extend(self._connect_to_finish(grid, current))
        return PathData(start=self.start, finish=self.finish, path=path)

    def _try_project(
        self,
        grid: Grid,
        origin: GridCoordinate,
        direction: Direction,
        length: int,
        carved: Set[GridCoordinate],
    ) -> List[GridCoordinate]:
        """Open a straight run of `length` cells. Empty list if it leaves the interior."""
        run: List[GridCoordinate] = []
        step = origin
        for _ in range(length):
            step = step.neighbor(direction)
            if not step.is_interior(self.size):
                return []
            run.append(step)

        stopper = run[-1].neighbor(direction)
        if (
            stopper.is_interior(self.size)
            and stopper != self.finish
            and stopper not in carved
            and grid[stopper.y][stopper.x] == CellType.EMPTY
        ):
            grid[stopper.y][stopper.x] = CellType.WALL

        for cell in run:
            grid[cell.y][cell.x] = CellType.EMPTY
        return run

    def _connect_to_finish(self, grid: Grid, current: GridCoordinate) -> List[GridCoordinate]:
        """Open the finish and the few cells between it and the run end (x first, then y)."""
        link: List[GridCoordinate] = []
        x, y = current.x, current.y
        while x != self.finish.x:
            x += 1 if self.finish.x > x else -1
            link.append(GridCoordinate(x, y))
        while y != self.finish.y:
            y += 1 if self.finish.y > y else -1
            link.append(GridCoordinate(x, y))

        for cell in link:
            grid[cell.y][cell.x] = CellType.EMPTY
        grid[self.finish.y][self.finish.x] = CellType.EMPTY
        return link
