"""Level generator engine with retry and deterministic fallback."""
import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models.grid import CellType, Grid, GridCoordinate, new_grid
from ..models.level import (
    DifficultyProfile,
    ELEMENT_THRESHOLDS,
    GenerationDiagnostics,
    LevelData,
    MovingSpikeData,
)
from .constraints import ConstraintEngine
from .elements import AdvancedElements, ElementPlacer
from .path_constructor import PathConstructor, PathData
from .planner import StructuralPlanner
from .rng import SeededRandom, seed_for_level
from .solver import LevelSolver

logger = logging.getLogger(__name__)


@dataclass
class _Attempt:
    grid: Grid
    path_data: PathData
    elements: AdvancedElements
    moves: int


class MazeGenerator:
    """Generates solvable maze levels from a level index."""

    GRID_SIZE = 15
    MAX_ATTEMPTS = 300

    # Fallback layout
    FALLBACK_BRANCH_COLUMNS = [3, 6, 9, 11]
    FALLBACK_BRANCH_ROWS = range(2, 6)
    FALLBACK_HAZARD_LEVEL = 10

    def __init__(self, size: int = GRID_SIZE, max_attempts: int = MAX_ATTEMPTS):
        self.size = size
        self.max_attempts = max_attempts

    def generate(self, level_index: int) -> Tuple[LevelData, GenerationDiagnostics]:
        """
        Generate the level for an index.

        Same index, same level: the random stream is derived from the index
        alone and carried across every attempt without reseeding.

        Args:
            level_index: Level number (0 or greater).

        Returns:
            Tuple of (LevelData, GenerationDiagnostics).

        Raises:
            ValueError: If level_index is negative.
        """
        if level_index < 0:
            raise ValueError(f"level_index must be non-negative, got {level_index}")

        seed = seed_for_level(level_index)
        rng = SeededRandom(seed)
        profile = DifficultyProfile.for_level(level_index)

        for attempt in range(1, self.max_attempts + 1):
            result = self._run_attempt(level_index, profile, rng)
            if result is None:
                continue

            if attempt > 1:
                logger.info(
                    f"[MazeGenerator] Generated after retries. level={level_index} "
                    f"seed={seed} attempts={attempt} moves={result.moves}"
                )
            level = self._to_level_data(
                level_index,
                result.grid,
                result.path_data.start,
                result.path_data.finish,
                moving_spikes=result.elements.moving_spikes,
                portals=result.elements.portals,
                switch_targets=result.elements.switch_targets,
            )
            return level, GenerationDiagnostics(
                level_number=level_index,
                seed=seed,
                attempts=attempt,
                used_fallback=False,
            )

        logger.warning(
            f"[MazeGenerator] Fallback level used. level={level_index} "
            f"seed={seed} maxAttempts={self.max_attempts}"
        )
        return self.make_fallback_level(level_index), GenerationDiagnostics(
            level_number=level_index,
            seed=seed,
            attempts=self.max_attempts,
            used_fallback=True,
        )

    def _run_attempt(
        self, level_index: int, profile: DifficultyProfile, rng: random.Random
    ) -> Optional[_Attempt]:
        """One pass of every phase on a fresh grid. None means retry."""
        grid = new_grid(self.size)

        # Phase 1: structural planning
        StructuralPlanner(self.size).generate_macro_zones(grid, rng)

        # Phase 2: primary path
        path_data = PathConstructor(self.size).build_primary_path(grid, rng)
        if path_data is None:
            logger.debug(f"[MazeGenerator] Path construction failed. level={level_index}")
            return None

        # Phase 3: branches and hazards
        ConstraintEngine.add_branches(grid, profile, rng)
        ConstraintEngine.add_hazards(grid, set(path_data.path), profile, rng)

        # Phase 4: keys, portals, moving spikes
        elements = ElementPlacer(self.size).place(grid, path_data, level_index, rng)

        # Markers go down before solving; the finish sits in a corner so
        # slides stop on it either way
        self._stamp_markers(grid, path_data.start, path_data.finish)

        # Phase 5: validation
        solver = LevelSolver(grid, path_data.start, path_data.finish, elements.portals)
        moves = solver.solve_complexity()
        if moves is None or moves < profile.min_moves:
            logger.debug(
                f"[MazeGenerator] Solver rejected attempt. level={level_index} "
                f"moves={moves} min_moves={profile.min_moves}"
            )
            return None

        return _Attempt(grid=grid, path_data=path_data, elements=elements, moves=moves)

    def make_fallback_level(self, level_index: int) -> LevelData:
        """
        Build the hand-authored fallback level.

        An L-shaped corridor along row 1 and column size-2 plus fixed branch
        columns. Hazards, key/gate and portals follow the same level
        thresholds as generated levels and never block the L.
        """
        size = self.size
        grid = new_grid(size)
        start = GridCoordinate(1, 1)
        finish = GridCoordinate(size - 2, size - 2)

        for x in range(1, size - 1):
            grid[1][x] = CellType.EMPTY
        for y in range(1, size - 1):
            grid[y][size - 2] = CellType.EMPTY

        branch_columns = [x for x in self.FALLBACK_BRANCH_COLUMNS if x < size - 2]
        for x in branch_columns:
            for y in self.FALLBACK_BRANCH_ROWS:
                if y < size - 1:
                    grid[y][x] = CellType.EMPTY

        if level_index >= self.FALLBACK_HAZARD_LEVEL:
            for y in range(3, size - 2, 3):
                for x in range(2, size - 3, 4):
                    if grid[y][x] == CellType.EMPTY and y != 1 and x != size - 2:
                        grid[y][x] = CellType.HOLE

        if level_index >= ELEMENT_THRESHOLDS["key_gate"] and branch_columns:
            # Key caps the last branch column; the gate blocks row 1 just
            # before the corner, so the route is right, up, down, right, up
            column = branch_columns[-1]
            key = GridCoordinate(column, self.FALLBACK_BRANCH_ROWS[-1])
            gate = GridCoordinate(size - 3, 1)
            if column < size - 3 and grid[key.y][key.x] == CellType.EMPTY and grid[gate.y][gate.x] == CellType.EMPTY:
                grid[key.y][key.x] = CellType.KEY
                grid[gate.y][gate.x] = CellType.GATE

        portals: Dict[GridCoordinate, GridCoordinate] = {}
        if level_index >= ELEMENT_THRESHOLDS["portals"] and len(branch_columns) >= 3:
            top = self.FALLBACK_BRANCH_ROWS[-1]
            first = GridCoordinate(branch_columns[0], top)
            second = GridCoordinate(branch_columns[2], top)
            if grid[first.y][first.x] == CellType.EMPTY and grid[second.y][second.x] == CellType.EMPTY:
                grid[first.y][first.x] = CellType.PORTAL
                grid[second.y][second.x] = CellType.PORTAL
                portals = {first: second, second: first}

        self._stamp_markers(grid, start, finish)

        if LevelSolver(grid, start, finish, portals).solve_complexity() is None:
            logger.error(
                f"[MazeGenerator] Fallback validation failed unexpectedly. "
                f"level={level_index} seed={seed_for_level(level_index)}"
            )

        return self._to_level_data(level_index, grid, start, finish, portals=portals)

    @staticmethod
    def _stamp_markers(grid: Grid, start: GridCoordinate, finish: GridCoordinate) -> None:
        grid[start.y][start.x] = CellType.PLAYER
        grid[finish.y][finish.x] = CellType.FINISH

    def _to_level_data(
        self,
        level_index: int,
        grid: Grid,
        start: GridCoordinate,
        finish: GridCoordinate,
        moving_spikes: Optional[List[MovingSpikeData]] = None,
        portals: Optional[Dict[GridCoordinate, GridCoordinate]] = None,
        switch_targets: Optional[Dict[GridCoordinate, List[GridCoordinate]]] = None,
    ) -> LevelData:
        return LevelData(
            level_number=level_index,
            grid_size=self.size,
            cells=tuple(tuple(row) for row in grid),
            start_position=start,
            finish_position=finish,
            moving_spikes=tuple(moving_spikes or ()),
            portal_pairs=dict(portals or {}),
            switch_targets=dict(switch_targets or {}),
        )


# Singleton instance
_generator = None


def get_generator() -> MazeGenerator:
    """Get or create generator singleton instance."""
    global _generator
    if _generator is None:
        _generator = MazeGenerator()
    return _generator


def generate(level_index: int) -> Tuple[LevelData, GenerationDiagnostics]:
    """Generate the level and diagnostics for a level index."""
    return get_generator().generate(level_index)
