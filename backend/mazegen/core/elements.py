"""Advanced element placement: keys, gates, portals and moving spikes."""
import random
from dataclasses import dataclass, field
from typing import Dict, List, Set

from ..models.grid import CellType, Grid, GridCoordinate
from ..models.level import ELEMENT_THRESHOLDS, MovingSpikeData
from .path_constructor import PathData


@dataclass
class AdvancedElements:
    """Non-grid products of element placement."""
    moving_spikes: List[MovingSpikeData] = field(default_factory=list)
    portals: Dict[GridCoordinate, GridCoordinate] = field(default_factory=dict)
    switch_targets: Dict[GridCoordinate, List[GridCoordinate]] = field(default_factory=dict)


class ElementPlacer:
    """Places threshold-gated mechanics off the primary path."""

    # Paths this short get no gate
    MIN_GATED_PATH = 5
    SPIKE_REACH = 3
    SPIKE_SPEED = 1.5
    SPIKE_PAUSE = 0.5
    # One patrol per this many levels
    LEVELS_PER_SPIKE = 20

    def __init__(self, size: int):
        self.size = size

    def place(
        self, grid: Grid, path_data: PathData, level: int, rng: random.Random
    ) -> AdvancedElements:
        """
        Place every element unlocked at this level.

        Args:
            grid: Grid after hazards, modified in place.
            path_data: Primary path; its cells are never used for elements
                other than the gate.
            level: Level index.
            rng: Shared generation stream.

        Returns:
            AdvancedElements with portal pairs and patrols.
        """
        data = AdvancedElements()
        path_set = set(path_data.path)
        reserved = path_set | {path_data.start, path_data.finish}

        if level >= ELEMENT_THRESHOLDS["key_gate"]:
            self._place_key_and_gate(grid, path_data, path_set, rng)

        if level >= ELEMENT_THRESHOLDS["portals"]:
            data.portals = self._place_portals(grid, reserved, rng)

        if level >= ELEMENT_THRESHOLDS["moving_spikes"]:
            data.moving_spikes = self._spawn_moving_spikes(grid, reserved, level, rng)

        return data

    def _open_cells(self, grid: Grid, excluded: Set[GridCoordinate]) -> List[GridCoordinate]:
        """Empty interior cells outside `excluded`, row by row."""
        cells = []
        for y in range(1, self.size - 1):
            for x in range(1, self.size - 1):
                coord = GridCoordinate(x, y)
                if grid[y][x] == CellType.EMPTY and coord not in excluded:
                    cells.append(coord)
        return cells

    def _place_key_and_gate(
        self, grid: Grid, path_data: PathData, path_set: Set[GridCoordinate], rng: random.Random
    ) -> None:
        candidates = self._open_cells(grid, path_set)
        if not candidates:
            return

        key = rng.choice(candidates)
        grid[key.y][key.x] = CellType.KEY

        # Gate sits on the primary path so the key has to be collected
        if len(path_data.path) > self.MIN_GATED_PATH:
            gateable = [c for c in path_data.path if c not in (path_data.start, path_data.finish)]
            gate = gateable[len(gateable) // 2]
            grid[gate.y][gate.x] = CellType.GATE

    def _place_portals(
        self, grid: Grid, reserved: Set[GridCoordinate], rng: random.Random
    ) -> Dict[GridCoordinate, GridCoordinate]:
        candidates = self._open_cells(grid, reserved)
        rng.shuffle(candidates)
        if len(candidates) < 2:
            return {}

        first, second = candidates[0], candidates[1]
        grid[first.y][first.x] = CellType.PORTAL
        grid[second.y][second.x] = CellType.PORTAL
        return {first: second, second: first}

    def _spawn_moving_spikes(
        self, grid: Grid, reserved: Set[GridCoordinate], level: int, rng: random.Random
    ) -> List[MovingSpikeData]:
        # TODO: reject patrols that sweep over keys or portals once the game
        # decides whether that overlap is allowed.
        candidates = self._open_cells(grid, reserved)
        spikes: List[MovingSpikeData] = []
        if not candidates:
            return spikes

        for _ in range(level // self.LEVELS_PER_SPIKE):
            origin = rng.choice(candidates)
            end = GridCoordinate(min(self.size - 2, origin.x + self.SPIKE_REACH), origin.y)
            spikes.append(MovingSpikeData(
                start_position=origin,
                end_position=end,
                speed=self.SPIKE_SPEED,
                pause_duration=self.SPIKE_PAUSE,
            ))
        return spikes
