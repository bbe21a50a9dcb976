"""Structural planning: macro-zones of open and closed cells."""
import random

from ..models.grid import CellType, Grid


class StructuralPlanner:
    """Paints a non-uniform base texture onto an all-wall grid."""

    ZONE_SIZE = 3
    ROOM_SIZE = 2
    # Zone draw below this carves a room instead of scattering cells
    ROOM_CHANCE = 0.2
    # (upper bound of the second draw, per-cell open probability)
    OPENNESS_BANDS = [(0.3, 0.6), (0.7, 0.3), (1.0, 0.1)]

    def __init__(self, size: int):
        self.size = size

    def generate_macro_zones(self, grid: Grid, rng: random.Random) -> Grid:
        """
        Open cells zone by zone. Connectivity is not guaranteed.

        Args:
            grid: All-wall grid, modified in place.
            rng: Shared generation stream.

        Returns:
            The same grid.
        """
        for zone_y in range(0, self.size, self.ZONE_SIZE):
            for zone_x in range(0, self.size, self.ZONE_SIZE):
                if rng.random() < self.ROOM_CHANCE:
                    self._carve_room(grid, zone_x, zone_y, rng)
                else:
                    open_prob = self._pick_openness(rng.random())
                    self._scatter_cells(grid, zone_x, zone_y, open_prob, rng)
        return grid

    def _pick_openness(self, draw: float) -> float:
        for upper, open_prob in self.OPENNESS_BANDS:
            if draw < upper:
                return open_prob
        return self.OPENNESS_BANDS[-1][1]

    def _carve_room(self, grid: Grid, zone_x: int, zone_y: int, rng: random.Random) -> None:
        """Open a 2x2 chamber at a random offset inside the zone."""
        max_offset = max(0, self.ZONE_SIZE - self.ROOM_SIZE)
        ox = zone_x + rng.randint(0, max_offset)
        oy = zone_y + rng.randint(0, max_offset)
        for y in range(oy, min(oy + self.ROOM_SIZE, self.size - 1)):
            for x in range(ox, min(ox + self.ROOM_SIZE, self.size - 1)):
                if x > 0 and y > 0:
                    grid[y][x] = CellType.EMPTY

    def _scatter_cells(
        self, grid: Grid, zone_x: int, zone_y: int, open_prob: float, rng: random.Random
    ) -> None:
        for y in range(zone_y, min(zone_y + self.ZONE_SIZE, self.size)):
            for x in range(zone_x, min(zone_x + self.ZONE_SIZE, self.size)):
                # Border ring stays wall
                if x == 0 or y == 0 or x == self.size - 1 or y == self.size - 1:
                    continue
                if rng.random() < open_prob:
                    grid[y][x] = CellType.EMPTY
