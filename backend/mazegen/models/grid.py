"""Grid primitives: coordinates, directions and cell types."""
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Dict, List, Tuple


class Direction(str, Enum):
    """Slide direction. "up" increases y."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit (dx, dy) step for this direction."""
        return _DIRECTION_DELTAS[self]

    def opposite(self) -> "Direction":
        """Get the inverse direction."""
        return _OPPOSITES[self]


_DIRECTION_DELTAS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class GridCoordinate:
    """A cell position. Rows are addressed as cells[y][x]."""
    x: int
    y: int

    def neighbor(self, direction: Direction) -> "GridCoordinate":
        dx, dy = direction.delta
        return GridCoordinate(self.x + dx, self.y + dy)

    @property
    def neighbors(self) -> List["GridCoordinate"]:
        """Orthogonal neighbors (left, right, down, up)."""
        return [
            GridCoordinate(self.x - 1, self.y),
            GridCoordinate(self.x + 1, self.y),
            GridCoordinate(self.x, self.y - 1),
            GridCoordinate(self.x, self.y + 1),
        ]

    def distance(self, other: "GridCoordinate") -> int:
        """Manhattan distance to another coordinate."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_inside(self, size: int) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def is_interior(self, size: int) -> bool:
        """True when the coordinate is strictly inside the outer wall ring."""
        return 0 < self.x < size - 1 and 0 < self.y < size - 1

    def to_key(self) -> str:
        """Serialize as an "x_y" position key."""
        return f"{self.x}_{self.y}"

    @classmethod
    def from_key(cls, key: str) -> "GridCoordinate":
        """Parse an "x_y" position key."""
        parts = str(key).split("_")
        if len(parts) != 2:
            raise ValueError(f"Invalid position format: '{key}'")
        try:
            return cls(int(parts[0]), int(parts[1]))
        except ValueError:
            raise ValueError(f"Invalid position coordinates: '{key}'")


class CellType(str, Enum):
    """Cell type enumeration."""
    EMPTY = "empty"
    WALL = "wall"
    PLAYER = "player"  # start marker
    FINISH = "finish"
    HOLE = "hole"
    SPIKE = "spike"
    MOVING_SPIKE = "moving_spike"
    KEY = "key"
    GATE = "gate"  # opens once the key is held
    PORTAL = "portal"
    PRESSURE_PLATE = "pressure_plate"
    TOGGLE_WALL = "toggle_wall"  # opens while toggled by a pressure plate

    @property
    def is_walkable(self) -> bool:
        """Walkability ignoring run-time state (key, toggles)."""
        return self in _WALKABLE

    @property
    def is_deadly(self) -> bool:
        return self in _DEADLY


_WALKABLE = frozenset({
    CellType.EMPTY,
    CellType.PLAYER,
    CellType.FINISH,
    CellType.KEY,
    CellType.PORTAL,
    CellType.PRESSURE_PLATE,
})

_DEADLY = frozenset({CellType.HOLE, CellType.SPIKE, CellType.MOVING_SPIKE})


def is_walkable_static(cell: CellType) -> bool:
    """Static walkability of a cell type."""
    return cell.is_walkable


def is_walkable_in_context(
    cell: CellType,
    has_key: bool,
    toggled: AbstractSet[GridCoordinate],
    coord: GridCoordinate,
) -> bool:
    """
    Walkability resolved against run-time state.

    Args:
        cell: Cell type at coord.
        has_key: Whether the key is held.
        toggled: Toggle walls currently switched off.
        coord: Position of the cell.

    Returns:
        True if the cell can be entered.
    """
    if cell == CellType.GATE:
        return has_key
    if cell == CellType.TOGGLE_WALL:
        return coord in toggled
    return cell.is_walkable


Grid = List[List[CellType]]


def new_grid(size: int, fill: CellType = CellType.WALL) -> Grid:
    """Create a size x size grid filled with one cell type."""
    return [[fill for _ in range(size)] for _ in range(size)]


# Single-character symbols for text display
CELL_SYMBOLS: Dict[CellType, str] = {
    CellType.EMPTY: ".",
    CellType.WALL: "#",
    CellType.PLAYER: "S",
    CellType.FINISH: "F",
    CellType.HOLE: "O",
    CellType.SPIKE: "^",
    CellType.MOVING_SPIKE: "M",
    CellType.KEY: "k",
    CellType.GATE: "G",
    CellType.PORTAL: "@",
    CellType.PRESSURE_PLATE: "p",
    CellType.TOGGLE_WALL: "T",
}
