"""Slide movement rule shared by the solver and live play."""
from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Sequence, Set, Tuple

from ..models.grid import CellType, Direction, GridCoordinate, is_walkable_in_context
from ..models.level import LevelData


@dataclass(frozen=True)
class SlideResult:
    """Outcome of one slide."""
    position: GridCoordinate
    has_key: bool
    path: Tuple[GridCoordinate, ...]
    is_dead: bool = False

    @property
    def moved(self) -> bool:
        return bool(self.path)


def slide(
    cells: Sequence[Sequence[CellType]],
    start: GridCoordinate,
    direction: Direction,
    has_key: bool = False,
    toggled: AbstractSet[GridCoordinate] = frozenset(),
) -> SlideResult:
    """
    Move from `start` in one direction until something stops the player.

    Stops on the last cell before the grid edge or a cell that cannot be
    entered (wall, gate without key, closed toggle wall). Stops ON a deadly
    cell, a finish or a portal. Keys are picked up without stopping; a key
    collected during the slide only counts for later slides.

    Args:
        cells: Grid rows, cells[y][x].
        start: Starting position.
        direction: Slide direction.
        has_key: Key held before the slide.
        toggled: Toggle walls currently open.

    Returns:
        SlideResult with the final position, key state and visited cells.
    """
    size = len(cells)
    current = start
    path: List[GridCoordinate] = []
    collected = False

    while True:
        nxt = current.neighbor(direction)
        if not nxt.is_inside(size):
            break

        cell = cells[nxt.y][nxt.x]
        if cell.is_deadly:
            path.append(nxt)
            return SlideResult(nxt, has_key or collected, tuple(path), is_dead=True)
        if not is_walkable_in_context(cell, has_key, toggled, nxt):
            break

        current = nxt
        path.append(nxt)
        if cell == CellType.KEY:
            collected = True
        if cell in (CellType.FINISH, CellType.PORTAL):
            break

    return SlideResult(current, has_key or collected, tuple(path))


@dataclass(frozen=True)
class MoveOutcome:
    """What happened on one PlaySession move."""
    slide: SlideResult
    position: GridCoordinate
    teleported: bool = False
    toggled: Tuple[GridCoordinate, ...] = ()


class PlaySession:
    """
    Live play state for one level: position, key, toggle walls.

    Mirrors the in-game movement layer so a move sequence can be replayed
    and checked against the solver.
    """

    def __init__(self, level: LevelData):
        self.level = level
        self.position = level.start_position
        self.has_key = False
        self.toggled_walls: Set[GridCoordinate] = set()
        self.is_dead = False
        self.is_complete = False
        self.moves_used = 0

    @property
    def is_over(self) -> bool:
        return self.is_dead or self.is_complete

    def move(self, direction: Direction) -> Optional[MoveOutcome]:
        """
        Slide the player one move.

        Returns:
            MoveOutcome, or None when the player is blocked immediately
            (no move is counted).

        Raises:
            RuntimeError: If the session already ended.
        """
        if self.is_over:
            raise RuntimeError("Session is over; no further moves allowed")

        result = slide(
            self.level.cells, self.position, direction, self.has_key, self.toggled_walls
        )
        if not result.moved:
            return None

        self.moves_used += 1
        self.has_key = result.has_key
        self.position = result.position

        if result.is_dead:
            self.is_dead = True
            return MoveOutcome(slide=result, position=self.position)

        if self.position == self.level.finish_position:
            self.is_complete = True
            return MoveOutcome(slide=result, position=self.position)

        cell = self.level.cell_at(self.position)
        if cell == CellType.PORTAL and self.position in self.level.portal_pairs:
            self.position = self.level.portal_pairs[self.position]
            if self.position == self.level.finish_position:
                self.is_complete = True
            return MoveOutcome(slide=result, position=self.position, teleported=True)

        if cell == CellType.PRESSURE_PLATE:
            targets = tuple(self.level.switch_targets.get(self.position, []))
            for target in targets:
                if target in self.toggled_walls:
                    self.toggled_walls.remove(target)
                else:
                    self.toggled_walls.add(target)
            return MoveOutcome(slide=result, position=self.position, toggled=targets)

        return MoveOutcome(slide=result, position=self.position)

    def play(self, directions: Sequence[Direction]) -> "PlaySession":
        """Apply moves in order, stopping early once the session ends."""
        for direction in directions:
            if self.is_over:
                break
            self.move(direction)
        return self
