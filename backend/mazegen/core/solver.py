"""Breadth-first solver over the slide movement model."""
from collections import deque
from typing import (
    Deque,
    Dict,
    FrozenSet,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)

from ..models.grid import CellType, Direction, GridCoordinate
from ..models.level import LevelData
from .movement import slide


class SolverState(NamedTuple):
    position: GridCoordinate
    has_key: bool
    toggled: FrozenSet[GridCoordinate] = frozenset()


class LevelSolver:
    """
    Finds the minimal number of slides from start to finish.

    The search state is (position, has_key, toggled walls). Generated levels
    have no pressure plates, so there the state space stays at
    size * size * 2. Landing on a portal puts the player on its pair, and
    stopping on a pressure plate flips its linked toggle walls, the same as
    PlaySession. Deadly cells are reached but never expanded.
    """

    def __init__(
        self,
        cells: Sequence[Sequence[CellType]],
        start: GridCoordinate,
        finish: GridCoordinate,
        portals: Optional[Mapping[GridCoordinate, GridCoordinate]] = None,
        switch_targets: Optional[Mapping[GridCoordinate, Sequence[GridCoordinate]]] = None,
    ):
        self.cells = cells
        self.start = start
        self.finish = finish
        self.portals = dict(portals or {})
        self.switch_targets = {
            trigger: frozenset(targets) for trigger, targets in (switch_targets or {}).items()
        }
        self.size = len(cells)

    @classmethod
    def for_level(cls, level: LevelData) -> "LevelSolver":
        return cls(
            level.cells,
            level.start_position,
            level.finish_position,
            level.portal_pairs,
            level.switch_targets,
        )

    def solve_complexity(self) -> Optional[int]:
        """Minimal number of moves to reach the finish, or None if unreachable."""
        solution = self.solve()
        return None if solution is None else len(solution)

    def solve(self) -> Optional[List[Direction]]:
        """Directions of one minimal solution, or None if unreachable."""
        start_state = SolverState(self.start, False)
        parents: Dict[SolverState, Optional[Tuple[SolverState, Direction]]] = {start_state: None}
        queue: Deque[SolverState] = deque([start_state])

        while queue:
            state = queue.popleft()
            if state.position == self.finish:
                return self._unwind(parents, state)

            if self._cell(state.position).is_deadly:
                continue

            for direction in Direction:
                result = slide(
                    self.cells, state.position, direction, state.has_key, state.toggled
                )
                if not result.moved:
                    continue
                next_state = self._land(result.position, result.has_key, state.toggled)
                if next_state not in parents:
                    parents[next_state] = (state, direction)
                    queue.append(next_state)

        return None

    def _cell(self, coord: GridCoordinate) -> CellType:
        return self.cells[coord.y][coord.x]

    def _land(
        self, position: GridCoordinate, has_key: bool, toggled: FrozenSet[GridCoordinate]
    ) -> SolverState:
        """State after a slide stops: portal hop or plate press."""
        cell = self._cell(position)
        if position == self.finish or cell.is_deadly:
            return SolverState(position, has_key, toggled)
        if cell == CellType.PORTAL and position in self.portals:
            return SolverState(self.portals[position], has_key, toggled)
        if cell == CellType.PRESSURE_PLATE:
            toggled = toggled ^ self.switch_targets.get(position, frozenset())
        return SolverState(position, has_key, toggled)

    @staticmethod
    def _unwind(
        parents: Dict[SolverState, Optional[Tuple[SolverState, Direction]]],
        state: SolverState,
    ) -> List[Direction]:
        moves: List[Direction] = []
        link = parents[state]
        while link is not None:
            previous, direction = link
            moves.append(direction)
            link = parents[previous]
        moves.reverse()
        return moves
