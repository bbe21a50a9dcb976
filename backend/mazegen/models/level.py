"""Level data models and structures."""
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Tuple

from .grid import CellType, GridCoordinate


@dataclass(frozen=True)
class DifficultyProfile:
    """Difficulty targets derived from the level index."""
    level: int

    # Hazard density ceiling
    MAX_HAZARD_DENSITY = 0.2

    @property
    def min_moves(self) -> int:
        """Minimum number of slides a valid level must require."""
        return 4 + self.level // 15

    @property
    def hazard_density(self) -> float:
        """Probability that an open off-path cell becomes a hole."""
        return min(0.04 + self.level * 0.003, self.MAX_HAZARD_DENSITY)

    @classmethod
    def for_level(cls, level: int) -> "DifficultyProfile":
        return cls(level=level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level,
            "min_moves": self.min_moves,
            "hazard_density": round(self.hazard_density, 4),
        }


@dataclass(frozen=True)
class MovingSpikeData:
    """Patrol definition for a moving spike."""
    start_position: GridCoordinate
    end_position: GridCoordinate
    speed: float = 1.0  # seconds from start to end
    pause_duration: float = 0.5  # seconds at each endpoint

    def __post_init__(self):
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        if self.pause_duration < 0:
            raise ValueError(f"pause_duration must be non-negative, got {self.pause_duration}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "start": self.start_position.to_key(),
            "end": self.end_position.to_key(),
            "speed": self.speed,
            "pause_duration": self.pause_duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MovingSpikeData":
        return cls(
            start_position=GridCoordinate.from_key(data["start"]),
            end_position=GridCoordinate.from_key(data["end"]),
            speed=float(data.get("speed", 1.0)),
            pause_duration=float(data.get("pause_duration", 0.5)),
        )


@dataclass(frozen=True)
class LevelData:
    """Complete generated level. cells[y][x], row 0 is the bottom border."""
    level_number: int
    grid_size: int
    cells: Tuple[Tuple[CellType, ...], ...]
    start_position: GridCoordinate
    finish_position: GridCoordinate
    moving_spikes: Tuple[MovingSpikeData, ...] = ()
    portal_pairs: Dict[GridCoordinate, GridCoordinate] = field(default_factory=dict, hash=False)
    switch_targets: Dict[GridCoordinate, List[GridCoordinate]] = field(default_factory=dict, hash=False)

    def cell_at(self, coord: GridCoordinate) -> Optional[CellType]:
        """Get the cell type at a coordinate, or None when out of bounds."""
        if not self.is_valid_coordinate(coord):
            return None
        return self.cells[coord.y][coord.x]

    def is_valid_coordinate(self, coord: GridCoordinate) -> bool:
        return coord.is_inside(self.grid_size)

    def is_walkable(self, coord: GridCoordinate) -> bool:
        cell = self.cell_at(coord)
        return cell is not None and cell.is_walkable

    def is_deadly(self, coord: GridCoordinate) -> bool:
        cell = self.cell_at(coord)
        return cell is not None and cell.is_deadly

    def find_cells(self, cell_type: CellType) -> List[GridCoordinate]:
        """All coordinates holding the given cell type, row by row."""
        return [
            GridCoordinate(x, y)
            for y, row in enumerate(self.cells)
            for x, cell in enumerate(row)
            if cell == cell_type
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the level JSON format."""
        return {
            "level_number": self.level_number,
            "grid_size": self.grid_size,
            "cells": [[cell.value for cell in row] for row in self.cells],
            "start": self.start_position.to_key(),
            "finish": self.finish_position.to_key(),
            "moving_spikes": [spike.to_dict() for spike in self.moving_spikes],
            "portal_pairs": {
                src.to_key(): dst.to_key() for src, dst in self.portal_pairs.items()
            },
            "switch_targets": {
                trigger.to_key(): [t.to_key() for t in targets]
                for trigger, targets in self.switch_targets.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelData":
        """
        Build a level from level JSON.

        Raises:
            ValueError: If a field is missing or malformed.
        """
        try:
            cells = tuple(
                tuple(CellType(value) for value in row) for row in data["cells"]
            )
            return cls(
                level_number=int(data.get("level_number", 0)),
                grid_size=int(data.get("grid_size", len(cells))),
                cells=cells,
                start_position=GridCoordinate.from_key(data["start"]),
                finish_position=GridCoordinate.from_key(data["finish"]),
                moving_spikes=tuple(
                    MovingSpikeData.from_dict(s) for s in data.get("moving_spikes", [])
                ),
                portal_pairs={
                    GridCoordinate.from_key(src): GridCoordinate.from_key(dst)
                    for src, dst in data.get("portal_pairs", {}).items()
                },
                switch_targets={
                    GridCoordinate.from_key(trigger): [GridCoordinate.from_key(t) for t in targets]
                    for trigger, targets in data.get("switch_targets", {}).items()
                },
            )
        except KeyError as e:
            raise ValueError(f"Missing '{e.args[0]}' field")
        except TypeError as e:
            raise ValueError(f"Malformed level data: {e}")


@dataclass(frozen=True)
class GenerationDiagnostics:
    """How a level was produced."""
    level_number: int
    seed: int
    attempts: int
    used_fallback: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level_number": self.level_number,
            "seed": self.seed,
            "attempts": self.attempts,
            "used_fallback": self.used_fallback,
        }


# Level index at which each advanced element unlocks
ELEMENT_THRESHOLDS = {
    "key_gate": 31,
    "moving_spikes": 51,
    "portals": 61,
}
