"""Data models package.

This package contains grid primitives, level models and API schemas.
"""
from .grid import (
    CellType,
    Direction,
    GridCoordinate,
    Grid,
    CELL_SYMBOLS,
    is_walkable_static,
    is_walkable_in_context,
    new_grid,
)
from .level import (
    DifficultyProfile,
    MovingSpikeData,
    LevelData,
    GenerationDiagnostics,
    ELEMENT_THRESHOLDS,
)
from .schemas import (
    DiagnosticsSchema,
    LevelResponse,
    DifficultyResponse,
    SolveRequest,
    SolveResponse,
    PlayRequest,
    PlayResponse,
    ErrorResponse,
)

__all__ = [
    # Grid primitives
    "CellType",
    "Direction",
    "GridCoordinate",
    "Grid",
    "CELL_SYMBOLS",
    "is_walkable_static",
    "is_walkable_in_context",
    "new_grid",
    # Level models
    "DifficultyProfile",
    "MovingSpikeData",
    "LevelData",
    "GenerationDiagnostics",
    "ELEMENT_THRESHOLDS",
    # API schemas
    "DiagnosticsSchema",
    "LevelResponse",
    "DifficultyResponse",
    "SolveRequest",
    "SolveResponse",
    "PlayRequest",
    "PlayResponse",
    "ErrorResponse",
]
