"""Core business logic package.

This package contains the generation pipeline phases, the slide movement
rule and the solver that validates generated levels.
"""
from .rng import SeededRandom, seed_for_level
from .planner import StructuralPlanner
from .path_constructor import PathConstructor, PathData
from .constraints import ConstraintEngine
from .elements import ElementPlacer, AdvancedElements
from .movement import slide, SlideResult, PlaySession, MoveOutcome
from .solver import LevelSolver
from .generator import MazeGenerator, get_generator, generate

__all__ = [
    "SeededRandom",
    "seed_for_level",
    "StructuralPlanner",
    "PathConstructor",
    "PathData",
    "ConstraintEngine",
    "ElementPlacer",
    "AdvancedElements",
    "slide",
    "SlideResult",
    "PlaySession",
    "MoveOutcome",
    "LevelSolver",
    "MazeGenerator",
    "get_generator",
    "generate",
]
