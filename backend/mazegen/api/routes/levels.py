"""Level generation API routes."""
import time

from fastapi import APIRouter, Depends, HTTPException, Path

from ...config import Settings
from ...models.level import DifficultyProfile
from ...models.schemas import (
    DiagnosticsSchema,
    DifficultyResponse,
    ErrorResponse,
    LevelResponse,
    PlayRequest,
    PlayResponse,
    SolveResponse,
)
from ...core.generator import MazeGenerator
from ...core.movement import PlaySession
from ...core.solver import LevelSolver
from ...utils.helpers import parse_directions
from ..deps import get_app_settings, get_maze_generator

router = APIRouter(prefix="/api/levels", tags=["levels"])


def _check_level_range(level_number: int, settings: Settings) -> None:
    if level_number > settings.max_level:
        raise HTTPException(
            status_code=404,
            detail=f"Level {level_number} not found (max level is {settings.max_level})",
        )


# Generation is CPU bound; sync handlers run in the threadpool
@router.get(
    "/{level_number}",
    response_model=LevelResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_level(
    level_number: int = Path(..., ge=1, description="Level number"),
    generator: MazeGenerator = Depends(get_maze_generator),
    settings: Settings = Depends(get_app_settings),
) -> LevelResponse:
    """
    Generate the level for a level number.

    Args:
        level_number: Level number (1..max_level).
        generator: MazeGenerator dependency.
        settings: Application settings.

    Returns:
        LevelResponse with level JSON and generation diagnostics.
    """
    _check_level_range(level_number, settings)

    start_time = time.time()
    level, diagnostics = generator.generate(level_number)
    generation_time_ms = int((time.time() - start_time) * 1000)

    return LevelResponse(
        level_json=level.to_dict(),
        diagnostics=DiagnosticsSchema(**diagnostics.to_dict()),
        generation_time_ms=generation_time_ms,
    )


@router.get("/{level_number}/difficulty", response_model=DifficultyResponse)
async def get_difficulty(
    level_number: int = Path(..., ge=1, description="Level number"),
    settings: Settings = Depends(get_app_settings),
) -> DifficultyResponse:
    """Difficulty profile for a level number."""
    _check_level_range(level_number, settings)
    return DifficultyResponse(**DifficultyProfile.for_level(level_number).to_dict())


@router.get("/{level_number}/solution", response_model=SolveResponse)
def get_solution(
    level_number: int = Path(..., ge=1, description="Level number"),
    generator: MazeGenerator = Depends(get_maze_generator),
    settings: Settings = Depends(get_app_settings),
) -> SolveResponse:
    """Minimal solution of a generated level."""
    _check_level_range(level_number, settings)

    level, _ = generator.generate(level_number)
    moves = LevelSolver.for_level(level).solve()
    if moves is None:
        return SolveResponse(solvable=False)
    return SolveResponse(solvable=True, min_moves=len(moves), moves=[m.value for m in moves])


@router.post(
    "/{level_number}/play",
    response_model=PlayResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def play_level(
    request: PlayRequest,
    level_number: int = Path(..., ge=1, description="Level number"),
    generator: MazeGenerator = Depends(get_maze_generator),
    settings: Settings = Depends(get_app_settings),
) -> PlayResponse:
    """
    Replay a move sequence on a generated level.

    Moves after death or completion are ignored.
    """
    _check_level_range(level_number, settings)

    try:
        directions = parse_directions(request.moves)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    level, _ = generator.generate(level_number)
    session = PlaySession(level).play(directions)

    return PlayResponse(
        position=session.position.to_key(),
        has_key=session.has_key,
        is_dead=session.is_dead,
        is_complete=session.is_complete,
        moves_used=session.moves_used,
        toggled_walls=sorted(c.to_key() for c in session.toggled_walls),
    )
