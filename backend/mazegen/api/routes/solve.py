"""Solver API routes."""
from fastapi import APIRouter, HTTPException

from ...models.schemas import ErrorResponse, SolveRequest, SolveResponse
from ...core.solver import LevelSolver
from ...utils.helpers import level_from_json

router = APIRouter(prefix="/api", tags=["solve"])


@router.post(
    "/solve",
    response_model=SolveResponse,
    responses={400: {"model": ErrorResponse}},
)
def solve_level(request: SolveRequest) -> SolveResponse:
    """
    Solve a submitted level.

    Args:
        request: SolveRequest with level_json.

    Returns:
        SolveResponse with the minimal move count and one solution.
    """
    try:
        level = level_from_json(request.level_json)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid level: {str(e)}")

    moves = LevelSolver.for_level(level).solve()
    if moves is None:
        return SolveResponse(solvable=False)
    return SolveResponse(solvable=True, min_moves=len(moves), moves=[m.value for m in moves])
