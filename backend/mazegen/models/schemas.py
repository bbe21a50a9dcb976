"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, Field
from typing import Dict, List, Any, Optional


class DiagnosticsSchema(BaseModel):
    """Generation diagnostics."""
    level_number: int = Field(..., description="Level number")
    seed: int = Field(..., description="Seed derived from the level number")
    attempts: int = Field(..., ge=0, description="Generation attempts consumed")
    used_fallback: bool = Field(..., description="Whether the fallback layout was used")


class LevelResponse(BaseModel):
    """Response schema for level generation."""
    level_json: Dict[str, Any] = Field(..., description="Generated level JSON")
    diagnostics: DiagnosticsSchema = Field(..., description="Generation diagnostics")
    generation_time_ms: int = Field(default=0, description="Generation time in milliseconds")


class DifficultyResponse(BaseModel):
    """Response schema for a difficulty profile."""
    level: int = Field(..., description="Level number")
    min_moves: int = Field(..., ge=0, description="Minimum slides a level must require")
    hazard_density: float = Field(..., ge=0, le=1, description="Hole probability for open cells")


class SolveRequest(BaseModel):
    """Request schema for solving a level."""
    level_json: Dict[str, Any] = Field(..., description="Level JSON to solve")


class SolveResponse(BaseModel):
    """Response schema for a solved level."""
    solvable: bool = Field(..., description="Whether the finish is reachable")
    min_moves: Optional[int] = Field(default=None, description="Minimal number of slides")
    moves: List[str] = Field(default=[], description="Directions of one minimal solution")


class PlayRequest(BaseModel):
    """Request schema for replaying moves on a level."""
    moves: List[str] = Field(..., max_length=500, description="Directions (up/down/left/right)")


class PlayResponse(BaseModel):
    """Response schema for a replayed session."""
    position: str = Field(..., description="Final position (x_y)")
    has_key: bool = Field(..., description="Whether the key was collected")
    is_dead: bool = Field(..., description="Whether the player died")
    is_complete: bool = Field(..., description="Whether the finish was reached")
    moves_used: int = Field(..., ge=0, description="Moves that changed the position")
    toggled_walls: List[str] = Field(default=[], description="Toggle walls currently open")


class ErrorResponse(BaseModel):
    """Body of a 400/404 error raised through HTTPException."""
    detail: str = Field(..., description="What was wrong with the request")
