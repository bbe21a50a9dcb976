"""API dependencies."""
from ..config import Settings, get_settings
from ..core.generator import MazeGenerator, get_generator


def get_maze_generator() -> MazeGenerator:
    """Dependency for maze generator."""
    return get_generator()


def get_app_settings() -> Settings:
    """Dependency for application settings."""
    return get_settings()
