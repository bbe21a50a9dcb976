"""Utility helper functions."""
from typing import Dict, Any, List, Optional, Tuple

from ..models.grid import CELL_SYMBOLS, CellType, Direction, GridCoordinate
from ..models.level import LevelData

_CELL_VALUES = {cell.value for cell in CellType}


def validate_level_json(level_json: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate level JSON structure.

    Args:
        level_json: Level data to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    for required in ("cells", "start", "finish"):
        if required not in level_json:
            return False, f"Missing '{required}' field"

    cells = level_json["cells"]
    if not isinstance(cells, list) or not cells:
        return False, "'cells' must be a non-empty array of rows"

    size = level_json.get("grid_size", len(cells))
    if not isinstance(size, int) or size < 3:
        return False, "'grid_size' must be an integer of at least 3"
    if len(cells) != size:
        return False, f"'cells' has {len(cells)} rows, expected {size}"

    for y, row in enumerate(cells):
        if not isinstance(row, list) or len(row) != size:
            return False, f"Row {y} must be an array of {size} cells"
        for x, value in enumerate(row):
            if not isinstance(value, str) or value not in _CELL_VALUES:
                return False, f"Unknown cell type '{value}' at '{x}_{y}'"

    for mapping in ("portal_pairs", "switch_targets"):
        if not isinstance(level_json.get(mapping, {}), dict):
            return False, f"'{mapping}' must be an object"
    if not isinstance(level_json.get("moving_spikes", []), list):
        return False, "'moving_spikes' must be an array"

    positions = {"start": level_json["start"], "finish": level_json["finish"]}
    for src, dst in level_json.get("portal_pairs", {}).items():
        positions[f"portal {src}"] = src
        positions[f"portal target of {src}"] = dst
    for trigger, targets in level_json.get("switch_targets", {}).items():
        positions[f"switch {trigger}"] = trigger
        if not isinstance(targets, list):
            return False, f"Switch targets of '{trigger}' must be an array"
        for target in targets:
            positions[f"switch target {target}"] = target

    for label, key in positions.items():
        try:
            coord = GridCoordinate.from_key(key)
        except ValueError as e:
            return False, f"{label}: {e}"
        if not coord.is_inside(size):
            return False, f"{label} '{key}' is outside the grid"

    portal_pairs = level_json.get("portal_pairs", {})
    for src, dst in portal_pairs.items():
        if portal_pairs.get(dst) != src:
            return False, f"Portal '{src}' -> '{dst}' has no reciprocal entry"

    for spike in level_json.get("moving_spikes", []):
        if not isinstance(spike, dict) or "start" not in spike or "end" not in spike:
            return False, "Moving spikes need 'start' and 'end'"
        for endpoint in ("start", "end"):
            try:
                coord = GridCoordinate.from_key(spike[endpoint])
            except ValueError as e:
                return False, f"Moving spike {endpoint}: {e}"
            if not coord.is_inside(size):
                return False, f"Moving spike {endpoint} '{spike[endpoint]}' is outside the grid"
        try:
            speed = float(spike.get("speed", 1.0))
            pause = float(spike.get("pause_duration", 0.5))
        except (TypeError, ValueError):
            return False, "Moving spike speed and pause_duration must be numbers"
        if speed <= 0:
            return False, "Moving spike speed must be positive"
        if pause < 0:
            return False, "Moving spike pause_duration must be non-negative"

    return True, None


def level_from_json(level_json: Dict[str, Any]) -> LevelData:
    """
    Validate and parse level JSON.

    Raises:
        ValueError: If the level JSON is invalid.
    """
    is_valid, error = validate_level_json(level_json)
    if not is_valid:
        raise ValueError(error)
    return LevelData.from_dict(level_json)


def parse_directions(moves: List[str]) -> List[Direction]:
    """
    Parse direction names.

    Raises:
        ValueError: On an unknown direction.
    """
    directions = []
    for move in moves:
        try:
            directions.append(Direction(move.lower()))
        except ValueError:
            raise ValueError(f"Invalid direction '{move}'. Must be one of: {[d.value for d in Direction]}")
    return directions


def format_level_for_display(level: LevelData) -> str:
    """
    Format a level for human-readable display.

    The top line is the highest row, so "up" points up on screen.

    Args:
        level: Level to format.

    Returns:
        Formatted string representation.
    """
    lines = [f"Level {level.level_number} ({level.grid_size}x{level.grid_size}):"]
    lines.append("-" * (level.grid_size * 2))

    patrol_cells = {spike.start_position for spike in level.moving_spikes}
    for y in range(level.grid_size - 1, -1, -1):
        row = []
        for x in range(level.grid_size):
            cell = level.cells[y][x]
            if cell == CellType.EMPTY and GridCoordinate(x, y) in patrol_cells:
                row.append(CELL_SYMBOLS[CellType.MOVING_SPIKE])
            else:
                row.append(CELL_SYMBOLS[cell])
        lines.append(" ".join(row))

    return "\n".join(lines)


def extract_cell_statistics(level: LevelData) -> Dict[str, Any]:
    """
    Count cells and elements in a level.

    Args:
        level: Level to analyze.

    Returns:
        Dictionary with cell statistics.
    """
    counts: Dict[str, int] = {}
    for row in level.cells:
        for cell in row:
            counts[cell.value] = counts.get(cell.value, 0) + 1

    interior = (level.grid_size - 2) ** 2
    open_cells = sum(
        1
        for row in level.cells[1:-1]
        for cell in row[1:-1]
        if cell != CellType.WALL
    )

    return {
        "cell_types": counts,
        "open_ratio": round(open_cells / interior, 3) if interior else 0.0,
        "portal_pairs": len(level.portal_pairs) // 2,
        "moving_spikes": len(level.moving_spikes),
        "switches": len(level.switch_targets),
    }
