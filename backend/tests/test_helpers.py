"""Tests for utility helpers."""
import pytest
from mazegen.core.generator import MazeGenerator
from mazegen.models.grid import CellType, Direction, GridCoordinate
from mazegen.utils.helpers import (
    extract_cell_statistics,
    format_level_for_display,
    level_from_json,
    parse_directions,
    validate_level_json,
)


@pytest.fixture
def level_json():
    """Small corridor level in JSON form."""
    cells = [["wall"] * 5 for _ in range(5)]
    cells[1][1] = "player"
    cells[1][2] = "empty"
    cells[1][3] = "finish"
    cells[3][1] = "portal"
    cells[3][3] = "portal"
    return {
        "level_number": 1,
        "grid_size": 5,
        "cells": cells,
        "start": "1_1",
        "finish": "3_1",
        "moving_spikes": [],
        "portal_pairs": {"1_3": "3_3", "3_3": "1_3"},
        "switch_targets": {},
    }


class TestValidateLevelJson:
    """Test cases for validate_level_json."""

    def test_valid_level(self, level_json):
        """Test that a well-formed level passes."""
        assert validate_level_json(level_json) == (True, None)

    def test_generated_level_is_valid(self):
        """Test that generator output passes validation."""
        level = MazeGenerator().make_fallback_level(61)

        is_valid, error = validate_level_json(level.to_dict())

        assert is_valid, error

    def test_missing_field(self, level_json):
        """Test that missing fields are reported."""
        del level_json["start"]

        is_valid, error = validate_level_json(level_json)

        assert not is_valid
        assert "start" in error

    def test_wrong_row_count(self, level_json):
        """Test that the row count must match grid_size."""
        level_json["cells"] = level_json["cells"][:4]

        is_valid, _ = validate_level_json(level_json)

        assert not is_valid

    def test_unknown_cell_type(self, level_json):
        """Test that unknown cell values are rejected."""
        level_json["cells"][2][2] = "lava"

        is_valid, error = validate_level_json(level_json)

        assert not is_valid
        assert "lava" in error

    def test_out_of_bounds_position(self, level_json):
        """Test that positions must be inside the grid."""
        level_json["finish"] = "5_1"

        is_valid, error = validate_level_json(level_json)

        assert not is_valid
        assert "outside" in error

    def test_one_way_portal(self, level_json):
        """Test that portal pairs must be reciprocal."""
        level_json["portal_pairs"] = {"1_3": "3_3"}

        is_valid, error = validate_level_json(level_json)

        assert not is_valid
        assert "reciprocal" in error

    def test_bad_spike_speed(self, level_json):
        """Test that patrol speed must be positive."""
        level_json["moving_spikes"] = [{"start": "2_1", "end": "3_1", "speed": 0}]

        is_valid, _ = validate_level_json(level_json)

        assert not is_valid

    @pytest.mark.parametrize("field, value", [
        ("speed", None),
        ("speed", "fast"),
        ("pause_duration", [0.5]),
    ])
    def test_non_numeric_spike_timing(self, level_json, field, value):
        """Test that non-numeric patrol timings are reported, not raised."""
        spike = {"start": "2_1", "end": "3_1", "speed": 1.5, "pause_duration": 0.5}
        spike[field] = value
        level_json["moving_spikes"] = [spike]

        is_valid, error = validate_level_json(level_json)

        assert not is_valid
        assert "numbers" in error

    def test_spike_outside_grid(self, level_json):
        """Test that patrol endpoints must be inside the grid."""
        level_json["moving_spikes"] = [{"start": "2_1", "end": "9_1"}]

        is_valid, _ = validate_level_json(level_json)

        assert not is_valid

    @pytest.mark.parametrize("value", [["wall"], {"type": "wall"}, 3, None])
    def test_non_string_cell(self, level_json, value):
        """Test that cell values other than strings are rejected."""
        level_json["cells"][2][2] = value

        is_valid, error = validate_level_json(level_json)

        assert not is_valid
        assert "2_2" in error

    def test_mapping_must_be_object(self, level_json):
        """Test that portal_pairs must be an object."""
        level_json["portal_pairs"] = ["1_3", "3_3"]

        is_valid, _ = validate_level_json(level_json)

        assert not is_valid


class TestLevelFromJson:
    """Test cases for level_from_json."""

    def test_parses_valid_level(self, level_json):
        """Test parsing into LevelData."""
        level = level_from_json(level_json)

        assert level.start_position == GridCoordinate(1, 1)
        assert level.cell_at(GridCoordinate(3, 1)) == CellType.FINISH
        assert level.portal_pairs[GridCoordinate(1, 3)] == GridCoordinate(3, 3)

    def test_invalid_level_raises(self, level_json):
        """Test that invalid JSON raises ValueError."""
        level_json["start"] = "nowhere"

        with pytest.raises(ValueError):
            level_from_json(level_json)


class TestParseDirections:
    """Test cases for parse_directions."""

    def test_parses_case_insensitive(self):
        """Test direction parsing."""
        assert parse_directions(["up", "LEFT", "Down"]) == [
            Direction.UP,
            Direction.LEFT,
            Direction.DOWN,
        ]

    def test_unknown_direction(self):
        """Test that unknown names raise ValueError."""
        with pytest.raises(ValueError):
            parse_directions(["up", "sideways"])


class TestDisplayAndStatistics:
    """Test cases for display formatting and statistics."""

    def test_format_puts_top_row_first(self, level_json):
        """Test that the highest row is printed first."""
        level = level_from_json(level_json)

        lines = format_level_for_display(level).split("\n")

        assert lines[0] == "Level 1 (5x5):"
        assert lines[2] == "# # # # #"
        assert lines[3] == "# @ # @ #"
        assert lines[5] == "# S . F #"

    def test_statistics(self, level_json):
        """Test cell counts and element counts."""
        stats = extract_cell_statistics(level_from_json(level_json))

        assert stats["cell_types"]["wall"] == 20
        assert stats["cell_types"]["portal"] == 2
        assert stats["portal_pairs"] == 1
        assert stats["moving_spikes"] == 0
        assert stats["open_ratio"] == pytest.approx(5 / 9, abs=0.001)
