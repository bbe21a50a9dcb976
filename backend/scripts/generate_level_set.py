#!/usr/bin/env python3
"""Generate a range of maze levels and report generation diagnostics.

Every level is solved again after generation, so the summary doubles as a
regression check for the retry budget and the fallback layout.

Usage:
    python generate_level_set.py [--start 1] [--end 100] [--output FILE] [--show]
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Any, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mazegen.core.generator import MazeGenerator
from mazegen.core.solver import LevelSolver
from mazegen.models.level import DifficultyProfile
from mazegen.utils.helpers import extract_cell_statistics, format_level_for_display

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


@dataclass
class LevelReport:
    """Generation outcome for one level."""
    level_number: int
    seed: int
    attempts: int
    used_fallback: bool
    min_moves: Optional[int]
    required_moves: int
    generation_time_ms: float
    statistics: Dict[str, Any]


def generate_levels(
    generator: MazeGenerator, start: int, end: int, show: bool = False
) -> List[LevelReport]:
    reports: List[LevelReport] = []

    for level_number in range(start, end + 1):
        started = time.time()
        level, diagnostics = generator.generate(level_number)
        elapsed_ms = (time.time() - started) * 1000

        min_moves = LevelSolver.for_level(level).solve_complexity()
        required = DifficultyProfile.for_level(level_number).min_moves

        reports.append(LevelReport(
            level_number=level_number,
            seed=diagnostics.seed,
            attempts=diagnostics.attempts,
            used_fallback=diagnostics.used_fallback,
            min_moves=min_moves,
            required_moves=required,
            generation_time_ms=round(elapsed_ms, 1),
            statistics=extract_cell_statistics(level),
        ))

        if min_moves is None:
            logger.error(f"Level {level_number} is unsolvable (fallback={diagnostics.used_fallback})")
        elif level_number % 10 == 0:
            logger.info(
                f"  Level {level_number} done (attempts: {diagnostics.attempts}, "
                f"moves: {min_moves}/{required}, {elapsed_ms:.0f}ms)"
            )

        if show:
            print(format_level_for_display(level))
            print()

    return reports


def print_summary(reports: List[LevelReport]) -> None:
    total_attempts = sum(r.attempts for r in reports)
    fallbacks = [r for r in reports if r.used_fallback]
    unsolvable = [r for r in reports if r.min_moves is None]

    print("=" * 60)
    print(f"Levels: {len(reports)}")
    print(f"  - Average attempts: {total_attempts / len(reports):.2f}")
    print(f"  - Max attempts: {max(r.attempts for r in reports)}")
    print(f"  - Fallback levels: {len(fallbacks)} {[r.level_number for r in fallbacks]}")
    print(f"  - Unsolvable levels: {len(unsolvable)}")
    print(f"  - Total time: {sum(r.generation_time_ms for r in reports) / 1000:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Generate maze levels and report diagnostics")
    parser.add_argument("--start", "-s", type=int, default=1,
                        help="First level number (default: 1)")
    parser.add_argument("--end", "-e", type=int, default=100,
                        help="Last level number (default: 100)")
    parser.add_argument("--output", "-o", type=str, default=None,
                        help="Output file for reports (JSON)")
    parser.add_argument("--show", action="store_true",
                        help="Print every level grid")

    args = parser.parse_args()
    if args.start < 0 or args.end < args.start:
        parser.error("expected 0 <= start <= end")

    logger.info(f"Generating levels {args.start}-{args.end}...")
    reports = generate_levels(MazeGenerator(), args.start, args.end, show=args.show)
    print_summary(reports)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(
            json.dumps([asdict(r) for r in reports], indent=2), encoding="utf-8"
        )
        print(f"\nReports saved to: {output_path}")


if __name__ == "__main__":
    main()
