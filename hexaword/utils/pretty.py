"""Pretty-print helpers for hex boards."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Optional

from ..core.models import HexCoordinate
from ..engine.validator import assess_quality

if TYPE_CHECKING:
    from ..engine.board import HexBoard
    from ..engine.generator import GenerationResult


EMPTY_SYMBOL = "."


def format_board(board: HexBoard, radius: Optional[int] = None) -> str:
    """Render the board as offset text rows, one row per ``r`` value.

    Each row is indented by half a cell per step away from the middle row so
    the hex neighbours line up visually.
    """

    radius = max(radius or 0, board.radius())
    lines = []
    for r in range(-radius, radius + 1):
        symbols = []
        for q in range(-radius, radius + 1):
            coordinate = HexCoordinate(q, r)
            if not coordinate.within(radius):
                continue
            symbols.append(board.letter_at(coordinate) or EMPTY_SYMBOL)
        lines.append(" " * abs(r) + " ".join(symbols))
    return "\n".join(lines)


def print_generation_stats(result: GenerationResult, *, stream=None) -> None:
    """Print board + stats for a generation result."""

    stream = stream or sys.stdout
    print(format_board(result.board, result.grid_radius), file=stream)

    stats = result.statistics
    print(file=stream)
    print("--- Board ---", file=stream)
    print(f"  Radius:        {result.grid_radius}", file=stream)
    print(f"  Letters:       {stats.cells} ({stats.density * 100:.0f}% of grid)", file=stream)
    print(f"  Intersections: {stats.intersections}", file=stream)
    print(f"  Clusters:      {stats.components}", file=stream)

    lengths = Counter(len(word.text) for word in result.placed_words)
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {stats.placed_words}/{stats.total_words}", file=stream)
    if lengths:
        dist_parts = [f"{length}:{count}" for length, count in sorted(lengths.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
    if result.unplaced_words:
        missing = ", ".join(word.text or repr(word.source) for word in result.unplaced_words)
        print(f"  Unplaced:      {missing}", file=stream)
    if result.relaxed_word_ids:
        print(f"  Relaxed:       {len(result.relaxed_word_ids)} word(s)", file=stream)

    quality = assess_quality(stats)
    print(file=stream)
    print("--- Quality ---", file=stream)
    print(f"  Score:         {quality.score}/100", file=stream)
    for issue in quality.issues:
        print(f"  {issue}", file=stream)

    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)

    print(file=stream)
    print(f"Seed: {result.seed}", file=stream)
