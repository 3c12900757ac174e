"""Deterministic rule validation and statistics for generated boards."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from ..core.constants import RELAXED_RADIUS_MARGIN, hex_cell_count
from ..core.exceptions import ValidationError
from ..utils.logger import get_logger
from .board import HexBoard


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


@dataclass
class PuzzleStatistics:
    total_words: int
    placed_words: int
    cells: int
    intersections: int
    density: float
    components: int

    @property
    def placement_ratio(self) -> float:
        return self.placed_words / self.total_words if self.total_words else 0.0

    @property
    def connected(self) -> bool:
        return self.components <= 1

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "total_words": self.total_words,
            "placed_words": self.placed_words,
            "placement_ratio": round(self.placement_ratio, 4),
            "cells": self.cells,
            "intersections": self.intersections,
            "density": round(self.density, 4),
            "components": self.components,
            "connected": self.connected,
        }


@dataclass
class QualityReport:
    is_valid: bool
    score: int
    issues: List[str] = field(default_factory=list)


class BoardValidator:
    """Runs deterministic validation over a finished board."""

    def __init__(self, grid_radius: int) -> None:
        self.grid_radius = grid_radius

    def validate(self, board: HexBoard, relaxed_word_ids: Iterable[int] = ()) -> ValidationResult:
        relaxed = set(relaxed_word_ids)
        try:
            self._check_letters_valid(board)
            self._check_intersections(board)
            self._check_adjacency(board, relaxed)
            self._check_bounds(board, relaxed)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_letters_valid(self, board: HexBoard) -> None:
        for cell in board:
            letter = cell.letter
            if len(letter) != 1 or not letter.isascii() or not letter.isupper():
                raise ValidationError(f"Invalid letter '{letter}' at {cell.coordinate}")

    def _check_intersections(self, board: HexBoard) -> None:
        for word in board.words():
            placement = board.placement_of(word.id)
            for coordinate, letter in zip(placement.cells(len(word.text)), word.text):
                cell = board.cell(coordinate)
                if cell is None or word.id not in cell.word_ids:
                    raise ValidationError(f"Word {word.text} missing from cell {coordinate}")
                if cell.letter != letter:
                    raise ValidationError(
                        f"Letter disagreement at {coordinate}: {cell.letter} vs {word.text}"
                    )

    def _check_adjacency(self, board: HexBoard, relaxed: Set[int]) -> None:
        for cell in board:
            if cell.word_ids & relaxed:
                continue
            for neighbor in board.occupied_neighbors(cell.coordinate):
                if neighbor.word_ids & relaxed:
                    continue
                if not cell.word_ids & neighbor.word_ids:
                    raise ValidationError(
                        f"Unrelated words touch between {cell.coordinate} and {neighbor.coordinate}"
                    )

    def _check_bounds(self, board: HexBoard, relaxed: Set[int]) -> None:
        for cell in board:
            limit = self.grid_radius
            if cell.word_ids & relaxed:
                limit += RELAXED_RADIUS_MARGIN
            if not cell.coordinate.within(limit):
                raise ValidationError(f"Cell {cell.coordinate} outside radius {limit}")

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def statistics(self, board: HexBoard, total_words: int) -> PuzzleStatistics:
        cells = len(board)
        return PuzzleStatistics(
            total_words=total_words,
            placed_words=board.word_count,
            cells=cells,
            intersections=sum(1 for cell in board if cell.is_intersection),
            density=cells / hex_cell_count(self.grid_radius),
            components=count_components(board),
        )


def count_components(board: HexBoard) -> int:
    """Number of word clusters, where words sharing a cell are connected."""

    graph: Dict[int, Set[int]] = {word.id: set() for word in board.words()}
    for cell in board:
        for word_id in cell.word_ids:
            graph[word_id].update(cell.word_ids - {word_id})

    visited: Set[int] = set()
    components = 0
    for start in graph:
        if start in visited:
            continue
        components += 1
        stack = [start]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            stack.extend(graph[node] - visited)
    return components


def assess_quality(stats: PuzzleStatistics) -> QualityReport:
    """Score a layout 0-100 and list what makes it a weak puzzle."""

    issues: List[str] = []
    if stats.placement_ratio < 0.5:
        issues.append("Less than 50% of words are placed")
    if stats.intersections < 2:
        issues.append("Too few word intersections")
    if stats.density < 0.1:
        issues.append("Puzzle is too sparse")
    if not stats.connected:
        issues.append("Not all words are connected")

    score = stats.placement_ratio * 40
    intersection_ratio = stats.intersections / stats.cells if stats.cells else 0.0
    score += min(intersection_ratio * 100, 30)
    score += min(stats.density * 100, 30)
    # Halves round up.
    return QualityReport(is_valid=not issues, score=math.floor(score + 0.5), issues=issues)
