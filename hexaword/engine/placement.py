"""Greedy word placement on the hex grid.

Three phases, all sharing one legality check:
  1. Anchor: the first crossing group (three words, else two, else one) is
     laid through the origin.
  2. Frontier: remaining words cross existing word endpoints, with a waitlist
     pass that retries words once the frontier has grown.
  3. Open space: when nothing crosses, one waitlisted word is laid in empty
     space to start a new cluster and the frontier loop resumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations, product
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..core.constants import (ANCHOR_CANDIDATE_LIMIT, DEFAULT_GRID_RADIUS,
                              RELAXED_RADIUS_MARGIN, Direction)
from ..core.models import ConnectionPoint, HexCoordinate, Placement, Word
from ..utils.logger import get_logger
from ..utils.rng import SeededRNG
from .board import HexBoard


LOGGER = get_logger(__name__)


@dataclass
class PlacementResult:
    board: HexBoard
    placed_words: List[Word]
    unplaced_words: List[Word]
    success: bool
    anchor_size: int = 0
    relaxed_word_ids: Set[int] = field(default_factory=set)


def middle_out(length: int) -> List[int]:
    """Letter indices ordered by distance from the middle, left side first."""

    if length <= 0:
        return []
    middle = length // 2
    order = [middle]
    for offset in range(1, length):
        if middle - offset >= 0:
            order.append(middle - offset)
        if middle + offset < length:
            order.append(middle + offset)
    return order


class WordPlacementService:
    """Lays out prepared words on a fresh board per call.

    The service holds only configuration, so one instance can serve many
    concurrent calls. Words passed to :meth:`place_words` must be unplaced;
    their ``placement`` is set as they land on the board.
    """

    def __init__(
        self,
        grid_radius: int = DEFAULT_GRID_RADIUS,
        anchor_candidate_limit: int = ANCHOR_CANDIDATE_LIMIT,
    ) -> None:
        self.grid_radius = grid_radius
        self.anchor_candidate_limit = anchor_candidate_limit

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def place_words(self, words: Sequence[Word], rng: Optional[SeededRNG] = None) -> PlacementResult:
        board = HexBoard()
        placeable = [word for word in words if word.text]
        unplaced = [word for word in words if not word.text]

        anchors = self._place_anchor(board, placeable)
        if not anchors:
            LOGGER.warning("Anchor placement failed for %d words", len(placeable))
            return PlacementResult(
                board=board,
                placed_words=[],
                unplaced_words=list(words),
                success=False,
            )

        frontier: List[ConnectionPoint] = []
        for word in anchors:
            self._extend_frontier(word, frontier)

        anchor_ids = {word.id for word in anchors}
        pending = [word for word in placeable if word.id not in anchor_ids]
        relaxed: Set[int] = set()
        self._place_remaining(board, pending, frontier, rng, unplaced, relaxed)

        placed = board.words()
        LOGGER.info("Placed %d out of %d words", len(placed), len(words))
        return PlacementResult(
            board=board,
            placed_words=placed,
            unplaced_words=unplaced,
            success=not unplaced,
            anchor_size=len(anchors),
            relaxed_word_ids=relaxed,
        )

    def build_from_layout(self, words: Sequence[Word], layout: Iterable[Placement]) -> PlacementResult:
        """Commit a precomputed layout (one placement per word, same order)."""

        board = HexBoard()
        for word, placement in zip(words, layout):
            board.place_word(word, placement)
            word.place(placement)
        placed = board.words()
        unplaced = [word for word in words if not word.is_placed]
        return PlacementResult(
            board=board,
            placed_words=placed,
            unplaced_words=unplaced,
            success=bool(placed) and not unplaced,
            anchor_size=1 if placed else 0,
        )

    def can_place(self, board: HexBoard, word: Word, placement: Placement) -> bool:
        """Full legality check for a crossing placement.

        Bounds, letter agreement on occupied cells, at least one intersection
        once the board is non-empty, and no non-intersection cell touching a
        cell outside this word.
        """

        cells = placement.cells(len(word.text))
        intersections: Set[HexCoordinate] = set()
        for coordinate, letter in zip(cells, word.text):
            if not coordinate.within(self.grid_radius):
                return False
            existing = board.letter_at(coordinate)
            if existing is None:
                continue
            if existing != letter:
                return False
            intersections.add(coordinate)

        if len(board) and not intersections:
            return False

        footprint = set(cells)
        for coordinate in cells:
            if coordinate in intersections:
                continue
            for neighbor in coordinate.neighbors():
                if neighbor not in footprint and neighbor in board:
                    return False
        return True

    # ------------------------------------------------------------------
    # Anchor placement
    # ------------------------------------------------------------------
    def _place_anchor(self, board: HexBoard, words: Sequence[Word]) -> List[Word]:
        candidates = list(words[: self.anchor_candidate_limit])
        for size in (3, 2):
            for group in combinations(candidates, size):
                placements = self._find_crossing_group(group)
                if placements is None:
                    continue
                LOGGER.info("Anchoring %s at the origin", ", ".join(w.text for w in group))
                for word, placement in zip(group, placements):
                    board.place_word(word, placement)
                    word.place(placement)
                return list(group)

        for word in words:
            placement = self._through_origin(len(word.text) // 2, Direction.HORIZONTAL)
            if self.can_place(board, word, placement):
                LOGGER.info("No crossing group found; anchoring %s alone", word.text)
                board.place_word(word, placement)
                word.place(placement)
                return [word]
        return []

    def _find_crossing_group(self, group: Sequence[Word]) -> Optional[List[Placement]]:
        """Placements putting a shared letter of every word at the origin.

        Word ``i`` runs along readable axis ``i``. Letter positions are tried
        middle-out; the first combination that passes the legality check wins.
        """

        first = group[0]
        for index in middle_out(len(first.text)):
            letter = first.text[index]
            options = [[index]]
            for word in group[1:]:
                options.append([i for i in middle_out(len(word.text)) if word.text[i] == letter])
            if not all(options):
                continue
            for indices in product(*options):
                placements = [
                    self._through_origin(letter_index, Direction(axis))
                    for axis, letter_index in enumerate(indices)
                ]
                if self._group_is_legal(group, placements):
                    return placements
        return None

    def _group_is_legal(self, group: Sequence[Word], placements: Sequence[Placement]) -> bool:
        scratch = HexBoard()
        for word, placement in zip(group, placements):
            if not self.can_place(scratch, word, placement):
                return False
            scratch.place_word(word, placement)
        return True

    @staticmethod
    def _through_origin(letter_index: int, direction: Direction) -> Placement:
        return Placement(HexCoordinate.origin().move(direction, -letter_index), direction)

    # ------------------------------------------------------------------
    # Frontier placement
    # ------------------------------------------------------------------
    def _place_remaining(
        self,
        board: HexBoard,
        pending: List[Word],
        frontier: List[ConnectionPoint],
        rng: Optional[SeededRNG],
        unplaced: List[Word],
        relaxed: Set[int],
    ) -> None:
        waitlist: List[Word] = []
        while pending or waitlist:
            placed, leftover = self._frontier_pass(board, pending, frontier, rng)
            waitlist.extend(leftover)
            pending = []
            if waitlist:
                retried, waitlist = self._frontier_pass(board, waitlist, frontier, rng)
                placed += retried
            if placed:
                continue
            if not self._place_in_open_space(board, waitlist, frontier, unplaced, relaxed):
                break

    def _frontier_pass(
        self,
        board: HexBoard,
        pool: Sequence[Word],
        frontier: List[ConnectionPoint],
        rng: Optional[SeededRNG],
    ) -> Tuple[int, List[Word]]:
        """One sweep over the frontier; returns (placed count, words left)."""

        remaining = list(pool)
        placed = 0
        index = 0
        # The frontier grows while we walk it; new endpoints are visited too.
        while index < len(frontier) and remaining:
            point = frontier[index]
            index += 1
            if self._is_point_full(board, point):
                continue
            for position, word in enumerate(remaining):
                placement = self._placement_at_point(board, word, point, rng)
                if placement is None:
                    continue
                self._commit(board, word, placement, frontier)
                del remaining[position]
                placed += 1
                break
        return placed, remaining

    def _placement_at_point(
        self,
        board: HexBoard,
        word: Word,
        point: ConnectionPoint,
        rng: Optional[SeededRNG],
    ) -> Optional[Placement]:
        letter = board.letter_at(point.coordinate)
        if letter is None:
            return None

        candidates: List[Placement] = []
        for index, char in enumerate(word.text):
            if char != letter:
                continue
            for direction in Direction:
                if direction == point.parent_direction:
                    continue
                placement = Placement(point.coordinate.move(direction, -index), direction)
                if self.can_place(board, word, placement):
                    candidates.append(placement)

        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]
        candidates.sort(key=Placement.sort_key)
        if rng is not None:
            return candidates[rng.next_int(0, len(candidates) - 1)]
        return candidates[0]

    @staticmethod
    def _is_point_full(board: HexBoard, point: ConnectionPoint) -> bool:
        filled = sum(
            1
            for direction in Direction
            if direction != point.parent_direction
            and board.has_word_along(point.coordinate, direction)
        )
        return filled >= 2

    def _commit(
        self,
        board: HexBoard,
        word: Word,
        placement: Placement,
        frontier: List[ConnectionPoint],
    ) -> None:
        board.place_word(word, placement)
        word.place(placement)
        self._extend_frontier(word, frontier)

    @staticmethod
    def _extend_frontier(word: Word, frontier: List[ConnectionPoint]) -> None:
        start, end = word.endpoints()
        direction = word.placement.direction
        frontier.append(ConnectionPoint(start, direction))
        if end != start:
            frontier.append(ConnectionPoint(end, direction))

    # ------------------------------------------------------------------
    # Open-space fallback
    # ------------------------------------------------------------------
    def _place_in_open_space(
        self,
        board: HexBoard,
        waitlist: List[Word],
        frontier: List[ConnectionPoint],
        unplaced: List[Word],
        relaxed: Set[int],
    ) -> bool:
        """Start a new cluster with the first waitlisted word that fits anywhere."""

        while waitlist:
            word = waitlist.pop(0)
            placement = self._find_open_placement(board, word, self.grid_radius, spaced=True)
            if placement is not None:
                LOGGER.info("Placed %s in open space at %s", word.text, placement.origin)
            else:
                placement = self._find_open_placement(
                    board, word, self.grid_radius + RELAXED_RADIUS_MARGIN, spaced=False
                )
                if placement is None:
                    LOGGER.warning("No room left for %s", word.text)
                    unplaced.append(word)
                    continue
                relaxed.add(word.id)
                LOGGER.warning(
                    "Placed %s with relaxed bounds at %s", word.text, placement.origin
                )
            self._commit(board, word, placement, frontier)
            return True
        return False

    def _find_open_placement(
        self, board: HexBoard, word: Word, radius: int, spaced: bool
    ) -> Optional[Placement]:
        for ring in range(1, radius + 1):
            for origin in HexCoordinate.ring(ring):
                for direction in Direction:
                    placement = Placement(origin, direction)
                    if self._is_open(board, word, placement, radius, spaced):
                        return placement
        return None

    @staticmethod
    def _is_open(
        board: HexBoard, word: Word, placement: Placement, radius: int, spaced: bool
    ) -> bool:
        for coordinate in placement.cells(len(word.text)):
            if not coordinate.within(radius) or coordinate in board:
                return False
            if spaced and any(neighbor in board for neighbor in coordinate.neighbors()):
                return False
        return True
