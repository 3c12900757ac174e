"""Sparse hex board and placement helpers."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..core.constants import Direction
from ..core.exceptions import PlacementInvariantError
from ..core.models import Cell, HexCoordinate, Placement, Word
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class HexBoard:
    """Map from coordinate to occupied cell, grown one word at a time.

    The board never removes words: a layout run owns one board and discards
    it afterwards. The board records placements itself, so throwaway boards
    can test a group of words without touching the ``Word`` objects.
    """

    def __init__(self) -> None:
        self.cells: Dict[HexCoordinate, Cell] = {}
        self._entries: Dict[int, Tuple[Word, Placement]] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells.values())

    def cell(self, coordinate: HexCoordinate) -> Optional[Cell]:
        return self.cells.get(coordinate)

    def letter_at(self, coordinate: HexCoordinate) -> Optional[str]:
        cell = self.cells.get(coordinate)
        return cell.letter if cell else None

    @property
    def word_count(self) -> int:
        return len(self._entries)

    def words(self) -> List[Word]:
        """Words in the order they were placed."""

        return [word for word, _ in self._entries.values()]

    def placement_of(self, word_id: int) -> Placement:
        return self._entries[word_id][1]

    def word(self, word_id: int) -> Word:
        return self._entries[word_id][0]

    def has_word_along(self, coordinate: HexCoordinate, direction: Direction) -> bool:
        """True if a word running along ``direction`` passes through ``coordinate``."""

        cell = self.cells.get(coordinate)
        if cell is None:
            return False
        return any(self.placement_of(word_id).direction == direction for word_id in cell.word_ids)

    def occupied_neighbors(self, coordinate: HexCoordinate) -> Iterable[Cell]:
        for neighbor in coordinate.neighbors():
            cell = self.cells.get(neighbor)
            if cell is not None:
                yield cell

    def radius(self) -> int:
        """Largest ring index of any occupied cell."""

        return max((coordinate.length for coordinate in self.cells), default=0)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place_word(self, word: Word, placement: Placement) -> List[HexCoordinate]:
        """Write ``word`` onto the board and return its cells.

        Overwriting a letter or placing the same word twice means a legality
        check was skipped, so both raise :class:`PlacementInvariantError`.
        """

        if word.id in self._entries:
            raise PlacementInvariantError(f"Word {word.id} ({word.text}) placed twice")
        cells = placement.cells(len(word.text))
        for coordinate, letter in zip(cells, word.text):
            existing = self.cells.get(coordinate)
            if existing is not None and existing.letter != letter:
                raise PlacementInvariantError(
                    f"Letter conflict at {coordinate}: {existing.letter} vs {letter} ({word.text})"
                )

        for coordinate, letter in zip(cells, word.text):
            cell = self.cells.get(coordinate)
            if cell is None:
                cell = Cell(coordinate=coordinate, letter=letter)
                self.cells[coordinate] = cell
            cell.word_ids.add(word.id)
        self._entries[word.id] = (word, placement)
        LOGGER.debug(
            "Placed %s at %s along %s", word.text, placement.origin, placement.direction.name
        )
        return cells

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> Dict[str, dict]:
        return {
            coordinate.key: {
                "letter": cell.letter,
                "word_ids": sorted(cell.word_ids),
            }
            for coordinate, cell in sorted(self.cells.items())
        }
