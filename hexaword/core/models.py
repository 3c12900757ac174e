"""Data models supporting the hex crossword engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

from .constants import NEIGHBOR_STEPS, Direction
from .exceptions import PlacementInvariantError


@dataclass(frozen=True, order=True)
class HexCoordinate:
    """Cube coordinate stored in axial form; ``s`` is derived."""

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    @property
    def key(self) -> str:
        return f"{self.q},{self.r}"

    @classmethod
    def from_key(cls, key: str) -> "HexCoordinate":
        q, r = key.split(",")
        return cls(int(q), int(r))

    @classmethod
    def origin(cls) -> "HexCoordinate":
        return cls(0, 0)

    def offset(self, step: Tuple[int, int], times: int = 1) -> "HexCoordinate":
        return HexCoordinate(self.q + step[0] * times, self.r + step[1] * times)

    def move(self, direction: Direction, times: int = 1) -> "HexCoordinate":
        return self.offset(direction.step, times)

    def neighbors(self) -> Iterator["HexCoordinate"]:
        for step in NEIGHBOR_STEPS:
            yield self.offset(step)

    def distance_to(self, other: "HexCoordinate") -> int:
        return max(abs(self.q - other.q), abs(self.r - other.r), abs(self.s - other.s))

    @property
    def length(self) -> int:
        """Distance from the origin (the hex ring this cell lies on)."""

        return max(abs(self.q), abs(self.r), abs(self.s))

    def within(self, radius: int) -> bool:
        return self.length <= radius

    @classmethod
    def ring(cls, radius: int) -> List["HexCoordinate"]:
        """All coordinates exactly ``radius`` steps from the origin, q-major."""

        if radius == 0:
            return [cls(0, 0)]
        ring: List[HexCoordinate] = []
        for q in range(-radius, radius + 1):
            for r in range(-radius, radius + 1):
                coordinate = cls(q, r)
                if coordinate.length == radius:
                    ring.append(coordinate)
        return ring

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Placement:
    """Where a word starts and which readable axis it runs along."""

    origin: HexCoordinate
    direction: Direction

    def cells(self, length: int) -> List[HexCoordinate]:
        return [self.origin.move(self.direction, i) for i in range(length)]

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.origin.q, self.origin.r, int(self.direction))


@dataclass
class Word:
    """A normalized word and, once laid out, its placement."""

    id: int
    text: str
    source: str = ""
    total_matches: int = 0
    placement: Optional[Placement] = None

    def __len__(self) -> int:
        return len(self.text)

    @property
    def is_placed(self) -> bool:
        return self.placement is not None

    def place(self, placement: Placement) -> None:
        if self.placement is not None:
            raise PlacementInvariantError(f"Word {self.id} ({self.text}) is already placed")
        self.placement = placement

    @property
    def cells(self) -> List[HexCoordinate]:
        if self.placement is None:
            return []
        return self.placement.cells(len(self.text))

    def endpoints(self) -> Tuple[HexCoordinate, HexCoordinate]:
        cells = self.cells
        if not cells:
            raise PlacementInvariantError(f"Word {self.id} has no cells")
        return cells[0], cells[-1]


@dataclass
class Cell:
    """One occupied board position."""

    coordinate: HexCoordinate
    letter: str
    word_ids: Set[int] = field(default_factory=set)

    @property
    def is_intersection(self) -> bool:
        return len(self.word_ids) > 1


@dataclass(frozen=True)
class ConnectionPoint:
    """A word endpoint that later words may cross."""

    coordinate: HexCoordinate
    parent_direction: Direction
