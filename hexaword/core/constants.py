"""Shared constants and enumerations for the hex crossword engine."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Tuple


DEFAULT_GRID_RADIUS = 10
DEFAULT_SEED = "default"

# Words considered when looking for the initial crossing group.
ANCHOR_CANDIDATE_LIMIT = 10

# Extra rings allowed when open-space placement runs out of isolated room.
RELAXED_RADIUS_MARGIN = 2


class Direction(IntEnum):
    """The three readable axes words are written along."""

    HORIZONTAL = 0
    VERTICAL = 1
    DIAGONAL = 2

    @property
    def step(self) -> Tuple[int, int]:
        return READABLE_STEPS[self.value]


class PlacementStrategy(str, Enum):
    """Layout strategies supported by the generator."""

    FRONTIER = "frontier"
    EXACT = "exact"
    AUTO = "auto"


# Axial (q, r) unit offsets, indexed by ``Direction``.
READABLE_STEPS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (1, -1))

# All six neighbours, used only for adjacency checks.
NEIGHBOR_STEPS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (-1, 1),
    (0, -1),
    (-1, 0),
    (1, -1),
    (0, 1),
)


def hex_cell_count(radius: int) -> int:
    """Number of cells in a hexagon of the given radius."""

    return 3 * radius * (radius + 1) + 1
