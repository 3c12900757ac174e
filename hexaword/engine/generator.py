"""Main hex crossword generator orchestration.

Per attempt:
  1. Prepare: normalize words and order them by how easily they cross.
  2. Place: greedy frontier placement, or the exhaustive CP-SAT search.
  3. Check: validate board invariants and gather statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.constants import DEFAULT_GRID_RADIUS, DEFAULT_SEED, PlacementStrategy
from ..core.models import Word
from ..data.preparation import prepare_words
from ..utils.logger import get_logger
from ..utils.rng import create_rng, seeded_uuid
from .board import HexBoard
from .placement import PlacementResult, WordPlacementService
from .solver import solve_layout
from .validator import BoardValidator, PuzzleStatistics


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    grid_radius: int = DEFAULT_GRID_RADIUS
    seed: str = DEFAULT_SEED
    strategy: PlacementStrategy = PlacementStrategy.FRONTIER
    retry_limit: int = 1
    exact_word_limit: int = 8
    exact_time_limit: float = 10.0
    exact_max_candidates: int = 4000
    validate: bool = True

    def __post_init__(self) -> None:
        self.strategy = PlacementStrategy(self.strategy)
        if self.grid_radius < 1:
            raise ValueError(f"grid_radius must be at least 1, got {self.grid_radius}")
        if self.retry_limit < 1:
            raise ValueError(f"retry_limit must be at least 1, got {self.retry_limit}")
        if self.exact_word_limit < 1:
            raise ValueError(f"exact_word_limit must be at least 1, got {self.exact_word_limit}")

    def attempt_seed(self, attempt: int) -> str:
        return self.seed if attempt == 1 else f"{self.seed}_{attempt}"


@dataclass
class GenerationResult:
    board: HexBoard
    placed_words: List[Word]
    unplaced_words: List[Word]
    success: bool
    seed: str
    grid_radius: int
    strategy: PlacementStrategy
    statistics: PuzzleStatistics
    relaxed_word_ids: List[int] = field(default_factory=list)
    validation_messages: List[str] = field(default_factory=list)

    @property
    def puzzle_id(self) -> str:
        return seeded_uuid(self.seed)

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "puzzle_id": self.puzzle_id,
            "seed": self.seed,
            "grid_radius": self.grid_radius,
            "strategy": self.strategy.value,
            "success": self.success,
            "board": self.board.to_jsonable(),
            "placed_words": [_serialize_word(word) for word in self.placed_words],
            "unplaced_words": [word.text for word in self.unplaced_words],
            "relaxed_word_ids": list(self.relaxed_word_ids),
            "statistics": self.statistics.to_jsonable(),
            "validation_messages": list(self.validation_messages),
        }


def _serialize_word(word: Word) -> Dict[str, object]:
    placement = word.placement
    assert placement is not None
    return {
        "id": word.id,
        "word": word.text,
        "q": placement.origin.q,
        "r": placement.origin.r,
        "direction": int(placement.direction),
    }


class HexawordGenerator:
    """High-level orchestrator: word preparation, placement, validation."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        placement_service: Optional[WordPlacementService] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.placement_service = placement_service or WordPlacementService(self.config.grid_radius)
        self.validator = BoardValidator(self.config.grid_radius)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[str]) -> GenerationResult:
        """Lay out ``words``; incomplete placement is reported, never raised."""

        best: Optional[GenerationResult] = None
        for attempt in range(1, self.config.retry_limit + 1):
            seed = self.config.attempt_seed(attempt)
            LOGGER.info(
                "Generation attempt %s/%s (seed=%r)", attempt, self.config.retry_limit, seed
            )
            result = self._generate_once(words, seed)
            if result.success:
                return result
            LOGGER.warning(
                "Attempt %s placed %d of %d words",
                attempt,
                len(result.placed_words),
                len(words),
            )
            if best is None or len(result.placed_words) > len(best.placed_words):
                best = result
        assert best is not None
        return best

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------
    def _generate_once(self, words: Sequence[str], seed: str) -> GenerationResult:
        # Reports the strategy that produced the layout, not the one requested.
        strategy = PlacementStrategy.FRONTIER
        placement: Optional[PlacementResult] = None
        if self.config.strategy == PlacementStrategy.EXACT:
            placement = self._place_exact(words, seed)
            if placement is None:
                LOGGER.warning("Exact search failed; falling back to frontier placement")
            else:
                strategy = PlacementStrategy.EXACT
        if placement is None:
            placement = self._place_frontier(words, seed)
            if (
                self.config.strategy == PlacementStrategy.AUTO
                and not placement.success
                and placement.placed_words
            ):
                exact = self._place_exact(words, seed)
                if exact is not None:
                    placement = exact
                    strategy = PlacementStrategy.EXACT

        messages: List[str] = []
        if self.config.validate:
            validation = self.validator.validate(placement.board, placement.relaxed_word_ids)
            messages = validation.messages

        return GenerationResult(
            board=placement.board,
            placed_words=placement.placed_words,
            unplaced_words=placement.unplaced_words,
            success=placement.success,
            seed=seed,
            grid_radius=self.config.grid_radius,
            strategy=strategy,
            statistics=self.validator.statistics(placement.board, len(words)),
            relaxed_word_ids=sorted(placement.relaxed_word_ids),
            validation_messages=messages,
        )

    def _place_frontier(self, words: Sequence[str], seed: str) -> PlacementResult:
        prepared = prepare_words(words, seed)
        return self.placement_service.place_words(prepared, rng=create_rng(seed))

    def _place_exact(self, words: Sequence[str], seed: str) -> Optional[PlacementResult]:
        if len(words) > self.config.exact_word_limit:
            LOGGER.info(
                "Skipping exact search: %d words exceeds limit %d",
                len(words),
                self.config.exact_word_limit,
            )
            return None
        prepared = prepare_words(words, seed)
        layout = solve_layout(
            prepared,
            grid_radius=self.config.grid_radius,
            seed=seed,
            time_limit=self.config.exact_time_limit,
            max_candidates=self.config.exact_max_candidates,
        )
        if layout is None or len(layout) != len(prepared):
            return None
        return self.placement_service.build_from_layout(prepared, layout)


def generate(
    words: Sequence[str],
    grid_radius: int = DEFAULT_GRID_RADIUS,
    seed: str = DEFAULT_SEED,
) -> GenerationResult:
    """Lay out ``words`` on a hex grid of ``grid_radius`` keyed by ``seed``."""

    config = GeneratorConfig(grid_radius=grid_radius, seed=seed)
    return HexawordGenerator(config).generate(words)
