"""Exhaustive CP-SAT layout search using OR-Tools.

Used when the greedy frontier leaves words unplaced and the word list is small
enough to search exactly. Every word gets exactly one placement, every pair of
chosen placements must be compatible under the same touching rules as the
greedy engine, and every word must be connected to the first word through a
chain of crossings.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from ortools.sat.python import cp_model

from ..core.constants import DEFAULT_GRID_RADIUS, Direction
from ..core.models import HexCoordinate, Placement, Word
from ..utils.logger import get_logger
from ..utils.rng import hash_string

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class _Candidate:
    index: int
    word_index: int
    placement: Placement
    cells: Tuple[HexCoordinate, ...]
    letters: str
    depth: int

    @property
    def cell_set(self) -> FrozenSet[HexCoordinate]:
        return frozenset(self.cells)


def solve_layout(
    words: Sequence[Word],
    grid_radius: int = DEFAULT_GRID_RADIUS,
    seed: str = "",
    time_limit: float = 10.0,
    max_candidates: int = 4000,
) -> Optional[List[Placement]]:
    """Find a connected, fully legal layout for ``words``.

    Args:
        words: Prepared words; the first one is fixed through the origin.
        grid_radius: Hex radius every cell must stay within.
        seed: Seed string; hashed into the solver's random seed.
        time_limit: Deterministic time budget for the solver.
        max_candidates: Give up when candidate generation exceeds this.

    Returns:
        One placement per word (same order as ``words``), or None when no
        layout exists or the search was cut short.
    """
    if not words:
        return []
    if any(not word.text for word in words):
        return None

    candidates = _generate_candidates(words, grid_radius, max_candidates)
    if candidates is None:
        return None

    by_word: Dict[int, List[_Candidate]] = defaultdict(list)
    for candidate in candidates:
        by_word[candidate.word_index].append(candidate)
    missing = [words[i].text for i in range(len(words)) if not by_word[i]]
    if missing:
        LOGGER.info("CP-SAT: no crossing candidates for %s", ", ".join(missing))
        return None

    model = cp_model.CpModel()
    chosen = [model.new_bool_var(f"p_{c.index}") for c in candidates]

    # ------------------------------------------------------------------
    # Step 1: one placement per word
    # ------------------------------------------------------------------
    for group in by_word.values():
        model.add_exactly_one([chosen[c.index] for c in group])

    # ------------------------------------------------------------------
    # Step 2: pairwise compatibility and crossing support
    # ------------------------------------------------------------------
    supporters: Dict[int, List[int]] = defaultdict(list)
    conflicts = 0
    for first, second in _nearby_pairs(candidates):
        if first.word_index == second.word_index:
            continue
        status = _pair_status(first, second)
        if status is None:
            model.add_at_most_one([chosen[first.index], chosen[second.index]])
            conflicts += 1
        elif status:
            if first.depth < second.depth:
                supporters[second.index].append(first.index)
            elif second.depth < first.depth:
                supporters[first.index].append(second.index)

    for candidate in candidates:
        if candidate.depth == 0:
            continue
        lower = supporters.get(candidate.index)
        if not lower:
            model.add(chosen[candidate.index] == 0)
            continue
        model.add_bool_or([chosen[i] for i in lower]).only_enforce_if(chosen[candidate.index])

    # ------------------------------------------------------------------
    # Step 3: solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_deterministic_time = time_limit
    solver.parameters.num_workers = 1
    solver.parameters.random_seed = hash_string(seed) % 2_147_483_647

    LOGGER.info(
        "CP-SAT: %d words, %d candidates, %d conflicts, solving (budget=%0.1f)...",
        len(words),
        len(candidates),
        conflicts,
        time_limit,
    )
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no layout found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: layout found in %.2fs", solver.wall_time)
    layout: List[Optional[Placement]] = [None] * len(words)
    for candidate in candidates:
        if solver.boolean_value(chosen[candidate.index]):
            layout[candidate.word_index] = candidate.placement
    return [placement for placement in layout if placement is not None]


def _generate_candidates(
    words: Sequence[Word], grid_radius: int, max_candidates: int
) -> Optional[List[_Candidate]]:
    """Breadth-first closure of placements crossing the fixed root word."""

    root_word = words[0]
    middle = len(root_word.text) // 2
    root_placement = Placement(
        HexCoordinate.origin().move(Direction.HORIZONTAL, -middle), Direction.HORIZONTAL
    )
    root = _make_candidate(0, 0, root_word, root_placement, 0)
    if not all(cell.within(grid_radius) for cell in root.cells):
        LOGGER.info("CP-SAT: %s does not fit radius %d", root_word.text, grid_radius)
        return None

    candidates = [root]
    seen: Set[Tuple[int, Placement]] = {(0, root_placement)}
    layer = [root]
    for depth in range(1, len(words)):
        next_layer: List[_Candidate] = []
        for parent in layer:
            for word_index, word in enumerate(words):
                if word_index in (0, parent.word_index):
                    continue
                for placement in _crossings(parent, word):
                    key = (word_index, placement)
                    if key in seen:
                        continue
                    candidate = _make_candidate(len(candidates), word_index, word, placement, depth)
                    if not all(cell.within(grid_radius) for cell in candidate.cells):
                        seen.add(key)
                        continue
                    # Compatibility depends on the parent; another parent may still accept it.
                    if _pair_status(parent, candidate) is not True:
                        continue
                    seen.add(key)
                    candidates.append(candidate)
                    next_layer.append(candidate)
                    if len(candidates) > max_candidates:
                        LOGGER.warning(
                            "CP-SAT: over %d candidates, giving up on exact search", max_candidates
                        )
                        return None
        if not next_layer:
            break
        layer = next_layer
    return candidates


def _make_candidate(
    index: int, word_index: int, word: Word, placement: Placement, depth: int
) -> _Candidate:
    return _Candidate(
        index=index,
        word_index=word_index,
        placement=placement,
        cells=tuple(placement.cells(len(word.text))),
        letters=word.text,
        depth=depth,
    )


def _crossings(parent: _Candidate, word: Word) -> List[Placement]:
    placements = []
    for cell, letter in zip(parent.cells, parent.letters):
        for index, char in enumerate(word.text):
            if char != letter:
                continue
            for direction in Direction:
                if direction == parent.placement.direction:
                    continue
                placements.append(Placement(cell.move(direction, -index), direction))
    return placements


def _nearby_pairs(candidates: Sequence[_Candidate]) -> List[Tuple[_Candidate, _Candidate]]:
    """Candidate pairs whose cells overlap or touch; all others are independent."""

    by_cell: Dict[HexCoordinate, List[int]] = defaultdict(list)
    for candidate in candidates:
        for cell in candidate.cells:
            by_cell[cell].append(candidate.index)

    pairs: Set[Tuple[int, int]] = set()
    for candidate in candidates:
        halo = set(candidate.cells)
        for cell in candidate.cells:
            halo.update(cell.neighbors())
        for cell in halo:
            for other in by_cell.get(cell, ()):
                if other > candidate.index:
                    pairs.add((candidate.index, other))
    return [(candidates[a], candidates[b]) for a, b in sorted(pairs)]


def _pair_status(first: _Candidate, second: _Candidate) -> Optional[bool]:
    """None if incompatible, True if they legally cross, False if independent."""

    first_letters = dict(zip(first.cells, first.letters))
    second_letters = dict(zip(second.cells, second.letters))
    shared = first.cell_set & second.cell_set
    for cell in shared:
        if first_letters[cell] != second_letters[cell]:
            return None
    if shared and first.placement.direction == second.placement.direction:
        return None

    second_only = second.cell_set - shared
    for cell in first.cells:
        if cell in shared:
            continue
        if any(neighbor in second_only for neighbor in cell.neighbors()):
            return None
    return bool(shared)
