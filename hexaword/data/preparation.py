"""Word preparation: normalization, letter-match scoring and ordering."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..core.models import Word
from ..utils.logger import get_logger
from ..utils.rng import seeded_tiebreak
from .normalization import clean_word


LOGGER = get_logger(__name__)

MIN_WORD_COUNT = 3
MIN_WORD_LENGTH = 2


@dataclass
class WordListValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)


def compute_total_matches(texts: Sequence[str]) -> List[int]:
    """For each word, count letter pairs it shares with every other word.

    A pair is (position in this word, other word, position in other word)
    with equal letters, so ``HELLO`` against ``HOLD`` scores 4 (H, O and two Ls).
    """

    counters = [Counter(text) for text in texts]
    totals: List[int] = []
    for index, counter in enumerate(counters):
        total = 0
        for other_index, other in enumerate(counters):
            if other_index == index:
                continue
            total += sum(count * other[letter] for letter, count in counter.items())
        totals.append(total)
    return totals


def prepare_words(raw_words: Sequence[str], seed: str) -> List[Word]:
    """Normalize ``raw_words`` and return them in placement order.

    Ids are the input positions, so they stay stable however the list is
    reordered. Order: most total matches first, then longest, then a seeded
    tiebreak, then id.
    """

    words = [
        Word(id=index, text=clean_word(raw), source=raw)
        for index, raw in enumerate(raw_words)
    ]
    for word in words:
        if not word.text:
            LOGGER.warning("Word %r has no letters after normalization", word.source)

    for word, total in zip(words, compute_total_matches([w.text for w in words])):
        word.total_matches = total

    tiebreaks: Dict[int, int] = {word.id: seeded_tiebreak(seed, word.text) for word in words}
    words.sort(
        key=lambda w: (-w.total_matches, -len(w.text), tiebreaks[w.id], w.id)
    )
    LOGGER.debug(
        "Word match scores: %s",
        ", ".join(f"{w.text}={w.total_matches}" for w in words),
    )
    return words


def validate_words(words: Sequence[str]) -> WordListValidation:
    """Caller-side checks for a word list before it reaches the engine.

    The engine itself tolerates anything; this reports what makes a poor
    puzzle so the caller can reject or warn.
    """

    errors: List[str] = []
    if len(words) < MIN_WORD_COUNT:
        errors.append(f"At least {MIN_WORD_COUNT} words are required")

    if len({word.upper() for word in words}) != len(words):
        errors.append("Duplicate words found")

    for index, word in enumerate(words):
        if len(word) < MIN_WORD_LENGTH:
            errors.append(
                f"Word at index {index} is too short (minimum {MIN_WORD_LENGTH} characters)"
            )
        if not word.isascii() or not word.isalpha():
            errors.append(f"Word at index {index} contains invalid characters")

    if not errors:
        letter_frequency: Counter = Counter()
        for word in words:
            letter_frequency.update(set(word.upper()))
        if not any(count > 1 for count in letter_frequency.values()):
            errors.append("Words do not share any common letters for intersection")

    return WordListValidation(valid=not errors, errors=errors)
