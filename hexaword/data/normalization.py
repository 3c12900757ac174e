"""Shared helpers for word normalization."""

from __future__ import annotations

import re
import unicodedata

WORD_RE = re.compile(r"[^A-Z]")


def clean_word(text: str) -> str:
    """Return an uppercase ASCII-letters-only representation of ``text``.

    Accented letters fold to their base letter; everything else that is not a
    letter (digits, spaces, punctuation) is dropped.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return WORD_RE.sub("", stripped.upper())


__all__ = ["clean_word"]
