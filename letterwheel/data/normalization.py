"""Shared helpers for Spanish word normalization."""

from __future__ import annotations

import unicodedata
from collections import Counter
from typing import Mapping

ENYE = "Ñ"
_ENYE_FORMS = {"ñ": ENYE, "Ñ": ENYE}


def normalize_word(text: str) -> str:
    """Return ``text`` upper-cased with accents stripped and non-letters removed.

    ``ñ`` is a letter of its own in Spanish and survives the folding, while
    ``á``, ``é``, ``ü`` and friends collapse onto their base vowel.
    """

    if not text:
        return ""
    transformed = []
    for char in text:
        if char in _ENYE_FORMS:
            transformed.append(_ENYE_FORMS[char])
            continue
        for part in unicodedata.normalize("NFD", char):
            if unicodedata.combining(part):
                continue
            if part.isalpha():
                transformed.append(part.upper())
    return "".join(transformed)


def letter_counts(word: str) -> Counter:
    """Letter multiset of an already normalized word."""

    return Counter(word)


def is_sub_multiset(candidate: str, pool: Mapping[str, int]) -> bool:
    """True when every letter of ``candidate`` is available often enough in ``pool``."""

    for letter, count in Counter(candidate).items():
        if count > pool.get(letter, 0):
            return False
    return True


__all__ = ["ENYE", "is_sub_multiset", "letter_counts", "normalize_word"]
