"""Daily puzzle word selection.

A puzzle is a base word picked deterministically from the date, plus the
longest vocabulary words that can be spelled with the base word's letters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.constants import BASE_ORDINAL, GOOD_LETTERS, VOWELS, Difficulty
from ..core.exceptions import NoSuitablePuzzle
from ..core.models import Puzzle, PuzzleWord, VocabularyEntry
from ..data.normalization import is_sub_multiset, letter_counts, normalize_word
from ..data.vocabulary import VocabularyLoader
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class SelectorConfig:
    min_base_length: int = 6
    max_base_length: int = 10
    top_candidates: int = 50
    min_target_length: int = 3
    min_target_words: int = 4
    max_target_words: int = 8
    max_attempts: int = 10


def date_seed(date: str, attempt: int = 0) -> int:
    """Seed for ``attempt``: the character-code sum of the date, suffixed on retries."""

    key = date if attempt == 0 else f"{date}-{attempt}"
    return sum(ord(char) for char in key)


def score_base_word(normalized: str) -> int:
    """Favour words with many distinct common letters and many vowels."""

    score = 2 * sum(1 for letter in set(normalized) if letter in GOOD_LETTERS)
    score += sum(1 for letter in normalized if letter in VOWELS)
    return score


def rank_base_candidates(
    entries: Sequence[VocabularyEntry],
    config: SelectorConfig,
) -> List[Tuple[VocabularyEntry, str, int]]:
    """Length-filtered candidates, best score first, truncated to ``top_candidates``."""

    scored: List[Tuple[VocabularyEntry, str, int]] = []
    for entry in entries:
        normalized = normalize_word(entry.word)
        if config.min_base_length <= len(normalized) <= config.max_base_length:
            scored.append((entry, normalized, score_base_word(normalized)))
    # sort() is stable: equal scores keep vocabulary order.
    scored.sort(key=lambda item: item[2], reverse=True)
    return scored[: config.top_candidates]


def related_words(
    entries: Sequence[VocabularyEntry],
    base_normalized: str,
    config: SelectorConfig,
) -> List[Tuple[VocabularyEntry, str]]:
    """Vocabulary words spellable from the base word's letters, longest first."""

    pool = letter_counts(base_normalized)
    # Words that normalize alike (mesa, Mesa, mésa) count once, with the first clue.
    seen = {base_normalized}
    matches: List[Tuple[VocabularyEntry, str]] = []
    for entry in entries:
        normalized = normalize_word(entry.word)
        if normalized in seen:
            continue
        if len(normalized) < config.min_target_length or len(normalized) > len(base_normalized):
            continue
        if not is_sub_multiset(normalized, pool):
            continue
        seen.add(normalized)
        matches.append((entry, normalized))
    matches.sort(key=lambda item: len(item[1]), reverse=True)
    return matches


class WordSelector:
    """Builds the :class:`Puzzle` for a difficulty and date."""

    def __init__(self, vocabulary: VocabularyLoader, config: Optional[SelectorConfig] = None) -> None:
        self.vocabulary = vocabulary
        self.config = config or SelectorConfig()

    def select(self, difficulty: Difficulty | str, date: str) -> Puzzle:
        level = Difficulty(difficulty)
        entries = self.vocabulary.load(level)
        if not entries:
            raise NoSuitablePuzzle(f"No vocabulary available for {level.value}")
        return self.select_from(entries, date, difficulty=level)

    def select_from(
        self,
        entries: Sequence[VocabularyEntry],
        date: str,
        difficulty: Optional[Difficulty] = None,
    ) -> Puzzle:
        """Pick a puzzle from an already loaded vocabulary snapshot."""

        ranked = rank_base_candidates(entries, self.config)
        if not ranked:
            raise NoSuitablePuzzle(
                f"No base word of {self.config.min_base_length}-{self.config.max_base_length} letters"
            )

        for attempt in range(self.config.max_attempts):
            seed = date_seed(date, attempt)
            base_entry, base_normalized, score = ranked[seed % len(ranked)]
            matches = related_words(entries, base_normalized, self.config)
            if len(matches) < self.config.min_target_words:
                LOGGER.debug(
                    "Attempt %d: %s yields only %d related words",
                    attempt,
                    base_normalized,
                    len(matches),
                )
                continue

            targets = tuple(
                PuzzleWord(entry=entry, normalized=normalized, ordinal=index)
                for index, (entry, normalized) in enumerate(
                    matches[: self.config.max_target_words], start=1
                )
            )
            LOGGER.info(
                "Base word %s (score %d) with targets %s",
                base_normalized,
                score,
                ", ".join(t.normalized for t in targets),
            )
            return Puzzle(
                base_word=PuzzleWord(entry=base_entry, normalized=base_normalized, ordinal=BASE_ORDINAL),
                target_words=targets,
                difficulty=difficulty,
                date=date,
            )

        raise NoSuitablePuzzle(
            f"No base word with {self.config.min_target_words} related words "
            f"after {self.config.max_attempts} attempts"
        )
