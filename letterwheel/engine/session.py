"""Game session: found-word tracking, cell reveal and the letter wheel input.

A :class:`GameSession` is the only mutable object of a game. It is built
once per (difficulty, date) and thrown away on replay; the puzzle and the
layout it holds never change after construction.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Set, Tuple

from ..core.constants import BASE_ORDINAL, DEFAULT_BASE_HINT, DEFAULT_TARGET_HINT, Difficulty
from ..core.exceptions import NoSuitablePuzzle
from ..core.models import CellLabel, Puzzle, PuzzleWord
from ..data.normalization import normalize_word
from ..data.vocabulary import VocabularyLoader
from ..utils.logger import get_logger
from .layout import CrosswordLayout, LayoutConfig, build_layout
from .selector import SelectorConfig, WordSelector
from .validator import LayoutValidator


LOGGER = get_logger(__name__)

Coord = Tuple[int, int]


class GameStatus(str, Enum):
    AWAITING_INPUT = "AWAITING_INPUT"
    COMPLETE = "COMPLETE"


class SubmitOutcome(str, Enum):
    CORRECT = "CORRECT"
    ALREADY_FOUND = "ALREADY_FOUND"
    INCORRECT = "INCORRECT"


@dataclass
class SubmitResult:
    """Classification of one submission.

    ``revealed_cells`` lists the cells of the matched word in reading order
    for a ``CORRECT`` answer; pacing their animation is up to the caller.
    """

    outcome: SubmitOutcome
    word: Optional[PuzzleWord] = None
    revealed_cells: List[Coord] = field(default_factory=list)
    completed: bool = False

    @property
    def ordinal(self) -> Optional[int]:
        return self.word.ordinal if self.word else None


@dataclass
class Hint:
    ordinal: int
    clue: str
    length: int
    found: bool
    answer: Optional[str] = None


@dataclass
class SessionConfig:
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    min_placed_words: int = 1
    wheel_seed: Optional[int] = None


class GameSession:
    """One play-through of a puzzle."""

    def __init__(
        self,
        puzzle: Puzzle,
        layout: CrosswordLayout,
        rng: Optional[random.Random] = None,
    ) -> None:
        # Only placed words are playable.
        self.puzzle = puzzle.restricted_to(layout.placed_ordinals)
        self.layout = layout
        self.status = GameStatus.AWAITING_INPUT
        self._found: Set[int] = set()
        self._by_normalized = {word.normalized: word for word in self.puzzle.words}
        self._rng = rng or random.Random()
        self.wheel_order: List[int] = list(range(len(self.puzzle.base_word.normalized)))
        self.shuffle_wheel()
        self._selected: List[int] = []

    @classmethod
    def start(
        cls,
        vocabulary: VocabularyLoader,
        difficulty: Difficulty | str,
        date: str,
        config: Optional[SessionConfig] = None,
    ) -> "GameSession":
        """Select, lay out and validate the puzzle for ``difficulty`` on ``date``."""

        config = config or SessionConfig()
        puzzle = WordSelector(vocabulary, config.selector).select(difficulty, date)
        layout = build_layout(puzzle, config.layout)
        placed_targets = len(layout.placed) - 1
        if placed_targets < config.min_placed_words:
            raise NoSuitablePuzzle(
                f"Only {placed_targets} target words could be laid out around {puzzle.base_word.normalized}"
            )
        result = LayoutValidator().validate(layout)
        for message in result.messages:
            LOGGER.warning("Layout check: %s", message)
        return cls(puzzle, layout, rng=random.Random(config.wheel_seed))

    # ------------------------------------------------------------------
    # Found state
    # ------------------------------------------------------------------
    @property
    def found(self) -> FrozenSet[int]:
        return frozenset(self._found)

    @property
    def total_words(self) -> int:
        return len(self.puzzle.target_words) + 1

    def progress(self) -> Tuple[int, int]:
        return len(self._found), self.total_words

    def is_found(self, ordinal: int) -> bool:
        return ordinal in self._found

    def submit(self, candidate: str) -> SubmitResult:
        """Classify ``candidate`` and reveal its cells when it is a new find."""

        word = self._by_normalized.get(normalize_word(candidate))
        if word is None:
            return SubmitResult(outcome=SubmitOutcome.INCORRECT)
        if word.ordinal in self._found:
            return SubmitResult(outcome=SubmitOutcome.ALREADY_FOUND, word=word)

        self._found.add(word.ordinal)
        completed = len(self._found) == self.total_words
        if completed:
            self.status = GameStatus.COMPLETE
            LOGGER.info("Puzzle %s complete", self.puzzle.base_word.normalized)
        return SubmitResult(
            outcome=SubmitOutcome.CORRECT,
            word=word,
            revealed_cells=self.layout.cells_of(word.ordinal),
            completed=completed,
        )

    # ------------------------------------------------------------------
    # Rendering queries
    # ------------------------------------------------------------------
    def is_revealed(self, row: int, col: int) -> bool:
        cell = self.layout.cell(row, col)
        return cell is not None and not cell.member_ordinals.isdisjoint(self._found)

    def visible_labels(self, row: int, col: int) -> List[CellLabel]:
        """Numbering badges at a cell; the base word's only once it is found."""

        cell = self.layout.cell(row, col)
        if cell is None:
            return []
        return [
            label
            for label in cell.labels
            if label.ordinal != BASE_ORDINAL or BASE_ORDINAL in self._found
        ]

    def hints(self) -> List[Hint]:
        hints = []
        for word in self.puzzle.words:
            default = DEFAULT_BASE_HINT if word.is_base else DEFAULT_TARGET_HINT
            found = word.ordinal in self._found
            hints.append(
                Hint(
                    ordinal=word.ordinal,
                    clue=word.entry.clue or default,
                    length=len(word.normalized),
                    found=found,
                    answer=word.normalized if found else None,
                )
            )
        return hints

    # ------------------------------------------------------------------
    # Letter wheel
    # ------------------------------------------------------------------
    @property
    def wheel_letters(self) -> List[Tuple[int, str]]:
        """``(position, letter)`` pairs in the order they sit on the wheel."""

        base = self.puzzle.base_word.normalized
        return [(position, base[position]) for position in self.wheel_order]

    @property
    def selected_positions(self) -> List[int]:
        return list(self._selected)

    @property
    def current_word(self) -> str:
        base = self.puzzle.base_word.normalized
        return "".join(base[position] for position in self._selected)

    def shuffle_wheel(self) -> None:
        self._rng.shuffle(self.wheel_order)

    def select_letter(self, position: int) -> str:
        """Toggle a wheel letter.

        Selecting an unused letter appends it; selecting one already in the
        word drops it together with every letter chosen after it.
        """

        if not 0 <= position < len(self.puzzle.base_word.normalized):
            raise ValueError(f"No wheel letter at position {position}")
        if position in self._selected:
            del self._selected[self._selected.index(position):]
        else:
            self._selected.append(position)
        return self.current_word

    def type_letter(self, letter: str) -> Optional[str]:
        """Select the first unused base-word position holding ``letter``.

        Returns the spelled word, or ``None`` when the wheel has no free copy
        of the letter (the selection is left untouched).
        """

        normalized = normalize_word(letter)
        if len(normalized) != 1:
            return None
        for position, base_letter in enumerate(self.puzzle.base_word.normalized):
            if base_letter == normalized and position not in self._selected:
                return self.select_letter(position)
        return None

    def remove_last(self) -> str:
        if self._selected:
            self._selected.pop()
        return self.current_word

    def clear_word(self) -> None:
        self._selected.clear()

    def submit_current(self) -> Optional[SubmitResult]:
        """Submit the spelled word and clear the selection; ``None`` when nothing is spelled."""

        word = self.current_word
        if not word:
            return None
        self.clear_word()
        return self.submit(word)
