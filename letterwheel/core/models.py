"""Data models supporting the letter wheel game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from .constants import BASE_ORDINAL, Difficulty, Orientation


@dataclass(frozen=True)
class VocabularyEntry:
    """A word from the vocabulary lists with its learner-facing clue."""

    word: str
    clue: str = ""


@dataclass(frozen=True)
class PuzzleWord:
    """A vocabulary entry taking part in a puzzle."""

    entry: VocabularyEntry
    normalized: str
    ordinal: int

    @property
    def is_base(self) -> bool:
        return self.ordinal == BASE_ORDINAL

    def __len__(self) -> int:
        return len(self.normalized)


@dataclass(frozen=True)
class Puzzle:
    """Base word plus the target words formable from its letters."""

    base_word: PuzzleWord
    target_words: Tuple[PuzzleWord, ...]
    difficulty: Optional[Difficulty] = None
    date: Optional[str] = None

    @property
    def words(self) -> Tuple[PuzzleWord, ...]:
        return (self.base_word,) + self.target_words

    def word_by_ordinal(self, ordinal: int) -> Optional[PuzzleWord]:
        for word in self.words:
            if word.ordinal == ordinal:
                return word
        return None

    def restricted_to(self, ordinals: Iterable[int]) -> "Puzzle":
        """Return a copy keeping only the target words listed in ``ordinals``."""

        keep = set(ordinals)
        return Puzzle(
            base_word=self.base_word,
            target_words=tuple(w for w in self.target_words if w.ordinal in keep),
            difficulty=self.difficulty,
            date=self.date,
        )


@dataclass(frozen=True)
class CellLabel:
    """Crossword numbering badge anchored at a word's first cell."""

    ordinal: int
    orientation: Orientation


@dataclass
class GridCell:
    """A lettered grid cell with the words covering it."""

    letter: str
    member_ordinals: Set[int] = field(default_factory=set)
    labels: List[CellLabel] = field(default_factory=list)


@dataclass
class PlacedWord:
    """A puzzle word with its accepted position on the grid."""

    word: PuzzleWord
    start_row: int
    start_col: int
    orientation: Orientation
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def ordinal(self) -> int:
        return self.word.ordinal

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            dr, dc = self.orientation.step
            self._cells = [
                (self.start_row + dr * i, self.start_col + dc * i)
                for i in range(len(self.word.normalized))
            ]
        return self._cells


@dataclass(frozen=True)
class Bounds:
    """Bounding box of all occupied cells, inclusive on both ends."""

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def height(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1

    def contains(self, row: int, col: int) -> bool:
        return self.min_row <= row <= self.max_row and self.min_col <= col <= self.max_col
