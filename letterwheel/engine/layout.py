"""Crossword layout for the letter wheel puzzle.

The base word seeds the grid horizontally; every target word is then placed
greedily at the first spot where it crosses exactly one existing letter
without touching any other word. Words with no legal spot are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from ..core.constants import BASE_COL, BASE_ROW, Orientation
from ..core.exceptions import PlacementError
from ..core.models import Bounds, CellLabel, GridCell, PlacedWord, Puzzle, PuzzleWord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Coord = Tuple[int, int]


@dataclass
class LayoutConfig:
    """Anchor of the base word; coordinates are free to go negative."""

    base_row: int = BASE_ROW
    base_col: int = BASE_COL


class CrosswordLayout:
    """Sparse grid of lettered cells plus the words placed on it."""

    def __init__(self) -> None:
        self.cells: Dict[Coord, GridCell] = {}
        self.placed: List[PlacedWord] = []
        self.dropped: List[PuzzleWord] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_occupied(self, row: int, col: int) -> bool:
        return (row, col) in self.cells

    def letter_at(self, row: int, col: int) -> Optional[str]:
        cell = self.cells.get((row, col))
        return cell.letter if cell else None

    def cell(self, row: int, col: int) -> Optional[GridCell]:
        return self.cells.get((row, col))

    def cells_of(self, ordinal: int) -> List[Coord]:
        """Coordinates covered by ``ordinal`` in reading order."""

        for placed in self.placed:
            if placed.ordinal == ordinal:
                return list(placed.cells)
        return []

    @property
    def placed_ordinals(self) -> List[int]:
        return [placed.ordinal for placed in self.placed]

    @property
    def bounds(self) -> Optional[Bounds]:
        if not self.cells:
            return None
        rows = [row for row, _ in self.cells]
        cols = [col for _, col in self.cells]
        return Bounds(min_row=min(rows), max_row=max(rows), min_col=min(cols), max_col=max(cols))

    # ------------------------------------------------------------------
    # Placement rules
    # ------------------------------------------------------------------
    def can_place(self, word: str, start_row: int, start_col: int, orientation: Orientation) -> bool:
        """Check a candidate placement against the crossword rules.

        At most one overlap with an occupied cell, and its letter must match.
        Empty cells the word would fill need empty lateral neighbours, and
        the cells just before and after the word must be empty. Once the grid
        holds anything, the word must cross it exactly once.
        """

        dr, dc = orientation.step
        intersections = 0
        for index, letter in enumerate(word):
            row, col = start_row + dr * index, start_col + dc * index
            existing = self.letter_at(row, col)
            if existing is not None:
                if existing != letter:
                    return False
                intersections += 1
                if intersections > 1:
                    return False
                continue
            for lr, lc in orientation.lateral_steps:
                if self.is_occupied(row + lr, col + lc):
                    return False

        if self.is_occupied(start_row - dr, start_col - dc):
            return False
        if self.is_occupied(start_row + dr * len(word), start_col + dc * len(word)):
            return False

        if self.cells and intersections != 1:
            return False
        return True

    def place(self, word: PuzzleWord, start_row: int, start_col: int, orientation: Orientation) -> PlacedWord:
        """Stamp ``word`` onto the grid, merging into shared cells."""

        placed = PlacedWord(word=word, start_row=start_row, start_col=start_col, orientation=orientation)
        for (row, col), letter in zip(placed.cells, word.normalized):
            existing = self.letter_at(row, col)
            if existing is not None and existing != letter:
                raise PlacementError(
                    f"Letter conflict for {word.normalized} at {(row, col)}: {existing} != {letter}"
                )

        for index, ((row, col), letter) in enumerate(zip(placed.cells, word.normalized)):
            cell = self.cells.get((row, col))
            if cell is None:
                cell = GridCell(letter=letter)
                self.cells[(row, col)] = cell
            cell.member_ordinals.add(word.ordinal)
            if index == 0:
                cell.labels.append(CellLabel(ordinal=word.ordinal, orientation=orientation))

        self.placed.append(placed)
        return placed

    def candidate_placements(self, word: str) -> Iterator[Tuple[int, int, Orientation]]:
        """Placements aligning a letter of ``word`` on an occupied cell.

        Cells are visited in insertion order; for each matching letter the
        horizontal placement is offered before the vertical one.
        """

        for (row, col), cell in list(self.cells.items()):
            for index, letter in enumerate(word):
                if letter != cell.letter:
                    continue
                yield row, col - index, Orientation.HORIZONTAL
                yield row - index, col, Orientation.VERTICAL

    def try_place(self, word: PuzzleWord) -> Optional[PlacedWord]:
        """Place ``word`` at its first legal crossing, or return ``None``."""

        for start_row, start_col, orientation in self.candidate_placements(word.normalized):
            if self.can_place(word.normalized, start_row, start_col, orientation):
                LOGGER.debug(
                    "Placing %s #%d at (%d,%d) %s",
                    word.normalized,
                    word.ordinal,
                    start_row,
                    start_col,
                    orientation.value,
                )
                return self.place(word, start_row, start_col, orientation)
        return None

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> dict:
        bounds = self.bounds
        return {
            "bounds": (
                {
                    "min_row": bounds.min_row,
                    "max_row": bounds.max_row,
                    "min_col": bounds.min_col,
                    "max_col": bounds.max_col,
                }
                if bounds
                else None
            ),
            "cells": [
                {
                    "row": row,
                    "col": col,
                    "letter": cell.letter,
                    "words": sorted(cell.member_ordinals),
                    "labels": [
                        {"number": label.ordinal, "direction": label.orientation.value}
                        for label in cell.labels
                    ],
                }
                for (row, col), cell in self.cells.items()
            ],
            "placed": [
                {
                    "number": placed.ordinal,
                    "word": placed.word.normalized,
                    "row": placed.start_row,
                    "col": placed.start_col,
                    "direction": placed.orientation.value,
                }
                for placed in self.placed
            ],
            "dropped": [word.normalized for word in self.dropped],
        }


def build_layout(puzzle: Puzzle, config: Optional[LayoutConfig] = None) -> CrosswordLayout:
    """Lay out ``puzzle``: base word first, then targets in ordinal order."""

    config = config or LayoutConfig()
    layout = CrosswordLayout()
    layout.place(puzzle.base_word, config.base_row, config.base_col, Orientation.HORIZONTAL)

    for word in sorted(puzzle.target_words, key=lambda w: w.ordinal):
        if layout.try_place(word) is None:
            LOGGER.info("No crossing found for %s #%d; dropping it", word.normalized, word.ordinal)
            layout.dropped.append(word)

    LOGGER.info(
        "Layout placed %d of %d target words",
        len(layout.placed) - 1,
        len(puzzle.target_words),
    )
    return layout
