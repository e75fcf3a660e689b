"""Deterministic rule validation for generated crossword layouts."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import List

from ..core.exceptions import ValidationError
from .layout import CrosswordLayout
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LayoutValidator:
    """Runs the placement legality checks over a finished layout."""

    def validate(self, layout: CrosswordLayout) -> ValidationResult:
        try:
            self._check_spelling(layout)
            self._check_shared_cells(layout)
            self._check_lateral_neighbours(layout)
            self._check_end_spacing(layout)
            self._check_connected(layout)
        except ValidationError as exc:
            LOGGER.error("Layout validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_spelling(self, layout: CrosswordLayout) -> None:
        for placed in layout.placed:
            spelled = "".join(layout.letter_at(row, col) or "?" for row, col in placed.cells)
            if spelled != placed.word.normalized:
                raise ValidationError(
                    f"Word #{placed.ordinal} reads {spelled!r}, expected {placed.word.normalized!r}"
                )
            for row, col in placed.cells:
                if placed.ordinal not in layout.cells[(row, col)].member_ordinals:
                    raise ValidationError(f"Cell {(row, col)} does not list word #{placed.ordinal}")

    def _check_shared_cells(self, layout: CrosswordLayout) -> None:
        for first, second in combinations(layout.placed, 2):
            shared = set(first.cells) & set(second.cells)
            if len(shared) > 1:
                raise ValidationError(
                    f"Words #{first.ordinal} and #{second.ordinal} share {len(shared)} cells"
                )
            if shared and first.orientation == second.orientation:
                raise ValidationError(
                    f"Parallel words #{first.ordinal} and #{second.ordinal} overlap"
                )

    def _check_lateral_neighbours(self, layout: CrosswordLayout) -> None:
        for placed in layout.placed:
            for row, col in placed.cells:
                if len(layout.cells[(row, col)].member_ordinals) > 1:
                    continue
                for dr, dc in placed.orientation.lateral_steps:
                    if layout.is_occupied(row + dr, col + dc):
                        raise ValidationError(
                            f"Word #{placed.ordinal} touches a neighbour at {(row + dr, col + dc)}"
                        )

    def _check_end_spacing(self, layout: CrosswordLayout) -> None:
        for placed in layout.placed:
            dr, dc = placed.orientation.step
            first_row, first_col = placed.cells[0]
            last_row, last_col = placed.cells[-1]
            for row, col in ((first_row - dr, first_col - dc), (last_row + dr, last_col + dc)):
                if layout.is_occupied(row, col):
                    raise ValidationError(f"Word #{placed.ordinal} abuts a letter at {(row, col)}")

    def _check_connected(self, layout: CrosswordLayout) -> None:
        for placed in layout.placed[1:]:
            if not any(len(layout.cells[coord].member_ordinals) > 1 for coord in placed.cells):
                raise ValidationError(f"Word #{placed.ordinal} does not cross any other word")
