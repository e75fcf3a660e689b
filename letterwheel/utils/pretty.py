"""Pretty-print helpers for letter wheel grids and sessions."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..engine.layout import CrosswordLayout
    from ..engine.session import GameSession


HIDDEN = "_"
BLANK = "."


def format_grid(layout: CrosswordLayout, session: Optional[GameSession] = None) -> str:
    """Render the occupied bounding box; with a session, unfound cells are hidden."""

    bounds = layout.bounds
    if bounds is None:
        return ""
    header_cells = [f"{c:>2}" for c in range(bounds.min_col, bounds.max_col + 1)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * bounds.width - 1))
    for r in range(bounds.min_row, bounds.max_row + 1):
        row_cells: List[str] = []
        for c in range(bounds.min_col, bounds.max_col + 1):
            cell = layout.cell(r, c)
            if cell is None:
                row_cells.append(BLANK)
            elif session is not None and not session.is_revealed(r, c):
                row_cells.append(HIDDEN)
            else:
                row_cells.append(cell.letter)
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_wheel(session: GameSession) -> str:
    letters = "  ".join(f"{letter}[{position}]" for position, letter in session.wheel_letters)
    return f"Wheel: {letters}\nWord:  {session.current_word or '-'}"


def format_hints(session: GameSession) -> str:
    lines = []
    for hint in session.hints():
        marker = "*" if hint.ordinal == 0 else f"{hint.ordinal}"
        answer = f"  -> {hint.answer}" if hint.found else f"  ({hint.length} letras)"
        lines.append(f"{marker:>2}. {hint.clue}{answer}")
    return "\n".join(lines)


def pretty_print_grid(
    layout: CrosswordLayout,
    session: Optional[GameSession] = None,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print the crossword grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(layout, session), file=stream)


def print_session_stats(session: GameSession, *, stream=None) -> None:
    """Print grid + puzzle stats for a session."""

    stream = stream or sys.stdout
    layout = session.layout
    print(format_grid(layout, session), file=stream)

    bounds = layout.bounds
    lengths = [len(word.normalized) for word in session.puzzle.target_words]
    length_dist = Counter(lengths)
    found, total = session.progress()

    print(file=stream)
    print("--- Puzzle ---", file=stream)
    print(f"  Base word:     {len(session.puzzle.base_word.normalized)} letters", file=stream)
    if session.puzzle.date:
        print(f"  Date:          {session.puzzle.date}", file=stream)
    if bounds is not None:
        print(f"  Grid:          {bounds.height} x {bounds.width} ({len(layout.cells)} letters)", file=stream)
    print(f"  Target words:  {len(lengths)}", file=stream)
    if layout.dropped:
        print(f"  Dropped:       {len(layout.dropped)}", file=stream)
    if lengths:
        dist_parts = [f"{length}:{count}" for length, count in sorted(length_dist.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
    print(f"  Found:         {found}/{total}", file=stream)
