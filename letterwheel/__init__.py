"""Letter wheel: a daily Spanish word puzzle with a crossword reveal.

This package exposes the public API surface via:

- ``letterwheel.engine.session.GameSession``: selects, lays out and plays a puzzle.
- ``letterwheel.engine.selector.WordSelector``: picks the base and target words.
- ``letterwheel.engine.layout.build_layout``: places the words on a crossword grid.
- ``letterwheel.data.vocabulary.VocabularyLoader``: loads the per-level word lists.
"""

from .data.vocabulary import VocabularyConfig, VocabularyLoader
from .engine.layout import LayoutConfig, build_layout
from .engine.selector import SelectorConfig, WordSelector
from .engine.session import GameSession, SessionConfig, SubmitOutcome

__all__ = [
    "GameSession",
    "LayoutConfig",
    "SelectorConfig",
    "SessionConfig",
    "SubmitOutcome",
    "VocabularyConfig",
    "VocabularyLoader",
    "WordSelector",
    "build_layout",
]

__version__ = "0.1.0"
