"""Vocabulary loading and per-difficulty caching."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import requests

from ..core.constants import Difficulty
from ..core.exceptions import VocabularyLoadError
from ..core.models import VocabularyEntry
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_DATA_DIR = Path("data/vocabularios")
DEFAULT_FILENAME = "vocabulario-rueda-{difficulty}.json"

_WORD_KEYS = ("palabra", "word")
_CLUE_KEYS = ("pistas", "clue")


@dataclass
class VocabularyConfig:
    """Where the per-difficulty word lists live.

    ``base_url`` takes precedence over ``data_dir`` when both are set.
    """

    data_dir: Path | str = DEFAULT_DATA_DIR
    base_url: Optional[str] = None
    filename_template: str = DEFAULT_FILENAME
    timeout_seconds: float = 10.0

    def filename(self, difficulty: Difficulty) -> str:
        return self.filename_template.format(difficulty=difficulty.value)


def parse_entries(payload: Any) -> List[VocabularyEntry]:
    """Turn a decoded JSON payload into vocabulary entries.

    Accepts a list of ``{"palabra", "pistas"}`` or ``{"word", "clue"}``
    records, a list of bare strings, or an object wrapping either under
    ``"words"``. Records without a usable word are skipped.
    """

    if isinstance(payload, dict):
        payload = payload.get("words", [])
    if not isinstance(payload, list):
        raise VocabularyLoadError(f"Expected a JSON list, got {type(payload).__name__}")

    entries: List[VocabularyEntry] = []
    for item in payload:
        if isinstance(item, str):
            word, clue = item, ""
        elif isinstance(item, dict):
            word = _first_string(item, _WORD_KEYS)
            clue = _first_string(item, _CLUE_KEYS)
        else:
            continue
        word = word.strip()
        if not word:
            continue
        entries.append(VocabularyEntry(word=word, clue=clue.strip()))
    return entries


def _first_string(record: Dict[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        value = record.get(key)
        if isinstance(value, str):
            return value
    return ""


class VocabularyLoader:
    """Loads word lists once per difficulty and keeps them for the session."""

    def __init__(self, config: Optional[VocabularyConfig] = None) -> None:
        self.config = config or VocabularyConfig()
        self._cache: Dict[Difficulty, List[VocabularyEntry]] = {}

    def load(self, difficulty: Difficulty | str) -> List[VocabularyEntry]:
        """Return the vocabulary for ``difficulty``; an empty list when it cannot be fetched."""

        level = Difficulty(difficulty)
        cached = self._cache.get(level)
        if cached is not None:
            return cached

        try:
            entries = parse_entries(self._fetch(level))
        except VocabularyLoadError as exc:
            LOGGER.warning("Could not load vocabulary for %s: %s", level.value, exc)
            return []

        LOGGER.info("Loaded %d words for %s", len(entries), level.value)
        self._cache[level] = entries
        return entries

    def clear(self) -> None:
        self._cache.clear()

    def _fetch(self, difficulty: Difficulty) -> Any:
        filename = self.config.filename(difficulty)
        if self.config.base_url:
            return self._fetch_remote(f"{self.config.base_url.rstrip('/')}/{filename}")
        return self._fetch_local(Path(self.config.data_dir) / filename)

    def _fetch_remote(self, url: str) -> Any:
        try:
            response = requests.get(url, timeout=self.config.timeout_seconds)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise VocabularyLoadError(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise VocabularyLoadError(f"Malformed JSON from {url}") from exc

    @staticmethod
    def _fetch_local(path: Path) -> Any:
        if not path.exists():
            raise VocabularyLoadError(f"Missing vocabulary file: {path}")
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise VocabularyLoadError(f"Unreadable vocabulary file {path}: {exc}") from exc
