import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from letterwheel.core.constants import Difficulty
from letterwheel.core.exceptions import VocabularyLoadError
from letterwheel.core.models import VocabularyEntry
from letterwheel.data.vocabulary import VocabularyConfig, VocabularyLoader, parse_entries


class ParseEntriesTests(unittest.TestCase):
    def test_spanish_and_english_keys(self) -> None:
        entries = parse_entries(
            [
                {"palabra": "casa", "pistas": "Lugar donde vives"},
                {"word": "mesa", "clue": "Mueble"},
            ]
        )
        self.assertEqual(
            entries,
            [VocabularyEntry("casa", "Lugar donde vives"), VocabularyEntry("mesa", "Mueble")],
        )

    def test_plain_strings_and_wrapped_lists(self) -> None:
        entries = parse_entries({"words": ["sol", "  ", {"pistas": "sin palabra"}, 7]})
        self.assertEqual(entries, [VocabularyEntry("sol", "")])

    def test_rejects_non_list_payload(self) -> None:
        with self.assertRaises(VocabularyLoadError):
            parse_entries("casa")


class VocabularyLoaderTests(unittest.TestCase):
    def _write(self, directory: str, level: str, payload) -> Path:
        path = Path(directory) / f"vocabulario-rueda-{level}.json"
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path

    def test_loads_local_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self._write(tmpdir, "a2", [{"palabra": "camión", "pistas": "Vehículo grande"}])
            loader = VocabularyLoader(VocabularyConfig(data_dir=tmpdir))
            entries = loader.load(Difficulty.A2)
            self.assertEqual(entries, [VocabularyEntry("camión", "Vehículo grande")])

    def test_accepts_difficulty_strings(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self._write(tmpdir, "b1", ["luz"])
            loader = VocabularyLoader(VocabularyConfig(data_dir=tmpdir))
            self.assertEqual(len(loader.load("b1")), 1)

    def test_result_is_cached_per_difficulty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write(tmpdir, "a1", ["casa"])
            loader = VocabularyLoader(VocabularyConfig(data_dir=tmpdir))
            first = loader.load("a1")
            path.write_text(json.dumps(["mesa", "silla"]), encoding="utf-8")
            self.assertEqual(loader.load("a1"), first)

            loader.clear()
            self.assertEqual(len(loader.load("a1")), 2)

    def test_missing_file_yields_empty_list(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            loader = VocabularyLoader(VocabularyConfig(data_dir=tmpdir))
            self.assertEqual(loader.load("b2"), [])

    def test_malformed_file_yields_empty_list(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "vocabulario-rueda-a1.json").write_text("{not json", encoding="utf-8")
            loader = VocabularyLoader(VocabularyConfig(data_dir=tmpdir))
            self.assertEqual(loader.load("a1"), [])

    def test_failed_load_is_not_cached(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            loader = VocabularyLoader(VocabularyConfig(data_dir=tmpdir))
            self.assertEqual(loader.load("a1"), [])
            self._write(tmpdir, "a1", ["casa"])
            self.assertEqual(len(loader.load("a1")), 1)

    @patch("letterwheel.data.vocabulary.requests.get")
    def test_loads_from_base_url(self, mock_get: MagicMock) -> None:
        response = MagicMock()
        response.json.return_value = [{"palabra": "gato", "pistas": "Animal que maúlla"}]
        mock_get.return_value = response

        loader = VocabularyLoader(VocabularyConfig(base_url="https://example.org/data/", timeout_seconds=3))
        entries = loader.load("a1")

        mock_get.assert_called_once_with(
            "https://example.org/data/vocabulario-rueda-a1.json", timeout=3
        )
        self.assertEqual(entries, [VocabularyEntry("gato", "Animal que maúlla")])

    @patch("letterwheel.data.vocabulary.requests.get")
    def test_remote_failure_yields_empty_list(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.ConnectionError("offline")
        loader = VocabularyLoader(VocabularyConfig(base_url="https://example.org"))
        self.assertEqual(loader.load("a1"), [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
