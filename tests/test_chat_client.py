import json
import os
import random
import unittest
from unittest.mock import MagicMock, patch

import requests

from letterwheel.core.exceptions import ChatError
from letterwheel.core.models import Puzzle, PuzzleWord, VocabularyEntry
from letterwheel.engine.layout import build_layout
from letterwheel.engine.session import GameSession
from letterwheel.io.chat_client import ChatClient, Persona, exercise_for_session


ENV = {"LETTERWHEEL_CHAT_API_KEY": "secret"}


def ok_response(payload) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    return response


class ChatClientTests(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_missing_api_key_raises(self) -> None:
        with self.assertRaises(ChatError):
            ChatClient()

    @patch.dict(os.environ, {**ENV, "LETTERWHEEL_CHAT_MODEL": "tiny-model"}, clear=True)
    def test_model_can_be_overridden_from_environment(self) -> None:
        self.assertEqual(ChatClient().model_name, "tiny-model")

    @patch.dict(os.environ, ENV, clear=True)
    @patch("letterwheel.io.chat_client.requests.post")
    def test_send_posts_chat_completion(self, mock_post: MagicMock) -> None:
        mock_post.return_value = ok_response(
            {"choices": [{"message": {"content": " ¡Piensa en un animal! 🐾 "}}]}
        )
        client = ChatClient()
        reply = client.send("Dame una pista", exercise={"pendientes": 2})

        self.assertEqual(reply, "¡Piensa en un animal! 🐾")
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], ChatClient.DEFAULT_URL)
        self.assertEqual(kwargs["headers"], {"Authorization": "Bearer secret"})
        payload = kwargs["json"]
        self.assertEqual(payload["model"], "llama-3.3-70b-versatile")
        self.assertEqual(payload["max_tokens"], 200)
        self.assertEqual([m["role"] for m in payload["messages"]], ["system", "user"])
        self.assertEqual(payload["messages"][1]["content"], "Dame una pista")
        self.assertIn('"pendientes": 2', payload["messages"][0]["content"])

    @patch.dict(os.environ, ENV, clear=True)
    @patch("letterwheel.io.chat_client.requests.post")
    def test_empty_message_is_rejected_before_request(self, mock_post: MagicMock) -> None:
        with self.assertRaises(ChatError):
            ChatClient().send("   ")
        mock_post.assert_not_called()

    @patch.dict(os.environ, ENV, clear=True)
    @patch("letterwheel.io.chat_client.requests.post")
    def test_http_error_becomes_chat_error(self, mock_post: MagicMock) -> None:
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        mock_post.return_value = response
        with self.assertRaises(ChatError):
            ChatClient().send("hola")

    @patch.dict(os.environ, ENV, clear=True)
    @patch("letterwheel.io.chat_client.requests.post")
    def test_reply_without_content_becomes_chat_error(self, mock_post: MagicMock) -> None:
        mock_post.return_value = ok_response({"choices": [{"message": {}}]})
        with self.assertRaises(ChatError):
            ChatClient().send("hola")

    def test_lobby_prompt_lists_the_games(self) -> None:
        prompt = ChatClient.render_system_prompt(Persona.LOBBY)
        self.assertIn("La Rueda de Letras", prompt)
        self.assertIn("REGLA DE IDIOMA", prompt)

    def test_game_prompt_without_exercise(self) -> None:
        prompt = ChatClient.render_system_prompt("game", context="Rueda de letras")
        self.assertIn("Contexto: Rueda de letras", prompt)
        self.assertIn("Sin ejercicio específico", prompt)


class ExerciseTests(unittest.TestCase):
    def test_exercise_never_contains_unfound_answers(self) -> None:
        puzzle = Puzzle(
            base_word=PuzzleWord(VocabularyEntry("perro", "Animal que ladra"), "PERRO", 0),
            target_words=(
                PuzzleWord(VocabularyEntry("ero", "Planta leguminosa"), "ERO", 1),
                PuzzleWord(VocabularyEntry("pero", "Conjunción adversativa"), "PERO", 2),
            ),
        )
        session = GameSession(puzzle, build_layout(puzzle), rng=random.Random(0))
        session.submit("pero")

        exercise = exercise_for_session(session)
        self.assertEqual(exercise["encontradas"], ["PERO"])
        self.assertEqual([p["numero"] for p in exercise["pendientes"]], [0, 1])
        self.assertEqual(exercise["letras"], ["E", "O", "P", "R", "R"])
        dumped = json.dumps(exercise["pendientes"], ensure_ascii=False)
        self.assertNotIn("PERRO", dumped)
        self.assertNotIn("ERO", dumped)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
