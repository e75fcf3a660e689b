"""HTTP client for the chat companion that gives players hints.

The companion is a hosted, OpenAI-compatible chat-completion endpoint. The
client only sends the persona prompt and the player's message; keeping the
model to hints rather than answers is the prompt's job.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import requests

from ..core.exceptions import ChatError
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..engine.session import GameSession


LOGGER = get_logger(__name__)


class Persona(str, Enum):
    LOBBY = "lobby"
    GAME = "game"


LANGUAGE_RULE = (
    "REGLA DE IDIOMA: detecta el idioma del mensaje del usuario. "
    "Si escribe en español responde solo en español; si escribe en inglés responde solo en inglés. "
    "Nunca mezcles idiomas en una misma respuesta."
)

LOBBY_PROMPT = (
    "Eres Cobi, un panda simpático 🐾 que recibe a los jugadores en la sala de juegos "
    "de un sitio para aprender español. Eres entusiasta, cercano y breve.\n"
    "{language_rule}\n"
    "Si el usuario no sabe a qué jugar, recomienda uno de estos juegos:\n"
    "- Adivina la Palabra: vocabulario rápido al estilo Wordle.\n"
    "- Constructor de Frases: ordena las palabras para formar frases.\n"
    "- El Poder de los Verbos: conjugaciones para defender el castillo.\n"
    "- La Rueda de Letras: forma palabras y completa el crucigrama.\n"
    "- Maestro de Verbos: conjugaciones contra reloj.\n"
    "Si el usuario practica español, responde de forma sencilla y corrige con suavidad.\n"
    "Responde como máximo en dos oraciones."
)

GAME_PROMPT = (
    "Eres Cobi, un panda paciente 🐾 que ayuda a estudiantes de español.\n"
    "{language_rule}\n"
    "Nunca des la respuesta directa: da pistas para que el estudiante la descubra "
    "y celebra sus intentos.\n"
    "Contexto: {context}\n"
    "Ejercicio: {exercise}\n"
    "Responde como máximo en tres oraciones."
)


class ChatClient:
    """Minimal client around an OpenAI-compatible chat-completion API."""

    DEFAULT_URL = "https://api.groq.com/openai/v1/chat/completions"

    def __init__(
        self,
        model_name: str = "llama-3.3-70b-versatile",
        api_key_env: str = "LETTERWHEEL_CHAT_API_KEY",
        model_env: str = "LETTERWHEEL_CHAT_MODEL",
        url_env: str = "LETTERWHEEL_CHAT_URL",
        timeout_seconds: float = 30.0,
        temperature: float = 0.9,
        max_tokens: int = 200,
    ) -> None:
        self.model_name = os.environ.get(model_env, model_name)
        self.url = os.environ.get(url_env, self.DEFAULT_URL)
        self.api_key_env = api_key_env
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._api_key = os.environ.get(api_key_env)
        if not self._api_key:
            raise ChatError(f"Missing chat API key in environment variable {self.api_key_env}")

    def send(
        self,
        message: str,
        *,
        persona: Persona | str = Persona.GAME,
        context: str = "Guía general",
        exercise: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send the player's message and return the companion's reply."""

        if not message or not message.strip():
            raise ChatError("Empty message: tell Cobi something first")

        payload = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": self.render_system_prompt(persona, context, exercise)},
                {"role": "user", "content": message},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        try:
            response = requests.post(
                self.url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=payload,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise ChatError(f"Chat request failed: {exc}") from exc
        except ValueError as exc:
            raise ChatError("Chat response is not JSON") from exc

        text = self._extract_text(data)
        if not text:
            LOGGER.warning("Chat response missing content: %s", data)
            raise ChatError("Chat response missing reply text")
        return text

    @staticmethod
    def render_system_prompt(
        persona: Persona | str,
        context: str = "Guía general",
        exercise: Optional[Dict[str, Any]] = None,
    ) -> str:
        if Persona(persona) is Persona.LOBBY:
            return LOBBY_PROMPT.format(language_rule=LANGUAGE_RULE)
        exercise_text = (
            json.dumps(exercise, ensure_ascii=False, indent=2) if exercise else "Sin ejercicio específico"
        )
        return GAME_PROMPT.format(language_rule=LANGUAGE_RULE, context=context, exercise=exercise_text)

    @staticmethod
    def _extract_text(payload: Dict[str, Any]) -> Optional[str]:
        choices: List[Dict[str, Any]] = payload.get("choices") or []
        for choice in choices:
            message = choice.get("message") or {}
            text = message.get("content")
            if text:
                return text.strip()
        return None


def exercise_for_session(session: "GameSession") -> Dict[str, Any]:
    """Describe the unsolved part of a letter wheel game without leaking answers."""

    return {
        "juego": "La Rueda de Letras",
        "letras": sorted(session.puzzle.base_word.normalized),
        "encontradas": [hint.answer for hint in session.hints() if hint.found],
        "pendientes": [
            {"numero": hint.ordinal, "pista": hint.clue, "letras": hint.length}
            for hint in session.hints()
            if not hint.found
        ],
    }
