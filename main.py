"""CLI entrypoint for the letter wheel puzzle."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date as Date
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from letterwheel.core.constants import Difficulty
from letterwheel.core.exceptions import ChatError, NoSuitablePuzzle
from letterwheel.data.vocabulary import DEFAULT_DATA_DIR, VocabularyConfig, VocabularyLoader
from letterwheel.engine.layout import LayoutConfig
from letterwheel.engine.selector import SelectorConfig
from letterwheel.engine.session import GameSession, SessionConfig, SubmitOutcome, SubmitResult
from letterwheel.io.chat_client import ChatClient, Persona, exercise_for_session
from letterwheel.utils.logger import configure_logging
from letterwheel.utils.pretty import format_hints, format_wheel, pretty_print_grid, print_session_stats


FEEDBACK = {
    SubmitOutcome.CORRECT: "¡Correcto!",
    SubmitOutcome.ALREADY_FOUND: "Ya encontraste esa palabra.",
    SubmitOutcome.INCORRECT: "No es una de las palabras.",
}
BASE_WORD_FOUND = "¡Excelente! ¡Encontraste la palabra base!"


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=Difficulty.A1.value,
        help="Vocabulary level",
    )
    common.add_argument(
        "--date",
        type=str,
        default=Date.today().isoformat(),
        help="Puzzle date (YYYY-MM-DD); the same date always gives the same puzzle",
    )
    common.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help="Directory holding vocabulario-rueda-<level>.json files",
    )
    common.add_argument("--base-url", type=str, help="Fetch the word lists from this URL instead")
    common.add_argument("--min-base-length", type=int, default=6, help="Shortest base word")
    common.add_argument("--max-base-length", type=int, default=10, help="Longest base word")
    common.add_argument("--seed", type=int, default=None, help="Seed for the wheel letter order")
    common.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    parser = argparse.ArgumentParser(description="Daily Spanish letter wheel crossword")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", parents=[common], help="Generate and print a puzzle")
    generate.add_argument("--json", action="store_true", help="Print the puzzle as JSON")
    generate.add_argument("--output", type=Path, help="Optional path to JSON output")
    generate.add_argument("--reveal", action="store_true", help="Show every letter of the grid")

    subparsers.add_parser("play", parents=[common], help="Play a puzzle in the terminal")
    return parser


def build_session(args: argparse.Namespace) -> GameSession:
    vocabulary = VocabularyLoader(VocabularyConfig(data_dir=args.data_dir, base_url=args.base_url))
    config = SessionConfig(
        selector=SelectorConfig(
            min_base_length=args.min_base_length,
            max_base_length=args.max_base_length,
        ),
        layout=LayoutConfig(),
        wheel_seed=args.seed,
    )
    return GameSession.start(vocabulary, args.difficulty, args.date, config)


def session_payload(session: GameSession) -> Dict[str, Any]:
    puzzle = session.puzzle
    return {
        "date": puzzle.date,
        "difficulty": puzzle.difficulty.value if puzzle.difficulty else None,
        "base_word": {"word": puzzle.base_word.entry.word, "normalized": puzzle.base_word.normalized},
        "target_words": [
            {
                "number": word.ordinal,
                "word": word.entry.word,
                "normalized": word.normalized,
                "clue": word.entry.clue,
            }
            for word in puzzle.target_words
        ],
        "layout": session.layout.to_jsonable(),
    }


def report(session: GameSession, result: SubmitResult, stdout: TextIO) -> None:
    if result.outcome is SubmitOutcome.CORRECT and result.word is not None and result.word.is_base:
        print(BASE_WORD_FOUND, file=stdout)
    else:
        print(FEEDBACK[result.outcome], file=stdout)
    if result.outcome is SubmitOutcome.CORRECT:
        pretty_print_grid(session.layout, session, stream=stdout)
    found, total = session.progress()
    print(f"{found}/{total}", file=stdout)
    if result.completed:
        print("¡Felicidades! Completaste el crucigrama.", file=stdout)


def spell(session: GameSession, letters: str, stdout: TextIO) -> bool:
    """Type ``letters`` on the wheel; on a missing letter the word is cleared."""

    for letter in letters:
        if session.type_letter(letter) is None:
            print(f"La letra {letter.upper()} no está disponible en la rueda.", file=stdout)
            session.clear_word()
            return False
    return True


def ask_companion(
    session: GameSession, message: str, chat: Optional[ChatClient], stdout: TextIO
) -> Optional[ChatClient]:
    try:
        chat = chat or ChatClient()
        reply = chat.send(
            message,
            persona=Persona.GAME,
            context="Rueda de letras",
            exercise=exercise_for_session(session),
        )
    except ChatError as exc:
        print(f"Cobi no está disponible: {exc}", file=stdout)
        return chat
    print(f"Cobi: {reply}", file=stdout)
    return chat


def play(
    session: GameSession,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
    chat: Optional[ChatClient] = None,
) -> None:
    """Terminal game loop.

    A word per line is spelled on the wheel and submitted. ``+letras`` spells
    without submitting, ``<`` removes the last letter, ``#`` clears the word,
    ``=`` submits it, ``?`` lists the clues, ``!`` shuffles the wheel and
    ``@mensaje`` asks Cobi for a hint. An empty line quits.
    """

    pretty_print_grid(session.layout, session, stream=stdout)
    print(format_wheel(session), file=stdout)
    for line in stdin:
        entry = line.strip()
        if not entry:
            break
        command, rest = entry[0], entry[1:].strip()
        if command == "?":
            print(format_hints(session), file=stdout)
            continue
        if command == "@":
            chat = ask_companion(session, rest, chat, stdout)
            continue
        if command in "!<#+":
            if command == "!":
                session.shuffle_wheel()
            elif command == "<":
                session.remove_last()
            elif command == "#":
                session.clear_word()
            else:
                spell(session, rest, stdout)
            print(format_wheel(session), file=stdout)
            continue

        if command != "=":
            session.clear_word()
            if not spell(session, entry, stdout):
                continue
        result = session.submit_current()
        if result is None:
            continue
        report(session, result, stdout)
        if result.completed:
            break


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        session = build_session(args)
    except NoSuitablePuzzle as exc:
        print(f"No se pudo generar el juego: {exc}", file=sys.stderr)
        return 1

    if args.command == "play":
        play(session)
        return 0

    if args.json or args.output:
        output_text = json.dumps(session_payload(session), ensure_ascii=False, indent=2)
        if args.output:
            args.output.write_text(output_text, encoding="utf-8")
        else:
            print(output_text)
        return 0

    if args.reveal:
        pretty_print_grid(session.layout)
    else:
        print_session_stats(session)
    print()
    print(format_wheel(session))
    print()
    print(format_hints(session))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
