"""Command-line interface for SpellCards."""

import argparse
import logging
import sys
import time
from typing import Optional

from pydantic import ValidationError

from .config import Settings, load_settings
from .core import SessionStatus
from .drill import FEEDBACK_DELAY_SECONDS, SpellingDrill
from .exceptions import InvalidInputError
from .languages import LANGUAGES
from .speech import AudioFileStore, SpeechServiceFactory

REPLAY_COMMAND = "?"
SKIP_COMMAND = "!skip"


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="SpellCards: spelling drills with spaced repetition of missed words"
    )
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Practice command
    practice_parser = subparsers.add_parser("practice", help="Run a drill in the terminal")
    practice_parser.add_argument(
        "file", nargs="?", help="Word list, one word per line (word|prompt allowed)"
    )
    practice_parser.add_argument("--language", help="Language code, e.g. fr-FR")
    practice_parser.add_argument(
        "--ignore-accents", action="store_true", default=None, help="Ignore accents and case"
    )
    practice_parser.add_argument("--seed", type=int, help="Seed for the word order")
    practice_parser.add_argument(
        "--speech",
        choices=SpeechServiceFactory.get_available_services(),
        help="Speech service used to read words aloud",
    )

    # Languages command
    subparsers.add_parser("languages", help="List available languages")

    # Demo command
    subparsers.add_parser("demo", help="Launch the web interface")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"Invalid settings in the environment:\n{e}", file=sys.stderr)
        sys.exit(2)

    if args.command == "practice":
        practice(settings, args.file, args.language, args.ignore_accents, args.seed, args.speech)
    elif args.command == "languages":
        list_languages()
    elif args.command == "demo":
        from .demo import main as demo_main

        demo_main()
    else:
        parser.print_help()
        sys.exit(1)


def read_words(path: Optional[str]) -> str:
    """Reads the word list from a file, or asks for it interactively."""
    if path:
        with open(path, encoding="utf-8") as f:
            return f.read()

    print("Enter your spelling words, one per line. Finish with an empty line.")
    print("Leave the list empty to use the default words.")
    lines = []
    while True:
        try:
            line = input()
        except EOFError:
            break
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines)


def practice(
    settings: Settings,
    path: Optional[str],
    language: Optional[str],
    ignore_accents: Optional[bool],
    seed: Optional[int],
    speech: Optional[str],
) -> None:
    """Runs a spelling drill in the terminal."""
    speech_service = SpeechServiceFactory.create_service(
        speech or settings.speech_service, api_key=settings.openai_api_key
    )
    drill = SpellingDrill.with_seed(
        seed if seed is not None else settings.seed,
        speech_service=speech_service,
        language=settings.language,
        ignore_accents=settings.ignore_accents,
    )

    try:
        drill.start(read_words(path), language=language, ignore_accents=ignore_accents)
    except InvalidInputError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"\n{drill.progress.remaining} words to learn. "
          f"Type '{REPLAY_COMMAND}' to hear the word again, '{SKIP_COMMAND}' to skip it.")
    characters = drill.keyboard_characters()
    if characters:
        print(f"Special characters: {' '.join(characters)}")

    audio_files = AudioFileStore()
    try:
        run_drill(drill, audio_files)
    finally:
        audio_files.close()


def run_drill(drill: SpellingDrill, audio_files: AudioFileStore) -> None:
    """Asks for each pending word until the drill is finished."""
    while drill.status is SessionStatus.LEARNING:
        word = drill.current_word
        progress = drill.progress
        print(f"\n--- To do: {progress.remaining} | Done: {progress.completed} ---")
        print(word.prompt if word.prompt else "Type what you hear!")
        if drill.needs_speech():
            play(audio_files, drill.speak_current())

        while True:
            try:
                answer = input("Type it again: " if drill.retrying else "Your answer: ")
            except EOFError:
                print()
                return

            if answer.strip() == REPLAY_COMMAND:
                print(f"({word.prompt})" if word.prompt else "")
                play(audio_files, drill.speak_current())
                continue
            if answer.strip() == SKIP_COMMAND:
                drill.skip()
                print(f"Skipped. The word was: {word.text}")
                break

            feedback = drill.submit_answer(answer)
            if not feedback.accepted:
                continue
            if feedback.is_correct:
                print("Correct! 🎉")
                time.sleep(FEEDBACK_DELAY_SECONDS)
                break
            print("Try again! 🙈")
            print(f"  expected: {feedback.expected}")
            print(f"  you typed: {feedback.answer}")
            play(audio_files, drill.speak_current())

    show_results(drill)


def play(audio_files: AudioFileStore, audio: Optional[bytes]) -> None:
    """Saves synthesized speech, replacing the previous clip, and prints its path."""
    if not audio:
        return
    print(f"(listen: {audio_files.write(audio)})")


def show_results(drill: SpellingDrill) -> None:
    """Prints the summary of a finished drill."""
    summary = drill.summary()

    print(f"\n=== Mission Complete! {summary.badge} ===")
    print(f"Score: {summary.total_score} / {summary.possible_score} ({summary.percentage}%)")
    for result in summary.results:
        word = result.word
        note = ""
        if word.skipped:
            note = " (skipped)"
        elif word.incorrect_count:
            note = f" ({word.incorrect_count} mistakes)"
        print(f"  {word.text}: {result.score}{note}")


def list_languages() -> None:
    """Prints the language catalog."""
    print("=== Languages ===")
    for language in LANGUAGES:
        print(f"  {language.code:<6} {language.flag} {language.name}")


if __name__ == "__main__":
    main()
