#!/usr/bin/env python3
"""Basic usage example for SpellCards."""

import random

from spellcards import SpellingScheduler, summarize_session
from spellcards.core import get_current_word


def main() -> None:
    """Walk through a short session with the scheduling engine."""
    print("🚀 SpellCards Basic Usage Example")
    print("=" * 50)

    scheduler = SpellingScheduler(random.Random(2024))
    session = scheduler.start_session(
        ["rocket", "moon", {"text": "étoile", "prompt": "star (French)"}],
        language="fr-FR",
        ignore_accents=True,
    )
    print("\n📝 Queue:", ", ".join(word.text for word in session.pending))

    # Miss the first word, then get everything else right.
    missed = get_current_word(session)
    print(f"\n❌ Missed: {missed.text}")
    session = scheduler.incorrect_answer(session, missed.id)
    print("   Queue:", ", ".join(word.text for word in session.pending))

    while session.pending:
        word = get_current_word(session)
        session = scheduler.correct_answer(session, word.id)
        print(f"✅ Correct: {word.text} (pending: {len(session.pending)})")

    summary = summarize_session(session)
    print(f"\n📊 Result: {summary.percentage}% {summary.badge}")
    for result in summary.results:
        print(f"   {result.word.text}: {result.score}")


if __name__ == "__main__":
    main()
