"""Scoring of completed words and session summaries."""

from functools import cmp_to_key
from typing import Iterable, List, Tuple

from pydantic import BaseModel, Field

from .core import Session, WordState

MAX_WORD_SCORE = 100
FIRST_MISS_SCORE = 75
MISS_PENALTY = 25
MIN_MISSED_SCORE = 10


def calculate_word_score(word: WordState) -> int:
    """Scores a word from 0 to 100.

    A skipped word scores 0 and a word never missed scores 100. Otherwise the
    score starts at 75 for the first miss and drops by 25 per further miss,
    but never below 10.
    """
    if word.skipped:
        return 0
    if word.incorrect_count > 0:
        return max(
            FIRST_MISS_SCORE - (word.incorrect_count - 1) * MISS_PENALTY,
            MIN_MISSED_SCORE,
        )
    return MAX_WORD_SCORE


def _sort_key(word: WordState) -> Tuple[int, int, str, str, str]:
    return (
        -calculate_word_score(word),
        word.incorrect_count,
        word.text.casefold(),
        word.text,
        word.id,
    )


def compare_word_scores(a: WordState, b: WordState) -> int:
    """Orders words best first.

    Higher scores come first, then fewer misses, then the word text ignoring
    case, then the exact text. The id breaks any remaining tie so that
    distinct words never compare equal.

    Returns:
        A negative number if a ranks before b, positive if after, 0 if a is b.
    """
    key_a, key_b = _sort_key(a), _sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def rank_words(words: Iterable[WordState]) -> List[WordState]:
    return sorted(words, key=cmp_to_key(compare_word_scores))


def _badge(percentage: int) -> str:
    if percentage == 100:
        return "🏆"
    if percentage >= 80:
        return "🌟"
    if percentage >= 60:
        return "👍"
    return "💪"


class WordResult(BaseModel):
    """A completed word with its score, as shown on the results screen."""

    word: WordState
    score: int


class SessionSummary(BaseModel):
    """Final result of a session.

    Attributes:
        total_score: Sum of the completed words' scores.
        possible_score: 100 per completed word.
        percentage: Rounded share of the possible score, 0 if nothing was completed.
        badge: Emoji matching the percentage.
        results: Completed words, best first.
    """

    total_score: int = Field(..., description="Points earned")
    possible_score: int = Field(..., description="Points available")
    percentage: int = Field(..., description="Score as a rounded percentage")
    badge: str = Field(..., description="Emoji for the percentage")
    results: List[WordResult] = Field(default_factory=list)


def summarize_session(session: Session) -> SessionSummary:
    """Scores the completed words of a session."""
    total = sum(calculate_word_score(word) for word in session.completed)
    possible = MAX_WORD_SCORE * len(session.completed)
    # Halves round up.
    percentage = (200 * total + possible) // (2 * possible) if possible else 0

    return SessionSummary(
        total_score=total,
        possible_score=possible,
        percentage=percentage,
        badge=_badge(percentage),
        results=[
            WordResult(word=word, score=calculate_word_score(word))
            for word in rank_words(session.completed)
        ],
    )
