"""SpellCards: spelling drills that bring missed words back until they stick."""

__version__ = "0.1.0"

from .core import Session, SessionStatus, SpellingScheduler, Word, WordState
from .drill import SpellingDrill
from .exceptions import InvalidInputError, SpellCardsError, WordNotFoundError
from .score import calculate_word_score, compare_word_scores, summarize_session
from .speech import OpenAISpeechService, SilentSpeechService, SpeechService
from .text import answers_match, normalize, parse_word_list

__all__ = [
    "Session",
    "SessionStatus",
    "SpellingScheduler",
    "Word",
    "WordState",
    "SpellingDrill",
    "SpellCardsError",
    "InvalidInputError",
    "WordNotFoundError",
    "calculate_word_score",
    "compare_word_scores",
    "summarize_session",
    "SpeechService",
    "OpenAISpeechService",
    "SilentSpeechService",
    "answers_match",
    "normalize",
    "parse_word_list",
]
