"""Session controller that turns learner input into scheduler calls."""

import logging
import random
from typing import Callable, Iterable, List, Optional, Union

from pydantic import BaseModel

from .core import (
    Progress,
    Session,
    SessionStatus,
    SpellingScheduler,
    WordInput,
    WordState,
    get_current_word,
    get_progress,
    get_status,
)
from .exceptions import WordNotFoundError
from .languages import DEFAULT_LANGUAGE_CODE, get_language
from .score import SessionSummary, summarize_session
from .speech import SilentSpeechService, SpeechService
from .text import (
    AnswerDiff,
    answers_match,
    diff_answer,
    parse_word_list,
    special_characters,
)

logger = logging.getLogger(__name__)

# Pause callers leave between a correct answer and the next word.
FEEDBACK_DELAY_SECONDS = 1.0


class AnswerFeedback(BaseModel):
    """Outcome of one submitted answer.

    Attributes:
        accepted: False when the answer was blank and not counted.
        is_correct: Whether the answer matched the current word.
        expected: The spelling that was asked for.
        answer: What the learner typed.
        diff: Character diff, present for wrong answers.
        completed: True when the word left the pending queue.
    """

    accepted: bool
    is_correct: bool = False
    expected: str = ""
    answer: str = ""
    diff: Optional[AnswerDiff] = None
    completed: bool = False


class SpellingDrill:
    """Runs one learner's drill.

    A wrong answer keeps the word on screen until the learner types it
    correctly. The word's outcome is handed to the scheduler only then: as a
    correct answer if the first attempt was right, as a miss otherwise.
    """

    def __init__(
        self,
        scheduler: Optional[SpellingScheduler] = None,
        speech_service: Optional[SpeechService] = None,
        language: str = DEFAULT_LANGUAGE_CODE,
        ignore_accents: bool = False,
    ) -> None:
        self.scheduler = scheduler or SpellingScheduler()
        self.speech_service = speech_service or SilentSpeechService()
        self._session = Session(language=language, ignore_accents=ignore_accents)
        self._missed_current = False

    @classmethod
    def with_seed(cls, seed: Optional[int], **kwargs) -> "SpellingDrill":
        return cls(scheduler=SpellingScheduler(random.Random(seed)), **kwargs)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> SessionStatus:
        return get_status(self._session)

    @property
    def current_word(self) -> Optional[WordState]:
        return get_current_word(self._session)

    @property
    def progress(self) -> Progress:
        return get_progress(self._session)

    @property
    def retrying(self) -> bool:
        """True when the current word has already been answered wrongly."""
        return self._missed_current

    def start(
        self,
        words: Union[str, Iterable[WordInput]],
        language: Optional[str] = None,
        ignore_accents: Optional[bool] = None,
    ) -> Session:
        """Starts a new session.

        Args:
            words: Free-form text (one word per line, "word|prompt" allowed)
                or a sequence of words. Empty text falls back to the default
                word list.
            language: Language code; defaults to the current session's.
            ignore_accents: Accent handling; defaults to the current session's.

        Raises:
            InvalidInputError: For an unknown language or an empty word sequence.
        """
        if isinstance(words, str):
            words = parse_word_list(words)
        language_code = get_language(language or self._session.language).code
        if ignore_accents is None:
            ignore_accents = self._session.ignore_accents

        self._session = self.scheduler.start_session(words, language_code, ignore_accents)
        self._missed_current = False
        logger.info(
            "Drill started: %d words, %s, ignore_accents=%s",
            len(self._session.pending),
            language_code,
            ignore_accents,
        )
        return self._session

    def submit_answer(self, answer: str) -> AnswerFeedback:
        """Checks an answer for the current word.

        Blank answers and answers given when no word is pending are not
        counted.
        """
        word = self.current_word
        if word is None or not answer.strip():
            return AnswerFeedback(accepted=False, answer=answer)

        if not answers_match(answer, word.text, self._session.ignore_accents):
            self._missed_current = True
            logger.debug("Wrong answer %r for %r", answer, word.text)
            return AnswerFeedback(
                accepted=True,
                is_correct=False,
                expected=word.text,
                answer=answer,
                diff=diff_answer(word.text, answer),
            )

        if self._missed_current:
            self._apply(self.scheduler.incorrect_answer, word.id)
        else:
            self._apply(self.scheduler.correct_answer, word.id)

        return AnswerFeedback(
            accepted=True,
            is_correct=True,
            expected=word.text,
            answer=answer,
            completed=all(pending.id != word.id for pending in self._session.pending),
        )

    def skip(self) -> Session:
        """Gives up on the current word."""
        word = self.current_word
        if word is not None:
            self._apply(self.scheduler.skip_word, word.id)
        return self._session

    def skip_word(self, word_id: str) -> Session:
        """Skips a word by id, ignoring ids that are no longer pending."""
        return self._apply(self.scheduler.skip_word, word_id)

    def restart(self) -> Session:
        self._session = self.scheduler.reset_session(self._session)
        self._missed_current = False
        return self._session

    def needs_speech(self) -> bool:
        """Whether the current word should be read aloud without being asked.

        A word with a prompt is shown as text on its first presentation and
        spoken once the learner has missed it.
        """
        word = self.current_word
        if word is None:
            return False
        return word.prompt is None or self._missed_current or word.incorrect_count > 0

    def keyboard_characters(self) -> List[str]:
        """Special characters to offer for the current session's words."""
        words = [word.text for word in self._session.pending + self._session.completed]
        language = get_language(self._session.language)
        return sorted(set(language.special_characters) | set(special_characters(words)))

    def speak_current(self) -> Optional[bytes]:
        """Returns spoken audio for the current word, if any."""
        word = self.current_word
        if word is None:
            return None
        return self.speech_service.synthesize(word.text, self._session.language)

    def summary(self) -> SessionSummary:
        return summarize_session(self._session)

    def _apply(self, operation: Callable[[Session, str], Session], word_id: str) -> Session:
        current = self.current_word
        try:
            self._session = operation(self._session, word_id)
        except WordNotFoundError as e:
            logger.warning("Ignoring stale event: %s", e)
            return self._session
        if current is not None and current.id == word_id:
            self._missed_current = False
        return self._session
