"""Core classes for the SpellCards word-scheduling engine."""

import logging
import random
import uuid
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import InvalidInputError, WordNotFoundError
from .languages import DEFAULT_LANGUAGE_CODE

logger = logging.getLogger(__name__)

# A word missed at least once must be answered correctly this many times in a row.
STREAK_GOAL_AFTER_INCORRECT = 2
# Distance ahead (1 = front of the queue) at which a word is shown again.
SCHEDULE_AFTER_CORRECT = 3
SCHEDULE_AFTER_INCORRECT = 1


class Placement(str, Enum):
    """Where a word goes after its first miss.

    Attributes:
        END: Appended to the end of the pending queue.
        NEAR: Reinserted SCHEDULE_AFTER_INCORRECT positions ahead, like later misses.
    """

    END = "end"
    NEAR = "near"


FIRST_MISS_PLACEMENT = Placement.END
# A never-missed word is retired after a single correct answer.
COMPLETE_ON_FIRST_CORRECT = True


class SessionStatus(str, Enum):
    """Derived state of a session.

    Attributes:
        INITIAL: Nothing pending and nothing completed (setup).
        LEARNING: At least one word is pending.
        FINISHED: Nothing pending, at least one word completed.
    """

    INITIAL = "initial"
    LEARNING = "learning"
    FINISHED = "finished"


class Word(BaseModel):
    """A word submitted by the learner.

    Attributes:
        text: The spelling to learn.
        prompt: Optional text shown instead of speaking the word.
    """

    text: str = Field(..., description="The word to spell")
    prompt: Optional[str] = Field(default=None, description="Optional text prompt")

    model_config = ConfigDict(frozen=True)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        # Answers ignore trailing periods, so a word needs more than dots.
        if all(ch == "." or ch.isspace() for ch in value):
            raise ValueError("word text must contain more than whitespace and periods")
        return value

    @field_validator("prompt")
    @classmethod
    def _blank_prompt_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class WordState(BaseModel):
    """Progress of one word through a session.

    Attributes:
        id: Identifier assigned at session start, the only safe equality key.
        text: The spelling to learn. Not unique within a session.
        prompt: Optional text prompt.
        correct_streak: Consecutive correct answers since the last miss.
        incorrect_count: Total misses.
        skipped: Whether the learner gave up on the word.
    """

    id: str = Field(..., description="Unique identifier for the word")
    text: str = Field(..., description="The word to spell")
    prompt: Optional[str] = Field(default=None, description="Optional text prompt")
    correct_streak: int = Field(default=0, ge=0, description="Current correct streak")
    incorrect_count: int = Field(default=0, ge=0, description="Number of misses")
    skipped: bool = Field(default=False, description="Word was skipped")

    model_config = ConfigDict(frozen=True)


class Progress(BaseModel):
    """Counts shown next to the current word."""

    remaining: int
    completed: int

    @property
    def total(self) -> int:
        return self.remaining + self.completed

    @property
    def fraction(self) -> float:
        return self.completed / self.total if self.total else 0.0


class Session(BaseModel):
    """An immutable snapshot of a drill.

    Attributes:
        pending: Presentation queue, index 0 is the current word.
        completed: Finished words in completion order.
        language: Language code of the words.
        ignore_accents: Whether diacritics and case are ignored when checking answers.
    """

    pending: Tuple[WordState, ...] = Field(default=(), description="Words still to learn")
    completed: Tuple[WordState, ...] = Field(default=(), description="Finished words")
    language: str = Field(default=DEFAULT_LANGUAGE_CODE, description="Language code")
    ignore_accents: bool = Field(default=False, description="Accent-insensitive answers")

    model_config = ConfigDict(frozen=True)


WordInput = Union[Word, str, Mapping[str, Any]]


def _to_word(item: WordInput) -> Word:
    if isinstance(item, Word):
        return item
    if isinstance(item, str):
        return Word(text=item)
    return Word(text=item.get("text", item.get("word", "")), prompt=item.get("prompt"))


def get_status(session: Session) -> SessionStatus:
    if session.pending:
        return SessionStatus.LEARNING
    return SessionStatus.FINISHED if session.completed else SessionStatus.INITIAL


def get_current_word(session: Session) -> Optional[WordState]:
    return session.pending[0] if session.pending else None


def get_progress(session: Session) -> Progress:
    return Progress(remaining=len(session.pending), completed=len(session.completed))


def find_pending(session: Session, word_id: str) -> Tuple[int, WordState]:
    """Finds a pending word by id.

    Returns:
        The word's index in the pending queue and the word itself.

    Raises:
        WordNotFoundError: If no pending word has this id.
    """
    for index, word in enumerate(session.pending):
        if word.id == word_id:
            return index, word
    raise WordNotFoundError(word_id)


class SpellingScheduler:
    """Decides which word comes next and when a word is learned.

    All operations take a Session and return a new one; the input is never
    modified.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        first_miss_placement: Placement = FIRST_MISS_PLACEMENT,
        complete_on_first_correct: bool = COMPLETE_ON_FIRST_CORRECT,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """Initializes the SpellingScheduler.

        Args:
            rng: Random source used for the initial shuffle. Pass a seeded
                random.Random for reproducible order.
            first_miss_placement: Where a word goes after its first miss.
            complete_on_first_correct: Retire never-missed words after one
                correct answer instead of requiring the full streak.
            id_factory: Callable producing unique word ids. Defaults to uuid4.
        """
        self._rng = rng or random.Random()
        self.first_miss_placement = Placement(first_miss_placement)
        self.complete_on_first_correct = complete_on_first_correct
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def start_session(
        self,
        words: Iterable[WordInput],
        language: str = DEFAULT_LANGUAGE_CODE,
        ignore_accents: bool = False,
    ) -> Session:
        """Builds a new session with every word pending in shuffled order.

        Args:
            words: Words to learn, as Word objects, plain strings or mappings
                with "text" (or "word") and optional "prompt" keys.
            language: Language code of the words.
            ignore_accents: Whether answers are checked accent-insensitively.

        Returns:
            A session in the LEARNING state.

        Raises:
            InvalidInputError: If no words are given or a word is blank.
        """
        try:
            parsed = [_to_word(item) for item in words]
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
        if not parsed:
            raise InvalidInputError("Cannot start a session without words")

        states = [
            WordState(id=self._id_factory(), text=word.text, prompt=word.prompt)
            for word in parsed
        ]
        self._shuffle(states)
        logger.debug("Started session with %d words in %s", len(states), language)

        return Session(
            pending=tuple(states),
            completed=(),
            language=language,
            ignore_accents=ignore_accents,
        )

    def correct_answer(self, session: Session, word_id: str) -> Session:
        """Records a correct answer for a pending word.

        The word is completed when it was never missed, or when its streak
        reaches STREAK_GOAL_AFTER_INCORRECT. Otherwise it is shown again
        SCHEDULE_AFTER_CORRECT positions ahead.

        Raises:
            WordNotFoundError: If the word is not pending.
        """
        index, word = find_pending(session, word_id)
        updated = word.model_copy(update={"correct_streak": word.correct_streak + 1})
        rest = session.pending[:index] + session.pending[index + 1 :]

        never_missed = updated.incorrect_count == 0 and self.complete_on_first_correct
        if never_missed or updated.correct_streak >= STREAK_GOAL_AFTER_INCORRECT:
            logger.debug("Completed %r (%s)", updated.text, updated.id)
            return session.model_copy(
                update={"pending": rest, "completed": session.completed + (updated,)}
            )

        position = min(SCHEDULE_AFTER_CORRECT - 1, len(rest))
        logger.debug("Rescheduled %r at %d after correct answer", updated.text, position)
        return session.model_copy(update={"pending": _insert(rest, position, updated)})

    def incorrect_answer(self, session: Session, word_id: str) -> Session:
        """Records a miss for a pending word.

        The streak is reset and the word stays pending. On the first miss it
        goes where first_miss_placement says; afterwards it is shown again
        SCHEDULE_AFTER_INCORRECT positions ahead.

        Raises:
            WordNotFoundError: If the word is not pending.
        """
        index, word = find_pending(session, word_id)
        updated = word.model_copy(
            update={"correct_streak": 0, "incorrect_count": word.incorrect_count + 1}
        )
        rest = session.pending[:index] + session.pending[index + 1 :]

        if updated.incorrect_count == 1 and self.first_miss_placement is Placement.END:
            position = len(rest)
        else:
            position = min(SCHEDULE_AFTER_INCORRECT - 1, len(rest))
        logger.debug("Rescheduled %r at %d after miss", updated.text, position)
        return session.model_copy(update={"pending": _insert(rest, position, updated)})

    def skip_word(self, session: Session, word_id: str) -> Session:
        """Moves a pending word to completed, marked as skipped.

        Raises:
            WordNotFoundError: If the word is not pending.
        """
        index, word = find_pending(session, word_id)
        skipped = word.model_copy(update={"skipped": True})
        logger.debug("Skipped %r (%s)", skipped.text, skipped.id)
        return session.model_copy(
            update={
                "pending": session.pending[:index] + session.pending[index + 1 :],
                "completed": session.completed + (skipped,),
            }
        )

    def reset_session(self, session: Session) -> Session:
        """Empties the session, keeping its language and accent setting."""
        return session.model_copy(update={"pending": (), "completed": ()})

    def _shuffle(self, items: list) -> None:
        # Fisher-Yates
        for i in range(len(items) - 1, 0, -1):
            j = self._rng.randint(0, i)
            items[i], items[j] = items[j], items[i]


def _insert(
    words: Tuple[WordState, ...], position: int, word: WordState
) -> Tuple[WordState, ...]:
    return words[:position] + (word,) + words[position:]
