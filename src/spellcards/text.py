"""Text handling: answer normalization, word list parsing and answer diffs."""

import difflib
import logging
import unicodedata
from typing import Iterable, List, Literal, Sequence, Tuple

from pydantic import BaseModel

from .core import Word

logger = logging.getLogger(__name__)

DEFAULT_WORDS: Tuple[str, ...] = ("moon", "robot", "rocket", "spaceship", "star")

# Share of wrong characters above which a diff is not worth showing letter by letter.
MOSTLY_WRONG_RATIO = 0.5


def normalize(text: str) -> str:
    """Canonicalizes a word or answer for comparison.

    Leading and trailing whitespace is removed, internal whitespace runs become
    a single space and trailing periods are dropped. The result is a fixed
    point: normalize(normalize(x)) == normalize(x).
    """
    collapsed = " ".join(text.split())
    return collapsed.rstrip(". ")


# Letters without a Unicode decomposition that match their spelled-out form.
LIGATURES = {"œ": "oe", "Œ": "OE", "æ": "ae", "Æ": "AE"}


def strip_accents(text: str) -> str:
    """Removes combining marks and spells out ligatures, so "é" becomes "e"
    and "œ" becomes "oe"."""
    for ligature, expansion in LIGATURES.items():
        text = text.replace(ligature, expansion)
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def _fold(text: str) -> str:
    return strip_accents(text).casefold()


def answers_match(answer: str, target: str, ignore_accents: bool = False) -> bool:
    """Checks a submitted answer against the expected word.

    Comparison is exact (case-sensitive) after normalization. With
    ignore_accents, answers that differ only in diacritics or case also match.

    Args:
        answer: What the learner typed.
        target: The expected spelling.
        ignore_accents: Whether to compare base letters only.

    Returns:
        True if the answer counts as correct.
    """
    normalized_answer = normalize(answer)
    normalized_target = normalize(target)
    if not normalized_answer or not normalized_target:
        return False
    if normalized_answer == normalized_target:
        return True
    if not ignore_accents:
        return False
    try:
        return _fold(normalized_answer) == _fold(normalized_target)
    except (TypeError, ValueError) as e:
        logger.warning("Accent-insensitive comparison failed, using exact match: %s", e)
        return False


def parse_word_list(text: str, default: Sequence[str] = DEFAULT_WORDS) -> List[Word]:
    """Turns free-form input into words.

    One entry per line. An entry may carry a prompt after a pipe, as in
    "bonjour|Say hello in French". Blank lines are ignored.

    Args:
        text: The raw input.
        default: Words used when the input holds no entries.

    Returns:
        The parsed words, in input order.
    """
    words = []
    for line in text.splitlines():
        entry, _, prompt = line.partition("|")
        entry = entry.strip()
        if not normalize(entry):
            continue
        words.append(Word(text=entry, prompt=prompt.strip() or None))

    if not words:
        logger.info("No words entered, using the default list")
        return [Word(text=word) for word in default]
    return words


def special_characters(words: Iterable[str]) -> List[str]:
    """Returns the unique non-ASCII letters in the words, sorted by code point."""
    found = {ch for word in words for ch in word if ord(ch) > 127 and ch.isalpha()}
    return sorted(found)


class AnswerDiff(BaseModel):
    """Character diff between the expected word and an answer.

    Attributes:
        segments: Pieces of text tagged "equal", "missing" (in the expected
            word only) or "extra" (typed but not expected).
        wrong_characters: Number of missing plus extra characters.
        mostly_wrong: True when more than half of the expected characters are
            wrong, in which case a side-by-side view reads better.
    """

    segments: List[Tuple[Literal["equal", "missing", "extra"], str]]
    wrong_characters: int
    mostly_wrong: bool


def diff_answer(expected: str, actual: str) -> AnswerDiff:
    """Computes a case-insensitive character diff of an answer."""
    expected_cmp = expected.lower()
    actual_cmp = actual.lower()
    matcher = difflib.SequenceMatcher(None, expected_cmp, actual_cmp, autojunk=False)

    segments = []
    wrong = 0
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            segments.append(("equal", expected_cmp[i1:i2]))
            continue
        if i2 > i1:
            segments.append(("missing", expected_cmp[i1:i2]))
            wrong += i2 - i1
        if j2 > j1:
            segments.append(("extra", actual_cmp[j1:j2]))
            wrong += j2 - j1

    return AnswerDiff(
        segments=segments,
        wrong_characters=wrong,
        mostly_wrong=wrong > len(expected) * MOSTLY_WRONG_RATIO,
    )
