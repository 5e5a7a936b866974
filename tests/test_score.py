"""Unit tests for scoring."""

import random
import uuid

import pytest

from spellcards.core import Session, SpellingScheduler, WordState
from spellcards.score import (
    calculate_word_score,
    compare_word_scores,
    rank_words,
    summarize_session,
)


def make_word(text: str = "word", incorrect_count: int = 0, skipped: bool = False) -> WordState:
    return WordState(
        id=str(uuid.uuid4()),
        text=text,
        incorrect_count=incorrect_count,
        skipped=skipped,
    )


class TestCalculateWordScore:
    @pytest.mark.parametrize(
        "incorrect_count, expected",
        [(0, 100), (1, 75), (2, 50), (3, 25), (4, 10), (9, 10)],
    )
    def test_score_by_mistakes(self, incorrect_count: int, expected: int) -> None:
        assert calculate_word_score(make_word(incorrect_count=incorrect_count)) == expected

    def test_skipped_word_scores_zero(self) -> None:
        assert calculate_word_score(make_word(skipped=True)) == 0
        assert calculate_word_score(make_word(incorrect_count=2, skipped=True)) == 0

    def test_score_is_pure(self) -> None:
        word = make_word(incorrect_count=1)
        assert calculate_word_score(word) == calculate_word_score(word)


class TestCompareWordScores:
    def test_higher_score_first(self) -> None:
        good, bad = make_word("zebra"), make_word("apple", incorrect_count=2)
        assert compare_word_scores(good, bad) < 0
        assert compare_word_scores(bad, good) > 0

    def test_fewer_mistakes_first_on_equal_score(self) -> None:
        four, five = make_word("a", incorrect_count=4), make_word("b", incorrect_count=5)
        assert calculate_word_score(four) == calculate_word_score(five)
        assert compare_word_scores(four, five) < 0

    def test_text_breaks_ties(self) -> None:
        assert compare_word_scores(make_word("apple"), make_word("banana")) < 0

    def test_text_tie_break_ignores_case(self) -> None:
        apple, zebra = make_word("apple"), make_word("Zebra")
        assert compare_word_scores(apple, zebra) < 0
        assert rank_words([zebra, apple]) == [apple, zebra]

    def test_exact_text_orders_case_variants(self) -> None:
        lower, upper = make_word("moon"), make_word("Moon")
        assert rank_words([lower, upper]) == [upper, lower]

    def test_distinct_words_never_compare_equal(self) -> None:
        a, b = make_word("same"), make_word("same")
        assert compare_word_scores(a, b) != 0
        assert compare_word_scores(a, a) == 0

    def test_rank_words(self) -> None:
        skipped = make_word("skip", skipped=True)
        perfect = make_word("moon")
        missed = make_word("star", incorrect_count=1)

        assert rank_words([skipped, missed, perfect]) == [perfect, missed, skipped]


class TestSummarizeSession:
    def test_percentage_of_completed_words(self) -> None:
        words = [make_word("a"), make_word("b", 1), make_word("c", 2)]
        summary = summarize_session(Session(completed=tuple(words)))

        assert [r.score for r in summary.results] == [100, 75, 50]
        assert summary.total_score == 225
        assert summary.possible_score == 300
        assert summary.percentage == 75
        assert summary.badge == "👍"

    def test_half_percent_rounds_up(self) -> None:
        words = [make_word("a", 1), make_word("b", 2)]
        assert summarize_session(Session(completed=tuple(words))).percentage == 63

    def test_empty_session_scores_zero(self) -> None:
        summary = summarize_session(Session())
        assert summary.percentage == 0
        assert summary.results == []

    def test_perfect_session(self) -> None:
        scheduler = SpellingScheduler(random.Random(0))
        session = scheduler.start_session(["moon", "star"])
        while session.pending:
            session = scheduler.correct_answer(session, session.pending[0].id)

        summary = summarize_session(session)
        assert summary.percentage == 100
        assert summary.badge == "🏆"
