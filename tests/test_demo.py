"""Unit tests for the demo module."""

import os
from unittest.mock import MagicMock, patch

import pytest

from spellcards.config import Settings
from spellcards.demo import SpellCardsDemo, format_diff
from spellcards.speech import SpeechService
from spellcards.text import diff_answer


class TestSpellCardsDemo:
    """Test suite for the SpellCardsDemo class."""

    @pytest.fixture
    def demo(self):
        """Fixture to create a SpellCardsDemo with silent speech and a fixed seed."""
        demo = SpellCardsDemo(Settings(speech_service="silent", seed=3))
        yield demo
        demo.audio_files.close()

    def test_start_drill(self, demo: SpellCardsDemo) -> None:
        feedback, question, progress, audio, results, answer = demo.start_drill(
            "hello\nworld", "en-US", False
        )

        assert feedback == "Let's go! 🚀"
        assert "Type what you hear!" in question
        assert progress == "To do: 2 | Done: 0"
        assert audio is None
        assert results == ""
        assert answer == ""

    def test_start_drill_with_unknown_language(self, demo: SpellCardsDemo) -> None:
        feedback, *_ = demo.start_drill("hello", "xx-XX", False)
        assert feedback.startswith("Could not start")

    def test_prompt_is_shown(self, demo: SpellCardsDemo) -> None:
        _, question, *_ = demo.start_drill("bonjour|Say hello", "fr-FR", False)
        assert "Say hello" in question
        assert "Special characters:" in question

    def test_correct_answer_finishes_drill(self, demo: SpellCardsDemo) -> None:
        demo.start_drill("hello", "en-US", False)

        feedback, question, progress, _, results, _ = demo.submit_answer("hello")

        assert feedback == "Correct! 🎉"
        assert question == ""
        assert progress == "To do: 0 | Done: 1"
        assert "Mission Complete! 🏆" in results
        assert "100%" in results

    def test_wrong_answer_shows_diff(self, demo: SpellCardsDemo) -> None:
        demo.start_drill("hello", "en-US", False)

        feedback, question, *_ = demo.submit_answer("helo")

        assert feedback.startswith("Try again! 🙈")
        assert "**l**" in feedback
        assert "Type it again..." in question

    def test_blank_answer(self, demo: SpellCardsDemo) -> None:
        demo.start_drill("hello", "en-US", False)
        feedback, *_ = demo.submit_answer("  ")
        assert feedback == "Type your answer first."

    def test_skip_word_reports_in_results(self, demo: SpellCardsDemo) -> None:
        demo.start_drill("hello", "en-US", False)

        feedback, *_, results, _ = demo.skip_word()

        assert feedback == "Skipped."
        assert "hello: 0 (skipped)" in results

    def test_restart(self, demo: SpellCardsDemo) -> None:
        demo.start_drill("hello", "en-US", False)
        demo.skip_word()

        _, question, progress, _, results, _ = demo.restart()

        assert question == ""
        assert progress == "To do: 0 | Done: 0"
        assert results == ""

    def test_replay_writes_audio_file(self, demo: SpellCardsDemo) -> None:
        demo.start_drill("hello", "en-US", False)

        with patch.object(demo.drill, "speak_current", return_value=b"mp3"):
            path = demo.replay()

        assert path.endswith(".mp3")
        assert os.path.dirname(path) == demo.audio_files.directory
        with open(path, "rb") as f:
            assert f.read() == b"mp3"

    def test_spoken_clips_do_not_pile_up(self, demo: SpellCardsDemo) -> None:
        speech_service = MagicMock(spec=SpeechService)
        speech_service.synthesize.return_value = b"mp3"
        demo.drill.speech_service = speech_service
        *_, audio, _, _ = demo.start_drill("hello\nworld", "en-US", False)

        paths = {audio}
        for _ in range(20):
            *_, audio, _, _ = demo.submit_answer("wrong")
            paths.add(audio)
        for _ in range(5):
            paths.add(demo.replay())

        assert speech_service.synthesize.call_count == 26
        assert len(paths) == 26
        assert os.listdir(demo.audio_files.directory) == [
            os.path.basename(demo.audio_files.current_path)
        ]
        with open(demo.audio_files.current_path, "rb") as f:
            assert f.read() == b"mp3"


def test_format_diff_marks_missing_and_extra_letters():
    """Tests missing letters are bold and extra letters struck through."""
    assert format_diff(diff_answer("hello", "helo"), "hello", "helo") == "hel**l**o"
    assert format_diff(diff_answer("cat", "caat"), "cat", "caat") == "ca~~a~~t"


def test_format_diff_mostly_wrong_answer():
    """Tests a mostly wrong answer is shown next to the expected word."""
    assert format_diff(diff_answer("cat", "dog"), "cat", "dog") == "`cat`\n\n~~dog~~"
