"""Web interface for SpellCards using Gradio."""

import logging
from typing import Optional, Tuple

import gradio as gr

from .config import Settings, load_settings
from .core import SessionStatus
from .drill import AnswerFeedback, SpellingDrill
from .exceptions import InvalidInputError
from .languages import LANGUAGES
from .speech import AudioFileStore, SpeechServiceFactory
from .text import AnswerDiff

logger = logging.getLogger(__name__)

# feedback, question, progress, audio, results, answer box
DrillView = Tuple[str, str, str, Optional[str], str, str]


def format_diff(diff: AnswerDiff, expected: str, actual: str) -> str:
    """Renders an answer diff as Markdown.

    Missing letters are shown in bold, extra letters struck through. When most
    of the answer is wrong, the expected word and the answer are shown one
    above the other instead.
    """
    if diff.mostly_wrong:
        return f"`{expected}`\n\n~~{actual}~~"

    parts = []
    for kind, text in diff.segments:
        if kind == "missing":
            parts.append(f"**{text}**")
        elif kind == "extra":
            parts.append(f"~~{text}~~")
        else:
            parts.append(text)
    return "".join(parts)


class SpellCardsDemo:
    """Gradio-facing wrapper around a SpellingDrill.

    Each handler returns plain strings (and an audio file path) for the
    interface components.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initializes the SpellCardsDemo.

        Args:
            settings: Runtime settings. Loaded from the environment if None.
        """
        self.settings = settings or load_settings()
        speech_service = SpeechServiceFactory.create_service(
            self.settings.speech_service, api_key=self.settings.openai_api_key
        )
        self.drill = SpellingDrill.with_seed(
            self.settings.seed,
            speech_service=speech_service,
            language=self.settings.language,
            ignore_accents=self.settings.ignore_accents,
        )
        self.audio_files = AudioFileStore()

    def start_drill(self, words_text: str, language: str, ignore_accents: bool) -> DrillView:
        """Starts a drill from the word list textarea.

        Args:
            words_text: One word per line, optionally "word|prompt".
            language: Language code from the dropdown.
            ignore_accents: Whether accents and case are ignored.
        """
        try:
            self.drill.start(words_text, language=language, ignore_accents=ignore_accents)
        except InvalidInputError as e:
            return (f"Could not start: {e}", "", "", None, "", "")
        return self._view("Let's go! 🚀", speak=self.drill.needs_speech())

    def submit_answer(self, answer: str) -> DrillView:
        """Checks the typed answer against the current word."""
        feedback = self.drill.submit_answer(answer)
        return self._view(self._feedback_text(feedback), speak=self._should_speak(feedback))

    def skip_word(self) -> DrillView:
        """Skips the current word."""
        self.drill.skip()
        return self._view("Skipped.", speak=self.drill.needs_speech())

    def replay(self) -> Optional[str]:
        """Reads the current word aloud again."""
        return self._audio_file()

    def restart(self) -> DrillView:
        self.drill.restart()
        return self._view("Enter new words to start another mission.", speak=False)

    def get_results(self) -> str:
        """Formats the summary of completed words as Markdown."""
        summary = self.drill.summary()
        if not summary.results:
            return ""

        lines = [
            f"## Mission Complete! {summary.badge}",
            f"**{summary.percentage}%** (Score: {summary.total_score} / {summary.possible_score})",
            "",
        ]
        for result in summary.results:
            word = result.word
            line = f"- {word.text}"
            if word.prompt:
                line += f" ({word.prompt})"
            line += f": {result.score}"
            if word.skipped:
                line += " (skipped)"
            elif word.incorrect_count:
                line += f" ({word.incorrect_count} mistakes)"
            lines.append(line)
        return "\n".join(lines)

    def _should_speak(self, feedback: AnswerFeedback) -> bool:
        if not feedback.accepted:
            return False
        if not feedback.is_correct:
            return True
        return self.drill.needs_speech()

    def _feedback_text(self, feedback: AnswerFeedback) -> str:
        if not feedback.accepted:
            return "Type your answer first."
        if feedback.is_correct:
            return "Correct! 🎉"
        return "Try again! 🙈\n\n" + format_diff(
            feedback.diff, feedback.expected, feedback.answer
        )

    def _question_text(self) -> str:
        word = self.drill.current_word
        if word is None:
            return ""
        lines = []
        if word.prompt:
            lines.append(f"### {word.prompt}")
        else:
            lines.append("### Type what you hear!")
        if self.drill.retrying:
            lines.append("Type it again...")
        characters = self.drill.keyboard_characters()
        if characters:
            lines.append("Special characters: " + " ".join(characters))
        return "\n\n".join(lines)

    def _progress_text(self) -> str:
        progress = self.drill.progress
        return f"To do: {progress.remaining} | Done: {progress.completed}"

    def _audio_file(self) -> Optional[str]:
        audio = self.drill.speak_current()
        if not audio:
            return None
        return self.audio_files.write(audio)

    def _view(self, feedback: str, speak: bool) -> DrillView:
        finished = self.drill.status is SessionStatus.FINISHED
        return (
            feedback,
            self._question_text(),
            self._progress_text(),
            self._audio_file() if speak else None,
            self.get_results() if finished else "",
            "",
        )


def create_demo_interface(settings: Optional[Settings] = None) -> gr.Blocks:
    """Creates and configures the Gradio web interface for SpellCards.

    Returns:
        A Gradio Blocks object ready to be launched.
    """
    demo = SpellCardsDemo(settings)

    with gr.Blocks(title="SpellCards", theme=gr.themes.Soft()) as interface:
        gr.Markdown("# Space Spelling Academy 🚀")
        gr.Markdown("Enter your spelling words below, one per line!")

        with gr.Row():
            words_input = gr.Textbox(
                label="Words",
                lines=8,
                placeholder="Enter words here...\napple\nbanana\nspacecraft\nrobot",
            )
            with gr.Column():
                language_input = gr.Dropdown(
                    choices=[(language.label, language.code) for language in LANGUAGES],
                    value=demo.settings.language,
                    label="Language",
                )
                accents_input = gr.Checkbox(
                    value=demo.settings.ignore_accents, label="Ignore accents"
                )
                start_btn = gr.Button("Launch Mission!", variant="primary")

        progress_output = gr.Markdown()
        question_output = gr.Markdown()
        audio_output = gr.Audio(label="Listen", type="filepath", autoplay=True)

        with gr.Row():
            answer_input = gr.Textbox(label="Your answer", placeholder="Type here...")
            submit_btn = gr.Button("Check", variant="primary")

        with gr.Row():
            replay_btn = gr.Button("Play again")
            skip_btn = gr.Button("Skip")
            restart_btn = gr.Button("Start New Mission")

        feedback_output = gr.Markdown()
        results_output = gr.Markdown()

        outputs = [
            feedback_output,
            question_output,
            progress_output,
            audio_output,
            results_output,
            answer_input,
        ]

        start_btn.click(
            demo.start_drill,
            inputs=[words_input, language_input, accents_input],
            outputs=outputs,
        )
        submit_btn.click(demo.submit_answer, inputs=[answer_input], outputs=outputs)
        answer_input.submit(demo.submit_answer, inputs=[answer_input], outputs=outputs)
        skip_btn.click(demo.skip_word, outputs=outputs)
        restart_btn.click(demo.restart, outputs=outputs)
        replay_btn.click(demo.replay, outputs=audio_output)

    return interface


def main() -> None:
    """Runs the SpellCards web interface."""
    settings = load_settings()
    interface = create_demo_interface(settings)
    interface.launch(share=False, server_name="0.0.0.0", server_port=settings.server_port)


if __name__ == "__main__":
    main()
