"""Speech services that read words aloud."""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import List, Optional

import openai

logger = logging.getLogger(__name__)

# Slightly slower than normal speech for learners.
SPEECH_SPEED = 0.8


def _get_openai_client(api_key: Optional[str]) -> openai.OpenAI:
    return openai.OpenAI(api_key=api_key)


class SpeechService(ABC):
    """Abstract base class for speech services."""

    @abstractmethod
    def synthesize(self, text: str, language: str) -> Optional[bytes]:
        """Produces spoken audio for a word.

        Args:
            text: The text to speak.
            language: Language code of the text, e.g. "fr-FR".

        Returns:
            MP3 audio, or None if no audio is available.
        """


class SilentSpeechService(SpeechService):
    """Speech service that produces no audio, for prompts-only drills and tests."""

    def synthesize(self, text: str, language: str) -> Optional[bytes]:
        return None


class OpenAISpeechService(SpeechService):
    """OpenAI text-to-speech service."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "tts-1",
        voice: str = "alloy",
    ):
        """Initializes the OpenAISpeechService.

        Args:
            api_key: OpenAI API key. If None, the client reads OPENAI_API_KEY.
            model: Text-to-speech model name.
            voice: Voice name.
        """
        self.api_key = api_key
        self.model = model
        self.voice = voice
        self.client: Optional[openai.OpenAI] = None

    def synthesize(self, text: str, language: str) -> Optional[bytes]:
        """Synthesizes speech with the OpenAI API.

        OpenAI voices are not tied to a language: the model detects the
        language from the text itself, so the language code is only logged.
        API errors are logged and result in None so that the drill can
        continue silently.
        """
        if self.client is None:
            self.client = _get_openai_client(self.api_key)

        try:
            logger.debug("Synthesizing %r (%s) with %s", text, language, self.model)
            response = self.client.audio.speech.create(
                model=self.model,
                voice=self.voice,
                input=text,
                response_format="mp3",
                speed=SPEECH_SPEED,
            )
            return response.content
        except openai.OpenAIError as e:
            logger.warning("Speech synthesis failed for %r: %s", text, e)
            return None


class SpeechServiceFactory:
    """Factory for creating speech service instances."""

    @staticmethod
    def create_service(service_type: str, api_key: Optional[str] = None) -> SpeechService:
        """Creates a speech service of the given type.

        Args:
            service_type: "openai" or "silent".
            api_key: API key passed to services that need one.

        Returns:
            An instance of a concrete SpeechService implementation.

        Raises:
            ValueError: If an unknown service type is provided.
        """
        if service_type.lower() == "openai":
            return OpenAISpeechService(api_key=api_key)
        elif service_type.lower() == "silent":
            return SilentSpeechService()
        else:
            raise ValueError(f"Unknown speech service type: {service_type}")

    @staticmethod
    def get_available_services() -> List[str]:
        return ["openai", "silent"]


class AudioFileStore:
    """Keeps the most recent speech clip in a temporary directory.

    Each write replaces the previous file, so at most one clip is on disk.
    The directory is removed by close().
    """

    def __init__(self, prefix: str = "spellcards-") -> None:
        self._directory = tempfile.TemporaryDirectory(prefix=prefix)
        self._counter = 0
        self.current_path: Optional[str] = None

    @property
    def directory(self) -> str:
        return self._directory.name

    def write(self, audio: bytes) -> str:
        """Stores a clip under a fresh name and deletes the previous one.

        A fresh name keeps clients that cache by path from replaying an old clip.
        """
        self._discard_current()
        self._counter += 1
        path = os.path.join(self.directory, f"speech-{self._counter}.mp3")
        with open(path, "wb") as f:
            f.write(audio)
        self.current_path = path
        return path

    def close(self) -> None:
        self.current_path = None
        self._directory.cleanup()

    def _discard_current(self) -> None:
        if self.current_path and os.path.exists(self.current_path):
            os.remove(self.current_path)
        self.current_path = None
