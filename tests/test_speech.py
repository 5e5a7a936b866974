"""Unit tests for speech services."""

import os
from unittest.mock import MagicMock, patch

import openai
import pytest

from spellcards.speech import (
    AudioFileStore,
    OpenAISpeechService,
    SilentSpeechService,
    SpeechServiceFactory,
)


class TestSpeechServiceFactory:
    def test_get_available_services(self) -> None:
        services = SpeechServiceFactory.get_available_services()
        assert "openai" in services
        assert "silent" in services

    def test_create_openai_service(self) -> None:
        service = SpeechServiceFactory.create_service("OpenAI", api_key="key")
        assert isinstance(service, OpenAISpeechService)
        assert service.api_key == "key"

    def test_create_silent_service(self) -> None:
        service = SpeechServiceFactory.create_service("silent")
        assert service.synthesize("hello", "en-US") is None

    def test_create_invalid_service(self) -> None:
        with pytest.raises(ValueError):
            SpeechServiceFactory.create_service("invalid")


class TestOpenAISpeechService:
    @patch("spellcards.speech._get_openai_client")
    def test_synthesize_returns_audio(self, mock_get_client: MagicMock) -> None:
        client = mock_get_client.return_value
        client.audio.speech.create.return_value.content = b"mp3-bytes"
        service = OpenAISpeechService(api_key="key")

        audio = service.synthesize("bonjour", "fr-FR")

        assert audio == b"mp3-bytes"
        mock_get_client.assert_called_once_with("key")
        kwargs = client.audio.speech.create.call_args.kwargs
        assert kwargs["input"] == "bonjour"
        assert kwargs["model"] == "tts-1"

    @patch("spellcards.speech._get_openai_client")
    def test_client_is_reused(self, mock_get_client: MagicMock) -> None:
        service = OpenAISpeechService(api_key="key")
        service.synthesize("one", "en-US")
        service.synthesize("two", "en-US")
        mock_get_client.assert_called_once()

    @patch("spellcards.speech._get_openai_client")
    def test_api_error_returns_none(self, mock_get_client: MagicMock) -> None:
        client = mock_get_client.return_value
        client.audio.speech.create.side_effect = openai.OpenAIError("boom")

        assert OpenAISpeechService(api_key="key").synthesize("hello", "en-US") is None

    @patch("spellcards.speech._get_openai_client")
    def test_language_is_left_to_the_model(self, mock_get_client: MagicMock) -> None:
        client = mock_get_client.return_value
        client.audio.speech.create.return_value.content = b"mp3-bytes"

        audio = OpenAISpeechService(api_key="key").synthesize("hello", "xx-XX")

        assert audio == b"mp3-bytes"
        kwargs = client.audio.speech.create.call_args.kwargs
        assert kwargs["voice"] == "alloy"
        assert "xx-XX" not in kwargs.values()


def test_silent_service_produces_no_audio() -> None:
    assert SilentSpeechService().synthesize("anything", "pl-PL") is None


class TestAudioFileStore:
    def test_write_replaces_previous_clip(self) -> None:
        store = AudioFileStore()
        try:
            first = store.write(b"one")
            second = store.write(b"two")

            assert first != second
            assert not os.path.exists(first)
            assert os.listdir(store.directory) == [os.path.basename(second)]
            with open(second, "rb") as f:
                assert f.read() == b"two"
        finally:
            store.close()

    def test_close_removes_directory(self) -> None:
        store = AudioFileStore()
        store.write(b"clip")

        store.close()

        assert store.current_path is None
        assert not os.path.exists(store.directory)
