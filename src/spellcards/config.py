"""Runtime settings read from the environment and an optional .env file."""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .languages import DEFAULT_LANGUAGE_CODE


class Settings(BaseSettings):
    """Settings shared by the CLI and the web demo.

    Values come from SPELLCARDS_* environment variables, except the OpenAI
    key which uses the standard OPENAI_API_KEY. Malformed values raise a
    pydantic ValidationError naming the offending variable.

    Attributes:
        language: Default language code for new sessions (SPELLCARDS_LANGUAGE).
        ignore_accents: Default accent handling for new sessions
            (SPELLCARDS_IGNORE_ACCENTS).
        speech_service: Name of the speech service, "openai" or "silent"
            (SPELLCARDS_SPEECH). Defaults to "openai" when a key is set.
        openai_api_key: Key for the OpenAI speech service.
        seed: Optional seed for a reproducible word order (SPELLCARDS_SEED).
        server_port: Port of the web demo (SPELLCARDS_PORT).
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELLCARDS_",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    language: str = Field(default=DEFAULT_LANGUAGE_CODE)
    ignore_accents: bool = Field(default=False)
    speech_service: Optional[str] = Field(
        default=None, validation_alias="SPELLCARDS_SPEECH"
    )
    openai_api_key: Optional[str] = Field(default=None, validation_alias="OPENAI_API_KEY")
    seed: Optional[int] = Field(default=None)
    server_port: int = Field(default=7860, ge=1, le=65535, validation_alias="SPELLCARDS_PORT")

    @model_validator(mode="after")
    def _default_speech_service(self) -> "Settings":
        if self.speech_service is None:
            self.speech_service = "openai" if self.openai_api_key else "silent"
        return self


def load_settings() -> Settings:
    """Builds Settings from environment variables, loading .env first."""
    load_dotenv()
    return Settings()
