"""Catalog of the languages a drill can be run in."""

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidInputError


class Language(BaseModel):
    """A language offered for drills.

    Attributes:
        code: BCP 47 tag, also used as the session's language.
        name: Human readable name.
        flag: Flag emoji shown next to the name.
        special_characters: Letters offered on the on-screen keyboard.
    """

    code: str = Field(..., description="BCP 47 language tag")
    name: str = Field(..., description="Display name")
    flag: str = Field(..., description="Flag emoji")
    special_characters: Tuple[str, ...] = Field(
        default=(), description="Non-ASCII letters for the on-screen keyboard"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return f"{self.flag} {self.name}"


LANGUAGES: List[Language] = [
    Language(code="en-US", name="English (US)", flag="🇺🇸"),
    Language(code="en-GB", name="English (UK)", flag="🇬🇧"),
    Language(
        code="es-ES",
        name="Spanish",
        flag="🇪🇸",
        special_characters=("á", "é", "í", "ñ", "ó", "ú", "ü"),
    ),
    Language(
        code="fr-FR",
        name="French",
        flag="🇫🇷",
        special_characters=(
            "à", "â", "ç", "è", "é", "ê", "ë", "î", "ï", "ô", "ù", "û", "ü", "œ",
        ),
    ),
    Language(
        code="de-DE",
        name="German",
        flag="🇩🇪",
        special_characters=("ß", "ä", "ö", "ü"),
    ),
    Language(
        code="it-IT",
        name="Italian",
        flag="🇮🇹",
        special_characters=("à", "è", "é", "ì", "ò", "ù"),
    ),
    Language(
        code="pt-PT",
        name="Portuguese",
        flag="🇵🇹",
        special_characters=("à", "á", "â", "ã", "ç", "é", "ê", "í", "ó", "ô", "õ", "ú"),
    ),
    Language(
        code="pl-PL",
        name="Polish",
        flag="🇵🇱",
        special_characters=("ó", "ą", "ć", "ę", "ł", "ń", "ś", "ź", "ż"),
    ),
]

DEFAULT_LANGUAGE_CODE = LANGUAGES[0].code

_BY_CODE: Dict[str, Language] = {language.code: language for language in LANGUAGES}


def get_language(code: str) -> Language:
    """Looks up a language by its code.

    Args:
        code: The language tag, e.g. "fr-FR". Matching is case-insensitive.

    Returns:
        The matching Language.

    Raises:
        InvalidInputError: If the code is not in the catalog.
    """
    for known_code, language in _BY_CODE.items():
        if known_code.lower() == code.strip().lower():
            return language
    raise InvalidInputError(f"Unknown language code: {code}")


def get_language_codes() -> List[str]:
    return [language.code for language in LANGUAGES]
