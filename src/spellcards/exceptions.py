"""Exceptions raised by SpellCards."""


class SpellCardsError(Exception):
    """Base class for all SpellCards errors."""


class InvalidInputError(SpellCardsError, ValueError):
    """Raised when a session is started with unusable input.

    This covers an empty word list, a blank word and an unknown language code.
    """


class WordNotFoundError(SpellCardsError, KeyError):
    """Raised when an operation references a word that is not pending.

    Attributes:
        word_id: The identifier that could not be found.
    """

    def __init__(self, word_id: str):
        super().__init__(word_id)
        self.word_id = word_id

    def __str__(self) -> str:
        return f"Word {self.word_id!r} is not pending in this session"
