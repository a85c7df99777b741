"""ariba: spaced-repetition scheduling and learning analytics for flashcard decks."""

from ariba.consts import VERSION

__version__ = VERSION
