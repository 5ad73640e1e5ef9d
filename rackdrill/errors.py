"""Exceptions raised by the drill core."""

from __future__ import annotations


class RackdrillError(Exception):
    """Base class for every error raised by rackdrill."""


class ConfigurationError(RackdrillError, ValueError):
    """Session parameters, distribution or predicate settings are invalid."""


class MalformedWordError(RackdrillError, ValueError):
    """A dictionary entry contains a character that is not a letter."""

    def __init__(self, word: str, position: int, char: str) -> None:
        super().__init__(
            f"invalid word {word!r} at line {position}: {char!r} is not a letter"
        )
        self.word = word
        self.position = position
        self.char = char


class UnavailableLetterError(RackdrillError, ValueError):
    """A played word needs a letter the current draw does not hold."""

    def __init__(self, letter: str, word: str) -> None:
        super().__init__(f"word {word!r} contains unavailable letter {letter!r}")
        self.letter = letter
        self.word = word


class EmptyWordError(RackdrillError, ValueError):
    """A word was played without any letter."""

    def __init__(self) -> None:
        super().__init__("cannot play an empty word")


class UnknownKindError(RackdrillError, RuntimeError):
    """A tile kind outside of vowel/consonant reached the sampler."""
