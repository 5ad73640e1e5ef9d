"""Tile distributions per language edition and the registry holding them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from rackdrill.errors import ConfigurationError

WILDCARD = "?"

# Letters counted as vowels once diacritics are stripped.
DEFAULT_VOWELS: frozenset[str] = frozenset("AEIOUY")


@dataclass(frozen=True)
class Letter:
    """A letter of a distribution: how many tiles carry it and what it scores."""
    symbol: str
    frequency: int
    points: int


@dataclass(frozen=True)
class Distribution:
    """The full set of tiles of one language edition."""
    name: str
    description: str
    language: str
    letters: tuple[Letter, ...]
    tile_count: int
    wildcard: str = WILDCARD
    vowels: frozenset[str] = DEFAULT_VOWELS
    dictionary: str = ""

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for letter in self.letters:
            if not letter.symbol:
                raise ConfigurationError(f"{self.name}: letter symbols must not be empty")
            if letter.symbol in seen:
                raise ConfigurationError(
                    f"{self.name}: letter {letter.symbol!r} is declared twice"
                )
            seen.add(letter.symbol)
            if letter.frequency < 0 or letter.points < 0:
                raise ConfigurationError(
                    f"{self.name}: letter {letter.symbol!r} has a negative frequency or value"
                )
            if letter.symbol == self.wildcard and letter.points != 0:
                raise ConfigurationError(f"{self.name}: the wildcard must be worth 0 points")

        total = sum(letter.frequency for letter in self.letters)
        if total != self.tile_count:
            raise ConfigurationError(
                f"{self.name}: letters add up to {total} tiles, expected {self.tile_count}"
            )

    @property
    def alphabet(self) -> tuple[str, ...]:
        """Every non-wildcard letter, deduplicated and sorted."""
        return tuple(sorted({
            letter.symbol for letter in self.letters if letter.symbol != self.wildcard
        }))

    def letter(self, symbol: str) -> Letter | None:
        for letter in self.letters:
            if letter.symbol == symbol:
                return letter
        return None


def _letters(table: dict[str, tuple[int, int]]) -> tuple[Letter, ...]:
    """Build letters from a ``{symbol: (frequency, points)}`` table."""
    return tuple(
        Letter(symbol.upper(), frequency, points)
        for symbol, (frequency, points) in table.items()
    )


# French edition, 102 tiles.
# https://en.wikipedia.org/wiki/Scrabble_letter_distributions#French
FRENCH = Distribution(
    name="french",
    description="Français",
    language="fr",
    letters=_letters({
        WILDCARD: (2, 0),
        "A": (9, 1), "B": (2, 3), "C": (2, 3), "D": (3, 2), "E": (15, 1),
        "F": (2, 4), "G": (2, 2), "H": (2, 4), "I": (8, 1), "J": (1, 8),
        "K": (1, 10), "L": (5, 1), "M": (3, 2), "N": (6, 1), "O": (6, 1),
        "P": (2, 3), "Q": (1, 8), "R": (6, 1), "S": (6, 1), "T": (6, 1),
        "U": (6, 1), "V": (2, 4), "W": (1, 10), "X": (1, 10), "Y": (1, 10),
        "Z": (1, 10),
    }),
    tile_count=102,
    dictionary="ods8",
)

# English edition, 100 tiles.
# https://en.wikipedia.org/wiki/Scrabble_letter_distributions#English
ENGLISH = Distribution(
    name="english",
    description="English",
    language="en",
    letters=_letters({
        WILDCARD: (2, 0),
        "A": (9, 1), "B": (2, 3), "C": (2, 3), "D": (4, 2), "E": (12, 1),
        "F": (2, 4), "G": (3, 2), "H": (2, 4), "I": (9, 1), "J": (1, 8),
        "K": (1, 5), "L": (4, 1), "M": (2, 3), "N": (6, 1), "O": (8, 1),
        "P": (2, 3), "Q": (1, 10), "R": (6, 1), "S": (4, 1), "T": (6, 1),
        "U": (4, 1), "V": (2, 4), "W": (2, 4), "X": (1, 8), "Y": (2, 4),
        "Z": (1, 10),
    }),
    tile_count=100,
    dictionary="sowpods",
)


class DistributionRegistry:
    """Named distributions available to a running program."""

    def __init__(self, distributions: Iterable[Distribution] = ()) -> None:
        self._distributions: dict[str, Distribution] = {}
        for distribution in distributions:
            self.register(distribution)

    def register(self, distribution: Distribution) -> None:
        if distribution.name in self._distributions:
            raise ConfigurationError(f"distribution {distribution.name!r} already registered")
        self._distributions[distribution.name] = distribution

    def get(self, name: str) -> Distribution:
        try:
            return self._distributions[name]
        except KeyError:
            raise ConfigurationError(f"unknown distribution: {name}") from None

    def names(self) -> list[str]:
        return sorted(self._distributions)

    def __contains__(self, name: object) -> bool:
        return name in self._distributions

    def __iter__(self) -> Iterator[Distribution]:
        return iter(self._distributions[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._distributions)


def default_registry() -> DistributionRegistry:
    """Registry with every edition shipped with the program."""
    return DistributionRegistry([ENGLISH, FRENCH])
