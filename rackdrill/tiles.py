"""Tiles, letter kinds and the vowel/consonant split collection."""

from __future__ import annotations

import random
import unicodedata
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator

from rackdrill.distribution import DEFAULT_VOWELS, Distribution, Letter
from rackdrill.errors import UnknownKindError


class Kind(Enum):
    VOWEL = "vowel"
    CONSONANT = "consonant"


def classify(letter: str, vowels: frozenset[str] = DEFAULT_VOWELS) -> Kind:
    """Return the kind of *letter* once diacritics are stripped.

    The letter is decomposed, combining marks are dropped, the rest is
    recomposed and upper-cased before the lookup in *vowels*, so that
    ``é`` and ``Ï`` count as vowels like ``E`` and ``I``.
    """
    decomposed = unicodedata.normalize("NFD", letter)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    base = unicodedata.normalize("NFC", stripped).upper()
    return Kind.VOWEL if base in vowels else Kind.CONSONANT


@dataclass(frozen=True)
class Tile:
    """One physical tile. Tiles have no identity beyond their fields."""
    letter: Letter
    kind: Kind
    carried_forward: bool = False

    @property
    def symbol(self) -> str:
        return self.letter.symbol

    @property
    def points(self) -> int:
        return self.letter.points

    def carried(self) -> Tile:
        return replace(self, carried_forward=True)

    def fresh(self) -> Tile:
        return replace(self, carried_forward=False)


def make_tile(letter: Letter, distribution: Distribution) -> Tile:
    """Instantiate a tile, wildcards always being filed as consonants."""
    if letter.symbol == distribution.wildcard:
        kind = Kind.CONSONANT
    else:
        kind = classify(letter.symbol, distribution.vowels)
    return Tile(letter, kind)


class SplitTiles:
    """Tiles partitioned by kind.

    Order inside a partition is meaningless, which lets removal swap the
    last tile into the freed slot.
    """

    def __init__(self, tiles: Iterable[Tile] = ()) -> None:
        self.vowels: list[Tile] = []
        self.consonants: list[Tile] = []
        self.add(tiles)

    def collection(self, kind: Kind) -> list[Tile]:
        if kind is Kind.VOWEL:
            return self.vowels
        if kind is Kind.CONSONANT:
            return self.consonants
        raise UnknownKindError(f"unknown kind {kind!r}")

    def add(self, tiles: Iterable[Tile]) -> None:
        for tile in tiles:
            self.collection(tile.kind).append(tile)

    def pick_at(self, kind: Kind, idx: int) -> Tile:
        """Remove and return the tile at *idx* of the *kind* partition."""
        tiles = self.collection(kind)
        tile = tiles[idx]
        last = tiles.pop()
        if idx < len(tiles):
            tiles[idx] = last
        return tile

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self.vowels)
        rng.shuffle(self.consonants)

    def tiles(self) -> list[Tile]:
        """Snapshot of all tiles, vowels first."""
        return self.vowels + self.consonants

    def replace(self, tiles: Iterable[Tile]) -> None:
        self.vowels = []
        self.consonants = []
        self.add(tiles)

    def count(self, kind: Kind) -> int:
        return len(self.collection(kind))

    def is_empty(self) -> bool:
        return not self.vowels and not self.consonants

    def __len__(self) -> int:
        return len(self.vowels) + len(self.consonants)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles())

    def __str__(self) -> str:
        return " ".join(tile.symbol for tile in self.tiles())
