"""Shared fixtures for rackdrill tests."""

from __future__ import annotations

import random

import pytest

from rackdrill.dictionary import AnagramIndex, default_dictionary_path, load_dictionary_file
from rackdrill.distribution import FRENCH, Distribution, Letter
from rackdrill.predicates import DrawPredicate
from rackdrill.tiles import Tile, make_tile

WORDS = [
    # 4-letter
    "CHAT", "TACH", "ETAT", "TETE",
    # 5-letter
    "TAPES", "PATES", "SEPTA",
    # 6-letter
    "PATTES", "COWBOY",
    # 7-letter
    "COWBOYS", "POSEURS", "POUSSER", "SOUPERS",
    "PATATES", "POTATES", "TAPOTES", "PATENTS",
]


class AlwaysReject(DrawPredicate):
    """Refuses every candidate and counts how often it was asked."""

    name = "always-reject"

    def __init__(self) -> None:
        self.calls = 0
        self.resets = 0

    def reset(self, draw) -> None:
        self.resets += 1

    def take(self, tile, position) -> bool:
        self.calls += 1
        return False


@pytest.fixture
def words() -> list[str]:
    return list(WORDS)


@pytest.fixture
def small_index() -> AnagramIndex:
    """~20 hand-picked words. No file I/O."""
    return AnagramIndex.build(WORDS)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def tiny() -> Distribution:
    """Six tiles, one of them a wildcard: a 6-tile draw empties the pool."""
    return Distribution(
        name="tiny",
        description="Tiny",
        language="fr",
        letters=(
            Letter("?", 1, 0),
            Letter("A", 1, 1),
            Letter("C", 1, 3),
            Letter("O", 1, 1),
            Letter("S", 1, 1),
            Letter("T", 1, 1),
        ),
        tile_count=6,
    )


@pytest.fixture
def digraphs() -> Distribution:
    return Distribution(
        name="digraphs",
        description="Digraphs",
        language="es",
        letters=(
            Letter("A", 1, 1),
            Letter("C", 1, 3),
            Letter("CH", 1, 5),
            Letter("H", 1, 4),
            Letter("T", 1, 1),
        ),
        tile_count=5,
    )


@pytest.fixture
def tiles_of():
    """Build the tiles spelling a word, one per letter of the distribution."""
    def build(word: str, distribution: Distribution) -> list[Tile]:
        return [make_tile(distribution.letter(ch), distribution) for ch in word.upper()]
    return build


@pytest.fixture
def always_reject() -> AlwaysReject:
    return AlwaysReject()


@pytest.fixture(scope="session")
def ods8() -> AnagramIndex:
    """The French ODS8 word list from data/, when available."""
    try:
        path = default_dictionary_path(FRENCH)
    except FileNotFoundError:
        pytest.skip("ODS8 word list not found in data/french/")
    return load_dictionary_file(path)
