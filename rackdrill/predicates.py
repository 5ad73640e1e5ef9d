"""Draw predicates: stateful filters consulted while sampling tiles.

A predicate is reset with the tiles already in the draw before sampling
starts, then asked through :meth:`DrawPredicate.take` whether each
candidate may join the draw. Predicates are chained: the first one to
refuse a candidate makes the sampler pick another one.

Predicates are built from a ``name=value,...`` string by
:func:`parse_predicates`; :data:`PREDICATE_KINDS` is the closed set of
names it accepts.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from rackdrill.errors import ConfigurationError
from rackdrill.tiles import Kind, Tile


class DrawPredicate:
    """Base class of draw predicates."""

    name = ""

    def reset(self, draw: Iterable[Tile]) -> None:
        raise NotImplementedError

    def take(self, tile: Tile, position: int) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        return self.name


class DuplicateVowelsPredicate(DrawPredicate):
    """Refuse a vowel once *threshold* tiles of the same letter are in the draw."""

    name = "dup-vowels"

    def __init__(self, threshold: int) -> None:
        self.threshold = threshold
        self._draw: list[Tile] = []

    def reset(self, draw: Iterable[Tile]) -> None:
        self._draw = list(draw)

    def take(self, tile: Tile, position: int) -> bool:
        if tile.kind is not Kind.VOWEL:
            return True
        seen = sum(1 for t in self._draw if t.symbol == tile.symbol)
        if seen >= self.threshold:
            return False
        self._draw.append(tile)
        return True

    def describe(self) -> str:
        return f"{self.name}={self.threshold}"


def _threshold(name: str, value: str | None) -> int:
    if value is None or not value.strip():
        raise ConfigurationError(f"predicate '{name}' requires a value")
    try:
        threshold = int(value)
    except ValueError:
        raise ConfigurationError(
            f"predicate '{name}' expects an integer, got {value!r}"
        ) from None
    if threshold < 0:
        raise ConfigurationError(f"predicate '{name}' expects a non-negative value")
    return threshold


def _duplicate_vowels(value: str | None) -> DrawPredicate:
    return DuplicateVowelsPredicate(_threshold(DuplicateVowelsPredicate.name, value))


PREDICATE_KINDS: dict[str, Callable[[str | None], DrawPredicate]] = {
    DuplicateVowelsPredicate.name: _duplicate_vowels,
}


def parse_predicates(config: str) -> list[DrawPredicate]:
    """Parse ``"dup-vowels=2,..."`` into predicates, in order."""
    predicates: list[DrawPredicate] = []
    for pair in config.split(","):
        pair = pair.strip()
        if not pair:
            continue
        name, sep, value = pair.partition("=")
        name = name.strip()
        factory = PREDICATE_KINDS.get(name)
        if factory is None:
            raise ConfigurationError(f"unknown predicate: {name}")
        predicates.append(factory(value if sep else None))
    return predicates


def accepts(predicates: Sequence[DrawPredicate], tile: Tile, position: int) -> bool:
    """Run the predicate chain, stopping at the first refusal."""
    return all(p.take(tile, position) for p in predicates)
