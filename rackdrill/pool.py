"""Tile pool manager — tracks undrawn tiles and handles constrained draws."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Sequence

from rackdrill.distribution import Distribution
from rackdrill.predicates import DrawPredicate, accepts
from rackdrill.tiles import Kind, SplitTiles, Tile, make_tile

logger = logging.getLogger(__name__)

# Candidates refused by the predicates before one is taken regardless.
MAX_PREDICATE_RETRIES = 50


class TilePool(SplitTiles):
    """The bag: every tile of a distribution not currently drawn or played."""

    def __init__(self, distribution: Distribution, rng: random.Random | None = None) -> None:
        """Fill the pool with ``frequency`` tiles per letter, shuffled."""
        super().__init__()
        self.distribution = distribution
        self.rng = rng or random.Random()
        for letter in distribution.letters:
            tile = make_tile(letter, distribution)
            self.add([tile] * letter.frequency)
        self.shuffle(self.rng)

    def _pick(self, count: int, size: Callable[[], int],
              predicates: Sequence[DrawPredicate],
              locate: Callable[[int], tuple[Kind, int]]) -> list[Tile]:
        drawn: list[Tile] = []
        for position in range(count):
            if size() == 0:
                # Exhausted: a short draw is fine.
                break
            self.shuffle(self.rng)
            for _ in range(MAX_PREDICATE_RETRIES + 1):
                idx = self.rng.randrange(size())
                kind, at = locate(idx)
                if accepts(predicates, self.collection(kind)[at], position):
                    break
            # After the last retry the candidate is kept anyway.
            drawn.append(self.pick_at(kind, at))
        return drawn

    def draw_by_kind(self, kind: Kind, count: int,
                     predicates: Sequence[DrawPredicate] = ()) -> list[Tile]:
        """Draw up to *count* tiles of *kind*."""
        tiles = self.collection(kind)
        drawn = self._pick(count, lambda: len(tiles), predicates, lambda idx: (kind, idx))
        logger.debug("drew %d/%d %ss: %s", len(drawn), count, kind.value,
                     " ".join(t.symbol for t in drawn))
        return drawn

    def draw_random(self, count: int,
                    predicates: Sequence[DrawPredicate] = ()) -> list[Tile]:
        """Draw up to *count* tiles of any kind."""

        def locate(idx: int) -> tuple[Kind, int]:
            if idx < len(self.vowels):
                return Kind.VOWEL, idx
            return Kind.CONSONANT, idx - len(self.vowels)

        drawn = self._pick(count, lambda: len(self), predicates, locate)
        logger.debug("drew %d/%d tiles: %s", len(drawn), count,
                     " ".join(t.symbol for t in drawn))
        return drawn

    def put_back(self, tiles: Iterable[Tile]) -> None:
        """Return tiles to the pool, dropping their carried-forward flag."""
        self.add(tile.fresh() for tile in tiles)

    def remaining(self) -> int:
        """Number of tiles left in the pool."""
        return len(self)
