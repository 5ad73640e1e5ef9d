"""Drill session: draw a hand, find its words, play one, carry the rest over."""

from __future__ import annotations

import logging
import random
import unicodedata
from dataclasses import dataclass, field
from enum import Enum

from rackdrill.dictionary import MAX_WILDCARDS, AnagramIndex
from rackdrill.distribution import Distribution
from rackdrill.errors import ConfigurationError, EmptyWordError, UnavailableLetterError
from rackdrill.pool import TilePool
from rackdrill.predicates import DrawPredicate
from rackdrill.tiles import Kind, SplitTiles, Tile

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 15


class State(Enum):
    DRAWING = "drawing"  # hand offered for accept/reject
    PLAYING = "playing"  # player is entering a word from the hand


@dataclass
class GameOptions:
    """Session parameters."""
    word_length: int = 7
    min_vowels: int = 0
    min_consonants: int = 0
    predicates: list[DrawPredicate] = field(default_factory=list)
    show_points: bool = False
    timer: float = 0.0

    def validate(self) -> None:
        if not MIN_WORD_LENGTH <= self.word_length <= MAX_WORD_LENGTH:
            raise ConfigurationError(
                f"word length must be between {MIN_WORD_LENGTH} and {MAX_WORD_LENGTH}, "
                f"got {self.word_length}"
            )
        if self.min_vowels < 0 or self.min_consonants < 0:
            raise ConfigurationError("minimum vowels and consonants must not be negative")
        if self.min_vowels + self.min_consonants > self.word_length:
            raise ConfigurationError(
                f"{self.min_vowels} vowels and {self.min_consonants} consonants "
                f"do not fit in a {self.word_length}-letter draw"
            )
        if self.timer < 0:
            raise ConfigurationError("timer duration must not be negative")


def _find_tile(tiles: list[Tile], word: str, pos: int) -> int:
    """Index of the longest tile symbol found at *pos* in *word*, or -1."""
    best = -1
    for i, tile in enumerate(tiles):
        if not word.startswith(tile.symbol, pos):
            continue
        if best == -1 or len(tile.symbol) > len(tiles[best].symbol):
            best = i
    return best


def _check_wildcards(distribution: Distribution, word_length: int) -> None:
    wildcard = distribution.letter(distribution.wildcard)
    if wildcard is None:
        return
    most = min(wildcard.frequency, word_length)
    if most > MAX_WILDCARDS:
        raise ConfigurationError(
            f"{distribution.name}: a {word_length}-tile draw may hold {most} wildcards, "
            f"at most {MAX_WILDCARDS} are supported"
        )


class GameSession:
    """One drill: the bag, the current draw and the words it spells."""

    def __init__(self, distribution: Distribution, index: AnagramIndex,
                 options: GameOptions | None = None,
                 rng: random.Random | None = None) -> None:
        self.options = options or GameOptions()
        self.options.validate()
        _check_wildcards(distribution, self.options.word_length)
        self.distribution = distribution
        self.index = index
        self.pool = TilePool(distribution, rng)
        self.draw = SplitTiles()
        self.state = State.DRAWING
        self.words: list[str] = []
        self.draw_count = 0
        self.play_count = 0
        self.played_tiles = 0

    @property
    def predicates(self) -> list[DrawPredicate]:
        return self.options.predicates

    def draw_tiles(self, min_vowels: int | None = None,
                   min_consonants: int | None = None) -> list[str]:
        """Complete the draw up to the word length and look up its words.

        Tiles carried over from the previous play are kept; the rest of the
        previous draw goes back to the pool first. The quotas are filled
        before the remaining slots are drawn from either kind.
        """
        if min_vowels is None:
            min_vowels = self.options.min_vowels
        if min_consonants is None:
            min_consonants = self.options.min_consonants

        self.reset_draw(full=False)
        self.draw_count += 1

        for predicate in self.predicates:
            predicate.reset(self.draw.tiles())

        for kind, minimum in ((Kind.VOWEL, min_vowels), (Kind.CONSONANT, min_consonants)):
            if minimum > 0:
                room = self.options.word_length - len(self.draw)
                wanted = min(max(0, minimum - self.draw.count(kind)), room)
                self.draw.add(self.pool.draw_by_kind(kind, wanted, self.predicates))

        missing = self.options.word_length - len(self.draw)
        if missing > 0:
            self.draw.add(self.pool.draw_random(missing, self.predicates))

        self.words = self.index.find_words(self.draw.tiles(), self.distribution)
        self.state = State.DRAWING
        logger.debug("draw %d.%d: %s (%d words)", self.play_count, self.draw_count,
                     self.draw, len(self.words))
        return self.words

    def accept_draw(self) -> None:
        """Mark the draw as being played.

        The state is informational: it is shown in snapshots and
        :meth:`play_word` does not require it.
        """
        self.state = State.PLAYING
        logger.debug("draw accepted: %s", self.draw)

    def reject_draw(self, full: bool = False) -> list[str]:
        """Throw the draw back and draw again.

        With *full*, the tiles carried over from earlier plays go back too.
        """
        if full:
            self.reset_draw(full=True)
        words = self.draw_tiles()
        logger.debug("draw rejected (full=%s), new draw: %s", full, self.draw)
        return words

    def _consume(self, word: str) -> tuple[list[Tile], list[Tile]]:
        remaining = self.draw.tiles()
        consumed: list[Tile] = []
        pos = 0
        while pos < len(word):
            idx = _find_tile(remaining, word, pos)
            if idx == -1:
                raise UnavailableLetterError(word[pos], word)
            tile = remaining.pop(idx)
            consumed.append(tile)
            pos += len(tile.symbol)
        return consumed, remaining

    def play_word(self, word: str, check_only: bool = False) -> list[Tile]:
        """Withdraw the tiles spelling *word* from the draw.

        A wildcard tile is only spent where the word spells the wildcard
        symbol itself. Raises :class:`UnavailableLetterError` when a letter
        is missing, in which case the draw is left untouched, and
        :class:`EmptyWordError` for a blank word. With *check_only* the draw
        is never modified. Returns the tiles the word uses.
        """
        normalized = unicodedata.normalize("NFC", word.strip()).upper()
        if not normalized:
            raise EmptyWordError()
        consumed, remaining = self._consume(normalized)
        if check_only:
            return consumed

        self.draw.replace(tile.carried() for tile in remaining)
        self.played_tiles += len(consumed)
        self.play_count += 1
        self.draw_count = 0
        self.words = []
        self.state = State.DRAWING
        logger.debug("played %s, %d tiles left in the pool, %d carried over",
                     normalized, len(self.pool), len(self.draw))
        return consumed

    def reset_draw(self, full: bool = False) -> None:
        """Put the drawn tiles back in the pool.

        Carried-over tiles stay in the draw unless *full* is set.
        """
        kept = [t for t in self.draw.tiles() if t.carried_forward and not full]
        returned = [t for t in self.draw.tiles() if full or not t.carried_forward]
        self.pool.put_back(returned)
        self.draw.replace(kept)

    def hand(self) -> list[Tile]:
        return self.draw.tiles()

    def is_finished(self) -> bool:
        return self.pool.is_empty() and self.draw.is_empty()

    def snapshot(self) -> dict:
        """Read-only view of the session, JSON serializable."""
        return {
            "distribution": self.distribution.name,
            "state": self.state.value,
            "draw": [
                {
                    "letter": t.symbol,
                    "points": t.points,
                    "kind": t.kind.value,
                    "carried_forward": t.carried_forward,
                }
                for t in self.hand()
            ],
            "words": list(self.words),
            "draw_count": self.draw_count,
            "play_count": self.play_count,
            "played_tiles": self.played_tiles,
            "pool_remaining": len(self.pool),
            "finished": self.is_finished(),
            "predicates": [p.describe() for p in self.predicates],
        }
