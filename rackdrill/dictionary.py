"""Anagram index for finding every word spelled by exactly a set of tiles."""

from __future__ import annotations

import gzip
import io
import logging
from itertools import combinations_with_replacement
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

from rackdrill.errors import MalformedWordError

if TYPE_CHECKING:
    from rackdrill.distribution import Distribution
    from rackdrill.tiles import Tile

logger = logging.getLogger(__name__)

# Lookups enumerate C(len(alphabet) + n - 1, n) combinations for n wildcards.
MAX_WILDCARDS = 3

GZIP_MAGIC = b"\x1f\x8b"

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def signature(letters: Iterable[str]) -> str:
    """Upper-cased, sorted code points of *letters*: the anagram key."""
    return "".join(sorted("".join(letters).upper()))


def _check_word(word: str, position: int) -> None:
    for ch in word:
        if not ch.isalpha():
            raise MalformedWordError(word, position, ch)


class AnagramIndex:
    """Words grouped by signature. Immutable once built."""

    def __init__(self, buckets: dict[str, tuple[str, ...]] | None = None) -> None:
        self._buckets: dict[str, tuple[str, ...]] = dict(buckets or {})
        self._word_count = sum(len(words) for words in self._buckets.values())

    @classmethod
    def build(cls, words: Iterable[str], word_length: int = 0) -> AnagramIndex:
        """Index *words*, keeping only those of *word_length* letters if set.

        Every entry is validated, kept or not; the first malformed one
        aborts the whole build.
        """
        buckets: dict[str, list[str]] = {}
        for position, word in enumerate(words, start=1):
            _check_word(word, position)
            if word_length > 0 and len(word) != word_length:
                continue
            buckets.setdefault(signature(word), []).append(word)

        index = cls({sig: tuple(ws) for sig, ws in buckets.items()})
        logger.debug("indexed %d words under %d signatures", index.word_count, len(index))
        return index

    def lookup(self, letters: Iterable[str], wildcards: int = 0,
               alphabet: Sequence[str] = ()) -> list[str]:
        """Words made of exactly *letters* plus *wildcards* letters of *alphabet*."""
        letters = list(letters)
        if wildcards < 0:
            raise ValueError("wildcard count must not be negative")
        if wildcards > MAX_WILDCARDS:
            raise ValueError(f"at most {MAX_WILDCARDS} wildcards are supported, got {wildcards}")

        if wildcards == 0:
            words = list(self._buckets.get(signature(letters), ()))
        else:
            # Each combination is a distinct multiset, so no bucket is
            # visited twice and the result needs no deduplication.
            words = []
            for combination in combinations_with_replacement(alphabet, wildcards):
                words.extend(self._buckets.get(signature(letters + list(combination)), ()))

        words.sort(key=lambda w: (w.upper(), w))
        return words

    def find_words(self, tiles: Iterable[Tile], distribution: Distribution) -> list[str]:
        """Words spelled by *tiles*, wildcard tiles standing for any letter."""
        letters: list[str] = []
        wildcards = 0
        for tile in tiles:
            if tile.symbol == distribution.wildcard:
                wildcards += 1
            else:
                letters.append(tile.symbol)
        return self.lookup(letters, wildcards, distribution.alphabet)

    @property
    def word_count(self) -> int:
        return self._word_count

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        return any(w.upper() == word.upper() for w in self._buckets.get(signature(word), ()))


def _read_lines(path: Path) -> list[str]:
    raw = path.read_bytes()
    if raw[:2] == GZIP_MAGIC:
        raw = gzip.decompress(raw)
    with io.StringIO(raw.decode("utf-8")) as f:
        return [line.strip() for line in f]


def load_dictionary_file(path: str | Path, word_length: int = 0) -> AnagramIndex:
    """Load words from a file (one word per line), gzip-compressed or not.

    Blank lines are ignored but still count for the line numbers reported
    in errors.
    """
    path = Path(path)
    lines = _read_lines(path)

    def _words() -> Iterable[str]:
        for lineno, line in enumerate(lines, start=1):
            if not line:
                continue
            _check_word(line, lineno)
            yield line

    index = AnagramIndex.build(_words(), word_length=word_length)
    logger.info("loaded %d words from %s", index.word_count, path)
    return index


def default_dictionary_path(distribution: Distribution,
                            data_dir: str | Path | None = None) -> Path:
    """Path of the word list shipped for *distribution*, compressed or not."""
    base = Path(data_dir) if data_dir is not None else DATA_DIR
    stem = base / distribution.name / f"{distribution.dictionary}.txt"
    for candidate in (stem, stem.with_suffix(".txt.gz")):
        if candidate.exists():
            return candidate
    raise FileNotFoundError(
        f"Dictionary not found at {stem}(.gz). "
        f"Download the {distribution.dictionary.upper()} word list and place it there"
    )


def load_default_dictionary(distribution: Distribution, word_length: int = 0,
                            data_dir: str | Path | None = None) -> AnagramIndex:
    """Load the word list of *distribution* from the data/ directory."""
    return load_dictionary_file(default_dictionary_path(distribution, data_dir), word_length)
