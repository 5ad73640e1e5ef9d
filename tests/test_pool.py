"""Tests for the tile pool and its constrained draws."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from rackdrill.distribution import ENGLISH, FRENCH
from rackdrill.errors import UnknownKindError
from rackdrill.pool import MAX_PREDICATE_RETRIES, TilePool
from rackdrill.predicates import DrawPredicate
from rackdrill.tiles import Kind


class TestCreate:
    @pytest.mark.parametrize("distribution", [FRENCH, ENGLISH], ids=["french", "english"])
    def test_frequencies(self, distribution) -> None:
        pool = TilePool(distribution, random.Random(1))
        assert len(pool) == distribution.tile_count
        counts = Counter(t.symbol for t in pool.tiles())
        for letter in distribution.letters:
            assert counts[letter.symbol] == letter.frequency

    def test_partitions(self) -> None:
        pool = TilePool(FRENCH, random.Random(1))
        assert all(t.kind is Kind.VOWEL for t in pool.vowels)
        assert all(t.kind is Kind.CONSONANT for t in pool.consonants)
        assert not any(t.carried_forward for t in pool.tiles())

    def test_wildcards_filed_as_consonants(self) -> None:
        pool = TilePool(FRENCH, random.Random(1))
        assert sum(1 for t in pool.consonants if t.symbol == "?") == 2

    def test_shuffled(self) -> None:
        # A fresh pool is shuffled; reshuffling must keep changing the order.
        pool = TilePool(FRENCH, random.Random(2))
        prev = str(pool)
        for _ in range(10):
            pool.shuffle(pool.rng)
            assert str(pool) != prev
            prev = str(pool)

    def test_seeded_pools_match(self) -> None:
        a = TilePool(FRENCH, random.Random(99))
        b = TilePool(FRENCH, random.Random(99))
        assert a.draw_random(7) == b.draw_random(7)


class TestDrawByKind:
    @pytest.mark.parametrize("kind", [Kind.VOWEL, Kind.CONSONANT])
    def test_kind_and_count(self, kind, rng) -> None:
        pool = TilePool(FRENCH, rng)
        before = pool.count(kind)
        drawn = pool.draw_by_kind(kind, 5)
        assert len(drawn) == 5
        assert all(t.kind is kind for t in drawn)
        assert pool.count(kind) == before - 5

    def test_drain(self, rng) -> None:
        pool = TilePool(FRENCH, rng)
        drawn = []
        while not pool.is_empty():
            drawn += pool.draw_by_kind(Kind.VOWEL, 3)
            drawn += pool.draw_by_kind(Kind.CONSONANT, 4)
        assert pool.vowels == []
        assert pool.consonants == []
        assert len(drawn) == FRENCH.tile_count

    def test_short_draw(self, tiny, rng) -> None:
        pool = TilePool(tiny, rng)
        drawn = pool.draw_by_kind(Kind.VOWEL, 5)
        assert sorted(t.symbol for t in drawn) == ["A", "O"]
        assert pool.draw_by_kind(Kind.VOWEL, 1) == []

    def test_zero(self, rng) -> None:
        pool = TilePool(FRENCH, rng)
        assert pool.draw_by_kind(Kind.CONSONANT, 0) == []
        assert len(pool) == FRENCH.tile_count

    def test_unknown_kind(self, rng) -> None:
        pool = TilePool(FRENCH, rng)
        with pytest.raises(UnknownKindError):
            pool.draw_by_kind("vowel", 1)


class TestDrawRandom:
    def test_count(self, rng) -> None:
        pool = TilePool(FRENCH, rng)
        drawn = pool.draw_random(7)
        assert len(drawn) == 7
        assert len(pool) == FRENCH.tile_count - 7

    def test_spans_both_kinds(self, tiny, rng) -> None:
        pool = TilePool(tiny, rng)
        drawn = pool.draw_random(10)
        assert sorted(t.symbol for t in drawn) == ["?", "A", "C", "O", "S", "T"]
        assert pool.is_empty()

    def test_drawn_tiles_leave_their_partition(self, rng) -> None:
        pool = TilePool(FRENCH, rng)
        drawn = pool.draw_random(20)
        vowels = sum(1 for t in drawn if t.kind is Kind.VOWEL)
        full = TilePool(FRENCH, random.Random(0))
        assert len(pool.vowels) == len(full.vowels) - vowels
        assert len(pool.consonants) == len(full.consonants) - (20 - vowels)


class TestPredicateRetries:
    def test_draw_by_kind_bounded(self, always_reject, rng) -> None:
        pool = TilePool(FRENCH, rng)
        drawn = pool.draw_by_kind(Kind.VOWEL, 3, [always_reject])
        assert len(drawn) == 3
        assert always_reject.calls == 3 * (MAX_PREDICATE_RETRIES + 1)

    def test_draw_random_bounded(self, always_reject, rng) -> None:
        pool = TilePool(FRENCH, rng)
        drawn = pool.draw_random(1, [always_reject])
        assert len(drawn) == 1
        assert always_reject.calls == MAX_PREDICATE_RETRIES + 1

    def test_chain_short_circuits(self, always_reject, rng) -> None:
        class Counting(DrawPredicate):
            calls = 0

            def reset(self, draw) -> None:
                pass

            def take(self, tile, position) -> bool:
                Counting.calls += 1
                return True

        pool = TilePool(FRENCH, rng)
        pool.draw_random(1, [always_reject, Counting()])
        assert Counting.calls == 0

    def test_positions_passed(self, rng) -> None:
        seen: list[int] = []

        class Recording(DrawPredicate):
            def reset(self, draw) -> None:
                pass

            def take(self, tile, position) -> bool:
                seen.append(position)
                return True

        pool = TilePool(FRENCH, rng)
        pool.draw_by_kind(Kind.CONSONANT, 4, [Recording()])
        assert seen == [0, 1, 2, 3]


class TestPutBack:
    def test_clears_carried_flag(self, rng) -> None:
        pool = TilePool(FRENCH, rng)
        drawn = [t.carried() for t in pool.draw_random(7)]
        pool.put_back(drawn)
        assert len(pool) == FRENCH.tile_count
        assert not any(t.carried_forward for t in pool.tiles())
        assert pool.remaining() == FRENCH.tile_count
