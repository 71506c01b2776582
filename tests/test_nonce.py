"""Unit tests for the nonce counter."""

from __future__ import annotations

from lendpair.chain.nonce import SequenceCounter


class TestSequenceCounter:
    """Tests for SequenceCounter.advance ordering."""

    def test_first_advance_is_seed_plus_one(self) -> None:
        counter = SequenceCounter.create(41)
        assert counter.advance() == 42

    def test_monotonic_without_gaps(self) -> None:
        seed = 9
        counter = SequenceCounter.create(seed)
        issued = [counter.advance() for _ in range(50)]
        assert issued == list(range(seed + 1, seed + 51))

    def test_no_repeats(self) -> None:
        counter = SequenceCounter.create(-1)
        issued = [counter.advance() for _ in range(100)]
        assert len(set(issued)) == len(issued)

    def test_value_tracks_last_issued(self) -> None:
        counter = SequenceCounter.create(3)
        assert counter.value == 3
        counter.advance()
        counter.advance()
        assert counter.value == 5

    def test_for_next_nonce_reproduces_chain_nonce(self) -> None:
        # eth_getTransactionCount returned 17: the first tx must use 17
        counter = SequenceCounter.for_next_nonce(17)
        assert counter.advance() == 17
        assert counter.advance() == 18

    def test_fresh_account(self) -> None:
        counter = SequenceCounter.for_next_nonce(0)
        assert counter.advance() == 0


class TestIndependence:
    """Two counters never share state."""

    def test_counters_do_not_interfere(self) -> None:
        a = SequenceCounter.create(0)
        b = SequenceCounter.create(0)
        assert a.advance() == 1
        assert a.advance() == 2
        assert b.advance() == 1
        assert a.value == 2

    def test_counters_are_not_equal_by_value(self) -> None:
        a = SequenceCounter.create(5)
        b = SequenceCounter.create(5)
        assert a is not b
        assert a != b
