"""Test the placement allocator."""

import math
import random

from src.engine import Position, TrackedWord, LifecycleState, find_position, occupied_cells


class TestFindPosition:
    """Test finding origins on the grid."""

    def test_word_longer_than_grid(self):
        """A 25-letter word on a 20-column grid has no position."""
        assert find_position("A" * 25, 20, 10, set(), rng=random.Random(1)) is None

    def test_no_playable_rows(self):
        assert find_position("CAT", 20, 0, set(), rng=random.Random(1)) is None

    def test_empty_word(self):
        assert find_position("", 20, 10, set(), rng=random.Random(1)) is None

    def test_within_bounds(self):
        """Origins keep the word inside the columns and the playable band."""
        for seed in range(30):
            pos = find_position("PIXEL", 12, 6, set(), row_offset=4, rng=random.Random(seed))
            assert pos is not None
            assert 0 <= pos.col <= 12 - 5
            assert 4 <= pos.row < 10

    def test_avoids_occupied_cells(self):
        """With row 0 full, a full-width word lands on row 1."""
        occupied = {(c, 0) for c in range(10)}
        pos = find_position("ABCDEFGHIJ", 10, 2, occupied, rng=random.Random(5), allow_fallback=False)
        assert pos == Position(0, 1)

    def test_full_grid_without_fallback(self):
        """No free cell and no fallback gives None."""
        occupied = {(c, r) for c in range(10) for r in range(2)}
        assert find_position("CAT", 10, 2, occupied, rng=random.Random(5), allow_fallback=False) is None

    def test_full_grid_with_fallback(self):
        """The fallback returns an in-bounds origin even if it overlaps."""
        occupied = {(c, r) for c in range(10) for r in range(2)}
        pos = find_position("CAT", 10, 2, occupied, rng=random.Random(5))
        assert pos is not None
        assert 0 <= pos.col <= 7
        assert 0 <= pos.row < 2

    def test_center_avoidance(self):
        """Strong avoidance keeps origins out of the centre circle."""
        for seed in range(20):
            pos = find_position("X", 40, 40, set(), center_avoidance=1.0, rng=random.Random(seed))
            assert math.hypot(pos.col - 20, pos.row - 20) >= 12


class TestOccupiedCells:
    """Test collecting occupied cells."""

    def test_only_surfaced_words_count(self):
        """Hidden and found words do not occupy cells."""
        words = [
            TrackedWord(text="CAT", origin=Position(0, 0), state=LifecycleState.CLICKABLE),
            TrackedWord(text="DOG", origin=Position(0, 1), state=LifecycleState.HIDDEN),
            TrackedWord(text="SUN", origin=Position(0, 2), state=LifecycleState.FOUND),
            TrackedWord(text="OWL", origin=Position(5, 5), state=LifecycleState.SURFACED_PENDING),
        ]
        assert occupied_cells(words) == {(0, 0), (1, 0), (2, 0), (5, 5), (6, 5), (7, 5)}
