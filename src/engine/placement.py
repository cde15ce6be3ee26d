"""
Placement allocator: finds a non-overlapping origin for a word on the grid.

Origins are drawn at random inside the playable band. Early attempts
also keep clear of the grid centre, where the animated background
gathers; later attempts drop that constraint to raise the hit rate.
"""

import math
import random
from typing import Iterable, Optional, Set, Tuple

from .models import Position, TrackedWord


MAX_ATTEMPTS = 50
CENTER_AVOID_ATTEMPTS = 30

# Exclusion radius is min(cols, rows) * center_avoidance * this factor
CENTER_RADIUS_FACTOR = 0.3

Cell = Tuple[int, int]


def occupied_cells(words: Iterable[TrackedWord]) -> Set[Cell]:
    """Cells covered by the currently surfaced, non-found words."""
    cells: Set[Cell] = set()
    for word in words:
        if word.is_visible and not word.found:
            cells.update(word.cells())
    return cells


def is_free(col: int, row: int, length: int, occupied: Set[Cell]) -> bool:
    """Whether every cell of a word starting at (col, row) is unoccupied."""
    return all((col + i, row) not in occupied for i in range(length))


def find_position(
    word: str,
    cols: int,
    playable_rows: int,
    occupied: Set[Cell],
    center_avoidance: float = 0.0,
    row_offset: int = 0,
    rng: Optional[random.Random] = None,
    allow_fallback: bool = True,
) -> Optional[Position]:
    """
    Find an origin for ``word`` in the playable band.

    Args:
        word: The word text
        cols: Grid column count
        playable_rows: Number of rows in the playable band
        occupied: Cells already taken in this allocation batch
        center_avoidance: 0..1 strength of the centre exclusion zone
        row_offset: First playable row
        rng: Random source (module random if omitted)
        allow_fallback: Return an overlap-tolerant origin when every
            attempt fails, instead of None

    Returns:
        Position of the first character, or None if the word cannot fit
    """
    rng = rng or random.Random()
    length = len(word)

    if length == 0 or length > cols or playable_rows <= 0:
        return None

    max_col = cols - length
    center_col = cols / 2
    center_row = playable_rows / 2 + row_offset
    avoid_radius = min(cols, playable_rows) * center_avoidance * CENTER_RADIUS_FACTOR

    for attempt in range(MAX_ATTEMPTS):
        col = rng.randint(0, max_col)
        row = rng.randrange(playable_rows) + row_offset

        if attempt < CENTER_AVOID_ATTEMPTS and avoid_radius > 0:
            if math.hypot(col - center_col, row - center_row) < avoid_radius:
                continue

        if is_free(col, row, length, occupied):
            return Position(col, row)

    if not allow_fallback:
        return None

    # Overlap-tolerant fallback; caller re-validates before committing
    return Position(rng.randint(0, max_col), rng.randrange(playable_rows) + row_offset)
