"""
Level parameters and per-level timing tables.

Everything here is a pure function of the level number.
"""

from typing import Dict, Tuple

from .models import Difficulty, LevelParameters


# Base animation settings per difficulty tier
DIFFICULTY_SETTINGS: Dict[Difficulty, Dict[str, float]] = {
    Difficulty.EASY: {"tick_interval_ms": 100, "letter_update_rate": 0.03, "center_avoidance": 0.3},
    Difficulty.MEDIUM: {"tick_interval_ms": 60, "letter_update_rate": 0.05, "center_avoidance": 0.5},
    Difficulty.HARD: {"tick_interval_ms": 40, "letter_update_rate": 0.08, "center_avoidance": 0.7},
    Difficulty.EXTREME: {"tick_interval_ms": 25, "letter_update_rate": 0.12, "center_avoidance": 0.9},
}

# (min, max) word length per tier
WORD_LENGTH_BOUNDS: Dict[Difficulty, Tuple[int, int]] = {
    Difficulty.EASY: (3, 4),
    Difficulty.MEDIUM: (4, 5),
    Difficulty.HARD: (5, 7),
    Difficulty.EXTREME: (6, 8),
}

MIN_WORD_COUNT = 3
MAX_WORD_COUNT = 10

# Scheduler timing
SETTLE_DELAY_MS = 200
MAX_CLICKABLE_MS = 3000


def difficulty_for_level(level: int) -> Difficulty:
    """Map a level number to its difficulty tier."""
    if level <= 5:
        return Difficulty.EASY
    if level <= 10:
        return Difficulty.MEDIUM
    if level <= 20:
        return Difficulty.HARD
    return Difficulty.EXTREME


def word_count_for_level(level: int) -> int:
    """
    Number of target words for a level.

    Grows in stages, with some levels in the middle bands dropping a
    word for variety.
    """
    if level <= 3:
        count = 3
    elif level <= 7:
        count = 4 + (level - 4) // 2
    elif level <= 15:
        base = 5 + (level - 8) // 2
        count = base - 1 if level % 3 == 0 else base
    elif level <= 25:
        base = 7 + (level - 16) // 3
        count = base - 1 if level % 4 == 0 else base
    else:
        count = min(8 + (level - 26) // 5, MAX_WORD_COUNT)

    return max(MIN_WORD_COUNT, min(count, MAX_WORD_COUNT))


def derive_level_parameters(level: int) -> LevelParameters:
    """
    Derive the full parameter set for a level.

    Args:
        level: Level number (1 or higher)

    Returns:
        Immutable LevelParameters

    Raises:
        ValueError: If level is below 1
    """
    if level < 1:
        raise ValueError(f"Level must be 1 or higher, got {level}")

    difficulty = difficulty_for_level(level)
    settings = DIFFICULTY_SETTINGS[difficulty]
    min_len, max_len = WORD_LENGTH_BOUNDS[difficulty]

    # Progressive scaling within a tier
    progression = 1 + (level - 1) * 0.1

    return LevelParameters(
        level=level,
        difficulty=difficulty,
        word_count=word_count_for_level(level),
        min_word_length=min_len,
        max_word_length=max_len,
        tick_interval_ms=max(20, int(settings["tick_interval_ms"]) - (level - 1) * 2),
        letter_update_rate=min(0.15, settings["letter_update_rate"] * progression),
        time_limit=max(30, 120 - level * 2) if level > 10 else None,
        center_avoidance=min(0.95, settings["center_avoidance"] + (level - 1) * 0.02),
    )


def visibility_duration_range(level: int) -> Tuple[float, float]:
    """
    (min, max) surface duration in ms.

    Starts at 4-5 seconds and shrinks by 500 ms every 5 levels,
    bottoming out at 1-2 seconds.
    """
    tier = (max(1, level) - 1) // 5
    if tier >= 6:
        return 1000.0, 2000.0

    low = max(1000, 4000 - tier * 500)
    high = max(2000, 5000 - tier * 500)
    return float(min(low, high)), float(max(low, high))


def clickable_duration(level: int) -> float:
    """Clickable window length in ms, before the scheduler's cap."""
    level = max(1, level)
    if level <= 10:
        return 5000.0
    if level <= 30:
        return 4000.0
    if level <= 75:
        return 3000.0
    return 2000.0


def word_cooldown(level: int) -> float:
    """Minimum ms between two surfacings of the same text."""
    if level <= 5:
        return 15000.0
    if level <= 10:
        return 12000.0
    if level <= 15:
        return 10000.0
    if level <= 20:
        return 8000.0
    return 6000.0


def max_visible_words(level: int) -> int:
    """How many words may be surfaced at once."""
    return 1 if level <= 10 else 2
