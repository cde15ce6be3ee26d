"""Multiplier curves, bonus factors and the performance rating."""

from typing import Dict, Optional

from .models import Rating


COMBO_MULTIPLIER_CAP = 3.0
LEVEL_MULTIPLIER_CAP = 3.0

# Accuracy below this percentage earns no accuracy factor
ACCURACY_FLOOR = 80.0
MAX_ACCURACY_BOOST = 0.20

# Gaps between finds (seconds) for the speed factor
FAST_FIND_SECONDS = 2.0
SLOW_FIND_SECONDS = 6.0
MAX_SPEED_BOOST = 0.15

DIFFICULTY_MULTIPLIERS: Dict[str, float] = {
    "easy": 1.0,
    "average": 1.5,
    "hard": 2.0,
}


def combo_multiplier(combo: int) -> float:
    """
    Tiered combo multiplier.

    - 1-3: linear (1.1x, 1.2x, 1.3x)
    - 4-7: +0.15 per step (1.45x .. 1.9x)
    - 8-10: +0.2 per step (2.1x .. 2.5x)
    - 11+: keeps climbing from 2.5x, capped at 3.0x
    """
    if combo <= 0:
        return 1.0
    if combo <= 3:
        value = 1 + combo * 0.1
    elif combo <= 7:
        value = 1.3 + (combo - 3) * 0.15
    elif combo <= 10:
        value = 1.9 + (combo - 7) * 0.2
    else:
        extra = combo - 10
        value = 2.5 + extra * 0.2 + extra ** 1.5 * 0.05
    return min(round(value, 4), COMBO_MULTIPLIER_CAP)


def accuracy_factor(accuracy: float) -> float:
    """Up to +20% at 100% accuracy, nothing below 80%."""
    if accuracy < ACCURACY_FLOOR:
        return 1.0
    accuracy = min(accuracy, 100.0)
    return 1.0 + MAX_ACCURACY_BOOST * (accuracy - ACCURACY_FLOOR) / (100.0 - ACCURACY_FLOOR)


def speed_factor(seconds_since_last_find: Optional[float]) -> float:
    """Up to +15% for finds under 2 s apart, fading to nothing by 6 s."""
    if seconds_since_last_find is None or seconds_since_last_find < 0:
        return 1.0
    if seconds_since_last_find <= FAST_FIND_SECONDS:
        return 1.0 + MAX_SPEED_BOOST
    if seconds_since_last_find >= SLOW_FIND_SECONDS:
        return 1.0
    span = SLOW_FIND_SECONDS - FAST_FIND_SECONDS
    return 1.0 + MAX_SPEED_BOOST * (SLOW_FIND_SECONDS - seconds_since_last_find) / span


def performance_combo_multiplier(
    combo: int,
    accuracy: float = 100.0,
    seconds_since_last_find: Optional[float] = None,
) -> float:
    """Combo multiplier scaled by the accuracy and speed factors, still capped."""
    if combo <= 0:
        return 1.0
    value = combo_multiplier(combo) * accuracy_factor(accuracy) * speed_factor(seconds_since_last_find)
    return min(value, COMBO_MULTIPLIER_CAP)


def combo_bonus_points(combo: int, factor: float = 1.0) -> int:
    """Additive combo bonus, growing faster than linearly."""
    if combo <= 0:
        return 0
    return int(combo * 10 * (1 + (combo - 1) * 0.2) * factor)


def difficulty_multiplier(palette: str) -> float:
    """Fixed score multiplier of a palette tier."""
    return DIFFICULTY_MULTIPLIERS.get(palette, 1.0)


def level_multiplier(level: Optional[int]) -> float:
    """Slowly growing level multiplier, capped at 3.0x."""
    if not level:
        return 1.0
    return min(2.0 + (level - 1) / 50 * 0.5, LEVEL_MULTIPLIER_CAP)


def expected_level_time(level: int) -> float:
    """Rough seconds a level should take: 30 s plus 5 s per level."""
    return 30.0 + level * 5.0


def calculate_accuracy(correct_finds: int, total_attempts: int) -> float:
    """Percentage of correct clicks; 100 before any attempt."""
    if total_attempts <= 0:
        return 100.0
    return max(0.0, min(100.0, correct_finds / total_attempts * 100))


_RATING_ORDER = ["F", "D", "C", "B", "A", "S"]


def performance_rating(
    accuracy: float,
    level_time: Optional[float] = None,
    expected_time: Optional[float] = None,
) -> Rating:
    """
    Letter grade from accuracy, nudged by completion speed.

    Finishing in two thirds of the expected time or less lifts C/B/A one
    grade; taking over ~1.4x the expected time drops S/A/B one grade.
    """
    if accuracy >= 95:
        rating = "S"
    elif accuracy >= 85:
        rating = "A"
    elif accuracy >= 70:
        rating = "B"
    elif accuracy >= 50:
        rating = "C"
    elif accuracy >= 30:
        rating = "D"
    else:
        rating = "F"

    if level_time is None or level_time <= 0 or not expected_time:
        return rating

    index = _RATING_ORDER.index(rating)
    speed_ratio = expected_time / level_time
    if speed_ratio >= 1.5 and rating in ("C", "B", "A"):
        rating = _RATING_ORDER[index + 1]
    elif speed_ratio < 0.7 and rating in ("S", "A", "B"):
        rating = _RATING_ORDER[index - 1]

    return rating
