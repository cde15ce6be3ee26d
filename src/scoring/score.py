"""
Scoring engine: pure functions over explicit inputs.

Time inputs are seconds of *active* play. Hosts that pause must subtract
the paused span before calling in; nothing here knows about pausing.
"""

import math
from typing import List, Optional

from ..engine.models import PaletteTier, TrackedWord
from .models import ScoreBreakdown, ScoreDelta
from .multipliers import (
    accuracy_factor,
    calculate_accuracy,
    combo_bonus_points,
    combo_multiplier,
    difficulty_multiplier,
    expected_level_time,
    level_multiplier,
    performance_combo_multiplier,
    performance_rating,
    speed_factor,
)


# Points per second left on the clock
FIND_TIME_BONUS_RATE = 2
LEVEL_TIME_BONUS_RATE = 3

PERFECT_ACCURACY_BONUS = 50
WORD_LENGTH_BONUS_RATE = 2

# Combo only starts counting after this many finds
COMBO_START_FINDS = 3


def effective_combo(words_found: int, max_combo: int = 0) -> int:
    """Combo from total finds past the third, or a larger tracked maximum."""
    return max(max(0, words_found - COMBO_START_FINDS), max_combo)


def score_single_find(
    word: TrackedWord,
    time_remaining: Optional[float] = None,
    combo: int = 0,
    total_attempts: int = 0,
    correct_finds: int = 0,
    palette: PaletteTier = "easy",
    seconds_since_last_find: Optional[float] = None,
) -> ScoreDelta:
    """
    Score one correct find.

    Accuracy and speed compound twice: once through the combo
    multiplier and again through the additive combo bonus.

    Args:
        word: The word just found
        time_remaining: Seconds left, or None when the level is untimed
        combo: Current combo count
        total_attempts: Clicks so far, including this one
        correct_finds: Correct finds so far, including this one
        palette: Palette tier, sets the difficulty multiplier
        seconds_since_last_find: Gap since the previous find, if any

    Returns:
        ScoreDelta with every component of the award
    """
    base_points = 0 if word.is_decoy else word.point_value
    time_bonus = math.floor(max(0.0, time_remaining) * FIND_TIME_BONUS_RATE) if time_remaining else 0

    accuracy = calculate_accuracy(correct_finds, total_attempts)
    accuracy_bonus = math.floor(accuracy)

    acc_factor = accuracy_factor(accuracy)
    spd_factor = speed_factor(seconds_since_last_find)
    multiplier = performance_combo_multiplier(combo, accuracy, seconds_since_last_find)
    combo_bonus = combo_bonus_points(combo, acc_factor * spd_factor)

    difficulty = difficulty_multiplier(palette)
    final_score = math.floor(
        (base_points + time_bonus + accuracy_bonus + combo_bonus) * multiplier * difficulty
    )

    return ScoreDelta(
        base_points=base_points,
        time_bonus=time_bonus,
        accuracy=accuracy,
        accuracy_bonus=accuracy_bonus,
        combo=max(0, combo),
        combo_bonus=combo_bonus,
        combo_multiplier=multiplier,
        accuracy_factor=acc_factor,
        speed_factor=spd_factor,
        difficulty_multiplier=difficulty,
        final_score=max(0, final_score),
    )


def _speed_bonus(
    level_time: Optional[float],
    time_remaining: Optional[float],
    level: Optional[int],
) -> int:
    """
    Level speed bonus.

    Timed levels measure the share of the clock actually used,
    ``level_time / (level_time + time_remaining)``, and pay out when under
    half was used. This is the inverse of the remaining-time ratio the game
    once computed, which rewarded slow play despite its intent. Untimed
    levels compare against ``expected_level_time(level)``.
    """
    if level_time is None or level_time < 0:
        return 0

    if time_remaining is not None:
        # Timed level: reward using under half the clock
        available = level_time + max(0.0, time_remaining)
        if available <= 0:
            return 0
        used_pct = level_time / available * 100
        return math.floor((50 - used_pct) * 5) if used_pct < 50 else 0

    if level:
        expected = expected_level_time(level)
        if level_time < expected:
            return math.floor((1 - level_time / expected) * 100)

    return 0


def finalize_level_score(
    words: List[TrackedWord],
    time_remaining: Optional[float] = None,
    max_combo: int = 0,
    total_attempts: int = 0,
    correct_finds: int = 0,
    level_time: Optional[float] = None,
    palette: PaletteTier = "easy",
    level: Optional[int] = None,
) -> ScoreBreakdown:
    """
    Compute the end-of-level score.

    Additive bonuses are summed first, then the combo, level and
    difficulty multipliers are applied in that order; only the final
    result is floored.

    Args:
        words: Every tracked word of the level (found ones are scored)
        time_remaining: Seconds left, or None when untimed
        max_combo: Externally tracked maximum combo
        total_attempts: Total clicks
        correct_finds: Total correct finds
        level_time: Active seconds spent on the level
        palette: Palette tier
        level: Level number

    Returns:
        ScoreBreakdown with the final score and every component
    """
    found = [w for w in words if w.found and not w.is_decoy]
    words_found = len(found)
    total_points = sum(w.point_value for w in found)

    combo = effective_combo(words_found, max_combo)
    multiplier = combo_multiplier(combo)
    combo_bonus = combo_bonus_points(combo)

    time_bonus = math.floor(max(0.0, time_remaining) * LEVEL_TIME_BONUS_RATE) if time_remaining else 0

    accuracy = calculate_accuracy(correct_finds, total_attempts)
    accuracy_bonus = math.floor(accuracy)
    perfect_bonus = PERFECT_ACCURACY_BONUS if accuracy >= 100 else 0

    average_length = sum(w.length for w in found) / words_found if words_found else 0.0
    word_length_bonus = math.floor(average_length * words_found * WORD_LENGTH_BONUS_RATE)

    speed_bonus = _speed_bonus(level_time, time_remaining, level)

    before_multipliers = (
        total_points + time_bonus + accuracy_bonus + perfect_bonus
        + combo_bonus + word_length_bonus + speed_bonus
    )

    lvl_multiplier = level_multiplier(level)
    difficulty = difficulty_multiplier(palette)
    final_score = math.floor(before_multipliers * multiplier * lvl_multiplier * difficulty)

    rating = performance_rating(
        accuracy,
        level_time,
        expected_level_time(level) if level else None,
    )

    return ScoreBreakdown(
        words_found=words_found,
        total_points=total_points,
        time_bonus=time_bonus,
        accuracy=accuracy,
        accuracy_bonus=accuracy_bonus,
        perfect_accuracy_bonus=perfect_bonus,
        combo=combo,
        combo_multiplier=multiplier,
        combo_bonus=combo_bonus,
        word_length_bonus=word_length_bonus,
        speed_bonus=speed_bonus,
        before_multipliers=before_multipliers,
        level_multiplier=lvl_multiplier,
        difficulty_multiplier=difficulty,
        final_score=max(0, final_score),
        level_time=round(level_time, 1) if level_time is not None else None,
        performance_rating=rating,
    )
