"""Scoring engine for found words and completed levels."""

from .models import ScoreDelta, ScoreBreakdown, ComboState, Rating
from .multipliers import (
    combo_multiplier,
    performance_combo_multiplier,
    accuracy_factor,
    speed_factor,
    difficulty_multiplier,
    level_multiplier,
    calculate_accuracy,
    performance_rating,
)
from .score import score_single_find, finalize_level_score, effective_combo
from .combo import register_find, combo_message, combo_speed_multiplier

__all__ = [
    # Models
    "ScoreDelta",
    "ScoreBreakdown",
    "ComboState",
    "Rating",
    # Multipliers
    "combo_multiplier",
    "performance_combo_multiplier",
    "accuracy_factor",
    "speed_factor",
    "difficulty_multiplier",
    "level_multiplier",
    "calculate_accuracy",
    "performance_rating",
    # Scoring
    "score_single_find",
    "finalize_level_score",
    "effective_combo",
    # Combo
    "register_find",
    "combo_message",
    "combo_speed_multiplier",
]
