"""Data models for the scoring engine."""

from typing import Optional, Literal
from pydantic import BaseModel, Field


# Type aliases
Rating = Literal["S", "A", "B", "C", "D", "F"]


class ScoreDelta(BaseModel):
    """Points awarded for a single correct find."""
    base_points: int = 0
    time_bonus: int = 0
    accuracy: float = 100.0  # percent
    accuracy_bonus: int = 0
    combo: int = 0
    combo_bonus: int = 0
    combo_multiplier: float = 1.0
    accuracy_factor: float = 1.0
    speed_factor: float = 1.0
    difficulty_multiplier: float = 1.0
    final_score: int = 0


class ScoreBreakdown(BaseModel):
    """Itemized end-of-level score."""
    words_found: int = 0
    total_points: int = 0  # sum of found words' point values
    time_bonus: int = 0
    accuracy: float = 100.0
    accuracy_bonus: int = 0
    perfect_accuracy_bonus: int = 0
    combo: int = 0  # effective combo used for the multiplier
    combo_multiplier: float = 1.0
    combo_bonus: int = 0
    word_length_bonus: int = 0
    speed_bonus: int = 0
    before_multipliers: int = 0
    level_multiplier: float = 1.0
    difficulty_multiplier: float = 1.0
    final_score: int = 0
    level_time: Optional[float] = None  # seconds, rounded to 0.1
    performance_rating: Rating = "F"


class ComboState(BaseModel):
    """
    Running combo for a level.

    The combo counts total correct finds past the third; misses never
    reset it. ``last_find_at`` only times UI feedback.
    """
    current_combo: int = Field(default=0, ge=0)
    max_combo: int = Field(default=0, ge=0)
    last_find_at: Optional[float] = None
