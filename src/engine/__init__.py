"""Word-appearance engine: level parameters, word pool, placement and scheduling."""

from .models import (
    Difficulty,
    LifecycleState,
    PaletteTier,
    Position,
    LevelParameters,
    TextSizing,
    TrackedWord,
    WordPool,
)
from .levels import (
    derive_level_parameters,
    difficulty_for_level,
    visibility_duration_range,
    clickable_duration,
    word_cooldown,
    max_visible_words,
    SETTLE_DELAY_MS,
    MAX_CLICKABLE_MS,
)
from .grid import GridLayout, text_sizing, hit_test, render_grid
from .word_pool import select_word_pool, build_initial_words, mutate_word, word_points
from .placement import find_position, occupied_cells
from .scheduler import AppearanceScheduler

__all__ = [
    # Models
    "Difficulty",
    "LifecycleState",
    "PaletteTier",
    "Position",
    "LevelParameters",
    "TextSizing",
    "TrackedWord",
    "WordPool",
    # Level parameters
    "derive_level_parameters",
    "difficulty_for_level",
    "visibility_duration_range",
    "clickable_duration",
    "word_cooldown",
    "max_visible_words",
    "SETTLE_DELAY_MS",
    "MAX_CLICKABLE_MS",
    # Grid
    "GridLayout",
    "text_sizing",
    "hit_test",
    "render_grid",
    # Word pool
    "select_word_pool",
    "build_initial_words",
    "mutate_word",
    "word_points",
    # Placement
    "find_position",
    "occupied_cells",
    # Scheduling
    "AppearanceScheduler",
]
