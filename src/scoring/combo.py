"""Combo bookkeeping and feedback."""

from typing import Optional

from .models import ComboState
from .score import effective_combo


# Combo counts that get a callout
COMBO_MILESTONES = (2, 3, 5, 7, 10, 15, 20, 25, 30)

# Each combo step speeds word appearances by 5%, up to combo 10
SPEED_STEP = 0.05
SPEED_MAX_COMBO = 10


def register_find(state: ComboState, correct_finds: int, now: float) -> ComboState:
    """
    Combo state after a correct find.

    Args:
        state: Combo state before the find
        correct_finds: Total correct finds including this one
        now: Timestamp of the find (ms)

    Returns:
        A new ComboState
    """
    combo = effective_combo(correct_finds)
    return ComboState(
        current_combo=combo,
        max_combo=max(state.max_combo, combo),
        last_find_at=now,
    )


def combo_message(combo: int) -> Optional[str]:
    """Callout text when a milestone combo is reached."""
    if combo in COMBO_MILESTONES:
        return "Combo!" if combo == 2 else f"{combo}x Combo!"
    if combo > COMBO_MILESTONES[-1]:
        return f"{combo}x Combo!"
    return None


def combo_speed_multiplier(combo: int) -> float:
    """Factor the scheduler divides its retry delays by."""
    return 1.0 + min(max(0, combo), SPEED_MAX_COMBO) * SPEED_STEP
