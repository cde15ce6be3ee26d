"""Data models for the word-appearance engine."""

from enum import Enum
from typing import List, Optional, NamedTuple, Literal, Tuple
from pydantic import BaseModel, Field, ConfigDict


# Type aliases
PaletteTier = Literal["easy", "average", "hard"]


class Difficulty(str, Enum):
    """Per-level difficulty tier, ordered from easiest to hardest."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"

    @property
    def rank(self) -> int:
        return list(Difficulty).index(self)


class LifecycleState(str, Enum):
    """Visibility lifecycle of a tracked word."""
    HIDDEN = "hidden"
    SURFACED_PENDING = "surfaced_pending"
    CLICKABLE = "clickable"
    FOUND = "found"


class Position(NamedTuple):
    """Grid cell of a word's first character."""
    col: int
    row: int


class LevelParameters(BaseModel):
    """Difficulty settings derived from a level number."""
    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    difficulty: Difficulty
    word_count: int = Field(..., ge=1)
    min_word_length: int = Field(..., ge=1)
    max_word_length: int = Field(..., ge=1)
    tick_interval_ms: int = Field(..., gt=0)  # grid animation rate
    letter_update_rate: float = Field(..., ge=0.0, le=1.0)
    time_limit: Optional[int] = None  # seconds
    center_avoidance: float = Field(..., ge=0.0, le=1.0)


class TextSizing(NamedTuple):
    """Font and character cell size in pixels."""
    font_size: int
    char_width: int
    char_height: int


class TrackedWord(BaseModel):
    """
    A word in play, owned and mutated by the AppearanceScheduler.

    Timestamps are milliseconds on the caller's clock. ``state`` is kept
    in step with the timestamps on every scheduler pass; use
    ``is_clickable(now)`` for an exact answer between passes.
    """

    text: str = Field(..., min_length=1)
    is_decoy: bool = False
    origin: Optional[Position] = None
    point_value: int = Field(default=0, ge=0)
    state: LifecycleState = LifecycleState.HIDDEN
    surfaced_at: Optional[float] = None
    surface_duration: Optional[float] = None
    clickable_from: Optional[float] = None
    clickable_until: Optional[float] = None
    found_at: Optional[float] = None

    @property
    def found(self) -> bool:
        return self.state == LifecycleState.FOUND

    @property
    def is_visible(self) -> bool:
        """True while surfaced, clickable or not."""
        return self.state in (LifecycleState.SURFACED_PENDING, LifecycleState.CLICKABLE)

    @property
    def length(self) -> int:
        return len(self.text)

    def cells(self) -> List[Tuple[int, int]]:
        """Grid cells covered by the word at its current origin."""
        if self.origin is None:
            return []
        return [(self.origin.col + i, self.origin.row) for i in range(self.length)]

    def is_clickable(self, now: float) -> bool:
        """Whether a click at ``now`` falls inside the clickable window."""
        if self.found or self.surfaced_at is None:
            return False
        if self.clickable_from is None or self.clickable_until is None:
            return False
        if self.surface_duration is not None and now - self.surfaced_at >= self.surface_duration:
            return False
        return self.clickable_from <= now <= self.clickable_until

    def time_left(self, now: float) -> float:
        """Milliseconds left in the clickable window (0 when not clickable)."""
        if not self.is_clickable(now):
            return 0.0
        return self.clickable_until - now

    def hide(self) -> None:
        """Return to Hidden, clearing the surfacing timestamps."""
        self.state = LifecycleState.HIDDEN
        self.surfaced_at = None
        self.clickable_from = None
        self.clickable_until = None


class WordPool(BaseModel):
    """Candidate real words and decoys for a level."""
    candidates: List[str] = Field(default_factory=list)
    decoys: List[str] = Field(default_factory=list)
