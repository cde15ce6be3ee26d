"""
Pydantic models for the session layer.

Configurations, click outcomes and results used by LevelSession and the
headless simulator.
"""

from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, Field

from ..engine.models import PaletteTier
from ..scoring.models import ScoreBreakdown, ScoreDelta


# Type aliases
ClickKind = Literal["find", "miss", "decoy", "empty"]


class SessionConfig(BaseModel):
    """Configuration for one level session."""
    level: int = Field(default=1, ge=1)
    palette: PaletteTier = "easy"
    canvas_width: float = Field(default=960, ge=0)
    canvas_height: float = Field(default=720, ge=0)
    char_width: Optional[float] = None  # defaults to the palette/level text size
    char_height: Optional[float] = None
    top_exclusion_px: float = Field(default=96, ge=0)
    bottom_exclusion_px: float = Field(default=96, ge=0)
    seed: Optional[int] = None


class ClickOutcome(BaseModel):
    """Result of relaying one click into the session."""
    text: str = ""
    kind: ClickKind
    at: float
    points: int = 0
    delta: Optional[ScoreDelta] = None
    combo: int = 0
    total_attempts: int = 0
    correct_finds: int = 0
    message: Optional[str] = None  # combo callout, if any

    @property
    def is_find(self) -> bool:
        return self.kind == "find"


class ProfileTotals(BaseModel):
    """Read-only cumulative profile totals."""
    total_play_time: float = 0.0  # seconds
    total_score: int = 0
    levels_completed: int = 0


class SessionResult(BaseModel):
    """Result of a finished level session."""
    level: int
    palette: PaletteTier = "easy"
    completed: bool = False
    end_reason: str = ""
    running_score: int = 0
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    attempts: int = 0
    correct_finds: int = 0
    max_combo: int = 0
    active_seconds: float = 0.0
    paused_seconds: float = 0.0
    words: List[Dict] = Field(default_factory=list)
    clicks: List[ClickOutcome] = Field(default_factory=list)
    cumulative: Optional[ProfileTotals] = None


class BotConfig(BaseModel):
    """Behaviour of the simulated player."""
    accuracy: float = Field(default=0.85, ge=0.0, le=1.0)  # chance a click on a target lands
    reaction_ms: float = Field(default=600, ge=0)
    decoy_click_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    stray_click_rate: float = Field(default=0.01, ge=0.0, le=1.0)  # per-tick empty clicks


class SimulationConfig(BaseModel):
    """Configuration for a headless simulation run."""
    levels: List[int] = Field(default_factory=lambda: [1])
    palette: PaletteTier = "easy"
    seed: Optional[int] = None
    tick_ms: float = Field(default=100, gt=0)
    max_level_seconds: float = Field(default=180, gt=0)
    canvas_width: float = Field(default=960, gt=0)
    canvas_height: float = Field(default=720, gt=0)
    top_exclusion_px: float = Field(default=96, ge=0)
    bottom_exclusion_px: float = Field(default=96, ge=0)
    bot: BotConfig = Field(default_factory=BotConfig)

    @property
    def num_levels(self) -> int:
        """Number of levels to play (derived from the levels list)."""
        return len(self.levels)


class SimulationResult(BaseModel):
    """Result of a complete simulation run."""
    config: SimulationConfig
    sessions: List[SessionResult] = Field(default_factory=list)
    total_score: int = 0
    levels_completed: int = 0
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
