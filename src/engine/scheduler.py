"""
Appearance scheduler: decides, tick by tick, which words are surfaced.

Every transition is driven by the ``now`` timestamp passed in by the
caller (milliseconds), never by tick counts, so the scheduler behaves the
same at any tick rate. It has no notion of pausing: a wall-clock gap is
treated as elapsed time. Hosts that pause must stop calling ``advance``
and exclude the paused span from the times they feed to scoring.
"""

import math
import random
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .grid import GridLayout
from .levels import (
    MAX_CLICKABLE_MS,
    SETTLE_DELAY_MS,
    clickable_duration,
    max_visible_words,
    visibility_duration_range,
    word_cooldown,
)
from .models import LevelParameters, LifecycleState, Position, TrackedWord
from .placement import find_position, is_free, occupied_cells


Situation = Literal["burst", "idle", "one_visible"]

FIND_BURST_WINDOW_MS = 2000
FORCED_ATTEMPTS = 50
MIN_RETRY_DELAY_MS = 100
MAX_ZERO_VISIBLE_CHANCE = 0.95
ZERO_VISIBLE_GROWTH_PER_SECOND = 0.05

# Base retry delay in ms after a missed trigger or failed placement
RETRY_BASE_DELAY_MS: Dict[str, float] = {
    "burst": 150.0,
    "idle": 400.0,
    "one_visible": 1200.0,
}


def find_burst_chance(level: int) -> float:
    """Chance to surface right after a correct find when nothing is visible."""
    if level <= 10:
        return 0.7
    if level <= 20:
        return 0.6
    return 0.5


def zero_visible_chance(level: int) -> float:
    """Base chance to surface when no word is visible."""
    if level <= 5:
        return 0.85
    if level <= 10:
        return 0.75
    return 0.65


def second_slot_chance(level: int) -> float:
    """Chance to add a second word when one is already visible."""
    if level <= 15:
        return 0.4
    if level <= 20:
        return 0.3
    if level <= 30:
        return 0.2
    return 0.1


def ambient_chance(level: int) -> float:
    """Flat per-tick chance that keeps words from stalling."""
    return 0.12 if level <= 10 else 0.10


class AppearanceScheduler(BaseModel):
    """
    Owns the words in play for one level session.

    Advances each word through Hidden -> Surfaced-Pending -> Clickable ->
    Hidden until it is found. Hidden words surface when one of several
    weighted triggers fires, subject to a per-text cooldown and a cap on
    how many words may be visible at once.

    Attributes:
        words: The tracked words (real words and decoys)
        layout: Current grid layout
        level: Level number, drives every timing table
        center_avoidance: Strength of the placement centre exclusion
        max_visible: Concurrency cap (1 or 2)
        cooldowns: Text -> timestamp of its last surfacing
        next_eligible: Text -> earliest timestamp of its next surfacing attempt
        speed_multiplier: Combo-derived factor that shortens retry delays
        last_find_at: Timestamp of the most recent correct find
        last_visible_at: Last timestamp at which any word was visible
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    words: List[TrackedWord] = Field(default_factory=list)
    layout: GridLayout = Field(default_factory=GridLayout)
    level: int = Field(default=1, ge=1)
    center_avoidance: float = Field(default=0.0, ge=0.0, le=1.0)
    max_visible: int = Field(default=1, ge=1)
    cooldowns: Dict[str, float] = Field(default_factory=dict)
    next_eligible: Dict[str, float] = Field(default_factory=dict)
    speed_multiplier: float = Field(default=1.0, gt=0.0)
    last_find_at: Optional[float] = None
    last_visible_at: Optional[float] = None
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @classmethod
    def create(
        cls,
        words: List[TrackedWord],
        layout: GridLayout,
        params: LevelParameters,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "AppearanceScheduler":
        """
        Factory method for a level session's scheduler.

        Args:
            words: Initial tracked words, all Hidden
            layout: Grid layout for the current canvas
            params: Level parameters
            seed: Optional random seed for reproducibility
            rng: Optional random source, overrides seed

        Returns:
            A new AppearanceScheduler
        """
        scheduler = cls(
            words=words,
            layout=layout,
            level=params.level,
            center_avoidance=params.center_avoidance,
            max_visible=max_visible_words(params.level),
            seed=seed,
        )
        if rng is not None:
            scheduler._rng = rng
        return scheduler

    # ------------------------------------------------------------------
    # Queries

    def get_word(self, text: str) -> Optional[TrackedWord]:
        """First non-found word with this text, else the found one, else None."""
        matches = [w for w in self.words if w.text == text]
        for word in matches:
            if not word.found:
                return word
        return matches[0] if matches else None

    def visible_words(self) -> List[TrackedWord]:
        """Words currently Surfaced-Pending or Clickable."""
        return [w for w in self.words if w.is_visible and not w.found]

    @property
    def visible_count(self) -> int:
        return len(self.visible_words())

    @property
    def real_words(self) -> List[TrackedWord]:
        return [w for w in self.words if not w.is_decoy]

    @property
    def all_real_found(self) -> bool:
        """Whether every real word has been found."""
        real = self.real_words
        return bool(real) and all(w.found for w in real)

    def needs_forced_surface(self) -> bool:
        """True when nothing is visible but a real word is still hidden."""
        if self.visible_count > 0:
            return False
        return any(not w.found and not w.is_visible for w in self.real_words)

    # ------------------------------------------------------------------
    # Tick

    def advance(self, now: float) -> List[TrackedWord]:
        """
        Run one scheduler pass at ``now``.

        Expiry runs before surfacing, so a word cannot expire and
        resurface in the same pass.

        Returns:
            The tracked word list
        """
        if self.last_visible_at is None:
            self.last_visible_at = now

        self._expire(now)
        self._surface_hidden(now)

        if self.visible_count > 0:
            self.last_visible_at = now

        return self.words

    def _expire(self, now: float) -> None:
        for word in self.words:
            if word.found or word.surfaced_at is None:
                continue

            if word.clickable_from is None:
                self._assign_clickable_window(word)

            elapsed = now - word.surfaced_at
            if elapsed >= word.surface_duration or now > word.clickable_until:
                word.hide()
                self.next_eligible.pop(word.text, None)
            elif now >= word.clickable_from:
                word.state = LifecycleState.CLICKABLE
            else:
                word.state = LifecycleState.SURFACED_PENDING

    def _assign_clickable_window(self, word: TrackedWord) -> None:
        window = min(clickable_duration(self.level), MAX_CLICKABLE_MS)
        word.clickable_from = word.surfaced_at + SETTLE_DELAY_MS
        word.clickable_until = word.clickable_from + window

    def _surface_hidden(self, now: float) -> None:
        visible = self.visible_count
        cooldown = word_cooldown(self.level)

        hidden = [w for w in self.words if not w.found and not w.is_visible]
        self._rng.shuffle(hidden)

        for word in hidden:
            if visible >= self.max_visible:
                break

            eligible_at = self.next_eligible.get(word.text)
            if eligible_at is not None and now < eligible_at:
                continue

            last = self.cooldowns.get(word.text)
            if last is not None and now - last < cooldown:
                continue

            situation = self._situation(now, visible)
            if self._roll_triggers(now, visible):
                position = self._place(word)
                if position is not None:
                    self._surface(word, position, now, situation)
                    visible += 1
                    continue

            self.next_eligible[word.text] = now + self.retry_delay(situation)

    def _situation(self, now: float, visible: int) -> Situation:
        if visible >= 1:
            return "one_visible"
        if self._in_find_burst(now):
            return "burst"
        return "idle"

    def _in_find_burst(self, now: float) -> bool:
        return self.last_find_at is not None and now - self.last_find_at <= FIND_BURST_WINDOW_MS

    def _roll_triggers(self, now: float, visible: int) -> bool:
        """Evaluate the surfacing triggers in order; True if any fires."""
        rng = self._rng

        if visible == 0 and self._in_find_burst(now):
            if rng.random() < find_burst_chance(self.level):
                return True

        if visible == 0:
            gap_seconds = max(0.0, now - self.last_visible_at) / 1000
            chance = min(
                MAX_ZERO_VISIBLE_CHANCE,
                zero_visible_chance(self.level) + gap_seconds * ZERO_VISIBLE_GROWTH_PER_SECOND,
            )
            if rng.random() < chance:
                return True

        if visible == 1 and self.max_visible >= 2:
            if rng.random() < second_slot_chance(self.level):
                return True

        return rng.random() < ambient_chance(self.level)

    def retry_delay(self, situation: Situation) -> float:
        """
        Randomized delay before a hidden word is reconsidered.

        Shorter right after a find, at higher levels and at higher combo
        speed; jittered by 0.5x-1.5x; never below 100 ms.
        """
        base = RETRY_BASE_DELAY_MS[situation]
        level_factor = max(0.6, 1.0 - (self.level - 1) * 0.01)
        jitter = self._rng.uniform(0.5, 1.5)
        delay = base * level_factor * jitter / self.speed_multiplier
        return max(MIN_RETRY_DELAY_MS, delay)

    def _place(self, word: TrackedWord) -> Optional[Position]:
        if self.layout.is_degenerate:
            return None

        occupied = occupied_cells(self.words)
        position = find_position(
            word.text,
            self.layout.cols,
            self.layout.playable_rows,
            occupied,
            center_avoidance=self.center_avoidance,
            row_offset=self.layout.playable_start_row,
            rng=self._rng,
        )
        # The allocator may fall back to an overlapping origin
        if position is None or not is_free(position.col, position.row, word.length, occupied):
            return None
        return position

    def _surface(
        self,
        word: TrackedWord,
        position: Position,
        now: float,
        situation: Situation = "idle",
    ) -> None:
        low, high = visibility_duration_range(self.level)

        word.origin = position
        word.surfaced_at = now
        word.surface_duration = self._rng.uniform(low, high)
        word.state = LifecycleState.SURFACED_PENDING
        self._assign_clickable_window(word)

        self.cooldowns[word.text] = now
        # Pacing bookkeeping only; cleared when the word hides again
        self.next_eligible[word.text] = now + self.retry_delay(situation)

    # ------------------------------------------------------------------
    # Caller operations

    def set_speed_multiplier(self, multiplier: float) -> None:
        """Set the combo-derived retry speed-up (1.0 = none)."""
        self.speed_multiplier = max(1.0, multiplier)

    def resolve(self, text: str, now: float) -> bool:
        """
        Mark a word found if it is clickable at ``now``.

        Returns:
            True on a valid find; False for unknown, already-found, decoy,
            or out-of-window words (no state change in that case)
        """
        word = self.get_word(text)
        if word is None or word.is_decoy or not word.is_clickable(now):
            return False

        word.hide()
        word.state = LifecycleState.FOUND
        word.found_at = now

        self.cooldowns.pop(text, None)
        self.next_eligible.pop(text, None)
        self.last_find_at = now
        return True

    def force_surface_one(self, now: float) -> bool:
        """
        Surface one hidden word, bypassing cooldown and trigger rolls.

        Tries up to 50 random overlap-free placements, then falls back to a
        fixed low-column, near-top cell even if it overlaps. Real words are
        preferred over decoys.

        Returns:
            True if a word was surfaced
        """
        if self.layout.is_degenerate or self.visible_count >= self.max_visible:
            return False

        hidden = [w for w in self.words if not w.found and not w.is_visible]
        pool = [w for w in hidden if not w.is_decoy] or hidden
        pool = [w for w in pool if w.length <= self.layout.cols]
        if not pool:
            return False

        layout = self.layout
        occupied = occupied_cells(self.words)

        for _ in range(FORCED_ATTEMPTS):
            word = self._rng.choice(pool)
            col = self._rng.randint(0, layout.cols - word.length)
            row = self._rng.randrange(layout.playable_rows) + layout.playable_start_row
            if is_free(col, row, word.length, occupied):
                self._surface(word, Position(col, row), now)
                self.last_visible_at = now
                return True

        word = pool[0]
        safe_col = max(0, min(layout.cols - word.length, math.floor(layout.cols * 0.1)))
        safe_row = max(
            layout.playable_start_row,
            min(layout.playable_end_row - 1, layout.playable_start_row + 2),
        )
        self._surface(word, Position(safe_col, safe_row), now)
        self.last_visible_at = now
        return True

    def resync_layout(self, layout: GridLayout) -> None:
        """
        Adopt a new grid layout.

        Words whose cells now fall outside the playable band are returned
        to Hidden and lose their origin.
        """
        self.layout = layout
        for word in self.words:
            if word.found or word.origin is None:
                continue
            if not layout.fits(word):
                if word.is_visible or word.surfaced_at is not None:
                    word.hide()
                    self.next_eligible.pop(word.text, None)
                word.origin = None

    def resync_dimensions(
        self,
        canvas_width: float,
        canvas_height: float,
        char_width: float,
        char_height: float,
        top_exclusion_px: float = 0,
        bottom_exclusion_px: float = 0,
    ) -> None:
        """Recalculate the layout from canvas pixels; ignored for an empty canvas."""
        if canvas_width <= 0 or canvas_height <= 0 or char_width <= 0 or char_height <= 0:
            return

        self.resync_layout(GridLayout.from_canvas(
            canvas_width,
            canvas_height,
            char_width=char_width,
            char_height=char_height,
            top_exclusion_px=top_exclusion_px,
            bottom_exclusion_px=bottom_exclusion_px,
        ))

    def get_state(self) -> Dict:
        """
        Get the current scheduler state as a dictionary.

        Returns:
            Dictionary containing scheduler state
        """
        return {
            "level": self.level,
            "cols": self.layout.cols,
            "rows": self.layout.rows,
            "playable_start_row": self.layout.playable_start_row,
            "playable_end_row": self.layout.playable_end_row,
            "max_visible": self.max_visible,
            "visible": [w.text for w in self.visible_words()],
            "found": [w.text for w in self.words if w.found],
            "speed_multiplier": self.speed_multiplier,
            "cooldowns": dict(self.cooldowns),
            "next_eligible": dict(self.next_eligible),
        }
