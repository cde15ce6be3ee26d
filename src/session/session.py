"""
Level session orchestrator.

Ticks the appearance scheduler, relays clicks into the scoring engine and
keeps the running counters (attempts, finds, combo, score) for one level.

Pausing is handled here, not in the engine: ``pause``/``resume``
accumulate the paused span, which is excluded from the elapsed time and
time remaining passed to scoring. The scheduler is simply not ticked
while paused.
"""

import random
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..engine import (
    AppearanceScheduler,
    GridLayout,
    LevelParameters,
    TrackedWord,
    build_initial_words,
    derive_level_parameters,
    select_word_pool,
    text_sizing,
)
from ..scoring import (
    ComboState,
    ScoreBreakdown,
    combo_message,
    combo_speed_multiplier,
    finalize_level_score,
    register_find,
    score_single_find,
)
from .models import ClickOutcome, ProfileTotals, SessionConfig, SessionResult


# Clicks on decoys arrive with this prefix
DECOY_PREFIX = "FAKE:"

# Force a word up after this long with nothing visible
FORCE_SURFACE_AFTER_MS = 1500


class ProfileReader(Protocol):
    """Read-only access to the player's cumulative totals."""

    def get_totals(self) -> ProfileTotals:
        ...


class LevelSession(BaseModel):
    """
    One level of play.

    Attributes:
        config: Session configuration
        params: Level parameters derived from the level number
        scheduler: The appearance scheduler owning the words in play
        combo: Running combo state
        score: Running score from individual finds
        attempts: Every click relayed, hits and misses
        correct_finds: Valid finds
        started_at: Timestamp of the first tick (ms)
        paused_at: Timestamp the current pause began, if paused
        paused_ms: Total paused time so far
        is_complete: Whether the level has ended
        end_reason: Why it ended
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SessionConfig
    params: LevelParameters
    scheduler: AppearanceScheduler
    combo: ComboState = Field(default_factory=ComboState)
    score: int = 0
    attempts: int = 0
    correct_finds: int = 0
    started_at: Optional[float] = None
    paused_at: Optional[float] = None
    paused_ms: float = 0.0
    last_find_active_ms: Optional[float] = None
    ended_at: Optional[float] = None
    is_complete: bool = False
    end_reason: str = ""
    clicks: List[ClickOutcome] = Field(default_factory=list)
    profile_reader: Optional[Any] = None

    @classmethod
    def create(
        cls,
        config: Optional[SessionConfig] = None,
        rng: Optional[random.Random] = None,
        profile_reader: Optional[ProfileReader] = None,
        **config_kwargs: Any
    ) -> "LevelSession":
        """
        Factory method to create a session with its words and scheduler.

        Args:
            config: Optional SessionConfig instance
            rng: Optional random source (defaults to one seeded from config)
            profile_reader: Optional source of cumulative profile totals
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured LevelSession
        """
        if config is None:
            config = SessionConfig(**config_kwargs)

        rng = rng or random.Random(config.seed)
        params = derive_level_parameters(config.level)

        pool = select_word_pool(params, rng)
        words = build_initial_words(params, pool)
        layout = cls._layout_for(config)
        scheduler = AppearanceScheduler.create(words, layout, params, rng=rng)

        return cls(
            config=config,
            params=params,
            scheduler=scheduler,
            profile_reader=profile_reader,
        )

    @staticmethod
    def _layout_for(config: SessionConfig) -> GridLayout:
        sizing = text_sizing(config.palette, config.level)
        return GridLayout.from_canvas(
            config.canvas_width,
            config.canvas_height,
            char_width=config.char_width or sizing.char_width,
            char_height=config.char_height or sizing.char_height,
            top_exclusion_px=config.top_exclusion_px,
            bottom_exclusion_px=config.bottom_exclusion_px,
        )

    @property
    def words(self) -> List[TrackedWord]:
        return self.scheduler.words

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None

    # ------------------------------------------------------------------
    # Time

    def active_ms(self, now: float) -> float:
        """Milliseconds of play since the first tick, excluding pauses."""
        if self.started_at is None:
            return 0.0
        end = self.ended_at if self.ended_at is not None else now
        paused = self.paused_ms
        if self.paused_at is not None:
            paused += end - self.paused_at
        return max(0.0, end - self.started_at - paused)

    def elapsed_seconds(self, now: float) -> float:
        return self.active_ms(now) / 1000

    def time_remaining(self, now: float) -> Optional[float]:
        """Seconds left on the clock, or None for an untimed level."""
        if self.params.time_limit is None:
            return None
        return max(0.0, self.params.time_limit - self.elapsed_seconds(now))

    def pause(self, now: float) -> None:
        """Start a pause; a second call while paused is ignored."""
        if self.paused_at is None and not self.is_complete:
            self.paused_at = now

    def resume(self, now: float) -> None:
        """
        End the current pause.

        Raises:
            ValueError: If the session is not paused
        """
        if self.paused_at is None:
            raise ValueError("Session is not paused")
        self.paused_ms += max(0.0, now - self.paused_at)
        self.paused_at = None

    # ------------------------------------------------------------------
    # Tick and clicks

    def tick(self, now: float) -> List[TrackedWord]:
        """
        Advance the level to ``now``.

        Runs a scheduler pass, forces a word up when nothing has been
        visible for a while (or right at the start), and ends the level
        when the clock runs out.

        Returns:
            The tracked words, for rendering
        """
        if self.started_at is None:
            self.started_at = now
            # A pause taken before the start only counts from here
            if self.paused_at is not None:
                self.paused_at = max(self.paused_at, now)

        if self.is_complete or self.is_paused:
            return self.words

        first_tick = self.scheduler.last_visible_at is None
        self.scheduler.advance(now)

        if self.scheduler.needs_forced_surface():
            last_visible = self.scheduler.last_visible_at
            idle_ms = now - last_visible if last_visible is not None else 0.0
            if first_tick or idle_ms >= FORCE_SURFACE_AFTER_MS:
                self.scheduler.force_surface_one(now)

        remaining = self.time_remaining(now)
        if remaining is not None and remaining <= 0:
            self._end(now, "Time up")

        return self.words

    def click(self, text: str, now: float, in_window: Optional[bool] = None) -> ClickOutcome:
        """
        Relay a click that the input layer resolved to a word (or nothing).

        Every click counts as an attempt. Decoys (flagged with the
        ``FAKE:`` prefix or known as decoys) and empty clicks are misses;
        misses never reset the combo.

        Args:
            text: Word text, ``FAKE:``-prefixed text, or "" for no word hit
            now: Click timestamp (ms)
            in_window: Whether the input layer saw the click land in the
                clickable window; False forces a miss

        Returns:
            ClickOutcome describing the result

        Raises:
            ValueError: If the session is complete or paused
        """
        if self.is_complete:
            raise ValueError("Session is already complete")
        if self.is_paused:
            raise ValueError("Session is paused")

        self.attempts += 1

        if not text:
            return self._record_miss("", "empty", now)

        if text.startswith(DECOY_PREFIX):
            return self._record_miss(text[len(DECOY_PREFIX):], "decoy", now)

        word = self.scheduler.get_word(text)
        if word is not None and word.is_decoy:
            return self._record_miss(text, "decoy", now)

        if in_window is False or not self.scheduler.resolve(text, now):
            return self._record_miss(text, "miss", now)

        return self._record_find(word, now)

    def _record_miss(self, text: str, kind: str, now: float) -> ClickOutcome:
        outcome = ClickOutcome(
            text=text,
            kind=kind,
            at=now,
            combo=self.combo.current_combo,
            total_attempts=self.attempts,
            correct_finds=self.correct_finds,
        )
        self.clicks.append(outcome)
        return outcome

    def _record_find(self, word: TrackedWord, now: float) -> ClickOutcome:
        active = self.active_ms(now)
        since_last = None
        if self.last_find_active_ms is not None:
            since_last = (active - self.last_find_active_ms) / 1000

        self.correct_finds += 1
        self.last_find_active_ms = active

        previous = self.combo.current_combo
        self.combo = register_find(self.combo, self.correct_finds, now)
        self.scheduler.set_speed_multiplier(combo_speed_multiplier(self.combo.current_combo))

        delta = score_single_find(
            word,
            time_remaining=self.time_remaining(now),
            combo=self.combo.current_combo,
            total_attempts=self.attempts,
            correct_finds=self.correct_finds,
            palette=self.config.palette,
            seconds_since_last_find=since_last,
        )
        self.score += delta.final_score

        message = None
        if self.combo.current_combo != previous:
            message = combo_message(self.combo.current_combo)

        outcome = ClickOutcome(
            text=word.text,
            kind="find",
            at=now,
            points=delta.final_score,
            delta=delta,
            combo=self.combo.current_combo,
            total_attempts=self.attempts,
            correct_finds=self.correct_finds,
            message=message,
        )
        self.clicks.append(outcome)

        if self.scheduler.all_real_found:
            self._end(now, "All words found")

        return outcome

    def resize(
        self,
        canvas_width: float,
        canvas_height: float,
        top_exclusion_px: Optional[float] = None,
        bottom_exclusion_px: Optional[float] = None,
    ) -> None:
        """Resync the grid after the canvas changed size."""
        updates: Dict[str, Any] = {"canvas_width": canvas_width, "canvas_height": canvas_height}
        if top_exclusion_px is not None:
            updates["top_exclusion_px"] = top_exclusion_px
        if bottom_exclusion_px is not None:
            updates["bottom_exclusion_px"] = bottom_exclusion_px
        self.config = self.config.model_copy(update=updates)

        sizing = text_sizing(self.config.palette, self.config.level)
        self.scheduler.resync_dimensions(
            self.config.canvas_width,
            self.config.canvas_height,
            self.config.char_width or sizing.char_width,
            self.config.char_height or sizing.char_height,
            self.config.top_exclusion_px,
            self.config.bottom_exclusion_px,
        )

    # ------------------------------------------------------------------
    # Completion

    def _end(self, now: float, reason: str) -> None:
        if self.paused_at is not None:
            self.resume(now)
        self.is_complete = True
        self.ended_at = now
        self.end_reason = reason

    def score_breakdown(self, now: float) -> ScoreBreakdown:
        """End-of-level breakdown from the current counters."""
        return finalize_level_score(
            self.words,
            time_remaining=self.time_remaining(now),
            max_combo=self.combo.max_combo,
            total_attempts=self.attempts,
            correct_finds=self.correct_finds,
            level_time=self.elapsed_seconds(now),
            palette=self.config.palette,
            level=self.params.level,
        )

    def finish(self, now: float, reason: str = "Level abandoned") -> SessionResult:
        """
        End the level (if still running) and build its result.

        Args:
            now: Timestamp (ms)
            reason: End reason when the level is still running

        Returns:
            SessionResult with the score breakdown
        """
        if not self.is_complete:
            self._end(now, reason)

        breakdown = self.score_breakdown(now)
        completed = self.scheduler.all_real_found

        cumulative = None
        if self.profile_reader is not None:
            totals = self.profile_reader.get_totals()
            cumulative = ProfileTotals(
                total_play_time=totals.total_play_time + self.elapsed_seconds(now),
                total_score=totals.total_score + breakdown.final_score,
                levels_completed=totals.levels_completed + (1 if completed else 0),
            )

        return SessionResult(
            level=self.params.level,
            palette=self.config.palette,
            completed=completed,
            end_reason=self.end_reason,
            running_score=self.score,
            breakdown=breakdown,
            attempts=self.attempts,
            correct_finds=self.correct_finds,
            max_combo=self.combo.max_combo,
            active_seconds=self.elapsed_seconds(now),
            paused_seconds=self.paused_ms / 1000,
            words=[w.model_dump(mode="json") for w in self.words],
            clicks=self.clicks,
            cumulative=cumulative,
        )

    def get_state(self, now: Optional[float] = None) -> Dict:
        """
        Get the current session state as a dictionary.

        Returns:
            Dictionary containing session state
        """
        now = now if now is not None else (self.ended_at or self.started_at or 0.0)
        return {
            "level": self.params.level,
            "difficulty": self.params.difficulty.value,
            "score": self.score,
            "attempts": self.attempts,
            "correct_finds": self.correct_finds,
            "combo": self.combo.current_combo,
            "max_combo": self.combo.max_combo,
            "is_paused": self.is_paused,
            "is_complete": self.is_complete,
            "end_reason": self.end_reason,
            "elapsed_seconds": self.elapsed_seconds(now),
            "time_remaining": self.time_remaining(now),
            "scheduler": self.scheduler.get_state(),
        }
