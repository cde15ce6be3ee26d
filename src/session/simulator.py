"""
Headless simulation: a scripted bot plays levels on a simulated clock.

Useful for tuning the timing tables and checking that scoring behaves
sensibly over whole runs without a renderer.
"""

import json
import random
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple, Any

from pydantic import BaseModel, ConfigDict, Field

from ..engine import render_grid
from .models import BotConfig, ClickOutcome, SessionConfig, SessionResult, SimulationConfig, SimulationResult
from .session import DECOY_PREFIX, LevelSession


class Bot(BaseModel):
    """
    Simulated player.

    Reacts to each surfacing once: after ``reaction_ms`` it clicks the
    word, hitting with probability ``accuracy``. Visible decoys are
    occasionally clicked, and stray clicks on empty cells happen at a
    per-tick rate.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: BotConfig = Field(default_factory=BotConfig)
    attempted: Set[Tuple[str, float]] = Field(default_factory=set)
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        self._rng = random.Random()

    @classmethod
    def create(cls, config: Optional[BotConfig] = None, rng: Optional[random.Random] = None) -> "Bot":
        bot = cls(config=config or BotConfig())
        if rng is not None:
            bot._rng = rng
        return bot

    def decide(self, session: LevelSession, now: float) -> List[Tuple[str, Optional[bool]]]:
        """
        Clicks to make at ``now``.

        Returns:
            (text, in_window) pairs in the form LevelSession.click takes
        """
        clicks: List[Tuple[str, Optional[bool]]] = []

        for word in session.scheduler.visible_words():
            if word.surfaced_at is None or now - word.surfaced_at < self.config.reaction_ms:
                continue
            key = (word.text, word.surfaced_at)
            if key in self.attempted:
                continue

            if word.is_decoy:
                self.attempted.add(key)
                if self._rng.random() < self.config.decoy_click_rate:
                    clicks.append((DECOY_PREFIX + word.text, None))
                continue

            if not word.is_clickable(now):
                continue
            self.attempted.add(key)
            if self._rng.random() < self.config.accuracy:
                clicks.append((word.text, True))
            else:
                clicks.append(("", None))

        if self._rng.random() < self.config.stray_click_rate:
            clicks.append(("", None))

        return clicks

    def reset(self) -> None:
        self.attempted.clear()


class Simulation(BaseModel):
    """
    Plays a sequence of levels with a Bot.

    Attributes:
        config: Simulation configuration
        bot: The simulated player
        sessions: Results of finished levels
        started_at: Wall-clock start of the run
        is_complete: Whether every level has been played
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SimulationConfig = Field(default_factory=SimulationConfig)
    bot: Bot = Field(default_factory=Bot)
    sessions: List[SessionResult] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    is_complete: bool = False
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        self._rng = random.Random(self.config.seed)

    @classmethod
    def create(
        cls,
        config: Optional[SimulationConfig] = None,
        **config_kwargs: Any
    ) -> "Simulation":
        """
        Factory method to create a simulation and its bot.

        Args:
            config: Optional SimulationConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured Simulation
        """
        if config is None:
            config = SimulationConfig(**config_kwargs)

        sim = cls(config=config)
        sim.bot = Bot.create(config.bot, rng=sim._rng)
        return sim

    def _session_config(self, level: int) -> SessionConfig:
        return SessionConfig(
            level=level,
            palette=self.config.palette,
            canvas_width=self.config.canvas_width,
            canvas_height=self.config.canvas_height,
            top_exclusion_px=self.config.top_exclusion_px,
            bottom_exclusion_px=self.config.bottom_exclusion_px,
        )

    def play_level(self, level: int, verbose: bool = False) -> SessionResult:
        """
        Play one level to completion or the configured time cap.

        Args:
            level: Level number
            verbose: If True, print finds and the grid as they happen

        Returns:
            SessionResult for the level
        """
        session = LevelSession.create(self._session_config(level), rng=self._rng)
        self.bot.reset()

        limit_ms = self.config.max_level_seconds * 1000
        now = 0.0

        while not session.is_complete and now <= limit_ms:
            session.tick(now)
            if session.is_complete:
                break

            for text, in_window in self.bot.decide(session, now):
                outcome = session.click(text, now, in_window=in_window)
                if verbose:
                    self._print_click(outcome)
                    if outcome.is_find:
                        print(render_grid(session.words, session.scheduler.layout))
                if session.is_complete:
                    break

            now += self.config.tick_ms

        return session.finish(now, reason="Time cap reached")

    @staticmethod
    def _print_click(outcome: ClickOutcome) -> None:
        seconds = outcome.at / 1000
        if outcome.is_find:
            line = f"[{seconds:6.1f}s] FOUND {outcome.text} +{outcome.points}"
            if outcome.message:
                line += f"  ({outcome.message})"
        elif outcome.kind == "decoy":
            line = f"[{seconds:6.1f}s] DECOY {outcome.text}"
        else:
            line = f"[{seconds:6.1f}s] miss"
        print(line)

    def run(
        self,
        on_level: Optional[Callable[[SessionResult], None]] = None,
        verbose: bool = False,
    ) -> SimulationResult:
        """
        Play every configured level.

        Args:
            on_level: Optional callback called after each level
            verbose: If True, print progress to stdout

        Returns:
            SimulationResult containing every level's result
        """
        self.started_at = datetime.now()

        if verbose:
            print(f"Starting simulation over {self.config.num_levels} level(s)")
            print(f"Palette: {self.config.palette}")
            print("-" * 40)

        for level in self.config.levels:
            if verbose:
                print(f"\n{'='*60}")
                print(f"Level {level}")
                print("-" * 60)

            result = self.play_level(level, verbose=verbose)
            self.sessions.append(result)

            if verbose:
                b = result.breakdown
                print(f"\n{result.end_reason}: {b.words_found} found, "
                      f"accuracy {b.accuracy:.0f}%, score {b.final_score} ({b.performance_rating})")

            if on_level:
                on_level(result)

        self.is_complete = True
        return self.get_result()

    def get_result(self) -> SimulationResult:
        """
        Get the simulation result.

        Returns:
            SimulationResult containing full run data
        """
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0

        return SimulationResult(
            config=self.config,
            sessions=self.sessions,
            total_score=sum(s.breakdown.final_score for s in self.sessions),
            levels_completed=sum(1 for s in self.sessions if s.completed),
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the simulation result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(), f, indent=2, default=str)
