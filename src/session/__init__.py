"""Level sessions and the headless simulator."""

from .models import (
    ClickKind,
    SessionConfig,
    ClickOutcome,
    ProfileTotals,
    SessionResult,
    BotConfig,
    SimulationConfig,
    SimulationResult,
)
from .session import LevelSession, ProfileReader, DECOY_PREFIX
from .simulator import Bot, Simulation

__all__ = [
    # Models
    "ClickKind",
    "SessionConfig",
    "ClickOutcome",
    "ProfileTotals",
    "SessionResult",
    "BotConfig",
    "SimulationConfig",
    "SimulationResult",
    # Session
    "LevelSession",
    "ProfileReader",
    "DECOY_PREFIX",
    # Simulation
    "Bot",
    "Simulation",
]
