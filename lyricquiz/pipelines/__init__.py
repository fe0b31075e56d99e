"""Pipeline modules for orchestrating the interactive game."""

from .game_session import GameSession, GameSessionConfig, RoundResult
from .lifelines import Lifeline, LifelineInventory

__all__ = [
    "GameSession",
    "GameSessionConfig",
    "RoundResult",
    "Lifeline",
    "LifelineInventory",
]
