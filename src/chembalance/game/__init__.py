"""Game mode: challenge selection, scoring and the challenge state machine."""

from chembalance.game.challenges import ChallengeGenerator, LevelPolicy
from chembalance.game.model import GameChallenge, GameModel, GameState
from chembalance.game.scoring import ScoringTable, TieredScoring

__all__ = [
    "ChallengeGenerator",
    "LevelPolicy",
    "GameChallenge",
    "GameModel",
    "GameState",
    "ScoringTable",
    "TieredScoring",
]
