"""Game settings loaded from a JSON configuration file."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from chembalance.constants import CHALLENGES_PER_GAME, POINTS_BY_ATTEMPT


@dataclass(frozen=True)
class GameSettings:
    challenges_per_game: int = CHALLENGES_PER_GAME
    points: Tuple[int, ...] = POINTS_BY_ATTEMPT
    seed: Optional[int] = None
    timer_enabled: bool = True


def parse_settings(data: Dict[str, Any]) -> GameSettings:
    challenges = int(data.get("challenges_per_game", CHALLENGES_PER_GAME))
    if challenges < 1:
        raise ValueError(f"challenges_per_game must be >= 1, got {challenges}")

    points = tuple(int(p) for p in data.get("points", POINTS_BY_ATTEMPT))
    if not points or any(p < 0 for p in points):
        raise ValueError(f"points must be a non-empty list of non-negative integers, got {list(points)}")

    timer_enabled = data.get("timer_enabled", True)
    if not isinstance(timer_enabled, bool):
        raise ValueError(f"timer_enabled must be true or false, got {timer_enabled!r}")

    seed = data.get("seed")
    return GameSettings(
        challenges_per_game=challenges,
        points=points,
        seed=None if seed is None else int(seed),
        timer_enabled=timer_enabled,
    )


def load_settings(config_file: str | Path) -> GameSettings:
    with open(config_file, "r") as f:
        return parse_settings(json.load(f))
