"""Scoring tables: incorrect attempts before success → points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from chembalance.constants import POINTS_BY_ATTEMPT


class ScoringTable(Protocol):
    def points_for(self, attempts: int) -> int:
        """Points for a challenge solved after ``attempts`` incorrect checks."""
        ...


@dataclass(frozen=True)
class TieredScoring:
    points: Sequence[int] = POINTS_BY_ATTEMPT

    def points_for(self, attempts: int) -> int:
        if attempts < 0:
            raise ValueError(f"attempts must be non-negative, got {attempts}")
        if attempts < len(self.points):
            return self.points[attempts]
        return 0

    @property
    def max_points(self) -> int:
        return self.points_for(0)
