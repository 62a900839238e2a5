"""Challenge selection for game levels."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import FrozenSet, List, Sequence

from chembalance.catalog import CatalogEntry, EquationCatalog
from chembalance.equation import Equation, EquationKind
from chembalance.exceptions import ChallengeSelectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelPolicy:
    kinds: FrozenSet[EquationKind]
    allow_big_molecules: bool = True

    def permits(self, item: CatalogEntry) -> bool:
        if item.kind not in self.kinds:
            return False
        return self.allow_big_molecules or not item.has_big_molecule()


DEFAULT_LEVEL_POLICIES = (
    LevelPolicy(frozenset({EquationKind.SYNTHESIS, EquationKind.DECOMPOSITION}), allow_big_molecules=False),
    LevelPolicy(frozenset({EquationKind.SYNTHESIS, EquationKind.DECOMPOSITION})),
    LevelPolicy(frozenset({EquationKind.DISPLACEMENT})),
)


class ChallengeGenerator:
    """Draws distinct equations for a level, uniformly and without replacement."""

    def __init__(
        self,
        catalog: EquationCatalog,
        rng: random.Random | None = None,
        policies: Sequence[LevelPolicy] = DEFAULT_LEVEL_POLICIES,
    ):
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.policies = tuple(policies)

    @property
    def level_count(self) -> int:
        return len(self.policies)

    def eligible(self, level: int) -> List[CatalogEntry]:
        if not 0 <= level < len(self.policies):
            raise ValueError(f"Unknown level {level}; expected 0..{len(self.policies) - 1}")
        policy = self.policies[level]
        return [item for item in self.catalog.of_kind(*policy.kinds) if policy.permits(item)]

    def create_equations(self, level: int, count: int) -> List[Equation]:
        pool = self.eligible(level)
        if count > len(pool):
            raise ChallengeSelectionError(level, count, len(pool))

        chosen = self.rng.sample(pool, count)
        logger.info("Level %d challenges: %s", level, ", ".join(item.key for item in chosen))
        return [item.create() for item in chosen]
