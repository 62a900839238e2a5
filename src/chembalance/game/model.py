"""Game model: challenge lifecycle, scoring and progression.

A game is a fixed-length sequence of challenges at one level. Each challenge
moves through these states:

    PRESENT --check--> CHECKING --> CORRECT
                                \\-> INCORRECT --> TRY_AGAIN    (first failure)
                                              \\-> SHOW_ANSWER  (second failure)

    TRY_AGAIN   --check-->       CHECKING (the user may edit and re-check)
    TRY_AGAIN   --try_again-->   PRESENT
    TRY_AGAIN   --show_answer--> SHOW_ANSWER
    CORRECT | TRY_AGAIN | SHOW_ANSWER --next--> NEXT --> PRESENT | LEVEL_COMPLETE

Every state change goes through ``GameModel._transition``, so observers of
``GameModel.state`` see transient states (CHECKING, INCORRECT, NEXT) too.
Commands that arrive in a state that does not accept them are ignored.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, TypeVar

from chembalance.catalog import EquationCatalog, default_catalog
from chembalance.constants import CHALLENGES_PER_GAME, MAX_INCORRECT_ATTEMPTS
from chembalance.equation import Equation
from chembalance.game.challenges import ChallengeGenerator
from chembalance.game.scoring import ScoringTable, TieredScoring
from chembalance.observable import Property
from chembalance.settings import GameSettings

logger = logging.getLogger(__name__)


class GameState(Enum):
    LEVEL_SELECTION = "level_selection"
    PRESENT = "present"
    CHECKING = "checking"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    TRY_AGAIN = "try_again"
    SHOW_ANSWER = "show_answer"
    NEXT = "next"
    LEVEL_COMPLETE = "level_complete"


_CHECKABLE = (GameState.PRESENT, GameState.TRY_AGAIN)
_ADVANCEABLE = (GameState.CORRECT, GameState.TRY_AGAIN, GameState.SHOW_ANSWER)
_STARTABLE = (GameState.LEVEL_SELECTION, GameState.LEVEL_COMPLETE)
_CHALLENGE_STATES = (
    GameState.PRESENT,
    GameState.CHECKING,
    GameState.CORRECT,
    GameState.INCORRECT,
    GameState.TRY_AGAIN,
    GameState.SHOW_ANSWER,
)

T = TypeVar("T")


def _replace(values: Sequence[T], index: int, value: T) -> Tuple[T, ...]:
    return tuple(value if i == index else v for i, v in enumerate(values))


@dataclass
class GameChallenge:
    equation: Equation
    incorrect_attempts: int = 0
    status: GameState = GameState.PRESENT
    points: int = 0
    solved: bool = False
    revealed: bool = False

    @property
    def attempts_before_success(self) -> Optional[int]:
        """Incorrect checks before the challenge was solved, or None if unsolved."""
        return self.incorrect_attempts if self.solved else None


class GameModel:
    def __init__(
        self,
        catalog: EquationCatalog | None = None,
        rng: random.Random | None = None,
        scoring: ScoringTable | None = None,
        challenges_per_game: int = CHALLENGES_PER_GAME,
        timer_enabled: bool = True,
    ):
        self.generator = ChallengeGenerator(catalog or default_catalog(), rng)
        self.scoring = scoring or TieredScoring()
        self.challenges_per_game = challenges_per_game

        self.state: Property[GameState] = Property(GameState.LEVEL_SELECTION)
        self.level: Property[int] = Property(0)
        self.points: Property[int] = Property(0)
        self.elapsed_time: Property[float] = Property(0.0)
        self.current_index: Property[int] = Property(0)
        self.current_equation: Property[Optional[Equation]] = Property(None)
        self.timer_enabled: Property[bool] = Property(timer_enabled)

        self.challenges: List[GameChallenge] = []
        self.best_scores: Property[Tuple[int, ...]] = Property((0,) * self.level_count)
        self.best_times: Property[Tuple[Optional[float], ...]] = Property((None,) * self.level_count)
        self.is_new_best_time = False

    @classmethod
    def from_settings(cls, settings: GameSettings, catalog: EquationCatalog | None = None) -> "GameModel":
        return cls(
            catalog=catalog,
            rng=random.Random(settings.seed),
            scoring=TieredScoring(settings.points),
            challenges_per_game=settings.challenges_per_game,
            timer_enabled=settings.timer_enabled,
        )

    @property
    def level_count(self) -> int:
        return self.generator.level_count

    @property
    def challenge_count(self) -> int:
        return len(self.challenges)

    @property
    def perfect_score(self) -> int:
        return self.challenges_per_game * self.scoring.points_for(0)

    @property
    def current_challenge(self) -> Optional[GameChallenge]:
        if not self.challenges:
            return None
        return self.challenges[self.current_index.get()]

    @property
    def coefficients_editable(self) -> bool:
        return self.state.get() in _CHECKABLE

    def _transition(self, state: GameState) -> None:
        logger.debug("Game state %s -> %s", self.state.get().name, state.name)
        challenge = self.current_challenge
        if challenge is not None and state in _CHALLENGE_STATES:
            challenge.status = state
        self.state.set(state)

    def _ignore(self, command: str) -> None:
        logger.debug("Ignoring %s in state %s", command, self.state.get().name)

    def start_game(self, level: int) -> None:
        """Select challenges for ``level`` and present the first one.

        Raises ChallengeSelectionError if the level cannot supply enough
        distinct equations; the model is left unchanged in that case.
        """
        if self.state.get() not in _STARTABLE:
            self._ignore("start_game")
            return

        equations = self.generator.create_equations(level, self.challenges_per_game)

        self._dispose_challenges()
        self.challenges = [GameChallenge(equation) for equation in equations]
        self.level.set(level)
        self.points.set(0)
        self.elapsed_time.set(0.0)
        self.is_new_best_time = False
        self.current_index.set(0)
        self.current_equation.set(self.challenges[0].equation)
        logger.info("Started level %d with %d challenges", level, len(self.challenges))
        self._transition(GameState.PRESENT)

    def check(self) -> None:
        if self.state.get() not in _CHECKABLE:
            self._ignore("check")
            return

        challenge = self.current_challenge
        equation = challenge.equation
        if equation.coefficients_sum == 0:
            self._ignore("check with all coefficients zero")
            return

        self._transition(GameState.CHECKING)
        if equation.balanced_and_simplified:
            challenge.solved = True
            challenge.points = self.scoring.points_for(challenge.incorrect_attempts)
            self.points.set(self.points.get() + challenge.points)
            self._transition(GameState.CORRECT)
            return

        challenge.incorrect_attempts += 1
        self._transition(GameState.INCORRECT)
        if challenge.incorrect_attempts < MAX_INCORRECT_ATTEMPTS:
            self._transition(GameState.TRY_AGAIN)
        else:
            self._reveal(challenge)

    def try_again(self) -> None:
        if self.state.get() is not GameState.TRY_AGAIN:
            self._ignore("try_again")
            return
        self._transition(GameState.PRESENT)

    def show_answer(self) -> None:
        if self.state.get() is not GameState.TRY_AGAIN:
            self._ignore("show_answer")
            return
        self._reveal(self.current_challenge)

    def _reveal(self, challenge: GameChallenge) -> None:
        challenge.revealed = True
        challenge.equation.balance()
        self._transition(GameState.SHOW_ANSWER)

    def next(self) -> None:
        if self.state.get() not in _ADVANCEABLE:
            self._ignore("next")
            return

        self._transition(GameState.NEXT)
        index = self.current_index.get()
        if index < len(self.challenges) - 1:
            previous = self.challenges[index].equation
            self.current_index.set(index + 1)
            self.current_equation.set(self.challenges[index + 1].equation)
            previous.dispose()
            self._transition(GameState.PRESENT)
        else:
            self._complete_level()

    def _complete_level(self) -> None:
        level = self.level.get()
        points = self.points.get()
        if points > self.best_scores.get()[level]:
            self.best_scores.set(_replace(self.best_scores.get(), level, points))

        self.is_new_best_time = False
        if self.timer_enabled.get() and points == self.perfect_score:
            elapsed = self.elapsed_time.get()
            best = self.best_times.get()[level]
            if best is None or elapsed < best:
                self.is_new_best_time = best is not None
                self.best_times.set(_replace(self.best_times.get(), level, elapsed))

        logger.info("Level %d complete: %d/%d points", level, points, self.perfect_score)
        self._transition(GameState.LEVEL_COMPLETE)

    def new_game(self) -> None:
        if self.state.get() is GameState.LEVEL_SELECTION:
            self._ignore("new_game")
            return
        self._dispose_challenges()
        self._transition(GameState.LEVEL_SELECTION)

    def tick(self, dt: float) -> None:
        """Advance the game clock; driven by an external timer."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if self.timer_enabled.get() and self.state.get() not in _STARTABLE:
            self.elapsed_time.set(self.elapsed_time.get() + dt)

    def reset(self) -> None:
        self._dispose_challenges()
        self.best_scores.reset()
        self.best_times.reset()
        self.is_new_best_time = False
        self.level.reset()
        self.points.reset()
        self.elapsed_time.reset()
        self.timer_enabled.reset()
        self._transition(GameState.LEVEL_SELECTION)

    def restore_best(self, level: int, points: int, best_time: Optional[float]) -> None:
        """Seed a level's best score and time, e.g. from a result store."""
        if not 0 <= level < self.level_count:
            raise ValueError(f"Unknown level {level}; expected 0..{self.level_count - 1}")
        self.best_scores.set(_replace(self.best_scores.get(), level, points))
        self.best_times.set(_replace(self.best_times.get(), level, best_time))

    def _dispose_challenges(self) -> None:
        self.current_equation.set(None)
        for challenge in self.challenges:
            challenge.equation.dispose()
        self.challenges = []
        self.current_index.set(0)
