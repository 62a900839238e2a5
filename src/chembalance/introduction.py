"""Model for the free-exploration introduction mode."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Sequence

from chembalance.catalog import COMBUST_METHANE, MAKE_AMMONIA, SEPARATE_WATER, CatalogEntry
from chembalance.constants import INTRODUCTION_COEFFICIENT_RANGE
from chembalance.equation import Equation
from chembalance.observable import Property


class BalancedRepresentation(Enum):
    NONE = "none"
    BALANCE_SCALES = "balance_scales"
    BAR_CHARTS = "bar_charts"


DEFAULT_CHOICES = (MAKE_AMMONIA, SEPARATE_WATER, COMBUST_METHANE)


class IntroductionModel:
    """A fixed set of named equations the user can switch between and edit.

    Each choice keeps its own equation for the lifetime of the model.
    Switching away from an equation resets it.
    """

    coefficient_range = INTRODUCTION_COEFFICIENT_RANGE

    def __init__(self, choices: Sequence[CatalogEntry] = DEFAULT_CHOICES):
        if not choices:
            raise ValueError("IntroductionModel needs at least one equation choice")
        self.equations: Dict[str, Equation] = {}
        for choice in choices:
            equation = choice.create()
            self.equations[equation.name] = equation

        first = next(iter(self.equations.values()))
        self.current_equation: Property[Equation] = Property(first)
        self.balanced_representation: Property[BalancedRepresentation] = Property(BalancedRepresentation.NONE)

    @property
    def choice_names(self) -> list[str]:
        return list(self.equations)

    def select(self, name: str) -> Equation:
        """Switch to the named equation, resetting the one being left."""
        try:
            equation = self.equations[name]
        except KeyError:
            raise KeyError(f"Unknown equation choice: {name}") from None
        previous = self.current_equation.get()
        if equation is not previous:
            previous.reset()
            self.current_equation.set(equation)
        return equation

    def set_coefficient(self, index: int, value: int) -> None:
        """Set a term's user coefficient, clamped to the introduction's range."""
        low, high = self.coefficient_range
        term = self.current_equation.get().terms[index]
        term.user_coefficient = max(low, min(high, value))

    def reset(self) -> None:
        for equation in self.equations.values():
            equation.reset()
        self.current_equation.reset()
        self.balanced_representation.reset()
