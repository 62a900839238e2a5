"""Custom exceptions for chembalance."""

from __future__ import annotations


class BalancingError(Exception):
    """Base exception for equation-balancing errors."""
    pass


class FormulaError(BalancingError, ValueError):
    """Malformed molecular formula."""

    def __init__(self, message: str, formula: str | None = None):
        self.message = message
        self.formula = formula
        if formula is not None:
            super().__init__(f"{message} in: {formula}")
        else:
            super().__init__(message)


class ChallengeSelectionError(BalancingError, ValueError):
    """The catalog cannot supply enough distinct challenges for a level."""

    def __init__(self, level: int, requested: int, available: int):
        self.level = level
        self.requested = requested
        self.available = available
        super().__init__(
            f"Level {level} needs {requested} distinct equations "
            f"but only {available} are eligible"
        )
