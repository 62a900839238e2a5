"""chembalance core package."""

from chembalance.catalog import EquationCatalog, default_catalog
from chembalance.equation import AtomCount, Equation, EquationKind, EquationTerm
from chembalance.exceptions import BalancingError, ChallengeSelectionError, FormulaError
from chembalance.models import Atom, Molecule

__all__ = [
    "EquationCatalog",
    "default_catalog",
    "AtomCount",
    "Equation",
    "EquationKind",
    "EquationTerm",
    "BalancingError",
    "ChallengeSelectionError",
    "FormulaError",
    "Atom",
    "Molecule",
]
