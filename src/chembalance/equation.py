"""Equation model and atom counting.

A chemical equation has two ordered lists of terms, reactants and products.
Each term pairs a molecule with a user-adjustable coefficient and the fixed
coefficient that balances the equation.

An equation is *balanced* when every term's user coefficient is the same
positive multiple N of its balanced coefficient. It is *balanced and
simplified* when it is balanced and N == 1. N is anchored on the first
reactant term, so a zero coefficient there always reads as unbalanced.

Change propagation is explicit. Setting a term's user coefficient:
    1. notifies the term's own observers with ``(term, old, new)``,
    2. lets the owning equation recompute ``coefficients_sum``,
    3. then ``balanced`` / ``balanced_and_simplified``,
    4. then notifies the equation's coefficient observers with ``(equation)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Callable, List, Optional, Sequence

from chembalance.constants import RIGHT_ARROW
from chembalance.models import Molecule

TermObserver = Callable[["EquationTerm", int, int], None]
EquationObserver = Callable[["Equation"], None]


class EquationKind(Enum):
    SYNTHESIS = "synthesis"
    DECOMPOSITION = "decomposition"
    DISPLACEMENT = "displacement"


@dataclass
class AtomCount:
    element: str
    reactants_count: int = 0
    products_count: int = 0

    def is_balanced(self) -> bool:
        return self.reactants_count == self.products_count


class EquationTerm:
    """A molecule and its coefficients on one side of an equation."""

    def __init__(self, balanced_coefficient: int, molecule: Molecule, user_coefficient: int = 1):
        if balanced_coefficient < 1:
            raise ValueError(f"Balanced coefficient must be >= 1, got {balanced_coefficient}")
        self.molecule = molecule
        self.balanced_coefficient = balanced_coefficient
        self._user_coefficient = _validate_coefficient(user_coefficient)
        self._observers: List[TermObserver] = []
        self._owner: Optional[Equation] = None

    @property
    def user_coefficient(self) -> int:
        return self._user_coefficient

    @user_coefficient.setter
    def user_coefficient(self, value: int) -> None:
        value = _validate_coefficient(value)
        if value == self._user_coefficient:
            return
        old = self._user_coefficient
        self._user_coefficient = value
        for observer in list(self._observers):
            observer(self, old, value)
        if self._owner is not None:
            self._owner._term_changed(self)

    def add_observer(self, observer: TermObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: TermObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def reset(self) -> None:
        self.user_coefficient = 1

    def __repr__(self) -> str:
        return (
            f"EquationTerm({self.molecule.symbol!r}, balanced={self.balanced_coefficient}, "
            f"user={self._user_coefficient})"
        )


def _validate_coefficient(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Coefficient must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"Coefficient must be non-negative, got {value}")
    return value


def _format_side(terms: Sequence[EquationTerm]) -> str:
    parts = []
    for term in terms:
        if term.balanced_coefficient == 1:
            parts.append(term.molecule.symbol)
        else:
            parts.append(f"{term.balanced_coefficient} {term.molecule.symbol}")
    return " + ".join(parts)


def create_name(reactants: Sequence[EquationTerm], products: Sequence[EquationTerm]) -> str:
    """Plain-text formula of the balanced equation, e.g. ``2 H2O → 2 H2 + O2``."""
    return f"{_format_side(reactants)} {RIGHT_ARROW} {_format_side(products)}"


class Equation:
    def __init__(
        self,
        reactants: Sequence[EquationTerm],
        products: Sequence[EquationTerm],
        name: str | None = None,
    ):
        if not reactants or not products:
            raise ValueError("An equation needs at least one reactant and one product")

        self.reactants = tuple(reactants)
        self.products = tuple(products)
        for term in self.terms:
            if term._owner is not None:
                raise ValueError(f"{term!r} already belongs to another equation")
            term._owner = self

        self.name = name or create_name(self.reactants, self.products)
        self.balanced = False
        self.balanced_and_simplified = False
        self.coefficients_sum = 0
        self._observers: List[EquationObserver] = []

        self._update_coefficients_sum()
        self.update_balanced_state()

    @property
    def terms(self) -> tuple[EquationTerm, ...]:
        return self.reactants + self.products

    @property
    def kind(self) -> EquationKind:
        if len(self.products) == 1:
            return EquationKind.SYNTHESIS
        if len(self.reactants) == 1:
            return EquationKind.DECOMPOSITION
        return EquationKind.DISPLACEMENT

    def _term_changed(self, term: EquationTerm) -> None:
        self._update_coefficients_sum()
        self.update_balanced_state()
        for observer in list(self._observers):
            observer(self)

    def _update_coefficients_sum(self) -> None:
        self.coefficients_sum = sum(term.user_coefficient for term in self.terms)

    def update_balanced_state(self) -> None:
        """Recompute ``balanced`` and ``balanced_and_simplified``."""
        anchor = self.reactants[0]
        multiplier = Fraction(anchor.user_coefficient, anchor.balanced_coefficient)
        balanced = multiplier > 0 and all(
            term.user_coefficient == multiplier * term.balanced_coefficient
            for term in self.terms
        )
        self.balanced_and_simplified = balanced and multiplier == 1
        self.balanced = balanced

    def add_coefficients_observer(self, observer: EquationObserver) -> None:
        self._observers.append(observer)

    def remove_coefficients_observer(self, observer: EquationObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def get_atom_counts(self) -> List[AtomCount]:
        """Count each type of atom on both sides, weighted by user coefficients.

        Atoms are listed in the order they are first encountered, scanning the
        reactants and then the products. For ``CH4 + O2`` the order is C, H, O.
        Term counts are always small, so a linear search per atom is enough.
        """
        atom_counts: List[AtomCount] = []
        self._add_atom_counts(atom_counts, self.reactants, is_reactants=True)
        self._add_atom_counts(atom_counts, self.products, is_reactants=False)
        return atom_counts

    @staticmethod
    def _add_atom_counts(
        atom_counts: List[AtomCount],
        terms: Sequence[EquationTerm],
        is_reactants: bool,
    ) -> None:
        for term in terms:
            for atom in term.molecule.atoms:
                for atom_count in atom_counts:
                    if atom_count.element == atom.element:
                        break
                else:
                    atom_count = AtomCount(atom.element)
                    atom_counts.append(atom_count)
                if is_reactants:
                    atom_count.reactants_count += term.user_coefficient
                else:
                    atom_count.products_count += term.user_coefficient

    def has_big_molecule(self) -> bool:
        """Does any term use a "big" molecule? Affects difficulty in the game."""
        return any(term.molecule.is_big() for term in self.terms)

    def balance(self) -> None:
        """Copy each term's balanced coefficient into its user coefficient."""
        for term in self.terms:
            term.user_coefficient = term.balanced_coefficient

    def reset(self) -> None:
        for term in self.terms:
            term.reset()
        self._update_coefficients_sum()
        self.update_balanced_state()

    def get_coefficients_string(self) -> str:
        """Balanced coefficients only, e.g. ``2 → 2 + 1``. Used to reveal answers."""
        reactants = " + ".join(str(term.balanced_coefficient) for term in self.reactants)
        products = " + ".join(str(term.balanced_coefficient) for term in self.products)
        return f"{reactants} {RIGHT_ARROW} {products}"

    def dispose(self) -> None:
        """Detach every external observer; call when the equation is superseded."""
        self._observers.clear()
        for term in self.terms:
            term._observers.clear()

    def __repr__(self) -> str:
        return f"Equation({self.name!r})"
