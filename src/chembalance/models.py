"""Data structures for atoms and molecules."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Tuple

from chembalance.exceptions import FormulaError

ELEMENT_NAMES = {
    "C": "Carbon",
    "Cl": "Chlorine",
    "F": "Fluorine",
    "H": "Hydrogen",
    "N": "Nitrogen",
    "O": "Oxygen",
    "P": "Phosphorus",
    "S": "Sulfur",
}

_FORMULA_TOKEN = re.compile(r"([A-Z][a-z]?)(\d*)")


@dataclass(frozen=True)
class Atom:
    element: str
    name: str = field(default="", compare=False)

    @classmethod
    def of(cls, element: str) -> "Atom":
        """Return the shared atom instance for an element symbol."""
        return _intern_atom(element)


@lru_cache(maxsize=None)
def _intern_atom(element: str) -> Atom:
    if element not in ELEMENT_NAMES:
        raise FormulaError(f"Unknown element {element!r}")
    return Atom(element, ELEMENT_NAMES[element])


@dataclass(frozen=True)
class Molecule:
    symbol: str
    atoms: Tuple[Atom, ...]
    big: bool = False

    def is_big(self) -> bool:
        return self.big

    @classmethod
    def from_formula(cls, formula: str, big: bool = False) -> "Molecule":
        return cls(symbol=formula, atoms=parse_formula(formula), big=big)


def parse_formula(formula: str) -> Tuple[Atom, ...]:
    """Expand a formula like ``CH3OH`` into its atoms, in formula order.

    Each element token is repeated by its subscript, so ``H2O`` yields
    ``(H, H, O)``. Only flat formulas are supported (no groups or charges).
    """
    if not formula:
        raise FormulaError("Empty formula")

    atoms: list[Atom] = []
    position = 0
    for match in _FORMULA_TOKEN.finditer(formula):
        if match.start() != position:
            raise FormulaError(f"Unexpected character at position {position}", formula)
        element, digits = match.groups()
        count = int(digits) if digits else 1
        if count < 1:
            raise FormulaError(f"Invalid subscript for {element}", formula)
        atoms.extend([Atom.of(element)] * count)
        position = match.end()

    if position != len(formula):
        raise FormulaError(f"Unexpected character at position {position}", formula)
    return tuple(atoms)
