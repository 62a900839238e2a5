"""Species used by the equation catalog.

Molecules are immutable and shared by every equation term that references them,
so the table below is built once at import time and exposed read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from chembalance.models import Molecule

# Molecules drawn with many or large atoms; they are kept out of the easiest game level.
_BIG_SPECIES = frozenset({"C2H5OH", "C2H6", "CH3OH", "P4", "PCl3", "PCl5", "PF3", "PH3"})

_FORMULAS = (
    "C", "S", "H2", "O2", "N2", "F2", "Cl2", "P4",
    "H2O", "HCl", "HF", "NH3", "NO", "NO2", "N2O",
    "CO", "CO2", "CS2", "CH4", "CH2O", "CH3OH",
    "C2H2", "C2H4", "C2H6", "C2H5OH",
    "SO2", "SO3", "OF2", "PH3", "PF3", "PCl3", "PCl5",
)


def _build() -> Mapping[str, Molecule]:
    table = {
        formula: Molecule.from_formula(formula, big=formula in _BIG_SPECIES)
        for formula in _FORMULAS
    }
    return MappingProxyType(table)


MOLECULES: Mapping[str, Molecule] = _build()


def get(symbol: str) -> Molecule:
    """Look up a catalog molecule by its formula."""
    try:
        return MOLECULES[symbol]
    except KeyError:
        raise KeyError(f"Unknown molecule: {symbol}") from None
