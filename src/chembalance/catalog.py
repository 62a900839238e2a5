"""Catalog of pre-defined equations.

Balanced coefficients are hand-curated data; nothing here solves equations.
Every ``create()`` builds new terms, so two equations from the same entry
never share coefficients.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping, Optional, Tuple

from chembalance import molecules
from chembalance.equation import Equation, EquationKind, EquationTerm

TermData = Tuple[int, str]  # (balanced coefficient, molecule formula)


@dataclass(frozen=True)
class CatalogEntry:
    key: str
    reactants: Tuple[TermData, ...]
    products: Tuple[TermData, ...]
    name: Optional[str] = None

    @property
    def kind(self) -> EquationKind:
        if len(self.products) == 1:
            return EquationKind.SYNTHESIS
        if len(self.reactants) == 1:
            return EquationKind.DECOMPOSITION
        return EquationKind.DISPLACEMENT

    def has_big_molecule(self) -> bool:
        return any(molecules.get(formula).is_big() for _, formula in self.reactants + self.products)

    def create(self) -> Equation:
        return Equation(
            [EquationTerm(coefficient, molecules.get(formula)) for coefficient, formula in self.reactants],
            [EquationTerm(coefficient, molecules.get(formula)) for coefficient, formula in self.products],
            name=self.name,
        )


def _key(reactants: Tuple[TermData, ...], products: Tuple[TermData, ...]) -> str:
    def side(terms: Tuple[TermData, ...]) -> str:
        return "_".join(f"{c}{f}" if c != 1 else f for c, f in terms)

    return f"{side(reactants)}_{side(products)}"


def entry(
    reactants: Iterable[TermData],
    products: Iterable[TermData],
    name: Optional[str] = None,
) -> CatalogEntry:
    reactants = tuple(reactants)
    products = tuple(products)
    return CatalogEntry(_key(reactants, products), reactants, products, name)


class EquationCatalog:
    """Immutable registry of equation factories, keyed by entry key."""

    def __init__(self, entries: Iterable[CatalogEntry]):
        table = {}
        for item in entries:
            if item.key in table:
                raise ValueError(f"Duplicate catalog entry: {item.key}")
            table[item.key] = item
        self._entries: Mapping[str, CatalogEntry] = MappingProxyType(table)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def names(self) -> list[str]:
        return list(self._entries)

    def get(self, key: str) -> CatalogEntry:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(f"Unknown equation: {key}") from None

    def factory(self, key: str) -> Callable[[], Equation]:
        return self.get(key).create

    def create(self, key: str) -> Equation:
        return self.get(key).create()

    def of_kind(self, *kinds: EquationKind) -> list[CatalogEntry]:
        return [item for item in self._entries.values() if item.kind in kinds]


SYNTHESIS = (
    entry([(2, "H2"), (1, "O2")], [(2, "H2O")]),
    entry([(1, "H2"), (1, "Cl2")], [(2, "HCl")]),
    entry([(1, "CO"), (2, "H2")], [(1, "CH3OH")]),
    entry([(1, "CH2O"), (1, "H2")], [(1, "CH3OH")]),
    entry([(1, "C2H4"), (1, "H2")], [(1, "C2H6")]),
    entry([(1, "C2H2"), (2, "H2")], [(1, "C2H6")]),
    entry([(1, "C"), (1, "O2")], [(1, "CO2")]),
    entry([(2, "C"), (1, "O2")], [(2, "CO")]),
    entry([(1, "C"), (2, "S")], [(1, "CS2")]),
    entry([(1, "N2"), (3, "H2")], [(2, "NH3")]),
    entry([(1, "N2"), (1, "O2")], [(2, "NO")]),
    entry([(2, "N2"), (1, "O2")], [(2, "N2O")]),
    entry([(1, "P4"), (6, "H2")], [(4, "PH3")]),
    entry([(1, "P4"), (6, "F2")], [(4, "PF3")]),
    entry([(1, "P4"), (6, "Cl2")], [(4, "PCl3")]),
    entry([(1, "PCl3"), (1, "Cl2")], [(1, "PCl5")]),
    entry([(2, "SO2"), (1, "O2")], [(2, "SO3")]),
    entry([(2, "F2"), (1, "O2")], [(2, "OF2")]),
)

DECOMPOSITION = (
    entry([(2, "H2O")], [(2, "H2"), (1, "O2")]),
    entry([(2, "HCl")], [(1, "H2"), (1, "Cl2")]),
    entry([(1, "CH3OH")], [(1, "CO"), (2, "H2")]),
    entry([(1, "C2H6")], [(1, "C2H4"), (1, "H2")]),
    entry([(2, "CO2")], [(2, "CO"), (1, "O2")]),
    entry([(2, "CO")], [(1, "C"), (1, "CO2")]),
    entry([(2, "NH3")], [(1, "N2"), (3, "H2")]),
    entry([(2, "NO")], [(1, "N2"), (1, "O2")]),
    entry([(2, "NO2")], [(2, "NO"), (1, "O2")]),
    entry([(4, "PCl3")], [(1, "P4"), (6, "Cl2")]),
    entry([(1, "PCl5")], [(1, "PCl3"), (1, "Cl2")]),
    entry([(2, "SO3")], [(2, "SO2"), (1, "O2")]),
)

DISPLACEMENT = (
    entry([(1, "CH4"), (2, "O2")], [(1, "CO2"), (2, "H2O")]),
    entry([(2, "C2H6"), (7, "O2")], [(4, "CO2"), (6, "H2O")]),
    entry([(1, "C2H4"), (3, "O2")], [(2, "CO2"), (2, "H2O")]),
    entry([(2, "C2H2"), (5, "O2")], [(4, "CO2"), (2, "H2O")]),
    entry([(1, "C2H5OH"), (3, "O2")], [(2, "CO2"), (3, "H2O")]),
    entry([(4, "NH3"), (3, "O2")], [(2, "N2"), (6, "H2O")]),
    entry([(4, "NH3"), (5, "O2")], [(4, "NO"), (6, "H2O")]),
    entry([(4, "NH3"), (7, "O2")], [(4, "NO2"), (6, "H2O")]),
    entry([(1, "CH4"), (1, "H2O")], [(1, "CO"), (3, "H2")]),
    entry([(2, "C"), (2, "H2O")], [(1, "CH4"), (1, "CO2")]),
    entry([(1, "CS2"), (3, "O2")], [(1, "CO2"), (2, "SO2")]),
    entry([(2, "F2"), (1, "H2O")], [(1, "OF2"), (2, "HF")]),
)

# Named equations for the introduction mode.
MAKE_AMMONIA = entry([(1, "N2"), (3, "H2")], [(2, "NH3")], name="Make Ammonia")
SEPARATE_WATER = entry([(2, "H2O")], [(2, "H2"), (1, "O2")], name="Separate Water")
COMBUST_METHANE = entry([(1, "CH4"), (2, "O2")], [(1, "CO2"), (2, "H2O")], name="Combust Methane")


def default_catalog() -> EquationCatalog:
    """Build the registry of every game equation."""
    return EquationCatalog(SYNTHESIS + DECOMPOSITION + DISPLACEMENT)
