"""Chart data for the GUI layer."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chembalance.equation import Equation


@dataclass(frozen=True)
class AtomCountSeries:
    elements: tuple[str, ...]
    reactants: np.ndarray
    products: np.ndarray

    @property
    def balanced_mask(self) -> np.ndarray:
        return self.reactants == self.products

    @property
    def max_count(self) -> int:
        if not self.elements:
            return 0
        return int(max(self.reactants.max(), self.products.max()))


def atom_count_series(equation: Equation) -> AtomCountSeries:
    counts = equation.get_atom_counts()
    return AtomCountSeries(
        elements=tuple(count.element for count in counts),
        reactants=np.array([count.reactants_count for count in counts], dtype=int),
        products=np.array([count.products_count for count in counts], dtype=int),
    )
