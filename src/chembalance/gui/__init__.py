"""GUI package for chembalance."""

from chembalance.gui.charts import AtomCountSeries, atom_count_series

__all__ = ["AtomCountSeries", "atom_count_series"]
