import unittest

import numpy as np

from chembalance.catalog import default_catalog
from chembalance.gui.charts import atom_count_series


class TestAtomCountSeries(unittest.TestCase):
    def test_series_from_equation(self):
        # CH4 + 2 O2 -> CO2 + 2 H2O, all coefficients 1
        equation = default_catalog().create("CH4_2O2_CO2_2H2O")
        series = atom_count_series(equation)
        self.assertEqual(series.elements, ("C", "H", "O"))
        np.testing.assert_array_equal(series.reactants, [1, 4, 2])
        np.testing.assert_array_equal(series.products, [1, 2, 3])
        np.testing.assert_array_equal(series.balanced_mask, [True, False, False])
        self.assertEqual(series.max_count, 4)

    def test_balanced_equation(self):
        equation = default_catalog().create("CH4_2O2_CO2_2H2O")
        equation.balance()
        series = atom_count_series(equation)
        self.assertTrue(series.balanced_mask.all())


if __name__ == '__main__':
    unittest.main()
