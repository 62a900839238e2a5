import unittest

from chembalance import molecules
from chembalance.catalog import default_catalog
from chembalance.equation import AtomCount, Equation, EquationKind, EquationTerm


def water_decomposition() -> Equation:
    # 2 H2O -> 2 H2 + O2
    return Equation(
        [EquationTerm(2, molecules.get("H2O"))],
        [EquationTerm(2, molecules.get("H2")), EquationTerm(1, molecules.get("O2"))],
    )


def set_coefficients(equation: Equation, *values: int) -> None:
    for term, value in zip(equation.terms, values, strict=True):
        term.user_coefficient = value


class TestBalancedState(unittest.TestCase):
    def setUp(self):
        self.equation = water_decomposition()

    def test_balanced_and_simplified(self):
        set_coefficients(self.equation, 2, 2, 1)
        self.assertTrue(self.equation.balanced)
        self.assertTrue(self.equation.balanced_and_simplified)

    def test_uniform_multiple_is_balanced_not_simplified(self):
        set_coefficients(self.equation, 4, 4, 2)
        self.assertTrue(self.equation.balanced)
        self.assertFalse(self.equation.balanced_and_simplified)

    def test_unbalanced(self):
        set_coefficients(self.equation, 2, 1, 1)
        self.assertFalse(self.equation.balanced)
        self.assertFalse(self.equation.balanced_and_simplified)

    def test_fractional_multiplier_is_not_balanced(self):
        # multiplier 1/2 gives 1, 1, 1/2 -- O2 can't match
        set_coefficients(self.equation, 1, 1, 1)
        self.assertFalse(self.equation.balanced)

    def test_zero_anchor_is_unbalanced(self):
        set_coefficients(self.equation, 0, 0, 0)
        self.assertFalse(self.equation.balanced)
        self.assertEqual(self.equation.coefficients_sum, 0)

    def test_zero_anchor_ignores_other_terms(self):
        set_coefficients(self.equation, 0, 2, 1)
        self.assertFalse(self.equation.balanced)

    def test_large_coefficients(self):
        set_coefficients(self.equation, 200, 200, 100)
        self.assertTrue(self.equation.balanced)
        self.assertFalse(self.equation.balanced_and_simplified)

    def test_balance(self):
        set_coefficients(self.equation, 7, 0, 3)
        self.equation.balance()
        self.assertEqual([t.user_coefficient for t in self.equation.terms], [2, 2, 1])
        self.assertTrue(self.equation.balanced_and_simplified)

    def test_balance_every_catalog_entry(self):
        for item in default_catalog():
            equation = item.create()
            equation.balance()
            self.assertTrue(equation.balanced_and_simplified, item.key)

    def test_reset(self):
        set_coefficients(self.equation, 2, 2, 1)
        self.equation.reset()
        self.assertEqual([t.user_coefficient for t in self.equation.terms], [1, 1, 1])
        self.assertFalse(self.equation.balanced)
        self.assertEqual(self.equation.coefficients_sum, 3)

    def test_reset_on_equation_balanced_at_one(self):
        equation = default_catalog().create("C_O2_CO2")
        set_coefficients(equation, 3, 1, 2)
        equation.reset()
        self.assertTrue(equation.balanced)
        self.assertTrue(equation.balanced_and_simplified)

    def test_coefficients_sum(self):
        set_coefficients(self.equation, 3, 0, 5)
        self.assertEqual(self.equation.coefficients_sum, 8)


class TestAtomCounts(unittest.TestCase):
    def test_counts_at_balanced_coefficients(self):
        equation = water_decomposition()
        equation.balance()
        counts = equation.get_atom_counts()
        self.assertEqual(counts, [AtomCount("H", 4, 4), AtomCount("O", 2, 2)])

    def test_counts_follow_user_coefficients(self):
        equation = water_decomposition()
        set_coefficients(equation, 2, 2, 2)
        counts = equation.get_atom_counts()
        self.assertEqual(counts, [AtomCount("H", 4, 4), AtomCount("O", 2, 4)])
        self.assertTrue(counts[0].is_balanced())
        self.assertFalse(counts[1].is_balanced())

    def test_order_of_first_appearance(self):
        # CH4 + 2 O2 -> CO2 + 2 H2O
        equation = default_catalog().create("CH4_2O2_CO2_2H2O")
        self.assertEqual([c.element for c in equation.get_atom_counts()], ["C", "H", "O"])

    def test_counts_weighted_by_multiplicity(self):
        # N2 + 3 H2 -> 2 NH3
        equation = default_catalog().create("N2_3H2_2NH3")
        equation.balance()
        self.assertEqual(
            equation.get_atom_counts(),
            [AtomCount("N", 2, 2), AtomCount("H", 6, 6)],
        )

    def test_stable_without_changes(self):
        equation = default_catalog().create("2C2H6_7O2_4CO2_6H2O")
        self.assertEqual(equation.get_atom_counts(), equation.get_atom_counts())

    def test_zero_coefficients_keep_elements(self):
        equation = water_decomposition()
        set_coefficients(equation, 0, 0, 0)
        self.assertEqual(equation.get_atom_counts(), [AtomCount("H", 0, 0), AtomCount("O", 0, 0)])


class TestObservers(unittest.TestCase):
    def setUp(self):
        self.equation = water_decomposition()
        self.events = []

    def test_notification_order(self):
        term = self.equation.reactants[0]

        def on_term(changed, old, new):
            # derived state has not been recomputed yet
            self.events.append(("term", old, new, self.equation.coefficients_sum))

        def on_equation(equation):
            self.events.append(("equation", equation.coefficients_sum, equation.balanced))

        self.equation.add_coefficients_observer(on_equation)
        term.add_observer(on_term)
        set_coefficients(self.equation, 2, 2, 1)

        self.assertEqual(
            self.events,
            [
                ("term", 1, 2, 3),
                ("equation", 4, False),
                # O2 is already 1: no event
                ("equation", 5, True),
            ],
        )

    def test_no_notification_without_change(self):
        self.equation.add_coefficients_observer(self.events.append)
        self.equation.reactants[0].user_coefficient = 1
        self.assertEqual(self.events, [])

    def test_unregistered_observer_not_called(self):
        self.equation.add_coefficients_observer(self.events.append)
        self.equation.products[0].user_coefficient = 3
        self.equation.remove_coefficients_observer(self.events.append)
        self.equation.products[0].user_coefficient = 4
        self.assertEqual(len(self.events), 1)

    def test_unregistered_term_observer_not_called(self):
        term = self.equation.products[1]
        observer = lambda *args: self.events.append(args)  # noqa: E731
        term.add_observer(observer)
        term.remove_observer(observer)
        term.user_coefficient = 5
        self.assertEqual(self.events, [])

    def test_remove_unknown_observer(self):
        self.equation.remove_coefficients_observer(self.events.append)

    def test_dispose_detaches_observers_but_keeps_state(self):
        self.equation.add_coefficients_observer(self.events.append)
        self.equation.dispose()
        self.equation.balance()
        self.assertEqual(self.events, [])
        self.assertTrue(self.equation.balanced_and_simplified)


class TestEquationTerm(unittest.TestCase):
    def test_rejects_negative(self):
        term = EquationTerm(1, molecules.get("O2"))
        with self.assertRaises(ValueError):
            term.user_coefficient = -1

    def test_rejects_non_integer(self):
        term = EquationTerm(1, molecules.get("O2"))
        with self.assertRaises(TypeError):
            term.user_coefficient = 1.5
        with self.assertRaises(TypeError):
            term.user_coefficient = True

    def test_balanced_coefficient_must_be_positive(self):
        with self.assertRaises(ValueError):
            EquationTerm(0, molecules.get("O2"))

    def test_term_cannot_join_two_equations(self):
        term = EquationTerm(1, molecules.get("O2"))
        Equation([term], [EquationTerm(1, molecules.get("O2"))])
        with self.assertRaises(ValueError):
            Equation([term], [EquationTerm(1, molecules.get("O2"))])


class TestEquationDescription(unittest.TestCase):
    def test_name(self):
        self.assertEqual(water_decomposition().name, "2 H2O → 2 H2 + O2")

    def test_coefficients_string(self):
        self.assertEqual(water_decomposition().get_coefficients_string(), "2 → 2 + 1")

    def test_kind(self):
        catalog = default_catalog()
        self.assertIs(water_decomposition().kind, EquationKind.DECOMPOSITION)
        self.assertIs(catalog.create("2H2_O2_2H2O").kind, EquationKind.SYNTHESIS)
        self.assertIs(catalog.create("CH4_2O2_CO2_2H2O").kind, EquationKind.DISPLACEMENT)

    def test_has_big_molecule(self):
        catalog = default_catalog()
        self.assertFalse(water_decomposition().has_big_molecule())
        # the big molecule is a product
        self.assertTrue(catalog.create("CO_2H2_CH3OH").has_big_molecule())
        self.assertTrue(catalog.create("CH3OH_CO_2H2").has_big_molecule())

    def test_requires_terms_on_both_sides(self):
        with self.assertRaises(ValueError):
            Equation([], [EquationTerm(1, molecules.get("O2"))])


if __name__ == '__main__':
    unittest.main()
