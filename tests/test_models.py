import unittest

from chembalance import molecules
from chembalance.exceptions import FormulaError
from chembalance.models import Atom, Molecule, parse_formula


class TestAtom(unittest.TestCase):
    def test_interned_by_symbol(self):
        self.assertIs(Atom.of("H"), Atom.of("H"))
        self.assertEqual(Atom.of("Cl").name, "Chlorine")

    def test_equality_by_element(self):
        self.assertEqual(Atom("O"), Atom.of("O"))

    def test_unknown_element(self):
        with self.assertRaises(FormulaError):
            Atom.of("Xx")


class TestFormula(unittest.TestCase):
    def test_water(self):
        self.assertEqual([a.element for a in parse_formula("H2O")], ["H", "H", "O"])

    def test_formula_order_is_kept(self):
        # CH3OH lists its trailing H after the O
        self.assertEqual(
            [a.element for a in parse_formula("CH3OH")],
            ["C", "H", "H", "H", "O", "H"],
        )

    def test_two_letter_elements(self):
        self.assertEqual([a.element for a in parse_formula("PCl3")], ["P", "Cl", "Cl", "Cl"])

    def test_malformed(self):
        for formula in ("", "h2o", "H2-O", "(OH)2", "H0"):
            with self.subTest(formula=formula):
                with self.assertRaises(FormulaError):
                    parse_formula(formula)


class TestMolecule(unittest.TestCase):
    def test_from_formula(self):
        molecule = Molecule.from_formula("NH3")
        self.assertEqual(molecule.symbol, "NH3")
        self.assertEqual(len(molecule.atoms), 4)
        self.assertFalse(molecule.is_big())

    def test_immutable(self):
        molecule = molecules.get("O2")
        with self.assertRaises(AttributeError):
            molecule.symbol = "O3"

    def test_big_flag_is_data(self):
        # CH3OH has fewer atoms than C2H4 but is flagged big
        self.assertTrue(molecules.get("CH3OH").is_big())
        self.assertFalse(molecules.get("C2H4").is_big())

    def test_shared_instances(self):
        self.assertIs(molecules.get("H2O"), molecules.MOLECULES["H2O"])

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            molecules.MOLECULES["H2O2"] = Molecule.from_formula("H2O2")

    def test_unknown_molecule(self):
        with self.assertRaises(KeyError):
            molecules.get("H2O2")


if __name__ == '__main__':
    unittest.main()
