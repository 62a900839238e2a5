"""Qt application entrypoint for the chembalance introduction window."""

from __future__ import annotations

import sys

import numpy as np
from PySide6 import QtCore, QtWidgets
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from chembalance.equation import Equation
from chembalance.gui.charts import AtomCountSeries, atom_count_series
from chembalance.introduction import IntroductionModel


class BarChartCanvas(FigureCanvasQTAgg):
    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        self.figure = Figure(figsize=(6, 4), tight_layout=True)
        super().__init__(self.figure)
        self.setParent(parent)
        self.axes = self.figure.add_subplot(1, 1, 1)

    def plot_series(self, series: AtomCountSeries) -> None:
        self.axes.clear()
        x = np.arange(len(series.elements))
        width = 0.38
        self.axes.bar(x - width / 2, series.reactants, width, label="Reactants")
        self.axes.bar(x + width / 2, series.products, width, label="Products")
        self.axes.set_xticks(x, series.elements)
        self.axes.set_ylabel("Atoms")
        self.axes.set_ylim(0, max(series.max_count, 1) + 1)
        self.axes.legend()
        self.draw()


class IntroductionWindow(QtWidgets.QMainWindow):
    def __init__(self, model: IntroductionModel | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Balancing Chemical Equations")
        self.resize(1000, 600)
        self.model = model or IntroductionModel()
        self._equation: Equation | None = None
        self._spins: list[QtWidgets.QSpinBox] = []

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)
        layout = QtWidgets.QVBoxLayout(central)

        self.choice_box = QtWidgets.QComboBox()
        self.choice_box.addItems(self.model.choice_names)
        self.choice_box.currentTextChanged.connect(self.model.select)
        layout.addWidget(self.choice_box)

        self.terms_panel = QtWidgets.QWidget()
        self.terms_layout = QtWidgets.QHBoxLayout(self.terms_panel)
        layout.addWidget(self.terms_panel)

        self.status_label = QtWidgets.QLabel()
        self.status_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.status_label)

        self.chart = BarChartCanvas()
        layout.addWidget(self.chart, stretch=1)

        reset_button = QtWidgets.QPushButton("Reset All")
        reset_button.clicked.connect(self._reset)
        layout.addWidget(reset_button, alignment=QtCore.Qt.AlignmentFlag.AlignRight)

        self.model.current_equation.link(self._equation_changed)

    def _equation_changed(self, equation: Equation, _old: Equation | None) -> None:
        if self._equation is not None:
            self._equation.remove_coefficients_observer(self._refresh)
        self._equation = equation
        equation.add_coefficients_observer(self._refresh)
        self._build_term_controls(equation)
        self._refresh(equation)

    def _build_term_controls(self, equation: Equation) -> None:
        while self.terms_layout.count():
            item = self.terms_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self._spins = []

        low, high = self.model.coefficient_range
        for index, term in enumerate(equation.terms):
            if index == len(equation.reactants):
                self.terms_layout.addWidget(QtWidgets.QLabel("→"))
            elif index > 0:
                self.terms_layout.addWidget(QtWidgets.QLabel("+"))
            spin = QtWidgets.QSpinBox()
            spin.setRange(low, high)
            spin.setValue(term.user_coefficient)
            spin.valueChanged.connect(lambda value, i=index: self.model.set_coefficient(i, value))
            self._spins.append(spin)
            self.terms_layout.addWidget(spin)
            self.terms_layout.addWidget(QtWidgets.QLabel(term.molecule.symbol))

    def _refresh(self, equation: Equation) -> None:
        for spin, term in zip(self._spins, equation.terms):
            if spin.value() != term.user_coefficient:
                spin.blockSignals(True)
                spin.setValue(term.user_coefficient)
                spin.blockSignals(False)
        if equation.balanced_and_simplified:
            self.status_label.setText("Balanced")
        elif equation.balanced:
            self.status_label.setText("Balanced, but not simplified")
        else:
            self.status_label.setText("Not balanced")
        self.chart.plot_series(atom_count_series(equation))

    def _reset(self) -> None:
        self.model.reset()
        self.choice_box.setCurrentIndex(0)
        self._refresh(self.model.current_equation.get())


def main() -> None:
    app = QtWidgets.QApplication(sys.argv)
    window = IntroductionWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
