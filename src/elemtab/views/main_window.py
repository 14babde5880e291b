from __future__ import annotations

import sys

import qtawesome as qta
from PySide6 import QtCore, QtGui, QtWidgets

from elemtab.chem.properties import PROPERTIES, format_listing
from elemtab.session import TableSession
from elemtab.theming.apply_theme import apply_theme as apply_theme_tokens
from elemtab.theming.theme_manager import get_theme_manager
from elemtab.views.periodic_table_view import PeriodicTableView


class ElemTabMainWindow(QtWidgets.QMainWindow):
    def __init__(self, session: TableSession) -> None:
        super().__init__()
        self.setWindowTitle("Periodic Table")
        self.setMinimumSize(1200, 640)
        self.session = session
        self._theme_manager = get_theme_manager()
        self._theme_manager.theme_changed.connect(self._on_theme_changed)

        self.view = PeriodicTableView(session)
        self.view.message.connect(self._show_message)
        self.setCentralWidget(self.view)
        self._build_toolbar()
        self._build_menus()

        self.statusBar().showMessage("Arrow keys move between elements; + and - change the reference value.")
        self.apply_theme(session.config.theme)

    def _build_toolbar(self) -> None:
        toolbar = QtWidgets.QToolBar("Navigation")
        toolbar.setMovable(False)
        self.addToolBar(QtCore.Qt.ToolBarArea.TopToolBarArea, toolbar)

        prev_act = QtGui.QAction("Previous element", self)
        prev_act.setIcon(qta.icon("fa5s.arrow-left"))
        prev_act.triggered.connect(lambda: self.session.move(-1))
        next_act = QtGui.QAction("Next element", self)
        next_act.setIcon(qta.icon("fa5s.arrow-right"))
        next_act.triggered.connect(lambda: self.session.move(1))
        down_act = QtGui.QAction("Decrease reference", self)
        down_act.setIcon(qta.icon("fa5s.minus"))
        down_act.triggered.connect(lambda: self.session.adjust_reference(-1))
        up_act = QtGui.QAction("Increase reference", self)
        up_act.setIcon(qta.icon("fa5s.plus"))
        up_act.triggered.connect(lambda: self.session.adjust_reference(1))
        props_act = QtGui.QAction("Jump to properties", self)
        props_act.setIcon(qta.icon("fa5s.list"))
        props_act.triggered.connect(self.view.jump_to_properties)
        lookup_act = QtGui.QAction("Look up element", self)
        lookup_act.setIcon(qta.icon("fa5s.globe"))
        lookup_act.triggered.connect(self.view.open_lookup)
        copy_act = QtGui.QAction("Copy to clipboard", self)
        copy_act.setIcon(qta.icon("fa5s.copy"))
        copy_act.triggered.connect(self._copy_text)

        for action in (prev_act, next_act, down_act, up_act, props_act, lookup_act, copy_act):
            toolbar.addAction(action)

    def _build_menus(self) -> None:
        view_menu = self.menuBar().addMenu("View")
        theme_menu = view_menu.addMenu("Theme")
        theme_group = QtGui.QActionGroup(self)
        theme_group.setExclusive(True)
        for name in self._theme_manager.available_themes():
            action = QtGui.QAction(name, self)
            action.setCheckable(True)
            action.setChecked(name == self.session.config.theme)
            action.triggered.connect(lambda checked, n=name: self.apply_theme(n))
            theme_group.addAction(action)
            theme_menu.addAction(action)
        cycle_scheme = QtGui.QAction("Next colouring", self)
        cycle_scheme.setShortcut(QtGui.QKeySequence("Ctrl+K"))
        cycle_scheme.triggered.connect(lambda: self.session.cycle_scheme())
        view_menu.addAction(cycle_scheme)
        cycle_layout = QtGui.QAction("Toggle layout", self)
        cycle_layout.setShortcut(QtGui.QKeySequence("Ctrl+L"))
        cycle_layout.triggered.connect(lambda: self.session.cycle_convention())
        view_menu.addAction(cycle_layout)

        list_menu = self.menuBar().addMenu("List")
        for spec in PROPERTIES:
            action = QtGui.QAction(spec.label, self)
            action.triggered.connect(lambda checked, n=spec.name: self._show_listing(n))
            list_menu.addAction(action)

    def apply_theme(self, theme_name: str) -> None:
        try:
            self._theme_manager.set_theme(theme_name)
        except KeyError as exc:
            self._show_message(str(exc))
            return
        if theme_name != self.session.config.theme:
            self.session.set_config("theme", theme_name)

    def _on_theme_changed(self, tokens: dict) -> None:
        app = QtWidgets.QApplication.instance()
        if app:
            apply_theme_tokens(app, tokens)
        self.view.apply_theme(tokens)

    def _show_message(self, message: str) -> None:
        print(message, file=sys.stderr)
        self.statusBar().showMessage(message, 5000)

    def _copy_text(self) -> None:
        QtWidgets.QApplication.clipboard().setText(self.view.plain_text())

    def _show_listing(self, name: str) -> None:
        order, ok = QtWidgets.QInputDialog.getItem(
            self, "Sort listing", "Order", ["Atomic number", "ascending", "descending"], 0, False
        )
        if not ok:
            return
        rows = self.session.list_by_property(name, None if order == "Atomic number" else order)
        dialog = QtWidgets.QDialog(self)
        dialog.setWindowTitle("Element listing")
        layout = QtWidgets.QVBoxLayout(dialog)
        text = QtWidgets.QPlainTextEdit(format_listing(rows, name))
        text.setReadOnly(True)
        text.setFont(QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.SystemFont.FixedFont))
        layout.addWidget(text)
        buttons = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(dialog.reject)
        layout.addWidget(buttons)
        dialog.resize(520, 640)
        dialog.exec()
