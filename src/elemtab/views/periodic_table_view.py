from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from elemtab.session import TableSession
from elemtab.table.classify import SCHEME_NAMES
from elemtab.table.layout import Convention
from elemtab.theming.apply_theme import contrast_text

# Keys that move the cursor, and by how many cells.
_MOVE_KEYS = {
    QtCore.Qt.Key.Key_Right: 1,
    QtCore.Qt.Key.Key_Left: -1,
    QtCore.Qt.Key.Key_N: 1,
    QtCore.Qt.Key.Key_P: -1,
}


class PeriodicTableView(QtWidgets.QWidget):
    message = QtCore.Signal(str)

    def __init__(self, session: TableSession, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
        self.session.report = self._report
        self._syncing = False

        self.table_view = QtWidgets.QTextEdit()
        self.table_view.setReadOnly(True)
        self.table_view.setLineWrapMode(QtWidgets.QTextEdit.LineWrapMode.NoWrap)
        self.table_view.setTextInteractionFlags(
            QtCore.Qt.TextInteractionFlag.TextSelectableByMouse | QtCore.Qt.TextInteractionFlag.TextSelectableByKeyboard
        )
        self.table_view.cursorPositionChanged.connect(self._on_cursor_moved)
        self.table_view.installEventFilter(self)

        self.info = QtWidgets.QTextBrowser()
        self.info.setOpenExternalLinks(False)
        self.info.anchorClicked.connect(self._handle_info_link)

        self.controls = self._build_controls()

        left = QtWidgets.QVBoxLayout()
        left.addWidget(self.controls)
        left.addWidget(self.table_view, 1)
        layout = QtWidgets.QHBoxLayout(self)
        layout.addLayout(left, 3)
        layout.addWidget(self.info, 2)

        self.session.subscribe(self._on_session_changed)
        self._render()
        self._refresh_info()

    def _build_controls(self) -> QtWidgets.QWidget:
        container = QtWidgets.QWidget()
        layout = QtWidgets.QHBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)

        self.scheme_combo = QtWidgets.QComboBox()
        for name in SCHEME_NAMES:
            self.scheme_combo.addItem(name.replace("-", " ").capitalize(), name)
        self.scheme_combo.currentIndexChanged.connect(self._on_scheme_change)
        layout.addWidget(QtWidgets.QLabel("Colour by"))
        layout.addWidget(self.scheme_combo)

        self.convention_combo = QtWidgets.QComboBox()
        for convention in Convention:
            self.convention_combo.addItem(convention.value.capitalize(), convention.value)
        self.convention_combo.currentIndexChanged.connect(self._on_convention_change)
        layout.addWidget(QtWidgets.QLabel("Layout"))
        layout.addWidget(self.convention_combo)

        self.reference_spin = QtWidgets.QDoubleSpinBox()
        self.reference_spin.setRange(-1.0e6, 1.0e6)
        self.reference_spin.setDecimals(3)
        self.reference_spin.setKeyboardTracking(False)
        self.reference_spin.valueChanged.connect(self._on_reference_change)
        layout.addWidget(QtWidgets.QLabel("Reference"))
        layout.addWidget(self.reference_spin)

        self.find_edit = QtWidgets.QLineEdit()
        self.find_edit.setPlaceholderText("Find element (number, symbol or name)")
        self.find_edit.returnPressed.connect(self._on_find)
        layout.addWidget(self.find_edit, 1)
        self._sync_controls()
        return container

    def apply_theme(self, tokens: dict) -> None:
        font = QtGui.QFont(tokens.get("font", {}).get("monoFamily", "Consolas"))
        font.setStyleHint(QtGui.QFont.StyleHint.Monospace)
        font.setPointSize(tokens.get("font", {}).get("baseSize", 10) + 2)
        self.table_view.setFont(font)
        self._render()

    def _report(self, message: str) -> None:
        self.message.emit(message)

    def _sync_controls(self) -> None:
        session = self.session
        widgets = (self.scheme_combo, self.convention_combo, self.reference_spin)
        for widget in widgets:
            widget.blockSignals(True)
        index = self.scheme_combo.findData(session.scheme.name if session.scheme else session.config.scheme)
        if index >= 0:
            self.scheme_combo.setCurrentIndex(index)
        self.convention_combo.setCurrentIndex(self.convention_combo.findData(session.config.convention.value))
        value = session.reference_value()
        self.reference_spin.setEnabled(value is not None)
        if value is not None:
            step = session.references.step(session.reference_key)
            self.reference_spin.setSingleStep(step)
            self.reference_spin.setValue(value)
        for widget in widgets:
            widget.blockSignals(False)

    def _render(self) -> None:
        table = self.session.table
        palette = self.session.palette
        document = self.table_view.document()
        self._syncing = True
        document.clear()
        cursor = QtGui.QTextCursor(document)
        plain = QtGui.QTextCharFormat()
        for index, spans in enumerate(table.lines):
            if index:
                cursor.insertText("\n", plain)
            for span in spans:
                if span.style in palette:
                    fmt = QtGui.QTextCharFormat()
                    fmt.setBackground(QtGui.QColor(palette[span.style]))
                    fmt.setForeground(QtGui.QColor(contrast_text(palette[span.style])))
                    if span.z is not None:
                        fmt.setToolTip(self.session.store.name(span.z))
                    cursor.insertText(span.text, fmt)
                else:
                    cursor.insertText(span.text, plain)
        self._syncing = False
        self._place_cursor()

    def _place_cursor(self) -> None:
        self._syncing = True
        cursor = self.table_view.textCursor()
        cursor.setPosition(self.session.position)
        cursor.setPosition(self.session.position + self.session.config.element_width, QtGui.QTextCursor.MoveMode.KeepAnchor)
        self.table_view.setTextCursor(cursor)
        self._syncing = False

    def _refresh_info(self) -> None:
        self.info.setHtml(self.session.detail.html(self.session.lookup_url()))

    def _on_session_changed(self, session: TableSession, event: str) -> None:
        if event == "cursor":
            self._place_cursor()
        else:
            self._render()
            self._sync_controls()
        self._refresh_info()

    def _on_cursor_moved(self) -> None:
        if self._syncing:
            return
        position = self.table_view.textCursor().selectionStart()
        if self.session.table.z_at(position) is None:
            return
        self.session.set_position(position)

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if obj is self.table_view and event.type() == QtCore.QEvent.Type.KeyPress:
            key = event.key()
            if key in _MOVE_KEYS:
                self.session.move(_MOVE_KEYS[key])
                return True
            if key in (QtCore.Qt.Key.Key_Plus, QtCore.Qt.Key.Key_Equal):
                self.session.adjust_reference(1)
                return True
            if key == QtCore.Qt.Key.Key_Minus:
                self.session.adjust_reference(-1)
                return True
            if key == QtCore.Qt.Key.Key_C:
                self.session.cycle_scheme()
                return True
            if key == QtCore.Qt.Key.Key_L:
                self.session.cycle_convention()
                return True
        return super().eventFilter(obj, event)

    def _on_scheme_change(self) -> None:
        name = self.scheme_combo.currentData()
        if name:
            self.session.set_scheme(name)

    def _on_convention_change(self) -> None:
        value = self.convention_combo.currentData()
        if value:
            self.session.set_convention(value)

    def _on_reference_change(self, value: float) -> None:
        self.session.set_reference(value)

    def _on_find(self) -> None:
        if self.session.find(self.find_edit.text()) is not None:
            self.table_view.setFocus()

    def jump_to_properties(self) -> None:
        self.info.scrollToAnchor("properties")

    def open_lookup(self) -> None:
        QtGui.QDesktopServices.openUrl(QtCore.QUrl(self.session.lookup_url()))

    def _handle_info_link(self, url: QtCore.QUrl) -> None:
        QtGui.QDesktopServices.openUrl(url)

    def plain_text(self) -> str:
        return self.session.text + "\n\n" + self.session.detail.text
