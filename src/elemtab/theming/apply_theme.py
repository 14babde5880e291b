from __future__ import annotations

from PySide6 import QtGui, QtWidgets


def _relative_luminance(color: QtGui.QColor) -> float:
    def channel(value: float) -> float:
        value /= 255.0
        return value / 12.92 if value <= 0.03928 else ((value + 0.055) / 1.055) ** 2.4

    return (
        0.2126 * channel(color.red())
        + 0.7152 * channel(color.green())
        + 0.0722 * channel(color.blue())
    )


def contrast_text(background: str) -> str:
    """Dark or light text colour, whichever reads better on ``background``."""
    return "#0f172a" if _relative_luminance(QtGui.QColor(background)) > 0.4 else "#f8fafc"


def build_palette(tokens: dict) -> QtGui.QPalette:
    colors = tokens["colors"]
    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, QtGui.QColor(colors["bg"]))
    palette.setColor(QtGui.QPalette.Base, QtGui.QColor(colors["surface"]))
    palette.setColor(QtGui.QPalette.AlternateBase, QtGui.QColor(colors["surfaceAlt"]))
    palette.setColor(QtGui.QPalette.WindowText, QtGui.QColor(colors["text"]))
    palette.setColor(QtGui.QPalette.Text, QtGui.QColor(colors["text"]))
    palette.setColor(QtGui.QPalette.Button, QtGui.QColor(colors["surface"]))
    palette.setColor(QtGui.QPalette.ButtonText, QtGui.QColor(colors["text"]))
    palette.setColor(QtGui.QPalette.BrightText, QtGui.QColor(colors["accent"]))
    highlight = QtGui.QColor(colors["accent"])
    palette.setColor(QtGui.QPalette.Highlight, highlight)
    palette.setColor(QtGui.QPalette.HighlightedText, QtGui.QColor(contrast_text(colors["accent"])))
    palette.setColor(QtGui.QPalette.ToolTipBase, QtGui.QColor(colors["surface"]))
    palette.setColor(QtGui.QPalette.ToolTipText, QtGui.QColor(colors["text"]))
    return palette


def build_stylesheet(tokens: dict) -> str:
    colors = tokens["colors"]
    radii = tokens["radii"]
    spacing = tokens["spacing"]
    font = tokens["font"]
    focus = colors["focusRing"]
    is_high_contrast = tokens.get("meta", {}).get("mode") == "high_contrast"
    hover_border = colors["border"] if is_high_contrast else colors["accent"]
    return f"""
    * {{
        font-family: "{font["family"]}";
        font-size: {font["baseSize"]}pt;
    }}
    QMainWindow {{
        background-color: {colors["bg"]};
    }}
    QWidget {{
        color: {colors["text"]};
    }}
    QTextEdit, QTextBrowser {{
        background: {colors["surface"]};
        border: 1px solid {colors["border"]};
        border-radius: {radii["md"]}px;
        padding: {spacing["xs"]}px;
        font-family: "{font["monoFamily"]}", monospace;
    }}
    QTextEdit:focus, QTextBrowser:focus {{
        border: 1px solid {focus};
    }}
    QToolBar {{
        background: {colors["surfaceAlt"]};
        border: none;
        spacing: {spacing["xs"]}px;
        padding: {spacing["xs"]}px;
    }}
    QToolButton {{
        background: {colors["surfaceAlt"]};
        border: 1px solid {colors["surfaceAlt"]};
        border-radius: {radii["sm"]}px;
        padding: {spacing["xs"]}px;
    }}
    QToolButton:hover {{
        border-color: {hover_border};
    }}
    QLineEdit, QComboBox, QDoubleSpinBox {{
        background: {colors["surface"]};
        border: 1px solid {colors["border"]};
        border-radius: {radii["sm"]}px;
        padding: {spacing["xs"]}px {spacing["sm"]}px;
        min-height: 24px;
    }}
    QLineEdit:focus, QComboBox:focus, QDoubleSpinBox:focus {{
        border: 1px solid {focus};
    }}
    QStatusBar {{
        background: {colors["surfaceAlt"]};
        color: {colors["textMuted"]};
    }}
    QToolTip {{
        background: {colors["surface"]};
        color: {colors["text"]};
        border: 1px solid {colors["border"]};
        padding: {spacing["xs"]}px;
    }}
    """


def apply_theme(app: QtWidgets.QApplication, tokens: dict) -> None:
    app.setPalette(build_palette(tokens))
    app.setStyleSheet(build_stylesheet(tokens))
