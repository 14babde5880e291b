from __future__ import annotations

from PySide6 import QtCore

from elemtab.theming.theme_tokens import DEFAULT_THEME, THEME_TOKENS


class ThemeManager(QtCore.QObject):
    theme_changed = QtCore.Signal(dict)

    def __init__(self) -> None:
        super().__init__()
        self._tokens: dict = THEME_TOKENS[DEFAULT_THEME]

    def available_themes(self) -> list[str]:
        return list(THEME_TOKENS.keys())

    def set_theme(self, name: str) -> dict:
        if name not in THEME_TOKENS:
            raise KeyError(f"Unknown theme: {name!r}")
        self._tokens = THEME_TOKENS[name]
        self.theme_changed.emit(self._tokens)
        return self._tokens

    def tokens(self) -> dict:
        return self._tokens


_theme_manager: ThemeManager | None = None


def get_theme_manager() -> ThemeManager:
    global _theme_manager
    if _theme_manager is None:
        _theme_manager = ThemeManager()
    return _theme_manager
