from __future__ import annotations

import platform


def _default_font_family() -> str:
    if platform.system().lower().startswith("win"):
        return "Segoe UI"
    if platform.system().lower().startswith("darwin"):
        return "San Francisco"
    return "Inter"


_LIGHT_CATEGORIES = {
    "group-s": "#fca5a5",
    "group-p": "#fde68a",
    "group-d": "#93c5fd",
    "group-f": "#86efac",
    "state-solid": "#cbd5e1",
    "state-liquid": "#7dd3fc",
    "state-gas": "#fdba74",
    "state-unknown": "#e5e7eb",
    "discovery-before": "#a5b4fc",
    "discovery-during": "#f9a8d4",
    "discovery-after": "#fcd34d",
    "discovery-ancient": "#d6b98c",
    "discovery-unknown": "#e5e7eb",
    "oxidation-1": "#dbeafe",
    "oxidation-2": "#bfdbfe",
    "oxidation-3": "#93c5fd",
    "oxidation-4": "#60a5fa",
    "oxidation-5": "#3b82f6",
    "oxidation-6": "#2563eb",
    "oxidation-7": "#1d4ed8",
    "oxidation-unknown": "#e5e7eb",
    "property-less": "#93c5fd",
    "property-equal": "#86efac",
    "property-greater": "#fca5a5",
    "property-unknown": "#e5e7eb",
}

_DARK_CATEGORIES = {
    "group-s": "#b91c1c",
    "group-p": "#a16207",
    "group-d": "#1d4ed8",
    "group-f": "#15803d",
    "state-solid": "#475569",
    "state-liquid": "#0369a1",
    "state-gas": "#c2410c",
    "state-unknown": "#374151",
    "discovery-before": "#4338ca",
    "discovery-during": "#be185d",
    "discovery-after": "#b45309",
    "discovery-ancient": "#78583a",
    "discovery-unknown": "#374151",
    "oxidation-1": "#1e3a8a",
    "oxidation-2": "#1e40af",
    "oxidation-3": "#1d4ed8",
    "oxidation-4": "#2563eb",
    "oxidation-5": "#3b82f6",
    "oxidation-6": "#60a5fa",
    "oxidation-7": "#93c5fd",
    "oxidation-unknown": "#374151",
    "property-less": "#1d4ed8",
    "property-equal": "#15803d",
    "property-greater": "#b91c1c",
    "property-unknown": "#374151",
}

_HIGH_CONTRAST_CATEGORIES = {
    "group-s": "#ff0000",
    "group-p": "#ffff00",
    "group-d": "#00ffff",
    "group-f": "#00ff00",
    "state-solid": "#ffffff",
    "state-liquid": "#00ffff",
    "state-gas": "#ff8800",
    "state-unknown": "#808080",
    "discovery-before": "#00ffff",
    "discovery-during": "#ff00ff",
    "discovery-after": "#ffff00",
    "discovery-ancient": "#ff8800",
    "discovery-unknown": "#808080",
    "oxidation-1": "#ffffff",
    "oxidation-2": "#ffff00",
    "oxidation-3": "#00ff00",
    "oxidation-4": "#00ffff",
    "oxidation-5": "#ff8800",
    "oxidation-6": "#ff00ff",
    "oxidation-7": "#ff0000",
    "oxidation-unknown": "#808080",
    "property-less": "#00ffff",
    "property-equal": "#00ff00",
    "property-greater": "#ff0000",
    "property-unknown": "#808080",
}


THEME_TOKENS: dict[str, dict] = {
    "Fluent Light": {
        "meta": {"name": "Fluent Light", "mode": "light"},
        "colors": {
            "bg": "#f5f7fb",
            "surface": "#ffffff",
            "surfaceAlt": "#eef2f7",
            "text": "#0f172a",
            "textMuted": "#4b5563",
            "border": "#cbd5e1",
            "accent": "#2563eb",
            "accentHover": "#1d4ed8",
            "focusRing": "#0ea5e9",
        },
        "categories": _LIGHT_CATEGORIES,
        "radii": {"sm": 6, "md": 10, "lg": 16},
        "spacing": {"xs": 4, "sm": 8, "md": 12, "lg": 16},
        "font": {"family": _default_font_family(), "baseSize": 10, "titleSize": 12, "monoFamily": "Consolas"},
    },
    "Fluent Dark": {
        "meta": {"name": "Fluent Dark", "mode": "dark"},
        "colors": {
            "bg": "#0b1220",
            "surface": "#111827",
            "surfaceAlt": "#1f2937",
            "text": "#f8fafc",
            "textMuted": "#cbd5f5",
            "border": "#334155",
            "accent": "#60a5fa",
            "accentHover": "#3b82f6",
            "focusRing": "#fbbf24",
        },
        "categories": _DARK_CATEGORIES,
        "radii": {"sm": 6, "md": 10, "lg": 16},
        "spacing": {"xs": 4, "sm": 8, "md": 12, "lg": 16},
        "font": {"family": _default_font_family(), "baseSize": 10, "titleSize": 12, "monoFamily": "Consolas"},
    },
    "High Contrast": {
        "meta": {"name": "High Contrast", "mode": "high_contrast"},
        "colors": {
            "bg": "#000000",
            "surface": "#000000",
            "surfaceAlt": "#111111",
            "text": "#ffffff",
            "textMuted": "#e5e7eb",
            "border": "#ffffff",
            "accent": "#ffff00",
            "accentHover": "#ffd600",
            "focusRing": "#00ffff",
        },
        "categories": _HIGH_CONTRAST_CATEGORIES,
        "radii": {"sm": 0, "md": 0, "lg": 0},
        "spacing": {"xs": 4, "sm": 8, "md": 12, "lg": 16},
        "font": {"family": _default_font_family(), "baseSize": 11, "titleSize": 13, "monoFamily": "Consolas"},
    },
}

DEFAULT_THEME = "Fluent Light"


def get_theme_tokens(name: str) -> dict:
    return THEME_TOKENS.get(name, THEME_TOKENS[DEFAULT_THEME])


def category_palette(name: str) -> dict[str, str]:
    """Cell colours keyed by ``"<kind>-<category>"`` style keys."""
    return dict(get_theme_tokens(name)["categories"])
