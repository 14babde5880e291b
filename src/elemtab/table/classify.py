"""Cell classification schemes and their legends.

A :class:`Scheme` names one way of colouring the table. Every scheme maps an
atomic number to a category string; the style key of a cell is
``"<kind>-<category>"`` and is resolved against a colour palette by the
renderer or the Qt view.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum

import numpy as np

from elemtab.chem.aufbau import orbital_of
from elemtab.chem.elements import NOT_AVAILABLE, ElementStore
from elemtab.chem.properties import NUMERIC_PROPERTIES, kelvin_caption, parse_number, property_spec, unit_label

DEFAULT_EPSILON = 0.005
DEFAULT_TEMPERATURE = 298.15
ANCIENT_MARKER = "Known to the ancients"
MAX_OXIDATION_COUNT = 7

_LEADING_YEAR = re.compile(r"^\s*(\d+)")


class SchemeKind(str, Enum):
    GROUP = "group"
    STATE = "state"
    DISCOVERY = "discovery"
    OXIDATION = "oxidation"
    PROPERTY = "property"


CATEGORIES: dict[SchemeKind, tuple[str, ...]] = {
    SchemeKind.GROUP: ("s", "p", "d", "f"),
    SchemeKind.STATE: ("solid", "liquid", "gas", "unknown"),
    SchemeKind.DISCOVERY: ("before", "during", "after", "ancient", "unknown"),
    SchemeKind.OXIDATION: tuple(str(n) for n in range(1, MAX_OXIDATION_COUNT + 1)) + ("unknown",),
    SchemeKind.PROPERTY: ("less", "equal", "greater", "unknown"),
}

CAPTIONS: dict[str, str] = {
    "s": "s-block",
    "p": "p-block",
    "d": "d-block",
    "f": "f-block",
    "solid": "Solid",
    "liquid": "Liquid",
    "gas": "Gas",
    "before": "Discovered before",
    "during": "Discovered during",
    "after": "Discovered after",
    "ancient": "Known to the ancients",
    "less": "Less than",
    "equal": "Equal to",
    "greater": "Greater than",
    "unknown": "Unknown",
}


@dataclass(frozen=True)
class Scheme:
    kind: SchemeKind
    property_name: str | None = None

    def __post_init__(self) -> None:
        if self.kind is SchemeKind.PROPERTY:
            if self.property_name not in NUMERIC_PROPERTIES:
                raise ValueError(f"Not a numeric property: {self.property_name!r}")
        elif self.property_name is not None:
            raise ValueError(f"Scheme {self.kind.value!r} takes no property")

    @classmethod
    def parse(cls, name: str | Scheme) -> Scheme:
        if isinstance(name, Scheme):
            return name
        text = str(name).strip().lower()
        if text in NUMERIC_PROPERTIES:
            return cls(SchemeKind.PROPERTY, text)
        try:
            kind = SchemeKind(text)
        except ValueError:
            raise ValueError(f"Unknown classification scheme: {name!r}") from None
        if kind is SchemeKind.PROPERTY:
            raise ValueError("The property scheme needs a property name")
        return cls(kind)

    @property
    def name(self) -> str:
        return self.property_name if self.kind is SchemeKind.PROPERTY else self.kind.value

    @property
    def title(self) -> str:
        if self.kind is SchemeKind.PROPERTY:
            return property_spec(self.property_name).label
        return {
            SchemeKind.GROUP: "Block",
            SchemeKind.STATE: "State",
            SchemeKind.DISCOVERY: "Discovery",
            SchemeKind.OXIDATION: "Oxidation states",
        }[self.kind]

    @property
    def categories(self) -> tuple[str, ...]:
        return CATEGORIES[self.kind]

    @property
    def reference_key(self) -> str | None:
        """Key of the adjustable reference value this scheme compares against."""
        if self.kind is SchemeKind.STATE:
            return "temperature"
        if self.kind is SchemeKind.DISCOVERY:
            return "year"
        if self.kind is SchemeKind.PROPERTY:
            return self.property_name
        return None

    def style(self, category: str) -> str:
        return f"{self.kind.value}-{category}"


SCHEME_NAMES: tuple[str, ...] = ("group", "state", "discovery", "oxidation") + NUMERIC_PROPERTIES


def discovery_year(raw: str) -> int | None:
    match = _LEADING_YEAR.match(raw or "")
    return int(match.group(1)) if match else None


def compute_median(store: ElementStore, name: str) -> float | None:
    """Median of every defined numeric value of ``name`` across the store."""
    if name == "year":
        values = [discovery_year(store.get_property(z, "discovery-date")) for z in store.atomic_numbers()]
    else:
        values = [parse_number(store.get_property(z, name)) for z in store.atomic_numbers()]
    defined = [v for v in values if v is not None]
    if not defined:
        return None
    return float(np.median(np.asarray(defined, dtype=float)))


class ReferenceValues:
    """Per-session reference values, computed on first use and cached per key."""

    def __init__(self, store: ElementStore) -> None:
        self._store = store
        self._values: dict[str, float] = {}
        self._steps: dict[str, float] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str) -> float | None:
        if key not in self._values:
            if key == "temperature":
                value = DEFAULT_TEMPERATURE
            else:
                value = compute_median(self._store, key)
                if value is None:
                    return None
                if key == "year":
                    value = float(round(value))
            self._values[key] = value
        return self._values[key]

    def set(self, key: str, value: float) -> float:
        self._values[key] = float(value)
        return self._values[key]

    def step(self, key: str) -> float:
        if key in ("temperature", "year"):
            return 10.0
        if key not in self._steps:
            median = compute_median(self._store, key)
            if not median:
                self._steps[key] = 1.0
            else:
                self._steps[key] = 10.0 ** (math.floor(math.log10(abs(median))) - 1)
        return self._steps[key]

    def adjust(self, key: str, count: int = 1) -> float | None:
        current = self.get(key)
        if current is None:
            return None
        return self.set(key, current + count * self.step(key))


def _classify_state(store: ElementStore, z: int, temperature: float) -> str:
    melting = parse_number(store.get_property(z, "melting-point"))
    boiling = parse_number(store.get_property(z, "boiling-point"))
    if not melting or not boiling:
        return "unknown"
    if temperature < melting:
        return "solid"
    if temperature < boiling:
        return "liquid"
    return "gas"


def _classify_discovery(store: ElementStore, z: int, year: float | None) -> str:
    if ANCIENT_MARKER in store.get_property(z, "discovered-by"):
        return "ancient"
    found = discovery_year(store.get_property(z, "discovery-date"))
    if found is None or year is None:
        return "unknown"
    if found < year:
        return "before"
    if found == year:
        return "during"
    return "after"


def _classify_oxidation(store: ElementStore, z: int) -> str:
    raw = store.get_property(z, "oxidation-states")
    if raw == NOT_AVAILABLE:
        return "unknown"
    return str(min(len(raw.split(",")), MAX_OXIDATION_COUNT))


def _classify_property(store: ElementStore, z: int, name: str, reference: float | None, epsilon: float) -> str:
    value = parse_number(store.get_property(z, name))
    if value is None or reference is None:
        return "unknown"
    # Equality within epsilon is decided before the strict comparisons.
    if abs(value - reference) <= epsilon:
        return "equal"
    if value < reference:
        return "less"
    return "greater"


def classify(
    scheme: Scheme,
    z: int,
    store: ElementStore,
    references: ReferenceValues,
    epsilon: float = DEFAULT_EPSILON,
) -> str:
    match scheme.kind:
        case SchemeKind.GROUP:
            found = orbital_of(z)
            return found.letter if found else "unknown"
        case SchemeKind.STATE:
            return _classify_state(store, z, references.get("temperature"))
        case SchemeKind.DISCOVERY:
            return _classify_discovery(store, z, references.get("year"))
        case SchemeKind.OXIDATION:
            return _classify_oxidation(store, z)
        case SchemeKind.PROPERTY:
            return _classify_property(store, z, scheme.property_name, references.get(scheme.property_name), epsilon)
    raise ValueError(f"Unhandled scheme kind: {scheme.kind!r}")


@dataclass(frozen=True)
class Legend:
    title: str
    reference: str | None
    swatches: tuple[tuple[str, str], ...]


def reference_caption(scheme: Scheme, references: ReferenceValues) -> str | None:
    key = scheme.reference_key
    if key is None:
        return None
    value = references.get(key)
    if value is None:
        return None
    if scheme.kind is SchemeKind.STATE:
        return f"Temperature: {kelvin_caption(value)}"
    if scheme.kind is SchemeKind.DISCOVERY:
        return f"Year: {value:.0f}"
    unit = unit_label(key)
    return f"{scheme.title}: {value:g} {unit}".rstrip()


def legend(scheme: Scheme, references: ReferenceValues, palette: dict[str, str]) -> Legend:
    """Describe every category of ``scheme`` in legend order.

    Raises ``ValueError`` when ``palette`` has no style for one of the swatches.
    """
    swatches: list[tuple[str, str]] = []
    for category in scheme.categories:
        style = scheme.style(category)
        if style not in palette:
            raise ValueError(f"No style for legend swatch {style!r}")
        if scheme.kind is SchemeKind.OXIDATION and category != "unknown":
            caption = f"{category} state{'s' if category != '1' else ''}"
        else:
            caption = CAPTIONS[category]
        swatches.append((style, caption))
    return Legend(scheme.title, reference_caption(scheme, references), tuple(swatches))
