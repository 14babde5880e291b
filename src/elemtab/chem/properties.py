from __future__ import annotations

import re
from dataclasses import dataclass

from pint import UnitRegistry

from elemtab.chem.elements import NOT_AVAILABLE, ElementStore

ureg = UnitRegistry()
Q_ = ureg.Quantity


@dataclass(frozen=True)
class PropertySpec:
    name: str
    label: str
    unit: str | None = None
    numeric: bool = False


# Display order of the detail panel.
PROPERTIES: tuple[PropertySpec, ...] = (
    PropertySpec("atomic-mass", "Atomic mass", "g/mol", True),
    PropertySpec("density", "Density", "g/cm**3", True),
    PropertySpec("melting-point", "Melting point", "K", True),
    PropertySpec("boiling-point", "Boiling point", "K", True),
    PropertySpec("atomic-radius", "Atomic radius", "pm", True),
    PropertySpec("covalent-radius", "Covalent radius", "pm", True),
    PropertySpec("specific-heat", "Specific heat", "J/(g*K)", True),
    PropertySpec("fusion-heat", "Heat of fusion", "kJ/mol", True),
    PropertySpec("evaporation-heat", "Heat of evaporation", "kJ/mol", True),
    PropertySpec("thermal-conductivity", "Thermal conductivity", "W/(m*K)", True),
    PropertySpec("pauling-negativity", "Pauling electronegativity", None, True),
    PropertySpec("first-ionization-energy", "First ionization energy", "kJ/mol", True),
    PropertySpec("electron-affinity", "Electron affinity", "kJ/mol", True),
    PropertySpec("oxidation-states", "Oxidation states"),
    PropertySpec("lattice-structure", "Lattice structure"),
    PropertySpec("discovery-date", "Discovery date"),
    PropertySpec("discovered-by", "Discovered by"),
)

PROPERTY_BY_NAME: dict[str, PropertySpec] = {spec.name: spec for spec in PROPERTIES}
NUMERIC_PROPERTIES: tuple[str, ...] = tuple(spec.name for spec in PROPERTIES if spec.numeric)

_DECORATIONS = re.compile(r"[\[\]()~]")
_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def property_spec(name: str) -> PropertySpec:
    try:
        return PROPERTY_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown property: {name!r}") from None


def parse_number(raw: str | None) -> float | None:
    """Parse a decorated numeric field such as ``"[227]"``, ``"(20)"`` or ``"~1.7"``.

    Returns ``None`` for ``"n/a"`` and for text without a leading number.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text or text == NOT_AVAILABLE:
        return None
    match = _LEADING_NUMBER.match(_DECORATIONS.sub("", text))
    if not match:
        return None
    return float(match.group(1))


def unit_label(name: str) -> str:
    unit = property_spec(name).unit
    if not unit:
        return ""
    return f"{ureg.Unit(unit):~P}"


def format_value(name: str, raw: str) -> str:
    if raw == NOT_AVAILABLE:
        return raw
    unit = unit_label(name)
    return f"{raw} {unit}" if unit else raw


def kelvin_caption(kelvin: float) -> str:
    celsius = Q_(kelvin, ureg.kelvin).to(ureg.degC).magnitude
    return f"{kelvin:.2f} K ({celsius:.2f} °C)"


@dataclass(frozen=True)
class ListingRow:
    z: int
    symbol: str
    name: str
    value: str


def property_listing(store: ElementStore, name: str, order: str | None = None) -> list[ListingRow]:
    """All elements with one property, in Z order or numerically sorted.

    ``order`` is ``None``, ``"ascending"`` or ``"descending"``. Missing values
    count as lower than every number, so they lead an ascending listing and
    trail a descending one.
    """
    property_spec(name)
    rows = [
        ListingRow(z, store.symbol(z), store.name(z), store.get_property(z, name))
        for z in store.atomic_numbers()
    ]
    if order is None:
        return rows
    if order not in ("ascending", "descending"):
        raise ValueError(f"Unknown sort order: {order!r}")

    descending = order == "descending"

    def key(row: ListingRow) -> tuple[int, float, int]:
        value = parse_number(row.value)
        if value is None:
            return (1 if descending else 0, 0.0, row.z)
        return (0, -value, row.z) if descending else (1, value, row.z)

    return sorted(rows, key=key)


def format_listing(rows: list[ListingRow], name: str) -> str:
    spec = property_spec(name)
    unit = unit_label(name)
    header = f"{spec.label} ({unit})" if unit else spec.label
    lines = [header, "-" * len(header)]
    name_width = max((len(row.name) for row in rows), default=0)
    for row in rows:
        lines.append(f"{row.z:>3}  {row.symbol:<2}  {row.name:<{name_width}}  {row.value}")
    return "\n".join(lines)
