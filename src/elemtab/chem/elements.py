from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources

from elemtab.chem.aufbau import MAX_Z

NOT_AVAILABLE = "n/a"


@dataclass(frozen=True)
class Isotope:
    mass_number: int
    relative_mass: str
    abundance: str | None = None


class ElementStore:
    """Read-only element and isotope tables keyed by atomic number."""

    def __init__(
        self,
        elements: dict[int, dict[str, str]],
        isotopes: dict[int, list[Isotope]] | None = None,
        property_names: tuple[str, ...] | None = None,
    ) -> None:
        self._elements = {int(z): dict(record) for z, record in elements.items()}
        self._isotopes = {int(z): list(rows) for z, rows in (isotopes or {}).items()}
        if property_names is None:
            names: list[str] = []
            for record in self._elements.values():
                names.extend(k for k in record if k not in ("name", "symbol") and k not in names)
            property_names = tuple(names)
        self.property_names = tuple(property_names)
        self.max_z = max(self._elements, default=0)
        self._by_symbol: dict[str, int] = {}
        self._by_name: dict[str, int] = {}
        for z in sorted(self._elements):
            record = self._elements[z]
            symbol = str(record.get("symbol") or "").strip()
            name = str(record.get("name") or "").strip()
            if symbol:
                self._by_symbol[symbol.lower()] = z
            if name:
                self._by_name[name.lower()] = z

    @classmethod
    def from_resources(cls) -> ElementStore:
        base = resources.files("elemtab").joinpath("data")
        raw = json.loads(base.joinpath("elements.json").read_text(encoding="utf-8"))
        names = tuple(raw["properties"])
        elements: dict[int, dict[str, str]] = {}
        for row in raw["elements"]:
            z, name, symbol, *values = row
            record = {"name": name, "symbol": symbol}
            record.update(zip(names, values))
            elements[int(z)] = record
        raw_isotopes = json.loads(base.joinpath("isotopes.json").read_text(encoding="utf-8"))
        isotopes = {
            int(z): [Isotope(int(a), str(mass), None if abundance is None else str(abundance)) for a, mass, abundance in rows]
            for z, rows in raw_isotopes.items()
        }
        return cls(elements, isotopes, property_names=names)

    def __contains__(self, z: object) -> bool:
        return isinstance(z, int) and z in self._elements

    def atomic_numbers(self) -> range:
        return range(1, self.max_z + 1)

    def _check(self, z: int) -> int:
        z = int(z)
        if z < 1 or z > self.max_z:
            raise ValueError(f"Atomic number out of range 1..{self.max_z}: {z}")
        return z

    def get_property(self, z: int, name: str) -> str:
        record = self._elements.get(self._check(z), {})
        value = record.get(name)
        if value is None or str(value).strip() == "":
            return NOT_AVAILABLE
        return str(value)

    def get_isotopes(self, z: int) -> list[Isotope]:
        return list(self._isotopes.get(self._check(z), []))

    def name(self, z: int) -> str:
        return self.get_property(z, "name")

    def symbol(self, z: int) -> str:
        return self.get_property(z, "symbol")

    def find(self, query: str) -> int | None:
        """Resolve a number, symbol or name (case-insensitive, then name prefix) to an atomic number."""
        text = str(query or "").strip().lower()
        if not text:
            return None
        if text.isdecimal():
            z = int(text)
            return z if z in self._elements else None
        if text in self._by_symbol:
            return self._by_symbol[text]
        if text in self._by_name:
            return self._by_name[text]
        for name, z in self._by_name.items():
            if name.startswith(text):
                return z
        return None

    def validate(self) -> list[str]:
        problems: list[str] = []
        expected = list(range(1, self.max_z + 1))
        if sorted(self._elements) != expected:
            missing = sorted(set(expected) - set(self._elements))
            problems.append(f"Atomic numbers are not contiguous; missing {missing}")
        if self.max_z != MAX_Z:
            problems.append(f"Expected {MAX_Z} elements, found {self.max_z}")
        for z in sorted(self._elements):
            record = self._elements[z]
            for field in ("name", "symbol"):
                if not record.get(field):
                    problems.append(f"Z={z}: missing {field}")
            for key in record:
                if key not in ("name", "symbol") and key not in self.property_names:
                    problems.append(f"Z={z}: unknown property {key!r}")
        seen: dict[str, int] = {}
        for z in sorted(self._elements):
            symbol = str(self._elements[z].get("symbol") or "")
            if symbol in seen:
                problems.append(f"Z={z}: symbol {symbol!r} already used by Z={seen[symbol]}")
            seen[symbol] = z
        for z in self._isotopes:
            if z not in self._elements:
                problems.append(f"Isotopes listed for unknown Z={z}")
        return problems


@lru_cache(maxsize=1)
def default_store() -> ElementStore:
    return ElementStore.from_resources()


def lookup_url(template: str, z: int, store: ElementStore | None = None) -> str:
    """Fill a lookup URL template: ``%s`` becomes the symbol and ``%n`` the name."""
    store = store or default_store()
    return template.replace("%s", store.symbol(z)).replace("%n", store.name(z))
