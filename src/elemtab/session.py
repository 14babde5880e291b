"""State and commands of one open periodic table.

A :class:`TableSession` owns the configuration, the active scheme and its
reference values, the cursor and the detail panel. Observers subscribed to a
session are told about changes to that session only.
"""

from __future__ import annotations

import sys
from typing import Callable

from elemtab.chem.elements import ElementStore, default_store, lookup_url
from elemtab.chem.properties import ListingRow, property_listing
from elemtab.config import TableConfig, option_name
from elemtab.table.classify import SCHEME_NAMES, ReferenceValues, Scheme
from elemtab.table.detail import DetailPanel
from elemtab.table.layout import Convention
from elemtab.table.navigation import move_by, move_to
from elemtab.table.render import RenderedTable, render_table
from elemtab.theming.theme_tokens import category_palette

Observer = Callable[["TableSession", str], None]


def report_to_stderr(message: str) -> None:
    print(message, file=sys.stderr)


class TableSession:
    def __init__(
        self,
        store: ElementStore | None = None,
        config: TableConfig | None = None,
        report: Callable[[str], None] | None = None,
    ) -> None:
        self.store = store or default_store()
        self.config = config or TableConfig()
        self.report = report or report_to_stderr
        self.references = ReferenceValues(self.store)
        self.detail = DetailPanel(self.store, self.config.excluded_properties)
        self.scheme: Scheme | None = None
        self.table: RenderedTable | None = None
        self.current_z = 1
        self.position = 0
        self._observers: list[Observer] = []
        self._resolve_scheme()
        self.render()
        self.refresh_detail()

    # Observers

    def subscribe(self, observer: Observer) -> Observer:
        self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, event: str) -> None:
        for observer in list(self._observers):
            observer(self, event)

    # Rendering

    @property
    def palette(self) -> dict[str, str]:
        return category_palette(self.config.theme)

    def _resolve_scheme(self) -> None:
        try:
            self.scheme = Scheme.parse(self.config.scheme)
        except ValueError as exc:
            self.report(f"{exc}; showing the table without colours")
            self.scheme = None

    def render(self) -> RenderedTable:
        try:
            table = render_table(self.store, self.config, self.scheme, self.references, self.palette)
        except ValueError as exc:
            self.report(f"Failed to draw the key: {exc}")
            table = render_table(self.store, self.config, None, self.references, self.palette)
        self.table = table
        cell = table.cell_for(self.current_z)
        self.position = cell.start if cell else 0
        return table

    @property
    def text(self) -> str:
        return self.table.text if self.table else ""

    # Configuration

    def set_config(self, option: str, value) -> TableConfig:
        """Change one option, re-render this session and notify its observers.

        Raises ``KeyError`` for an unknown option; numeric values are clamped.
        """
        name = option_name(option)
        self.config = self.config.with_option(name, value)
        if name == "scheme":
            self._resolve_scheme()
        self.render()
        if name == "excluded_properties":
            self.detail.excluded = self.config.excluded_properties
            self.refresh_detail(force=True)
        self._notify(name)
        return self.config

    def set_scheme(self, scheme: str | Scheme) -> Scheme | None:
        name = scheme.name if isinstance(scheme, Scheme) else scheme
        self.set_config("scheme", name)
        return self.scheme

    def cycle_scheme(self, step: int = 1) -> Scheme | None:
        current = self.scheme.name if self.scheme else self.config.scheme
        index = SCHEME_NAMES.index(current) if current in SCHEME_NAMES else -1
        return self.set_scheme(SCHEME_NAMES[(index + step) % len(SCHEME_NAMES)])

    def set_convention(self, convention: str | Convention) -> Convention:
        self.set_config("convention", Convention.parse(convention))
        return self.config.convention

    def cycle_convention(self) -> Convention:
        members = list(Convention)
        index = members.index(self.config.convention)
        return self.set_convention(members[(index + 1) % len(members)])

    # Reference values

    @property
    def reference_key(self) -> str | None:
        return self.scheme.reference_key if self.scheme else None

    def reference_value(self) -> float | None:
        key = self.reference_key
        return None if key is None else self.references.get(key)

    def adjust_reference(self, count: int = 1) -> float | None:
        key = self.reference_key
        if key is None:
            self.report("The current scheme has no reference value")
            return None
        value = self.references.adjust(key, count)
        self.render()
        self._notify("reference")
        return value

    def set_reference(self, value: float) -> float | None:
        key = self.reference_key
        if key is None:
            self.report("The current scheme has no reference value")
            return None
        result = self.references.set(key, value)
        self.render()
        self._notify("reference")
        return result

    # Cursor

    def _moved(self) -> None:
        z = self.table.z_at(self.position)
        if z is not None:
            self.current_z = z
        self.detail.refresh(self.table, self.position)
        self._notify("cursor")

    def move(self, count: int = 1) -> int:
        self.position = move_by(self.table, self.position, count)
        self._moved()
        return self.current_z

    def set_position(self, position: int) -> int | None:
        self.position = position
        self._moved()
        return self.table.z_at(position)

    def goto(self, z: int) -> bool:
        position = move_to(self.table, int(z))
        if position is None:
            self.report(f"No element with atomic number {z}")
            return False
        self.position = position
        self._moved()
        return True

    def find(self, query: str) -> int | None:
        z = self.store.find(query)
        if z is None:
            self.report(f"No element matches {query!r}")
            return None
        self.goto(z)
        return z

    def refresh_detail(self, force: bool = False) -> bool:
        return self.detail.refresh(self.table, self.position, force=force)

    def jump_to_properties(self) -> int:
        """Offset of the properties section in the detail text."""
        return self.detail.section_offsets.get("properties", 0)

    # Listings and lookups

    def list_by_property(self, name: str, order: str | None = None) -> list[ListingRow]:
        return property_listing(self.store, name, order)

    def lookup_url(self, z: int | None = None) -> str:
        return lookup_url(self.config.lookup_url, self.current_z if z is None else z, self.store)
