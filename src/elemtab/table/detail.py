from __future__ import annotations

from html import escape

from elemtab.chem.aufbau import electron_configuration, exception_note
from elemtab.chem.elements import ElementStore
from elemtab.chem.properties import PROPERTIES, format_value
from elemtab.table.render import RenderedTable

ISOTOPE_COLUMNS = ("Mass number", "Relative mass", "Abundance (%)")


class DetailPanel:
    """Properties and isotopes of the current element.

    The panel is regenerated only when the element under the cursor changes
    or a refresh is forced; ``regenerations`` counts every regeneration.
    """

    def __init__(self, store: ElementStore, excluded: frozenset[str] | set[str] = frozenset()) -> None:
        self.store = store
        self.excluded = frozenset(excluded)
        self.last_z: int | None = None
        self.regenerations = 0
        self.header = ""
        self.summary: list[tuple[str, str]] = []
        self.note: list[str] = []
        self.properties: list[tuple[str, str]] = []
        self.isotopes: list[tuple[str, str, str]] = []
        self.lines: list[str] = []
        self.section_offsets: dict[str, int] = {}

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def refresh(self, table: RenderedTable, position: int, force: bool = False) -> bool:
        z = table.z_at(position)
        if force:
            z = z if z is not None else self.last_z
            if z is None:
                return False
        elif z is None or z == self.last_z:
            return False
        self.show(z)
        return True

    def show(self, z: int) -> None:
        store = self.store
        self.header = f"{store.name(z)} ({store.symbol(z)})"
        self.summary = [
            ("Atomic number", str(z)),
            ("Electron configuration", electron_configuration(z)),
        ]
        note = exception_note(z)
        self.note = []
        if note is not None:
            self.note = [
                f"Aufbau exception: expected {note.expected_config}, observed {note.actual_config}.",
                note.explanation,
                note.impact,
            ]
        self.properties = [
            (spec.label, format_value(spec.name, store.get_property(z, spec.name)))
            for spec in PROPERTIES
            if spec.name not in self.excluded
        ]
        self.isotopes = [
            (str(iso.mass_number), iso.relative_mass, iso.abundance or "")
            for iso in store.get_isotopes(z)
        ]
        self._layout()
        self.last_z = z
        self.regenerations += 1

    def _layout(self) -> None:
        lines = [self.header, "=" * len(self.header)]
        lines.extend(_aligned(self.summary))
        lines.extend(self.note)
        lines.append("")
        offsets = {"properties": len(lines)}
        lines.extend(["Properties", "----------"])
        lines.extend(_aligned(self.properties))
        lines.append("")
        offsets["isotopes"] = len(lines)
        lines.extend(["Isotopes", "--------"])
        if self.isotopes:
            widths = [
                max(len(ISOTOPE_COLUMNS[i]), *(len(row[i]) for row in self.isotopes))
                for i in range(len(ISOTOPE_COLUMNS))
            ]
            for row in (ISOTOPE_COLUMNS, *self.isotopes):
                lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        else:
            lines.append("No isotope data.")
        self.lines = lines
        # Character offsets of each section header in ``text``.
        self.section_offsets = {name: sum(len(line) + 1 for line in lines[:index]) for name, index in offsets.items()}

    def section_line(self, name: str) -> int:
        offset = self.section_offsets[name]
        return self.text[:offset].count("\n")

    def html(self, lookup_url: str | None = None) -> str:
        if self.last_z is None:
            return ""
        rows = [f"<tr><td><b>{escape(label)}</b></td><td>{escape(value)}</td></tr>" for label, value in self.summary]
        if lookup_url:
            rows.append(f"<tr><td><b>Look up</b></td><td><a href='{escape(lookup_url)}'>{escape(lookup_url)}</a></td></tr>")
        body = f"<h3>{escape(self.header)}</h3><table style='border-collapse: collapse; width: 100%;'>{''.join(rows)}</table>"
        if self.note:
            body += (
                "<div style='margin-top:8px; padding:6px; border:1px solid #cbd5e1; border-radius:6px;'>"
                + "<br>".join(escape(line) for line in self.note)
                + "</div>"
            )
        prop_rows = "".join(
            f"<tr><td><b>{escape(label)}</b></td><td>{escape(value)}</td></tr>" for label, value in self.properties
        )
        body += f"<a name='properties'></a><h4>Properties</h4><table>{prop_rows}</table>"
        body += "<a name='isotopes'></a><h4>Isotopes</h4>"
        if self.isotopes:
            head = "".join(f"<th align='left'>{escape(title)}</th>" for title in ISOTOPE_COLUMNS)
            iso_rows = "".join(
                "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>" for row in self.isotopes
            )
            body += f"<table><tr>{head}</tr>{iso_rows}</table>"
        else:
            body += "<p>No isotope data.</p>"
        return f"<html><body>{body}</body></html>"


def _aligned(rows: list[tuple[str, str]]) -> list[str]:
    width = max((len(label) for label, _ in rows), default=0) + 1
    return [f"{label + ':':<{width}} {value}" for label, value in rows]
