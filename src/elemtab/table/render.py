"""Text rendering of the periodic table.

The renderer turns the static display layout into lines of styled spans and
builds, alongside the text, an explicit index from text offsets and grid
positions to atomic numbers. A new :class:`RenderedTable` is produced on every
render; nothing is cached between renders.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from elemtab.chem.aufbau import orbital_range
from elemtab.chem.elements import ElementStore
from elemtab.table.classify import ReferenceValues, Scheme, classify, legend
from elemtab.table.layout import group_header, is_padding, period_label, rows_for, slot_width

TITLE = "Periodic Table of the Elements"
LEGEND_TITLE = "Key"


@dataclass(frozen=True)
class Span:
    text: str
    style: str | None = None
    z: int | None = None


@dataclass(frozen=True)
class Cell:
    z: int
    line: int
    column: int
    start: int
    end: int

    def __contains__(self, position: int) -> bool:
        return self.start <= position < self.end


@dataclass
class RenderedTable:
    lines: list[list[Span]]
    cells: list[Cell]
    line_offsets: list[int]
    legend_line: int | None = None
    _by_z: dict[int, Cell] = field(init=False, repr=False)
    _by_grid: dict[tuple[int, int], Cell] = field(init=False, repr=False)
    _starts: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_z = {cell.z: cell for cell in self.cells}
        self._by_grid = {(cell.line, cell.column): cell for cell in self.cells}
        self._starts = [cell.start for cell in self.cells]

    @property
    def text(self) -> str:
        return "\n".join(self.line_text(i) for i in range(len(self.lines)))

    def line_text(self, line: int) -> str:
        return "".join(span.text for span in self.lines[line])

    def cell_index(self, position: int) -> int | None:
        index = bisect_right(self._starts, position) - 1
        if index >= 0 and position in self.cells[index]:
            return index
        return None

    def cell_at(self, position: int) -> Cell | None:
        index = self.cell_index(position)
        return None if index is None else self.cells[index]

    def z_at(self, position: int) -> int | None:
        cell = self.cell_at(position)
        return None if cell is None else cell.z

    def next_cell_index(self, position: int) -> int:
        """Index of the first cell starting after ``position``; ``len(cells)`` when none does."""
        return bisect_right(self._starts, position)

    def cell_for(self, z: int) -> Cell | None:
        return self._by_z.get(z)

    def at(self, line: int, column: int) -> int | None:
        cell = self._by_grid.get((line, column))
        return None if cell is None else cell.z


def _grid_rows(convention) -> list[list[int | None]]:
    """Each layout row as a list of atomic numbers, ``None`` for padding cells."""
    grid: list[list[int | None]] = []
    for row in rows_for(convention):
        cells: list[int | None] = []
        for slot in row:
            if is_padding(slot):
                cells.extend([None] * slot_width(slot))
            else:
                found = orbital_range(slot)
                cells.extend(range(found.min_z, found.max_z + 1))
        grid.append(cells)
    _align_helium(grid)
    return grid


def _find(grid: list[list[int | None]], z: int) -> tuple[int, int] | None:
    for row_index, row in enumerate(grid):
        if z in row:
            return row_index, row.index(z)
    return None


def _align_helium(grid: list[list[int | None]]) -> None:
    helium = _find(grid, 2)
    neon = _find(grid, 10)
    if helium is None or neon is None:
        return
    gap = neon[1] - helium[1]
    if gap > 0:
        row, column = helium
        grid[row][column:column] = [None] * gap


class _LineBuilder:
    def __init__(self) -> None:
        self.lines: list[list[Span]] = []
        self.offsets: list[int] = []
        self.cells: list[Cell] = []
        self._next_offset = 0

    def add(self, spans: list[Span]) -> int:
        index = len(self.lines)
        self.lines.append(spans)
        self.offsets.append(self._next_offset)
        self._next_offset += sum(len(span.text) for span in spans) + 1
        return index

    def add_cells(self, line: int, row: list[tuple[Span, int | None]]) -> None:
        offset = self.offsets[line]
        for span, column in row:
            if span.z is not None and column is not None:
                self.cells.append(Cell(span.z, line, column, offset, offset + len(span.text)))
            offset += len(span.text)


def render_table(
    store: ElementStore,
    config,
    scheme: Scheme | None,
    references: ReferenceValues,
    palette: dict[str, str],
) -> RenderedTable:
    """Render the table for ``config`` with cells styled by ``scheme``.

    ``scheme`` may be ``None`` for an uncoloured table without a key. Raises
    ``ValueError`` when the key needs a style that ``palette`` does not have.
    """
    width = config.element_width
    gap = " " * config.separation
    prefix = " " * config.indentation
    key = legend(scheme, references, palette) if scheme is not None else None

    header = "".join(
        ("" if group is None else str(group)).ljust(width) + gap for group in group_header(config.convention)
    )
    labels = [period_label(row) for row in rows_for(config.convention)]
    body: list[tuple[str, list[tuple[Span, int | None]]]] = []
    for label, row in zip(labels, _grid_rows(config.convention)):
        spans: list[tuple[Span, int | None]] = []
        for column, z in enumerate(row):
            if z is None or z not in store:
                spans.append((Span(" " * width), None))
            else:
                style = scheme.style(classify(scheme, z, store, references, config.epsilon)) if scheme else None
                spans.append((Span(store.symbol(z).ljust(width), style, z), column))
            if gap:
                spans.append((Span(gap), None))
        body.append((label, spans))

    lead = f"{prefix}  "
    widest = max(
        [len(lead) + len(header)] + [len(lead) + sum(len(span.text) for span, _ in spans) for _, spans in body]
    )

    builder = _LineBuilder()
    builder.add([Span(TITLE.center(widest).rstrip())])
    builder.add([])
    builder.add([Span(lead + header)])
    for label, spans in body:
        if not spans:
            builder.add([])
            continue
        row = [(Span(f"{prefix}{label} "), None)] + spans
        line = builder.add([span for span, _ in row])
        builder.add_cells(line, row)

    legend_line = None
    if key is not None:
        builder.add([])
        legend_line = builder.add([Span(f"{prefix}{LEGEND_TITLE}: {key.title}")])
        if key.reference:
            builder.add([Span(f"{prefix}  {key.reference}")])
        for style, caption in key.swatches:
            builder.add([Span(f"{prefix}  "), Span(" " * width, style), Span(f" {caption}")])

    return RenderedTable(builder.lines, builder.cells, builder.offsets, legend_line)


def ansi_color(text: str, background: str, foreground: str | None = None) -> str:
    """Wrap ``text`` in 24-bit ANSI colour codes for ``#rrggbb`` colours."""
    codes = ["48;2;{};{};{}".format(*_rgb(background))]
    if foreground:
        codes.append("38;2;{};{};{}".format(*_rgb(foreground)))
    return "\033[" + ";".join(codes) + "m" + text + "\033[0m"


def _rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def colored_text(table: RenderedTable, palette: dict[str, str], foreground: str | None = "#000000") -> str:
    lines = []
    for spans in table.lines:
        lines.append(
            "".join(
                ansi_color(span.text, palette[span.style], foreground) if span.style in palette else span.text
                for span in spans
            )
        )
    return "\n".join(lines)
