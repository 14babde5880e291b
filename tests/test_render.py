from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from elemtab.chem.elements import default_store
from elemtab.config import TableConfig
from elemtab.table.classify import ReferenceValues, Scheme
from elemtab.table.render import TITLE, colored_text, render_table
from elemtab.theming.theme_tokens import category_palette


class RenderTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.store = default_store()
        cls.palette = category_palette("Fluent Light")

    def render(self, scheme: str | None = "group", **options):
        config = TableConfig(**options)
        parsed = Scheme.parse(scheme) if scheme else None
        return render_table(self.store, config, parsed, ReferenceValues(self.store), self.palette)

    def test_every_element_has_one_cell(self) -> None:
        for convention in ("conventional", "ordered"):
            table = self.render(convention=convention)
            self.assertEqual(len(table.cells), 118)
            self.assertEqual({cell.z for cell in table.cells}, set(range(1, 119)))

    def test_cell_text_is_symbol(self) -> None:
        table = self.render(element_width=3, separation=2)
        text = table.text
        for z in (1, 26, 79, 118):
            cell = table.cell_for(z)
            self.assertEqual(text[cell.start : cell.end], self.store.symbol(z).ljust(3))
            self.assertEqual(text[cell.end : cell.end + 2], "  ")

    def test_two_way_index(self) -> None:
        table = self.render()
        for cell in table.cells:
            self.assertEqual(table.z_at(cell.start), cell.z)
            self.assertEqual(table.z_at(cell.end - 1), cell.z)
            self.assertEqual(table.at(cell.line, cell.column), cell.z)
        self.assertIsNone(table.z_at(0))

    def test_helium_sits_above_neon(self) -> None:
        for convention in ("conventional", "ordered"):
            table = self.render(convention=convention)
            helium = table.cell_for(2)
            neon = table.cell_for(10)
            self.assertEqual(helium.column, neon.column)
            self.assertEqual(
                helium.start - table.line_offsets[helium.line],
                neon.start - table.line_offsets[neon.line],
            )
            self.assertEqual(table.cell_for(1).line, helium.line)

    def test_conventional_footer_rows(self) -> None:
        table = self.render(convention="conventional")
        lanthanum = table.cell_for(57)
        self.assertNotEqual(lanthanum.line, table.cell_for(56).line)
        self.assertEqual(table.cell_for(71).column, table.cell_for(21).column)
        self.assertTrue(table.line_text(lanthanum.line).startswith("    "))

    def test_ordered_inlines_f_block(self) -> None:
        table = self.render(convention="ordered")
        self.assertEqual(table.cell_for(57).line, table.cell_for(55).line)
        self.assertEqual(table.cell_for(71).line, table.cell_for(86).line)

    def test_period_labels(self) -> None:
        table = self.render(indentation=2)
        self.assertTrue(table.line_text(table.cell_for(1).line).startswith("  1 H "))
        self.assertTrue(table.line_text(table.cell_for(87).line).startswith("  7 Fr"))

    def test_title_is_centred(self) -> None:
        table = self.render()
        first = table.line_text(0)
        self.assertEqual(first.strip(), TITLE)
        widest = max(len(table.line_text(cell.line)) for cell in table.cells)
        self.assertLessEqual(abs((len(first) - len(TITLE)) - (widest - len(first))), 1)

    def test_header_hides_f_groups(self) -> None:
        table = self.render(convention="ordered")
        header = table.line_text(2)
        self.assertTrue(header.startswith("    1  2  "))
        self.assertIn("18", header)
        self.assertNotIn("19", header)

    def test_round_trip_is_identical(self) -> None:
        first = self.render(convention="ordered")
        self.render(convention="conventional")
        again = self.render(convention="ordered")
        self.assertEqual(first.text, again.text)
        self.assertEqual(first.lines, again.lines)
        self.assertEqual(first.cells, again.cells)

    def test_cells_are_styled(self) -> None:
        table = self.render("state")
        styles = {span.z: span.style for line in table.lines for span in line if span.z is not None}
        self.assertEqual(styles[80], "state-liquid")
        self.assertEqual(styles[26], "state-solid")

    def test_legend_follows_table(self) -> None:
        table = self.render("group")
        self.assertIsNotNone(table.legend_line)
        self.assertIn("Key: Block", table.line_text(table.legend_line))
        swatches = [
            span.style
            for line in table.lines[table.legend_line :]
            for span in line
            if span.style is not None
        ]
        self.assertEqual(swatches, ["group-s", "group-p", "group-d", "group-f"])

    def test_missing_style_raises(self) -> None:
        palette = {key: value for key, value in self.palette.items() if key != "group-f"}
        with self.assertRaises(ValueError):
            render_table(self.store, TableConfig(), Scheme.parse("group"), ReferenceValues(self.store), palette)

    def test_without_scheme(self) -> None:
        table = self.render(None)
        self.assertIsNone(table.legend_line)
        self.assertTrue(all(span.style is None for line in table.lines for span in line))
        self.assertEqual(len(table.cells), 118)

    def test_colored_text(self) -> None:
        table = self.render("group")
        colored = colored_text(table, self.palette)
        self.assertIn("\033[48;2;", colored)
        self.assertIn("\033[0m", colored)
        plain = colored_text(self.render(None), self.palette)
        self.assertNotIn("\033[", plain)


if __name__ == "__main__":
    unittest.main()
