from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from elemtab.chem.elements import default_store
from elemtab.config import TableConfig
from elemtab.table.classify import ReferenceValues, Scheme
from elemtab.table.detail import DetailPanel
from elemtab.table.render import render_table
from elemtab.theming.theme_tokens import category_palette


class DetailPanelTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.store = default_store()
        cls.table = render_table(
            cls.store,
            TableConfig(),
            Scheme.parse("group"),
            ReferenceValues(cls.store),
            category_palette("Fluent Light"),
        )

    def position(self, z: int) -> int:
        return self.table.cell_for(z).start

    def test_refresh_is_idempotent(self) -> None:
        panel = DetailPanel(self.store)
        self.assertTrue(panel.refresh(self.table, self.position(79)))
        self.assertFalse(panel.refresh(self.table, self.position(79)))
        self.assertFalse(panel.refresh(self.table, self.position(79) + 1))
        self.assertEqual(panel.regenerations, 1)

    def test_forced_refresh(self) -> None:
        panel = DetailPanel(self.store)
        panel.refresh(self.table, self.position(79))
        self.assertTrue(panel.refresh(self.table, self.position(79), force=True))
        self.assertEqual(panel.regenerations, 2)

    def test_position_without_element(self) -> None:
        panel = DetailPanel(self.store)
        self.assertFalse(panel.refresh(self.table, 0))
        self.assertFalse(panel.refresh(self.table, 0, force=True))
        panel.refresh(self.table, self.position(26))
        self.assertFalse(panel.refresh(self.table, 0))
        self.assertTrue(panel.refresh(self.table, 0, force=True))
        self.assertEqual(panel.last_z, 26)

    def test_content(self) -> None:
        panel = DetailPanel(self.store)
        panel.show(79)
        text = panel.text
        self.assertTrue(text.startswith("Gold (Au)\n"))
        self.assertIn("[Xe] 6s-1 4f-14 5d-10", text)
        self.assertIn("Aufbau exception", text)
        self.assertIn(("Melting point", "1337.33 K"), panel.properties)
        self.assertEqual(panel.isotopes, [("195", "194.96503520", ""), ("197", "196.96656879", "100")])

    def test_missing_values_have_no_unit(self) -> None:
        panel = DetailPanel(self.store)
        panel.show(118)
        self.assertIn(("Density", "n/a"), panel.properties)

    def test_excluded_properties(self) -> None:
        panel = DetailPanel(self.store, {"density", "discovered-by"})
        panel.show(79)
        labels = [label for label, _ in panel.properties]
        self.assertNotIn("Density", labels)
        self.assertNotIn("Discovered by", labels)
        self.assertIn("Melting point", labels)
        self.assertEqual(len(panel.isotopes), 2)

    def test_section_offsets(self) -> None:
        panel = DetailPanel(self.store)
        panel.show(1)
        text = panel.text
        self.assertTrue(text[panel.section_offsets["properties"] :].startswith("Properties"))
        self.assertTrue(text[panel.section_offsets["isotopes"] :].startswith("Isotopes"))
        self.assertEqual(panel.lines[panel.section_line("isotopes")], "Isotopes")

    def test_html(self) -> None:
        panel = DetailPanel(self.store)
        self.assertEqual(panel.html(), "")
        panel.show(26)
        html = panel.html("https://example.org/Iron")
        self.assertIn("Iron (Fe)", html)
        self.assertIn("name='properties'", html)
        self.assertIn("https://example.org/Iron", html)


if __name__ == "__main__":
    unittest.main()
