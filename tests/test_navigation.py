from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from elemtab.chem.elements import default_store
from elemtab.config import TableConfig
from elemtab.table.classify import ReferenceValues, Scheme
from elemtab.table.navigation import move_by, move_to
from elemtab.table.render import render_table
from elemtab.theming.theme_tokens import category_palette


def render(convention: str = "conventional"):
    store = default_store()
    return render_table(
        store,
        TableConfig(convention=convention),
        Scheme.parse("group"),
        ReferenceValues(store),
        category_palette("Fluent Light"),
    )


class MoveByTests(unittest.TestCase):
    def setUp(self) -> None:
        self.table = render()
        self.cells = self.table.cells

    def test_next_and_previous(self) -> None:
        hydrogen = self.table.cell_for(1).start
        helium = self.table.cell_for(2).start
        self.assertEqual(move_by(self.table, hydrogen, 1), helium)
        self.assertEqual(move_by(self.table, helium, -1), hydrogen)

    def test_skips_padding(self) -> None:
        magnesium = self.table.cell_for(12).start
        self.assertEqual(self.table.z_at(move_by(self.table, magnesium, 1)), 13)
        barium = self.table.cell_for(56).start
        self.assertEqual(self.table.z_at(move_by(self.table, barium, 1)), 71)

    def test_wraps_at_both_ends(self) -> None:
        first = self.cells[0].start
        last = self.cells[-1].start
        self.assertEqual(move_by(self.table, last, 1), first)
        self.assertEqual(move_by(self.table, first, -1), last)

    def test_round_trip(self) -> None:
        for table in (self.table, render("ordered")):
            for cell in table.cells:
                for count in (-200, -5, -1, 1, 2, 17, 118, 250):
                    moved = move_by(table, cell.start, count)
                    self.assertEqual(move_by(table, moved, -count), cell.start)

    def test_zero_is_no_op(self) -> None:
        self.assertEqual(move_by(self.table, 0, 0), 0)
        inside = self.table.cell_for(26).start + 1
        self.assertEqual(move_by(self.table, inside, 0), inside)

    def test_lands_on_cell_start(self) -> None:
        inside = self.table.cell_for(26).start + 1
        self.assertEqual(move_by(self.table, inside, 1), self.table.cell_for(27).start)
        self.assertEqual(move_by(self.table, inside, -1), self.table.cell_for(25).start)

    def test_from_outside_any_cell(self) -> None:
        self.assertEqual(move_by(self.table, 0, 1), self.cells[0].start)
        self.assertEqual(move_by(self.table, 0, -1), self.cells[-1].start)
        gap = self.table.cell_for(1).end
        self.assertIsNone(self.table.z_at(gap))
        self.assertEqual(self.table.z_at(move_by(self.table, gap, 1)), 2)
        self.assertEqual(self.table.z_at(move_by(self.table, gap, -1)), 1)

    def test_move_to(self) -> None:
        self.assertEqual(move_to(self.table, 79), self.table.cell_for(79).start)
        self.assertIsNone(move_to(self.table, 200))


if __name__ == "__main__":
    unittest.main()
