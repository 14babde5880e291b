from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from elemtab.chem.elements import ElementStore, default_store
from elemtab.table.classify import (
    SCHEME_NAMES,
    ReferenceValues,
    Scheme,
    SchemeKind,
    classify,
    compute_median,
    legend,
)
from elemtab.theming.theme_tokens import category_palette


def synthetic_store() -> ElementStore:
    return ElementStore(
        {
            1: {
                "name": "Alpha",
                "symbol": "Aa",
                "density": "1.0",
                "melting-point": "273.15",
                "boiling-point": "373.15",
                "oxidation-states": "1, 2, 3, 4, 5, 6, 7, 8, -1",
                "discovery-date": "n/a",
                "discovered-by": "Someone",
            },
            2: {
                "name": "Beta",
                "symbol": "Bb",
                "density": "[2.004]",
                "melting-point": "0",
                "boiling-point": "10",
                "oxidation-states": "n/a",
                "discovery-date": "1850 (isolated 1890)",
                "discovered-by": "Someone Else",
            },
            3: {
                "name": "Gamma",
                "symbol": "Gg",
                "density": "3.0",
                "melting-point": "n/a",
                "boiling-point": "n/a",
                "oxidation-states": "2",
                "discovery-date": "1900",
                "discovered-by": "Known to the ancients",
            },
        }
    )


class SchemeTests(unittest.TestCase):
    def test_parse_names(self) -> None:
        self.assertEqual(Scheme.parse("group"), Scheme(SchemeKind.GROUP))
        self.assertEqual(Scheme.parse("Density"), Scheme(SchemeKind.PROPERTY, "density"))
        self.assertEqual(Scheme.parse("density").name, "density")
        for name in SCHEME_NAMES:
            self.assertEqual(Scheme.parse(name).name, name)

    def test_unknown_names(self) -> None:
        for name in ("colour", "property", "oxidation-states"):
            with self.assertRaises(ValueError):
                Scheme.parse(name)

    def test_property_parameter_is_checked(self) -> None:
        with self.assertRaises(ValueError):
            Scheme(SchemeKind.PROPERTY, "name")
        with self.assertRaises(ValueError):
            Scheme(SchemeKind.GROUP, "density")

    def test_property_scheme_accessors(self) -> None:
        scheme = Scheme(SchemeKind.PROPERTY, property_name="density")
        self.assertEqual(scheme.property_name, "density")
        self.assertEqual(scheme.name, "density")
        self.assertEqual(scheme.reference_key, "density")
        self.assertEqual(scheme.title, "Density")
        self.assertIsNone(Scheme.parse("group").property_name)
        self.assertEqual(Scheme.parse("state").reference_key, "temperature")

    def test_style_keys(self) -> None:
        self.assertEqual(Scheme.parse("state").style("liquid"), "state-liquid")
        self.assertEqual(Scheme.parse("density").style("equal"), "property-equal")


class ClassifyRealDataTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.store = default_store()

    def setUp(self) -> None:
        self.references = ReferenceValues(self.store)

    def category(self, name: str, z: int) -> str:
        return classify(Scheme.parse(name), z, self.store, self.references)

    def test_group_is_orbital_letter(self) -> None:
        self.assertEqual(self.category("group", 1), "s")
        self.assertEqual(self.category("group", 2), "s")
        self.assertEqual(self.category("group", 10), "p")
        self.assertEqual(self.category("group", 26), "d")
        self.assertEqual(self.category("group", 57), "f")

    def test_state_at_room_temperature(self) -> None:
        self.assertEqual(self.category("state", 80), "liquid")
        self.assertEqual(self.category("state", 26), "solid")
        self.assertEqual(self.category("state", 2), "gas")
        self.assertEqual(self.category("state", 118), "unknown")

    def test_ancients_ignore_reference_year(self) -> None:
        self.references.set("year", 1000)
        self.assertEqual(self.category("discovery", 79), "ancient")
        self.assertEqual(self.category("discovery", 26), "ancient")

    def test_discovery_against_reference_year(self) -> None:
        self.references.set("year", 1766)
        self.assertEqual(self.category("discovery", 1), "during")
        self.references.set("year", 1800)
        self.assertEqual(self.category("discovery", 1), "before")
        self.references.set("year", 1700)
        self.assertEqual(self.category("discovery", 1), "after")

    def test_oxidation_count(self) -> None:
        self.assertEqual(self.category("oxidation", 24), "3")
        self.assertEqual(self.category("oxidation", 1), "2")
        self.assertEqual(self.category("oxidation", 2), "unknown")

    def test_density_epsilon(self) -> None:
        self.references.set("density", 19.3 + 0.004)
        self.assertEqual(self.category("density", 79), "equal")
        self.references.set("density", 19.3 + 0.006)
        self.assertEqual(self.category("density", 79), "less")
        self.assertEqual(self.category("density", 76), "greater")
        self.assertEqual(self.category("density", 118), "unknown")


class ClassifySyntheticTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = synthetic_store()
        self.references = ReferenceValues(self.store)

    def category(self, name: str, z: int) -> str:
        return classify(Scheme.parse(name), z, self.store, self.references)

    def test_melting_point_boundary_is_liquid(self) -> None:
        self.references.set("temperature", 273.15)
        self.assertEqual(self.category("state", 1), "liquid")
        self.references.set("temperature", 273.14)
        self.assertEqual(self.category("state", 1), "solid")
        self.references.set("temperature", 373.15)
        self.assertEqual(self.category("state", 1), "gas")

    def test_zero_melting_point_is_unknown(self) -> None:
        self.assertEqual(self.category("state", 2), "unknown")
        self.assertEqual(self.category("state", 3), "unknown")

    def test_median_reference(self) -> None:
        self.assertAlmostEqual(self.references.get("density"), 2.004)
        self.assertEqual(self.category("density", 2), "equal")
        self.assertEqual(self.category("density", 1), "less")
        self.assertEqual(self.category("density", 3), "greater")

    def test_oxidation_clamped_to_seven(self) -> None:
        self.assertEqual(self.category("oxidation", 1), "7")
        self.assertEqual(self.category("oxidation", 2), "unknown")
        self.assertEqual(self.category("oxidation", 3), "1")

    def test_discovery_without_year(self) -> None:
        self.assertEqual(self.category("discovery", 1), "unknown")
        self.assertEqual(self.category("discovery", 3), "ancient")

    def test_year_median_uses_leading_integer(self) -> None:
        self.assertEqual(compute_median(self.store, "year"), 1875.0)
        self.assertEqual(self.references.get("year"), 1875.0)


class ReferenceValuesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.references = ReferenceValues(synthetic_store())

    def test_default_temperature(self) -> None:
        self.assertEqual(self.references.get("temperature"), 298.15)

    def test_adjust(self) -> None:
        self.assertAlmostEqual(self.references.adjust("temperature", 1), 308.15)
        self.assertAlmostEqual(self.references.adjust("temperature", -2), 288.15)
        self.assertAlmostEqual(self.references.adjust("density", 1), 2.104)

    def test_values_are_cached(self) -> None:
        self.references.set("density", 5.0)
        self.assertEqual(self.references.get("density"), 5.0)
        self.assertIn("density", self.references)

    def test_undefined_property(self) -> None:
        self.assertIsNone(self.references.get("atomic-radius"))
        self.assertIsNone(self.references.adjust("atomic-radius", 1))


class LegendTests(unittest.TestCase):
    def setUp(self) -> None:
        self.references = ReferenceValues(default_store())
        self.palette = category_palette("Fluent Light")

    def test_legend_order(self) -> None:
        key = legend(Scheme.parse("discovery"), self.references, self.palette)
        self.assertEqual(
            [style for style, _ in key.swatches],
            [
                "discovery-before",
                "discovery-during",
                "discovery-after",
                "discovery-ancient",
                "discovery-unknown",
            ],
        )
        oxidation = legend(Scheme.parse("oxidation"), self.references, self.palette)
        self.assertEqual([style for style, _ in oxidation.swatches][-1], "oxidation-unknown")
        self.assertEqual(len(oxidation.swatches), 8)

    def test_reference_caption(self) -> None:
        key = legend(Scheme.parse("state"), self.references, self.palette)
        self.assertEqual(key.reference, "Temperature: 298.15 K (25.00 °C)")
        self.assertIsNone(legend(Scheme.parse("group"), self.references, self.palette).reference)

    def test_missing_style(self) -> None:
        palette = dict(self.palette)
        del palette["state-gas"]
        with self.assertRaises(ValueError):
            legend(Scheme.parse("state"), self.references, palette)

    def test_every_theme_covers_every_category(self) -> None:
        for theme in ("Fluent Light", "Fluent Dark", "High Contrast"):
            palette = category_palette(theme)
            for name in SCHEME_NAMES:
                legend(Scheme.parse(name), self.references, palette)


if __name__ == "__main__":
    unittest.main()
