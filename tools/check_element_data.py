from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from elemtab.chem.aufbau import ORBITAL_RANGES
from elemtab.chem.elements import ElementStore
from elemtab.table.layout import Convention, is_padding, rows_for, slot_width


def check_layouts() -> list[str]:
    problems: list[str] = []
    for convention in Convention:
        seen: list[int] = []
        for row in rows_for(convention):
            for slot in row:
                try:
                    slot_width(slot)
                except ValueError as exc:
                    problems.append(f"{convention.value}: {exc}")
                    continue
                if not is_padding(slot):
                    found = next(r for r in ORBITAL_RANGES if r.orbital == slot)
                    seen.extend(range(found.min_z, found.max_z + 1))
        if sorted(seen) != list(range(1, ORBITAL_RANGES[-1].max_z + 1)):
            problems.append(f"{convention.value}: layout does not place every element exactly once")
    return problems


def main() -> None:
    parser = argparse.ArgumentParser(description="Check the shipped element tables and display layouts.")
    parser.add_argument("--quiet", action="store_true", help="Only print problems.")
    args = parser.parse_args()
    store = ElementStore.from_resources()
    problems = store.validate() + check_layouts()
    for problem in problems:
        print(problem, file=sys.stderr)
    if problems:
        raise SystemExit(f"{len(problems)} problem(s) found")
    if not args.quiet:
        print(f"{store.max_z} elements, {len(store.property_names)} properties: OK")


if __name__ == "__main__":
    main()
