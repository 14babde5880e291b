from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass


# Aufbau filling order with capacities for s, p, d, f subshells.
SUBSHELL_ORDER: tuple[tuple[int, int, int], ...] = (
    (1, 0, 2),
    (2, 0, 2),
    (2, 1, 6),
    (3, 0, 2),
    (3, 1, 6),
    (4, 0, 2),
    (3, 2, 10),
    (4, 1, 6),
    (5, 0, 2),
    (4, 2, 10),
    (5, 1, 6),
    (6, 0, 2),
    (4, 3, 14),
    (5, 2, 10),
    (6, 1, 6),
    (7, 0, 2),
    (5, 3, 14),
    (6, 2, 10),
    (7, 1, 6),
)

SUBSHELL_LABELS = {0: "s", 1: "p", 2: "d", 3: "f"}
DEGENERACY = {"s": 2, "p": 6, "d": 10, "f": 14}

# Closed-shell cores used for the "[Ar] 4s-1 3d-5" shorthand.
NOBLE_GAS_CORES: dict[int, str] = {2: "He", 10: "Ne", 18: "Ar", 36: "Kr", 54: "Xe", 86: "Rn"}

# Known ground-state aufbau exceptions for neutral atoms, as occupancy
# adjustments on top of the naive filling.
AUFBAU_EXCEPTION_ADJUSTMENTS: dict[int, dict[tuple[int, int], int]] = {
    24: {(4, 0): -1, (3, 2): 1},  # Cr
    29: {(4, 0): -1, (3, 2): 1},  # Cu
    41: {(5, 0): -1, (4, 2): 1},  # Nb
    42: {(5, 0): -1, (4, 2): 1},  # Mo
    44: {(5, 0): -1, (4, 2): 1},  # Ru
    45: {(5, 0): -1, (4, 2): 1},  # Rh
    46: {(5, 0): -2, (4, 2): 2},  # Pd
    47: {(5, 0): -1, (4, 2): 1},  # Ag
    57: {(4, 3): -1, (5, 2): 1},  # La
    58: {(4, 3): -1, (5, 2): 1},  # Ce
    64: {(4, 3): -1, (5, 2): 1},  # Gd
    78: {(6, 0): -1, (5, 2): 1},  # Pt
    79: {(6, 0): -1, (5, 2): 1},  # Au
    89: {(5, 3): -1, (6, 2): 1},  # Ac
    90: {(5, 3): -2, (6, 2): 2},  # Th
    91: {(5, 3): -1, (6, 2): 1},  # Pa
    92: {(5, 3): -1, (6, 2): 1},  # U
    93: {(5, 3): -1, (6, 2): 1},  # Np
    96: {(5, 3): -1, (6, 2): 1},  # Cm
    103: {(6, 2): -1, (7, 1): 1},  # Lr
}


@dataclass(frozen=True)
class OrbitalRange:
    orbital: str
    min_z: int
    max_z: int

    @property
    def letter(self) -> str:
        return self.orbital[-1]

    def __contains__(self, z: int) -> bool:
        return self.min_z <= z <= self.max_z


def orbital_name(n: int, l: int) -> str:
    return f"{n}{SUBSHELL_LABELS[l]}"


def degeneracy(orbital: str) -> int:
    """Electron capacity of an orbital (or padding slot) from its subshell letter."""
    return DEGENERACY[orbital[-1]]


def _build_ranges() -> tuple[OrbitalRange, ...]:
    ranges: list[OrbitalRange] = []
    prev_max = 0
    for n, l, cap in SUBSHELL_ORDER:
        ranges.append(OrbitalRange(orbital_name(n, l), prev_max + 1, prev_max + cap))
        prev_max += cap
    return tuple(ranges)


ORBITAL_RANGES: tuple[OrbitalRange, ...] = _build_ranges()
ORBITAL_ORDER: tuple[str, ...] = tuple(r.orbital for r in ORBITAL_RANGES)
MAX_Z = ORBITAL_RANGES[-1].max_z
_RANGE_BY_ORBITAL = {r.orbital: r for r in ORBITAL_RANGES}
_RANGE_ENDS = [r.max_z for r in ORBITAL_RANGES]


def orbital_ranges(convention: str | None = None) -> tuple[OrbitalRange, ...]:
    """Orbital to atomic-number ranges; the physical order does not depend on the display convention."""
    return ORBITAL_RANGES


def orbital_range(orbital: str) -> OrbitalRange | None:
    return _RANGE_BY_ORBITAL.get(orbital)


def orbital_of(z: int) -> OrbitalRange | None:
    if z < 1 or z > MAX_Z:
        return None
    return ORBITAL_RANGES[bisect_left(_RANGE_ENDS, z)]


@dataclass(frozen=True)
class AufbauExceptionNote:
    electron_count: int
    expected_config: str
    actual_config: str
    explanation: str
    impact: str


AUFBAU_EXCEPTION_NOTES: dict[int, tuple[str, str]] = {
    24: (
        "The 3d and 4s subshells are close in energy. Promoting one 4s electron "
        "creates a half-filled 3d subshell, which is stabilized by exchange energy.",
        "This often enhances paramagnetism (more unpaired electrons) and supports "
        "multiple oxidation states such as +2, +3, and +6.",
    ),
    29: (
        "A filled 3d10 subshell is especially stable, so one 4s electron is promoted "
        "to complete 3d10.",
        "Cu+ (d10) is commonly diamagnetic, while Cu2+ is also prevalent and often "
        "gives colored complexes.",
    ),
    42: (
        "The 4d and 5s subshells are near-degenerate. Promoting one 5s electron "
        "yields a half-filled 4d5 subshell.",
        "Multiple oxidation states are common, and unpaired d electrons contribute "
        "to magnetic behavior and colored complexes.",
    ),
    46: (
        "The 4d subshell can be stabilized when fully filled, so both 5s electrons "
        "shift into 4d to reach 4d10.",
        "Many Pd(0) compounds are diamagnetic (d10), and Pd(II) chemistry is "
        "especially prominent in catalysis.",
    ),
    47: (
        "Completing the 4d10 subshell lowers the energy, so one 5s electron is promoted.",
        "Ag+ (d10) is common and typically diamagnetic; Ag(0) and Ag(I) compounds "
        "often have characteristic coordination chemistry.",
    ),
    57: (
        "The 5d level drops below 4f at the start of the lanthanides, so the first "
        "f electron goes into 5d instead.",
        "Lanthanum chemistry is dominated by the +3 state with an empty 4f shell.",
    ),
    79: (
        "Relativistic effects and near-degenerate 5d/6s energies favor a filled 5d10 "
        "subshell with a single 6s electron.",
        "Gold shows stable +1 and +3 oxidation states; d10 configurations can reduce "
        "magnetic moments in many Au(I) complexes.",
    ),
    103: (
        "Relativistic stabilization of 7p places the last electron in 7p rather than 6d.",
        "Lawrencium is expected to behave as a trivalent actinide in solution.",
    ),
}


def fill_subshells(electron_count: int, apply_exceptions: bool = True) -> dict[tuple[int, int], int]:
    subshells: dict[tuple[int, int], int] = {}
    remaining = max(0, int(electron_count))
    for n, l, cap in SUBSHELL_ORDER:
        if remaining <= 0:
            break
        fill = min(cap, remaining)
        subshells[(n, l)] = fill
        remaining -= fill
    if apply_exceptions:
        adjustments = AUFBAU_EXCEPTION_ADJUSTMENTS.get(int(electron_count))
        if adjustments:
            for (n, l), delta in adjustments.items():
                subshells[(n, l)] = max(0, subshells.get((n, l), 0) + delta)
    return subshells


def noble_gas_core(electron_count: int) -> int:
    """Largest noble-gas core strictly below the electron count, or 0."""
    return max((core for core in NOBLE_GAS_CORES if core < electron_count), default=0)


def subshells_to_config(subshells: dict[tuple[int, int], int], shorthand: bool = True) -> str:
    total = sum(subshells.values())
    core = noble_gas_core(total) if shorthand else 0
    parts: list[str] = [f"[{NOBLE_GAS_CORES[core]}]"] if core else []
    filled = 0
    for n, l, cap in SUBSHELL_ORDER:
        if filled < core:
            # Exceptions never reach into the core, so it always consumes whole subshells.
            filled += cap
            continue
        cnt = subshells.get((n, l))
        if cnt:
            parts.append(f"{orbital_name(n, l)}-{cnt}")
    return " ".join(parts)


def electron_configuration(z: int, apply_exceptions: bool = True) -> str:
    return subshells_to_config(fill_subshells(z, apply_exceptions=apply_exceptions))


def expected_aufbau_subshells(electron_count: int) -> dict[tuple[int, int], int]:
    return fill_subshells(electron_count, apply_exceptions=False)


def actual_aufbau_subshells(electron_count: int) -> dict[tuple[int, int], int]:
    return fill_subshells(electron_count, apply_exceptions=True)


def build_aufbau_exception_note(
    electron_count: int,
    expected_subshells: dict[tuple[int, int], int],
    actual_subshells: dict[tuple[int, int], int],
) -> AufbauExceptionNote | None:
    if expected_subshells == actual_subshells:
        return None
    expected = subshells_to_config(expected_subshells)
    actual = subshells_to_config(actual_subshells)
    explanation, impact = AUFBAU_EXCEPTION_NOTES.get(
        int(electron_count),
        (
            "Subshell energies are close, so a small electron rearrangement can lower the total energy.",
            "This can influence bonding tendencies and magnetic behavior, but details depend on the compound.",
        ),
    )
    return AufbauExceptionNote(
        electron_count=int(electron_count),
        expected_config=expected,
        actual_config=actual,
        explanation=explanation,
        impact=impact,
    )


def exception_note(z: int) -> AufbauExceptionNote | None:
    return build_aufbau_exception_note(z, expected_aufbau_subshells(z), actual_aufbau_subshells(z))
