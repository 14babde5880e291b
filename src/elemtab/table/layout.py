from __future__ import annotations

from enum import Enum

from elemtab.chem.aufbau import degeneracy, orbital_range


class Convention(str, Enum):
    CONVENTIONAL = "conventional"
    ORDERED = "ordered"

    @classmethod
    def parse(cls, value: str | Convention) -> Convention:
        if isinstance(value, Convention):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown display convention: {value!r}") from None


# Rows of orbital slots. Slots with period 0 are padding of the letter's width.
# An empty row is a spacer line.
DISPLAY_LAYOUTS: dict[Convention, tuple[tuple[str, ...], ...]] = {
    Convention.CONVENTIONAL: (
        ("1s",),
        ("2s", "0d", "2p"),
        ("3s", "0d", "3p"),
        ("4s", "3d", "4p"),
        ("5s", "4d", "5p"),
        ("6s", "5d", "6p"),
        ("7s", "6d", "7p"),
        (),
        ("0s", "4f"),
        ("0s", "5f"),
    ),
    Convention.ORDERED: (
        ("1s",),
        ("2s", "0f", "0d", "2p"),
        ("3s", "0f", "0d", "3p"),
        ("4s", "0f", "3d", "4p"),
        ("5s", "0f", "4d", "5p"),
        ("6s", "4f", "5d", "6p"),
        ("7s", "5f", "6d", "7p"),
    ),
}

GROUP_RANGES: dict[str, tuple[int, int]] = {
    "s": (1, 2),
    "d": (3, 12),
    "p": (13, 18),
    "f": (19, 32),
}

BLOCK_ORDER: dict[Convention, tuple[str, ...]] = {
    Convention.CONVENTIONAL: ("s", "d", "p"),
    Convention.ORDERED: ("s", "f", "d", "p"),
}


def is_padding(slot: str) -> bool:
    return slot[:-1] == "0"


def slot_width(slot: str) -> int:
    if is_padding(slot):
        return degeneracy(slot)
    found = orbital_range(slot)
    if found is None:
        raise ValueError(f"Layout slot {slot!r} has no orbital range")
    return found.max_z - found.min_z + 1


def rows_for(convention: str | Convention) -> tuple[tuple[str, ...], ...]:
    return DISPLAY_LAYOUTS[Convention.parse(convention)]


def period_label(row: tuple[str, ...]) -> str:
    """Period digit of the row's first real orbital; blank when the row opens with padding."""
    for slot in row:
        if is_padding(slot):
            return " "
        return slot[0]
    return " "


def group_header(convention: str | Convention) -> list[int | None]:
    """Group number per column in block order; f columns are ``None`` (reserved, not shown)."""
    header: list[int | None] = []
    for letter in BLOCK_ORDER[Convention.parse(convention)]:
        first, last = GROUP_RANGES[letter]
        header.extend(None if letter == "f" else group for group in range(first, last + 1))
    return header
