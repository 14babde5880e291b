from __future__ import annotations

from elemtab.table.render import RenderedTable


def move_by(table: RenderedTable, position: int, count: int) -> int:
    """Move ``count`` element cells from ``position`` in reading order.

    Padding is skipped and the grid wraps at both ends. The result is the
    first offset of the target cell. From a position outside every cell,
    ``+1`` lands on the next cell and ``-1`` on the previous one.
    """
    total = len(table.cells)
    if count == 0 or total == 0:
        return position
    index = table.cell_index(position)
    if index is None:
        following = table.next_cell_index(position)
        target = following + count - 1 if count > 0 else following + count
    else:
        target = index + count
    return table.cells[target % total].start


def move_to(table: RenderedTable, z: int) -> int | None:
    cell = table.cell_for(z)
    return None if cell is None else cell.start
