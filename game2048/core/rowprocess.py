"""
Slide and merge of a single line of the board.

A line is the sequence of cell values of one row or column, already extracted in the move direction:
index 0 is the destination edge, the last index is the far edge.
"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class RowMove:
    """A tile slides from ``old_index`` to ``new_index`` without merging."""

    old_index: int
    new_index: int
    value: int


@dataclass(frozen=True)
class RowMerge:
    """A tile slides from ``old_index`` and combines with the tile at ``new_index``."""

    old_index: int
    new_index: int
    merged_value: int


RowEvent = RowMove | RowMerge


def process_row(values: Sequence[int]) -> list[RowEvent]:
    """
    Compute the slide and merge outcome of one line.

    Parameters
    ----------
    values : Sequence[int]
        Cell values of the line, ordered from the destination edge (index 0) to the far edge. 0 is a vacant cell.

    Returns
    -------
    list[RowEvent]
        One event per tile whose index or value changes, in scan order.

    Notes
    -----
    - Vacant cells are skipped; the write cursor starts at the destination edge.
    - A tile equal to the last tile placed merges into it, unless that tile already merged this move.
    - A tile already at the write cursor produces no event.
    """
    events: list[RowEvent] = []

    # ##: Next free slot and value waiting behind it (0 once it merged).
    cursor = 0
    outstanding = 0

    for index, value in enumerate(values):
        if not value:
            continue

        if outstanding == value:
            events.append(RowMerge(old_index=index, new_index=cursor - 1, merged_value=value * 2))
            outstanding = 0
            continue

        if index != cursor:
            events.append(RowMove(old_index=index, new_index=cursor, value=value))
        outstanding = value
        cursor += 1

    return events

