"""
Column Aligner
==============
Turns an edit script into two row-aligned columns for side-by-side display.

Every op yields exactly one row: unchanged lines appear in both columns,
removed lines only on the left and added lines only on the right, with an
empty placeholder on the opposite side.
"""

from typing import Iterable

from .models import EditOp, ColumnCell, DiffResult, EMPTY_CELL, EQUAL, REMOVED, ADDED


def build_columns(ops: Iterable[EditOp], truncated: bool = False) -> DiffResult:
    """
    Build the left/right columns and change counts from an edit script.

    Args:
        ops: Ordered edit script
        truncated: Passed through to the result

    Returns:
        DiffResult whose columns both have one cell per op
    """
    left = []
    right = []
    added_count = 0
    removed_count = 0

    for op in ops:
        if op.kind == EQUAL:
            cell = ColumnCell(EQUAL, op.text)
            left.append(cell)
            right.append(cell)
        elif op.kind == REMOVED:
            left.append(ColumnCell(REMOVED, op.text))
            right.append(EMPTY_CELL)
            removed_count += 1
        else:
            left.append(EMPTY_CELL)
            right.append(ColumnCell(ADDED, op.text))
            added_count += 1

    return DiffResult(
        left_column=tuple(left),
        right_column=tuple(right),
        added_count=added_count,
        removed_count=removed_count,
        truncated=truncated
    )
