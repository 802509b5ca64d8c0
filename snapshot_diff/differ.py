"""
Line Differ
===========
Line-level edit scripts between two JD snapshot texts.

Two algorithms are used, picked once per call from the line counts:

- EXACT: LCS over a full DP table. Minimal edit script, O(m*n) time and
  memory, so only run when both sides have at most MAX_LINES lines.
- FALLBACK: set membership walk. O(m+n), not minimal. Duplicate and
  reordered lines are not told apart.

Inputs longer than CHAR_LIMIT characters are cut before splitting, which
bounds the work of any single call.
"""

from enum import Enum
from typing import List, Sequence, Tuple

from config_logging import get_logger

from .aligner import build_columns
from .models import EditOp, DiffResult

logger = get_logger('snapshot_diff.differ')

CHAR_LIMIT = 20000
MAX_LINES = 500


class DiffAlgorithm(Enum):
    EXACT = 'exact'
    FALLBACK = 'fallback'


def truncate_inputs(old_text: str, new_text: str) -> Tuple[str, str, bool]:
    """
    Apply the character budget to both texts.

    If either text exceeds CHAR_LIMIT, both are cut to their first
    CHAR_LIMIT characters.

    Returns:
        Tuple of (old_text, new_text, truncated)
    """
    truncated = len(old_text) > CHAR_LIMIT or len(new_text) > CHAR_LIMIT
    if not truncated:
        return old_text, new_text, False
    return old_text[:CHAR_LIMIT], new_text[:CHAR_LIMIT], True


def split_lines(text: str) -> List[str]:
    """Split on '\\n' only. An empty text is one empty line."""
    return text.split('\n')


def select_algorithm(old_count: int, new_count: int) -> DiffAlgorithm:
    if old_count <= MAX_LINES and new_count <= MAX_LINES:
        return DiffAlgorithm.EXACT
    return DiffAlgorithm.FALLBACK


def _lcs_diff(old_lines: Sequence[str], new_lines: Sequence[str]) -> List[EditOp]:
    """
    Minimal edit script via an LCS table and backtrack.

    On ties the backtrack consumes the new side first, so an ambiguous
    line comes out as added before the matching removal.
    """
    m = len(old_lines)
    n = len(new_lines)

    # dp[i][j]: LCS length of old_lines[:i] and new_lines[:j]
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        old_line = old_lines[i - 1]
        row = dp[i]
        prev_row = dp[i - 1]
        for j in range(1, n + 1):
            if old_line == new_lines[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])

    ops = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old_lines[i - 1] == new_lines[j - 1]:
            ops.append(EditOp.equal(old_lines[i - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            ops.append(EditOp.added(new_lines[j - 1]))
            j -= 1
        else:
            ops.append(EditOp.removed(old_lines[i - 1]))
            i -= 1

    ops.reverse()
    return ops


def _set_diff(old_lines: Sequence[str], new_lines: Sequence[str]) -> List[EditOp]:
    """
    Approximate edit script from line membership alone.

    Walks all old lines in order, then the new lines that never occur in
    the old text. Line positions and repeat counts are ignored.
    """
    old_set = set(old_lines)
    new_set = set(new_lines)

    ops = []
    for line in old_lines:
        if line in new_set:
            ops.append(EditOp.equal(line))
        else:
            ops.append(EditOp.removed(line))

    for line in new_lines:
        if line not in old_set:
            ops.append(EditOp.added(line))

    return ops


def diff_lines(
    old_lines: Sequence[str],
    new_lines: Sequence[str]
) -> Tuple[List[EditOp], DiffAlgorithm]:
    """
    Compute the edit script for two line sequences.

    No character budget is applied here; see compute_line_diff.

    Returns:
        Tuple of (ops, algorithm used)
    """
    algorithm = select_algorithm(len(old_lines), len(new_lines))
    if algorithm is DiffAlgorithm.EXACT:
        return _lcs_diff(old_lines, new_lines), algorithm
    return _set_diff(old_lines, new_lines), algorithm


def compute_line_diff(old_text: str, new_text: str) -> DiffResult:
    """
    Diff two texts line by line and align the result into two columns.

    Args:
        old_text: Older snapshot text (left column)
        new_text: Newer snapshot text (right column)

    Returns:
        DiffResult with equal-length columns, counts and truncation flag
    """
    old_text, new_text, truncated = truncate_inputs(old_text, new_text)
    if truncated:
        logger.info(f"Diff input truncated to {CHAR_LIMIT} characters")

    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)

    ops, algorithm = diff_lines(old_lines, new_lines)
    result = build_columns(ops, truncated)
    logger.debug(
        f"Line diff: old={len(old_lines)}, new={len(new_lines)}, "
        f"algorithm={algorithm.value}, rows={result.row_count}",
        algorithm=algorithm.value,
        truncated=truncated
    )

    return result


if __name__ == '__main__':
    # Demo
    old_jd = """Senior Backend Engineer
Remote (US)
- 5+ years of Python
- Experience with PostgreSQL
Salary: $150k-$180k"""

    new_jd = """Senior Backend Engineer
Hybrid (NYC)
- 5+ years of Python
- Experience with PostgreSQL
- Familiarity with Kubernetes
Salary: $150k-$180k"""

    result = compute_line_diff(old_jd, new_jd)
    print(result.summary()['message'])
    for left, right in zip(result.left_column, result.right_column):
        print(f"{left.kind:>8} {left.text[:30]:<32}| {right.kind:>8} {right.text[:30]}")
