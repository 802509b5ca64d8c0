"""
JD Snapshot Diff Module v1.0.0
==============================
Side-by-side comparison of job description snapshot versions.

Features:
- Line-level edit scripts (exact LCS, set-based fallback for large inputs)
- Row-aligned left/right columns with placeholder rows
- Version selection over a job card's snapshot history
- Summary banner data (additions, removals, truncation notice)
"""

from .routes import snapshot_diff_blueprint
from .differ import (
    CHAR_LIMIT,
    MAX_LINES,
    DiffAlgorithm,
    compute_line_diff,
    diff_lines,
)
from .aligner import build_columns
from .snapshots import can_compare, select_pair, compare_snapshots
from .models import (
    EditOp,
    ColumnCell,
    DiffResult,
    JdSnapshot,
    SnapshotComparison,
)

__version__ = "1.0.0"
__all__ = [
    'snapshot_diff_blueprint',
    'CHAR_LIMIT',
    'MAX_LINES',
    'DiffAlgorithm',
    'compute_line_diff',
    'diff_lines',
    'build_columns',
    'can_compare',
    'select_pair',
    'compare_snapshots',
    'EditOp',
    'ColumnCell',
    'DiffResult',
    'JdSnapshot',
    'SnapshotComparison',
]
