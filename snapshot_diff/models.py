"""
Snapshot Diff Models
====================
Data classes for line diffs and snapshot comparisons.

All values are frozen: a result is built once per call and handed to the
renderer as-is.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Tuple, Union, Any

# Edit operation kinds
EQUAL = 'equal'
REMOVED = 'removed'
ADDED = 'added'

# Column-only placeholder kind
EMPTY = 'empty'

TRUNCATION_NOTICE = "Diff truncated for performance (first 20k chars shown)."


@dataclass(frozen=True)
class EditOp:
    """
    One line of an edit script.

    Attributes:
        kind: 'equal', 'removed' (old side only) or 'added' (new side only)
        text: The line text, without its newline
    """
    kind: str
    text: str

    @classmethod
    def equal(cls, text: str) -> 'EditOp':
        return cls(EQUAL, text)

    @classmethod
    def removed(cls, text: str) -> 'EditOp':
        return cls(REMOVED, text)

    @classmethod
    def added(cls, text: str) -> 'EditOp':
        return cls(ADDED, text)


@dataclass(frozen=True)
class ColumnCell:
    """
    A single cell in one column of the side-by-side view.

    'removed' cells only appear in the left column and 'added' cells only
    in the right one. 'empty' cells are blank placeholders that keep both
    columns row-aligned.
    """
    kind: str
    text: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {'type': self.kind, 'text': self.text}


EMPTY_CELL = ColumnCell(EMPTY, "")


@dataclass(frozen=True)
class DiffResult:
    """
    Aligned two-column diff.

    Attributes:
        left_column: Cells for the old text ('equal', 'removed', 'empty')
        right_column: Cells for the new text ('equal', 'added', 'empty')
        added_count: Number of added lines
        removed_count: Number of removed lines
        truncated: Whether either input was cut to the character budget
    """
    left_column: Tuple[ColumnCell, ...] = ()
    right_column: Tuple[ColumnCell, ...] = ()
    added_count: int = 0
    removed_count: int = 0
    truncated: bool = False

    @property
    def row_count(self) -> int:
        return len(self.left_column)

    @property
    def has_changes(self) -> bool:
        return bool(self.added_count or self.removed_count)

    def summary(self) -> Dict[str, Any]:
        """Data for the summary banner above the two columns."""
        message = f"+{self.added_count} additions, -{self.removed_count} removals"
        if self.truncated:
            message = f"{message}. {TRUNCATION_NOTICE}"
        return {
            'added': self.added_count,
            'removed': self.removed_count,
            'truncated': self.truncated,
            'message': message,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'left_column': [c.to_dict() for c in self.left_column],
            'right_column': [c.to_dict() for c in self.right_column],
            'added_count': self.added_count,
            'removed_count': self.removed_count,
            'truncated': self.truncated,
            'summary': self.summary(),
        }


@dataclass(frozen=True)
class JdSnapshot:
    """
    One captured version of a job description.

    Attributes:
        version: Monotonic version number within a job card
        captured_at: Capture time (datetime or ISO string)
        snapshot_text: Raw JD text
    """
    version: int
    captured_at: Union[datetime, str]
    snapshot_text: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JdSnapshot':
        return cls(
            version=data['version'],
            captured_at=data.get('captured_at', ''),
            snapshot_text=data['snapshot_text'],
        )

    def header(self) -> Dict[str, Any]:
        """Column header data: version and capture time, no text."""
        captured = self.captured_at
        if isinstance(captured, datetime):
            captured = captured.isoformat()
        return {'version': self.version, 'captured_at': captured}


@dataclass(frozen=True)
class SnapshotComparison:
    """Diff between two versions of the same job description."""
    old_snapshot: JdSnapshot
    new_snapshot: JdSnapshot
    diff: DiffResult = field(default_factory=DiffResult)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'old': self.old_snapshot.header(),
            'new': self.new_snapshot.header(),
            'diff': self.diff.to_dict(),
        }

