"""
Snapshot Comparison
===================
Picks two versions from a job card's JD snapshot history and diffs them.

Snapshots are usually handed over newest first, but nothing here relies on
the input order.
"""

from typing import Optional, Sequence, Tuple

from config_logging import get_logger, ValidationError

from .differ import compute_line_diff
from .models import JdSnapshot, SnapshotComparison

logger = get_logger('snapshot_diff.snapshots')


def can_compare(snapshots: Sequence[JdSnapshot]) -> bool:
    """A diff needs a prior version to compare against."""
    return len(snapshots) >= 2


def _by_version(snapshots: Sequence[JdSnapshot], version: int, field: str) -> JdSnapshot:
    for snapshot in snapshots:
        if snapshot.version == version:
            return snapshot
    raise ValidationError(f"Snapshot version {version} not found", field=field)


def select_pair(
    snapshots: Sequence[JdSnapshot],
    old_version: Optional[int] = None,
    new_version: Optional[int] = None
) -> Tuple[JdSnapshot, JdSnapshot]:
    """
    Choose the (older, newer) snapshots to compare.

    Without explicit versions the two most recent versions are used. With
    only new_version, the closest earlier version is its partner. With only
    old_version, the latest version is its partner.

    Raises:
        ValidationError: fewer than two snapshots, unknown or identical
            versions, or nothing older than new_version
    """
    if not can_compare(snapshots):
        raise ValidationError(
            f"At least 2 snapshots are needed for comparison. Found: {len(snapshots)}",
            field='snapshots'
        )

    ordered = sorted(snapshots, key=lambda s: s.version, reverse=True)

    if new_version is not None:
        new = _by_version(ordered, new_version, 'new_version')
    else:
        new = ordered[0]

    if old_version is not None:
        old = _by_version(ordered, old_version, 'old_version')
    else:
        older = [s for s in ordered if s.version < new.version]
        if not older:
            raise ValidationError(
                f"No prior version to compare with version {new.version}",
                field='new_version'
            )
        old = older[0]

    if old.version == new.version:
        raise ValidationError("Cannot compare a snapshot with itself", field='old_version')

    if old.version > new.version:
        old, new = new, old

    return old, new


def compare_snapshots(
    snapshots: Sequence[JdSnapshot],
    old_version: Optional[int] = None,
    new_version: Optional[int] = None
) -> SnapshotComparison:
    """
    Diff two versions of a job description.

    Args:
        snapshots: All snapshots of one job card
        old_version: Version for the left column (optional)
        new_version: Version for the right column (optional)

    Returns:
        SnapshotComparison with both headers and the aligned diff
    """
    old, new = select_pair(snapshots, old_version, new_version)

    with logger.log_operation('compare_snapshots', old_version=old.version,
                              new_version=new.version):
        diff = compute_line_diff(old.snapshot_text, new.snapshot_text)

    if diff.has_changes:
        logger.info(
            f"Compared JD snapshot v{old.version} -> v{new.version}: "
            f"+{diff.added_count} -{diff.removed_count}"
            + (" (truncated)" if diff.truncated else "")
        )
    else:
        logger.info(f"JD snapshot v{old.version} -> v{new.version}: no changes")

    return SnapshotComparison(old_snapshot=old, new_snapshot=new, diff=diff)
