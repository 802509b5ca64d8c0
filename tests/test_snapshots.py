"""
Tests for Snapshot Comparison
=============================
Version selection over a job card's JD snapshot history.
"""

from datetime import datetime

import pytest

from config_logging import AppConfig, StructuredLogger, ValidationError
from snapshot_diff import snapshots as snapshots_module
from snapshot_diff.models import JdSnapshot
from snapshot_diff.snapshots import can_compare, select_pair, compare_snapshots


class TestCanCompare:

    def test_single_snapshot_cannot_be_compared(self):
        assert can_compare([JdSnapshot(1, "2026-01-01", "Software Engineer at Acme")]) is False

    def test_no_snapshots(self):
        assert can_compare([]) is False

    def test_two_snapshots(self, snapshot_history):
        assert can_compare(snapshot_history[:2]) is True


class TestSelectPair:

    def test_defaults_to_latest_two(self, snapshot_history):
        old, new = select_pair(snapshot_history)
        assert (old.version, new.version) == (2, 3)

    def test_input_order_does_not_matter(self, snapshot_history):
        old, new = select_pair(list(reversed(snapshot_history)))
        assert (old.version, new.version) == (2, 3)

    def test_new_version_pairs_with_previous(self, snapshot_history):
        old, new = select_pair(snapshot_history, new_version=2)
        assert (old.version, new.version) == (1, 2)

    def test_old_version_pairs_with_latest(self, snapshot_history):
        old, new = select_pair(snapshot_history, old_version=1)
        assert (old.version, new.version) == (1, 3)

    def test_explicit_pair(self, snapshot_history):
        old, new = select_pair(snapshot_history, old_version=1, new_version=2)
        assert (old.version, new.version) == (1, 2)

    def test_reversed_pair_is_swapped(self, snapshot_history):
        old, new = select_pair(snapshot_history, old_version=3, new_version=1)
        assert (old.version, new.version) == (1, 3)

    def test_same_version_rejected(self, snapshot_history):
        with pytest.raises(ValidationError):
            select_pair(snapshot_history, old_version=2, new_version=2)

    def test_unknown_version_rejected(self, snapshot_history):
        with pytest.raises(ValidationError) as exc_info:
            select_pair(snapshot_history, new_version=9)
        assert exc_info.value.details['field'] == 'new_version'

    def test_oldest_has_no_prior_version(self, snapshot_history):
        with pytest.raises(ValidationError):
            select_pair(snapshot_history, new_version=1)

    def test_single_snapshot_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            select_pair([JdSnapshot(1, "2026-01-01", "JD text")])
        assert exc_info.value.status_code == 400


class TestCompareSnapshots:

    def test_latest_change(self, snapshot_history):
        comparison = compare_snapshots(snapshot_history)
        assert comparison.old_snapshot.version == 2
        assert comparison.new_snapshot.version == 3
        assert comparison.diff.added_count == 1
        assert comparison.diff.removed_count == 0
        assert comparison.diff.right_column[-1].text == "Kubernetes"

    def test_first_change(self, snapshot_history):
        comparison = compare_snapshots(snapshot_history, old_version=1, new_version=2)
        assert comparison.diff.removed_count == 1
        assert comparison.diff.added_count == 1

    def test_to_dict_headers(self):
        snapshots = [
            JdSnapshot(1, datetime(2026, 1, 5, 12, 30), "a"),
            JdSnapshot(2, "2026-01-06T08:00:00", "b"),
        ]
        data = compare_snapshots(snapshots).to_dict()
        assert data['old'] == {'version': 1, 'captured_at': "2026-01-05T12:30:00"}
        assert data['new'] == {'version': 2, 'captured_at': "2026-01-06T08:00:00"}
        assert data['diff']['summary']['message'] == "+1 additions, -1 removals"


class TestCompareLogging:
    """compare_snapshots logs the operation and whether anything changed."""

    def _file_logger(self, tmp_path, monkeypatch):
        config = AppConfig(log_dir=tmp_path, log_to_file=True, log_to_console=False,
                           log_format='text', log_level='DEBUG')
        file_logger = StructuredLogger('snapshot_diff.snapshots.logtest', config)
        monkeypatch.setattr(snapshots_module, 'logger', file_logger)
        return file_logger

    def _log_text(self, tmp_path, file_logger):
        for handler in file_logger.logger.handlers:
            handler.flush()
        return (tmp_path / 'snapshot_diff.snapshots.logtest.log').read_text(encoding='utf-8')

    def test_operation_timed(self, tmp_path, monkeypatch, snapshot_history):
        file_logger = self._file_logger(tmp_path, monkeypatch)
        compare_snapshots(snapshot_history)
        content = self._log_text(tmp_path, file_logger)
        assert "compare_snapshots started" in content
        assert "compare_snapshots completed" in content
        assert "Compared JD snapshot v2 -> v3: +1 -0" in content

    def test_identical_versions_logged_as_unchanged(self, tmp_path, monkeypatch):
        file_logger = self._file_logger(tmp_path, monkeypatch)
        snapshots = [
            JdSnapshot(1, "2026-01-01", "Engineer\nRemote"),
            JdSnapshot(2, "2026-01-02", "Engineer\nRemote"),
        ]
        comparison = compare_snapshots(snapshots)
        assert comparison.diff.has_changes is False
        assert "JD snapshot v1 -> v2: no changes" in self._log_text(tmp_path, file_logger)
