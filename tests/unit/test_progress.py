from __future__ import annotations

from unittest.mock import Mock, patch

from sortable_table.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        with patch('sortable_table.services.progress.is_tty_enabled', return_value=True), \
             patch('sortable_table.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(3, description="Tables")

            assert tracker.total_tables == 3
            assert tracker.current_table == 0
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=3,
                desc="Tables",
                unit="table",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('sortable_table.services.progress.is_tty_enabled', return_value=False), \
             patch('sortable_table.services.progress.tqdm') as mock_tqdm:
            tracker = ProgressTracker(3)

            assert tracker.enabled is False
            assert tracker.pbar is None
            mock_tqdm.assert_not_called()

    def test_table_cycle_with_tty_enabled(self):
        mock_pbar = Mock()
        with patch('sortable_table.services.progress.is_tty_enabled', return_value=True), \
             patch('sortable_table.services.progress.tqdm', return_value=mock_pbar):
            tracker = ProgressTracker(2)

            tracker.start_table("#1")
            mock_pbar.set_description.assert_called_with("Indexing tables (#1)")
            tracker.finish_table(rows=40)

            assert tracker.current_table == 1
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_postfix.assert_called_once_with(rows=40)
            mock_pbar.set_description.assert_called_with("Indexing tables")

    def test_table_cycle_with_tty_disabled(self):
        with patch('sortable_table.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(1)
            tracker.start_table("#1")
            tracker.finish_table(rows=3)
            tracker.close()
            assert tracker.current_table == 1

    def test_context_manager_closes_bar(self):
        mock_pbar = Mock()
        with patch('sortable_table.services.progress.is_tty_enabled', return_value=True), \
             patch('sortable_table.services.progress.tqdm', return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                tracker.start_table("#1")

            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
