from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from delivery_decoder.services.progress import FileRowIndicator, ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    """Test that is_tty_enabled returns sys.stdout.isatty()."""
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        with patch('delivery_decoder.services.progress.is_tty_enabled', return_value=True), \
             patch('delivery_decoder.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(5, description="Test files")

            assert tracker.total_files == 5
            assert tracker.description == "Test files"
            assert tracker.current_file == 0
            assert tracker.enabled is True

            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Test files",
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('delivery_decoder.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(5, description="Test files")

            assert tracker.enabled is False
            assert tracker.pbar is None

    def test_file_lifecycle_updates_bar(self):
        mock_pbar = Mock()

        with patch('delivery_decoder.services.progress.is_tty_enabled', return_value=True), \
             patch('delivery_decoder.services.progress.tqdm', return_value=mock_pbar):

            with ProgressTracker(2, description="Decoding files") as tracker:
                tracker.start_file(Path("/data/deliveries.xlsx"))
                tracker.set_postfix(decoded=3, failed=0)
                tracker.finish_file(success=True)

            assert tracker.current_file == 1
            mock_pbar.set_description.assert_any_call("Decoding files (deliveries.xlsx)")
            mock_pbar.set_postfix.assert_called_once_with(decoded=3, failed=0)
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None

    def test_methods_are_noops_without_tty(self):
        with patch('delivery_decoder.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(1)
            tracker.start_file(Path("a.xlsx"))
            tracker.set_postfix(decoded=1)
            tracker.finish_file()
            tracker.close()
            assert tracker.current_file == 1


class TestFileRowIndicator:

    def test_report_prints_tally_on_tty(self, capsys):
        with patch('delivery_decoder.services.progress.is_tty_enabled', return_value=True):
            FileRowIndicator("deliveries.xlsx").report(3, 3, success=True)
            FileRowIndicator("broken.xlsx").report(1, 3, success=True)
        out = capsys.readouterr().out
        assert "  deliveries.xlsx: 3/3 rows ✓" in out
        assert "  broken.xlsx: 1/3 rows ✗" in out

    def test_report_silent_without_tty(self, capsys):
        with patch('delivery_decoder.services.progress.is_tty_enabled', return_value=False):
            FileRowIndicator("deliveries.xlsx").report(3, 3)
        assert capsys.readouterr().out == ""
