from __future__ import annotations

from unittest.mock import MagicMock

from raci_import.services import progress
from raci_import.services.progress import ProgressTracker


def test_no_bar_without_tty(monkeypatch):
    monkeypatch.setattr(progress, "is_tty_enabled", lambda: False)
    fake_tqdm = MagicMock()
    monkeypatch.setattr(progress, "tqdm", fake_tqdm)

    with ProgressTracker(3) as tracker:
        tracker.advance("Alice")
        tracker.advance()
        tracker.set_postfix(created=1)

    assert tracker.current == 2
    assert tracker.pbar is None
    fake_tqdm.assert_not_called()


def test_bar_updates_on_tty(monkeypatch):
    monkeypatch.setattr(progress, "is_tty_enabled", lambda: True)
    bar = MagicMock()
    fake_tqdm = MagicMock(return_value=bar)
    monkeypatch.setattr(progress, "tqdm", fake_tqdm)

    tracker = ProgressTracker(2, description="Committing projects", unit="project")
    tracker.advance("Apollo")
    tracker.set_postfix(created=1)
    tracker.close()

    kwargs = fake_tqdm.call_args.kwargs
    assert kwargs["total"] == 2
    assert kwargs["unit"] == "project"
    bar.set_description.assert_called_once_with("Committing projects (Apollo)")
    bar.update.assert_called_once_with(1)
    bar.set_postfix.assert_called_once_with(created=1)
    bar.close.assert_called_once()
    assert tracker.pbar is None

    # closing twice is harmless
    tracker.close()
    bar.close.assert_called_once()
