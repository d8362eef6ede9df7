"""Tests for the CLI progress tracker."""

from note_archiver.models import ArticleOutcome, ArticleRef, ArticleState
from note_archiver.progress import CLIProgressTracker


def outcome(state, filename=None):
    return ArticleOutcome(ref=ArticleRef("https://note.com/kuromoka/n/n1", "Hint"), state=state, filename=filename)


def test_counts_states():
    tracker = CLIProgressTracker(min_refresh_interval=0)
    tracker.start(4)

    tracker(outcome(ArticleState.CONVERTED_AND_SAVED, "20230503_A.md"))
    tracker(outcome(ArticleState.SKIPPED_BY_TITLE))
    tracker(outcome(ArticleState.SKIPPED_BY_FILENAME, "20230503_B.md"))
    tracker(outcome(ArticleState.FAILED))

    assert (tracker.current, tracker.saved, tracker.skipped, tracker.failed) == (4, 1, 2, 1)
    assert tracker.pbar.n == 4
    tracker.close()
    assert tracker.pbar is None


def test_no_bar_for_empty_run():
    tracker = CLIProgressTracker()
    tracker.start(0)

    tracker.update(outcome(ArticleState.FAILED))

    assert tracker.pbar is None
    assert tracker.failed == 1
    tracker.close()
