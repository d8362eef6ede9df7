"""Progress display for archive runs."""
from __future__ import annotations

import sys
import time

from .models import ArticleOutcome, ArticleState

IN_COLAB = 'google.colab' in sys.modules

if IN_COLAB:
    from tqdm.notebook import tqdm
else:
    from tqdm import tqdm

_STATUS_ICONS = {
    ArticleState.CONVERTED_AND_SAVED: "✅",
    ArticleState.SKIPPED_BY_TITLE: "⏭️",
    ArticleState.SKIPPED_BY_FILENAME: "⏭️",
    ArticleState.FAILED: "❌",
}


class CLIProgressTracker:
    """tqdm progress bar ticking once per processed article."""

    def __init__(self, min_refresh_interval: float = 0.5):
        self.pbar = None
        self.total = 0
        self.current = 0
        self.saved = 0
        self.skipped = 0
        self.failed = 0
        self.min_refresh_interval = min_refresh_interval
        self.last_update_time = 0.0

    def start(self, total: int):
        self.total = total
        self.current = 0
        self.last_update_time = time.time()
        if total > 0:
            self.pbar = tqdm(
                total=total,
                desc="Archiving articles",
                unit="article",
                bar_format="{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]",
                file=sys.stdout,
                mininterval=self.min_refresh_interval,
            )

    def __call__(self, outcome: ArticleOutcome):
        self.update(outcome)

    def update(self, outcome: ArticleOutcome):
        self.current += 1
        if outcome.state is ArticleState.CONVERTED_AND_SAVED:
            self.saved += 1
        elif outcome.state.is_skip:
            self.skipped += 1
        elif outcome.state is ArticleState.FAILED:
            self.failed += 1

        if not self.pbar:
            return
        self.pbar.update(1)

        # Throttle postfix refreshes; the final tick always refreshes.
        now = time.time()
        if now - self.last_update_time < self.min_refresh_interval and self.current < self.total:
            return
        self.last_update_time = now
        label = outcome.filename or outcome.ref.hint_title
        self.pbar.set_postfix(
            {
                "saved": self.saved,
                "skipped": self.skipped,
                "failed": self.failed,
                "last": f"{_STATUS_ICONS.get(outcome.state, '')} {label[:25]}",
            },
            refresh=True,
        )

    def close(self):
        if self.pbar:
            self.pbar.close()
            self.pbar = None
