"""Exceptions raised by the archiver.

Only setup problems are fatal. Failures of a single article are caught by the
processor and recorded on its outcome instead of being raised.
"""
from __future__ import annotations


class ArchiverError(Exception):
    """Base class for archiver errors."""


class SetupFailure(ArchiverError):
    """The run cannot start: output directory, browser or listing page unusable."""


class PaginationLimitExceeded(SetupFailure):
    """The "load more" button was still present after the maximum number of clicks."""

    def __init__(self, clicks: int, trigger_text: str):
        self.clicks = clicks
        self.trigger_text = trigger_text
        super().__init__(
            f"'{trigger_text}' button still present after {clicks} clicks. "
            "The listing page may be stuck; raise --max-load-more if the author has that many articles."
        )
