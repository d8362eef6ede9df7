"""Data types passed between the discovery, extraction and archive stages."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

# Hint title given to caller-supplied URLs; disables the pre-fetch title skip.
EXPLICIT_URL_HINT = "URL Target"

DEFAULT_TITLE = "Untitled"
DEFAULT_DATE_STAMP = "00000000"

_UNSAFE_FILENAME_CHARS = str.maketrans({c: "_" for c in '\\/:*?"<>|'})


def sanitize_title(title: str) -> str:
    """Replace characters that are not allowed in file names with ``_``."""
    return title.translate(_UNSAFE_FILENAME_CHARS)


@dataclass(frozen=True)
class ArticleRef:
    """Pointer to one article, found on the listing page or given by the caller."""

    url: str
    hint_title: str = DEFAULT_TITLE

    @classmethod
    def explicit(cls, url: str) -> "ArticleRef":
        return cls(url=url, hint_title=EXPLICIT_URL_HINT)

    @property
    def is_explicit(self) -> bool:
        return self.hint_title == EXPLICIT_URL_HINT


@dataclass(frozen=True)
class ArticleRecord:
    """Metadata and body markup extracted from an article's detail page."""

    title: str = DEFAULT_TITLE
    date_stamp: str = DEFAULT_DATE_STAMP
    content_markup: str = ""

    @property
    def content_empty(self) -> bool:
        return self.content_markup == ""

    @property
    def filename(self) -> str:
        return f"{self.date_stamp}_{sanitize_title(self.title)}.md"


class ArticleState(enum.Enum):
    PENDING = "pending"
    SKIPPED_BY_TITLE = "skipped_by_title"
    VISITING = "visiting"
    EXTRACTED = "extracted"
    SKIPPED_BY_FILENAME = "skipped_by_filename"
    CONVERTED_AND_SAVED = "saved"
    FAILED = "failed"

    @property
    def is_skip(self) -> bool:
        return self in (ArticleState.SKIPPED_BY_TITLE, ArticleState.SKIPPED_BY_FILENAME)


@dataclass
class ArticleOutcome:
    """Terminal state of one target after the processor is done with it."""

    ref: ArticleRef
    state: ArticleState = ArticleState.PENDING
    filename: Optional[str] = None
    error: Optional[str] = None
    content_empty: bool = False


@dataclass
class RunSummary:
    outcomes: List[ArticleOutcome] = field(default_factory=list)
    cancelled: bool = False

    def _count(self, *states: ArticleState) -> int:
        return sum(1 for o in self.outcomes if o.state in states)

    @property
    def saved(self) -> int:
        return self._count(ArticleState.CONVERTED_AND_SAVED)

    @property
    def skipped(self) -> int:
        return self._count(ArticleState.SKIPPED_BY_TITLE, ArticleState.SKIPPED_BY_FILENAME)

    @property
    def failed(self) -> int:
        return self._count(ArticleState.FAILED)

    @property
    def pending(self) -> int:
        return self._count(ArticleState.PENDING)

    @property
    def content_empty(self) -> int:
        return sum(1 for o in self.outcomes if o.content_empty)

    @property
    def saved_files(self) -> List[str]:
        return [o.filename for o in self.outcomes if o.state is ArticleState.CONVERTED_AND_SAVED and o.filename]

    def describe(self) -> str:
        text = f"saved {self.saved}, skipped {self.skipped}, failed {self.failed}"
        if self.content_empty:
            text += f" ({self.content_empty} saved without content)"
        if self.cancelled:
            text += f", {self.pending} not processed (cancelled)"
        return text
