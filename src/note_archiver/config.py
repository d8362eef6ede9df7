"""Run configuration, resolved once at startup and passed to every component."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .errors import SetupFailure

NOTE_HOST = "https://note.com"
DEFAULT_AUTHOR = "kuromoka"
LOAD_MORE_TEXT = "もっとみる"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class ArchiveConfig:
    """Settings for one archive run.

    ``base_url`` is the author's listing page; article links live under
    ``{base_url}/n/``. ``output_dir`` is made absolute on construction so later
    changes of the working directory do not move the archive.
    """

    base_url: str = f"{NOTE_HOST}/{DEFAULT_AUTHOR}"
    output_dir: str = "articles"
    browser: str = "chromium"
    headless: bool = True
    workers: int = 1
    settle_ms: int = 3000
    max_load_more: int = 500
    navigation_timeout_ms: int = 60000
    article_wait_ms: int = 10000
    load_more_text: str = LOAD_MORE_TEXT
    title_skip: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "output_dir", os.path.abspath(self.output_dir))
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.browser not in ("chromium", "firefox"):
            raise ValueError(f"unsupported browser: {self.browser}")

    @classmethod
    def for_author(cls, author: str, **kwargs) -> "ArchiveConfig":
        return cls(base_url=f"{NOTE_HOST}/{author.strip('/')}", **kwargs)

    @property
    def article_prefix(self) -> str:
        return f"{self.base_url}/n/"

    def with_overrides(self, **kwargs) -> "ArchiveConfig":
        return replace(self, **kwargs)

    def ensure_output_dir(self) -> str:
        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise SetupFailure(f"Cannot create output directory {self.output_dir}: {e}") from e
        return self.output_dir
