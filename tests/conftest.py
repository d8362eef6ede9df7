"""Shared fixtures: sample note.com markup and an in-memory stand-in for a Playwright page."""
from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from note_archiver.archive import ArchiveIndex
from note_archiver.config import ArchiveConfig

AUTHOR_URL = "https://note.com/kuromoka"


def article_html(
    title: Optional[str] = "Hello",
    date: Optional[str] = "2023年5月3日",
    body: Optional[str] = "<p>Body text</p>",
    title_class: str = "o-noteContentHeader__title",
    body_class: str = "o-noteContentText",
    with_article: bool = True,
) -> str:
    parts = []
    if title is not None:
        parts.append(f'<h1 class="{title_class}">{title}</h1>')
    if date is not None:
        parts.append(f"<time>{date}</time>")
    if body is not None:
        parts.append(f'<div class="{body_class}">{body}</div>')
    inner = "".join(parts)
    wrapped = f"<article>{inner}</article>" if with_article else f"<main>{inner}</main>"
    return f"<html><head><title>note</title></head><body>{wrapped}</body></html>"


def listing_html(links: List[tuple]) -> str:
    anchors = "".join(f'<a href="{href}">{text}</a>' for href, text in links)
    return f"<html><body><div class='m-largeNoteWrapper'>{anchors}</div></body></html>"


class FakeLocator:
    """Matches only visible buttons whose text contains the page's button text."""

    def __init__(self, page: "FakePage", selector: str, has_text: Optional[str]):
        self.page = page
        self.matches = selector == "button:visible" and has_text is not None and has_text in page.button_text

    @property
    def first(self) -> "FakeLocator":
        return self

    async def count(self) -> int:
        return 1 if self.matches and self.page.load_more_batches else 0

    async def scroll_into_view_if_needed(self):
        self.page.scrolls += 1

    async def click(self):
        self.page.clicks += 1
        self.page.listing_links.extend(self.page.load_more_batches.pop(0))
        self.page.html = listing_html(self.page.listing_links)


class FakePage:
    """Serves canned HTML per URL; URLs in ``failures`` raise on navigation."""

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, Exception]] = None,
        listing_links: Optional[List[tuple]] = None,
        load_more_batches: Optional[List[List[tuple]]] = None,
        button_text: str = "もっとみる",
    ):
        self.pages = dict(pages or {})
        self.failures = dict(failures or {})
        self.listing_links = list(listing_links or [])
        self.load_more_batches = list(load_more_batches or [])
        self.url = "about:blank"
        self.html = ""
        self.visited: List[str] = []
        self.waits: List[int] = []
        self.clicks = 0
        self.scrolls = 0
        self.button_text = button_text
        self.locator_calls: List[tuple] = []
        if listing_links is not None or load_more_batches:
            self.pages.setdefault(AUTHOR_URL, listing_html(self.listing_links))

    async def goto(self, url, wait_until=None, timeout=None):
        self.visited.append(url)
        if url in self.failures:
            raise self.failures[url]
        self.url = url
        self.html = self.pages[url]

    async def wait_for_selector(self, selector, timeout=None):
        if f"<{selector}" not in self.html:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def wait_for_timeout(self, ms):
        self.waits.append(ms)

    async def content(self) -> str:
        return self.html

    def locator(self, selector, has_text=None):
        self.locator_calls.append((selector, has_text))
        return FakeLocator(self, selector, has_text)


@pytest.fixture
def config(tmp_path):
    return ArchiveConfig(base_url=AUTHOR_URL, output_dir=str(tmp_path / "articles"), settle_ms=10)


@pytest.fixture
def output_dir(config):
    return config.ensure_output_dir()


@pytest.fixture
def index(output_dir):
    return ArchiveIndex(output_dir)
