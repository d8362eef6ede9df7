"""Metadata extraction from a rendered article page.

note.com has shipped several markup generations for the same article page.
Title and body are therefore located with ordered lists of matchers: each
matcher is tried in turn and the first one that yields non-empty output wins.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

from .models import DEFAULT_DATE_STAMP, DEFAULT_TITLE, ArticleRecord

logger = logging.getLogger(__name__)

Matcher = Callable[[BeautifulSoup], Optional[Tag]]

DATE_PATTERN = re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日", re.ASCII)


def css(selector: str) -> Matcher:
    """Matcher returning the first element for a CSS selector."""

    def match(soup: BeautifulSoup) -> Optional[Tag]:
        return soup.select_one(selector)

    match.__name__ = f"css({selector!r})"
    return match


TITLE_MATCHERS: List[Matcher] = [
    css("h1.o-noteContentHeader__title"),
    css("h1.m-noteHeader__title"),
    css(".fn-note-title"),
]

CONTENT_MATCHERS: List[Matcher] = [
    css("div.o-noteContentText"),
    css("div.m-noteBody"),
    css(".fn-note-body"),
]


def _first_non_empty(soup: BeautifulSoup, matchers: Iterable[Matcher], read: Callable[[Tag], str]) -> str:
    for matcher in matchers:
        element = matcher(soup)
        if element is None:
            continue
        value = read(element)
        if value:
            logger.debug(f"Matched {getattr(matcher, '__name__', matcher)}")
            return value
    return ""


def extract_title(soup: BeautifulSoup, matchers: Iterable[Matcher] = TITLE_MATCHERS) -> str:
    return _first_non_empty(soup, matchers, lambda el: el.get_text().strip()) or DEFAULT_TITLE


def extract_content(soup: BeautifulSoup, matchers: Iterable[Matcher] = CONTENT_MATCHERS) -> str:
    return _first_non_empty(soup, matchers, lambda el: el.decode_contents())


def parse_date_stamp(text: str) -> str:
    """Turn the first ``2023年5月3日`` style date in ``text`` into ``20230503``."""
    match = DATE_PATTERN.search(text)
    if not match:
        return DEFAULT_DATE_STAMP
    year, month, day = match.groups()
    return f"{year}{month.zfill(2)}{day.zfill(2)}"


def visible_text(soup: BeautifulSoup) -> str:
    """Text of the page body without script and style contents.

    Text nodes are concatenated without separators, like ``innerText`` does for
    inline elements, so a date split over several spans stays contiguous.
    """
    body = soup.body or soup
    parts = []
    for string in body.find_all(string=True):
        if string.parent is not None and string.parent.name in ("script", "style", "noscript", "template"):
            continue
        parts.append(str(string))
    return "".join(parts)


def extract_article(
    html: str,
    title_matchers: Iterable[Matcher] = TITLE_MATCHERS,
    content_matchers: Iterable[Matcher] = CONTENT_MATCHERS,
) -> ArticleRecord:
    """Build an ArticleRecord from the HTML of a rendered article page.

    Missing pieces fall back to their defaults rather than raising: the title
    becomes ``Untitled``, the date ``00000000`` and the content an empty string.
    """
    soup = BeautifulSoup(html, "html.parser")
    return ArticleRecord(
        title=extract_title(soup, title_matchers),
        date_stamp=parse_date_stamp(visible_text(soup)),
        content_markup=extract_content(soup, content_matchers),
    )
