"""Article discovery on an author's listing page and target selection.

The listing page only shows the newest articles until its "load more"
button (``もっとみる``) is clicked, so discovery first clicks that button until
it is gone and then collects every article link from the expanded page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .config import ArchiveConfig
from .errors import PaginationLimitExceeded, SetupFailure
from .models import DEFAULT_TITLE, ArticleRef

logger = logging.getLogger(__name__)


async def load_all_articles(
    page: Page,
    trigger_text: str,
    settle_ms: int = 3000,
    max_clicks: int = 500,
) -> int:
    """Click the visible "load more" button until it disappears.

    Returns the number of clicks. Raises PaginationLimitExceeded if the button
    is still there after ``max_clicks`` clicks.
    """
    clicks = 0
    while True:
        button = page.locator("button:visible", has_text=trigger_text).first
        if await button.count() == 0:
            break
        if clicks >= max_clicks:
            raise PaginationLimitExceeded(clicks, trigger_text)

        logger.info(f'Clicking "{trigger_text}" ({clicks + 1})...')
        await button.scroll_into_view_if_needed()
        await button.click()
        clicks += 1
        await page.wait_for_timeout(settle_ms)

    logger.info(f"All articles loaded after {clicks} clicks")
    return clicks


def _hint_title(anchor) -> str:
    for attr in ("aria-label", "title"):
        value = anchor.get(attr)
        if value:
            return value
    return anchor.get_text().strip() or DEFAULT_TITLE


def collect_article_links(html: str, page_url: str, article_prefix: str) -> List[ArticleRef]:
    """Unique article links under ``article_prefix``, in the order they first appear."""
    soup = BeautifulSoup(html, "html.parser")
    seen = set()
    refs: List[ArticleRef] = []
    for anchor in soup.find_all("a", href=True):
        url = urljoin(page_url, anchor["href"])
        if not url.startswith(article_prefix) or url in seen:
            continue
        seen.add(url)
        refs.append(ArticleRef(url=url, hint_title=_hint_title(anchor)))
    return refs


async def discover_articles(page: Page, config: ArchiveConfig) -> List[ArticleRef]:
    """Load the author's listing page, expand it fully and collect article links."""
    logger.info(f"Navigating to {config.base_url}...")
    try:
        await page.goto(config.base_url, wait_until="networkidle", timeout=config.navigation_timeout_ms)
    except PlaywrightError as e:
        raise SetupFailure(f"Cannot load listing page {config.base_url}: {e}") from e

    logger.info("Loading articles...")
    await load_all_articles(
        page,
        trigger_text=config.load_more_text,
        settle_ms=config.settle_ms,
        max_clicks=config.max_load_more,
    )

    html = await page.content()
    refs = collect_article_links(html, page.url, config.article_prefix)
    logger.info(f"Found {len(refs)} articles on {config.base_url}")
    return refs


@dataclass(frozen=True)
class AllDiscovered:
    """Archive every article on the listing page."""


@dataclass(frozen=True)
class QueryFiltered:
    """Archive listing-page articles whose hint title or URL contains a query term."""

    queries: Tuple[str, ...]


@dataclass(frozen=True)
class Explicit:
    """Archive exactly these URLs; the listing page is never loaded."""

    urls: Tuple[str, ...]


TargetSelection = Union[AllDiscovered, QueryFiltered, Explicit]


def selection_from_args(urls: Iterable[str] = (), terms: Iterable[str] = ()) -> TargetSelection:
    """Classify command-line input.

    ``--url`` values and terms starting with ``http`` are explicit targets,
    any other term is a query. Explicit targets take precedence over queries.
    """
    explicit = list(urls)
    queries = []
    for term in terms:
        if term.startswith("http"):
            explicit.append(term)
        else:
            queries.append(term)

    if explicit:
        if queries:
            logger.warning(f"Ignoring query terms {queries} because explicit URLs were given")
        return Explicit(tuple(explicit))
    if queries:
        return QueryFiltered(tuple(queries))
    return AllDiscovered()


def filter_by_queries(refs: Sequence[ArticleRef], queries: Sequence[str]) -> List[ArticleRef]:
    return [ref for ref in refs if any(q in ref.hint_title or q in ref.url for q in queries)]


async def resolve_targets(selection: TargetSelection, page: Page, config: ArchiveConfig) -> List[ArticleRef]:
    if isinstance(selection, Explicit):
        logger.info(f"Processing {len(selection.urls)} specified URLs...")
        return [ArticleRef.explicit(url) for url in selection.urls]

    refs = await discover_articles(page, config)
    if isinstance(selection, QueryFiltered):
        refs = filter_by_queries(refs, selection.queries)
        logger.info(f"Filtered to {len(refs)} articles matching {list(selection.queries)}")
    return refs
