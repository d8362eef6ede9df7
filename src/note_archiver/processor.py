"""Per-article processing: visit, extract, deduplicate, convert and write.

Every target ends in exactly one terminal state. Errors raised while visiting,
extracting or writing one article are logged and recorded as FAILED; they never
stop the remaining articles from being processed.
"""
from __future__ import annotations

import asyncio
import logging
import traceback
from typing import Callable, List, Optional, Sequence

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .archive import ArchiveIndex
from .config import ArchiveConfig
from .converter import Converter, html_to_markdown, render_document
from .extractor import extract_article
from .models import ArticleOutcome, ArticleRecord, ArticleRef, ArticleState, RunSummary, sanitize_title

logger = logging.getLogger(__name__)

ARTICLE_CONTAINER = "article"


class ArticleProcessor:
    def __init__(
        self,
        config: ArchiveConfig,
        index: ArchiveIndex,
        convert: Converter = html_to_markdown,
        on_outcome: Optional[Callable[[ArticleOutcome], None]] = None,
    ):
        self.config = config
        self.index = index
        self.convert = convert
        self.on_outcome = on_outcome
        # Guards the check-then-write on the index and output directory.
        self._write_lock = asyncio.Lock()

    async def _visit(self, page: Page, url: str) -> ArticleRecord:
        logger.info(f"📖 Processing: {url}")
        await page.goto(url, wait_until="networkidle", timeout=self.config.navigation_timeout_ms)
        try:
            await page.wait_for_selector(ARTICLE_CONTAINER, timeout=self.config.article_wait_ms)
        except PlaywrightTimeoutError:
            logger.warning(f"⚠️ Timeout waiting for <{ARTICLE_CONTAINER}> on {url}, extracting anyway")
        return extract_article(await page.content())

    async def process(self, page: Page, ref: ArticleRef) -> ArticleOutcome:
        outcome = ArticleOutcome(ref=ref)

        if self.config.title_skip and not ref.is_explicit:
            safe_title = sanitize_title(ref.hint_title)
            if self.index.exists_by_title_suffix(safe_title):
                logger.info(f"⏭️  Skipping (already exists by title): {safe_title}")
                outcome.state = ArticleState.SKIPPED_BY_TITLE
                return outcome

        try:
            outcome.state = ArticleState.VISITING
            record = await self._visit(page, ref.url)
            outcome.state = ArticleState.EXTRACTED
            outcome.filename = record.filename

            if record.content_empty:
                logger.warning(f"⚠️ No content found for {ref.url}")

            async with self._write_lock:
                if self.index.exists_by_exact_filename(record.filename):
                    logger.info(f"⏭️  Skipping (already exists by full filename): {record.filename}")
                    outcome.state = ArticleState.SKIPPED_BY_FILENAME
                    return outcome

                markdown = self.convert(record.content_markup)
                self.index.write_article(record.filename, render_document(record.title, markdown))

            outcome.state = ArticleState.CONVERTED_AND_SAVED
            outcome.content_empty = record.content_empty
            logger.info(f"✅ Saved: {record.filename}")
        except Exception as e:
            logger.error(f"❌ Failed to process {ref.url}: {e}")
            logger.debug(traceback.format_exc())
            outcome.state = ArticleState.FAILED
            outcome.error = str(e) or type(e).__name__

        return outcome

    async def run(
        self,
        pages: Sequence[Page],
        refs: Sequence[ArticleRef],
        stop_event: Optional[asyncio.Event] = None,
    ) -> RunSummary:
        """Process ``refs`` with one worker per page and return outcomes in target order.

        A single page gives strictly sequential processing. When ``stop_event``
        is set, workers finish their current article and take no new ones.
        """
        if not pages:
            raise ValueError("at least one page is required")

        outcomes: List[ArticleOutcome] = [ArticleOutcome(ref=ref) for ref in refs]
        targets = iter(enumerate(refs))

        async def worker(page: Page):
            for i, ref in targets:
                if stop_event is not None and stop_event.is_set():
                    return
                outcomes[i] = await self.process(page, ref)
                if self.on_outcome:
                    try:
                        self.on_outcome(outcomes[i])
                    except Exception as e:
                        logger.error(f"❌ Progress callback failed for {ref.url}: {e}")
                        logger.debug(traceback.format_exc())

        await asyncio.gather(*(worker(page) for page in pages))

        summary = RunSummary(outcomes=outcomes)
        summary.cancelled = stop_event is not None and stop_event.is_set() and summary.pending > 0
        if summary.cancelled:
            logger.warning(f"🛑 Stopped early, {summary.pending} articles left unprocessed")
        return summary
