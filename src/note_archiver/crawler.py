"""Playwright-based archiver for note.com author pages.

Opens a browser, resolves which articles to process (explicit URLs, a
query-filtered subset of the author's listing page, or all of it) and saves
each new article as ``{YYYYMMDD}_{title}.md`` in the output directory.
Articles already present there are skipped, so repeated runs only fetch what
is new.
"""
from __future__ import annotations

import asyncio
import logging
import signal
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Iterable, List, Optional

from playwright.async_api import Browser, BrowserContext, Page, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright_stealth import Stealth

from .archive import ArchiveIndex
from .config import ArchiveConfig
from .discovery import resolve_targets, selection_from_args
from .errors import SetupFailure
from .models import ArticleOutcome, RunSummary
from .processor import ArticleProcessor
from .progress import CLIProgressTracker

logger = logging.getLogger(__name__)

HIDE_WEBDRIVER_SCRIPT = """
    Object.defineProperty(navigator, 'webdriver', {
        get: () => undefined
    });
"""


@asynccontextmanager
async def browser_session(config: ArchiveConfig) -> AsyncIterator[BrowserContext]:
    """Launch the configured browser and yield a fresh context, closing both afterwards."""
    async with async_playwright() as p:
        logger.info(f"Launching {config.browser} (headless={config.headless})...")
        try:
            browser: Browser = await getattr(p, config.browser).launch(headless=config.headless)
        except PlaywrightError as e:
            raise SetupFailure(
                f"Cannot launch {config.browser}: {e}. "
                f"Is it installed? Try `playwright install {config.browser}`"
            ) from e

        try:
            context = await browser.new_context(
                user_agent=config.user_agent,
                viewport={'width': 1280, 'height': 1024},
                locale='ja-JP',
                timezone_id='Asia/Tokyo',
            )
        except PlaywrightError as e:
            await browser.close()
            raise SetupFailure(f"Cannot open a browser context: {e}") from e
        try:
            yield context
        finally:
            await context.close()
            await browser.close()


async def open_pages(context: BrowserContext, count: int) -> List[Page]:
    stealth = Stealth(
        navigator_languages_override=("ja-JP", "ja"),
        init_scripts_only=True,
    )
    pages = []
    for _ in range(count):
        try:
            page = await context.new_page()
            await stealth.apply_stealth_async(page)
            await page.add_init_script(HIDE_WEBDRIVER_SCRIPT)
        except PlaywrightError as e:
            raise SetupFailure(f"Cannot open a browser page: {e}") from e
        pages.append(page)
    return pages


def _install_interrupt_handler(stop_event: asyncio.Event) -> bool:
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, _request_stop, stop_event)
    except (NotImplementedError, RuntimeError, ValueError):
        # Not on the main thread, or a platform without loop signal handlers.
        return False
    return True


def _request_stop(stop_event: asyncio.Event) -> None:
    if not stop_event.is_set():
        logger.warning("🛑 Interrupt received, stopping after the current article...")
    stop_event.set()


async def archive_async(
    config: ArchiveConfig,
    urls: Iterable[str] = (),
    queries: Iterable[str] = (),
    stop_event: Optional[asyncio.Event] = None,
    progress_callback: Optional[Callable[[ArticleOutcome], None]] = None,
    show_progress: bool = True,
    handle_interrupts: bool = False,
) -> RunSummary:
    """Archive the author's articles into ``config.output_dir``.

    Args:
        urls: Explicit article URLs. Terms in ``queries`` starting with
            ``http`` are treated as URLs too.
        queries: Substring filters applied to hint titles and URLs of the
            discovered articles.
        stop_event: When set, processing stops between articles.
        progress_callback: Called with each ArticleOutcome as it finishes.
            Replaces the tqdm progress bar.
        handle_interrupts: Turn SIGINT into a graceful stop.

    Raises:
        SetupFailure: output directory, browser or listing page unusable.

    Returns:
        RunSummary with one outcome per target, in target order.
    """
    config.ensure_output_dir()
    index = ArchiveIndex(config.output_dir)
    selection = selection_from_args(urls, queries)
    stop_event = stop_event or asyncio.Event()
    interrupts = handle_interrupts and _install_interrupt_handler(stop_event)

    cli_progress = None
    if progress_callback is None and show_progress:
        cli_progress = CLIProgressTracker()
        progress_callback = cli_progress

    try:
        async with browser_session(config) as context:
            pages = await open_pages(context, config.workers)
            refs = await resolve_targets(selection, pages[0], config)
            if not refs:
                logger.info("Nothing to archive")
                return RunSummary()

            if cli_progress:
                cli_progress.start(len(refs))

            processor = ArticleProcessor(config, index, on_outcome=progress_callback)
            summary = await processor.run(pages, refs, stop_event=stop_event)
    finally:
        if cli_progress:
            cli_progress.close()
        if interrupts:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)

    logger.info(f"🎉 Finished: {summary.describe()} in {config.output_dir}")
    return summary


def archive(config: ArchiveConfig, urls: Iterable[str] = (), queries: Iterable[str] = (), **kwargs) -> RunSummary:
    """Blocking wrapper around archive_async for scripts and Streamlit."""
    return asyncio.run(archive_async(config, urls=urls, queries=queries, **kwargs))
