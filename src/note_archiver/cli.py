"""Command-line entry point.

Examples:
    note-archiver                                  # every article of the default author
    note-archiver --author someone --out ./notes   # another author
    note-archiver 日記 Python                      # only articles whose title/URL contains a term
    note-archiver https://note.com/someone/n/n0123456789ab --url https://note.com/someone/n/nfedcba987654
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_AUTHOR, ArchiveConfig
from .crawler import archive
from .errors import SetupFailure

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="note-archiver",
        description="Archive a note.com author's articles as Markdown files, skipping ones already saved.",
    )
    parser.add_argument(
        "terms",
        nargs="*",
        metavar="TERM",
        help="URL to archive (starts with http) or substring to match against article titles/URLs",
    )
    parser.add_argument("--url", action="append", default=[], dest="urls", help="Article URL to archive (repeatable)")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--author", help=f"note.com author id (default: {DEFAULT_AUTHOR})")
    source.add_argument("--base-url", help="Full URL of the author's listing page")

    parser.add_argument("--out", default="articles", help="Output directory (default: ./articles)")
    parser.add_argument("--browser", choices=["chromium", "firefox"], default="chromium")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--workers", type=int, default=1, help="Pages processed in parallel (default: 1)")
    parser.add_argument("--settle-seconds", type=float, default=3.0, help="Wait after each 'load more' click")
    parser.add_argument("--max-load-more", type=int, default=500, help="Give up after this many 'load more' clicks")
    parser.add_argument(
        "--no-title-skip",
        action="store_true",
        help="Always open articles instead of skipping ones whose listing title is already archived",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> ArchiveConfig:
    options = dict(
        output_dir=args.out,
        browser=args.browser,
        headless=not args.headed,
        workers=args.workers,
        settle_ms=int(args.settle_seconds * 1000),
        max_load_more=args.max_load_more,
        title_skip=not args.no_title_skip,
    )
    if args.base_url:
        return ArchiveConfig(base_url=args.base_url, **options)
    return ArchiveConfig.for_author(args.author or DEFAULT_AUTHOR, **options)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        archive(
            config,
            urls=args.urls,
            queries=args.terms,
            show_progress=not args.no_progress,
            handle_interrupts=True,
        )
    except SetupFailure as e:
        logger.error(f"❌ {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
