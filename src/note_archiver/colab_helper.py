"""Helpers for running the archiver in Google Colab or Jupyter notebooks.

Notebooks already run an event loop, so ``asyncio.run`` cannot be used there.
``nest_asyncio`` is applied on import so the blocking wrapper works too.
"""
import nest_asyncio

from .config import ArchiveConfig
from .crawler import archive_async

nest_asyncio.apply()


def archive_colab(
    author: str = "kuromoka",
    out_folder: str = "articles",
    urls=(),
    queries=(),
    headless: bool = True,
    title_skip: bool = True,
):
    """Return the archive_async coroutine for use with ``await`` in a notebook.

    Example usage in Colab:
        from note_archiver.colab_helper import archive_colab

        summary = await archive_colab(author="kuromoka", out_folder="./articles")
        print(summary.describe())
        for name in summary.saved_files[:5]:
            print(f"  {name}")
    """
    config = ArchiveConfig.for_author(
        author,
        output_dir=out_folder,
        headless=headless,
        title_skip=title_skip,
    )
    return archive_async(config, urls=urls, queries=queries)
