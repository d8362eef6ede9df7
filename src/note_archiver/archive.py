"""Index of the Markdown files already present in the output directory.

The file name ``{YYYYMMDD}_{title}.md`` is the only record of what has been
archived, so the index is just the directory listing taken when the run
starts, plus every file this run writes.
"""
from __future__ import annotations

import logging
import os
from typing import Iterable, Set

from .errors import SetupFailure

logger = logging.getLogger(__name__)


class ArchiveIndex:
    def __init__(self, output_dir: str):
        self.output_dir = output_dir
        try:
            self._filenames: Set[str] = set(os.listdir(output_dir))
        except OSError as e:
            raise SetupFailure(f"Cannot read output directory {output_dir}: {e}") from e
        logger.info(f"📂 {len(self._filenames)} existing files in {output_dir}")

    def __len__(self) -> int:
        return len(self._filenames)

    def __contains__(self, filename: str) -> bool:
        return filename in self._filenames

    @property
    def filenames(self) -> Iterable[str]:
        return sorted(self._filenames)

    def exists_by_title_suffix(self, sanitized_title: str) -> bool:
        """True if some archived file carries this title, whatever its date.

        Approximate: two different articles sharing a title on different
        days look identical here.
        """
        suffix = f"_{sanitized_title}.md"
        return any(name.endswith(suffix) for name in self._filenames)

    def exists_by_exact_filename(self, filename: str) -> bool:
        return filename in self._filenames

    def register(self, filename: str) -> None:
        self._filenames.add(filename)

    def write_article(self, filename: str, content: str) -> str:
        """Write ``content`` to ``filename`` in the output directory and register it."""
        path = os.path.join(self.output_dir, filename)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        self.register(filename)
        return path
