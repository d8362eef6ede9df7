"""HTML to Markdown conversion for article bodies."""
from __future__ import annotations

from typing import Callable, Sequence

from bs4 import BeautifulSoup
from markdownify import markdownify

# Elements removed together with their contents before conversion.
STRIPPED_ELEMENTS = ("script", "style")

Converter = Callable[[str], str]


def html_to_markdown(html: str, stripped: Sequence[str] = STRIPPED_ELEMENTS) -> str:
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for unwanted in soup.find_all(list(stripped)):
        unwanted.decompose()
    return markdownify(str(soup), heading_style="ATX").strip()


def render_document(title: str, body_markdown: str) -> str:
    """Archived file contents: a level-1 title heading, a blank line, then the body."""
    return f"# {title}\n\n{body_markdown}"
