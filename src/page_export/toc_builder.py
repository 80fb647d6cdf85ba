"""Table of contents generation from extracted headings."""

from typing import List

from src.content_extractor import Heading, extract_headings

TOC_TITLE = "## Table of Contents"


def build_toc(headings: List[Heading]) -> str:
    """Render headings as a nested Markdown bullet list.

    Each level below 1 indents the entry by two spaces, and runs of
    whitespace in the heading text are collapsed to one space so every
    entry stays on one line. Returns an empty string when there are no
    headings.
    """
    if not headings:
        return ""

    lines = [TOC_TITLE, ""]
    for heading in headings:
        indent = "  " * (heading.level - 1)
        text = " ".join(heading.text.split())
        lines.append(f"{indent}- {text}")
    return "\n".join(lines) + "\n"


def add_toc(markup: str, content: str) -> str:
    """Prepend a table of contents built from ``markup`` to ``content``.

    The content is returned unchanged when the markup has no headings.
    """
    toc = build_toc(extract_headings(markup))
    if not toc:
        return content
    return f"{toc}\n---\n\n{content}"
