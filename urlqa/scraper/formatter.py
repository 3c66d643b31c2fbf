"""Canonical text block wrapping one page's extracted content."""

from __future__ import annotations


def format_content(url: str, title: str, description: str, content: str) -> str:
    """Return the ``URL/TITLE/DESCRIPTION/CONTENT`` block for a single page."""
    block = (
        f"URL: {url}\n"
        f"TITLE: {title}\n"
        f"DESCRIPTION: {description}\n"
        f"CONTENT:\n"
        f"{content}"
    )
    return block.strip()
