"""Content extraction: turns fetched HTML into paragraph-structured text."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

# Elements that never contribute text.
_NOISE_TAGS = ["script", "style", "nav", "footer", "header", "aside"]

# Elements emitted as a single paragraph unit (children are not visited).
_BLOCK_TAGS = frozenset(
    ["h1", "h2", "h3", "h4", "h5", "h6", "p", "div", "section", "article"]
)

# Units of this length or shorter are treated as noise.
_MIN_UNIT_CHARS = 10


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _collect_units(node: Tag, units: List[str]) -> None:
    """Depth-first walk appending one trimmed text unit per block or text node."""
    for child in node.children:
        if isinstance(child, NavigableString):
            # Comments, doctypes and CDATA are not visible text.
            if isinstance(child, PreformattedString):
                continue
            text = child.strip()
            if text:
                units.append(text)
        elif isinstance(child, Tag):
            if child.name in _BLOCK_TAGS:
                text = child.get_text().strip()
                if text:
                    units.append(text)
            else:
                _collect_units(child, units)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* with the stdlib-backed ``html.parser`` tree builder."""
    return BeautifulSoup(html, "html.parser")


def extract_title(soup: BeautifulSoup) -> str:
    """Return the text of the first ``<title>`` tag, or empty string."""
    tag = soup.find("title")
    if tag is None:
        return ""
    return tag.get_text().strip()


def extract_description(soup: BeautifulSoup) -> str:
    """Return the ``content`` of ``<meta name="description">``, or empty string."""
    tag = soup.find("meta", attrs={"name": "description"})
    if tag is None:
        return ""
    content = tag.get("content") or ""
    if isinstance(content, list):
        content = " ".join(content)
    return content.strip()


def extract_text(soup: BeautifulSoup) -> str:
    """Flatten *soup* into plain text with one blank line between paragraphs.

    Navigation chrome (``nav``, ``header``, ``footer``, ``aside``) and
    ``script``/``style`` elements are removed from *soup* in place.  Headings,
    paragraphs, ``div``, ``section`` and ``article`` elements each become one
    unit holding their full text; any unit of ten characters or fewer is
    dropped.

    The output is lossy by intent: it is meant to be read by an LLM, not to
    round-trip the page.
    """
    for tag in soup(_NOISE_TAGS):
        tag.decompose()

    root = soup.body
    if root is None:
        # No <body> element: the walk must still skip everything in <head>.
        for tag in soup(["head", "title"]):
            tag.decompose()
        root = soup
    units: List[str] = []
    _collect_units(root, units)

    return "\n\n".join(u for u in units if len(u) > _MIN_UNIT_CHARS)
