"""URL normalisation and validation helpers."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

# Characters that can never appear in a hostname.
_BAD_HOST_CHARS = re.compile(r"[\s<>\"'{}|\\^`]")


def normalise_scheme(url: str) -> str:
    """Prefix ``https://`` unless *url* already starts with http(s)://."""
    url = url.strip()
    if not url.lower().startswith(("http://", "https://")):
        url = "https://" + url
    return url


def is_absolute_url(url: str) -> bool:
    """Return ``True`` if *url* parses as an absolute http(s) URL with a host."""
    if any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        # Accessing .port validates the port component.
        parts.port
    except ValueError:
        return False
    if parts.scheme.lower() not in ("http", "https"):
        return False
    host = parts.hostname
    if not host or _BAD_HOST_CHARS.search(host):
        return False
    return True
