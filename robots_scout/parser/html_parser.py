# === FILE: robots_scout/parser/html_parser.py ===
"""HTML parsing utilities for RobotsScout.

Only the robots-related ``<meta>`` tags are of interest here:

* ``<meta name="robots" content="noindex, nofollow">``
* ``<meta name="googlebot" ...>`` and ``<meta name="googlebot-news" ...>``

Attribute order does not matter and self-closing tags are accepted; the
``content`` value is split on commas and deduplicated in first-seen order.
"""
from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup

__all__: Sequence[str] = ("ROBOTS_META_NAMES", "parse_meta_directives")

ROBOTS_META_NAMES: frozenset[str] = frozenset({"robots", "googlebot", "googlebot-news"})


def parse_meta_directives(html: str | bytes) -> list[str]:
    """Return robots meta tokens found in *html*."""
    soup = BeautifulSoup(html, "html.parser")

    tokens: list[str] = []
    for tag in soup.find_all("meta"):
        name = tag.get("name")
        content = tag.get("content")
        if not isinstance(name, str) or not isinstance(content, str):
            continue
        if name.strip().lower() not in ROBOTS_META_NAMES:
            continue
        for part in content.split(","):
            token = part.strip()
            if token and token not in tokens:
                tokens.append(token)
    return tokens
