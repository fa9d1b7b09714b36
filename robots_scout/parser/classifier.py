# File: robots_scout/parser/classifier.py
"""robots_scout.parser.classifier: Определение типа одной строки robots.txt.

:func:`classify` is pure: it looks at a single line, matches the keyword
case-insensitively and returns a :class:`ClassifiedLine` or ``None`` when the
line carries nothing worth recording.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from pydantic import AnyUrl, TypeAdapter, ValidationError

from robots_scout.records import DIRECTIVE_KINDS, DirectiveKind

__all__ = ("LineKind", "ClassifiedLine", "classify", "is_valid_sitemap_url")

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

_SITEMAP_PREFIX = "sitemap:"
_USER_AGENT_PREFIX = "user-agent:"


class LineKind(enum.Enum):
    COMMENT = "comment"
    SITEMAP = "sitemap"
    USER_AGENT = "user-agent"
    DIRECTIVE = "directive"


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """Результат классификации: тип строки и извлечённое значение."""

    kind: LineKind
    value: str
    directive: Optional[DirectiveKind] = None
    valid: bool = False


def is_valid_sitemap_url(url: str) -> bool:
    """Absolute URL (scheme and host) whose path ends in ``.xml``."""
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return False
    return parts.path.lower().endswith(".xml")


def _split_value(line: str) -> Optional[str]:
    """Текст после первого двоеточия или ``None``, если двоеточия нет."""
    _, sep, rest = line.partition(":")
    if not sep:
        return None
    return rest.strip()


def classify(line: str) -> Optional[ClassifiedLine]:
    """Classify one line of robots.txt.

    Precedence is comment, sitemap, user-agent, directive.  Keyword prefixes
    are matched case-insensitively; payloads keep their case.
    """
    trimmed = line.strip()
    lowered = trimmed.lower()

    if trimmed.startswith("#"):
        if len(trimmed) < 2:
            return None
        return ClassifiedLine(LineKind.COMMENT, trimmed[1:].strip())

    if lowered.startswith(_SITEMAP_PREFIX):
        url = _split_value(trimmed)
        if url is None:
            return None
        return ClassifiedLine(LineKind.SITEMAP, url, valid=is_valid_sitemap_url(url))

    if lowered.startswith(_USER_AGENT_PREFIX):
        name = _split_value(trimmed)
        if not name:
            return None
        return ClassifiedLine(LineKind.USER_AGENT, name)

    for directive in DIRECTIVE_KINDS:
        if lowered.startswith(directive + ":"):
            value = _split_value(trimmed)
            if value is None:
                return None
            return ClassifiedLine(LineKind.DIRECTIVE, value, directive=directive)

    return None
