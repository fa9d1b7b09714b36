# File: robots_scout/records.py
"""robots_scout.records: Типизированные записи, получаемые при разборе robots.txt.

Every record is a frozen dataclass with a ``kind`` tag; :data:`Record` is the
closed union of all of them.  Directives reference the owning user-agent by
its *position* in the record sequence, never by object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Literal, Optional, Union

DirectiveKind = Literal["allow", "disallow", "crawl-delay"]

DIRECTIVE_KINDS: tuple[DirectiveKind, ...] = ("allow", "disallow", "crawl-delay")


@dataclass(frozen=True, slots=True)
class Comment:
    """Строка комментария без ведущего ``#``."""

    kind: ClassVar[str] = "comment"

    line: int
    text: str


@dataclass(frozen=True, slots=True)
class Sitemap:
    """``Sitemap:`` line; *valid* is the URL/extension check result."""

    kind: ClassVar[str] = "sitemap"

    line: int
    url: str
    valid: bool


@dataclass(frozen=True, slots=True)
class UserAgent:
    """``User-agent:`` line.

    ``group`` is the position of the first agent of the run this one belongs
    to; ``None`` means "decide by adjacency".
    """

    kind: ClassVar[str] = "user-agent"

    line: int
    name: str
    group: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Directive:
    """Allow / Disallow / Crawl-delay.

    ``owner`` is the index of the first :class:`UserAgent` of the group the
    directive was parsed under.
    """

    kind: ClassVar[str] = "directive"

    line: int
    directive: DirectiveKind
    value: str
    owner: int


@dataclass(frozen=True, slots=True)
class SyntaxErrorRecord:
    """Нарушение структуры файла (например, директива до User-agent)."""

    kind: ClassVar[str] = "syntax-error"

    line: int
    message: str


@dataclass(frozen=True, slots=True)
class HeaderDirective:
    """Parsed ``X-Robots-Tag`` values, passed through as-is."""

    kind: ClassVar[str] = "header"

    directives: Dict[str, Dict[Any, str]] = field(default_factory=dict)
    line: int = 0


@dataclass(frozen=True, slots=True)
class MetaDirective:
    """Tokens from robots ``<meta>`` tags, passed through as-is."""

    kind: ClassVar[str] = "meta"

    directives: List[str] = field(default_factory=list)
    line: int = 0


Record = Union[
    Comment,
    Sitemap,
    UserAgent,
    Directive,
    SyntaxErrorRecord,
    HeaderDirective,
    MetaDirective,
]

DIRECTIVE_BEFORE_AGENT = "Directive must follow a user agent"

__all__ = [
    "Comment",
    "Sitemap",
    "UserAgent",
    "Directive",
    "SyntaxErrorRecord",
    "HeaderDirective",
    "MetaDirective",
    "Record",
    "DirectiveKind",
    "DIRECTIVE_KINDS",
    "DIRECTIVE_BEFORE_AGENT",
]
