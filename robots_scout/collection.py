# File: robots_scout/collection.py
"""robots_scout.collection: Запросы к разобранному robots.txt.

:class:`RobotsRecords` wraps the immutable record sequence produced by the
parser and answers "what applies to agent X".  Each directive is stored once,
under the first agent of its group; group resolution is computed lazily and
memoized for the lifetime of the sequence.

Example::

    from robots_scout.parser.robots_parser import parse_text

    records = parse_text("User-agent: *\\nUser-agent: GPT-User\\nDisallow: /a").records
    records.disallowed("GPT-User")
    # [{'line': 3, 'directive': 'disallow', 'path': '/a'}]
    records.disallowed(expand_agents=True)
    # [{'line': 3, 'directive': 'disallow', 'path': '/a', 'userAgent': ['*', 'GPT-User']}]
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import cached_property
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union, overload

from robots_scout.groups import AgentGroups, resolve_groups
from robots_scout.logger import logger
from robots_scout.records import (
    Comment,
    Directive,
    DirectiveKind,
    HeaderDirective,
    MetaDirective,
    Record,
    Sitemap,
    SyntaxErrorRecord,
    UserAgent,
)

__all__ = ("RobotsRecords", "parse_delay", "record_row")

Row = Dict[str, Any]
Delay = Union[int, float]


def parse_delay(value: str) -> Delay:
    """Числовое значение Crawl-delay; нечисловое значение превращается в 0."""
    try:
        number = float(value)
    except ValueError:
        logger.debug("Non-numeric crawl-delay %r treated as 0", value)
        return 0
    if number != number or number in (float("inf"), float("-inf")):
        logger.debug("Non-finite crawl-delay %r treated as 0", value)
        return 0
    return int(number) if number.is_integer() else number


def record_row(record: Record) -> Row:
    """Plain mapping for any record kind."""
    match record:
        case Comment(line=line, text=text):
            return {"line": line, "comment": text}
        case Sitemap(line=line, url=url, valid=valid):
            return {"line": line, "url": url, "valid": valid}
        case UserAgent(line=line, name=name):
            return {"line": line, "userAgent": name}
        case Directive(line=line, directive="crawl-delay", value=value):
            return {"line": line, "directive": "crawl-delay", "delay": parse_delay(value)}
        case Directive(line=line, directive=directive, value=value):
            return {"line": line, "directive": directive, "path": value}
        case SyntaxErrorRecord(line=line, message=message):
            return {"line": line, "message": message}
        case HeaderDirective(directives=directives):
            return {"headers": directives}
        case MetaDirective(directives=directives):
            return {"metaTags": directives}
    raise TypeError(f"Unknown record type: {type(record).__name__}")


class RobotsRecords(Sequence):
    """Неизменяемая последовательность записей с запросами по группам user-agent."""

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._records: Tuple[Record, ...] = tuple(records)

    # Sequence protocol -----------------------------------------------------
    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Record, ...]: ...

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RobotsRecords):
            return self._records == other._records
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RobotsRecords({len(self._records)} records)"

    # Groups -----------------------------------------------------------------
    @cached_property
    def groups(self) -> AgentGroups:
        """User-agent groups, built once on first use."""
        return resolve_groups(self._records)

    def _of_kind(self, kind: str) -> List[Record]:
        return [record for record in self._records if record.kind == kind]

    def _directives(self, kind: DirectiveKind) -> List[Directive]:
        return [
            record
            for record in self._records
            if record.kind == Directive.kind and record.directive == kind  # type: ignore[union-attr]
        ]

    # Directive queries ------------------------------------------------------
    def _query(
        self,
        kind: DirectiveKind,
        user_agent: Optional[str],
        expand_agents: bool,
    ) -> List[Row]:
        directives = self._directives(kind)
        results: List[Row] = []

        if user_agent is None:
            seen: set[tuple[int, str]] = set()
            for directive in directives:
                key = (directive.line, directive.value)
                if key in seen:
                    continue
                seen.add(key)
                row = record_row(directive)
                if expand_agents:
                    row["userAgent"] = list(self.groups.owner_group(directive.owner))
                results.append(row)
            return results

        requested = self.groups.group_of(user_agent)
        requested_set = set(requested)
        for directive in directives:
            owners = self.groups.owner_group(directive.owner)
            if requested_set.isdisjoint(owners):
                continue
            if expand_agents:
                for name in requested:
                    row = record_row(directive)
                    row["userAgent"] = name
                    results.append(row)
            else:
                results.append(record_row(directive))
        return results

    def allowed(self, user_agent: Optional[str] = None, *, expand_agents: bool = False) -> List[Row]:
        return self._query("allow", user_agent, expand_agents)

    def disallowed(
        self, user_agent: Optional[str] = None, *, expand_agents: bool = False
    ) -> List[Row]:
        return self._query("disallow", user_agent, expand_agents)

    def crawl_delay(
        self, user_agent: Optional[str] = None, *, expand_agents: bool = False
    ) -> List[Row]:
        return self._query("crawl-delay", user_agent, expand_agents)

    def user_agents(self, user_agent: Optional[str] = None) -> Dict[str, Row]:
        """Per-agent view keyed by agent name, with that agent's own directives."""
        result: Dict[str, Row] = {}
        for record in self._of_kind(UserAgent.kind):
            name = record.name  # type: ignore[union-attr]
            if user_agent is not None and name != user_agent:
                continue
            result[name] = {
                "line": record.line,
                "userAgent": name,
                "allow": self.allowed(name),
                "disallow": self.disallowed(name),
                "crawlDelay": self.crawl_delay(name),
            }
        return result

    def robots_txt_directives(self, *, expand_agents: bool = False) -> List[Row]:
        """Every directive in file order; ``userAgent`` is the storing (first) agent."""
        rows: List[Row] = []
        for record in self._of_kind(Directive.kind):
            row = {"line": record.line, "directive": record.directive, "path": record.value}  # type: ignore[union-attr]
            if expand_agents:
                row["userAgent"] = self._records[record.owner].name  # type: ignore[union-attr]
            rows.append(row)
        return rows

    # Simple projections -----------------------------------------------------
    def sitemaps(self) -> List[Row]:
        return [record_row(record) for record in self._of_kind(Sitemap.kind)]

    def comments(self) -> List[Row]:
        return [record_row(record) for record in self._of_kind(Comment.kind)]

    def syntax_errors(self) -> List[Row]:
        return [record_row(record) for record in self._of_kind(SyntaxErrorRecord.kind)]

    def headers_directives(self) -> List[Dict[str, Dict[Any, str]]]:
        return [record.directives for record in self._of_kind(HeaderDirective.kind)]  # type: ignore[union-attr]

    def meta_tags_directives(self) -> List[List[str]]:
        return [record.directives for record in self._of_kind(MetaDirective.kind)]  # type: ignore[union-attr]

    def combined_directives(self) -> List[Record]:
        """Header and meta records first, then robots.txt directives."""
        external = [
            record
            for record in self._records
            if record.kind in (HeaderDirective.kind, MetaDirective.kind)
        ]
        return external + self._of_kind(Directive.kind)

    def lines(self) -> int:
        return len(self._records)

    def to_dict(self, user_agent: Optional[str] = None, *, expand_agents: bool = False) -> Row:
        """Сводка для CLI и отчётов."""
        return {
            "lines": self.lines(),
            "userAgents": self.user_agents(user_agent),
            "allow": self.allowed(user_agent, expand_agents=expand_agents),
            "disallow": self.disallowed(user_agent, expand_agents=expand_agents),
            "crawlDelay": self.crawl_delay(user_agent, expand_agents=expand_agents),
            "sitemaps": self.sitemaps(),
            "comments": self.comments(),
            "syntaxErrors": self.syntax_errors(),
            "headers": self.headers_directives(),
            "metaTags": self.meta_tags_directives(),
        }
