# File: robots_scout/parser/robots_parser.py
"""robots_scout.parser.robots_parser: Разбор строк robots.txt в последовательность записей.

The parser is a small state machine that tracks only who owns the current
group: a run of consecutive ``User-agent`` lines shares its first agent as
owner, and every directive after the run is stored under that owner.  The
state lives in a local value per call, so independent parses never share it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from robots_scout.collection import RobotsRecords
from robots_scout.config import MAX_FILE_SIZE
from robots_scout.logger import logger
from robots_scout.parser.classifier import ClassifiedLine, LineKind, classify
from robots_scout.records import (
    DIRECTIVE_BEFORE_AGENT,
    Comment,
    Directive,
    Record,
    Sitemap,
    SyntaxErrorRecord,
    UserAgent,
)
from robots_scout.response import ParseResponse

__all__ = ("LineParser", "parse_lines", "parse_text", "parse_file", "iter_lines", "format_size")


@dataclass(slots=True)
class _GroupState:
    """Position of the current group's first agent and whether the last line was an agent."""

    first_agent: Optional[int] = None
    last_was_agent: bool = False


def format_size(size: int) -> str:
    """``524288000`` -> ``"500MB"``."""
    mb = 1024 * 1024
    if size >= mb and size % mb == 0:
        return f"{size // mb}MB"
    return f"{size} bytes"


def iter_lines(text: str) -> Iterator[str]:
    """Split on ``\\n`` and drop a trailing ``\\r`` so line numbers match the source."""
    for raw in text.split("\n"):
        yield raw.rstrip("\r")


def _step(
    state: _GroupState,
    records: List[Record],
    line_number: int,
    classified: Optional[ClassifiedLine],
) -> None:
    """Apply one classified line to *state*, appending at most one record."""
    if classified is None:
        state.last_was_agent = False
        return

    if classified.kind is LineKind.USER_AGENT:
        if state.first_agent is None or not state.last_was_agent:
            state.first_agent = len(records)
        state.last_was_agent = True
        records.append(UserAgent(line_number, classified.value, state.first_agent))
        return

    if classified.kind is LineKind.DIRECTIVE:
        if state.first_agent is None:
            records.append(SyntaxErrorRecord(line_number, DIRECTIVE_BEFORE_AGENT))
            return
        state.last_was_agent = False
        records.append(
            Directive(
                line=line_number,
                directive=classified.directive,  # type: ignore[arg-type]
                value=classified.value,
                owner=state.first_agent,
            )
        )
        return

    state.last_was_agent = False
    if classified.kind is LineKind.COMMENT:
        records.append(Comment(line_number, classified.value))
    elif classified.kind is LineKind.SITEMAP:
        records.append(Sitemap(line_number, classified.value, classified.valid))


class LineParser:
    """Incremental form of :func:`parse_lines`: lines are fed one at a time.

    Used by the fetcher to parse robots.txt while it is still downloading;
    :meth:`records` returns whatever has been parsed so far.
    """

    __slots__ = ("_records", "_state", "line_count")

    def __init__(self, leading: Iterable[Record] = ()) -> None:
        self._records: List[Record] = list(leading)
        self._state = _GroupState()
        self.line_count = 0

    def feed(self, line: str) -> None:
        self.line_count += 1
        if line.strip():
            _step(self._state, self._records, self.line_count, classify(line))

    def records(self) -> RobotsRecords:
        return RobotsRecords(self._records)


def parse_lines(lines: Iterable[str], *, leading: Iterable[Record] = ()) -> RobotsRecords:
    """Parse *lines* in order and return the immutable record sequence.

    Args:
        lines: raw lines without line terminators; any iterable, consumed once.
        leading: records placed before the parsed ones (e.g. header directives
            collected by the fetcher).

    Returns:
        :class:`RobotsRecords`; never raises on content.
    """
    parser = LineParser(leading)
    for line in lines:
        parser.feed(line)

    records = parser.records()
    logger.debug("Parsed %d lines into %d records", parser.line_count, len(records))
    return records


def parse_text(content: str, max_size: int = MAX_FILE_SIZE) -> ParseResponse:
    """Разбирает robots.txt, переданный строкой."""
    size = len(content.encode("utf-8"))
    if size > max_size:
        logger.warning("robots.txt content is %d bytes, limit is %d", size, max_size)
        return ParseResponse(
            RobotsRecords([SyntaxErrorRecord(0, f"Content size exceeds {format_size(max_size)} limit")]),
            size,
        )
    return ParseResponse(parse_lines(iter_lines(content)), size)


def parse_file(path: Union[str, Path], max_size: int = MAX_FILE_SIZE) -> ParseResponse:
    """Разбирает robots.txt из файла построчно.

    Raises:
        FileNotFoundError: файл не существует.
        PermissionError: файл недоступен для чтения.
    """
    p = Path(path).expanduser()
    if not p.is_file():
        logger.error("robots.txt file not found: %s", p)
        raise FileNotFoundError(f"File not found: {p}")

    size = p.stat().st_size
    if size > max_size:
        logger.warning("robots.txt file %s is %d bytes, limit is %d", p, size, max_size)
        return ParseResponse(
            RobotsRecords([SyntaxErrorRecord(0, f"File size exceeds {format_size(max_size)} limit")]),
            size,
        )

    with p.open("r", encoding="utf-8", errors="replace", newline="") as handle:
        records = parse_lines(line.rstrip("\r\n") for line in handle)
    logger.info("Parsed %s: %d records", p, len(records))
    return ParseResponse(records, size)
