# File: tests/test_parser.py
"""Тесты для конечного автомата разбора robots.txt."""
import pytest

from robots_scout.parser.robots_parser import LineParser, format_size, parse_file, parse_lines, parse_text
from robots_scout.records import (
    DIRECTIVE_BEFORE_AGENT,
    Comment,
    Directive,
    HeaderDirective,
    Sitemap,
    SyntaxErrorRecord,
    UserAgent,
)


def test_group_of_two_agents_shares_first_owner():
    records = parse_text("User-agent: *\nUser-agent: GPT-User\nDisallow: /a\nAllow: /b\n").records
    assert list(records) == [
        UserAgent(1, "*", 0),
        UserAgent(2, "GPT-User", 0),
        Directive(3, "disallow", "/a", 0),
        Directive(4, "allow", "/b", 0),
    ]


def test_directive_before_agent_is_syntax_error():
    records = parse_text("Disallow: /x\nUser-agent: *\n").records
    assert records[0] == SyntaxErrorRecord(1, DIRECTIVE_BEFORE_AGENT)
    assert records[1] == UserAgent(2, "*", 1)
    assert records.disallowed() == []


def test_empty_agent_name_does_not_open_group():
    records = parse_text("User-agent: \nDisallow: /x\n").records
    assert not [r for r in records if isinstance(r, UserAgent)]
    assert records.syntax_errors() == [{"line": 2, "message": DIRECTIVE_BEFORE_AGENT}]


def test_new_group_after_directive():
    records = parse_lines(["User-agent: a", "Disallow: /1", "User-agent: b", "Disallow: /2"])
    assert records[2] == UserAgent(3, "b", 2)
    assert records[3].owner == 2


def test_comment_ends_agent_run_but_not_the_group():
    records = parse_lines(
        ["User-agent: a", "# note", "User-agent: b", "Disallow: /b", "# more", "Disallow: /b2"]
    )
    assert records[2] == UserAgent(3, "b", 2)
    assert [r.owner for r in records if isinstance(r, Directive)] == [2, 2]


def test_unrecognized_line_ends_agent_run():
    records = parse_lines(["User-agent: a", "Host: example.com", "User-agent: b", "Disallow: /b"])
    assert records[0] == UserAgent(1, "a", 0)
    assert records[1] == UserAgent(3, "b", 1)
    assert records[2].owner == 1


def test_blank_lines_are_skipped_without_breaking_group():
    records = parse_text("User-agent: a\n\n   \nUser-agent: b\n\nDisallow: /x").records
    assert records[1] == UserAgent(4, "b", 0)
    assert records[2] == Directive(6, "disallow", "/x", 0)


def test_line_numbers_strictly_increase_and_match_source():
    text = "\n# c\n\nUser-agent: *\nDisallow: /a\n\nSitemap: https://example.com/s.xml\n"
    records = parse_text(text).records
    lines = [r.line for r in records]
    assert lines == sorted(set(lines))
    non_blank = [i for i, raw in enumerate(text.split("\n"), start=1) if raw.strip()]
    assert lines == non_blank


def test_sitemap_and_comment_records():
    records = parse_lines(["# Hello robots", "Sitemap: https://example.com/sitemap.xml", "Sitemap: nope"])
    assert list(records) == [
        Comment(1, "Hello robots"),
        Sitemap(2, "https://example.com/sitemap.xml", True),
        Sitemap(3, "nope", False),
    ]


def test_agent_names_keep_case():
    records = parse_lines(["User-Agent: GPT-User"])
    assert records[0].name == "GPT-User"


def test_parse_is_idempotent(sample_text):
    assert parse_text(sample_text).records == parse_text(sample_text).records


def test_independent_parses_do_not_share_state():
    parse_lines(["User-agent: a", "User-agent: b"])
    records = parse_lines(["Disallow: /x"])
    assert records[0] == SyntaxErrorRecord(1, DIRECTIVE_BEFORE_AGENT)


def test_leading_records_shift_owner_positions():
    header = HeaderDirective({"X-Robots-Tag": {0: "noindex"}})
    records = parse_lines(["User-agent: *", "Disallow: /x"], leading=[header])
    assert records[0] is header
    assert records[2].owner == 1
    assert records.disallowed("*") == [{"line": 2, "directive": "disallow", "path": "/x"}]


def test_parse_lines_accepts_generator():
    records = parse_lines(line for line in ["User-agent: *", "Allow: /"])
    assert len(records) == 2


def test_parse_text_reports_size(sample_text):
    response = parse_text(sample_text)
    assert response.size == len(sample_text.encode("utf-8"))


def test_parse_text_size_limit():
    response = parse_text("User-agent: *\nDisallow: /", max_size=5)
    assert list(response.records) == [SyntaxErrorRecord(0, "Content size exceeds 5 bytes limit")]


def test_parse_file(sample_file, sample_text):
    response = parse_file(sample_file)
    assert response.records == parse_text(sample_text).records
    assert response.size == sample_file.stat().st_size


def test_parse_file_crlf(tmp_path):
    path = tmp_path / "robots.txt"
    path.write_bytes(b"User-agent: *\r\n\r\nDisallow: /a\r\n")
    records = parse_file(path).records
    assert records.disallowed() == [{"line": 3, "directive": "disallow", "path": "/a"}]


def test_parse_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "missing.txt")


def test_parse_file_size_limit(sample_file):
    response = parse_file(sample_file, max_size=100)
    assert response.records.syntax_errors() == [
        {"line": 0, "message": "File size exceeds 100 bytes limit"}
    ]


def test_format_size():
    assert format_size(500 * 1024 * 1024) == "500MB"
    assert format_size(10) == "10 bytes"


def test_comments_on_response(sample_text):
    response = parse_text("# one\n" + sample_text)
    assert response.comments() == [{"line": 1, "comment": "one"}]


def test_line_parser_exposes_partial_results():
    parser = LineParser()
    parser.feed("User-agent: *")
    parser.feed("")
    parser.feed("Disallow: /a")
    assert parser.line_count == 3
    assert parser.records().disallowed("*") == [{"line": 3, "directive": "disallow", "path": "/a"}]

    parser.feed("Allow: /b")
    assert len(parser.records()) == 3
