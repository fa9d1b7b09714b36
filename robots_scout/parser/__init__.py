"""robots_scout.parser: Разбор robots.txt, заголовков X-Robots-Tag и meta-тегов."""

from robots_scout.parser.classifier import ClassifiedLine, LineKind, classify
from robots_scout.parser.header_parser import parse_x_robots_tag
from robots_scout.parser.html_parser import parse_meta_directives
from robots_scout.parser.robots_parser import parse_file, parse_lines, parse_text

__all__ = [
    "ClassifiedLine",
    "LineKind",
    "classify",
    "parse_lines",
    "parse_text",
    "parse_file",
    "parse_x_robots_tag",
    "parse_meta_directives",
]
