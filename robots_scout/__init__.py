"""
RobotsScout package initializer.
Defines package version and exposes the parsing API.
"""
__version__ = "0.1.0"

from robots_scout.collection import RobotsRecords
from robots_scout.parser.robots_parser import parse_file, parse_lines, parse_text
from robots_scout.response import ParseResponse

__all__ = ["__version__", "RobotsRecords", "ParseResponse", "parse_lines", "parse_text", "parse_file"]
