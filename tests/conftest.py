# File: tests/conftest.py
from pathlib import Path

import pytest

from robots_scout.collection import RobotsRecords
from robots_scout.parser.robots_parser import parse_text

SAMPLE_ROBOTS = """\
User-agent: *
User-agent: GPT-User
Disallow: /article
Disallow: /site-explorer/ajax/
Allow: /site-explorer/$
Disallow: /site-explorer/*
Allow: /link-intersect/$
Disallow: /link-intersect/*
Disallow: /v4*
Disallow: /blog/*?s=*
Disallow: /blog/*?archive*
Disallow: /seo/for/*?*draft
Disallow: /academy/*?*draft
Disallow: /seo-toolbar/welcome
Disallow: /seo-toolbar/uninstall
Disallow: /*/seo-toolbar/welcome
Disallow: /*/seo-toolbar/uninstall
Disallow: /*?input
Disallow: /draft/*
Disallow: /academy/draft/*
Allow: /agencies/*?services[]=*
Allow: /agencies/*&services[]=*
Disallow: /agencies/*?*languages[]=*
Disallow: /agencies/*&*languages[]=*
Disallow: /agencies/*?*industries[]=*
Disallow: /agencies/*&*industries[]=*
Disallow: /agencies/*?*budget=*
Disallow: /agencies/*&*budget=*
Disallow: /agencies/*?*businessSize=*
Disallow: /agencies/*&*businessSize=*
Disallow: /cdn-cgi/
"""


@pytest.fixture()
def sample_text() -> str:
    """robots.txt with one group of two agents: 25 Disallow and 4 Allow."""
    return SAMPLE_ROBOTS


@pytest.fixture()
def sample_file(tmp_path) -> Path:
    path = tmp_path / "robots.txt"
    path.write_text(SAMPLE_ROBOTS, encoding="utf-8")
    return path


@pytest.fixture()
def sample_records() -> RobotsRecords:
    return parse_text(SAMPLE_ROBOTS).records
