# File: robots_scout/report/__init__.py
"""robots_scout.report: Утилиты для генерации отчётов (JSON и HTML) используемые CLI и тестами."""

from robots_scout.report.html_report import render_html
from robots_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
