"""robots_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

_TEMPLATES = Path(__file__).resolve().parent / "templates"
_TEMPLATE_NAME = "report.html.j2"


def render_html(
    summary: Mapping[str, Any],
    output_path: Union[Path, str],
    template_dir: Union[Path, str, None] = None,
    source: Optional[str] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        summary: результат RobotsRecords.to_dict().
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с шаблоном report.html.j2 (по умолчанию встроенная).
        source: откуда взят robots.txt (файл или URL), для заголовка.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir or _TEMPLATES)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(_TEMPLATE_NAME)

    context: dict[str, Any] = {
        "source": source,
        "lines": summary.get("lines", 0),
        "user_agents": summary.get("userAgents", {}),
        "allow": summary.get("allow", []),
        "disallow": summary.get("disallow", []),
        "crawl_delay": summary.get("crawlDelay", []),
        "sitemaps": summary.get("sitemaps", []),
        "comments": summary.get("comments", []),
        "syntax_errors": summary.get("syntaxErrors", []),
        "headers": summary.get("headers", []),
        "meta_tags": summary.get("metaTags", []),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
