# robots_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта RobotsScout.

Сериализация сводки разбора robots.txt в файл.
"""
import json
from pathlib import Path
from typing import Any, Mapping


def render_json(summary: Mapping[str, Any], output_path: Path | str, pretty: bool = True) -> Path:
    """
    Сохраняет сводку summary в формате JSON по указанному пути.

    :param summary: результат RobotsRecords.to_dict()
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from robots_scout.report.json_report import render_json
    report_path = render_json(records.to_dict(), 'reports/robots.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(summary, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
