# sitemap_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта SitemapScout.

Сериализация списка PageResult в файл.
"""
import json
from pathlib import Path
from typing import Iterable

from sitemap_scout.crawler.models import PageResult


def render_json(results: Iterable[PageResult], output_path: Path | str) -> Path:
    """
    Сохраняет результаты в формате JSON по указанному пути.

    :param results: последовательность PageResult
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from sitemap_scout.report.json_report import render_json
    report_path = render_json(results, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = [result.as_dict() for result in results]

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
