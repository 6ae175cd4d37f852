# sitemap_scout/report/text_report.py

"""
Текстовый отчёт: одна строка на страницу, ``URL: <url>, Status Code: <code>``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from sitemap_scout.crawler.models import PageResult
from sitemap_scout.logger import logger

DEFAULT_OUTPUT = Path("Scraped_Site.txt")


def format_line(result: PageResult) -> str:
    return f"URL: {result.url}, Status Code: {result.status_code}"


def render_text(results: Iterable[PageResult], output_path: Union[Path, str] = DEFAULT_OUTPUT) -> Path:
    """
    Сохраняет результаты в текстовый файл и возвращает его путь.

    :param results: последовательность PageResult
    :param output_path: путь к файлу (по умолчанию Scraped_Site.txt)
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Writing results to file %s...", output)
    with output.open("w", encoding="utf-8") as f:
        for result in results:
            f.write(format_line(result) + "\n")
    return output
