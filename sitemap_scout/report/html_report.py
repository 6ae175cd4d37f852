# File: sitemap_scout/report/html_report.py
"""sitemap_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Iterable, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sitemap_scout.crawler.models import PageResult

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    results: Iterable[PageResult],
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        results: последовательность PageResult.
        template_dir: директория с шаблоном report.html.j2
            (None → встроенный шаблон).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    pages = list(results)
    context: dict[str, Any] = {
        "pages": pages,
        "total": len(pages),
        "status_counts": sorted(Counter(p.status_code for p in pages).items()),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
