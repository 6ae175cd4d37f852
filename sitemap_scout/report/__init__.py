# File: sitemap_scout/report/__init__.py
"""sitemap_scout.report: Сохранение результатов обхода (текст, JSON, HTML)."""

from __future__ import annotations

from sitemap_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from sitemap_scout.report.json_report import render_json
from sitemap_scout.report.text_report import DEFAULT_OUTPUT, format_line, render_text

__all__ = [
    "DEFAULT_OUTPUT",
    "DEFAULT_TEMPLATE_DIR",
    "format_line",
    "render_html",
    "render_json",
    "render_text",
]
