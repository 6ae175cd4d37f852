# File: sitemap_scout/parser/__init__.py
"""sitemap_scout.parser: Разбор sitemap и извлечение метаданных страниц."""
