# File: sitemap_scout/parser/sitemap_parser.py
"""sitemap_scout.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

import gzip
from typing import List, Sequence, Tuple, Union

from lxml import etree

from sitemap_scout.errors import ParseError

__all__: Sequence[str] = ("SITEMAP_NS", "parse_sitemap", "classify_urls", "is_sitemap_url")

_GZIP_MAGIC = b"\x1f\x8b"

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
# <loc> из расширений (image:loc, video:loc) не являются записями sitemap
_LOC_TAGS = (f"{{{SITEMAP_NS}}}loc", "loc")


def _as_bytes(content: Union[str, bytes]) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    if content[:2] == _GZIP_MAGIC:
        try:
            return gzip.decompress(content)
        except (OSError, EOFError) as exc:
            raise ParseError(f"Повреждённый gzip sitemap: {exc}") from exc
    return content


def parse_sitemap(content: Union[str, bytes]) -> List[str]:
    """Разбирает sitemap или sitemap-index и возвращает URL из тегов <loc>.

    Учитываются только <loc> в пространстве имён sitemap или без него;
    одноимённые теги расширений (например, image:loc) пропускаются.

    Args:
        content: тело ответа (str или bytes, допускается gzip).

    Returns:
        Список URL в порядке документа.

    Raises:
        ParseError: пустое тело или документ, который не удалось восстановить.

    Пример:
    ```python
    from sitemap_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        urls = parse_sitemap(f.read())
    print(urls)
    ```
    """
    data = _as_bytes(content)
    if not data.strip():
        raise ParseError("Пустой sitemap")

    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ParseError(f"Не удалось разобрать sitemap: {exc}") from exc
    if root is None:
        raise ParseError("Не удалось разобрать sitemap: документ не содержит элементов")

    urls: List[str] = []
    for loc in root.iter(*_LOC_TAGS):
        text = "".join(loc.itertext()).strip()
        if text:
            urls.append(text)
    return urls


def is_sitemap_url(url: str) -> bool:
    """Грубая эвристика: всё, что содержит "xml", считается ссылкой на sitemap."""
    return "xml" in url


def classify_urls(urls: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Делит URL на (sitemaps, pages) с сохранением порядка, без дедупликации."""
    sitemaps: List[str] = []
    pages: List[str] = []
    for url in urls:
        (sitemaps if is_sitemap_url(url) else pages).append(url)
    return sitemaps, pages
