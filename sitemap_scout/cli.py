# === FILE: sitemap_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SitemapScout через командную строку.

Команды:
  crawl     Обойти sitemap, загрузить страницы и сохранить отчёты
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --url URL           URL корневого sitemap (override seed_url)
  --depth INT         Максимальная глубина sitemap-индексов
  --concurrency INT   Число одновременных загрузок
  --walk-timeout SEC  Бюджет времени на обход sitemap
  --timeout SEC       Таймаут одного запроса
  --rate-interval SEC Интервал между запросами
  --seo               Извлекать title, h1 и meta description
  --output PATH       Текстовый отчёт (default: Scraped_Site.txt)
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --skip-preflight    Не проверять сеть и доступность URL

Дополнительно:
  --version, -v       Показать версию SitemapScout

Пример:
  sitemap-scout crawl --url https://example.com/sitemap.xml --seo --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from sitemap_scout import __version__
from sitemap_scout.config import load_config
from sitemap_scout.engine import crawl_site
from sitemap_scout.errors import CrawlerError
from sitemap_scout.logger import DEFAULT_FORMAT, init_logging, logger
from sitemap_scout.report import DEFAULT_OUTPUT, render_html, render_json, render_text
from sitemap_scout.utils import check_connection, validate_seed_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load(config_path, overrides=None):
    try:
        return load_config(config_path, overrides)
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


async def _preflight(cfg) -> None:
    await check_connection(cfg.connectivity_host, cfg.connectivity_port, cfg.connectivity_timeout)
    await validate_seed_url(str(cfg.seed_url), timeout=cfg.timeout)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SitemapScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='URL корневого sitemap')
@click.option('--depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Максимальная глубина sitemap-индексов')
@click.option('--concurrency', '-n', 'concurrency', type=click.IntRange(min=1), default=None,
              help='Число одновременных загрузок')
@click.option('--walk-timeout', 'walk_timeout', type=float, default=None,
              help='Бюджет времени на обход sitemap (секунд)')
@click.option('--timeout', 'timeout', type=float, default=None,
              help='Таймаут одного запроса (секунд)')
@click.option('--rate-interval', 'rate_interval', type=float, default=None,
              help='Интервал между запросами (секунд)')
@click.option('--seo', 'extract_metadata', is_flag=True,
              help='Извлекать title, h1 и meta description')
@click.option(
    '--output', '-o', 'text_output',
    default=str(DEFAULT_OUTPUT), show_default=True,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Текстовый отчёт'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном report.html.j2'
)
@click.option('--skip-preflight', is_flag=True, help='Не проверять сеть и доступность URL')
@click.pass_context
def crawl(ctx, url, max_depth, concurrency, walk_timeout, timeout, rate_interval,
          extract_metadata, text_output, json_output, html_output, template_dir, skip_preflight):
    """Обойти sitemap и загрузить найденные страницы."""
    overrides = {
        'seed_url': url,
        'max_depth': max_depth,
        'concurrency': concurrency,
        'walk_timeout': walk_timeout,
        'timeout': timeout,
        'rate_interval': rate_interval,
        'extract_metadata': extract_metadata or None,
    }
    cfg = _load(ctx.obj['config_path'], overrides)
    logger.info("URL to crawl: %s", cfg.seed_url)

    if not skip_preflight:
        try:
            asyncio.run(_preflight(cfg))
        except CrawlerError as e:
            print_error(f'Проверка перед запуском не пройдена: {e}')

    try:
        results = asyncio.run(crawl_site(cfg))
    except Exception as e:
        logger.exception("Crawl failed")
        print_error(f'Ошибка при обходе: {e}')

    logger.info("Scraped %d results", len(results))

    try:
        click.echo(f'Text report: {render_text(results, text_output)}')
        if json_output:
            click.echo(f'JSON report: {render_json(results, json_output)}')
        if html_output:
            click.echo(f'HTML report: {render_html(results, template_dir, html_output)}')
    except OSError as e:
        print_error(f'Ошибка при сохранении отчёта: {e}')

    click.echo(f'Scraped {len(results)} pages')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='URL корневого sitemap')
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _load(ctx.obj['config_path'], {'seed_url': url})
    click.echo(cfg.model_dump_json(indent=2))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
