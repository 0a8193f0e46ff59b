#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteHarvest через командную строку.

Команды:
  crawl     Обойти сайт по конфигу и сохранить/вывести результат
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --limit INT         Макс. число страниц (override max_pages)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда crawl опции:
  --seed URL          Стартовая страница (override seed_url)
  --delay-ms INT      Пауза между запросами (override politeness_delay_ms)
  --json PATH         Сохранить JSON-отчёт в файл (default: output из конфига)
  --html PATH         Дополнительно сохранить HTML-отчёт
  --stdout            Вывести JSON в stdout вместо файла
  --pretty/--compact  Форматирование JSON (по умолчанию с отступом 2)

Дополнительно:
  --version, -v       Показать версию SiteHarvest

Пример:
  site-harvest --limit 50 crawl --seed https://blog.holochain.org/ --json scraped_data.json
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_harvest import __version__
from site_harvest.config import load_config
from site_harvest.engine import start_crawl
from site_harvest.errors import SerializationError
from site_harvest.logger import init_logging
from site_harvest.report.html_report import render_html
from site_harvest.report.json_report import dumps_json, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)

@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteHarvest, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=0),
    default=None,
    help='Макс. число страниц (override max_pages)'
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
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, limit, log_level, log_file, log_format):
    """Группа команд SiteHarvest CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path).with_overrides(max_pages=limit)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg

@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--seed', 'seed_url', default=None, help='Стартовая страница (override seed_url)')
@click.option(
    '--delay-ms', 'delay_ms',
    type=click.IntRange(min=0),
    default=None,
    help='Пауза между запросами, мс (override politeness_delay_ms)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл (default: output из конфига)'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option('--stdout', 'to_stdout', is_flag=True, help='Вывести JSON в stdout вместо файла')
@click.option('--pretty/--compact', default=True, show_default=True, help='Отступ 2 в JSON-выводе')
@click.pass_context
def crawl_command(ctx, seed_url, delay_ms, json_output, html_output, to_stdout, pretty):
    """Обойти сайт и сохранить собранные разделы."""
    try:
        cfg = ctx.obj['config'].with_overrides(seed_url=seed_url, politeness_delay_ms=delay_ms)
    except ValidationError as e:
        print_error(f'Некорректные параметры: {e}')

    # обход не бросает исключений из-за отдельных страниц
    data = start_crawl(cfg)

    if to_stdout:
        click.echo(dumps_json(data, pretty=pretty))
        return

    click.echo(f'Scraped {len(data)} pages')
    try:
        saved_json = render_json(data, json_output or cfg.output, pretty=pretty)
        click.echo(f'JSON report: {saved_json}')
        if html_output:
            saved_html = render_html(data, html_output)
            click.echo(f'HTML report: {saved_html}')
    except SerializationError as e:
        print_error(f'Ошибка при сохранении отчёта: {e}')

@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))

if __name__ == "__main__":
    cli()
