# === FILE: dir_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа DirScout для командной строки.

Команды:
  index     Построить таблицу ссылок для листинга и вывести/сохранить её
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда index опции:
  --format FORMAT     text (по умолчанию) или json
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-листинг в файл
  --template DIR      Папка с Jinja2-шаблоном listing.html.j2
  --concurrency N     Число одновременных HEAD-запросов
  --timeout SEC       Таймаут всей индексации (секунд)

Пример:
  dir-scout index http://mirror.example.org/pub/ --format json
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from dir_scout import __version__
from dir_scout.config import _DEFAULT_CFG, IndexerConfig, load_config
from dir_scout.crawler.errors import BuildError
from dir_scout.engine import Engine
from dir_scout.logger import init_logging
from dir_scout.report.html_report import render_html
from dir_scout.report.json_report import render_json, table_to_dict
from dir_scout.report.text_report import render_text

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='DirScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд DirScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        if config_path is not None or _DEFAULT_CFG.exists():
            cfg = load_config(config_path)
        else:
            cfg = IndexerConfig()
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('index', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--format', '-f', 'output_format',
    default='text', show_default=True,
    type=click.Choice(['text', 'json']),
    help='Формат вывода в stdout'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-листинг в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном listing.html.j2'
)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Число одновременных HEAD-запросов (override concurrency)'
)
@click.option(
    '--timeout', 'index_timeout',
    type=float,
    default=None,
    help='Таймаут всей индексации (секунд)'
)
@click.pass_context
def index(ctx, url, output_format, json_output, html_output, template_dir, concurrency, index_timeout):
    """Построить таблицу ссылок для URL (или base_url из конфига)."""
    cfg = ctx.obj['config']
    if concurrency is not None:
        cfg = cfg.model_copy(update={'concurrency': concurrency})
    if not url and cfg.base_url is None:
        print_error('Не указан URL: передайте его аргументом или задайте base_url в конфиге')

    try:
        table = Engine(cfg).run(url, timeout=index_timeout)
    except asyncio.TimeoutError:
        print_error(f'Индексация не завершена за {index_timeout} секунд')
    except BuildError as e:
        print_error(f'Ошибка построения таблицы: {e}')

    if output_format == 'json':
        click.echo(json.dumps(table_to_dict(table), ensure_ascii=False, indent=2))
    else:
        click.echo(render_text(table))

    if json_output:
        try:
            saved_json = render_json(table, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(table, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


def main():
    cli(prog_name='dir-scout')


if __name__ == "__main__":
    main()
