# === FILE: robots_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для разбора robots.txt через командную строку.

Команды:
  parse FILE   Разобрать robots.txt из файла
  text         Разобрать robots.txt из stdin
  fetch URL    Загрузить robots.txt (и X-Robots-Tag / meta-теги страницы) по URL
  config       Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Опции команд parse/text/fetch:
  --agent NAME        Показать директивы только для этого User-agent (и его группы)
  --expand            Развернуть директивы по каждому агенту группы
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)

Пример:
  robots-scout parse robots.txt --agent GPT-User --expand --pretty
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click

from robots_scout import __version__
from robots_scout.config import RobotsConfig, load_config
from robots_scout.fetcher import ContentTooLargeError, RobotsFetcher
from robots_scout.logger import init_logging
from robots_scout.parser.robots_parser import parse_file, parse_text
from robots_scout.report.html_report import render_html
from robots_scout.report.json_report import render_json
from robots_scout.response import ParseResponse

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


async def fetch_robots(url: str, cfg: RobotsConfig) -> ParseResponse:
    """Загружает и разбирает robots.txt по URL."""
    async with RobotsFetcher(cfg) as fetcher:
        return await fetcher.parse_url(url)


def output_options(func):
    """Опции вывода, общие для parse/text/fetch."""
    options = [
        click.option('--agent', '-a', 'agent', default=None,
                     help='Фильтр по User-agent (учитывает группу).'),
        click.option('--expand', '-e', is_flag=True,
                     help='Развернуть директивы по каждому агенту группы.'),
        click.option('--json', '-j', 'json_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить JSON-отчёт в файл'),
        click.option('--html', '-h', 'html_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить HTML-отчёт в файл'),
        click.option('--pretty', is_flag=True,
                     help='Преформатировать JSON-вывод (отступ 2)'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def emit(
    response: ParseResponse,
    source: str,
    agent: Optional[str],
    expand: bool,
    json_output: Optional[Path],
    html_output: Optional[Path],
    pretty: bool,
) -> None:
    """Печатает сводку в stdout или сохраняет отчёты."""
    summary = response.records.to_dict(agent, expand_agents=expand)
    summary['size'] = response.size

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        try:
            click.echo(json.dumps(summary, ensure_ascii=False, indent=indent))
        except TypeError as e:
            print_error(f'Ошибка сериализации JSON: {e}')
        return

    if json_output:
        try:
            saved_json = render_json(summary, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(summary, html_output, source=source)
            click.echo(f'HTML report: {saved_html}')
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='RobotsScout, version %(version)s')
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
    """Группа команд RobotsScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('parse', context_settings=CONTEXT_SETTINGS)
@click.argument('path', type=click.Path(dir_okay=False, path_type=Path))
@output_options
@click.pass_context
def parse_cmd(ctx, path, agent, expand, json_output, html_output, pretty):
    """Разобрать robots.txt из файла."""
    cfg = ctx.obj['config']
    try:
        response = parse_file(path, max_size=cfg.max_file_size)
    except OSError as e:
        print_error(f'Ошибка чтения файла: {e}')
    emit(response, str(path), agent, expand, json_output, html_output, pretty)


@cli.command('text', context_settings=CONTEXT_SETTINGS)
@output_options
@click.pass_context
def text_cmd(ctx, agent, expand, json_output, html_output, pretty):
    """Разобрать robots.txt из stdin."""
    cfg = ctx.obj['config']
    content = click.get_text_stream('stdin').read()
    response = parse_text(content, max_size=cfg.max_file_size)
    emit(response, '<stdin>', agent, expand, json_output, html_output, pretty)


@cli.command('fetch', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@output_options
@click.option(
    '--timeout', 'fetch_timeout',
    type=float,
    default=None,
    help='Таймаут всей загрузки (секунд)'
)
@click.pass_context
def fetch_cmd(ctx, url, agent, expand, json_output, html_output, pretty, fetch_timeout):
    """Загрузить и разобрать robots.txt по URL."""
    cfg = ctx.obj['config']
    try:
        if fetch_timeout:
            response = asyncio.run(
                asyncio.wait_for(fetch_robots(url, cfg), timeout=fetch_timeout)
            )
        else:
            response = asyncio.run(fetch_robots(url, cfg))
    except asyncio.TimeoutError:
        print_error(f'Загрузка не завершена за {fetch_timeout} секунд')
    except ContentTooLargeError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Ошибка при загрузке: {e}')
    emit(response, url, agent, expand, json_output, html_output, pretty)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
