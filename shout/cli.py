# === FILE: shout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для записи строк лога через командную строку.

Команды:
  log       Записать одно сообщение
  pipe      Записать каждую строку stdin как отдельное сообщение
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH        Путь к YAML/JSON-конфигу (по умолчанию встроенные значения)
  --destination PATH   Назначение логов (%1$s - unix-время, %2$s - дата)
  --mode MODE          Режим открытия файла (w, a, r+, w+, a+, x, x+, c, c+)
  --log-level LEVEL    Уровень диагностических сообщений самого shout
  --log-file PATH      Файл для диагностических сообщений (ротация по 1 МБ)

Дополнительно:
  --version, -v        Показать версию Shout

Пример:
  shout --destination app-%1$s.log log info "Hello world" -x user=bob
"""
import sys
from pathlib import Path
from typing import Dict, Tuple

import click

from shout import __version__
from shout.config import WriteMode, load_config, update_config
from shout.errors import ShoutError
from shout.logger import init_logging
from shout.shout import Shout

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def parse_context(pairs: Tuple[str, ...]) -> Dict[str, str]:
    """Разбирает пары KEY=VALUE в словарь контекста."""
    context: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f'ожидается KEY=VALUE, получено {pair!r}', param_hint='--context')
        context[key] = value
    return context


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Shout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--destination', '-d', 'destination',
    default=None,
    help='Назначение логов: путь к файлу, <stdout> или <stderr>.'
)
@click.option(
    '--mode', '-m', 'mode',
    default=None,
    type=click.Choice([m.value for m in WriteMode]),
    help='Режим открытия файла.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень диагностических сообщений'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Файл для диагностических сообщений (только stderr, если не указан)'
)
@click.pass_context
def cli(ctx, config_path, destination, mode, log_level, log_file):
    """Группа команд Shout CLI."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
        if destination is not None:
            update_config(cfg, destination=destination)
        if mode is not None:
            update_config(cfg, write_mode=mode)
    except (OSError, ShoutError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('log', context_settings=CONTEXT_SETTINGS)
@click.argument('level')
@click.argument('message')
@click.option(
    '--context', '-x', 'context',
    multiple=True,
    help='Контекст сообщения в виде KEY=VALUE (можно повторять)'
)
@click.pass_context
def log_message(ctx, level, message, context):
    """Записать одно сообщение уровня LEVEL."""
    fields = parse_context(context)
    try:
        with Shout(config=ctx.obj['config']) as logger:
            logger.log(level, message, fields)
    except ShoutError as e:
        print_error(f'Ошибка записи: {e}')


@cli.command('pipe', context_settings=CONTEXT_SETTINGS)
@click.argument('level')
@click.option(
    '--rotate-interval', 'rotate_interval',
    type=int,
    default=None,
    help='Включить ротацию с указанным интервалом (секунд)'
)
@click.pass_context
def pipe(ctx, level, rotate_interval):
    """Записать каждую строку stdin как сообщение уровня LEVEL."""
    stdin = click.get_text_stream('stdin')
    try:
        with Shout(config=ctx.obj['config']) as logger:
            if rotate_interval is not None:
                logger.set_rotation_interval(rotate_interval)
                logger.set_rotate(True)
            for line in stdin:
                logger.log(level, line.rstrip('\n'))
    except ShoutError as e:
        print_error(f'Ошибка записи: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
