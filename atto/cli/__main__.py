"""Atto CLI - Main Entry Point.

The `atto` command inspects and serves an application.

Commands:
    routes   - List registered routes in match order
    match    - Show which route a path and method resolve to
    assemble - Build the URL of a named route
    serve    - Serve the application with uvicorn

APP arguments use the ``module:attribute`` form. The attribute may be an
``Atto`` instance or a callable returning one.
"""

import importlib
import json
import logging
import os
import sys
from typing import Dict, Optional, Tuple

import click

from . import __cli_name__
from .utils.colors import success, error, info, dim, kv, table, _CHECK, _CROSS
from .. import __version__
from ..app import Atto
from ..faults import Fault
from ..logging import configure_logging

logger = logging.getLogger("atto.cli")


class AttoGroup(click.Group):
    """Click group listing its commands in aligned, coloured columns."""

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=48)))

        if commands:
            with formatter.section(click.style("Commands", fg="cyan", bold=True)):
                max_len = max(len(c[0]) for c in commands) + 2
                for name, help_text in commands:
                    formatter.write(f"  {click.style(name.ljust(max_len), fg='green')} {help_text}\n")


def load_app(target: str) -> Atto:
    """
    Import ``module:attribute`` and return the application it names.

    Raises:
        click.BadParameter: The target cannot be imported or is not an app
    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"'{target}' is not in module:attribute form", param_hint="APP")

    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"cannot import '{module_name}': {exc}", param_hint="APP") from exc

    app = module
    for part in attribute.split("."):
        try:
            app = getattr(app, part)
        except AttributeError:
            raise click.BadParameter(f"'{module_name}' has no attribute '{attribute}'", param_hint="APP") from None

    if not isinstance(app, Atto) and callable(app):
        app = app()
    if not isinstance(app, Atto):
        raise click.BadParameter(f"'{target}' is not an Atto application", param_hint="APP")
    return app


def parse_pairs(pairs: Tuple[str, ...], option: str) -> Dict[str, str]:
    """Turn ``key=value`` strings into a dict."""
    result: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"'{pair}' is not in key=value form", param_hint=option)
        result[key] = value
    return result


@click.group(cls=AttoGroup)
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=None, help='Log level')
@click.pass_context
def cli(ctx, verbose: bool, log_level: Optional[str]):
    """Inspect and serve Atto applications.

    \b
    Quick start:
      atto routes myapp:app
      atto match myapp:app /blog/2
      atto assemble myapp:app blog -p page=2
      atto serve myapp:app
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    if verbose or log_level:
        configure_logging("DEBUG" if verbose else log_level)


@cli.command('routes')
@click.argument('app_target', metavar='APP')
@click.option('--json', 'as_json', is_flag=True, help='Print routes as JSON')
def routes(app_target: str, as_json: bool):
    """
    List routes in match order.

    Examples:
      atto routes myapp:app
      atto routes myapp:app --json
    """
    app = load_app(app_target)
    entries = [route.to_dict() for route in app.iter_routes()]

    if as_json:
        click.echo(json.dumps(entries, indent=2))
        return

    if not entries:
        dim("No routes registered")
        return

    table(
        ["Name", "Methods", "Pattern", "View"],
        [
            [
                entry["name"],
                "|".join(entry["methods"]) or "ANY",
                entry["pattern"],
                entry["view"] or "-",
            ]
            for entry in entries
        ],
    )
    cache = app.routes.cache
    stats = cache.get_stats()
    dim(f"{len(cache)}/{cache.max_size} patterns cached, hit rate {stats.hit_rate:.0%}")


@cli.command('match')
@click.argument('app_target', metavar='APP')
@click.argument('path')
@click.option('--method', '-m', default='GET', show_default=True, help='Request method')
def match(app_target: str, path: str, method: str):
    """
    Show the route a path resolves to.

    Examples:
      atto match myapp:app /blog/2
      atto match myapp:app /blog -m POST
    """
    app = load_app(app_target)
    try:
        result = app.match(path, method)
    except Fault as exc:
        error(f"{_CROSS} {exc.message}")
        sys.exit(1)

    if result is None:
        error(f"{_CROSS} No route matches {method.upper()} {path}")
        sys.exit(1)

    success(f"{_CHECK} {method.upper()} {path}")
    kv("route", result.name)
    kv("pattern", result.route.pattern)
    for name, value in result.params.items():
        kv(name, value)


@cli.command('assemble')
@click.argument('app_target', metavar='APP')
@click.argument('name')
@click.option('--param', '-p', 'params', multiple=True, help='Parameter as key=value')
@click.option('--query', '-q', 'query', multiple=True, help='Query pair as key=value')
def assemble(app_target: str, name: str, params: Tuple[str, ...], query: Tuple[str, ...]):
    """
    Build the URL of a named route.

    Examples:
      atto assemble myapp:app blog -p page=2
      atto assemble myapp:app search -q q=atto
    """
    app = load_app(app_target)
    try:
        url = app.assemble(name, parse_pairs(params, "--param"), parse_pairs(query, "--query"))
    except Fault as exc:
        error(f"{_CROSS} {exc.message}")
        sys.exit(1)
    click.echo(url)


@cli.command('serve')
@click.argument('app_target', metavar='APP')
@click.option('--host', default='127.0.0.1', show_default=True, help='Bind host')
@click.option('--port', default=8000, show_default=True, type=int, help='Bind port')
@click.pass_context
def serve(ctx, app_target: str, host: str, port: int):
    """
    Serve the application over HTTP with uvicorn.

    Examples:
      atto serve myapp:app
      atto serve myapp:app --port 8080
    """
    import uvicorn

    app = load_app(app_target)
    info(f"Serving {app_target} on http://{host}:{port}")
    try:
        uvicorn.run(
            app.asgi(),
            host=host,
            port=port,
            log_level="debug" if ctx.obj.get('verbose') else "info",
        )
    except KeyboardInterrupt:
        info(f"  {_CHECK} Server stopped")


def main():
    """Entry point for `atto` command."""
    cli(obj={})


if __name__ == '__main__':
    main()
