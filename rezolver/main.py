"""Rezolver CLI - resolve resource paths from the command line."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from .chain import LoadersChain
from .console import console
from .console import err_console
from .errors import InvalidConfigurationError
from .logging_setup import init_json_logging
from .rezolver import Rezolver
from .settings import RezolverSettings
from .settings import SettingsPaths
from .settings import add_local_fallback_paths

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 1
EXIT_UNRESOLVED = 2


def _load_chain(settings_file: Path | None) -> LoadersChain:
    """Build the chain from an explicit settings file or the scope files.

    Exits with status 1 on invalid settings.
    """
    paths = SettingsPaths.single(settings_file) if settings_file else SettingsPaths.default()
    try:
        return RezolverSettings(paths).build_chain()
    except InvalidConfigurationError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(EXIT_CONFIG_ERROR)


settings_option = click.option(
    "--settings",
    "settings_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file to use instead of ~/.rezolver and .rezolver settings",
)


@click.group()
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write JSONL diagnostics to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for --log-file (default: REZOLVER_LOG_LEVEL or INFO)",
)
@click.version_option(package_name="rezolver")
def cli(log_file: str | None, log_level: str | None):
    """Resolve resource paths through a chain of loaders.

    Paths may carry a scheme: classpath:META-INF/app.properties,
    file:///etc/app.yaml. Unscoped paths are tried against every loader.
    """
    if log_file:
        init_json_logging(log_file, log_level)


@cli.command("resolve")
@click.argument("paths", nargs=-1, required=True)
@settings_option
@click.option(
    "--fallback",
    "-f",
    "fallback_paths",
    multiple=True,
    help="Extra fallback path for local loaders (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--fail-unresolved", is_flag=True, help="Exit with status 2 if any path is unresolved")
def resolve_cmd(
    paths: tuple[str, ...],
    settings_file: Path | None,
    fallback_paths: tuple[str, ...],
    as_json: bool,
    fail_unresolved: bool,
):
    """Resolve one or more resource PATHS.

    Examples:

        \b
        rezolver resolve classpath:META-INF/app.properties
        rezolver resolve app.yaml -f /etc/myapp -f ~/.myapp
        rezolver resolve --json file:///tmp/data.csv
    """
    chain = _load_chain(settings_file)
    add_local_fallback_paths(chain, fallback_paths)
    rezolver = Rezolver.builder().with_chain(chain).build()

    results = [rezolver.resolve(path) for path in paths]

    if as_json:
        click.echo(json.dumps([info.to_dict() for info in results], indent=2))
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Path", style="cyan", overflow="fold")
        table.add_column("Status", no_wrap=True)
        table.add_column("Location", overflow="fold")
        table.add_column("Loader", style="dim", no_wrap=True)
        for info in results:
            status = "[green]resolved[/green]" if info.is_resolved else "[yellow]unresolved[/yellow]"
            table.add_row(escape(info.search_path), status, escape(info.location or "-"), info.source_entity)
        console.print(table)

    unresolved = [info for info in results if not info.is_resolved]
    if unresolved:
        logger.info(f"{len(unresolved)} of {len(results)} path(s) unresolved")
        if fail_unresolved:
            sys.exit(EXIT_UNRESOLVED)


@cli.command("chain")
@settings_option
def chain_cmd(settings_file: Path | None):
    """Show the configured loaders chain in resolution order."""
    chain = _load_chain(settings_file)

    if not len(chain):
        console.print("[yellow]The loaders chain is empty[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Loader", style="cyan", no_wrap=True)
    table.add_column("Scheme", no_wrap=True)
    table.add_column("Fallback paths", overflow="fold")
    table.add_column("Details", style="dim", overflow="fold")
    for index, loader in enumerate(chain, start=1):
        table.add_row(
            str(index),
            loader.name,
            loader.url_scheme,
            escape(", ".join(loader.fallback_paths) or "-"),
            escape(repr(loader)),
        )
    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
