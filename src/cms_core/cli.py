"""Command line interface for the content core."""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .application import ContentController, ReportController, UserController
from .domain.value_objects import ExportFormat
from .exceptions import CmsError, ExportError
from .models.config import Config, create_default_config, load_config
from .sample_data import build_taxonomy, load_sample_content

console = Console()


def _configure_logging(config: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _bootstrap(config_path: Optional[Path], username: str, password: str,
               verbose: bool) -> Tuple[Config, ContentController, ReportController]:
    """Load config, log in and build controllers over the demo catalogue."""
    config = load_config(config_path) if config_path else Config.default()
    _configure_logging(config, verbose)

    users = UserController(config.accounts)
    user = users.login(username, password)
    if user is None:
        raise click.ClickException(f"Invalid credentials for {username!r}")

    contents = ContentController()
    contents.set_current_actor(user)
    if config.load_sample_data:
        load_sample_content(contents, build_taxonomy())
    return config, contents, ReportController(contents)


def _credentials(func):
    func = click.option('--password', '-p', default='admin123', show_default=True,
                        help='Password for --user')(func)
    func = click.option('--user', '-u', 'username', default='admin', show_default=True,
                        help='Account to log in as')(func)
    func = click.option('--config', type=click.Path(exists=True, path_type=Path),
                        help='Configuration file path')(func)
    func = click.option('--verbose', is_flag=True, help='Verbose output')(func)
    return func


@click.group()
@click.version_option(package_name="cms-core")
def cli():
    """Manage editorial content and produce reports."""
    pass


@cli.command()
@_credentials
def demo(config: Optional[Path], username: str, password: str, verbose: bool):
    """Show the demo catalogue and its statistics."""
    try:
        cfg, contents, reports = _bootstrap(config, username, password, verbose)
    except CmsError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    actor = contents.current_actor
    console.print(Panel(
        f"Logged in as [bold]{actor.username}[/bold] ({actor.role.value})\n"
        f"Permissions: {', '.join(sorted(p.value for p in actor.permissions))}",
        title="Content Manager",
    ))

    table = Table(title="Content")
    table.add_column("Type", style="cyan")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Category")
    table.add_column("Status")
    for item in contents.get_all_content():
        table.add_row(item.content_type.value, item.title, item.author,
                      item.category.name, item.status.value)
    console.print(table)

    stats_table = Table(title="Statistics")
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Count", justify="right")
    for label, value in reports.get_statistics().items():
        stats_table.add_row(label, str(value))
    console.print(stats_table)

    recent = reports.get_most_recent_content(cfg.reports.recent_limit)
    console.print(f"\n[bold]Most recent:[/bold] {', '.join(item.title for item in recent)}")


@cli.command()
@_credentials
@click.option('--format', 'export_format', type=click.Choice(['csv', 'text'], case_sensitive=False),
              help='Export format (defaults to the configured one)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write the report to this file instead of the console')
def report(config: Optional[Path], username: str, password: str, verbose: bool,
           export_format: Optional[str], output: Optional[Path]):
    """Generate the general content report and export it."""
    try:
        cfg, _, reports = _bootstrap(config, username, password, verbose)
        generated = reports.generate_content_report()
        fmt = ExportFormat.parse(export_format or cfg.reports.default_export_format)
        text = reports.export_report(generated.id, fmt)

        if output is None:
            click.echo(text, nl=False)
            return
        try:
            output.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Cannot write {output}: {e}") from e
        console.print(f"[green]Report written to {output}[/green]")
    except CmsError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@cli.command(name="init-config")
@click.argument('path', type=click.Path(dir_okay=False, path_type=Path))
def init_config(path: Path):
    """Write a default configuration file to PATH."""
    if path.exists() and not click.confirm(f"{path} exists. Overwrite?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    create_default_config(path)
    console.print(f"[green]Default configuration written to {path}[/green]")


def main():
    """Entry point for the cms console script."""
    cli()


if __name__ == '__main__':
    main()
