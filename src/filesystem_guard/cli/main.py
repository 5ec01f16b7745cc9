"""
Diagnostic CLI for filesystem-guard.

Lets an operator inspect platform conventions, check candidate paths
against a security policy and see how failure messages are classified.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from filesystem_guard import __version__
from filesystem_guard.errors import (
    ErrorHandler,
    FilesystemError,
    RichPresenter,
    classify,
    get_recovery_suggestions,
    get_user_friendly_message,
)
from filesystem_guard.errors.types import GuardConfigurationError
from filesystem_guard.platform import PlatformPaths, get_platform_info
from filesystem_guard.security import PathSecurityValidator
from filesystem_guard.settings import GuardConfig

# Load environment variables
load_dotenv()

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Setup rich logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _load_config(config_path: Optional[Path]) -> GuardConfig:
    if config_path is not None:
        return GuardConfig.from_file(config_path)
    return GuardConfig.from_env()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Filesystem guard - path security and error reporting."""
    setup_logging(verbose)


@cli.command()
def platform():
    """Show detected platform information."""
    info = get_platform_info()
    paths = PlatformPaths(info)

    table = Table(title="Platform")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Type", info.type.value)
    table.add_row("Path separator", info.path_separator)
    table.add_row("Home directory", escape(info.home_directory))
    table.add_row("Temp directory", escape(info.temp_directory))
    table.add_row("Shell", escape(paths.shell()))
    console.print(table)


@cli.command()
def defaults():
    """List the platform's baseline blocked paths."""
    for entry in PlatformPaths(get_platform_info()).default_blocked_paths():
        console.print(f"  • {escape(entry)}")


@cli.command()
@click.argument("paths", nargs=-1, required=True)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (YAML or JSON)",
)
@click.option(
    "--workspace",
    "-w",
    default=None,
    help="Workspace folder substituted for ${workspaceFolder}",
)
@click.option(
    "--baseline",
    is_flag=True,
    help="Check against the platform baseline only, ignoring any policy",
)
def check(
    paths: tuple[str, ...],
    config_path: Optional[Path],
    workspace: Optional[str],
    baseline: bool,
):
    """
    Check whether paths may be accessed.

    Exits with status 1 if any path is denied.

    Examples:

        fsguard check .git/config

        fsguard check src/main.py -w /home/alice/project

        fsguard check --baseline /etc/passwd
    """
    handler = ErrorHandler(RichPresenter(console))
    try:
        if baseline:
            validator = PathSecurityValidator()
        else:
            config = _load_config(config_path)
            validator = config.create_validator(workspace_folder=workspace or str(Path.cwd()))
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        handler.handle_error(GuardConfigurationError(f"Invalid configuration: {e}"))
        sys.exit(2)

    denied = 0
    for path in paths:
        try:
            validator.enforce(path)
            console.print(f"[green]allowed[/green] {escape(path)}")
        except FilesystemError as e:
            denied += 1
            console.print(f"[red]denied[/red]  {escape(path)}")
            handler.handle_error(e)

    if denied:
        sys.exit(1)


@cli.command(name="classify")
@click.argument("message")
@click.option("--name", default="", help="Error name, e.g. NetworkError")
def classify_message(message: str, name: str):
    """
    Classify a failure message.

    Examples:

        fsguard classify "ECONNREFUSED: connection refused"
    """
    category = classify(message, name)
    error = FilesystemError(message, category=category)

    console.print(f"Category: [bold]{category.value.upper()}[/bold]")
    console.print(f"Message:  {escape(get_user_friendly_message(error))}")
    for suggestion in get_recovery_suggestions(error):
        console.print(f"  • {escape(suggestion)}")


@cli.command(name="validate-config")
@click.argument(
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def validate_config(config_path: Path):
    """Validate a configuration file."""
    try:
        config = GuardConfig.from_file(config_path)
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(e))}")
        sys.exit(1)

    result = config.validate_settings()
    for error in result.errors:
        console.print(f"[red]error[/red]    {escape(error)}")
    for warning in result.warnings:
        console.print(f"[yellow]warning[/yellow]  {escape(warning)}")

    if not result.valid:
        sys.exit(1)
    console.print("[green]Configuration is valid.[/green]")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
