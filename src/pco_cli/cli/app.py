"""
Main CLI application entry point.

This module contains the root Typer application, the global options and the
``config`` and ``health`` commands. Product command groups live in
``pco_cli.cli.commands``.
"""

from typing import Optional

import typer
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from pco_cli import VERSION
from pco_cli.config.env_loader import EnvFileLoader
from pco_cli.config.hierarchical import HierarchicalConfigLoader, SettingScope, parse_setting_value
from pco_cli.config.settings import OUTPUT_FORMATS, PlanningCenterSettings
from .commands import GROUPS
from .common import CliContext, console, fail, get_cli_context, get_settings, run_async, setup_logging

# Create the main Typer application
app = typer.Typer(
    name="pco",
    help="Planning Center command-line interface",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

for group in GROUPS:
    app.add_typer(group.app)


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"[bold blue]pco[/bold blue] version [green]{VERSION}[/green]")
        raise typer.Exit()


def format_callback(value: Optional[str]) -> Optional[str]:
    if value is not None and value.lower() not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"must be one of: {', '.join(OUTPUT_FORMATS)}")
    return value.lower() if value else value


@app.callback()
def root_callback(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(
        None,
        "--token",
        "-t",
        help="Personal Access Token (app_id:secret); overrides PLANNING_CENTER_PAT",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        callback=format_callback,
        help="Output format: table, json or csv",
    ),
    detailed_logging: bool = typer.Option(False, "--detailed-logging", help="Log request and response bodies"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Planning Center command-line interface.

    Query People, Calendar, Check-Ins, Giving, Groups, Publishing,
    Registrations, Services and Webhooks from the terminal.
    """
    ctx.obj = CliContext(
        token=token,
        output_format=output_format,
        detailed_logging=detailed_logging,
        verbose=verbose,
    )
    setup_logging(verbose=verbose, detailed_logging=detailed_logging)


@app.command("config")
def config_command(
    ctx: typer.Context,
    show: bool = typer.Option(False, "--show", "-s", help="Show current configuration"),
    show_sources: bool = typer.Option(False, "--sources", help="Show configuration sources"),
    set_key: Optional[str] = typer.Option(None, "--set", help="Set configuration key=value"),
    scope: str = typer.Option("user", "--scope", help="Configuration scope (user, project)"),
    init: bool = typer.Option(False, "--init", help="Create an example .env file"),
) -> None:
    """Manage pco configuration with hierarchical settings."""
    try:
        if init:
            _init_env_file(scope)
            return

        if set_key:
            _set_config_value(set_key, scope)
            return

        if show_sources:
            _show_config_sources()
            return

        if show:
            _show_current_config(get_cli_context(ctx))
            return
    except (ValueError, OSError) as e:
        fail(str(e))

    # Default: show help
    console.print("[yellow]Use one of the following options:[/yellow]")
    console.print("  --show          Show current configuration")
    console.print("  --sources       Show configuration sources and files")
    console.print("  --set <key=val> Set configuration value")
    console.print("  --init          Create an example .env file")


def _show_current_config(cli: CliContext) -> None:
    """Show effective settings with secrets masked."""
    settings = get_settings(cli)
    loader = HierarchicalConfigLoader()
    loader.load_all_settings()

    table = Table(title="Current Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    for key, value in settings.to_dict().items():
        table.add_row(key, "Not set" if value is None else str(value), _source_of(loader, key))

    console.print(table)


def _source_of(loader: HierarchicalConfigLoader, key: str) -> str:
    for scope in (SettingScope.ENVIRONMENT, SettingScope.PROJECT, SettingScope.USER):
        settings_file = loader.get_settings_file(scope)
        if settings_file and key in settings_file.settings:
            return scope.value
    return "default"


def _show_config_sources() -> None:
    """Show configuration sources and their status."""
    loader = HierarchicalConfigLoader()
    loader.load_all_settings()
    summary = loader.get_config_summary()

    table = Table(title="Configuration Sources", show_header=True, header_style="bold magenta")
    table.add_column("Scope", style="cyan", no_wrap=True)
    table.add_column("Path", style="yellow")
    table.add_column("Exists", style="green")
    table.add_column("Settings", style="blue")
    table.add_column("Errors", style="red")

    for scope in ("default", "user", "project", "environment"):
        if scope in summary["sources"]:
            source = summary["sources"][scope]
            table.add_row(
                scope,
                source["path"],
                "✓" if source["exists"] else "✗",
                str(source["settings_count"]),
                str(len(source["errors"])),
            )

    console.print(table)

    env_loader = EnvFileLoader()
    env_file = env_loader.load_env_file()
    console.print(Panel(
        f"Environment File: {env_file or 'None found'}\n"
        f"Variables Loaded: {len(env_loader.get_loaded_vars())}",
        title="Environment Configuration",
        border_style="blue",
    ))

    if summary["errors"]:
        console.print(Panel("\n".join(summary["errors"]), title="Configuration Errors", border_style="red"))


def _parse_scope(scope: str) -> SettingScope:
    try:
        parsed = SettingScope(scope.lower())
    except ValueError:
        raise ValueError(f"Invalid scope '{scope}'. Use 'user' or 'project'") from None
    if parsed not in (SettingScope.USER, SettingScope.PROJECT):
        raise ValueError(f"Invalid scope '{scope}'. Use 'user' or 'project'")
    return parsed


def _set_config_value(set_key: str, scope: str) -> None:
    if "=" not in set_key:
        raise ValueError("Use format --set key=value")
    key, value = set_key.split("=", 1)
    key = key.strip()

    parsed = parse_setting_value(value.strip())
    if key in PlanningCenterSettings.model_fields:
        try:
            settings = PlanningCenterSettings(_env_file=None, **{key: parsed})
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e
        # Save the normalized value, e.g. an upper-cased log level
        parsed = getattr(settings, key)

    path = HierarchicalConfigLoader().set_value(_parse_scope(scope), key, parsed)
    console.print(f"[green]✓[/green] Set [cyan]{key}[/cyan] in {scope} settings ({path})")


def _init_env_file(scope: str) -> None:
    path = EnvFileLoader().create_example_env_file(scope=_parse_scope(scope).value)
    console.print(f"[green]✓[/green] Created example .env file: {path}")
    console.print("[dim]Edit it and set PLANNING_CENTER_PAT=app_id:secret[/dim]")


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Check connectivity and credentials against the API."""
    cli = get_cli_context(ctx)
    result = run_async(cli, lambda client: client.check_health())

    if result.is_healthy:
        console.print(f"[green]✓[/green] Planning Center API is healthy ({result.response_time_ms:.0f} ms)")
        return
    console.print(f"[red]✗[/red] Planning Center API is unhealthy: {result.error}")
    raise typer.Exit(1)


def main() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
