"""
Shared plumbing for CLI commands.

Holds the per-invocation context, logging setup, client construction and
error reporting, plus factories that build the ``list`` and ``get``
commands every resource group offers.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, Callable, Coroutine, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from pco_cli.client import PlanningCenterClient, create_client
from pco_cli.config.settings import PlanningCenterSettings, load_settings
from pco_cli.core.client.errors import (
    ConfigurationError,
    PlanningCenterError,
    create_user_friendly_message,
)
from pco_cli.core.jsonapi import Page
from pco_cli.core.query import PaginationOptions, QueryParameters, parse_list, parse_where
from .formatters import FormatterOptions, get_formatter

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

TOKEN_HELP = (
    "Provide a Personal Access Token with --token, set PLANNING_CENTER_PAT "
    "(format app_id:secret), or add it to a .env file. Create one at "
    "https://api.planningcenteronline.com/oauth/applications"
)


@dataclass
class CliContext:
    """Options given to the root command."""

    token: Optional[str] = None
    output_format: Optional[str] = None
    detailed_logging: bool = False
    verbose: bool = False
    settings: Optional[PlanningCenterSettings] = None


def setup_logging(verbose: bool = False, detailed_logging: bool = False, level: Optional[str] = None) -> None:
    """Send log records to stderr through rich."""
    if verbose or detailed_logging:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, (level or "WARNING").upper(), logging.WARNING)

    root = logging.getLogger("pco_cli")
    root.setLevel(log_level)
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(console=err_console, show_path=verbose, rich_tracebacks=verbose)
    handler.setLevel(log_level)
    root.addHandler(handler)


def get_cli_context(ctx: typer.Context) -> CliContext:
    obj = ctx.find_root().obj
    if not isinstance(obj, CliContext):
        obj = CliContext()
        ctx.find_root().obj = obj
    return obj


def get_settings(cli: CliContext) -> PlanningCenterSettings:
    """Load settings once per invocation; --token wins over every other source."""
    if cli.settings is None:
        cli.settings = load_settings(
            personal_access_token=cli.token,
            detailed_logging=True if cli.detailed_logging else None,
        )
        if not (cli.verbose or cli.detailed_logging):
            setup_logging(level=cli.settings.log_level)
    return cli.settings


def output_format(cli: CliContext) -> str:
    if cli.output_format:
        return cli.output_format
    return get_settings(cli).default_output_format


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def run_async(cli: CliContext, action: Callable[[PlanningCenterClient], Coroutine[Any, Any, Any]]) -> Any:
    """
    Build a client, run ``action`` with it and report failures.

    Raises:
        typer.Exit: With status 1 on any API, configuration or input error
    """

    async def runner() -> Any:
        settings = get_settings(cli)
        async with create_client(settings) as client:
            return await action(client)

    try:
        return asyncio.run(runner())
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        console.print(f"[dim]{TOKEN_HELP}[/dim]")
        raise typer.Exit(1)
    except PlanningCenterError as e:
        logger.debug(f"Request failed: {e.to_dict()}")
        fail(create_user_friendly_message(e))
    except ValueError as e:
        fail(str(e))


def formatter_options(
    include_props: Optional[str],
    exclude_props: Optional[str],
    include_nulls: bool,
    output_file: Optional[Path],
) -> FormatterOptions:
    return FormatterOptions(
        include_properties=parse_list(include_props),
        exclude_properties=parse_list(exclude_props),
        include_null_values=include_nulls,
        output_file=output_file,
    )


def emit(cli: CliContext, data: Any, options: FormatterOptions) -> None:
    """Format records and print them."""
    text = get_formatter(output_format(cli)).format(data, options)
    typer.echo(text.rstrip("\n"))


# Command factories

PageFetcher = Callable[..., Awaitable[Page[Any]]]
ItemStreamer = Callable[..., AsyncIterator[Any]]
ItemGetter = Callable[..., Awaitable[Optional[Any]]]


def _list_impl(
    ctx: typer.Context,
    plural: str,
    fetch_page: PageFetcher,
    stream_items: Optional[ItemStreamer],
    parent_ids: List[str],
    page_size: Optional[int],
    page: int,
    where: Optional[str],
    order: Optional[str],
    include: Optional[str],
    include_props: Optional[str],
    exclude_props: Optional[str],
    output_file: Optional[Path],
    include_nulls: bool,
    all_pages: bool,
    max_items: Optional[int],
) -> None:
    cli = get_cli_context(ctx)
    options = formatter_options(include_props, exclude_props, include_nulls, output_file)

    if all_pages and stream_items is None:
        fail(f"--all is not supported for {plural}")

    try:
        size = page_size or get_settings(cli).default_page_size
        if all_pages:
            params = QueryParameters(where=parse_where(where), include=parse_list(include), order=order)
        else:
            params = QueryParameters.for_page(
                page, size, where=parse_where(where), include=parse_list(include), order=order
            )
    except ValueError as e:
        fail(str(e))

    if all_pages:
        pagination = PaginationOptions(page_size=size, max_items=max_items)

        async def collect(client: PlanningCenterClient) -> List[Any]:
            return [item async for item in stream_items(client, *parent_ids, params=params, options=pagination)]

        items = run_async(cli, collect)
        emit(cli, items, options)
        if not output_file:
            console.print(f"\nRetrieved {len(items)} {plural}")
        return

    async def one_page(client: PlanningCenterClient) -> Page[Any]:
        return await fetch_page(client, *parent_ids, params=params)

    result = run_async(cli, one_page)
    emit(cli, result.items, options)
    if result.items and not output_file:
        total = result.total_count if result.total_count is not None else len(result.items)
        console.print(f"\nShowing {len(result.items)} of {total} {plural} (Page {page})")


def _page_size_option():
    return typer.Option(None, "--page-size", min=1, max=100, help="Items per page (default from settings)")


def _page_option():
    return typer.Option(1, "--page", min=1, help="Page number")


def _where_option():
    return typer.Option(None, "--where", help="Filters as key=value,key2=value2")


def _order_option():
    return typer.Option(None, "--order", help="Sort attribute, prefix with - for descending")


def _include_option():
    return typer.Option(None, "--include", help="Related resources to include (comma separated)")


def _include_props_option():
    return typer.Option(None, "--include-props", help="Only show these properties (comma separated)")


def _exclude_props_option():
    return typer.Option(None, "--exclude-props", help="Hide these properties (comma separated)")


def _output_file_option():
    return typer.Option(None, "--output-file", "-o", help="Write output to this file")


def _include_nulls_option():
    return typer.Option(False, "--include-nulls", help="Show properties without a value")


def _all_option():
    return typer.Option(False, "--all", help="Fetch every page")


def _max_items_option():
    return typer.Option(None, "--max-items", min=1, help="Stop after this many items (with --all)")


def add_list_command(
    group: typer.Typer,
    plural: str,
    fetch_page: PageFetcher,
    stream_items: Optional[ItemStreamer] = None,
    parent: Optional[str] = None,
    name: str = "list",
) -> None:
    """
    Register a list command on ``group``.

    Args:
        group: Typer group to add the command to
        plural: Resource name used in messages, e.g. ``people``
        fetch_page: ``async (client, *parent_ids, params=...) -> Page``
        stream_items: ``(client, *parent_ids, params=..., options=...) -> async iterator``
            used by ``--all``
        parent: Label of a required parent id argument, e.g. ``person``
        name: Command name
    """
    help_text = f"List {plural} with optional filtering and pagination."

    if parent:

        @group.command(name, help=help_text)
        def list_child_command(
            ctx: typer.Context,
            parent_id: str = typer.Argument(..., metavar=f"{parent.upper()}_ID", help=f"ID of the {parent}"),
            page_size: Optional[int] = _page_size_option(),
            page: int = _page_option(),
            where: Optional[str] = _where_option(),
            order: Optional[str] = _order_option(),
            include: Optional[str] = _include_option(),
            include_props: Optional[str] = _include_props_option(),
            exclude_props: Optional[str] = _exclude_props_option(),
            output_file: Optional[Path] = _output_file_option(),
            include_nulls: bool = _include_nulls_option(),
            all_pages: bool = _all_option(),
            max_items: Optional[int] = _max_items_option(),
        ) -> None:
            _list_impl(
                ctx, plural, fetch_page, stream_items, [parent_id], page_size, page, where, order,
                include, include_props, exclude_props, output_file, include_nulls, all_pages, max_items,
            )

        return

    @group.command(name, help=help_text)
    def list_command(
        ctx: typer.Context,
        page_size: Optional[int] = _page_size_option(),
        page: int = _page_option(),
        where: Optional[str] = _where_option(),
        order: Optional[str] = _order_option(),
        include: Optional[str] = _include_option(),
        include_props: Optional[str] = _include_props_option(),
        exclude_props: Optional[str] = _exclude_props_option(),
        output_file: Optional[Path] = _output_file_option(),
        include_nulls: bool = _include_nulls_option(),
        all_pages: bool = _all_option(),
        max_items: Optional[int] = _max_items_option(),
    ) -> None:
        _list_impl(
            ctx, plural, fetch_page, stream_items, [], page_size, page, where, order,
            include, include_props, exclude_props, output_file, include_nulls, all_pages, max_items,
        )


def _get_impl(
    ctx: typer.Context,
    singular: str,
    fetch_one: ItemGetter,
    ids: List[str],
    include_props: Optional[str],
    exclude_props: Optional[str],
    output_file: Optional[Path],
    include_nulls: bool,
) -> None:
    cli = get_cli_context(ctx)
    options = formatter_options(include_props, exclude_props, include_nulls, output_file)

    async def fetch(client: PlanningCenterClient) -> Optional[Any]:
        return await fetch_one(client, *ids)

    item = run_async(cli, fetch)
    if item is None:
        console.print(f"{singular} with ID '{ids[-1]}' not found.")
        return
    emit(cli, item, options)


def add_get_command(
    group: typer.Typer,
    singular: str,
    fetch_one: ItemGetter,
    parent: Optional[str] = None,
    name: str = "get",
) -> None:
    """
    Register a get command on ``group``.

    ``fetch_one`` is called as ``async (client, *ids)`` with the parent id
    first when ``parent`` is given.
    """
    help_text = f"Get a specific {singular.lower()} by ID."

    if parent:

        @group.command(name, help=help_text)
        def get_child_command(
            ctx: typer.Context,
            parent_id: str = typer.Argument(..., metavar=f"{parent.upper()}_ID", help=f"ID of the {parent}"),
            item_id: str = typer.Argument(..., metavar="ID", help=f"{singular} ID"),
            include_props: Optional[str] = _include_props_option(),
            exclude_props: Optional[str] = _exclude_props_option(),
            output_file: Optional[Path] = _output_file_option(),
            include_nulls: bool = _include_nulls_option(),
        ) -> None:
            _get_impl(ctx, singular, fetch_one, [parent_id, item_id], include_props, exclude_props,
                      output_file, include_nulls)

        return

    @group.command(name, help=help_text)
    def get_command(
        ctx: typer.Context,
        item_id: str = typer.Argument(..., metavar="ID", help=f"{singular} ID"),
        include_props: Optional[str] = _include_props_option(),
        exclude_props: Optional[str] = _exclude_props_option(),
        output_file: Optional[Path] = _output_file_option(),
        include_nulls: bool = _include_nulls_option(),
    ) -> None:
        _get_impl(ctx, singular, fetch_one, [item_id], include_props, exclude_props, output_file, include_nulls)
