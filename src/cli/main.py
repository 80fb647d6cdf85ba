"""Main CLI entry point for the atl command.

This module provides the Typer application behind the ``atl`` command-line
tool. Global options (configuration file, verbosity, colors, log directory)
live on the root callback, which loads the configuration once and passes it
to the ``page`` subcommands through the Typer context.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.edit_commands import CreateCommand, DeleteCommand, EditCommand
from src.cli.errors import ConfigError, InvalidArgumentError
from src.cli.listing_commands import ChildrenCommand, ListCommand, SpacesCommand
from src.cli.models import AppConfig, ExitCode
from src.cli.output import OutputHandler
from src.cli.search_command import SearchCommand, SearchCriteria
from src.cli.view_command import ViewCommand
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import (
    AtlasError,
    APIUnreachableError,
    InvalidCredentialsError,
)

VERSION = "0.1.0"

app = typer.Typer(
    name="atl",
    help="Command-line client for Atlassian Confluence.",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=True,
)

page_app = typer.Typer(
    help="Commands for listing, viewing, searching, and editing Confluence pages.",
    rich_markup_mode=None,
    no_args_is_help=True,
)
app.add_typer(page_app, name="page")
app.add_typer(page_app, name="confluence", hidden=True)

# Module logger
logger = logging.getLogger(__name__)

CREDENTIALS_HINT = (
    "set CONFLUENCE_URL and CONFLUENCE_API_TOKEN (plus CONFLUENCE_USER for basic auth), "
    "or add them under 'confluence' in ~/.config/atl/config.yaml"
)


@dataclass
class AppContext:
    """Per-invocation state shared by all subcommands."""
    config: AppConfig
    output: OutputHandler

    def build_api(self) -> APIWrapper:
        authenticator = Authenticator(
            url=self.config.confluence_url,
            user=self.config.user,
            api_token=self.config.api_token,
        )
        return APIWrapper(
            authenticator,
            cloud=self.config.cloud,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"atl_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _run_command(app_ctx: AppContext, func: Callable[[], None]) -> None:
    """Run a command body and map failures to exit codes.

    Args:
        app_ctx: Invocation context
        func: Command body
    """
    output = app_ctx.output
    try:
        func()

    except InvalidArgumentError as e:
        output.error(str(e))
        if e.hint:
            output.hint(e.hint)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except InvalidCredentialsError as e:
        logger.error(f"Authentication failed: {e}")
        output.error(str(e))
        output.hint(CREDENTIALS_HINT)
        raise typer.Exit(ExitCode.AUTH_ERROR)

    except APIUnreachableError as e:
        logger.error(f"Network failure: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.NETWORK_ERROR)

    except (AtlasError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"atl version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Configuration file (default: ~/.config/atl/config.yaml)",
        metavar="PATH",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        is_eager=True,
        callback=_version_callback,
    ),
) -> None:
    """Command-line client for Atlassian Confluence."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = ConfigLoader.load(config_path)
    except ConfigError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.debug(f"Configuration: {config_path or ConfigLoader.default_path()}")
    ctx.obj = AppContext(config=config, output=output)


@page_app.command("view")
def view_command(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Page ID, URL, or title (with --space)", metavar="PAGE"),
    output_file: Optional[str] = typer.Option(None, "--output", "-o", help="Save output to file"),
    output_format: str = typer.Option(
        "markdown",
        "--format",
        help="Output format: markdown (md), storage (Confluence XHTML), or html",
    ),
    with_toc: bool = typer.Option(False, "--with-toc", help="Add table of contents to output"),
    with_images: bool = typer.Option(
        False, "--with-images", help="Download images and fix paths (requires -o)"
    ),
    info: bool = typer.Option(False, "--info", help="Show metadata summary only"),
    space: Optional[str] = typer.Option(None, "--space", "-s", help="Space for title lookups"),
) -> None:
    """View a Confluence page."""
    app_ctx: AppContext = ctx.obj

    def _view():
        command = ViewCommand(
            app_ctx.build_api(),
            app_ctx.output,
            base_url=app_ctx.config.confluence_url or "",
        )
        command.run(
            ref,
            output_file=output_file,
            output_format=output_format,
            with_toc=with_toc,
            with_images=with_images,
            info=info,
            space_key=space or app_ctx.config.default_space,
        )

    _run_command(app_ctx, _view)


@page_app.command("search")
def search_command(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Text to search for"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of results"),
    space: Optional[str] = typer.Option(None, "--space", "-s", help="Limit search to specific space"),
    content_type: str = typer.Option(
        "page", "--type", "-t", help="Content type: page, blogpost, comment, attachment"
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Search by title (contains)"),
    creator: Optional[str] = typer.Option(None, "--creator", help="Filter by creator username"),
    contributor: Optional[str] = typer.Option(None, "--contributor", help="Filter by contributor username"),
    modified: Optional[str] = typer.Option(
        None, "--modified", help="Modified date: today, yesterday, week, month, year, or YYYY-MM-DD"
    ),
    created: Optional[str] = typer.Option(
        None, "--created", help="Created date: today, yesterday, week, month, year, or YYYY-MM-DD"
    ),
    cql: Optional[str] = typer.Option(None, "--cql", "-q", help="Raw CQL query (overrides other filters)"),
    order_by: str = typer.Option("lastmodified", "--order-by", help="Order by: created, lastmodified, title"),
    reverse: bool = typer.Option(False, "--reverse", help="Reverse sort order (ascending)"),
) -> None:
    """Search for Confluence pages using text search or CQL."""
    app_ctx: AppContext = ctx.obj
    criteria = SearchCriteria(
        text=text,
        space=space or app_ctx.config.default_space,
        content_type=content_type,
        title=title,
        creator=creator,
        contributor=contributor,
        modified=modified,
        created=created,
        cql=cql,
        order_by=order_by,
        reverse=reverse,
    )

    def _search():
        SearchCommand(app_ctx.build_api(), app_ctx.output).run(
            criteria, limit=limit or app_ctx.config.limit
        )

    _run_command(app_ctx, _search)


@page_app.command("children")
def children_command(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Parent page ID, URL, or title (with --space)", metavar="PAGE"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of child pages to retrieve"),
    space: Optional[str] = typer.Option(None, "--space", "-s", help="Space for title lookups"),
) -> None:
    """List child pages of a parent page."""
    app_ctx: AppContext = ctx.obj

    def _children():
        ChildrenCommand(app_ctx.build_api(), app_ctx.output).run(
            ref,
            limit=limit or app_ctx.config.children_limit,
            space_key=space or app_ctx.config.default_space,
        )

    _run_command(app_ctx, _children)


@page_app.command("spaces")
def spaces_command(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of results"),
) -> None:
    """List Confluence spaces."""
    app_ctx: AppContext = ctx.obj

    def _spaces():
        SpacesCommand(app_ctx.build_api(), app_ctx.output).run(limit=limit or app_ctx.config.limit)

    _run_command(app_ctx, _spaces)


@page_app.command("list")
def list_command(
    ctx: typer.Context,
    space: Optional[str] = typer.Argument(None, help="Space key (default: confluence.default_space)"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of results"),
    content_type: str = typer.Option("page", "--type", help="Content type: page or blogpost"),
) -> None:
    """List pages in a Confluence space."""
    app_ctx: AppContext = ctx.obj

    def _list():
        ListCommand(app_ctx.build_api(), app_ctx.output).run(
            space or app_ctx.config.default_space,
            limit=limit or app_ctx.config.limit,
            content_type=content_type,
        )

    _run_command(app_ctx, _list)


@page_app.command("create")
def create_command(
    ctx: typer.Context,
    space: Optional[str] = typer.Option(None, "--space", "-s", help="Space key (default: confluence.default_space)"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Page title (required)"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="Page content in Confluence storage format"),
    content_file: Optional[str] = typer.Option(
        None, "--content-file", "-f", help="File containing page content"
    ),
    parent: Optional[str] = typer.Option(None, "--parent", "-p", help="Parent page ID, URL, or title"),
) -> None:
    """Create a new Confluence page."""
    app_ctx: AppContext = ctx.obj

    def _create():
        CreateCommand(
            app_ctx.build_api(),
            app_ctx.output,
            base_url=app_ctx.config.confluence_url or "",
        ).run(
            space or app_ctx.config.default_space,
            title,
            content=content,
            content_file=content_file,
            parent=parent,
        )

    _run_command(app_ctx, _create)


@page_app.command("edit")
def edit_command(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="ID of the page to edit", metavar="PAGE_ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New page title (keeps current if not specified)"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New page content in Confluence storage format"),
    content_file: Optional[str] = typer.Option(
        None, "--content-file", "-f", help="File containing new page content"
    ),
) -> None:
    """Edit an existing Confluence page."""
    app_ctx: AppContext = ctx.obj

    def _edit():
        EditCommand(
            app_ctx.build_api(),
            app_ctx.output,
            base_url=app_ctx.config.confluence_url or "",
        ).run(page_id, title=title, content=content, content_file=content_file)

    _run_command(app_ctx, _edit)


def delete_command(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Page ID, URL, or title (with --space)", metavar="PAGE"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    space: Optional[str] = typer.Option(None, "--space", "-s", help="Space for title lookups"),
    cascade: bool = typer.Option(False, "--cascade", help="Delete child pages recursively"),
) -> None:
    """Delete a Confluence page."""
    app_ctx: AppContext = ctx.obj

    def _delete():
        DeleteCommand(app_ctx.build_api(), app_ctx.output).run(
            ref,
            space_key=space or app_ctx.config.default_space,
            yes=yes,
            cascade=cascade,
        )

    _run_command(app_ctx, _delete)


page_app.command("delete")(delete_command)
for _alias in ("rm", "del", "remove"):
    page_app.command(_alias, hidden=True)(delete_command)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
