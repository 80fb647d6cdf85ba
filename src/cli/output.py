"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Primary output (page content, tables, the download trail) goes to stdout;
errors, warnings and spinners go to stderr so that piped output stays clean.
Supports verbosity levels and the --no-color flag.
"""

import sys
from contextlib import contextmanager
from typing import Iterator, List, Sequence

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console for primary output (stdout)
        err_console: Rich Console for diagnostics (stderr)

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.warning("2 image(s) could not be downloaded")
        >>> with handler.spinner("Fetching page..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.no_color = no_color
        self.console = Console(no_color=no_color, highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, no_color=no_color, highlight=False, soft_wrap=True)

    def error(self, message: str) -> None:
        """Display error message in red on stderr."""
        self.err_console.print(f"[red]Error:[/red] {escape(message)}", style="red")

    def hint(self, message: str) -> None:
        """Display a hint following an error on stderr."""
        self.err_console.print(f"Hint: {escape(message)}")

    def warning(self, message: str) -> None:
        """Display warning message in yellow on stderr."""
        self.err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.err_console.print(message, markup=False)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.err_console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message on stdout without markup or highlighting.

        Page content is printed through here, so Rich markup in it must not
        be interpreted.
        """
        self.console.print(message, markup=False, emoji=False)

    def print_table(self, columns: Sequence[str], rows: List[Sequence[str]]) -> None:
        """Display rows as an aligned, borderless table on stdout."""
        table = Table(box=None, show_edge=False, pad_edge=False, padding=(0, 2, 0, 0))
        for column in columns:
            table.add_column(column, no_wrap=True, overflow="ellipsis")
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        self.console.print(table)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display a spinner on stderr while a single operation runs.

        Example:
            >>> with handler.spinner("Fetching page..."):
            ...     api.get_page("123")
        """
        if not self.err_console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.err_console, refresh_per_second=10, transient=True):
            yield

    def is_interactive(self) -> bool:
        """True when stdin is a terminal that can answer prompts."""
        return sys.stdin.isatty()

    def prompt(self, message: str) -> str:
        """Ask for a line of input, writing the question to stderr."""
        return self.err_console.input(escape(message))
