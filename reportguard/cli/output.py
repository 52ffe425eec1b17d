"""
ReportGuard CLI output utilities.

Provides rich-based output for user-facing CLI messages and tables.
Separates user output from operational logging.

Usage:
    from reportguard.cli.output import echo, error, table

    echo("Contact me at [EMAIL_1]")
    error("Map file not found")

    table(
        headers=["Type", "Placeholder", "Span"],
        rows=[("Email Address", "[EMAIL_1]", "14-34"), ...],
    )
"""

from typing import List, Optional, Tuple, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text


# Main console for stdout (user output)
console = Console()

# Error console for stderr
_err_console = Console(stderr=True)


def echo(message: str, style: Optional[str] = None, nl: bool = True) -> None:
    """
    Print a message to the user.

    The message is printed literally; rich markup in it is not
    interpreted, since it may contain user text.

    Args:
        message: The message to print
        style: Optional rich style (e.g., "bold", "green", "bold red")
        nl: Whether to add a newline (default: True)
    """
    console.print(Text(message), style=style, end="\n" if nl else "", soft_wrap=True)


def error(message: str) -> None:
    """
    Print an error message to stderr.

    Args:
        message: The error message
    """
    _err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def table(
    headers: List[str],
    rows: List[Tuple[Any, ...]],
    title: Optional[str] = None,
    show_lines: bool = False,
) -> None:
    """
    Print a formatted table.

    Args:
        headers: Column headers
        rows: List of row tuples
        title: Optional table title
        show_lines: Show row separator lines
    """
    t = Table(title=title, show_lines=show_lines)

    for header in headers:
        t.add_column(header)

    for row in rows:
        t.add_row(*[Text(str(cell)) for cell in row])

    console.print(t)
