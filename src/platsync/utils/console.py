from typing import Iterable, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


def success(message: str):
    """Display success message"""
    console.print(f"✔ {message}", style="bold green")


def error(message: str):
    """Display error message"""
    console.print(f"✖ {message}", style="bold red")


def warning(message: str):
    """Display warning message"""
    console.print(f"⚠  {message}", style="bold yellow")


def info(message: str):
    """Display info message"""
    console.print(f"{message}", style="cyan")


def create_table(title: str, columns: List[str]) -> Table:
    """Create a rich table"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    return table


def display_panel(content: str, title: str, style: str = "blue"):
    """Display content in a panel"""
    console.print(Panel(content, title=title, border_style=style))


def display_diagnostics(diagnostics: Iterable) -> None:
    """Render reconciliation diagnostics as a table, errors first"""
    rows = sorted(diagnostics, key=lambda d: d.severity.value != "error")
    if not rows:
        return

    table = create_table("Diagnostics", ["Severity", "Sub-domain", "Summary", "Detail"])
    for diagnostic in rows:
        style = "red" if diagnostic.severity.value == "error" else "yellow"
        table.add_row(
            f"[{style}]{diagnostic.severity.value}[/{style}]",
            diagnostic.subdomain or "-",
            diagnostic.summary,
            diagnostic.detail,
        )
    console.print(table)
