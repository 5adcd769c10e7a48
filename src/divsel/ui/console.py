"""Rich-powered console output for divsel."""

from __future__ import annotations

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from divsel import __version__
from divsel.selection.models import DedupResult, SelectionResult


class Console:
    """Terminal output for divsel using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole()

    def banner(self) -> None:
        """Show the divsel banner."""
        self.console.print(
            Panel(
                f"[bold cyan]divsel[/bold cyan] [dim]v{__version__}[/dim]\n"
                "[dim]Submodular diversity selection for embeddings[/dim]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def logging_handler(self) -> logging.Handler:
        """A logging handler that writes through this console."""
        return RichHandler(console=self.console, show_path=False)

    def show_selection(self, result: SelectionResult, show_trajectory: bool = False) -> None:
        """Display selected indices and the objective after each pick."""
        table = Table(title="Selection", border_style="cyan")
        table.add_column("Rank", justify="right", style="dim")
        table.add_column("Index", justify="right", style="bold")
        table.add_column("Objective", justify="right", style="cyan")

        for rank, index in enumerate(result.selected_indices, start=1):
            value = ""
            if rank <= len(result.objective_trajectory):
                value = f"{result.objective_trajectory[rank - 1]:.4f}"
            table.add_row(str(rank), str(index), value)

        self.console.print(table)
        self.console.print(
            f"[bold]{result.optimal_k}[/bold] of {result.candidates} selected "
            f"([dim]{result.policy}[/dim], objective {result.final_objective:.4f}"
            f"{', saturated' if result.saturated else ''})"
        )
        if show_trajectory and result.objective_trajectory:
            values = ", ".join(f"{v:.4f}" for v in result.objective_trajectory)
            self.console.print(f"[dim]trajectory: {values}[/dim]")

    def show_dedup(self, result: DedupResult) -> None:
        """Display the items that survived deduplication."""
        table = Table(title="Unique Items", border_style="cyan")
        table.add_column("Index", justify="right", style="bold")
        table.add_column("Item")

        for kept in result.items:
            text = kept.item
            if len(text) > 120:
                text = text[:120] + "..."
            table.add_row(str(kept.index), text)

        self.console.print(table)
        self.console.print(
            f"Kept [bold]{len(result.items)}[/bold] of "
            f"{result.selection.candidates} items"
        )
