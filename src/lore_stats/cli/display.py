"""Rich display helpers for the lore-stats CLI."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lore_stats.lore.colors import strip_color
from lore_stats.lore.template import format_value
from lore_stats.models.combat import DamageOutcome
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.stat import StatKind

console = Console()


class StatsDisplay:
    def __init__(self, console_: Console | None = None) -> None:
        self.console = console_ or console

    def show_stats(self, title: str, stats: ItemStats) -> None:
        if stats.is_empty():
            self.console.print(f"[dim]{escape(title)}: no stats[/dim]")
            return
        table = Table(title=title, box=box.SIMPLE)
        table.add_column("Stat", style="bold")
        table.add_column("Key", style="dim")
        table.add_column("Value", justify="right", style="cyan")
        for kind, value in stats.non_zero().items():
            suffix = "%" if kind.percentage else ""
            table.add_row(kind.display_name_en, kind.config_key, f"{format_value(value)}{suffix}")
        self.console.print(table)

    def show_lore(self, lore: list[str]) -> None:
        body = Text("\n".join(strip_color(line) or "" for line in lore) or "(empty)")
        self.console.print(Panel(body, title="Lore", border_style="blue"))

    def show_keywords(self) -> None:
        table = Table(title="Stat keywords", box=box.SIMPLE)
        table.add_column("Key", style="bold")
        table.add_column("Name")
        table.add_column("Aliases", style="dim")
        for kind in StatKind:
            table.add_row(kind.config_key, f"{kind.display_name_en} ({kind.display_name})", ", ".join(kind.keywords))
        self.console.print(table)

    def show_simulation(self, outcomes: list[DamageOutcome], base_damage: float) -> None:
        table = Table(title=f"Simulated hits (base {format_value(base_damage)})", box=box.SIMPLE)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Damage", justify="right")
        table.add_column("Result")
        table.add_column("Lifesteal", justify="right", style="green")
        for i, outcome in enumerate(outcomes, 1):
            if outcome.dodged:
                result = "[yellow]dodged[/yellow]"
            elif outcome.critical:
                result = f"[bold red]critical +{outcome.critical_bonus:.1f}[/bold red]"
            else:
                result = "hit"
            table.add_row(str(i), f"{outcome.final_damage:.1f}", result, f"{outcome.lifesteal:.1f}")
        self.console.print(table)

        if not outcomes:
            return
        hits = [o for o in outcomes if not o.dodged]
        crits = sum(1 for o in hits if o.critical)
        avg = sum(o.final_damage for o in outcomes) / len(outcomes)
        self.console.print(Panel(
            f"Rounds: {len(outcomes)}\n"
            f"Dodged: {len(outcomes) - len(hits)}\n"
            f"Critical: {crits}\n"
            f"Average damage: {avg:.2f}",
            title="Summary", border_style="magenta",
        ))

    def success(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/green]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]{escape(message)}[/bold red]")
