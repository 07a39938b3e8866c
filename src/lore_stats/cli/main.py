"""Typer CLI application."""
from __future__ import annotations

import logging
import math
import random
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from lore_stats.cli.display import StatsDisplay
from lore_stats.lore.colors import strip_color
from lore_stats.models.item import Item
from lore_stats.models.player_stats import EquipmentSlot, PlayerStats
from lore_stats.models.stat import StatKind, find_by_keyword

app = typer.Typer(
    name="lore-stats",
    help="Read, edit and test-fight PVP stats written in item lore",
    no_args_is_help=True,
)

LORE_ITEM_TYPE = "PAPER"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _load_app(config: Optional[Path], rng: random.Random | None = None):
    from lore_stats.app import LoreStatsApp
    from lore_stats.config.settings import ConfigError

    try:
        return LoreStatsApp(config_path=config, rng=rng)
    except ConfigError as exc:
        StatsDisplay().error(str(exc))
        raise typer.Exit(code=1)


def _read_lore(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def _write_lore(path: Path, lore: list[str]) -> None:
    path.write_text("\n".join(lore) + ("\n" if lore else ""), encoding="utf-8")


def _stat_or_exit(lore_app, keyword: str) -> StatKind:
    kind = find_by_keyword(keyword)
    if kind is None:
        StatsDisplay().error(strip_color(lore_app.runtime.messages.get("common.unknown-stat", stat=keyword)))
        raise typer.Exit(code=1)
    return kind


def _number_or_exit(lore_app, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        StatsDisplay().error(strip_color(lore_app.runtime.messages.get("common.invalid-number", value=raw)))
        raise typer.Exit(code=1)
    return value


def _lore_item(path: Optional[Path]):
    if path is None:
        return Item(item_type=LORE_ITEM_TYPE)
    return Item(item_type=LORE_ITEM_TYPE, lore=_read_lore(path))


LoreFile = typer.Argument(..., exists=True, dir_okay=False, help="Text file with one lore line per line")
ConfigOption = typer.Option(None, "--config", "-c", help="Config TOML overriding the defaults")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    _configure_logging(verbose)


@app.command()
def parse(path: Path = LoreFile, config: Optional[Path] = ConfigOption) -> None:
    """Show the stats written in a lore file."""
    lore_app = _load_app(config)
    lore = _read_lore(path)
    display = StatsDisplay()
    display.show_lore(lore)
    display.show_stats(path.name, lore_app.runtime.editor.parse(lore))


@app.command(name="set")
def set_stat(
    path: Path = LoreFile,
    stat: str = typer.Argument(..., help="Stat key or alias, e.g. damage, 공격력"),
    value: str = typer.Argument(..., help="New value (clamped to the configured maximum)"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Set one stat in a lore file, keeping the others."""
    lore_app = _load_app(config)
    kind = _stat_or_exit(lore_app, stat)
    number = _number_or_exit(lore_app, value)
    messages = lore_app.runtime.messages

    item = _lore_item(path)
    result = lore_app.runtime.item_lore.set_stat(item, kind, number)
    display = StatsDisplay()
    if not result.success:
        display.error(strip_color(messages.get("common.update-failed")))
        raise typer.Exit(code=1)
    _write_lore(path, item.lore or [])
    display.success(strip_color(messages.get("commands.set.success", stat=kind.display_name, value=result.applied_value)))
    display.show_stats(path.name, lore_app.runtime.item_lore.parse_stats(item))


@app.command()
def remove(
    path: Path = LoreFile,
    stat: str = typer.Argument(..., help="Stat key or alias"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Remove one stat from a lore file."""
    lore_app = _load_app(config)
    kind = _stat_or_exit(lore_app, stat)
    item = _lore_item(path)
    lore_app.runtime.item_lore.remove_stat(item, kind)
    _write_lore(path, item.lore or [])
    StatsDisplay().success(strip_color(lore_app.runtime.messages.get("commands.remove.success", stat=kind.display_name)))


@app.command()
def clear(path: Path = LoreFile, config: Optional[Path] = ConfigOption) -> None:
    """Remove every stat line and separator from a lore file."""
    lore_app = _load_app(config)
    item = _lore_item(path)
    lore_app.runtime.item_lore.clear_stats(item)
    _write_lore(path, item.lore or [])
    StatsDisplay().success(strip_color(lore_app.runtime.messages.get("commands.clear.success")))


@app.command()
def keywords() -> None:
    """List stat keys and the aliases accepted for them."""
    StatsDisplay().show_keywords()


@app.command()
def simulate(
    attacker: Optional[Path] = typer.Option(None, "--attacker", "-a", exists=True, dir_okay=False,
                                            help="Attacker weapon lore file"),
    victim: Optional[Path] = typer.Option(None, "--victim", "-d", exists=True, dir_okay=False,
                                          help="Victim armor lore file"),
    base: float = typer.Option(10.0, "--base", "-b", help="Base damage of each hit"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    rounds: int = typer.Option(10, "--rounds", "-r", min=1, help="Number of hits"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Resolve hits between two lore files and tabulate the outcomes."""
    lore_app = _load_app(config, rng=random.Random(seed))
    item_lore = lore_app.runtime.item_lore

    attacker_stats = item_lore.clamp_stats(item_lore.parse_stats(_lore_item(attacker)))
    victim_stats = item_lore.clamp_stats(item_lore.parse_stats(_lore_item(victim)))
    lore_app.cache.put(PlayerStats("attacker", {EquipmentSlot.MAIN_HAND: attacker_stats}))
    lore_app.cache.put(PlayerStats("victim", {EquipmentSlot.CHESTPLATE: victim_stats}))

    combat = lore_app.runtime.combat
    outcomes = [combat.calculate("attacker", "victim", base).outcome for _ in range(rounds)]

    display = StatsDisplay()
    display.show_stats("Attacker", attacker_stats)
    display.show_stats("Victim", victim_stats)
    display.show_simulation(outcomes, base)


if __name__ == "__main__":
    app()
