from __future__ import annotations

import logging
import os
from dataclasses import replace
from importlib import metadata

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from act.core.config import DEFAULT_CONFIG_NAME, load_config
from act.core.errors import ActError, ConfigError, UnknownRoom
from act.game.game import start_game
from act.game.loader import check_references, load_world_file
from act.game.models import PickUp, World
from act.game.render import Presenter


app = typer.Typer(add_completion=False, help="Act: play simple text adventure games")
console = Console()


def _get_version() -> str:
    try:
        return metadata.version("act-engine")
    except metadata.PackageNotFoundError:
        return "0.0.0+local"


def _log_level(name: str) -> str:
    level = name.strip().upper()
    # getLevelName maps known names to their number and echoes anything else back
    if isinstance(logging.getLevelName(level), int):
        return level
    return "WARNING"


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the Act version and exit.",
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
):
    level = "DEBUG" if verbose else _log_level(os.environ.get("ACT_LOG", "WARNING"))
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    if version:
        console.print(_get_version())
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


def _load_world(game_file: str) -> World:
    try:
        return load_world_file(game_file)
    except FileNotFoundError as e:
        console.print(f"❌ {escape(str(e))}")
        raise typer.Exit(code=2)
    except OSError as e:
        console.print(f"❌ Could not read '{escape(game_file)}': {escape(str(e.strerror or e))}")
        raise typer.Exit(code=2)
    except ActError as e:
        console.print(f"❌ Could not load '{escape(game_file)}': {escape(str(e))}")
        raise typer.Exit(code=1)


def _load_config(config: str):
    try:
        return load_config(config)
    except FileNotFoundError as e:
        console.print(f"❌ {escape(str(e))}")
        raise typer.Exit(code=2)
    except ConfigError as e:
        console.print(f"❌ {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command("play")
def play(
    game_file: str = typer.Argument(..., help="Path to a game description (JSON or YAML)"),
    config: str = typer.Option(DEFAULT_CONFIG_NAME, "--config", help="Path to config"),
    no_splash: bool = typer.Option(False, "--no-splash", help="Skip the start banner"),
):
    cfg = _load_config(config)
    if no_splash:
        cfg = replace(cfg, splash=False)
    world = _load_world(game_file)
    try:
        game = start_game(world, cfg)
    except ActError as e:
        console.print(f"❌ Could not start '{escape(game_file)}': {escape(str(e))}")
        raise typer.Exit(code=1)

    try:
        game.play(Presenter(console))
    except UnknownRoom as e:
        console.print(f"❌ {escape(str(e))}")
        raise typer.Exit(code=3)
    except KeyboardInterrupt:
        console.print("")


@app.command("check")
def check(
    game_file: str = typer.Argument(..., help="Path to a game description (JSON or YAML)"),
    config: str = typer.Option(DEFAULT_CONFIG_NAME, "--config", help="Path to config"),
):
    cfg = _load_config(config)
    world = _load_world(game_file)
    try:
        check_references(world, cfg.start_room)
    except ActError as e:
        console.print(f"❌ {escape(str(e))}")
        raise typer.Exit(code=1)

    actions = sum(len(room.actions) for room in world.rooms.values())
    console.print(f"✅ {len(world)} rooms, {actions} actions in {escape(game_file)}")


@app.command("rooms")
def rooms(
    game_file: str = typer.Argument(..., help="Path to a game description (JSON or YAML)"),
):
    world = _load_world(game_file)

    table = Table(title="Rooms")
    table.add_column("Room", style="bold")
    table.add_column("#", justify="right")
    table.add_column("Action")
    table.add_column("Target")
    table.add_column("Requires")

    for room_id, room in world.rooms.items():
        if not room.actions:
            table.add_row(room_id, "", "", "", "")
        for i, action in enumerate(room.actions):
            if isinstance(action, PickUp):
                kind, target = "PickUp", action.item_id
            else:
                kind, target = "Move", action.destination_room_id
            table.add_row(
                room_id if i == 0 else "",
                str(i),
                f"{kind}: {action.label}",
                target,
                action.requirement_id or "-",
            )

    console.print(table)


if __name__ == "__main__":
    app()
