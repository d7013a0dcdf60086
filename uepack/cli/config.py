"""``uepack config``: where to look for the engine."""

from __future__ import annotations

from pathlib import Path

import typer

from uepack.cli.output import data, error, info, success
from uepack.core.settings import settings

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the stored engine settings."""
    info(f"Settings file: {settings.file_name()}")
    data(f"engine_root={settings.engine_root() or ''}")
    data(f"install_roots={','.join(settings.install_roots())}")


@config_app.command("engine")
def config_engine(
    path: Path = typer.Argument(..., help="Engine install directory."),
) -> None:
    """Pin the engine install used by ``build``."""
    if not path.is_dir():
        error(f"{path} is not a directory")
        raise typer.Exit(code=2)
    settings.set_engine_root(str(path.resolve()))
    success(f"Engine root set to {path.resolve()}")


@config_app.command("add-root")
def config_add_root(
    path: Path = typer.Argument(..., help="Directory holding engine versions."),
) -> None:
    """Search an extra directory for engine installs."""
    settings.add_install_root(str(path.resolve()))
    success(f"Added install root {path.resolve()}")


@config_app.command("clear")
def config_clear() -> None:
    """Forget the stored engine settings."""
    settings.clear()
    success("Engine settings cleared")
