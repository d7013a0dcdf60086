"""Typer application and console-script entry point."""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError, version

import typer

from uepack.cli.build import build_command
from uepack.cli.config import config_app
from uepack.cli.version import version_app

app = typer.Typer(
    name="uepack",
    help="Package Unreal Engine projects with the Unreal Automation Tool.",
    no_args_is_help=True,
    add_completion=False,
)

app.command("build")(build_command)
app.add_typer(version_app, name="version", help="Project version management.")
app.add_typer(config_app, name="config", help="Engine lookup settings.")


def _version_callback(value: bool) -> None:
    if value:
        try:
            typer.echo(f"uepack {version('uepack')}")
        except PackageNotFoundError:
            typer.echo("uepack (not installed)")
        raise typer.Exit()


@app.callback()
def main_callback(
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Unreal Engine packaging helper."""


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)


if __name__ == "__main__":
    main()
