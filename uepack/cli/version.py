"""``uepack version up``: bump project version fields in place."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from uepack.cli.output import configure_logging, data, error, info
from uepack.core.config_reader import ANDROID_SECTION, ConfigReader
from uepack.core.errors import InvalidUsageError, UepackError
from uepack.core.project import locate_project
from uepack.modules.versioning import RELEASE_TYPES, VersionBumper

version_app = typer.Typer(no_args_is_help=True)


@version_app.callback()
def version_main() -> None:
    """Project version management."""


@version_app.command("up")
def version_up(
    release: str = typer.Argument(
        ..., metavar="TYPE", help=f"Type of version bumping: {'|'.join(RELEASE_TYPES)}."
    ),
    android: bool = typer.Option(False, "--android", help="Also bump Android versions."),
    ios: bool = typer.Option(False, "--ios", help="Also bump the iOS version."),
    json_output: bool = typer.Option(False, "--json", help="Print changes as JSON."),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Project directory."),
) -> None:
    """Bump project version."""
    configure_logging()
    try:
        if release not in RELEASE_TYPES:
            raise InvalidUsageError(
                f"Invalid release type {release!r}, expected one of {', '.join(RELEASE_TYPES)}"
            )
        search_root = cwd or Path.cwd()
        project = locate_project(search_root)
        if not json_output:
            info(f"Detected unreal project: {project.name}")

        bumper = VersionBumper(ConfigReader(project.parent))
        changes = bumper.plan(release, android=android, ios=ios)
        bumper.apply(changes)
    except UepackError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if json_output:
        payload = {c.key: {"from": c.old, "to": c.new, "file": c.file.value} for c in changes}
        data(json.dumps(payload, indent=2))
        return
    for change in changes:
        label = change.key
        if change.section == ANDROID_SECTION:
            label = f"Android {label}"
        info(f"{label}: {change.old} -> {change.new}")
