"""``uepack build``: BuildCookRun a project and version the packaged artifact."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from uepack.cli.output import banner, configure_logging, data, error, info, success
from uepack.core.config_reader import ConfigReader
from uepack.core.errors import ArtifactNotFoundError, UepackError
from uepack.core.models import (
    ArtifactDescriptor,
    BuildConfig,
    BuildRequest,
    PhaseEvent,
    Platform,
    RunType,
)
from uepack.core.project import derive_context, locate_project
from uepack.core.settings import settings
from uepack.core.text import parse_defines
from uepack.modules.artifacts import (
    ArtifactResolver,
    artifact_extensions,
    artifact_name,
)
from uepack.modules.engine import locate_engine
from uepack.modules.uat import Uat, buildcookrun_params


def build_command(
    platform: Platform = typer.Argument(..., case_sensitive=False, help="Target platform."),
    run_type: RunType = typer.Argument(
        ..., metavar="TYPE", case_sensitive=False, help="Running type."
    ),
    config: BuildConfig = typer.Argument(..., case_sensitive=False, help="Running config."),
    flavor_arg: Optional[str] = typer.Argument(None, metavar="[FLAVOR]", help="Flavor."),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Project directory."),
    verbose: bool = typer.Option(False, "--verbose", help="Show raw UAT output."),
    copy: bool = typer.Option(
        True, "--copy/--no-copy", help="Copy the artifact instead of moving it."
    ),
    define: Optional[List[str]] = typer.Option(
        None, "--define", "-d", help="KEY=VALUE exported to UAT's environment."
    ),
    flavor_opt: Optional[str] = typer.Option(None, "--flavor", help="Flavor."),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Directory for the versioned artifact."
    ),
    expose: bool = typer.Option(
        False, "--expose", help="Print the artifact paths to stdout."
    ),
    aab: bool = typer.Option(False, "--aab", help="Also collect the Android app bundle."),
) -> None:
    """Build, cook, stage, package and archive the project."""
    configure_logging(verbose)
    try:
        request = BuildRequest(
            platform=platform,
            run_type=run_type,
            config=config,
            flavor=flavor_opt or flavor_arg,
            defines=parse_defines(define or []),
            verbose=verbose,
        )
        _build(request, cwd or Path.cwd(), copy=copy, output=output, expose=expose, aab=aab)
    except UepackError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _build(
    request: BuildRequest,
    search_root: Path,
    copy: bool,
    output: Optional[Path],
    expose: bool,
    aab: bool,
) -> None:
    project_file = locate_project(search_root)
    context = derive_context(project_file, request, ConfigReader(project_file.parent))
    banner(f"Project Name: {context.project_base_name}")

    params = buildcookrun_params(request, context)
    engine_root = locate_engine(settings.engine_root(), settings.install_roots())
    uat = Uat(engine_root, context)

    def on_phase(event: PhaseEvent) -> None:
        info(f"[cyan]>[/cyan] {event.message}")

    if not request.verbose:
        info("Building...")
    uat.run(params, defines=request.defines, verbose=request.verbose, on_phase=on_phase)
    success("Building complete")

    extensions = artifact_extensions(request, app_bundle=aab)
    if not extensions:
        success(f"Archive: {context.output_dir}")
        if expose:
            data(str(context.output_dir))
        return

    resolver = ArtifactResolver(context.output_dir, context.project_base_name, copy=copy)
    try:
        artifacts = resolver.resolve(
            extensions, lambda ext: artifact_name(context, request, ext, output)
        )
    except ArtifactNotFoundError as exc:
        _report(exc.resolved, copy, expose)
        raise
    _report(artifacts, copy, expose)


def _report(artifacts: List[ArtifactDescriptor], copy: bool, expose: bool) -> None:
    for artifact in artifacts:
        success(f"{'Copying' if copy else 'Moving'} complete: {artifact.destination}")
        if expose:
            data(str(artifact.destination))
