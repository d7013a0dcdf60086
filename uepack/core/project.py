from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from uepack.core.config_reader import (
    ANDROID_SECTION,
    PROJECT_SECTION,
    ConfigReader,
)
from uepack.core.errors import AmbiguousError, NotFoundError, ProjectNotFoundError
from uepack.core.models import BuildRequest, ConfigFile, Platform, ProjectContext

logger = logging.getLogger(__name__)

PROJECT_SUFFIX = ".uproject"


def most_recent(paths: Iterable[Path], what: str, strict: bool = False) -> Path:
    """Pick the newest of several candidates, warning about the others.

    With ``strict`` a tie raises :class:`AmbiguousError` instead.
    """
    candidates = sorted(paths, key=lambda p: p.stat().st_mtime, reverse=True)
    if not candidates:
        raise ValueError("no candidates")
    if len(candidates) > 1:
        names = ", ".join(p.name for p in candidates)
        if strict:
            raise AmbiguousError(f"Found several {what}: {names}")
        logger.warning("Found several %s (%s), using %s", what, names, candidates[0].name)
    return candidates[0]


def locate_project(search_root: Path, strict: bool = False) -> Path:
    matches = [p for p in search_root.glob(f"*{PROJECT_SUFFIX}") if p.is_file()]
    if not matches:
        msg = f"Unable to find an Unreal project in {search_root}"
        logger.error(msg)
        raise ProjectNotFoundError(msg)
    project = most_recent(matches, "project files", strict=strict)
    logger.debug("Using uproject %s", project)
    return project.resolve()


def _optional(reader: ConfigReader, file: ConfigFile, section: str, key: str) -> str | None:
    try:
        return reader.read_key(file, section, key)
    except NotFoundError as exc:
        logger.debug("%s", exc)
        return None


def derive_context(
    project_file: Path, request: BuildRequest, reader: ConfigReader | None = None
) -> ProjectContext:
    """Collect everything later stages need about the project."""
    project_dir = project_file.parent
    reader = reader or ConfigReader(project_dir)
    if request.platform is Platform.ANDROID:
        version = _optional(reader, ConfigFile.ENGINE, ANDROID_SECTION, "VersionDisplayName")
    else:
        version = _optional(reader, ConfigFile.GAME, PROJECT_SECTION, "ProjectVersion")
    return ProjectContext(
        project_file=project_file,
        project_dir=project_dir,
        project_base_name=project_file.stem,
        output_dir=project_dir / "Packaged" / request.output_folder_name(),
        project_name=_optional(reader, ConfigFile.GAME, PROJECT_SECTION, "ProjectName"),
        package_name=_optional(reader, ConfigFile.ENGINE, ANDROID_SECTION, "PackageName"),
        project_version=version,
    )
