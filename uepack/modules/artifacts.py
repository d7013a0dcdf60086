"""Pick up packaged files from the archive directory and version them."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from uepack.core.errors import ArtifactNotFoundError
from uepack.core.models import ArtifactDescriptor, BuildRequest, Platform, ProjectContext
from uepack.core.project import most_recent

APK = ".apk"
AAB = ".aab"

Naming = Callable[[str], Path]


def artifact_extensions(request: BuildRequest, app_bundle: bool = False) -> List[str]:
    """Single-file package types per platform.

    Windows and Linux archives are whole directories, so there is nothing
    to rename for them.
    """
    if request.platform is not Platform.ANDROID:
        return []
    return [APK, AAB] if app_bundle else [APK]


def artifact_name(
    context: ProjectContext,
    request: BuildRequest,
    extension: str,
    destination_dir: Optional[Path] = None,
) -> Path:
    """``<base>-<Config>[-<flavor>]-<version><ext>``."""
    parts = [context.project_base_name, request.config.uat_name]
    if request.flavor:
        parts.append(request.flavor)
    if context.project_version:
        parts.append(context.project_version)
    folder = destination_dir or context.output_dir
    return folder / ("-".join(parts) + extension)


@dataclass
class ArtifactResolver:
    output_dir: Path
    prefix: str = ""
    copy: bool = True

    logger = logging.getLogger(__name__)

    def discover(self, extension: str, exclude: Optional[Path] = None) -> Path:
        pattern = f"{self.prefix}*{extension}"
        matches = [
            p
            for p in self.output_dir.rglob(pattern)
            if p.is_file() and (exclude is None or p.resolve() != exclude.resolve())
        ]
        if not matches:
            raise ArtifactNotFoundError(
                f"Unable to find a {extension} matching {pattern} in {self.output_dir}"
            )
        return most_recent(matches, f"{extension} files")

    def resolve_one(self, extension: str, destination: Path) -> ArtifactDescriptor:
        source = self.discover(extension, exclude=destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        if destination.exists():
            self.logger.debug("Removing stale %s", destination)
            destination.unlink()
        if self.copy:
            shutil.copy2(source, destination)
        else:
            shutil.move(str(source), str(destination))
        self.logger.info(
            "%s %s -> %s", "Copied" if self.copy else "Moved", source.name, destination
        )
        return ArtifactDescriptor(source, destination, extension, copied=self.copy)

    def resolve(self, extensions: Sequence[str], naming: Naming) -> List[ArtifactDescriptor]:
        """Handle every extension independently.

        Raises
        ------
        ArtifactNotFoundError
            After all extensions were processed, if any of them had no
            match. ``resolved`` lists the ones that succeeded.
        """
        resolved: List[ArtifactDescriptor] = []
        failures: Dict[str, str] = {}
        for extension in extensions:
            try:
                resolved.append(self.resolve_one(extension, naming(extension)))
            except ArtifactNotFoundError as exc:
                self.logger.error("%s", exc)
                failures[extension] = str(exc)
        if failures:
            raise ArtifactNotFoundError("; ".join(failures.values()), resolved)
        return resolved
