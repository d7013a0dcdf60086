"""Value types shared by the build pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Tuple

PRODUCTION_FLAVOR = "production"


class _Choice(str, Enum):
    @property
    def uat_name(self) -> str:
        """Spelling expected by UAT, e.g. ``Development``."""
        return self.value.capitalize()


class Platform(_Choice):
    ANDROID = "android"
    WINDOWS = "windows"
    LINUX = "linux"


class RunType(_Choice):
    CLIENT = "client"
    SERVER = "server"


class BuildConfig(_Choice):
    TEST = "test"
    DEBUG = "debug"
    DEVELOPMENT = "development"
    SHIPPING = "shipping"


class ConfigFile(str, Enum):
    ENGINE = "Engine"
    GAME = "Game"


@dataclass(frozen=True)
class BuildRequest:
    """Everything the CLI collected for one ``build`` invocation."""

    platform: Platform
    run_type: RunType
    config: BuildConfig
    flavor: Optional[str] = None
    defines: Mapping[str, str] = field(default_factory=dict)
    verbose: bool = False

    @property
    def applies_flavor_overrides(self) -> bool:
        return bool(self.flavor) and self.flavor.lower() != PRODUCTION_FLAVOR

    def output_folder_name(self) -> str:
        parts = [self.platform.uat_name, self.run_type.uat_name, self.config.uat_name]
        if self.flavor:
            parts.append(self.flavor)
        return "".join(parts)


@dataclass(frozen=True)
class ProjectContext:
    project_file: Path
    project_dir: Path
    project_base_name: str
    output_dir: Path
    project_name: Optional[str] = None
    package_name: Optional[str] = None
    project_version: Optional[str] = None


@dataclass(frozen=True)
class ConfigOverride:
    """One ``-ini:`` switch; UAT applies it without touching the file."""

    file: ConfigFile
    section: str
    key: str
    value: str


class Phase(str, Enum):
    BUILD = "build"
    COOK = "cook"
    STAGE = "stage"
    PACKAGE = "package"
    APK = "apk"
    ARCHIVE = "archive"
    SUCCESS = "success"


@dataclass(frozen=True)
class PhaseEvent:
    phase: Phase
    message: str
    timestamp: datetime


@dataclass(frozen=True)
class ProcessOutcome:
    exit_code: int
    phase_events: Tuple[PhaseEvent, ...] = ()
    finished_at: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class ArtifactDescriptor:
    source: Path
    destination: Path
    extension: str
    copied: bool = True
