"""Unreal Automation Tool helpers for BuildCookRun packaging."""

from __future__ import annotations

import logging
import os
import re
import shlex
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

from uepack.core.config_reader import ANDROID_SECTION
from uepack.core.errors import MissingKeyError, ToolFailedError, ToolNotFoundError
from uepack.core.models import (
    BuildConfig,
    BuildRequest,
    ConfigFile,
    ConfigOverride,
    Phase,
    PhaseEvent,
    ProcessOutcome,
    ProjectContext,
)
from uepack.core.task_runner import TaskRunner
from uepack.core.text import escape_to_unicode, format_config_override
from uepack.modules.engine import run_uat_name

output_logger = logging.getLogger("uepack.uat.output")

COOK_FLAVOR = "ETC2"

# Checked in order; the first match wins.
PHASE_MARKERS = (
    (Phase.BUILD, re.compile(r"BUILD COMMAND STARTED"), "Building..."),
    (Phase.COOK, re.compile(r"COOK COMMAND STARTED"), "Cooking..."),
    (Phase.STAGE, re.compile(r"STAGE COMMAND STARTED"), "Staging..."),
    (Phase.PACKAGE, re.compile(r"PACKAGE COMMAND STARTED"), "Packaging..."),
    (Phase.APK, re.compile(r"Making \.apk with Gradle"), "Making APK..."),
    (Phase.ARCHIVE, re.compile(r"ARCHIVE COMMAND STARTED"), "Archiving..."),
    (
        Phase.SUCCESS,
        re.compile(r"AutomationTool exit(?:ing|ed) with ExitCode=0\b"),
        "Automation tool finished",
    ),
)


def classify_line(line: str) -> Optional[PhaseEvent]:
    for phase, pattern, message in PHASE_MARKERS:
        if pattern.search(line):
            return PhaseEvent(phase, message, datetime.now())
    return None


def flavor_overrides(request: BuildRequest, context: ProjectContext) -> List[ConfigOverride]:
    """Android identity overrides for non-production flavors."""
    if not request.applies_flavor_overrides:
        return []
    if not context.package_name:
        raise MissingKeyError(f"[{ANDROID_SECTION}] PackageName is not set in DefaultEngine.ini")
    if not context.project_name:
        raise MissingKeyError("ProjectName is not set in DefaultGame.ini")
    flavor = request.flavor or ""
    return [
        ConfigOverride(
            ConfigFile.ENGINE,
            ANDROID_SECTION,
            "PackageName",
            f"{context.package_name}.{flavor.lower()}",
        ),
        ConfigOverride(
            ConfigFile.ENGINE,
            ANDROID_SECTION,
            "ApplicationDisplayName",
            escape_to_unicode(f"{context.project_name} [{flavor}]"),
        ),
    ]


def buildcookrun_params(request: BuildRequest, context: ProjectContext) -> List[str]:
    """Ordered BuildCookRun switches; later ``-ini:`` overrides win in UAT."""
    config = request.config.uat_name
    params = [f"-Project={context.project_file}"]
    params += [format_config_override(o) for o in flavor_overrides(request, context)]
    params += [
        "-SaveConfigOverrides",
        "-NoP4",
        f"-ClientConfig={config}",
        f"-ServerConfig={config}",
        "-NoCompileEditor",
        "-UTF8Output",
        f"-Platform={request.platform.uat_name}",
        f"-CookFlavor={COOK_FLAVOR}",
        "-Distribution" if request.config is BuildConfig.SHIPPING else "",
        "-Build",
        "-Cook",
        "-Stage",
        "-Package",
        "-Archive",
        "-CookCultures=en",
        "-UnVersionedCookedContent",
        f"-ArchiveDirectory={context.output_dir}",
    ]
    return [p for p in params if p]


@dataclass
class Uat:
    """Thin UAT helper that runs BuildCookRun and follows its progress.

    Flags live in
    ``Engine/Source/Programs/AutomationTool/Scripts/BuildCookRun.Automation.cs``.
    """

    engine_root: Path
    context: ProjectContext

    logger = logging.getLogger(__name__)

    def _engine_dir(self) -> Path:
        root = self.engine_root
        if (root / "Build" / "BatchFiles").exists():
            self.logger.debug("Using engine directory %s", root)
            return root
        candidate = root / "Engine"
        if (candidate / "Build" / "BatchFiles").exists():
            self.logger.debug("Detected engine root %s", root)
            return candidate
        msg = f"Could not locate Engine/Build/BatchFiles under {root}"
        self.logger.error(msg)
        raise ToolNotFoundError(msg)

    def exe(self) -> Path:
        """Return the path to the RunUAT script."""
        return self._engine_dir() / "Build" / "BatchFiles" / run_uat_name()

    def buildcookrun_argv(self, request: BuildRequest) -> List[str]:
        return [str(self.exe()), "BuildCookRun", *buildcookrun_params(request, self.context)]

    def run(
        self,
        params: Sequence[str],
        defines: Optional[Mapping[str, str]] = None,
        verbose: bool = False,
        on_phase: Optional[Callable[[PhaseEvent], None]] = None,
        runner: Optional[TaskRunner] = None,
    ) -> ProcessOutcome:
        """Run BuildCookRun and block until UAT exits.

        Defines are exported as environment variables on top of ours. In
        verbose mode stdout goes to the ``uepack.uat.output`` logger as-is,
        otherwise only recognised phase markers are reported through
        ``on_phase``. Stderr is always logged as errors.
        """
        argv = [str(self.exe()), "BuildCookRun", *(p for p in params if p)]
        env = dict(os.environ)
        env.update(defines or {})
        events: List[PhaseEvent] = []

        def on_stdout(line: str) -> None:
            if verbose:
                output_logger.info(line)
                return
            event = classify_line(line)
            if event:
                events.append(event)
                if on_phase:
                    on_phase(event)

        def on_stderr(line: str) -> None:
            if line.strip():
                output_logger.error(line)

        self.logger.debug("Running %s", shlex.join(argv))
        try:
            code = (runner or TaskRunner()).run(argv, on_stdout, on_stderr, env=env)
        except OSError as exc:
            msg = f"Unable to launch {argv[0]}: {exc}"
            self.logger.error(msg)
            raise ToolNotFoundError(msg) from exc

        outcome = ProcessOutcome(exit_code=code, phase_events=tuple(events))
        if not outcome.success:
            self.logger.error("BuildCookRun exited with code %s", code)
            raise ToolFailedError(code, outcome)
        return outcome
