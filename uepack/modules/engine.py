"""Find an Unreal Engine install that ships ``RunUAT``."""

from __future__ import annotations

import logging
import re
import shutil
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from uepack.core.errors import ToolNotFoundError

logger = logging.getLogger(__name__)

BATCH_FILES = Path("Engine") / "Build" / "BatchFiles"

KNOWN_INSTALL_ROOTS = {
    "win32": [Path("C:/Program Files/Epic Games")],
    "darwin": [Path("/Users/Shared/Epic Games"), Path("/Users/Shared/UnrealEngine")],
    "linux": [Path("/opt/unreal-engine")],
}


def run_uat_name(platform: str = sys.platform) -> str:
    return "RunUAT.bat" if platform.startswith("win") else "RunUAT.sh"


def engine_root_of(run_uat: Path) -> Path:
    """``<root>/Engine/Build/BatchFiles/RunUAT.x`` -> ``<root>``."""
    return run_uat.parents[3]


def _version_key(path: Path) -> Tuple[Tuple[int, ...], str]:
    """``UE_5.10`` sorts after ``UE_5.9``."""
    name = engine_root_of(path).name
    return tuple(int(n) for n in re.findall(r"\d+", name)), name


def _find_under(root: Path, script: str) -> Optional[Path]:
    """Look for the script at ``root`` itself and one directory below it."""
    direct = root / BATCH_FILES / script
    if direct.is_file():
        return direct
    if not root.is_dir():
        return None
    found = sorted(root.glob(f"*/{BATCH_FILES.as_posix()}/{script}"), key=_version_key)
    return found[-1] if found else None


def locate_engine(
    configured_root: Optional[str] = None,
    extra_roots: Iterable[str] = (),
    platform: str = sys.platform,
) -> Path:
    """Return the engine root directory.

    The pinned root wins, then the usual install locations for the host OS
    (newest version directory first), then ``RunUAT`` on ``PATH``.
    """
    script = run_uat_name(platform)
    if configured_root:
        found = _find_under(Path(configured_root), script)
        if found:
            logger.debug("Using configured engine %s", found)
            return engine_root_of(found)
        logger.warning("Configured engine root %s has no %s", configured_root, script)

    roots: List[Path] = [Path(r) for r in extra_roots]
    for key, defaults in KNOWN_INSTALL_ROOTS.items():
        if platform.startswith(key):
            roots += defaults
    for root in roots:
        found = _find_under(root, script)
        if found:
            logger.debug("Detected engine %s", found)
            return engine_root_of(found)

    on_path = shutil.which(script) or shutil.which("RunUAT")
    if on_path and len(Path(on_path).resolve().parents) > 3:
        logger.debug("Using RunUAT from PATH: %s", on_path)
        return engine_root_of(Path(on_path).resolve())

    msg = "Unable to find the engine location"
    logger.error(msg)
    raise ToolNotFoundError(msg)
