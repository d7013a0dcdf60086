from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

ENGINE_INI = """\
[/Script/AndroidRuntimeSettings.AndroidRuntimeSettings]
PackageName=com.studio.mygame
StoreVersion=41
VersionDisplayName=1.2.3
+PackageForOculusMobile=Quest2

[/Script/IOSRuntimeSettings.IOSRuntimeSettings]
VersionInfo=1.2.3
"""

GAME_INI = """\
[/Script/EngineSettings.GeneralProjectSettings]
ProjectID=0123456789ABCDEF
ProjectName=My Game
ProjectVersion=1.2.3
"""


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """``MyGame/MyGame.uproject`` with default Engine and Game ini files."""
    project = tmp_path / "MyGame"
    (project / "Config").mkdir(parents=True)
    (project / "MyGame.uproject").write_text("{}", encoding="utf-8")
    (project / "Config" / "DefaultEngine.ini").write_text(ENGINE_INI, encoding="utf-8")
    (project / "Config" / "DefaultGame.ini").write_text(GAME_INI, encoding="utf-8")
    return project


def make_engine(root: Path, script_body: str = "exit 0\n") -> Path:
    """Create ``root/Engine/Build/BatchFiles/RunUAT.sh`` and return ``root``."""
    batch = root / "Engine" / "Build" / "BatchFiles"
    batch.mkdir(parents=True, exist_ok=True)
    script = batch / "RunUAT.sh"
    script.write_text("#!/bin/sh\n" + script_body, encoding="utf-8")
    os.chmod(script, script.stat().st_mode | stat.S_IXUSR)
    (batch / "RunUAT.bat").write_text("@echo off\n", encoding="utf-8")
    return root
