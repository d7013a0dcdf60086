import os
from pathlib import Path

import pytest

from uepack.core.errors import AmbiguousError, ProjectNotFoundError
from uepack.core.models import BuildConfig, BuildRequest, Platform, RunType
from uepack.core.project import derive_context, locate_project


def test_locate_single_project(project_dir: Path) -> None:
    assert locate_project(project_dir) == (project_dir / "MyGame.uproject").resolve()


def test_locate_no_project(tmp_path: Path) -> None:
    with pytest.raises(ProjectNotFoundError):
        locate_project(tmp_path)


def test_locate_prefers_most_recent(tmp_path: Path) -> None:
    old = tmp_path / "Old.uproject"
    new = tmp_path / "New.uproject"
    old.write_text("{}")
    new.write_text("{}")
    os.utime(old, (1_000, 1_000))
    os.utime(new, (2_000, 2_000))
    assert locate_project(tmp_path).name == "New.uproject"
    with pytest.raises(AmbiguousError):
        locate_project(tmp_path, strict=True)


def test_derive_android_context(project_dir: Path) -> None:
    request = BuildRequest(Platform.ANDROID, RunType.CLIENT, BuildConfig.SHIPPING, "qa")
    ctx = derive_context(project_dir / "MyGame.uproject", request)
    assert ctx.project_base_name == "MyGame"
    assert ctx.project_name == "My Game"
    assert ctx.package_name == "com.studio.mygame"
    assert ctx.project_version == "1.2.3"
    assert ctx.output_dir == project_dir / "Packaged" / "AndroidClientShippingqa"


def test_derive_windows_context_reads_game_version(project_dir: Path) -> None:
    game_ini = project_dir / "Config" / "DefaultGame.ini"
    game_ini.write_text(
        game_ini.read_text().replace("ProjectVersion=1.2.3", "ProjectVersion=2.0.0")
    )
    request = BuildRequest(Platform.WINDOWS, RunType.SERVER, BuildConfig.DEVELOPMENT)
    ctx = derive_context(project_dir / "MyGame.uproject", request)
    assert ctx.project_version == "2.0.0"
    assert ctx.output_dir.name == "WindowsServerDevelopment"


def test_derive_tolerates_missing_ini(project_dir: Path) -> None:
    (project_dir / "Config" / "DefaultEngine.ini").unlink()
    request = BuildRequest(Platform.ANDROID, RunType.CLIENT, BuildConfig.DEBUG)
    ctx = derive_context(project_dir / "MyGame.uproject", request)
    assert ctx.package_name is None
    assert ctx.project_version is None
    assert ctx.project_name == "My Game"
