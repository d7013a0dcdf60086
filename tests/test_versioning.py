from pathlib import Path

import pytest

from uepack.core.config_reader import ANDROID_SECTION, IOS_SECTION, PROJECT_SECTION, ConfigReader
from uepack.core.errors import MissingKeyError, VersionIncrementError
from uepack.core.models import ConfigFile
from uepack.modules.versioning import VersionBumper, increment


@pytest.mark.parametrize(
    "version, release, expected",
    [
        ("1.2.3", "patch", "1.2.4"),
        ("1.2.3", "minor", "1.3.0"),
        ("1.2.3", "major", "2.0.0"),
        ("1.2.3", "premajor", "2.0.0-0"),
        ("1.2.3", "preminor", "1.3.0-0"),
        ("1.2.3", "prepatch", "1.2.4-0"),
        ("1.2.3", "prerelease", "1.2.4-0"),
        ("1.2.4-0", "prerelease", "1.2.4-1"),
        ("1.2.4-alpha", "prerelease", "1.2.4-alpha.0"),
        ("1.2.4-0", "patch", "1.2.4"),
        ("v1.2.3", "patch", "1.2.4"),
        ("=1.2.3", "minor", "1.3.0"),
        ("1.2.4-rc.1", "prerelease", "1.2.4-rc.2"),
    ],
)
def test_increment(version: str, release: str, expected: str) -> None:
    assert increment(version, release) == expected


@pytest.mark.parametrize("version", ["1.2", "banana", ""])
def test_increment_rejects_non_semver(version: str) -> None:
    with pytest.raises(VersionIncrementError):
        increment(version, "patch")


def test_bump_game_only(project_dir: Path) -> None:
    reader = ConfigReader(project_dir)
    bumper = VersionBumper(reader)
    engine_before = reader.path(ConfigFile.ENGINE).read_bytes()
    changes = bumper.plan("patch")
    bumper.apply(changes)
    assert [(c.key, c.old, c.new) for c in changes] == [("ProjectVersion", "1.2.3", "1.2.4")]
    assert reader.read_key(ConfigFile.GAME, PROJECT_SECTION, "ProjectVersion") == "1.2.4"
    assert reader.path(ConfigFile.ENGINE).read_bytes() == engine_before


def test_bump_android_and_ios(project_dir: Path) -> None:
    reader = ConfigReader(project_dir)
    bumper = VersionBumper(reader)
    bumper.apply(bumper.plan("minor", android=True, ios=True))
    assert reader.read_key(ConfigFile.ENGINE, ANDROID_SECTION, "VersionDisplayName") == "1.3.0"
    assert reader.read_key(ConfigFile.ENGINE, ANDROID_SECTION, "StoreVersion") == "42"
    assert reader.read_key(ConfigFile.ENGINE, IOS_SECTION, "VersionInfo") == "1.3.0"
    assert "+PackageForOculusMobile=Quest2" in reader.path(ConfigFile.ENGINE).read_text()


def test_bad_version_leaves_files_untouched(project_dir: Path) -> None:
    reader = ConfigReader(project_dir)
    engine_ini = reader.path(ConfigFile.ENGINE)
    engine_ini.write_text(
        engine_ini.read_text().replace("VersionDisplayName=1.2.3", "VersionDisplayName=beta")
    )
    before = {f: reader.path(f).read_bytes() for f in ConfigFile}
    bumper = VersionBumper(reader)
    with pytest.raises(VersionIncrementError):
        bumper.plan("patch", android=True)
    assert {f: reader.path(f).read_bytes() for f in ConfigFile} == before


def test_missing_store_version(project_dir: Path) -> None:
    engine_ini = ConfigReader(project_dir).path(ConfigFile.ENGINE)
    engine_ini.write_text(engine_ini.read_text().replace("StoreVersion=41\n", ""))
    with pytest.raises(MissingKeyError):
        VersionBumper(ConfigReader(project_dir)).plan("patch", android=True)
