import os
import stat
from pathlib import Path

import pytest

from uepack.core.config_reader import PROJECT_SECTION, ConfigReader
from uepack.core.errors import MissingFileError, MissingKeyError
from uepack.core.ini_parser import IniDocument
from uepack.core.models import ConfigFile


def test_read_key(project_dir: Path) -> None:
    reader = ConfigReader(project_dir)
    assert reader.read_key(ConfigFile.GAME, PROJECT_SECTION, "ProjectName") == "My Game"
    assert reader.path(ConfigFile.ENGINE) == project_dir / "Config" / "DefaultEngine.ini"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MissingFileError):
        ConfigReader(tmp_path).read_key(ConfigFile.GAME, PROJECT_SECTION, "ProjectName")


def test_missing_key(project_dir: Path) -> None:
    reader = ConfigReader(project_dir)
    with pytest.raises(MissingKeyError):
        reader.read_key(ConfigFile.GAME, PROJECT_SECTION, "Nope")
    with pytest.raises(MissingKeyError):
        reader.read_key(ConfigFile.GAME, "/Script/Nope.Nope", "ProjectName")


def test_write_key_clears_readonly(project_dir: Path) -> None:
    reader = ConfigReader(project_dir)
    ini = reader.path(ConfigFile.GAME)
    os.chmod(ini, stat.S_IREAD)
    reader.write_key(ConfigFile.GAME, PROJECT_SECTION, "ProjectVersion", "9.9.9")
    assert reader.read_key(ConfigFile.GAME, PROJECT_SECTION, "ProjectVersion") == "9.9.9"
    assert ini.stat().st_mode & stat.S_IWRITE
    assert "ProjectID=0123456789ABCDEF" in ini.read_text()


def test_held_document_writes_once(project_dir: Path) -> None:
    reader = ConfigReader(project_dir)
    doc = reader.open(ConfigFile.GAME)
    doc.set(PROJECT_SECTION, "ProjectVersion", "3.0.0")
    doc.set(PROJECT_SECTION, "ProjectName", "Renamed")
    assert reader.read_key(ConfigFile.GAME, PROJECT_SECTION, "ProjectVersion") == "1.2.3"
    reader.save(doc)
    assert reader.read_key(ConfigFile.GAME, PROJECT_SECTION, "ProjectName") == "Renamed"


def test_save_unbound_document(project_dir: Path) -> None:
    with pytest.raises(MissingFileError):
        ConfigReader(project_dir).save(IniDocument("[Section]\nKey=1\n"))
