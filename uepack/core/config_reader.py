"""Access to the project's ``Config/Default{Engine,Game}.ini`` files."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from uepack.core.errors import MissingFileError, MissingKeyError
from uepack.core.ini_parser import IniDocument
from uepack.core.models import ConfigFile

ANDROID_SECTION = "/Script/AndroidRuntimeSettings.AndroidRuntimeSettings"
IOS_SECTION = "/Script/IOSRuntimeSettings.IOSRuntimeSettings"
PROJECT_SECTION = "/Script/EngineSettings.GeneralProjectSettings"


def clear_readonly(path: Path) -> None:
    """Make *path* writable; files checked out of source control often aren't."""
    mode = path.stat().st_mode
    if not mode & stat.S_IWRITE:
        os.chmod(path, mode | stat.S_IWRITE)


@dataclass
class ConfigReader:
    project_dir: Path

    logger = logging.getLogger(__name__)

    def path(self, file: ConfigFile) -> Path:
        return self.project_dir / "Config" / f"Default{ConfigFile(file).value}.ini"

    def open(self, file: ConfigFile) -> IniDocument:
        ini = self.path(file)
        if not ini.is_file():
            msg = f"{ini.name} not found in {ini.parent}"
            self.logger.error(msg)
            raise MissingFileError(msg)
        self.logger.debug("Reading %s", ini)
        return IniDocument.load(ini)

    def read_key(self, file: ConfigFile, section: str, key: str) -> str:
        doc = self.open(file)
        if not doc.has(section, key):
            raise MissingKeyError(
                f"[{section}] {key} is not set in {self.path(file).name}"
            )
        value = doc.get(section, key)
        return "" if value is None else value

    def write_key(self, file: ConfigFile, section: str, key: str, value: str) -> None:
        doc = self.open(file)
        doc.set(section, key, value)
        self.save(doc)

    def save(self, doc: IniDocument) -> None:
        if doc.path is None:
            raise MissingFileError("Cannot save an INI document that was not loaded from a file")
        clear_readonly(doc.path)
        doc.save()
        self.logger.debug("Wrote %s", doc.path)
