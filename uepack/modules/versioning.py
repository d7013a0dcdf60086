"""Bump the version fields Unreal keeps in ``DefaultGame.ini``/``DefaultEngine.ini``."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import semver

from uepack.core.config_reader import (
    ANDROID_SECTION,
    IOS_SECTION,
    PROJECT_SECTION,
    ConfigReader,
)
from uepack.core.errors import MissingKeyError, VersionIncrementError
from uepack.core.ini_parser import IniDocument
from uepack.core.models import ConfigFile

logger = logging.getLogger(__name__)

RELEASE_TYPES = (
    "major",
    "premajor",
    "minor",
    "preminor",
    "patch",
    "prepatch",
    "prerelease",
)
RELEASE_PREFIXES = "v="


def _next_prerelease(prerelease: Optional[str]) -> str:
    """``None -> 0``, ``rc.1 -> rc.2``, ``alpha -> alpha.0``."""
    if not prerelease:
        return "0"
    parts = prerelease.split(".")
    for i in range(len(parts) - 1, -1, -1):
        if parts[i].isdigit():
            parts[i] = str(int(parts[i]) + 1)
            return ".".join(parts)
    return prerelease + ".0"


def increment(version: str, release: str) -> str:
    """Return *version* bumped by *release*.

    Prereleases are numeric: ``prepatch`` turns ``1.2.3`` into ``1.2.4-0``
    and ``prerelease`` then gives ``1.2.4-1``. A leading ``v`` or ``=`` is
    accepted and dropped.
    """
    if release not in RELEASE_TYPES:
        raise VersionIncrementError(f"Unknown release type {release!r}")
    try:
        current = semver.Version.parse(version.strip().lstrip(RELEASE_PREFIXES))
    except (TypeError, ValueError) as exc:
        raise VersionIncrementError(f"Cannot increment version {version!r}: {exc}") from exc

    if release == "prerelease":
        base = current if current.prerelease else current.bump_patch()
        return str(base.replace(prerelease=_next_prerelease(current.prerelease), build=None))
    if release.startswith("pre"):
        bumped = getattr(current, f"bump_{release[3:]}")()
        return str(bumped.replace(prerelease="0", build=None))
    return str(current.next_version(release))


@dataclass(frozen=True)
class FieldChange:
    file: ConfigFile
    section: str
    key: str
    old: str
    new: str

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["file"] = self.file.value
        return data


@dataclass
class VersionBumper:
    """Plan every change first, then write; a bad value leaves files alone."""

    reader: ConfigReader

    def _current(self, doc: IniDocument, section: str, key: str) -> str:
        if not doc.has(section, key):
            raise MissingKeyError(f"[{section}] {key} is not set in {doc.path}")
        return doc.get(section, key) or ""

    def _semver_change(
        self, doc: IniDocument, file: ConfigFile, section: str, key: str, release: str
    ) -> FieldChange:
        old = self._current(doc, section, key)
        return FieldChange(file, section, key, old, increment(old, release))

    def plan(self, release: str, android: bool = False, ios: bool = False) -> List[FieldChange]:
        game = self.reader.open(ConfigFile.GAME)
        changes = [
            self._semver_change(game, ConfigFile.GAME, PROJECT_SECTION, "ProjectVersion", release)
        ]
        if android or ios:
            engine = self.reader.open(ConfigFile.ENGINE)
        if android:
            changes.append(
                self._semver_change(
                    engine, ConfigFile.ENGINE, ANDROID_SECTION, "VersionDisplayName", release
                )
            )
            store = self._current(engine, ANDROID_SECTION, "StoreVersion")
            try:
                new_store = int(store) + 1
            except ValueError as exc:
                raise VersionIncrementError(
                    f"Cannot increment StoreVersion {store!r}: not an integer"
                ) from exc
            changes.append(
                FieldChange(ConfigFile.ENGINE, ANDROID_SECTION, "StoreVersion", store, str(new_store))
            )
        if ios:
            changes.append(
                self._semver_change(engine, ConfigFile.ENGINE, IOS_SECTION, "VersionInfo", release)
            )
        return changes

    def apply(self, changes: List[FieldChange]) -> None:
        docs: Dict[ConfigFile, IniDocument] = {}
        for change in changes:
            doc = docs.get(change.file)
            if doc is None:
                doc = docs[change.file] = self.reader.open(change.file)
            doc.set(change.section, change.key, change.new)
        for doc in docs.values():
            self.reader.save(doc)
        for change in changes:
            logger.debug("%s: %s -> %s", change.key, change.old, change.new)
