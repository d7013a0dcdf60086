from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

IniData = Dict[str, Dict[str, List[Optional[str]]]]


def _section_name(line: str) -> str | None:
    if line.startswith("[") and line.endswith("]"):
        return line[1:-1].strip()
    return None


def parse_lines(lines: Iterable[str]) -> IniData:
    """Parse Unreal Engine ``.ini`` lines applying special operators.

    Unreal configuration files support line prefixes that modify how values are
    merged:

    ``+`` adds a line only if the property is missing, ``-`` removes exact
    matches, ``.`` always appends a new line, and ``!`` deletes a property by
    name. Semicolons are treated as literal characters rather than comments.

    Returns a nested mapping of ``section -> key -> list of values``. A value is
    ``None`` when the line had no ``=`` delimiter (flag-style entries).
    """

    data: IniData = {}
    section: str | None = None
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        name = _section_name(line)
        if name is not None:
            section = name
            data.setdefault(section, {})
            continue
        if section is None:
            continue
        prefix = ""
        if line[0] in "+-!.":
            prefix, line = line[0], line[1:]
        key, sep, raw_value = line.partition("=")
        key = key.strip()
        value: str | None = raw_value.strip() if sep else None
        sec = data.setdefault(section, {})
        existing = sec.get(key)
        if prefix == "+":
            if not existing:
                sec[key] = [value]
        elif prefix == "-":
            if existing:
                sec[key] = [v for v in existing if v != value]
                if not sec[key]:
                    sec.pop(key)
        elif prefix == ".":
            sec.setdefault(key, []).append(value)
        elif prefix == "!":
            sec.pop(key, None)
        else:
            sec[key] = [value]
    return data


def parse_ini(path: Path) -> IniData:
    return IniDocument.load(path).data()


def get_value(data: IniData, section: str, key: str) -> str | None:
    """Return the last surviving value for ``section/key`` or ``None``."""

    values = data.get(section, {}).get(key)
    return values[-1] if values else None


class IniDocument:
    """Editable view of an ``.ini`` file that keeps untouched lines verbatim.

    Reads go through :func:`parse_lines`, so they see the same merged values
    as the engine. :meth:`set` rewrites or inserts a single plain ``Key=Value``
    line; :meth:`stringify` restores the original newline style and BOM.
    """

    def __init__(self, text: str = "", path: Path | None = None) -> None:
        self.path = path
        self._bom = text.startswith("\ufeff")
        if self._bom:
            text = text[1:]
        self._newline = "\r\n" if "\r\n" in text else "\n"
        self._trailing_newline = text.endswith("\n")
        self.lines: List[str] = text.splitlines()

    @classmethod
    def load(cls, path: Path) -> "IniDocument":
        with open(path, "r", encoding="utf-8", newline="") as f:
            return cls(f.read(), path)

    def data(self) -> IniData:
        return parse_lines(self.lines)

    def has(self, section: str, key: str) -> bool:
        return key in self.data().get(section, {})

    def get(self, section: str, key: str) -> str | None:
        return get_value(self.data(), section, key)

    def set(self, section: str, key: str, value: str) -> None:
        entry = f"{key}={value}"
        current: str | None = None
        last_line: int | None = None
        match: int | None = None
        for index, raw in enumerate(self.lines):
            line = raw.strip()
            name = _section_name(line)
            if name is not None:
                current = name
                if current == section:
                    last_line = index
                continue
            if current != section or not line:
                continue
            last_line = index
            if line[0] not in "+-!." and line.partition("=")[0].strip() == key:
                match = index
        if match is not None:
            self.lines[match] = entry
        elif last_line is not None:
            self.lines.insert(last_line + 1, entry)
        else:
            if self.lines and self.lines[-1].strip():
                self.lines.append("")
            self.lines += [f"[{section}]", entry]
            self._trailing_newline = True

    def stringify(self) -> str:
        text = self._newline.join(self.lines)
        if self._trailing_newline:
            text += self._newline
        return ("\ufeff" + text) if self._bom else text

    def save(self, path: Path | None = None) -> None:
        target = path or self.path
        if target is None:
            raise ValueError("IniDocument has no path to save to")
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(self.stringify())
