from __future__ import annotations

from typing import Dict, Iterable

from uepack.core.errors import InvalidUsageError
from uepack.core.models import ConfigOverride


def escape_to_unicode(text: str) -> str:
    """Return *text* with every code point written as ``\\uXXXX``.

    Only the last four hex digits are kept, so characters above U+FFFF are
    truncated. UAT reads the value back in that form.
    """
    return "".join("\\u" + ("000" + format(ord(ch), "x"))[-4:] for ch in text)


def format_config_override(override: ConfigOverride) -> str:
    file = getattr(override.file, "value", override.file)
    return f"-ini:{file}:[{override.section}]:{override.key}={override.value}"


def parse_defines(items: Iterable[str]) -> Dict[str, str]:
    """Turn repeated ``KEY=VALUE`` options into a mapping; the last key wins."""
    defines: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise InvalidUsageError(f"Invalid define {item!r}, expected KEY=VALUE")
        defines[key] = value
    return defines
