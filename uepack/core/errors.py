"""Exception hierarchy for uepack.

Every error carries an ``exit_code``. CLI commands catch :class:`UepackError`,
print the message and exit with that code::

    UepackError              (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- NotFoundError        (exit 4)
    |   +-- ProjectNotFoundError
    |   +-- MissingFileError
    |   +-- MissingKeyError
    |   +-- ToolNotFoundError
    |   +-- ArtifactNotFoundError
    +-- AmbiguousError       (exit 1)
    +-- ToolFailedError      (exit 5)
    +-- VersionIncrementError (exit 6)
"""

from __future__ import annotations

from typing import Any, Sequence

EXIT_GENERIC_FAILURE = 1
EXIT_INVALID_USAGE = 2
EXIT_NOT_FOUND = 4
EXIT_TOOL_FAILED = 5
EXIT_VERSION_ERROR = 6


class UepackError(Exception):
    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(UepackError):
    """Bad CLI input, e.g. a malformed ``--define``."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(UepackError):
    """A file, key or tool the build depends on does not exist."""

    exit_code = EXIT_NOT_FOUND


class ProjectNotFoundError(NotFoundError):
    pass


class MissingFileError(NotFoundError):
    pass


class MissingKeyError(NotFoundError):
    pass


class ToolNotFoundError(NotFoundError):
    pass


class ArtifactNotFoundError(NotFoundError):
    """No artifact matched one or more requested extensions.

    ``resolved`` holds the descriptors of the sibling extensions that were
    handled before the error was raised.
    """

    def __init__(self, message: str, resolved: Sequence[Any] = ()) -> None:
        super().__init__(message)
        self.resolved = list(resolved)


class AmbiguousError(UepackError):
    pass


class ToolFailedError(UepackError):
    exit_code = EXIT_TOOL_FAILED

    def __init__(self, tool_exit_code: int | None, outcome: Any = None) -> None:
        super().__init__(f"Automation tool failed with exit code {tool_exit_code}")
        self.tool_exit_code = tool_exit_code
        self.outcome = outcome


class VersionIncrementError(UepackError):
    exit_code = EXIT_VERSION_ERROR
