"""Errors raised by the editor.

Every failure is fatal for the invocation. `main()` maps each error type to a
diagnostic on stderr and a distinct process exit status.
"""

from __future__ import annotations

from dataclasses import dataclass


class EditorError(Exception):
    """Base class for all editor failures."""

    exit_code: int = 1


class UsageError(EditorError):
    """Raised when the command line does not match the expected usage."""

    exit_code = 9


class FileAccessError(EditorError):
    """Raised when the export file cannot be read or its directory is not writable."""

    exit_code = 3


class RecordParseError(EditorError):
    """Raised when the export file is not valid JSON or not an issue export."""

    exit_code = 4


@dataclass(frozen=True, slots=True)
class UnknownCommand(EditorError):
    """Raised when a command name is not in the command table."""

    name: str
    supported: tuple[str, ...] = ()

    exit_code = 5

    def __str__(self) -> str:
        message = f"Invalid command: {self.name!r}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        return message


@dataclass(frozen=True, slots=True)
class InvalidArgument(EditorError):
    """Raised when an issue id argument is not a decimal integer."""

    value: str

    exit_code = 6

    def __str__(self) -> str:
        return f'"{self.value}" is not a valid issue ID.'
