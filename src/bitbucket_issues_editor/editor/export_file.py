"""Reading issue export files and rendering edited exports.

The editor never writes the export back; results are printed and persisting
them is left to shell redirection. The directory check below is still applied to
every command so a later redirect next to the source file is known to work.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from bitbucket_issues_editor.editor.errors import FileAccessError, RecordParseError
from bitbucket_issues_editor.editor.models import IssueExport

logger = logging.getLogger(__name__)


class IssueExportFile:
    """A Bitbucket issue export on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @classmethod
    def from_argument(cls, value: str, *, cwd: Path | None = None) -> IssueExportFile:
        """Resolve a command-line path relative to the calling directory."""

        base = cwd if cwd is not None else Path.cwd()
        return cls(base / value)

    def check_access(self) -> None:
        """Ensure the file is readable and its directory is writable.

        Raises:
            FileAccessError: If either check fails.
        """

        if not self._path.is_file():
            raise FileAccessError(f"Issue file not found: {self._path}")
        if not os.access(self._path, os.R_OK):
            raise FileAccessError(f"Issue file is not readable: {self._path}")

        directory = self._path.parent
        if not os.access(directory, os.W_OK):
            raise FileAccessError(f"Issue file directory is not writable: {directory}")

    def load(self) -> IssueExport:
        """Read and validate the export.

        Raises:
            FileAccessError: If reading fails.
            RecordParseError: If the content is not JSON or not an issue export.
        """

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(f"Failed to read {self._path}: {e}") from e

        return parse_export(raw, source=str(self._path))


def parse_export(raw: str, *, source: str = "<string>") -> IssueExport:
    """Parse export JSON text into an `IssueExport`."""

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RecordParseError(f"{source} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise RecordParseError(f"{source} must contain a JSON object, got {type(data).__name__}")

    try:
        record = IssueExport.model_validate(data)
    except ValidationError as e:
        raise RecordParseError(f"{source} is not an issue export:\n{e}") from e

    logger.info(
        "Issue export loaded",
        extra={
            "source": source,
            "issues": len(record.issues),
            "comments": len(record.comments),
            "logs": len(record.logs),
        },
    )
    return record


def render_export(
    record: IssueExport, *, indent: int | None = None, ensure_ascii: bool = False
) -> str:
    """Serialize an export as JSON text (compact unless an indent is given)."""

    payload = record.to_json_payload()
    if indent:
        return json.dumps(payload, indent=indent, ensure_ascii=ensure_ascii)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=ensure_ascii)
