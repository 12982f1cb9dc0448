"""CLI entrypoint for the issue export editor.

Usage: editor <issue_file> <command> [<more_args>]

Report commands print one line per finding. Editing commands print the whole
edited export as JSON; redirect stdout to keep it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from pydantic import ValidationError

from bitbucket_issues_editor import __version__
from bitbucket_issues_editor.editor.commands import Command, apply, resolve_command
from bitbucket_issues_editor.editor.config import EditorSettings
from bitbucket_issues_editor.editor.errors import EditorError, UsageError
from bitbucket_issues_editor.editor.export_file import IssueExportFile, render_export
from bitbucket_issues_editor.editor.logging import configure_logging

logger = logging.getLogger(__name__)

USAGE = "editor <issue_file> <command> [<more_args>]"


class _EditorArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad usage as `UsageError` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    commands = ", ".join(c.value for c in Command)
    parser = _EditorArgumentParser(
        prog="editor",
        usage=USAGE,
        description="A small tool for editing Bitbucket issue export files",
        epilog=f"Commands: {commands}",
    )
    parser.add_argument(
        "--version", action="version", version=f"bitbucket-issues-editor {__version__}"
    )
    parser.add_argument(
        "issue_file", help="Path to the issue export, relative to the current directory"
    )
    parser.add_argument("command", help="Command to run (case-sensitive)")
    parser.add_argument(
        "more_args",
        nargs=argparse.REMAINDER,
        help="Arguments for the command, e.g. issue ids for remove/keeponly or 'sorted' for list",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(f"\n{parser.format_usage()}", file=sys.stdout)
        print(str(e), file=sys.stderr)
        return e.exit_code

    try:
        settings = EditorSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        export_file = IssueExportFile.from_argument(args.issue_file)
        export_file.check_access()

        # Resolve before loading so an unknown command never reads the file.
        command = resolve_command(args.command)
        record = export_file.load()

        result = apply(command, record, args.more_args)
        if result.record is not None:
            print(
                render_export(
                    result.record,
                    indent=settings.json_indent,
                    ensure_ascii=settings.ensure_ascii,
                )
            )
        else:
            for line in result.lines:
                print(line)

        logger.info(
            "Command finished",
            extra={
                "command": command.value,
                "path": str(export_file.path),
                "edited": result.edited,
                "lines": len(result.lines),
            },
        )
        return 0

    except EditorError as e:
        logger.debug("Command rejected", extra={"error": type(e).__name__})
        print(str(e), file=sys.stderr)
        return e.exit_code

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
