"""Commands applied to a loaded issue export.

Each command is a plain function `(record, args) -> CommandResult`. Read-only
commands return report lines; editing commands mutate the record in place and
return it so the caller can print the edited export.

Commands are looked up through `COMMANDS`, keyed by `Command`. Unknown names fail
with `UnknownCommand` before any record is loaded or touched.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from bitbucket_issues_editor.editor.errors import InvalidArgument, UnknownCommand
from bitbucket_issues_editor.editor.models import IssueExport

logger = logging.getLogger(__name__)

_ISSUE_ID_RE = re.compile(r"[+-]?[0-9]+")


class Command(str, Enum):
    LIST = "list"
    REMOVE = "remove"
    KEEPONLY = "keeponly"
    FINDGAP = "findgap"
    FINDDUP = "finddup"
    FINDHEADLESS = "findheadless"
    CHECK = "check"
    REASSIGN = "reassign"


@dataclass(slots=True)
class CommandResult:
    """Output of a single command.

    `record` is set only by commands that edit the export; for those the edited
    export is the output and `lines` stays empty.
    """

    lines: list[str] = field(default_factory=list)
    record: IssueExport | None = None

    @property
    def edited(self) -> bool:
        return self.record is not None


CommandHandler = Callable[[IssueExport, Sequence[str]], CommandResult]


def parse_issue_ids(args: Sequence[str]) -> set[int]:
    """Parse every argument as a decimal issue id.

    All arguments are validated before anything is returned, so callers can rely
    on a failure happening before they mutate the record.

    Raises:
        InvalidArgument: For the first argument that is not a decimal integer.
    """

    ids: set[int] = set()
    for value in args:
        text = value.strip()
        if not _ISSUE_ID_RE.fullmatch(text):
            raise InvalidArgument(value)
        try:
            ids.add(int(text))
        except ValueError as e:
            # Longer than the interpreter's int conversion limit.
            raise InvalidArgument(value) from e
    return ids


def list_issues(record: IssueExport, args: Sequence[str]) -> CommandResult:
    """List issues as `#<id> <title>`, in export order or sorted by id."""

    issues = list(record.issues)
    if args and args[0] == "sorted":
        issues.sort(key=lambda issue: issue.id)
    return CommandResult(lines=[f"#{issue.id} {issue.title}" for issue in issues])


def remove_issues(record: IssueExport, args: Sequence[str]) -> CommandResult:
    """Drop the given issues along with their comments and logs."""

    ids = parse_issue_ids(args)

    # milestones, versions, meta, components and attachments are not tied to
    # individual issues and are left alone.
    before = len(record.issues)
    record.issues = [issue for issue in record.issues if issue.id not in ids]
    record.comments = [comment for comment in record.comments if comment.issue not in ids]
    record.logs = [log for log in record.logs if log.issue not in ids]

    logger.info(
        "Issues removed",
        extra={"requested": sorted(ids), "removed": before - len(record.issues)},
    )
    return CommandResult(record=record)


def keep_only_issues(record: IssueExport, args: Sequence[str]) -> CommandResult:
    """Drop every issue except the given ones, along with their comments and logs."""

    ids = parse_issue_ids(args)

    before = len(record.issues)
    record.issues = [issue for issue in record.issues if issue.id in ids]
    record.comments = [comment for comment in record.comments if comment.issue in ids]
    record.logs = [log for log in record.logs if log.issue in ids]

    logger.info(
        "Issues kept",
        extra={"requested": sorted(ids), "removed": before - len(record.issues)},
    )
    return CommandResult(record=record)


def find_gaps(record: IssueExport, args: Sequence[str] = ()) -> CommandResult:
    """Report ids missing from the issue numbering.

    If the largest id equals the number of issues the numbering is taken to be
    dense and nothing is scanned. That shortcut does not look at the smallest id.
    """

    ids = sorted(record.issue_ids())
    if not ids or ids[-1] == len(ids):
        return CommandResult()

    lines: list[str] = []
    previous = 0
    for current in ids:
        lines.extend(f"#{missing} missing." for missing in range(previous + 1, current))
        previous = current
    return CommandResult(lines=lines)


def find_duplicates(record: IssueExport, args: Sequence[str] = ()) -> CommandResult:
    """Report ids used by more than one issue, in order of first appearance."""

    counts = Counter(record.issue_ids())
    return CommandResult(
        lines=[
            f"#{issue_id} appeared {count} times."
            for issue_id, count in counts.items()
            if count > 1
        ]
    )


def find_headless(record: IssueExport, args: Sequence[str] = ()) -> CommandResult:
    """Report comments that point at an issue id not present in the export.

    Logs are not checked: they carry no id that could be reported.
    """

    ids = set(record.issue_ids())
    return CommandResult(
        lines=[
            f"Comment #{comment.id} is headless."
            for comment in record.comments
            if comment.issue not in ids
        ]
    )


def check(record: IssueExport, args: Sequence[str] = ()) -> CommandResult:
    """Run finddup, findgap and findheadless in that order."""

    lines: list[str] = []
    for handler in (find_duplicates, find_gaps, find_headless):
        lines.extend(handler(record, args).lines)
    return CommandResult(lines=lines)


def reassign_ids(record: IssueExport, args: Sequence[str] = ()) -> CommandResult:
    """Renumber issues 1..N by ascending current id and rewrite all references.

    A comment or log pointing at an id that no issue has ends up with no issue
    reference (`null`).
    """

    # Later ranks overwrite earlier ones for duplicated ids.
    mapping = {
        old_id: new_id for new_id, old_id in enumerate(sorted(record.issue_ids()), start=1)
    }

    for issue in record.issues:
        issue.id = mapping[issue.id]
    for comment in record.comments:
        comment.issue = mapping.get(comment.issue) if comment.issue is not None else None
    for log in record.logs:
        log.issue = mapping.get(log.issue) if log.issue is not None else None

    changed = sum(1 for old_id, new_id in mapping.items() if old_id != new_id)
    logger.info("Issue ids reassigned", extra={"issues": len(record.issues), "changed": changed})
    return CommandResult(record=record)


COMMANDS: dict[Command, CommandHandler] = {
    Command.LIST: list_issues,
    Command.REMOVE: remove_issues,
    Command.KEEPONLY: keep_only_issues,
    Command.FINDGAP: find_gaps,
    Command.FINDDUP: find_duplicates,
    Command.FINDHEADLESS: find_headless,
    Command.CHECK: check,
    Command.REASSIGN: reassign_ids,
}


def resolve_command(name: str) -> Command:
    """Look up a command by its exact, case-sensitive name."""

    try:
        return Command(name)
    except ValueError:
        raise UnknownCommand(name=name, supported=tuple(c.value for c in Command)) from None


def apply(name: str | Command, record: IssueExport, args: Sequence[str] = ()) -> CommandResult:
    """Run a command against a record."""

    command = name if isinstance(name, Command) else resolve_command(name)
    logger.debug(
        "Applying command",
        extra={"command": command.value, "command_args": list(args)},
    )
    return COMMANDS[command](record, args)
