"""Test configuration and fixtures."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from bitbucket_issues_editor.editor.export_file import parse_export
from bitbucket_issues_editor.editor.models import IssueExport


@pytest.fixture
def make_export() -> Callable[[list[int]], IssueExport]:
    """Build minimal exports with one issue per id and no comments or logs."""

    def _make(issue_ids: list[int]) -> IssueExport:
        return IssueExport.model_validate(
            {
                "issues": [{"id": i, "title": f"Issue {i}"} for i in issue_ids],
                "comments": [],
                "logs": [],
            }
        )

    return _make


@pytest.fixture
def export_data() -> dict[str, Any]:
    """A small export shaped like a Bitbucket `db-1.0.json`.

    Issue 4 does not exist, so comment 12 and the last log are headless.
    """

    return {
        "issues": [
            {"id": 3, "title": "Crash on start", "kind": "bug", "status": "new"},
            {"id": 1, "title": "Add dark mode", "kind": "enhancement", "status": "open"},
            {"id": 2, "title": "Typo in README", "kind": "bug", "status": "resolved"},
            {"id": 5, "title": "Überarbeitung der Doku", "kind": "task", "status": "new"},
        ],
        "comments": [
            {"id": 10, "issue": 1, "content": "Please!", "user": "ada"},
            {"id": 11, "issue": 3, "content": "Repro attached", "user": "bob"},
            {"id": 12, "issue": 4, "content": "Orphan", "user": "cy"},
            {"id": 13, "issue": 5, "content": None, "user": "ada"},
        ],
        "logs": [
            {"issue": 1, "field": "status", "changed_from": "new", "changed_to": "open"},
            {"issue": 5, "field": "kind", "changed_from": "bug", "changed_to": "task"},
            {"issue": 4, "field": "status", "changed_from": "new", "changed_to": "closed"},
        ],
        "milestones": [{"name": "1.0"}],
        "versions": [],
        "meta": {"default_kind": "bug", "default_milestone": None},
        "components": [{"name": "core"}],
        "attachments": [{"issue": 3, "filename": "trace.txt", "path": "attachments/abc"}],
    }


@pytest.fixture
def export_record(export_data: dict[str, Any]) -> IssueExport:
    """Provide the sample export as a validated record."""
    return parse_export(json.dumps(export_data))


@pytest.fixture
def export_path(tmp_path: Path, export_data: dict[str, Any]) -> Path:
    """Write the sample export to a temporary `db-1.0.json`."""
    path = tmp_path / "db-1.0.json"
    path.write_text(json.dumps(export_data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo `configure_logging` so handlers do not leak between tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def alphabetical_export_raw() -> str:
    """Compact export text with keys sorted the way Bitbucket writes `db-1.0.json`."""

    data = {
        "attachments": [{"filename": "log.txt", "issue": 2, "path": "attachments/x"}],
        "comments": [
            {"content": "First!", "created_on": "2016-01-02T00:00:00", "id": 7, "issue": 1},
            {"content": None, "created_on": "2016-01-03T00:00:00", "id": 8, "issue": 2},
        ],
        "components": [],
        "issues": [
            {
                "assignee": None,
                "content": "Steps to reproduce",
                "id": 2,
                "kind": "bug",
                "status": "new",
                "title": "Crash",
            },
            {
                "assignee": "ada",
                "content": "",
                "id": 1,
                "kind": "task",
                "status": "open",
                "title": "Docs",
            },
        ],
        "logs": [
            {"changed_from": "new", "changed_to": "open", "field": "status", "issue": 1},
        ],
        "meta": {"default_assignee": None, "default_kind": "bug"},
        "milestones": [],
        "versions": [],
    }
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
