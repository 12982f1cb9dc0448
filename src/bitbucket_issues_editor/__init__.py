"""Bitbucket Issues Editor.

A small command-line tool for inspecting and editing Bitbucket issue export files:
- list issues, optionally sorted by id
- drop or keep a subset of issues together with their comments and logs
- detect duplicate ids, id gaps and headless comments
- renumber issues densely from 1
"""

__version__ = "0.1.0"

from bitbucket_issues_editor.editor.config import EditorSettings

__all__ = ["__version__", "EditorSettings"]
