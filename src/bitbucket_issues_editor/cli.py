"""Module entrypoint so the editor can be run with `python -m bitbucket_issues_editor.cli`.

The CLI itself is implemented in `bitbucket_issues_editor.editor.main`.
"""

from __future__ import annotations

from bitbucket_issues_editor.editor.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
