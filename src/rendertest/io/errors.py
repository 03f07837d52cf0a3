from __future__ import annotations

"""Errors raised while reading or comparing snapshot files."""

import os
from typing import Any, Dict, List

from pydantic import ValidationError

MAX_REPORTED_ISSUES = 3


def describe_validation_error(error: ValidationError) -> str:
    """Compact ``field.path: message`` summary of the first few pydantic issues."""
    issues: List[Dict[str, Any]] = list(error.errors())
    shown = [
        f"{'.'.join(str(part) for part in issue.get('loc', ())) or '<root>'}: {issue.get('msg', issue.get('type'))}"
        for issue in issues[:MAX_REPORTED_ISSUES]
    ]
    if len(issues) > MAX_REPORTED_ISSUES:
        shown.append(f"... ({len(issues) - MAX_REPORTED_ISSUES} more)")
    return "; ".join(shown)


def display_path(path: str) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:  # pragma: no cover - different drive on Windows
        return path


class LoaderError(RuntimeError):
    """A snapshot file could not be loaded; carries the file path and the underlying cause."""

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        text = f"{message} ({display_path(file_path)})"
        if isinstance(cause, ValidationError):
            text = f"{text}: {describe_validation_error(cause)}"
        elif cause is not None:
            text = f"{text}: {cause}"
        super().__init__(text)


class SnapshotMismatchError(AssertionError):
    """Rendered output differs from the stored snapshot."""

    def __init__(self, file_path: str, diff: str):
        self.file_path = file_path
        self.diff = diff
        super().__init__(f"Snapshot mismatch ({display_path(file_path)}):\n{diff}")


__all__ = ["LoaderError", "SnapshotMismatchError", "describe_validation_error", "display_path"]
