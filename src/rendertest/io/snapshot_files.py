"""
YAML snapshot files.

File format:
    version: 1
    snapshot:
      type: div
      props: {id: x}
      children: [hi]

``snapshot`` holds ``snapshot_to_data`` output: a node mapping, a text
string, a list of those, or null for empty output.
"""

from __future__ import annotations

import difflib
import logging
import os
from typing import Any, Union

import yaml
from pydantic import BaseModel, ValidationError

from rendertest.io.errors import LoaderError, SnapshotMismatchError
from rendertest.query.printer import data_to_snapshot, print_snapshot, snapshot_to_data
from rendertest.renderer import Session

logger = logging.getLogger(__name__)

SNAPSHOT_FILE_VERSION = 1


class SnapshotFileSpec(BaseModel):
    version: int = SNAPSHOT_FILE_VERSION
    snapshot: Any = None

    model_config = {"extra": "forbid"}


def _rendered_output(source: Any) -> Any:
    return source.to_json() if isinstance(source, Session) else source


def _read_yaml_file(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_snapshot(source: Union[Session, Any], path: str) -> None:
    """Write a session's (or raw ``to_json``) output to ``path``."""
    data = {"version": SNAPSHOT_FILE_VERSION, "snapshot": snapshot_to_data(_rendered_output(source))}
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False, allow_unicode=True)


def read_snapshot(path: str) -> Any:
    """Load a snapshot file back into ``SnapshotNode`` / text / list form."""
    try:
        data = _read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Invalid YAML in snapshot file", cause=exc) from exc
    try:
        spec = SnapshotFileSpec.model_validate(data or {})
    except ValidationError as exc:
        raise LoaderError(path, "Invalid snapshot file", cause=exc) from exc
    if spec.version != SNAPSHOT_FILE_VERSION:
        raise LoaderError(path, f"Unsupported snapshot file version {spec.version}")
    try:
        return data_to_snapshot(spec.snapshot)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid snapshot node", cause=exc) from exc


def match_snapshot(source: Union[Session, Any], path: str, *, update: bool = False) -> bool:
    """
    Compare rendered output against the snapshot stored at ``path``.

    Writes the file when it does not exist yet or when ``update`` is set and
    returns True in that case. Raises ``SnapshotMismatchError`` with a diff of
    the printed forms when the output changed.
    """
    output = _rendered_output(source)
    if update or not os.path.exists(path):
        write_snapshot(output, path)
        logger.info("Wrote snapshot: %s", path)
        return True

    expected = read_snapshot(path)
    actual_data = snapshot_to_data(output)
    if actual_data == snapshot_to_data(expected):
        return False

    expected_text = print_snapshot(expected).splitlines()
    actual_text = print_snapshot(data_to_snapshot(actual_data)).splitlines()
    diff = "\n".join(
        difflib.unified_diff(expected_text, actual_text, fromfile="snapshot", tofile="rendered", lineterm="")
    )
    raise SnapshotMismatchError(path, diff)


__all__ = ["SNAPSHOT_FILE_VERSION", "match_snapshot", "read_snapshot", "write_snapshot"]
