"""
JSON persistence for session snapshots, used by the command line between invocations.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import ConstructionError
from .session import SessionSnapshot

SNAPSHOT_VERSION = 1


def save_snapshot(path: Path, snapshot: SessionSnapshot) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"version": SNAPSHOT_VERSION, **snapshot.to_dict()}
    path.write_text(json.dumps(payload, indent=2))
    logging.debug("Saved session to %s", path)
    return path


def load_snapshot(path: Path) -> SessionSnapshot:
    """Read a snapshot written by `save_snapshot`.

    Raises FileNotFoundError when there is no saved session and ConstructionError
    when the file does not hold a valid snapshot.
    """
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConstructionError(f"Session file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConstructionError(f"Session file {path} does not hold an object")
    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise ConstructionError(f"Unsupported session file version: {version!r}")
    return SessionSnapshot.from_dict(data)
