"""Centralized location of the saved session file.

Environment-first: TTT_STATE_FILE, then TTT_STATE_DIR/session.json, then
.ttt/session.json under the current working directory.
"""

from __future__ import annotations

import os
from pathlib import Path

STATE_FILENAME = "session.json"


def state_dir() -> Path:
    p = os.getenv("TTT_STATE_DIR")
    return Path(p) if p else Path.cwd() / ".ttt"


def state_file() -> Path:
    p = os.getenv("TTT_STATE_FILE")
    return Path(p) if p else state_dir() / STATE_FILENAME
