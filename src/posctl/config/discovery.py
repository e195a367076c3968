"""Locate ``posctl.toml``.

The file is searched for from the data directory upward. ``POSCTL_CONFIG``
names a file explicitly and disables the search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "posctl.toml"
CONFIG_ENV_VAR = "POSCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``posctl.toml`` at or above *start* (default: CWD).

    When ``POSCTL_CONFIG`` is set, returns that file if it exists and None
    otherwise, without searching.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
