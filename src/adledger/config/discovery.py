"""Locate the adledger.toml that applies to a directory.

An ``ADLEDGER_CONFIG`` path wins outright. Otherwise the nearest
``adledger.toml`` in the directory or one of its ancestors is used; its
directory becomes the ledger root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "adledger.toml"
CONFIG_ENV_VAR = "ADLEDGER_CONFIG"


def _env_override() -> Path | None:
    raw = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return Path(raw).expanduser() if raw else None


def find_config(start: Path | None = None) -> Path | None:
    """Config file for *start* (default: cwd), or None.

    A set ``ADLEDGER_CONFIG`` that names no file disables discovery
    rather than falling back to the walk-up.
    """
    override = _env_override()
    if override is not None:
        return override if override.is_file() else None

    origin = (start or Path.cwd()).resolve()
    candidates = (directory / CONFIG_FILENAME for directory in (origin, *origin.parents))
    return next((path for path in candidates if path.is_file()), None)
