"""Locate ``blogctl.toml``.

Lookup order: the ``BLOGCTL_CONFIG`` env var, then the start directory and
each of its parents, the way git finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "blogctl.toml"
CONFIG_ENV_VAR = "BLOGCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), if any.

    A ``BLOGCTL_CONFIG`` that points at a missing file disables the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
