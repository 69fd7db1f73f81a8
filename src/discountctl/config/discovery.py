"""Config file discovery.

The walk-up finder locates discountctl.toml in the start directory or any
of its parents. DISCOUNTCTL_CONFIG, when set, wins over discovery.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "discountctl.toml"
CONFIG_ENV_VAR = "DISCOUNTCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest discountctl.toml at or above *start* (default: cwd).

    An env-var path that does not exist yields None rather than falling
    back to discovery, so a typo never silently loads another file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
