"""Config file discovery.

Lookup order: ``HOMEBASE_CONFIG`` env var, then
``~/.config/homebase/homebase.toml``. An explicit ``--config`` flag
bypasses discovery entirely (see :meth:`HomebaseSettings.from_cli`).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "homebase.toml"
CONFIG_ENV_VAR = "HOMEBASE_CONFIG"


def find_config() -> Path | None:
    """Return the path of the active config file, or None if there is none."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    try:
        home = Path.home()
    except RuntimeError:
        return None
    candidate = home / ".config" / "homebase" / CONFIG_FILENAME
    return candidate if candidate.is_file() else None
