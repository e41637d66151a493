"""Shared constants — env var names, default paths, resolvers.

Single source of truth for where the ability store lives and where its
first-use seed documents come from.
"""

from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Env var names
# ---------------------------------------------------------------------------

ENV_ABILITIES_DIR = "ABILITIES_DATA_DIR"
ENV_DATA_DIR = "CONTEXT_DATA_DIR"
ENV_SEED = "ABILITIES_SEED"
ENV_SEED_DIR = "ABILITIES_SEED_DIR"

# ---------------------------------------------------------------------------
# Default paths
# ---------------------------------------------------------------------------

DATA_DIR_NAME = "data"
ABILITIES_DIR_NAME = "abilities"

# Bundled default documents, copied into an empty store on first use
BUNDLED_DIR = Path(__file__).resolve().parent / "bundled"

_FALSEY = {"0", "false", "no", "off"}


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------


def resolve_data_dir() -> Path:
    """Resolve the data dir: ENV_DATA_DIR > ./data."""
    explicit = os.getenv(ENV_DATA_DIR)
    if explicit:
        return Path(explicit).expanduser()
    return Path.cwd() / DATA_DIR_NAME


def resolve_abilities_root(root: str | Path | None = None) -> Path:
    """Resolve the store root: explicit arg > ENV_ABILITIES_DIR > <data dir>/abilities."""
    if root:
        return Path(root).expanduser()
    explicit = os.getenv(ENV_ABILITIES_DIR)
    if explicit:
        return Path(explicit).expanduser()
    return resolve_data_dir() / ABILITIES_DIR_NAME


def resolve_seed_dir() -> Path | None:
    """Return the directory to seed an empty store from, or None when seeding is off."""
    if os.getenv(ENV_SEED, "").strip().lower() in _FALSEY:
        return None
    override = os.getenv(ENV_SEED_DIR)
    if override:
        return Path(override).expanduser()
    return BUNDLED_DIR
