"""Filesystem helpers — slugs, relative-path sanitizing, atomic writes."""

from __future__ import annotations

import os
import posixpath
import re
import tempfile

from abilities.errors import ConfigError

# ---------------------------------------------------------------------------
# Slug helpers
# ---------------------------------------------------------------------------


def slugify(text: str, fallback: str = "ability") -> str:
    """Convert text to a filesystem-safe slug. Dots and underscores survive."""
    slug = re.sub(r"[^a-z0-9._-]+", "-", str(text or "").strip().lower())
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug or fallback


def lookup_key(text: str) -> str:
    """Lower-case text with every non-alphanumeric run collapsed to a hyphen.

    Used for name matching, where `my_repo`, `My Repo` and `my.repo` are
    all the same key.
    """
    return re.sub(r"[^a-z0-9]+", "-", str(text or "").strip().lower()).strip("-")


# ---------------------------------------------------------------------------
# Path sanitizing
# ---------------------------------------------------------------------------


def sanitize_rel_path(value: str | None) -> str:
    """Normalize a user-supplied relative dir; reject anything escaping its root.

    Backslashes become forward slashes and leading slashes are dropped, so
    the result is always relative. Returns "" for an empty or no-op path.
    """
    raw = str(value or "").strip().replace("\\", "/")
    if not raw:
        return ""
    normalized = posixpath.normpath(raw).lstrip("/")
    if not normalized or normalized == ".":
        return ""
    if normalized == ".." or normalized.startswith("../"):
        raise ConfigError(f"relative dir must stay within the abilities root: {value}")
    return normalized


# ---------------------------------------------------------------------------
# Atomic file write
# ---------------------------------------------------------------------------


def atomic_write_file(path: str, content: str) -> str:
    """Write content to path atomically (write-to-temp, then rename).

    Returns the final path.
    """
    d = os.path.dirname(path)
    os.makedirs(d, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=d, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
    return path
