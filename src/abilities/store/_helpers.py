"""Shared vocabulary and normalizers for the ability store."""

from __future__ import annotations

import math
import re

from abilities.errors import ConfigError

# ---------------------------------------------------------------------------
# Vocabulary constants
# ---------------------------------------------------------------------------

# policy and style share one physical folder
TYPE_TO_FOLDER: dict[str, str] = {
    "persona": "personas",
    "rule": "rules",
    "policy": "policies",
    "style": "policies",
    "repo": "repos",
}

FOLDER_TO_TYPE: dict[str, str] = {
    "personas": "persona",
    "rules": "rule",
    "policies": "policy",
    "repos": "repo",
}

VALID_TYPES = frozenset(TYPE_TO_FOLDER)
RULE_TYPES = frozenset({"rule", "policy", "style"})
POLICY_TYPES = frozenset({"policy", "style"})

DOC_EXTENSION = ".md"
DEFAULT_PRIORITY = 100

_TYPE_RANK = {"persona": 0, "repo": 1, "rule": 2, "policy": 3, "style": 3}


# ---------------------------------------------------------------------------
# Normalizers
# ---------------------------------------------------------------------------


def folder_for_type(doc_type: str) -> str:
    """Map a document type to its subfolder. Raises ConfigError for unknown types."""
    key = str(doc_type or "").strip().lower()
    if key not in TYPE_TO_FOLDER:
        raise ConfigError(
            f"Unsupported ability type '{doc_type}'. Valid: {', '.join(sorted(VALID_TYPES))}"
        )
    return TYPE_TO_FOLDER[key]


def text(value: object) -> str:
    """Header value back to text. Booleans come back lower-case as written; lists join on commas."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(text(v) for v in value)
    return str(value)


def normalize_list(value: object) -> list[str]:
    """Coerce a list or a comma/newline-separated string into trimmed, non-empty strings."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [text(v).strip() for v in value]
    else:
        items = [v.strip() for v in re.split(r"[,\n]", text(value))]
    return [v for v in items if v]


def unique(items: list[str]) -> list[str]:
    """Drop repeats, keeping first occurrence order."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def coerce_priority(value: object, default: int = DEFAULT_PRIORITY) -> int:
    """Integer priority; `default` for anything missing or non-numeric."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    return int(number)


def type_rank(doc_type: str) -> int:
    """Tie-break rank: persona < repo < rule < policy/style < anything else."""
    return _TYPE_RANK.get(doc_type, 9)
