"""Error kinds raised to callers of the ability store and resolver."""

from __future__ import annotations


class AbilityError(Exception):
    """Base for every error this package raises on purpose."""


class ConfigError(AbilityError, ValueError):
    """Bad type, bad write input, path traversal, or existing target file."""


class NotFoundError(AbilityError, LookupError):
    """No persona document matches the request."""
