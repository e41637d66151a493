"""abilities — layered persona/rule/policy resolution into agent prompts."""

from abilities.errors import AbilityError, ConfigError, NotFoundError
from abilities.service import list_documents, resolve, store_summary, write_document

__all__ = [
    "AbilityError",
    "ConfigError",
    "NotFoundError",
    "list_documents",
    "resolve",
    "store_summary",
    "write_document",
]
