"""Ability store — parse, load, and write persona/rule/policy/repo documents."""

from .loader import ensure_store, load_document, load_documents
from .models import AbilityDocument
from .summary import store_summary
from .write_doc import write_document

__all__ = [
    "AbilityDocument",
    "ensure_store",
    "load_document",
    "load_documents",
    "store_summary",
    "write_document",
]
