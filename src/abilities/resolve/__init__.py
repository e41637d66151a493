"""Resolution — persona/repo lookup, priority-merged selection, rendering."""

from .lookup import find_persona, find_repo
from .render import build_result, render
from .request import ResolutionRequest, load_request
from .resolver import resolve_selection
from .result import Manifest, ResolutionResult, Selection, TraceEntry

__all__ = [
    "Manifest",
    "ResolutionRequest",
    "ResolutionResult",
    "Selection",
    "TraceEntry",
    "build_result",
    "find_persona",
    "find_repo",
    "load_request",
    "render",
    "resolve_selection",
]
