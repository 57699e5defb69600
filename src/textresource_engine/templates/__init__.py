"""Templates module — bundled provider templates and their renderer."""

from textresource_engine.templates.render import quote_and_escape, render, substitute
from textresource_engine.templates.store import EMBEDDED_LITERAL, RUNTIME_LOADING, load_template

__all__ = [
    "EMBEDDED_LITERAL",
    "RUNTIME_LOADING",
    "load_template",
    "quote_and_escape",
    "render",
    "substitute",
]
