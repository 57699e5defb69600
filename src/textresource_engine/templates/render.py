"""Placeholder substitution for provider templates."""

from __future__ import annotations

import re

from textresource_engine.templates.store import load_template

# Tokens whose values are emitted as quoted Java string literals
TEXT_TOKENS = frozenset({"$TEXT"})

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def quote_and_escape(text: str) -> str:
    """Return ``text`` as a double-quoted Java string literal."""
    out = []
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ch < " " or ch in "\x7f\u2028\u2029":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def substitute(template: str, bindings: dict[str, str]) -> str:
    """Replace each bound token in a single pass.

    Tokens without a binding are left as they are, and inserted values
    are never scanned for further tokens.
    """
    if not bindings:
        return template
    values = {
        token: quote_and_escape(value) if token in TEXT_TOKENS else value
        for token, value in bindings.items()
    }
    # Longest first so a token never shadows one it prefixes
    pattern = re.compile("|".join(
        re.escape(token) for token in sorted(values, key=len, reverse=True)
    ))
    return pattern.sub(lambda m: values[m.group(0)], template)


def render(template_id: str, bindings: dict[str, str]) -> str:
    """Load a template from the store and substitute ``bindings`` into it."""
    return substitute(load_template(template_id), bindings)
